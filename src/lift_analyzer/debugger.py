"""
Calculation Debugger
====================

Records every calculation step of a lift analysis so the formulas and
intermediate values can be shown next to the results.

Steps are grouped into named sections (inputs, sea level, target
altitude, design envelope). Result names are unique within one trace,
so a step can be looked up by the variable it produced.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional


@dataclass
class CalculationStep:
    """A single calculation step with inputs, formula, and result."""
    category: str           # "Input", "Constant", "Atmosphere", "Lift", "Envelope"
    description: str
    formula: str            # empty for inputs and constants
    variables: Dict[str, Any]
    result: Any
    result_name: str
    result_unit: str = ""
    comment: str = ""


@dataclass
class CalculationSection:
    """Named group of consecutive steps."""
    name: str
    steps: List[CalculationStep] = field(default_factory=list)


class CalculationDebugger:
    """
    Traces and records calculation steps.

    Usage:
        debugger = CalculationDebugger()
        debugger.start(weight="1000 kg")
        debugger.start_section("TARGET ALTITUDE")
        debugger.add_step(
            category="Lift",
            description="Required envelope volume",
            formula="V = W / ((rho_air - rho_gas) * g)",
            variables={"W": 1000.0, "rho_air": 0.4135, "rho_gas": 0.1785},
            result=433.9,
            result_name="V_target",
            result_unit="m³",
        )
        debugger.finish()
        print(debugger.get_report())
    """

    def __init__(self):
        self.sections: List[CalculationSection] = []
        self.metadata: Dict[str, Any] = {}
        self.start_time: Optional[datetime] = None
        self.end_time: Optional[datetime] = None

    @property
    def steps(self) -> List[CalculationStep]:
        """All steps in recording order."""
        return [step for section in self.sections for step in section.steps]

    def start(self, **metadata):
        """Start a new trace, discarding any previous one."""
        self.sections = []
        self.metadata = metadata
        self.start_time = datetime.now()
        self.end_time = None

    def finish(self):
        self.end_time = datetime.now()

    def start_section(self, name: str):
        self.sections.append(CalculationSection(name))

    def add_step(
        self,
        category: str,
        description: str,
        formula: str,
        variables: Dict[str, Any],
        result: Any,
        result_name: str,
        result_unit: str = "",
        comment: str = ""
    ):
        """Record a step in the current section."""
        if not self.sections:
            self.start_section("CALCULATION")
        self.sections[-1].steps.append(CalculationStep(
            category=category,
            description=description,
            formula=formula,
            variables=variables,
            result=result,
            result_name=result_name,
            result_unit=result_unit,
            comment=comment,
        ))

    def add_input(self, name: str, value: Any, unit: str = "", description: str = ""):
        self.add_step("Input", description or name, "", {}, value, name, unit)

    def add_constant(self, name: str, value: Any, unit: str = "", description: str = ""):
        self.add_step("Constant", description or name, "", {}, value, name, unit)

    def find_step_by_result(self, result_name: str) -> Optional[CalculationStep]:
        """Find the step that produced a specific result."""
        for step in self.steps:
            if step.result_name == result_name:
                return step
        return None

    @staticmethod
    def _format_value(value: Any) -> str:
        if isinstance(value, float):
            return f"{value:.6g}"
        return str(value)

    def _format_step(self, number: int, step: CalculationStep) -> List[str]:
        value = f"{step.result_name} = {self._format_value(step.result)}"
        if step.result_unit:
            value = f"{value} {step.result_unit}"

        if not step.formula:
            # Inputs and constants fit on one line
            return [f"[{number}] {step.description}: {value}"]

        lines = [f"[{number}] {step.category}: {step.description}",
                 f"    Formula: {step.formula}"]
        if step.variables:
            inputs = ", ".join(f"{k}={self._format_value(v)}" for k, v in step.variables.items())
            lines.append(f"    Inputs: {inputs}")
        lines.append(f"    => {value}")
        if step.comment:
            lines.append(f"    // {step.comment}")
        return lines

    def get_report(self) -> str:
        """
        Generate a formatted text report of all calculations.

        Returns:
        -------
        str
            Metadata header followed by each section's numbered steps
        """
        rule = "=" * 70
        lines = [rule, "CALCULATION DETAILS", rule]
        if self.start_time:
            lines.append(f"Generated: {self.start_time.strftime('%Y-%m-%d %H:%M:%S')}")
        for key, value in self.metadata.items():
            lines.append(f"  {key}: {value}")

        number = 0
        for section in self.sections:
            lines.extend(["", f">>> {section.name}", "-" * 70])
            for step in section.steps:
                number += 1
                lines.extend(self._format_step(number, step))

        lines.extend(["", rule, f"Total Steps: {number}"])
        if self.start_time and self.end_time:
            elapsed = (self.end_time - self.start_time).total_seconds()
            lines.append(f"Elapsed Time: {elapsed:.3f} seconds")
        lines.append(rule)
        return "\n".join(lines)
