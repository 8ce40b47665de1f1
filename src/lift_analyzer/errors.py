"""
Lift Analyzer Errors
====================

Exception taxonomy for the calculation engine.

- ValidationError: one field-level input problem (a record, not raised)
- InputValidationError: raised by the pipeline with all ValidationErrors
- ModelRangeError: altitude outside the supported atmosphere table
- LiftInfeasibleError: no positive buoyancy at the requested altitude
- AtmosphereTemperatureError: a temperature range that is not physical
"""

from dataclasses import dataclass
from enum import Enum
from typing import Sequence, Tuple


class ValidationErrorKind(Enum):
    """Kinds of field-level validation errors."""
    REQUIRED = "Required"
    OUT_OF_RANGE = "OutOfRange"
    INVALID_RANGE = "InvalidRange"


@dataclass(frozen=True)
class ValidationError:
    """
    A single user-correctable input problem.

    Attributes:
    ----------
    field : str
        Name of the offending input field (e.g., "weightKg")

    kind : ValidationErrorKind
        Error category

    message : str
        Human-readable explanation
    """
    field: str
    kind: ValidationErrorKind
    message: str

    def to_dict(self) -> dict:
        return {"field": self.field, "kind": self.kind.value, "message": self.message}


class LiftAnalysisError(Exception):
    """Base class for all lift analyzer errors."""


class InputValidationError(LiftAnalysisError):
    """Raised when an input configuration fails validation."""

    def __init__(self, errors: Sequence[ValidationError]):
        self.errors: Tuple[ValidationError, ...] = tuple(errors)
        details = "; ".join(f"{e.field}: {e.message}" for e in self.errors)
        super().__init__(f"Invalid input ({len(self.errors)} error(s)): {details}")


class ModelRangeError(LiftAnalysisError):
    """Raised when an altitude lies outside the supported atmosphere model."""

    def __init__(self, altitude_km: float, ceiling_km: float):
        self.altitude_km = altitude_km
        self.ceiling_km = ceiling_km
        super().__init__(
            f"Altitude {altitude_km} km is outside the atmosphere model range "
            f"(0 to {ceiling_km} km)"
        )


class LiftInfeasibleError(LiftAnalysisError):
    """
    Raised when no positive buoyancy is achievable.

    Attributes:
    ----------
    altitude_km : float
        Altitude at which lift was requested (km)

    density_deficit_kg_m3 : float
        How far the air density falls short of the lifting gas density
        (kg/m³). Zero or positive.
    """

    def __init__(self, altitude_km: float, density_deficit_kg_m3: float, reason: str = ""):
        self.altitude_km = altitude_km
        self.density_deficit_kg_m3 = density_deficit_kg_m3
        message = (
            f"No net buoyancy at {altitude_km:g} km: air density is "
            f"{density_deficit_kg_m3:.4f} kg/m³ short of the lifting gas density"
        )
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class AtmosphereTemperatureError(LiftAnalysisError):
    """Raised when a temperature range drives the air to or below absolute zero."""

    def __init__(self, altitude_km: float, temperature_c: float):
        self.altitude_km = altitude_km
        self.temperature_c = temperature_c
        super().__init__(
            f"Temperature {temperature_c:.1f} °C at {altitude_km:g} km is at or "
            f"below absolute zero"
        )
