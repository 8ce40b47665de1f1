"""
Report Export Module
====================

Tabulates and exports a CalculationResult. Every report carries the
input configuration, all LiftResult fields, the atmosphere table, the
altitude profile and the trend.

Usage:
------
    from src.lift_analyzer.report import export_report_csv, samples_to_dataframe

    df = samples_to_dataframe(result.lift.atmosphere_samples)
    export_report_csv(result, "lift_report.csv")
"""

import json
import logging
from pathlib import Path
from typing import Iterable, List, Tuple, Union

import pandas as pd

from .models.atmosphere import AtmosphereSample
from .models.airship import AltitudeProfilePoint
from .models.history import HistoricalRecord
from .pipeline import CalculationResult

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

ATMOSPHERE_COLUMNS = ["altitude_km", "density_kg_m3", "temperature_c", "pressure_kpa"]
PROFILE_COLUMNS = ["altitude_km", "required_volume_m3", "lift_capacity_kg", "lift_reserve_kg"]


# =============================================================================
# Tables
# =============================================================================

def samples_to_dataframe(samples: Iterable[AtmosphereSample]) -> pd.DataFrame:
    """Atmosphere table, one row per sample."""
    return pd.DataFrame([s.to_dict() for s in samples], columns=ATMOSPHERE_COLUMNS)


def profile_to_dataframe(profile: Iterable[AltitudeProfilePoint]) -> pd.DataFrame:
    """Altitude profile table; infeasible volumes are NaN."""
    return pd.DataFrame([p.to_dict() for p in profile], columns=PROFILE_COLUMNS)


def history_to_dataframe(history: Iterable[HistoricalRecord]) -> pd.DataFrame:
    """Lift-to-weight history in chronological order."""
    return pd.DataFrame(
        [r.to_dict() for r in history], columns=["date", "liftToWeightRatio"]
    )


def summary_rows(result: CalculationResult) -> List[Tuple[str, object]]:
    """Key/value rows for the input configuration and scalar results."""
    lift = result.lift
    rows = [(f"input.{key}", value) for key, value in result.config.to_dict().items()]
    rows.extend([
        ("lift.volume_sea_level_m3", lift.volume_sea_level_m3),
        ("lift.volume_target_altitude_m3", lift.volume_target_altitude_m3),
        ("lift.excess_lift_sea_level_kg", lift.excess_lift_sea_level_kg),
        ("lift.excess_lift_target_altitude_kg", lift.excess_lift_target_altitude_kg),
        ("lift.lift_to_weight_ratio", lift.lift_to_weight_ratio),
        ("lift.envelope_volume_m3", lift.envelope_volume_m3),
        ("lift.lift_gas", lift.lift_gas),
        ("lift.lift_gas_density_kg_m3", lift.lift_gas_density_kg_m3),
        ("buoyancy_ceiling_km", result.buoyancy_ceiling_km),
        ("trend.kind", result.trend.kind.value),
        ("trend.slope", result.trend.slope),
        ("trend.message", result.trend.describe()),
    ])
    return rows


# =============================================================================
# Export
# =============================================================================

def export_report_csv(result: CalculationResult, filepath: PathLike):
    """
    Export a report as CSV.

    The file holds blocks separated by a blank line: summary
    (key, value), atmosphere table, altitude profile and, when present,
    the history.
    """
    summary = pd.DataFrame(summary_rows(result), columns=["key", "value"])
    blocks = [
        summary,
        samples_to_dataframe(result.lift.atmosphere_samples),
        profile_to_dataframe(result.profile),
    ]
    if result.history:
        blocks.append(history_to_dataframe(result.history))

    with open(filepath, 'w', newline='', encoding='utf-8') as f:
        for i, block in enumerate(blocks):
            if i:
                f.write("\n")
            block.to_csv(f, index=False)

    logger.info("Exported CSV report to %s", filepath)


def export_report_json(result: CalculationResult, filepath: PathLike):
    """Export the complete result as JSON."""
    with open(filepath, 'w', encoding='utf-8') as f:
        json.dump(result.to_dict(), f, indent=2)
    logger.info("Exported JSON report to %s", filepath)


def get_summary_report(result: CalculationResult) -> str:
    """
    Generate text summary report.

    Returns:
    -------
    str
        Result summary followed by the atmosphere and profile tables
    """
    atmosphere = samples_to_dataframe(result.lift.atmosphere_samples)
    profile = profile_to_dataframe(result.profile)
    lines = [
        result.summary(),
        "ATMOSPHERIC PROPERTIES:",
        atmosphere.to_string(index=False, float_format=lambda v: f"{v:.4f}"),
        "",
        "ALTITUDE PROFILE (design envelope):",
        profile.to_string(index=False, float_format=lambda v: f"{v:.1f}"),
    ]
    return "\n".join(lines)
