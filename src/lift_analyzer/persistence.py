"""
Configuration Persistence
=========================

Save and load airship configurations (JSON) and lift-to-weight history
(CSV).

Loaded configurations are passed through the Validator, so an edited
or corrupted file is reported field by field instead of producing a
half-valid configuration.

Usage:
------
    from src.lift_analyzer.persistence import save_config, load_config

    save_config(config, "airship.json")
    assert load_config("airship.json") == config
"""

import csv
import json
import logging
from pathlib import Path
from typing import Iterable, List, Optional, Union

from .config import LiftAnalyzerConfig
from .errors import InputValidationError
from .models.airship import AirshipConfig
from .models.history import HistoricalRecord
from .validator import Validator

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

# Version tag written into saved configuration files
CONFIG_FORMAT_VERSION = 1

HISTORY_COLUMNS = ["date", "liftToWeightRatio"]


# =============================================================================
# Airship Configuration
# =============================================================================

def config_to_json(config: AirshipConfig) -> str:
    """Serialize a configuration to a JSON string."""
    data = {"version": CONFIG_FORMAT_VERSION, "airship": config.to_dict()}
    return json.dumps(data, indent=2)


def config_from_json(
    text: str,
    engine_config: Optional[LiftAnalyzerConfig] = None
) -> AirshipConfig:
    """
    Parse and validate a configuration from a JSON string.

    Raises:
    ------
    ValueError
        If the text is not a saved configuration document.

    InputValidationError
        If the stored fields fail validation.
    """
    data = json.loads(text)
    if not isinstance(data, dict) or not isinstance(data.get("airship"), dict):
        raise ValueError("Not an airship configuration file: missing 'airship' section")

    version = data.get("version", CONFIG_FORMAT_VERSION)
    if version != CONFIG_FORMAT_VERSION:
        raise ValueError(f"Unsupported configuration format version: {version}")

    outcome = Validator(engine_config).validate(data["airship"])
    if not outcome.is_valid:
        raise InputValidationError(outcome.errors)
    return outcome.config


def save_config(config: AirshipConfig, filepath: PathLike):
    """
    Save a configuration to a JSON file.

    Parameters:
    ----------
    config : AirshipConfig
        Configuration to save

    filepath : str or Path
        Output file path
    """
    with open(filepath, 'w', encoding='utf-8') as f:
        f.write(config_to_json(config))
    logger.info("Saved configuration to %s", filepath)


def load_config(
    filepath: PathLike,
    engine_config: Optional[LiftAnalyzerConfig] = None
) -> AirshipConfig:
    """Load and validate a configuration from a JSON file."""
    logger.info("Loading configuration from %s", filepath)
    with open(filepath, 'r', encoding='utf-8') as f:
        return config_from_json(f.read(), engine_config)


# =============================================================================
# Lift-to-Weight History
# =============================================================================

def save_history_csv(records: Iterable[HistoricalRecord], filepath: PathLike):
    """Write history records to CSV in chronological (insertion) order."""
    with open(filepath, 'w', newline='', encoding='utf-8') as f:
        writer = csv.DictWriter(f, fieldnames=HISTORY_COLUMNS)
        writer.writeheader()
        for record in records:
            writer.writerow(record.to_dict())


def load_history_csv(filepath: PathLike) -> List[HistoricalRecord]:
    """
    Read history records from CSV, keeping file order.

    Raises:
    ------
    ValueError
        If a column is missing or a ratio is not a number.
    """
    records = []
    with open(filepath, 'r', newline='', encoding='utf-8') as f:
        reader = csv.DictReader(f)
        missing = [c for c in HISTORY_COLUMNS if c not in (reader.fieldnames or [])]
        if missing:
            raise ValueError(f"History file is missing column(s): {', '.join(missing)}")

        for line_num, row in enumerate(reader, start=2):
            try:
                ratio = float(row["liftToWeightRatio"])
            except (TypeError, ValueError):
                raise ValueError(
                    f"Line {line_num}: invalid lift-to-weight ratio {row['liftToWeightRatio']!r}"
                ) from None
            records.append(HistoricalRecord(date=row["date"].strip(), lift_to_weight_ratio=ratio))

    logger.debug("Loaded %d history records from %s", len(records), filepath)
    return records
