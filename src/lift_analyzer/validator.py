"""
Input Validator
===============

Turns raw form input (strings) into an AirshipConfig, collecting every
field-level problem instead of stopping at the first one.

Accepted keys are the form names (weightKg, targetAltitudeKm, tempMinC,
tempMaxC) or their snake_case equivalents (weight_kg, ...).

Usage:
------
    from src.lift_analyzer.validator import Validator

    outcome = Validator().validate({"weightKg": "1000", "targetAltitudeKm": "10"})
    if outcome.is_valid:
        config = outcome.config
    else:
        for error in outcome.errors:
            print(error.field, error.kind.value, error.message)
"""

import math
from dataclasses import dataclass
from typing import Any, List, Mapping, Optional, Tuple

from .config import LiftAnalyzerConfig, DEFAULT_CONFIG, AMBIENT_TEMPERATURE_FLOOR_C
from .errors import ValidationError, ValidationErrorKind
from .models.airship import AirshipConfig


# Form field names and their snake_case aliases
FIELD_ALIASES = {
    "weightKg": "weight_kg",
    "targetAltitudeKm": "target_altitude_km",
    "tempMinC": "temp_min_c",
    "tempMaxC": "temp_max_c",
}

FIELD_LABELS = {
    "weightKg": "Weight",
    "targetAltitudeKm": "Target altitude",
    "tempMinC": "Minimum temperature",
    "tempMaxC": "Maximum temperature",
}


class _Missing:
    """Marker for a field that is absent or blank."""


MISSING = _Missing()


@dataclass(frozen=True)
class ValidationOutcome:
    """
    Result of validating raw input.

    Exactly one of config / errors is meaningful: config is set when
    errors is empty.
    """
    config: Optional[AirshipConfig] = None
    errors: Tuple[ValidationError, ...] = ()

    @property
    def is_valid(self) -> bool:
        return not self.errors


class Validator:
    """
    Validates raw airship configuration input.

    Attributes:
    ----------
    ceiling_km : float
        Highest allowed target altitude (km), from the model ceiling
    """

    def __init__(self, config: Optional[LiftAnalyzerConfig] = None):
        config = config if config is not None else DEFAULT_CONFIG
        self.ceiling_km = config.model_ceiling_km

    # -------------------------------------------------------------------------
    # Parsing
    # -------------------------------------------------------------------------

    @staticmethod
    def _lookup(raw: Mapping[str, Any], name: str) -> Any:
        if name in raw:
            return raw[name]
        return raw.get(FIELD_ALIASES[name])

    def _parse_number(self, raw: Mapping[str, Any], name: str, errors: List[ValidationError]):
        """
        Parse one numeric field.

        Returns the float value, MISSING for an absent/blank field, or
        None if parsing failed (the error is appended).
        """
        value = self._lookup(raw, name)
        if value is None:
            return MISSING
        if isinstance(value, str):
            value = value.strip()
            if not value:
                return MISSING

        label = FIELD_LABELS[name]
        if isinstance(value, bool):
            number = math.nan
        else:
            try:
                number = float(value)
            except (TypeError, ValueError):
                number = math.nan

        if not math.isfinite(number):
            errors.append(ValidationError(
                name, ValidationErrorKind.OUT_OF_RANGE,
                f"{label} must be a finite decimal number, got {value!r}"
            ))
            return None
        return number

    # -------------------------------------------------------------------------
    # Validation
    # -------------------------------------------------------------------------

    def validate(self, raw_input: Mapping[str, Any]) -> ValidationOutcome:
        """
        Validate raw input and build an AirshipConfig.

        Parameters:
        ----------
        raw_input : Mapping
            Field name -> string (or number) as entered in the form

        Returns:
        -------
        ValidationOutcome
            config when valid, otherwise every field error found, in
            field order
        """
        errors: List[ValidationError] = []

        weight = self._parse_number(raw_input, "weightKg", errors)
        if weight is MISSING:
            errors.append(ValidationError(
                "weightKg", ValidationErrorKind.REQUIRED, "Weight is required"
            ))
        elif weight is not None and weight <= 0:
            errors.append(ValidationError(
                "weightKg", ValidationErrorKind.OUT_OF_RANGE,
                f"Weight must be positive, got {weight:g} kg"
            ))

        altitude = self._parse_number(raw_input, "targetAltitudeKm", errors)
        if altitude is MISSING:
            errors.append(ValidationError(
                "targetAltitudeKm", ValidationErrorKind.REQUIRED, "Target altitude is required"
            ))
        elif altitude is not None and not 0 <= altitude <= self.ceiling_km:
            errors.append(ValidationError(
                "targetAltitudeKm", ValidationErrorKind.OUT_OF_RANGE,
                f"Target altitude must be between 0 and {self.ceiling_km:g} km, got {altitude:g} km"
            ))

        temp_min = self._parse_number(raw_input, "tempMinC", errors)
        temp_max = self._parse_number(raw_input, "tempMaxC", errors)
        for name, temp in (("tempMinC", temp_min), ("tempMaxC", temp_max)):
            if isinstance(temp, float) and temp < AMBIENT_TEMPERATURE_FLOOR_C:
                errors.append(ValidationError(
                    name, ValidationErrorKind.OUT_OF_RANGE,
                    f"{FIELD_LABELS[name]} must be at least "
                    f"{AMBIENT_TEMPERATURE_FLOOR_C:g} °C, got {temp:g} °C"
                ))

        # A range needs both bounds
        if temp_min is MISSING and temp_max is not MISSING:
            errors.append(ValidationError(
                "tempMinC", ValidationErrorKind.REQUIRED,
                "Minimum temperature is required when a maximum is given"
            ))
        elif temp_max is MISSING and temp_min is not MISSING:
            errors.append(ValidationError(
                "tempMaxC", ValidationErrorKind.REQUIRED,
                "Maximum temperature is required when a minimum is given"
            ))
        elif isinstance(temp_min, float) and isinstance(temp_max, float) and temp_min > temp_max:
            errors.append(ValidationError(
                "tempMinC", ValidationErrorKind.INVALID_RANGE,
                f"Minimum temperature ({temp_min:g} °C) exceeds maximum ({temp_max:g} °C)"
            ))

        if errors:
            return ValidationOutcome(errors=tuple(errors))

        config = AirshipConfig(
            weight_kg=weight,
            target_altitude_km=altitude,
            temp_min_c=None if temp_min is MISSING else temp_min,
            temp_max_c=None if temp_max is MISSING else temp_max,
        )
        return ValidationOutcome(config=config)
