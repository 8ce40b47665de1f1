"""
Atmosphere Data Model
=====================

Immutable records describing the standard atmosphere layer table and the
atmospheric state sampled at a given altitude.
"""

from dataclasses import dataclass
from typing import Sequence, Dict, Any


# Offset between Celsius and Kelvin scales
KELVIN_OFFSET = 273.15


@dataclass(frozen=True)
class AtmosphericLayer:
    """
    One segment of the International Standard Atmosphere.

    Within a layer the temperature varies linearly with altitude at a
    constant lapse rate.

    Attributes:
    ----------
    name : str
        Layer name (e.g., "troposphere")

    base_altitude_km : float
        Geopotential altitude of the layer base (km)

    base_temperature_c : float
        Temperature at the layer base (°C)

    lapse_rate_c_per_km : float
        Temperature change per km of climb (°C/km).
        Negative = cooling with altitude, 0 = isothermal.

    base_pressure_kpa : float
        Static pressure at the layer base (kPa)
    """
    name: str
    base_altitude_km: float
    base_temperature_c: float
    lapse_rate_c_per_km: float
    base_pressure_kpa: float

    @property
    def base_temperature_k(self) -> float:
        """Layer base temperature in Kelvin."""
        return self.base_temperature_c + KELVIN_OFFSET

    @property
    def is_isothermal(self) -> bool:
        """True when the layer has no temperature gradient."""
        return abs(self.lapse_rate_c_per_km) < 1e-12


@dataclass(frozen=True)
class TemperatureRange:
    """
    User-supplied ambient temperature range.

    The range pins the temperature at sea level and at the top of the
    queried altitude span (normally the target altitude).

    Attributes:
    ----------
    min_c : float
        Lowest expected ambient temperature (°C)

    max_c : float
        Highest expected ambient temperature (°C)

    span_km : float
        Altitude at which the blend toward the range is complete (km)
    """
    min_c: float
    max_c: float
    span_km: float = 0.0

    def clamp(self, temperature_c: float) -> float:
        """Clamp a temperature into [min_c, max_c]."""
        return min(max(temperature_c, self.min_c), self.max_c)


@dataclass(frozen=True)
class AtmosphereSample:
    """
    Atmospheric state at one altitude.

    Attributes:
    ----------
    altitude_km : float
        Altitude above sea level (km)

    density_kg_m3 : float
        Air density (kg/m³)

    temperature_c : float
        Ambient temperature (°C)

    pressure_kpa : float
        Static pressure (kPa)
    """
    altitude_km: float
    density_kg_m3: float
    temperature_c: float
    pressure_kpa: float

    @property
    def temperature_k(self) -> float:
        """Ambient temperature in Kelvin."""
        return self.temperature_c + KELVIN_OFFSET

    def to_dict(self) -> Dict[str, Any]:
        """Convert sample to dictionary for export."""
        return {
            "altitude_km": self.altitude_km,
            "density_kg_m3": self.density_kg_m3,
            "temperature_c": self.temperature_c,
            "pressure_kpa": self.pressure_kpa,
        }


def validate_layer_table(layers: Sequence[AtmosphericLayer]) -> None:
    """
    Check that a layer table is non-empty and ordered by base altitude.

    Layers are contiguous by construction: each layer ends where the
    next one begins.

    Raises:
    ------
    ValueError
        If the table is empty, does not start at sea level, or is not
        strictly ascending.
    """
    if not layers:
        raise ValueError("Layer table must contain at least one layer")
    if layers[0].base_altitude_km != 0.0:
        raise ValueError(
            f"Layer table must start at sea level, got {layers[0].base_altitude_km} km"
        )
    for lower, upper in zip(layers, layers[1:]):
        if upper.base_altitude_km <= lower.base_altitude_km:
            raise ValueError(
                f"Layer '{upper.name}' base ({upper.base_altitude_km} km) is not "
                f"above layer '{lower.name}' base ({lower.base_altitude_km} km)"
            )
