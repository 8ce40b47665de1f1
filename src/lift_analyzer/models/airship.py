"""
Airship Data Model
==================

Defines the user input record (AirshipConfig) and the engine's lift
output records (LiftResult, AltitudeProfilePoint).
"""

from dataclasses import dataclass
from typing import Optional, Tuple, Dict, Any

from .atmosphere import AtmosphereSample, TemperatureRange


@dataclass(frozen=True)
class AirshipConfig:
    """
    Validated airship configuration.

    Attributes:
    ----------
    weight_kg : float
        Total airship weight (kg). Must be positive.

    target_altitude_km : float
        Cruise altitude (km), within the atmosphere model range.

    temp_min_c : float, optional
        Lowest expected ambient temperature (°C)

    temp_max_c : float, optional
        Highest expected ambient temperature (°C)

    The temperature bounds come as a pair: both set, or neither.
    """
    weight_kg: float
    target_altitude_km: float
    temp_min_c: Optional[float] = None
    temp_max_c: Optional[float] = None

    def __post_init__(self):
        if (self.temp_min_c is None) != (self.temp_max_c is None):
            raise ValueError("Temperature bounds must be given together or not at all")
        if self.temp_min_c is not None and self.temp_min_c > self.temp_max_c:
            raise ValueError(
                f"Minimum temperature {self.temp_min_c} °C exceeds maximum {self.temp_max_c} °C"
            )

    @property
    def temperature_range(self) -> Optional[TemperatureRange]:
        """Temperature override spanning sea level to the target altitude."""
        if self.temp_min_c is None:
            return None
        return TemperatureRange(
            min_c=self.temp_min_c,
            max_c=self.temp_max_c,
            span_km=self.target_altitude_km,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the form-layer field names."""
        return {
            "weightKg": self.weight_kg,
            "targetAltitudeKm": self.target_altitude_km,
            "tempMinC": self.temp_min_c,
            "tempMaxC": self.temp_max_c,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AirshipConfig":
        """Build from form-layer field names without validation."""
        return cls(
            weight_kg=data["weightKg"],
            target_altitude_km=data["targetAltitudeKm"],
            temp_min_c=data.get("tempMinC"),
            temp_max_c=data.get("tempMaxC"),
        )


@dataclass(frozen=True)
class LiftResult:
    """
    Envelope sizing and lift margin for one configuration.

    Attributes:
    ----------
    volume_sea_level_m3 : float
        Envelope volume for neutral buoyancy at sea level (m³)

    volume_target_altitude_m3 : float
        Envelope volume for neutral buoyancy at the target altitude (m³)

    excess_lift_sea_level_kg : float
        Excess lift of the design envelope at sea level (kg)

    excess_lift_target_altitude_kg : float
        Excess lift of the design envelope at the target altitude (kg)

    lift_to_weight_ratio : float
        Total lift / weight of the design envelope at the target altitude

    atmosphere_samples : tuple of AtmosphereSample
        Atmosphere table, ordered by altitude

    envelope_volume_m3 : float
        Design envelope volume including the lift reserve (m³)

    lift_gas : str
        Lifting gas label ("helium", "hydrogen" or "custom")

    lift_gas_density_kg_m3 : float
        Lifting gas density used (kg/m³)
    """
    volume_sea_level_m3: float
    volume_target_altitude_m3: float
    excess_lift_sea_level_kg: float
    excess_lift_target_altitude_kg: float
    lift_to_weight_ratio: float
    atmosphere_samples: Tuple[AtmosphereSample, ...]
    envelope_volume_m3: float
    lift_gas: str
    lift_gas_density_kg_m3: float

    def to_dict(self) -> Dict[str, Any]:
        """Convert result to dictionary for export."""
        return {
            "volume_sea_level_m3": self.volume_sea_level_m3,
            "volume_target_altitude_m3": self.volume_target_altitude_m3,
            "excess_lift_sea_level_kg": self.excess_lift_sea_level_kg,
            "excess_lift_target_altitude_kg": self.excess_lift_target_altitude_kg,
            "lift_to_weight_ratio": self.lift_to_weight_ratio,
            "envelope_volume_m3": self.envelope_volume_m3,
            "lift_gas": self.lift_gas,
            "lift_gas_density_kg_m3": self.lift_gas_density_kg_m3,
            "atmosphere_samples": [s.to_dict() for s in self.atmosphere_samples],
        }


@dataclass(frozen=True)
class AltitudeProfilePoint:
    """
    Lift figures of the design envelope at one altitude.

    Attributes:
    ----------
    altitude_km : float
        Altitude (km)

    required_volume_m3 : float or None
        Volume for neutral buoyancy at this altitude (m³).
        None when no net buoyancy is possible here.

    lift_capacity_kg : float
        Gross lift of the design envelope at this altitude (kg)

    lift_reserve_kg : float
        Lift capacity minus weight (kg). Negative = cannot float here.
    """
    altitude_km: float
    required_volume_m3: Optional[float]
    lift_capacity_kg: float
    lift_reserve_kg: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "altitude_km": self.altitude_km,
            "required_volume_m3": self.required_volume_m3,
            "lift_capacity_kg": self.lift_capacity_kg,
            "lift_reserve_kg": self.lift_reserve_kg,
        }
