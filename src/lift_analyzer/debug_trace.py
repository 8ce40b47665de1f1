"""
Debug Trace Functions
=====================

Traces a complete lift calculation with every formula and intermediate
value, for the "show calculation details" view.
"""

from typing import Optional

from .debugger import CalculationDebugger
from .config import LiftAnalyzerConfig, DEFAULT_CONFIG, GRAVITY, GAS_CONSTANT_AIR
from .models.airship import AirshipConfig
from .calculations.atmosphere import AtmosphericModel
from .calculations.lift import LiftCalculator, compute_lift_capacity, compute_lift_to_weight_ratio


def _trace_atmosphere(
    debugger: CalculationDebugger,
    model: AtmosphericModel,
    airship: AirshipConfig,
    altitude_km: float,
    suffix: str
):
    """Record the atmosphere steps at one altitude and return the sample."""
    temp_range = airship.temperature_range
    layer = model.find_layer(altitude_km)
    sample = model.compute_properties(altitude_km, temp_range)

    debugger.add_step(
        category="Atmosphere",
        description=f"Atmosphere layer at {altitude_km:g} km",
        formula="",
        variables={"h": altitude_km},
        result=layer.name,
        result_name=f"layer_{suffix}",
        comment=(f"base {layer.base_altitude_km:g} km, "
                 f"lapse {layer.lapse_rate_c_per_km:g} °C/km")
    )

    nominal = model.nominal_temperature_c(altitude_km)
    debugger.add_step(
        category="Atmosphere",
        description="Standard temperature",
        formula="T = T_b + L * (h - h_b)",
        variables={
            "T_b": layer.base_temperature_c,
            "L": layer.lapse_rate_c_per_km,
            "h": altitude_km,
            "h_b": layer.base_altitude_km,
        },
        result=nominal,
        result_name=f"T_isa_{suffix}",
        result_unit="°C"
    )

    if temp_range is not None:
        debugger.add_step(
            category="Atmosphere",
            description="Temperature blended toward user range",
            formula="T = clamp(T_isa + offset(h / span), T_min, T_max)",
            variables={
                "T_min": temp_range.min_c,
                "T_max": temp_range.max_c,
                "span": temp_range.span_km,
            },
            result=sample.temperature_c,
            result_name=f"T_{suffix}",
            result_unit="°C"
        )

    formula = ("p = p_b * exp(-g0 * (h - h_b) / (R * T_b))" if layer.is_isothermal
               else "p = p_b * (T / T_b)^(-g0 / (L * R))")
    debugger.add_step(
        category="Atmosphere",
        description="Static pressure",
        formula=formula,
        variables={"p_b": layer.base_pressure_kpa, "T_b": layer.base_temperature_k},
        result=sample.pressure_kpa,
        result_name=f"p_{suffix}",
        result_unit="kPa"
    )

    debugger.add_step(
        category="Atmosphere",
        description="Air density (ideal gas law)",
        formula="rho = p / (R * T)",
        variables={"p": sample.pressure_kpa * 1000.0, "R": GAS_CONSTANT_AIR,
                   "T": sample.temperature_k},
        result=sample.density_kg_m3,
        result_name=f"rho_air_{suffix}",
        result_unit="kg/m³"
    )
    return sample


def trace_lift_calculation(
    airship: AirshipConfig,
    config: Optional[LiftAnalyzerConfig] = None
) -> CalculationDebugger:
    """
    Trace a lift calculation with detailed step-by-step output.

    Parameters:
    ----------
    airship : AirshipConfig
        Validated airship configuration

    config : LiftAnalyzerConfig, optional
        Engine configuration

    Returns:
    -------
    CalculationDebugger
        Debugger with all calculation steps recorded

    Raises:
    ------
    ModelRangeError, LiftInfeasibleError
        Exactly as the pipeline would.
    """
    config = config if config is not None else DEFAULT_CONFIG
    model = AtmosphericModel(config)
    calculator = LiftCalculator(config, model)
    gas_density = calculator.lift_gas_density_kg_m3
    weight = airship.weight_kg

    debugger = CalculationDebugger()
    debugger.start(
        weight=f"{weight:g} kg",
        target_altitude=f"{airship.target_altitude_km:g} km",
        temperature_range=(
            f"{airship.temp_min_c:g} to {airship.temp_max_c:g} °C"
            if airship.temperature_range is not None else "standard"
        ),
        lift_gas=config.get_lift_gas_label(),
    )

    # ==========================================================================
    # SECTION 1: INPUTS AND CONSTANTS
    # ==========================================================================
    debugger.start_section("INPUT PARAMETERS")
    debugger.add_input("W", weight, "kg", "Total airship weight")
    debugger.add_input("h_target", airship.target_altitude_km, "km", "Target altitude")
    debugger.add_constant("g", GRAVITY, "m/s²", "Standard gravity")
    debugger.add_constant("R", GAS_CONSTANT_AIR, "J/(kg·K)", "Specific gas constant of air")
    debugger.add_constant("rho_gas", gas_density, "kg/m³",
                          f"Lifting gas density ({config.get_lift_gas_label()})")
    debugger.add_constant("reserve", config.design_lift_reserve, "",
                          "Design lift reserve (volume fraction)")

    # ==========================================================================
    # SECTION 2: SEA LEVEL
    # ==========================================================================
    debugger.start_section("SEA LEVEL")
    sea_level = _trace_atmosphere(debugger, model, airship, 0.0, "0")
    volume_sea_level = calculator.required_volume(weight, sea_level)
    debugger.add_step(
        category="Lift",
        description="Neutral-buoyancy volume at sea level",
        formula="V = W / ((rho_air - rho_gas) * g)",
        variables={"W": weight, "rho_air": sea_level.density_kg_m3, "rho_gas": gas_density},
        result=volume_sea_level,
        result_name="V_0",
        result_unit="m³"
    )

    # ==========================================================================
    # SECTION 3: TARGET ALTITUDE
    # ==========================================================================
    debugger.start_section("TARGET ALTITUDE")
    target = _trace_atmosphere(debugger, model, airship, airship.target_altitude_km, "target")
    volume_target = calculator.required_volume(weight, target)
    debugger.add_step(
        category="Lift",
        description="Neutral-buoyancy volume at target altitude",
        formula="V = W / ((rho_air - rho_gas) * g)",
        variables={"W": weight, "rho_air": target.density_kg_m3, "rho_gas": gas_density},
        result=volume_target,
        result_name="V_target",
        result_unit="m³"
    )

    # ==========================================================================
    # SECTION 4: DESIGN ENVELOPE
    # ==========================================================================
    debugger.start_section("DESIGN ENVELOPE")
    envelope = calculator.design_envelope_volume(volume_target)
    debugger.add_step(
        category="Envelope",
        description="Design envelope volume",
        formula="V_env = V_target * (1 + reserve)",
        variables={"V_target": volume_target, "reserve": config.design_lift_reserve},
        result=envelope,
        result_name="V_env",
        result_unit="m³"
    )

    for label, sample in (("0", sea_level), ("target", target)):
        lift = compute_lift_capacity(envelope, sample, gas_density)
        debugger.add_step(
            category="Envelope",
            description=f"Buoyant lift at {sample.altitude_km:g} km",
            formula="L = (rho_air - rho_gas) * g * V_env",
            variables={"rho_air": sample.density_kg_m3, "V_env": envelope},
            result=lift,
            result_name=f"L_{label}",
            result_unit="kg"
        )
        debugger.add_step(
            category="Envelope",
            description=f"Excess lift at {sample.altitude_km:g} km",
            formula="Excess = L - W",
            variables={"L": lift, "W": weight},
            result=calculator.excess_lift(envelope, sample, weight),
            result_name=f"excess_{label}",
            result_unit="kg"
        )

    excess_target = calculator.excess_lift(envelope, target, weight)
    debugger.add_step(
        category="Envelope",
        description="Lift-to-weight ratio at target altitude",
        formula="ratio = (excess + W) / W",
        variables={"excess": excess_target, "W": weight},
        result=compute_lift_to_weight_ratio(excess_target, weight),
        result_name="lift_to_weight",
        comment="Above 1 indicates positive buoyancy"
    )

    debugger.finish()
    return debugger
