#!/usr/bin/env python3
"""
Airship Lift Analyzer Launcher
==============================

Console front end for the airship lift calculation engine.

Computes atmospheric properties, required envelope volume, excess lift
and the lift-to-weight trend for one airship configuration.

Usage:
------
    python run_lift_analyzer.py --weight 1000 --altitude 10
    python run_lift_analyzer.py --weight 1000 --altitude 10 --temp-min -20 --temp-max 25
    python run_lift_analyzer.py --load airship.json --history history.csv --report out.csv
    python run_lift_analyzer.py --weight 1000 --altitude 10 --save airship.json --details

Requirements:
------------
    - Python 3.8+
    - numpy
    - scipy
    - pandas
"""

import argparse
import logging
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

from src.logging_config import setup_logging
from src.lift_analyzer import (
    CalculationPipeline,
    LiftAnalyzerConfig,
    LiftAnalysisError,
    InputValidationError,
    LiftGas,
)
from src.lift_analyzer.persistence import load_config, save_config, load_history_csv
from src.lift_analyzer.report import export_report_csv, export_report_json, get_summary_report


def build_parser() -> argparse.ArgumentParser:
    """Command-line arguments."""
    parser = argparse.ArgumentParser(description="Airship lift and atmosphere analysis")
    parser.add_argument("--weight", default="", help="Total weight (kg)")
    parser.add_argument("--altitude", default="", help="Target altitude (km)")
    parser.add_argument("--temp-min", default="", help="Minimum ambient temperature (°C)")
    parser.add_argument("--temp-max", default="", help="Maximum ambient temperature (°C)")
    parser.add_argument("--gas", choices=[g.value for g in LiftGas], default=LiftGas.HELIUM.value,
                        help="Lifting gas")
    parser.add_argument("--reserve", type=float, default=0.2,
                        help="Design lift reserve as a volume fraction")
    parser.add_argument("--load", help="Load configuration from a JSON file")
    parser.add_argument("--save", help="Save the configuration to a JSON file")
    parser.add_argument("--history", help="Lift-to-weight history CSV (date, liftToWeightRatio)")
    parser.add_argument("--report", help="Export report (.csv or .json)")
    parser.add_argument("--details", action="store_true", help="Print calculation details")
    parser.add_argument("--verbose", action="store_true", help="Debug logging (same as --log-level debug)")
    parser.add_argument("--log-level", default="warning", help="Logging level name")
    parser.add_argument("--log-file", help="Also write the log to this file")
    return parser


def main(argv=None) -> int:
    """Run one lift analysis from the command line."""
    args = build_parser().parse_args(argv)
    try:
        setup_logging(logging.DEBUG if args.verbose else args.log_level, args.log_file)
    except ValueError as e:
        print(f"[ERROR] {e}")
        return 2

    config = LiftAnalyzerConfig(lift_gas=LiftGas(args.gas), design_lift_reserve=args.reserve)

    try:
        pipeline = CalculationPipeline(config)

        if args.load:
            airship = load_config(args.load, config)
        else:
            airship = pipeline.validate({
                "weightKg": args.weight,
                "targetAltitudeKm": args.altitude,
                "tempMinC": args.temp_min,
                "tempMaxC": args.temp_max,
            })

        history = load_history_csv(args.history) if args.history else []
        result = pipeline.calculate(airship, history)

    except InputValidationError as e:
        print("[ERROR] Invalid input:")
        for error in e.errors:
            print(f"  - {error.field} ({error.kind.value}): {error.message}")
        return 2

    except (LiftAnalysisError, ValueError, OSError) as e:
        print(f"[ERROR] {e}")
        return 1

    print(get_summary_report(result))

    if args.details:
        print()
        print(pipeline.trace(airship).get_report())

    if args.save:
        save_config(airship, args.save)
        print(f"\nConfiguration saved to {args.save}")

    if args.report:
        if args.report.lower().endswith(".json"):
            export_report_json(result, args.report)
        else:
            export_report_csv(result, args.report)
        print(f"Report exported to {args.report}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
