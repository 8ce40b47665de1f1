"""
Persistence and Report Export Tests
===================================

Covers saving/loading airship configurations and history files,
report export (CSV/JSON) and the console launcher.
"""

import io
import json
import math
import sys
import tempfile
from contextlib import redirect_stdout, redirect_stderr
import logging
from pathlib import Path
import unittest

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent))

import pandas as pd

from src.lift_analyzer import (
    CalculationPipeline,
    AirshipConfig,
    HistoricalRecord,
    InputValidationError,
    ValidationErrorKind,
)
from src.lift_analyzer.persistence import (
    config_to_json,
    config_from_json,
    save_config,
    load_config,
    save_history_csv,
    load_history_csv,
)
from src.lift_analyzer.report import (
    ATMOSPHERE_COLUMNS,
    PROFILE_COLUMNS,
    samples_to_dataframe,
    profile_to_dataframe,
    summary_rows,
    export_report_csv,
    export_report_json,
    get_summary_report,
)
from src.logging_config import setup_logging, resolve_level
import run_lift_analyzer


class TestConfigPersistence(unittest.TestCase):
    """Test airship configuration files."""

    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        self.path = Path(self.tmpdir.name) / "airship.json"

    def tearDown(self):
        self.tmpdir.cleanup()

    def test_save_and_load(self):
        """A saved configuration loads back unchanged."""
        for config in (
            AirshipConfig(weight_kg=1000.0, target_altitude_km=10.0),
            AirshipConfig(weight_kg=2.5, target_altitude_km=0.0, temp_min_c=-40.0, temp_max_c=30.0),
        ):
            save_config(config, self.path)
            self.assertEqual(load_config(self.path), config)

    def test_half_range_cannot_be_saved(self):
        """A configuration with one temperature bound cannot be built, so every saved one loads."""
        with self.assertRaises(ValueError):
            AirshipConfig(100.0, 5.0, temp_min_c=-10.0)

        config = AirshipConfig(100.0, 5.0, temp_min_c=-10.0, temp_max_c=-10.0)
        save_config(config, self.path)
        self.assertEqual(load_config(self.path), config)

    def test_half_range_file_rejected(self):
        """A hand-edited file with one bound reports the missing partner."""
        text = json.dumps({"version": 1, "airship": {
            "weightKg": 100, "targetAltitudeKm": 5, "tempMinC": -10, "tempMaxC": None,
        }})
        with self.assertRaises(InputValidationError) as ctx:
            config_from_json(text)
        self.assertEqual(
            [(e.field, e.kind) for e in ctx.exception.errors],
            [("tempMaxC", ValidationErrorKind.REQUIRED)],
        )

    def test_file_layout(self):
        """File holds a version tag and the form field names."""
        data = json.loads(config_to_json(AirshipConfig(100.0, 5.0)))
        self.assertEqual(data["version"], 1)
        self.assertEqual(data["airship"], {
            "weightKg": 100.0, "targetAltitudeKm": 5.0, "tempMinC": None, "tempMaxC": None,
        })

    def test_edited_file_is_validated(self):
        """Out-of-range values in a file are reported as validation errors."""
        text = json.dumps({"version": 1, "airship": {"weightKg": -1, "targetAltitudeKm": 10}})
        with self.assertRaises(InputValidationError) as ctx:
            config_from_json(text)
        self.assertEqual(ctx.exception.errors[0].field, "weightKg")
        self.assertEqual(ctx.exception.errors[0].kind, ValidationErrorKind.OUT_OF_RANGE)

    def test_not_a_config_file(self):
        """Documents without an airship section are rejected."""
        for text in ("[]", '{"weightKg": 10}', '{"version": 2, "airship": {}}'):
            with self.assertRaises(ValueError):
                config_from_json(text)


class TestHistoryPersistence(unittest.TestCase):
    """Test history CSV files."""

    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        self.path = Path(self.tmpdir.name) / "history.csv"

    def tearDown(self):
        self.tmpdir.cleanup()

    def test_save_and_load_keeps_order(self):
        """Records come back in file order."""
        records = [
            HistoricalRecord("2023-03-01", 1.1),
            HistoricalRecord("2023-01-01", 1.3),
            HistoricalRecord("2023-02-01", 1.2),
        ]
        save_history_csv(records, self.path)
        self.assertEqual(load_history_csv(self.path), records)

    def test_missing_column(self):
        """A file without the ratio column is rejected."""
        self.path.write_text("date,ratio\n2023-01-01,1.2\n", encoding="utf-8")
        with self.assertRaises(ValueError):
            load_history_csv(self.path)

    def test_bad_ratio(self):
        """A non-numeric ratio names the offending line."""
        self.path.write_text(
            "date,liftToWeightRatio\n2023-01-01,1.2\n2023-02-01,high\n", encoding="utf-8"
        )
        with self.assertRaises(ValueError) as ctx:
            load_history_csv(self.path)
        self.assertIn("Line 3", str(ctx.exception))


class TestReportExport(unittest.TestCase):
    """Test tabulation and report files."""

    @classmethod
    def setUpClass(cls):
        cls.result = CalculationPipeline().run(
            {"weightKg": "1000", "targetAltitudeKm": "10"},
            history=[HistoricalRecord("2023-01-01", 1.2), HistoricalRecord("2023-02-01", 1.21)],
        )

    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()

    def tearDown(self):
        self.tmpdir.cleanup()

    def test_atmosphere_table(self):
        """Atmosphere table has one row per sample."""
        df = samples_to_dataframe(self.result.lift.atmosphere_samples)
        self.assertEqual(list(df.columns), ATMOSPHERE_COLUMNS)
        self.assertEqual(list(df["altitude_km"]), [0.0, 5.0, 10.0, 15.0, 20.0])
        self.assertTrue(df["density_kg_m3"].is_monotonic_decreasing)

    def test_profile_table(self):
        """Infeasible altitudes show up as NaN volume."""
        df = profile_to_dataframe(self.result.profile)
        self.assertEqual(list(df.columns), PROFILE_COLUMNS)
        self.assertTrue(math.isnan(df["required_volume_m3"].iloc[-1]))

    def test_summary_rows(self):
        """Summary carries the inputs and every lift figure."""
        rows = dict(summary_rows(self.result))
        self.assertEqual(rows["input.weightKg"], 1000.0)
        self.assertAlmostEqual(rows["lift.lift_to_weight_ratio"], 1.2)
        self.assertEqual(rows["lift.lift_gas"], "helium")
        self.assertEqual(rows["trend.kind"], "OptimalReserve")

    def test_export_csv(self):
        """CSV report starts with the summary block."""
        path = Path(self.tmpdir.name) / "report.csv"
        export_report_csv(self.result, path)

        text = path.read_text(encoding="utf-8")
        blocks = text.strip().split("\n\n")
        self.assertEqual(len(blocks), 4)

        summary = pd.read_csv(io.StringIO(blocks[0]))
        self.assertEqual(list(summary.columns), ["key", "value"])
        self.assertIn("lift.volume_target_altitude_m3", list(summary["key"]))

        atmosphere = pd.read_csv(io.StringIO(blocks[1]))
        self.assertEqual(list(atmosphere.columns), ATMOSPHERE_COLUMNS)
        self.assertEqual(len(atmosphere), 5)

    def test_export_json(self):
        """JSON report round-trips through the json module."""
        path = Path(self.tmpdir.name) / "report.json"
        export_report_json(self.result, path)

        data = json.loads(path.read_text(encoding="utf-8"))
        self.assertEqual(data["config"]["weightKg"], 1000.0)
        self.assertAlmostEqual(data["lift"]["lift_to_weight_ratio"], 1.2)
        self.assertEqual(len(data["lift"]["atmosphere_samples"]), 5)
        self.assertEqual(len(data["history"]), 2)
        self.assertEqual(data["trend"]["kind"], "OptimalReserve")

    def test_summary_report(self):
        """Text report includes the summary and both tables."""
        report = get_summary_report(self.result)
        self.assertIn("Lift-to-weight ratio: 1.200", report)
        self.assertIn("ATMOSPHERIC PROPERTIES:", report)
        self.assertIn("ALTITUDE PROFILE", report)


class TestLauncher(unittest.TestCase):
    """Test the console front end."""

    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()

    def tearDown(self):
        self.tmpdir.cleanup()

    def _run(self, *argv):
        out = io.StringIO()
        with redirect_stdout(out):
            code = run_lift_analyzer.main(list(argv))
        return code, out.getvalue()

    def test_successful_run(self):
        """Valid input prints the summary and exits 0."""
        code, output = self._run("--weight", "1000", "--altitude", "10")
        self.assertEqual(code, 0)
        self.assertIn("Volume (target):", output)

    def test_invalid_input(self):
        """Validation errors are listed and exit 2."""
        code, output = self._run("--weight", "-5", "--altitude", "10")
        self.assertEqual(code, 2)
        self.assertIn("weightKg (OutOfRange)", output)

    def test_infeasible_altitude(self):
        """Engine errors exit 1."""
        code, output = self._run("--weight", "100", "--altitude", "20")
        self.assertEqual(code, 1)
        self.assertIn("No net buoyancy", output)

    def test_save_and_report(self):
        """Configuration and report files are written."""
        config_path = Path(self.tmpdir.name) / "airship.json"
        report_path = Path(self.tmpdir.name) / "report.json"
        code, _ = self._run(
            "--weight", "500", "--altitude", "5", "--details",
            "--save", str(config_path), "--report", str(report_path),
        )
        self.assertEqual(code, 0)
        self.assertEqual(load_config(config_path), AirshipConfig(500.0, 5.0))
        self.assertTrue(report_path.exists())

        code, output = self._run("--load", str(config_path))
        self.assertEqual(code, 0)
        self.assertIn("500 kg @ 5 km", output)

    def test_log_file(self):
        """Debug records go to the log file, not to stdout."""
        log_path = Path(self.tmpdir.name) / "run.log"
        with redirect_stderr(io.StringIO()):
            code, output = self._run(
                "--weight", "100", "--altitude", "2",
                "--log-level", "debug", "--log-file", str(log_path),
            )
        setup_logging("warning")

        self.assertEqual(code, 0)
        self.assertNotIn("Calculating lift", output)
        log = log_path.read_text(encoding="utf-8")
        self.assertIn(" - src - DEBUG - Logging initialized at level DEBUG", log)
        self.assertIn(" - src.lift_analyzer.pipeline - INFO - Calculating lift: 100 kg @ 2 km", log)

    def test_unknown_log_level(self):
        """An unknown level name is a usage error."""
        code, output = self._run("--weight", "100", "--altitude", "2", "--log-level", "chatty")
        self.assertEqual(code, 2)
        self.assertIn("Unknown log level", output)


class TestLoggingConfig(unittest.TestCase):
    """Test package logger setup."""

    def tearDown(self):
        setup_logging("warning")

    def test_level_names(self):
        self.assertEqual(resolve_level("debug"), logging.DEBUG)
        self.assertEqual(resolve_level(" Warning "), logging.WARNING)
        self.assertEqual(resolve_level(logging.ERROR), logging.ERROR)
        with self.assertRaises(ValueError):
            resolve_level("loud")

    def test_repeated_setup_keeps_one_console_handler(self):
        setup_logging("info")
        logger = setup_logging("debug")
        self.assertEqual(len(logger.handlers), 1)
        self.assertEqual(logger.level, logging.DEBUG)
        self.assertFalse(logger.propagate)


if __name__ == "__main__":
    unittest.main()
