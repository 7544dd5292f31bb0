import pathlib
import sys
import tempfile
import unittest

# Ensure src/ is on path for direct test execution
ROOT = pathlib.Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from motionrec.config.runtime import (  # noqa: E402
    MotionConfig,
    config_from_mapping,
    load_config,
    save_config,
)


class MotionConfigTest(unittest.TestCase):
    def test_defaults(self):
        cfg = MotionConfig()
        self.assertIsNone(cfg.server_url)
        self.assertEqual(cfg.send_interval, 5)

    def test_mapping_with_recorder_block(self):
        cfg = config_from_mapping(
            {
                "recorder": {"server_url": "http://192.168.0.102:8000/api", "send_interval": 10},
                "ui": {"ripple": True},
            }
        )
        self.assertEqual(cfg.server_url, "http://192.168.0.102:8000/api")
        self.assertEqual(cfg.send_interval, 10)

    def test_unknown_keys_ignored_and_values_clamped(self):
        cfg = config_from_mapping({"send_interval": 0, "sensor_rate_hz": -5, "haptics": "on"})
        self.assertEqual(cfg.send_interval, 1)
        self.assertEqual(cfg.sensor_rate_hz, 1.0)

    def test_blank_server_url_means_absent(self):
        cfg = config_from_mapping({"server_url": "   "})
        self.assertIsNone(cfg.server_url)

    def test_missing_file_gives_defaults(self):
        self.assertEqual(load_config("/nonexistent/motionrec.yaml"), MotionConfig())
        self.assertEqual(load_config(None), MotionConfig())

    def test_yaml_round_trip(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = pathlib.Path(tmpdir) / "recorder.yaml"
            cfg = MotionConfig(server_url="http://collector.local/api", send_interval=7, export_dir="~/exports")
            save_config(path, cfg)
            self.assertIn("recorder:", path.read_text(encoding="utf-8"))
            self.assertEqual(load_config(path), cfg)

    def test_non_mapping_yaml_rejected(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = pathlib.Path(tmpdir) / "bad.yaml"
            path.write_text("- just\n- a list\n", encoding="utf-8")
            with self.assertRaises(ValueError):
                load_config(path)

    def test_with_server_url(self):
        cfg = MotionConfig().with_server_url(" http://x.test/api ")
        self.assertEqual(cfg.server_url, "http://x.test/api")


if __name__ == "__main__":
    unittest.main()
