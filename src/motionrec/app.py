"""Command-line entry point for the motion recorder.

Records the synthetic sensors for a fixed duration, printing live readings as
they arrive, then stops, exports the session, and prints the export path.
Both launches (``python -m motionrec`` and the ``motionrec`` console script)
flow through ``main()`` here.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
import time
from pathlib import Path

from .config.runtime import MotionConfig, load_config
from .coordinator import AcquisitionCoordinator
from .core.models import Channel
from .sensors.synthetic import build_synthetic_sensors

logger = logging.getLogger(__name__)


def _channel_arg(text: str) -> Channel:
    try:
        return Channel.from_label(text)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def _build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Motion sensor recorder")
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="YAML configuration file (default: built-in defaults)",
    )
    parser.add_argument(
        "--server-url",
        default=None,
        help="Collector URL for JSON events (overrides config and MOTIONREC_SERVER_URL)",
    )
    parser.add_argument(
        "--duration",
        type=float,
        default=5.0,
        help="Recording duration in seconds (default: 5)",
    )
    parser.add_argument(
        "--rate",
        type=float,
        default=None,
        help="Synthetic sensor rate in Hz (default: from config, 100)",
    )
    parser.add_argument(
        "--disable",
        type=_channel_arg,
        action="append",
        default=[],
        metavar="CHANNEL",
        help="Treat CHANNEL (ACC, GYRO, MAG, MOTION) as unavailable; repeatable",
    )
    parser.add_argument(
        "--export-dir",
        type=Path,
        default=None,
        help="Directory for the exported CSV (default: from config or data/exports)",
    )
    parser.add_argument(
        "--print-every",
        type=float,
        default=1.0,
        help="Seconds between live reading printouts, 0 disables (default: 1)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase log verbosity (-v info, -vv debug)",
    )
    return parser


def _resolve_config(args: argparse.Namespace) -> MotionConfig:
    cfg = load_config(args.config)
    url = args.server_url or os.environ.get("MOTIONREC_SERVER_URL")
    if url:
        cfg = cfg.with_server_url(url)
    if args.rate is not None:
        cfg.sensor_rate_hz = float(args.rate)
    return cfg.sanitized()


def run(args: argparse.Namespace) -> int:
    cfg = _resolve_config(args)
    sensors = build_synthetic_sensors(cfg.sensor_rate_hz, disabled=args.disable)
    coordinator = AcquisitionCoordinator(sensors, config=cfg, export_dir=args.export_dir)

    with coordinator:
        coordinator.start()
        deadline = time.monotonic() + max(0.0, float(args.duration))
        interval = max(0.0, float(args.print_every))
        try:
            while True:
                remaining = deadline - time.monotonic()
                if remaining <= 0:
                    break
                time.sleep(min(remaining, interval) if interval > 0 else remaining)
                if interval > 0:
                    for reading in coordinator.live_readings().values():
                        print(reading.describe(), flush=True)
        except KeyboardInterrupt:
            logger.info("Interrupted; stopping early")
        coordinator.stop()
        path = coordinator.export_file()

    if path is None:
        print("No export file produced", file=sys.stderr)
        return 1
    print(path)
    return 0


def main(argv: list[str] | None = None) -> int:
    raw_argv = argv if argv is not None else sys.argv[1:]
    args = _build_arg_parser().parse_args(raw_argv)
    level = logging.WARNING - 10 * min(2, int(args.verbose))
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    return run(args)


if __name__ == "__main__":
    raise SystemExit(main())
