"""Runtime configuration for the recorder: network sink, decimation, sampling."""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path
from typing import Any, Mapping, MutableMapping, Optional

import yaml


@dataclass(slots=True)
class MotionConfig:
    """
    Tuning knobs for how samples are recorded and forwarded.

    ``server_url`` is the collector base URL; ``None`` disables network
    forwarding without affecting local recording.
    """

    server_url: Optional[str] = None
    send_interval: int = 5
    request_timeout_s: float = 2.0
    send_queue_size: int = 256

    # Synthetic/replay sensor pacing
    sensor_rate_hz: float = 100.0

    export_dir: Optional[str] = None

    def sanitized(self) -> MotionConfig:
        """Return a copy with derived limits applied."""
        url = self.server_url
        if url is not None:
            url = str(url).strip() or None
        export_dir = self.export_dir
        if export_dir is not None:
            export_dir = str(export_dir).strip() or None
        return MotionConfig(
            server_url=url,
            send_interval=max(1, int(self.send_interval)),
            request_timeout_s=max(0.05, float(self.request_timeout_s)),
            send_queue_size=max(1, int(self.send_queue_size)),
            sensor_rate_hz=max(1.0, float(self.sensor_rate_hz)),
            export_dir=export_dir,
        )

    def with_server_url(self, url: Optional[str]) -> MotionConfig:
        return replace(self, server_url=url).sanitized()

    def to_mapping(self) -> dict:
        return {"recorder": asdict(self)}


def _recognized_fields() -> set[str]:
    """Return the dataclass field names accepted by :class:`MotionConfig`."""
    return {f.name for f in fields(MotionConfig)}


def _normalize_mapping(data: Mapping[str, Any]) -> MutableMapping[str, Any]:
    """Flatten a top-level ``recorder`` block into the outer mapping."""
    if "recorder" in data and isinstance(data["recorder"], Mapping):
        merged: MutableMapping[str, Any] = {}
        for key, value in data.items():
            if key == "recorder":
                merged.update(value)
            else:
                merged[key] = value
        return merged
    return dict(data)


def config_from_mapping(data: Mapping[str, Any] | None) -> MotionConfig:
    """Build :class:`MotionConfig` from ``data`` (ignoring unknown keys)."""
    if not data:
        return MotionConfig()
    normalized = _normalize_mapping(data)
    known = _recognized_fields()
    payload = {key: normalized[key] for key in normalized.keys() & known}
    return MotionConfig(**payload).sanitized()


def load_config(path: str | Path | None) -> MotionConfig:
    """
    Load configuration from ``path``.

    Missing files fall back to default :class:`MotionConfig`.
    """
    if path is None:
        return MotionConfig()
    cfg_path = Path(path)
    if not cfg_path.exists():
        return MotionConfig()
    with cfg_path.open("r", encoding="utf-8") as fh:
        raw = yaml.safe_load(fh) or {}
    if not isinstance(raw, Mapping):
        raise ValueError(f"Expected mapping in {cfg_path}, got {type(raw).__name__}")
    return config_from_mapping(raw)


def save_config(path: str | Path, cfg: MotionConfig) -> None:
    """Write ``cfg`` as YAML under a ``recorder`` block."""
    cfg_path = Path(path)
    cfg_path.parent.mkdir(parents=True, exist_ok=True)
    with cfg_path.open("w", encoding="utf-8") as fh:
        yaml.safe_dump(cfg.to_mapping(), fh, default_flow_style=False, sort_keys=False)


__all__ = ["MotionConfig", "config_from_mapping", "load_config", "save_config"]
