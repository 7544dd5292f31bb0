"""Configuration objects and helpers for the motion recorder.

:mod:`runtime` loads/saves the YAML descriptor (collector URL, send interval,
sensor pacing) into a typed :class:`MotionConfig`; :mod:`app_config` knows
where exports land on disk.
"""

from .app_config import AppPaths
from .runtime import MotionConfig, config_from_mapping, load_config, save_config

__all__ = ["AppPaths", "MotionConfig", "config_from_mapping", "load_config", "save_config"]
