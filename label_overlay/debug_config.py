"""Debug configuration loader for layout tracing."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from label_overlay.version import DEV_MODE_ENV_VAR, __version__, is_dev_build

_LOGGER_NAME = "LabelOverlay.Client"
_CLIENT_LOGGER = logging.getLogger(_LOGGER_NAME)

DEBUG_CONFIG_ENABLED = is_dev_build(__version__)
LOG_RETENTION_MIN = 1
LOG_RETENTION_MAX = 20

__all__ = ["DEBUG_CONFIG_ENABLED", "DEV_MODE_ENV_VAR", "DebugConfig", "load_debug_config"]


@dataclass(frozen=True)
class DebugConfig:
    trace_layout: bool = False
    log_retention: Optional[int] = None


def _coerce_log_retention(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    try:
        numeric = int(value)
    except (TypeError, ValueError):
        return None
    if numeric <= 0:
        return LOG_RETENTION_MIN
    if numeric > LOG_RETENTION_MAX:
        return LOG_RETENTION_MAX
    return numeric


def load_debug_config(path: Path, *, enabled: Optional[bool] = None) -> DebugConfig:
    """Read debug.json; release builds ignore tracing but honour log retention."""

    if enabled is None:
        enabled = DEBUG_CONFIG_ENABLED
    try:
        raw_text = path.read_text(encoding="utf-8")
    except (FileNotFoundError, OSError):
        return DebugConfig()
    try:
        data = json.loads(raw_text)
    except json.JSONDecodeError as exc:
        _CLIENT_LOGGER.warning("Ignoring malformed debug config %s: %s", path, exc)
        return DebugConfig()
    if not isinstance(data, dict):
        return DebugConfig()

    tracing_section = data.get("tracing")
    if isinstance(tracing_section, dict):
        trace_layout = bool(tracing_section.get("layout", False))
    else:
        trace_layout = bool(data.get("trace_layout", False))

    return DebugConfig(
        trace_layout=trace_layout and enabled,
        log_retention=_coerce_log_retention(data.get("log_retention")),
    )
