"""Version identifier and dev-mode switch for Label Overlay."""
from __future__ import annotations

import os
from typing import Optional

__version__ = "1.2.0"
DEV_MODE_ENV_VAR = "LABEL_OVERLAY_DEV_MODE"

_TRUE_TOKENS = {"1", "true", "yes", "on"}
_FALSE_TOKENS = {"0", "false", "no", "off"}


def is_dev_build(version: Optional[str] = None) -> bool:
    """True when ``LABEL_OVERLAY_DEV_MODE`` says so, else when the version carries a dev tag."""
    override = (os.getenv(DEV_MODE_ENV_VAR) or "").strip().lower()
    if override in _TRUE_TOKENS:
        return True
    if override in _FALSE_TOKENS:
        return False
    identifier = (version or __version__).lower()
    return identifier.endswith("-dev") or ".dev" in identifier
