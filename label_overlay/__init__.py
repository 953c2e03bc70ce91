"""Single-label text visual with rotation-aware layout for PyQt6."""

from label_overlay.version import __version__  # noqa: F401
