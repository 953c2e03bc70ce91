"""Helpers translating fragment styling into paint parameters."""
from __future__ import annotations

from typing import Any, Optional, Tuple

from PyQt6.QtGui import QColor

from label_overlay.text_settings import FragmentStyle, TRANSPARENCY_MAX

PX_PER_POINT = 4.0 / 3.0
DEFAULT_LINE_HEIGHT = 1.6
SHADOW_OFFSET_PX = 2

_SHADOW_OFFSETS = {
    "topLeft": (-SHADOW_OFFSET_PX, -SHADOW_OFFSET_PX),
    "topCenter": (0, -SHADOW_OFFSET_PX),
    "topRight": (SHADOW_OFFSET_PX, -SHADOW_OFFSET_PX),
    "middleLeft": (-SHADOW_OFFSET_PX, 0),
    "middleCenter": (0, 0),
    "middleRight": (SHADOW_OFFSET_PX, 0),
    "bottomLeft": (-SHADOW_OFFSET_PX, SHADOW_OFFSET_PX),
    "bottomCenter": (0, SHADOW_OFFSET_PX),
    "bottomRight": (SHADOW_OFFSET_PX, SHADOW_OFFSET_PX),
}
_SHADOW_BLUR = {"low": 2, "medium": 8, "high": 14}


def point_to_pixel(points: float) -> float:
    return float(points) * PX_PER_POINT


def line_height_factor(line_height: Optional[float]) -> float:
    if not line_height:
        return DEFAULT_LINE_HEIGHT
    return float(line_height)


def coerce_transparency(value: Any) -> float:
    try:
        numeric = float(value)
    except (TypeError, ValueError):
        return 0.0
    return max(0.0, min(numeric, TRANSPARENCY_MAX))


def shadow_offsets(position: str) -> Optional[Tuple[int, int]]:
    """Return the (dx, dy) pixel offset for a shadow position, None when there is no shadow."""
    return _SHADOW_OFFSETS.get(position)


def shadow_blur_radius(blur: str) -> int:
    return _SHADOW_BLUR.get(blur, 0)


def decoration_flags(style: FragmentStyle) -> Tuple[str, ...]:
    flags = []
    if style.underline:
        flags.append("underline")
    if style.overline:
        flags.append("overline")
    if style.strike_through:
        flags.append("line-through")
    return tuple(flags)


def apply_text_transform(text: str, transform: str) -> str:
    if transform == "uppercase":
        return text.upper()
    if transform == "lowercase":
        return text.lower()
    if transform == "capitalize":
        # Only the first letter of each word changes; the rest keeps its case.
        return " ".join(word[:1].upper() + word[1:] for word in text.split(" "))
    return text


def qcolor_with_transparency(color: str, transparency: Any) -> QColor:
    qcolor = QColor(color)
    if not qcolor.isValid():
        return qcolor
    opacity = TRANSPARENCY_MAX - coerce_transparency(transparency)
    qcolor.setAlpha(int(round((opacity / TRANSPARENCY_MAX) * 255)))
    return qcolor
