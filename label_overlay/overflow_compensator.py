"""Margin corrections that keep a rotated text block on its anchor (pure, no Qt).

Rotating the block about its centre swings its corners past the unrotated
bounding box. Each branch below estimates how far the visual centre drifts
from the anchor for one vertical alignment and writing axis, and returns the
opposite margin. Mirrored directions (``horizontal-bt`` and ``vertical-lr``)
are folded by 180 degrees onto their partner mode before any formula runs.
"""
from __future__ import annotations

import math
from typing import Callable, Dict, Optional, Tuple

from label_overlay.layout_types import (
    ZERO_CORRECTION,
    Direction,
    HorizontalAlignment,
    MarginCorrection,
    VerticalAlignment,
)

FULL_TURN = 360.0
HALF_TURN = 180.0
QUARTER_TURN = 90.0
THREE_QUARTER_TURN = 270.0
# Trailing-edge multiplier for bottom-aligned vertical text.
TRAILING_EDGE_FACTOR = 1.5
# Decimal places kept after folding; a mirrored fold and its partner land on the same float.
ROTATION_PRECISION = 9


def _sin(degrees: float) -> float:
    return math.sin(math.radians(degrees))


def reduce_rotation(direction: Direction, rotation_degrees: float) -> float:
    """Return the effective rotation magnitude in [0, 360)."""
    magnitude = abs(float(rotation_degrees))
    if direction.is_mirrored:
        magnitude -= HALF_TURN
    return round(magnitude % FULL_TURN, ROTATION_PRECISION) % FULL_TURN


def vertical_drift(rho: float, height: float) -> float:
    """Distance the box centre moves along the cross axis after turning by ``rho``."""
    if 0.0 < rho <= QUARTER_TURN:
        return (height - height * _sin(QUARTER_TURN - rho)) / 2.0
    if QUARTER_TURN < rho <= THREE_QUARTER_TURN:
        return (height + height * _sin(rho - QUARTER_TURN)) / 2.0
    if THREE_QUARTER_TURN < rho < FULL_TURN:
        return (height - height * _sin(rho % THREE_QUARTER_TURN)) / 2.0
    return 0.0


def sweep_buffer(rho: float, dimension: float) -> float:
    """Extra sweep of the trailing corner, growing to the half turn and back."""
    if rho < HALF_TURN:
        return (rho / 100.0 * 2.0) * dimension
    return ((FULL_TURN - rho) / 100.0 * 2.0) * dimension


def _horizontal_span(align_h: HorizontalAlignment, width: float, content_width: Optional[float]) -> float:
    # Centred horizontal text stretches to the host; only the glyph run turns.
    if align_h is HorizontalAlignment.CENTER and content_width is not None:
        return content_width
    return width


_Branch = Callable[[HorizontalAlignment, float, float, float, float, Optional[float]], MarginCorrection]


def _top_horizontal(align_h, rho, width, height, font_size, content_width) -> MarginCorrection:
    span = _horizontal_span(align_h, width, content_width)
    return MarginCorrection(margin_top=(span / 2.0) * _sin(rho % HALF_TURN))


def _top_vertical(align_h, rho, width, height, font_size, content_width) -> MarginCorrection:
    swing = (height / 2.0) * _sin(rho % HALF_TURN)
    if align_h is HorizontalAlignment.LEFT:
        return MarginCorrection(margin_left=swing)
    if align_h is HorizontalAlignment.RIGHT:
        return MarginCorrection(margin_left=-(swing + sweep_buffer(rho, font_size)))
    return ZERO_CORRECTION


def _middle_horizontal(align_h, rho, width, height, font_size, content_width) -> MarginCorrection:
    # The anchor is the box centre, which the rotation leaves in place.
    return ZERO_CORRECTION


def _middle_vertical(align_h, rho, width, height, font_size, content_width) -> MarginCorrection:
    margin_top = -vertical_drift(rho, height)
    if align_h is HorizontalAlignment.CENTER:
        half_swing = height * abs(_sin(rho)) / 2.0
        return MarginCorrection(
            margin_top=margin_top,
            margin_left=-half_swing if rho < HALF_TURN else half_swing,
        )
    if align_h is HorizontalAlignment.LEFT:
        swings = HALF_TURN < rho < FULL_TURN
    else:
        swings = 0.0 < rho < HALF_TURN
    swing = height * -_sin(rho) if swings else 0.0
    return MarginCorrection(margin_top=margin_top, margin_left=swing - sweep_buffer(rho, width))


def _bottom_horizontal(align_h, rho, width, height, font_size, content_width) -> MarginCorrection:
    span = _horizontal_span(align_h, width, content_width)
    lift = (span / 2.0) * _sin(rho % HALF_TURN) + sweep_buffer(rho, font_size)
    return MarginCorrection(margin_top=-lift)


def _bottom_vertical(align_h, rho, width, height, font_size, content_width) -> MarginCorrection:
    if align_h is HorizontalAlignment.CENTER:
        swing = height * abs(_sin(rho))
        return MarginCorrection(
            margin_top=-2.0 * vertical_drift(rho, height),
            margin_left=-swing if rho < HALF_TURN else swing,
        )
    if rho <= HALF_TURN:
        factor = -_sin(rho % HALF_TURN)
        leading = align_h is HorizontalAlignment.LEFT
    else:
        factor = _sin(rho % HALF_TURN)
        leading = align_h is HorizontalAlignment.RIGHT
    if leading:
        margin_left = (height * factor) / 2.0
    else:
        margin_left = (TRAILING_EDGE_FACTOR * height) * factor
    if align_h is HorizontalAlignment.RIGHT:
        margin_left -= sweep_buffer(rho, font_size)
    return MarginCorrection(margin_left=margin_left)


_BRANCHES: Dict[Tuple[VerticalAlignment, bool], _Branch] = {
    (VerticalAlignment.TOP, False): _top_horizontal,
    (VerticalAlignment.TOP, True): _top_vertical,
    (VerticalAlignment.MIDDLE, False): _middle_horizontal,
    (VerticalAlignment.MIDDLE, True): _middle_vertical,
    (VerticalAlignment.BOTTOM, False): _bottom_horizontal,
    (VerticalAlignment.BOTTOM, True): _bottom_vertical,
}


def compensate_overflow(
    direction: Direction,
    align_h: HorizontalAlignment,
    align_v: VerticalAlignment,
    rotation_degrees: float,
    measured_width: float,
    measured_height: float,
    font_size: float,
    content_width: Optional[float] = None,
) -> MarginCorrection:
    """Return the margins that re-centre a block turned by ``rotation_degrees``.

    ``rotation_degrees`` is the final rotation, including the 180 degree base
    of mirrored directions. ``content_width`` is the summed width of the text
    runs and only matters for centred horizontal text.
    """
    if rotation_degrees == 0:
        return ZERO_CORRECTION
    if measured_width <= 0.0 and measured_height <= 0.0:
        return ZERO_CORRECTION
    rho = reduce_rotation(direction, rotation_degrees)
    branch = _BRANCHES[(align_v, direction.is_vertical)]
    return branch(
        align_h,
        rho,
        float(measured_width),
        float(measured_height),
        float(font_size),
        None if content_width is None else float(content_width),
    )
