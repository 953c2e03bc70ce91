"""Anchor, translation and padding selection for the text block (pure, no Qt)."""
from __future__ import annotations

from typing import Dict, Optional, Tuple

from label_overlay.layout_types import (
    AnchorOffset,
    Direction,
    HorizontalAlignment,
    PositionResult,
    Side,
    VerticalAlignment,
)

# Anchor percentage along the top edge of the host for each vertical alignment.
_CROSS_ANCHOR: Dict[VerticalAlignment, float] = {
    VerticalAlignment.TOP: 0.0,
    VerticalAlignment.MIDDLE: 50.0,
    VerticalAlignment.BOTTOM: 100.0,
}

# Sign applied to the cross-axis and along-axis translation. Mirrored modes are
# drawn rotated by 180 degrees, so their offsets point the other way.
_TRANSLATE_SIGN: Dict[Direction, float] = {
    Direction.HORIZONTAL_TB: -1.0,
    Direction.HORIZONTAL_BT: 1.0,
    Direction.VERTICAL_RL: -1.0,
    Direction.VERTICAL_LR: 1.0,
}

# (side when line indent >= 0, side when line indent < 0)
_PADDING_SIDES: Dict[Direction, Tuple[Side, Side]] = {
    Direction.HORIZONTAL_TB: (Side.TOP, Side.BOTTOM),
    Direction.HORIZONTAL_BT: (Side.BOTTOM, Side.TOP),
    Direction.VERTICAL_RL: (Side.RIGHT, Side.LEFT),
    Direction.VERTICAL_LR: (Side.LEFT, Side.RIGHT),
}

# Along-axis anchor for vertical text; left alignment already sits on the origin.
_ALONG_ANCHOR: Dict[HorizontalAlignment, Optional[float]] = {
    HorizontalAlignment.LEFT: None,
    HorizontalAlignment.CENTER: 50.0,
    HorizontalAlignment.RIGHT: 100.0,
}


def padding_for_indent(direction: Direction, line_indent: float) -> Tuple[Side, float]:
    """Pick the padding side from the indent sign and return its magnitude."""
    leading, trailing = _PADDING_SIDES[direction]
    indent = float(line_indent or 0.0)
    if indent >= 0:
        return leading, indent
    return trailing, -indent


def _solve_horizontal(
    direction: Direction,
    align_h: HorizontalAlignment,
    align_v: VerticalAlignment,
    line_indent: float,
) -> PositionResult:
    cross = _CROSS_ANCHOR[align_v]
    padding_side, padding_value = padding_for_indent(direction, line_indent)
    return PositionResult(
        translate_x_percent=0.0,
        translate_y_percent=_TRANSLATE_SIGN[direction] * cross if cross else 0.0,
        anchor=AnchorOffset(Side.TOP, cross),
        padding_side=padding_side,
        padding_value=padding_value,
        float_right=align_h is HorizontalAlignment.RIGHT,
        fit_content=align_h is not HorizontalAlignment.CENTER,
    )


def _solve_vertical(
    direction: Direction,
    align_h: HorizontalAlignment,
    align_v: VerticalAlignment,
    line_indent: float,
) -> PositionResult:
    sign = _TRANSLATE_SIGN[direction]
    cross = _CROSS_ANCHOR[align_v]
    along = _ALONG_ANCHOR[align_h]
    padding_side, padding_value = padding_for_indent(direction, line_indent)
    translate_x = sign * along if along else 0.0
    translate_y = sign * cross if cross else 0.0
    if along is None:
        anchor = AnchorOffset(Side.TOP, cross)
        secondary = None
    elif align_v is VerticalAlignment.TOP:
        anchor = AnchorOffset(Side.LEFT, along)
        secondary = None
    else:
        anchor = AnchorOffset(Side.TOP, cross)
        secondary = AnchorOffset(Side.LEFT, along)
    return PositionResult(
        translate_x_percent=translate_x,
        translate_y_percent=translate_y,
        anchor=anchor,
        padding_side=padding_side,
        padding_value=padding_value,
        secondary_anchor=secondary,
    )


_SOLVERS = {
    Direction.HORIZONTAL_TB: _solve_horizontal,
    Direction.HORIZONTAL_BT: _solve_horizontal,
    Direction.VERTICAL_RL: _solve_vertical,
    Direction.VERTICAL_LR: _solve_vertical,
}


def solve_position(
    direction: Direction,
    align_h: HorizontalAlignment,
    align_v: VerticalAlignment,
    line_indent: float,
) -> PositionResult:
    """Return translation, anchor and padding for one layout pass."""
    return _SOLVERS[direction](direction, align_h, align_v, line_indent)
