"""Map a layout result onto container pixels (pure, no Qt)."""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Callable, Sequence, Tuple

from label_overlay.layout_types import HorizontalAlignment, LayoutResult, MeasuredBox, Side

# tan(89 degrees); skews closer to a quarter turn collapse the run to a line.
SKEW_FACTOR_LIMIT = math.tan(math.radians(89.0))


@dataclass(frozen=True)
class BoxPlacement:
    """Outer box in container coordinates plus the glyph-run origin inside it."""

    x: float
    y: float
    width: float
    height: float
    text_x: float
    text_y: float
    translate_x: float
    translate_y: float

    @property
    def pivot(self) -> Tuple[float, float]:
        return self.width / 2.0, self.height / 2.0


@dataclass(frozen=True)
class MeasuredText:
    width: float
    ascent: float
    descent: float

    @property
    def height(self) -> float:
        return self.ascent + self.descent


def measure_fragments(
    fragments: Sequence[Any],
    measurer: Callable[[Any], MeasuredText],
    vertical: bool = False,
    line_height_factor: float = 0.0,
) -> MeasuredBox:
    """Measure a run of fragments laid end to end.

    The run is as long as the summed advances (plus separator padding) and as
    tall as its tallest line box. Vertical writing turns the run on its side.
    """
    run_width = 0.0
    run_height = 0.0
    for fragment in fragments:
        measured = measurer(fragment)
        run_width += max(0.0, float(measured.width)) + float(getattr(fragment, "padding_left", 0.0) or 0.0)
        line_box = float(line_height_factor) * float(getattr(fragment, "font_size_px", 0.0) or 0.0)
        run_height = max(run_height, float(measured.height), line_box)
    if vertical:
        return MeasuredBox(width=run_height, height=run_width, content_width=run_height)
    return MeasuredBox(width=run_width, height=run_height, content_width=run_width)


def skew_factor(degrees: float) -> float:
    """Return tan(degrees) clamped so near-vertical skews stay finite."""
    if not degrees:
        return 0.0
    factor = math.tan(math.radians(degrees))
    return max(-SKEW_FACTOR_LIMIT, min(SKEW_FACTOR_LIMIT, factor))


def _padded_size(layout: LayoutResult, box: MeasuredBox) -> Tuple[float, float, float, float]:
    width, height = float(box.width), float(box.height)
    text_x = text_y = 0.0
    padding = float(layout.padding_value)
    if layout.padding_side in (Side.LEFT, Side.RIGHT):
        width += padding
        if layout.padding_side is Side.LEFT:
            text_x = padding
    else:
        height += padding
        if layout.padding_side is Side.TOP:
            text_y = padding
    return width, height, text_x, text_y


def box_placement(layout: LayoutResult, container: Tuple[float, float], box: MeasuredBox) -> BoxPlacement:
    container_width, container_height = (float(value) for value in container)
    width, height, text_x, text_y = _padded_size(layout, box)

    x = 0.0
    y = 0.0
    anchors = [(layout.anchor_side, layout.anchor_value_percent)]
    if layout.secondary_anchor is not None:
        anchors.append((layout.secondary_anchor.side, layout.secondary_anchor.percent))
    for side, percent in anchors:
        if side is Side.LEFT:
            x = container_width * percent / 100.0
        elif side is Side.TOP:
            y = container_height * percent / 100.0

    if layout.float_right:
        x = container_width - width
    elif not layout.fit_content:
        # Stretched block: the run is aligned inside the full container width.
        stretched = max(container_width, width)
        if layout.text_align is HorizontalAlignment.CENTER:
            text_x += (stretched - width) / 2.0
        elif layout.text_align is HorizontalAlignment.RIGHT:
            text_x += stretched - width
        width = stretched

    return BoxPlacement(
        x=x + layout.margin_left,
        y=y + layout.margin_top,
        width=width,
        height=height,
        text_x=text_x,
        text_y=text_y,
        translate_x=width * layout.translate_x_percent / 100.0,
        translate_y=height * layout.translate_y_percent / 100.0,
    )
