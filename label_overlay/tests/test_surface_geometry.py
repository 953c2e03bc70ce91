from __future__ import annotations

import math
from dataclasses import dataclass

import pytest

from label_overlay.layout_engine import solve_layout
from label_overlay.layout_types import Direction, HorizontalAlignment, MeasuredBox, VerticalAlignment
from label_overlay.surface_geometry import (
    SKEW_FACTOR_LIMIT,
    MeasuredText,
    box_placement,
    measure_fragments,
    skew_factor,
)
from label_overlay.text_settings import TextSettings


@dataclass(frozen=True)
class _Fragment:
    text: str
    font_size_px: float = 12.0
    padding_left: float = 0.0


def _fake_measurer(fragment: _Fragment) -> MeasuredText:
    return MeasuredText(width=10.0 * len(fragment.text), ascent=9.0, descent=3.0)


def test_measure_sums_widths_and_padding() -> None:
    fragments = [_Fragment("abc"), _Fragment(" : ", padding_left=4.0), _Fragment("de")]

    measured = measure_fragments(fragments, _fake_measurer)

    assert measured.width == 84.0
    assert measured.height == 12.0
    assert measured.content_width == 84.0


def test_measure_swaps_axes_for_vertical_writing() -> None:
    measured = measure_fragments([_Fragment("abcd")], _fake_measurer, vertical=True)

    assert measured.width == 12.0
    assert measured.height == 40.0


def test_line_height_grows_the_line_box() -> None:
    measured = measure_fragments([_Fragment("ab", font_size_px=24.0)], _fake_measurer, line_height_factor=1.6)

    assert measured.height == pytest.approx(38.4)


def test_centered_middle_box_is_stretched_and_pulled_up() -> None:
    settings = TextSettings(
        alignment=HorizontalAlignment.CENTER,
        alignment_v=VerticalAlignment.MIDDLE,
        line_indent=5.0,
    )
    box = MeasuredBox(width=100.0, height=20.0)
    layout = solve_layout(settings, box)

    placement = box_placement(layout, (400, 200), box)

    assert placement.x == 0.0
    assert placement.y == 100.0
    assert placement.width == 400.0
    assert placement.height == 25.0
    assert placement.text_x == 150.0
    assert placement.text_y == 5.0
    assert placement.translate_y == pytest.approx(-12.5)
    assert placement.pivot == (200.0, 12.5)


def test_right_aligned_box_floats_to_the_right_edge() -> None:
    box = MeasuredBox(width=100.0, height=20.0)
    layout = solve_layout(TextSettings(alignment=HorizontalAlignment.RIGHT), box)

    placement = box_placement(layout, (400, 200), box)

    assert placement.x == 300.0
    assert placement.y == 0.0
    assert placement.width == 100.0


def test_vertical_right_box_is_anchored_on_the_right() -> None:
    box = MeasuredBox(width=20.0, height=100.0)
    layout = solve_layout(TextSettings(alignment=HorizontalAlignment.RIGHT, direction=Direction.VERTICAL_RL), box)

    placement = box_placement(layout, (400, 200), box)

    assert placement.x == 400.0
    assert placement.translate_x == -20.0
    assert placement.translate_y == 0.0


def test_margins_shift_the_box() -> None:
    box = MeasuredBox(width=200.0, height=30.0)
    layout = solve_layout(TextSettings(text_rotate=90.0), box)

    placement = box_placement(layout, (400, 200), box)

    assert placement.y == pytest.approx(100.0)


def test_skew_factor() -> None:
    assert skew_factor(0.0) == 0.0
    assert skew_factor(45.0) == pytest.approx(1.0)
    assert skew_factor(90.0) == SKEW_FACTOR_LIMIT
    assert skew_factor(180.0) == pytest.approx(0.0, abs=1e-9)
    assert math.isfinite(skew_factor(89.999))
