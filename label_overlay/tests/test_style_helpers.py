from __future__ import annotations

import pytest

from label_overlay.style_helpers import (
    apply_text_transform,
    decoration_flags,
    line_height_factor,
    point_to_pixel,
    qcolor_with_transparency,
    shadow_blur_radius,
    shadow_offsets,
)
from label_overlay.text_settings import DynamicTextSettings, StaticTextSettings


def test_point_to_pixel() -> None:
    assert point_to_pixel(18) == pytest.approx(24.0)
    assert point_to_pixel(0) == 0.0


def test_shadow_offsets_and_blur() -> None:
    assert shadow_offsets("none") is None
    assert shadow_offsets("topLeft") == (-2, -2)
    assert shadow_offsets("middleCenter") == (0, 0)
    assert shadow_offsets("bottomRight") == (2, 2)
    assert shadow_blur_radius("low") == 2
    assert shadow_blur_radius("medium") == 8
    assert shadow_blur_radius("high") == 14
    assert shadow_blur_radius("unknown") == 0


def test_decorations() -> None:
    style = StaticTextSettings(underline=True, strike_through=True, bold=True)

    assert decoration_flags(style) == ("underline", "line-through")
    assert decoration_flags(DynamicTextSettings()) == ()


def test_text_transforms() -> None:
    assert apply_text_transform("hello world", "uppercase") == "HELLO WORLD"
    assert apply_text_transform("Hello World", "lowercase") == "hello world"
    assert apply_text_transform("hello mcDonald", "capitalize") == "Hello McDonald"
    assert apply_text_transform("as is", "") == "as is"


def test_line_height_defaults() -> None:
    assert line_height_factor(None) == 1.6
    assert line_height_factor(0) == 1.6
    assert line_height_factor(2) == 2.0


def test_qcolor_with_transparency() -> None:
    color = qcolor_with_transparency("#ff0000", 50)

    assert color.red() == 255
    assert color.alpha() == 128
    assert qcolor_with_transparency("#00ff00", None).alpha() == 255
    assert qcolor_with_transparency("#0000ff", "junk").alpha() == 255
