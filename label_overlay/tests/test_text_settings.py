from __future__ import annotations

import json

from label_overlay.layout_types import Direction, HorizontalAlignment, VerticalAlignment
from label_overlay.text_settings import (
    DynamicTextSettings,
    StaticTextSettings,
    TextSettings,
    VisualSettings,
    load_visual_settings,
)


def test_missing_payload_uses_defaults() -> None:
    settings = TextSettings.from_payload(None)

    assert settings == TextSettings()
    assert settings.font_size == 18.0
    assert settings.direction is Direction.HORIZONTAL_TB
    assert settings.rotation == 0.0


def test_payload_values_are_clamped() -> None:
    settings = TextSettings.from_payload(
        {
            "letterSpacing": 80,
            "wordSpacing": -10,
            "lineHeight": 75,
            "lineIndent": -10,
            "textIndent": -8,
            "textRotate": 400,
            "skewX": 720,
            "transparency": 150,
            "perspective": -4,
        }
    )

    assert settings.letter_spacing == 50.0
    assert settings.word_spacing == -3.0
    assert settings.line_height == 50.0
    assert settings.line_indent == -3.0
    assert settings.text_indent == -3.0
    assert settings.text_rotate == 360.0
    assert settings.skew_x == 360.0
    assert settings.transparency == 100.0
    assert settings.perspective == 0.0


def test_negative_rotation_clamps_to_zero() -> None:
    settings = TextSettings.from_payload({"textRotate": -45, "skewY": -10})

    assert settings.text_rotate == 0.0
    assert settings.skew_y == 0.0
    assert settings.rotation == 0.0


def test_enum_tokens_are_case_insensitive_with_fallback() -> None:
    settings = TextSettings.from_payload(
        {"alignment": "Right", "alignmentV": "BOTTOM", "direction": "sideways"}
    )

    assert settings.alignment is HorizontalAlignment.RIGHT
    assert settings.alignment_v is VerticalAlignment.BOTTOM
    assert settings.direction is Direction.HORIZONTAL_TB


def test_invalid_numbers_fall_back() -> None:
    settings = TextSettings.from_payload({"fontSize": "huge", "textRotate": "spin"})

    assert settings.font_size == 18.0
    assert settings.text_rotate is None


def test_color_accepts_fill_objects() -> None:
    settings = TextSettings.from_payload({"color": {"solid": {"color": "#336699"}}})
    assert settings.color == "#336699"

    fallback = TextSettings.from_payload({"color": "not-a-colour"})
    assert fallback.color == "#000000"


def test_static_text_options() -> None:
    static = StaticTextSettings.from_payload(
        {
            "postText": "Revenue",
            "showColon": "false",
            "textPosition": "suffix",
            "italicStyle": True,
            "textShadow": "bottomRight",
            "textShadowBlur": "extreme",
        }
    )

    assert static.post_text == "Revenue"
    assert static.show_colon is False
    assert static.text_position == "suffix"
    assert static.italic is True
    assert static.text_shadow == "bottomRight"
    assert static.text_shadow_blur == "low"


def test_dynamic_text_ignores_unknown_transform() -> None:
    dynamic = DynamicTextSettings.from_payload({"textTransform": "sparkle", "boldStyle": 1})

    assert dynamic.text_transform == ""
    assert dynamic.bold is True


def test_visual_settings_reads_all_sections() -> None:
    visual = VisualSettings.from_payload(
        {
            "textSettings": {"fontSize": 24, "direction": "vertical-rl"},
            "staticText": {"postText": "Units"},
            "Settings": {"fontFamily": "Arial"},
        }
    )

    assert visual.text.font_size == 24.0
    assert visual.text.direction is Direction.VERTICAL_RL
    assert visual.static.post_text == "Units"
    assert visual.dynamic.font_family == "Arial"


def test_load_visual_settings_missing_file(tmp_path) -> None:
    assert load_visual_settings(tmp_path / "absent.json") == VisualSettings()


def test_load_visual_settings_invalid_json(tmp_path) -> None:
    path = tmp_path / "settings.json"
    path.write_text("{not json", encoding="utf-8")

    assert load_visual_settings(path) == VisualSettings()


def test_load_visual_settings_reads_file(tmp_path) -> None:
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"textSettings": {"textRotate": 30}}), encoding="utf-8")

    visual = load_visual_settings(path)

    assert visual.text.rotation == 30.0
