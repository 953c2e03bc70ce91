"""Property dictionaries reported back to the host's formatting pane."""
from __future__ import annotations

from typing import Any, Dict, List

from label_overlay.text_settings import (
    DynamicTextSettings,
    FragmentStyle,
    StaticTextSettings,
    TextSettings,
)

TEXT_OBJECT = "textSettings"
STATIC_OBJECT = "staticText"
DYNAMIC_OBJECT = "Settings"


def _text_properties(text: TextSettings) -> Dict[str, Any]:
    return {
        "alignment": text.alignment.value,
        "alignmentV": text.alignment_v.value,
        "color": text.color,
        "direction": text.direction.value,
        "fontSize": text.font_size,
        "letterSpacing": text.letter_spacing,
        "lineHeight": text.line_height,
        "lineIndent": text.line_indent,
        "perspective": text.perspective,
        "skewX": text.skew_x,
        "skewY": text.skew_y,
        "textIndent": text.text_indent,
        "textRotate": text.text_rotate,
        "transparency": text.transparency,
        "wordSpacing": text.word_spacing,
    }


def _style_properties(style: FragmentStyle) -> Dict[str, Any]:
    properties: Dict[str, Any] = {
        "backgroundColor": style.background_color,
        "boldStyle": style.bold,
        "fontFamily": style.font_family,
        "italicStyle": style.italic,
        "overline": style.overline,
        "strikeThrough": style.strike_through,
        "textShadow": style.text_shadow,
        "textTransform": style.text_transform,
        "transparency": style.transparency,
        "underline": style.underline,
    }
    # Blur and colour are only meaningful once a shadow position is chosen.
    if style.text_shadow != "none":
        properties["textShadowBlur"] = style.text_shadow_blur
        properties["textShadowColor"] = style.text_shadow_color
    return properties


def enumerate_object_instances(
    object_name: str,
    text: TextSettings,
    static: StaticTextSettings,
    dynamic: DynamicTextSettings,
) -> List[Dict[str, Any]]:
    if object_name == TEXT_OBJECT:
        properties = _text_properties(text)
    elif object_name == STATIC_OBJECT:
        properties = _style_properties(static)
        properties.update(
            postText=static.post_text,
            showColon=static.show_colon,
            textPosition=static.text_position,
        )
    elif object_name == DYNAMIC_OBJECT:
        properties = _style_properties(dynamic)
    else:
        return []
    return [{"objectName": object_name, "properties": properties, "selector": None}]
