from __future__ import annotations

from label_overlay.layout_types import Direction
from label_overlay.property_pane import enumerate_object_instances
from label_overlay.text_settings import DynamicTextSettings, StaticTextSettings, TextSettings


def _enumerate(name, text=None, static=None, dynamic=None):
    return enumerate_object_instances(
        name,
        text or TextSettings(),
        static or StaticTextSettings(),
        dynamic or DynamicTextSettings(),
    )


def test_text_settings_instance() -> None:
    instances = _enumerate("textSettings", text=TextSettings(direction=Direction.VERTICAL_LR, text_rotate=15.0))

    assert len(instances) == 1
    instance = instances[0]
    assert instance["objectName"] == "textSettings"
    assert instance["selector"] is None
    assert instance["properties"]["direction"] == "vertical-lr"
    assert instance["properties"]["textRotate"] == 15.0
    assert instance["properties"]["fontSize"] == 18.0


def test_static_text_hides_shadow_details_without_shadow() -> None:
    properties = _enumerate("staticText")[0]["properties"]

    assert properties["textShadow"] == "none"
    assert "textShadowBlur" not in properties
    assert "textShadowColor" not in properties
    assert properties["showColon"] is True
    assert properties["textPosition"] == "prefix"


def test_static_text_lists_shadow_details_with_shadow() -> None:
    static = StaticTextSettings(text_shadow="topLeft", text_shadow_blur="high")

    properties = _enumerate("staticText", static=static)[0]["properties"]

    assert properties["textShadowBlur"] == "high"
    assert properties["textShadowColor"] == "#000000"


def test_dynamic_settings_have_no_label_fields() -> None:
    properties = _enumerate("Settings", dynamic=DynamicTextSettings(text_shadow="bottomCenter"))[0]["properties"]

    assert "postText" not in properties
    assert "showColon" not in properties
    assert properties["textShadowBlur"] == "low"


def test_unknown_object_is_empty() -> None:
    assert _enumerate("legend") == []
