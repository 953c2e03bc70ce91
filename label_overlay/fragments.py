"""Ordering of the static label, separator and dynamic value into paintable runs."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from label_overlay.style_helpers import apply_text_transform, point_to_pixel
from label_overlay.text_settings import DynamicTextSettings, FragmentStyle, StaticTextSettings

COLON_SEPARATOR = " : "
SPACE_SEPARATOR = " "
ITALIC_SEPARATOR_PADDING = 4.0


class FragmentRole(str, Enum):
    STATIC = "static"
    DYNAMIC = "dynamic"
    SEPARATOR = "separator"


@dataclass(frozen=True)
class TextFragment:
    text: str
    role: FragmentRole
    font_size_px: float
    style: Optional[FragmentStyle] = None
    padding_left: float = 0.0
    url: Optional[str] = None

    @property
    def is_link(self) -> bool:
        return self.role is FragmentRole.DYNAMIC and bool(self.url)


def _static(label: str, static: StaticTextSettings, size_px: float) -> TextFragment:
    return TextFragment(
        text=apply_text_transform(label, static.text_transform),
        role=FragmentRole.STATIC,
        font_size_px=size_px,
        style=static,
    )


def _dynamic(value: str, dynamic: DynamicTextSettings, size_px: float, url: Optional[str]) -> TextFragment:
    return TextFragment(
        text=apply_text_transform(value, dynamic.text_transform),
        role=FragmentRole.DYNAMIC,
        font_size_px=size_px,
        style=dynamic,
        url=url,
    )


def build_fragments(
    label: str,
    value: str,
    static: StaticTextSettings,
    dynamic: DynamicTextSettings,
    font_size: float,
    url: Optional[str] = None,
) -> List[TextFragment]:
    """Return the runs in paint order for a label/value pair.

    The label leads unless ``static.text_position`` is ``suffix``. With an
    empty label only the value is shown.
    """
    size_px = point_to_pixel(font_size)
    value_fragment = _dynamic(value, dynamic, size_px, url)
    if not label:
        return [value_fragment]
    label_fragment = _static(label, static, size_px)
    if static.text_position == "suffix":
        leading, trailing = value_fragment, label_fragment
    else:
        leading, trailing = label_fragment, value_fragment
    if static.show_colon:
        padding = ITALIC_SEPARATOR_PADDING if leading.style is not None and leading.style.italic else 0.0
        separator = TextFragment(
            text=COLON_SEPARATOR,
            role=FragmentRole.SEPARATOR,
            font_size_px=size_px,
            padding_left=padding,
        )
    else:
        separator = TextFragment(text=SPACE_SEPARATOR, role=FragmentRole.SEPARATOR, font_size_px=size_px)
    return [leading, separator, trailing]
