"""Settings records for the label visual, resolved from host configuration payloads."""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Mapping, Optional, Type, TypeVar

from label_overlay.layout_types import Direction, HorizontalAlignment, VerticalAlignment

_LOGGER_NAME = "LabelOverlay.Client"
_CLIENT_LOGGER = logging.getLogger(_LOGGER_NAME)

DEGREE_LIMIT = 360.0
SPACING_MIN = -3.0
SPACING_MAX = 50.0
LINE_HEIGHT_MAX = 50.0
INDENT_MIN = -3.0
TRANSPARENCY_MAX = 100.0

SHADOW_POSITIONS = {
    "none",
    "topLeft",
    "topCenter",
    "topRight",
    "middleLeft",
    "middleCenter",
    "middleRight",
    "bottomLeft",
    "bottomCenter",
    "bottomRight",
}
SHADOW_BLURS = {"low", "medium", "high"}
TEXT_POSITIONS = {"prefix", "suffix"}
TEXT_TRANSFORMS = {"", "none", "uppercase", "lowercase", "capitalize"}

_E = TypeVar("_E", bound=Enum)


def _float(value: Any, fallback: Optional[float]) -> Optional[float]:
    if value is None:
        return fallback
    try:
        return float(value)
    except (TypeError, ValueError):
        return fallback


def _clamp(value: Optional[float], lower: Optional[float] = None, upper: Optional[float] = None) -> Optional[float]:
    if value is None:
        return None
    if lower is not None and value < lower:
        return lower
    if upper is not None and value > upper:
        return upper
    return value


def _bool(value: Any, fallback: bool) -> bool:
    if value is None:
        return fallback
    if isinstance(value, str):
        token = value.strip().lower()
        if token in {"1", "true", "yes", "on"}:
            return True
        if token in {"0", "false", "no", "off", ""}:
            return False
        return fallback
    return bool(value)


def _str(value: Any, fallback: str) -> str:
    if value is None:
        return fallback
    try:
        return str(value)
    except Exception:
        return fallback


def _choice(value: Any, choices: set, fallback: str, name: str) -> str:
    if value is None:
        return fallback
    token = _str(value, fallback).strip()
    if token in choices:
        return token
    _CLIENT_LOGGER.warning("Ignoring unsupported %s '%s'; using '%s'", name, token, fallback)
    return fallback


def _enum(enum_type: Type[_E], value: Any, fallback: _E, name: str) -> _E:
    if value is None:
        return fallback
    if isinstance(value, enum_type):
        return value
    token = _str(value, "").strip().lower()
    try:
        return enum_type(token)
    except ValueError:
        _CLIENT_LOGGER.warning("Ignoring unsupported %s '%s'; using '%s'", name, token, fallback.value)
        return fallback


def _color(value: Any, fallback: str) -> str:
    """Accept '#rgb'/'#rrggbb' strings or host fill objects ({"solid": {"color": ...}})."""
    if isinstance(value, Mapping):
        solid = value.get("solid")
        if isinstance(solid, Mapping):
            value = solid.get("color")
        else:
            value = value.get("color")
    if not isinstance(value, str):
        return fallback
    token = value.strip()
    if not token.startswith("#"):
        token = f"#{token}"
    digits = token[1:]
    if len(digits) not in (3, 6):
        return fallback
    try:
        int(digits, 16)
    except ValueError:
        return fallback
    return token


@dataclass(frozen=True)
class TextSettings:
    """Block-level settings: geometry, spacing and the label colour."""

    color: str = "#000000"
    transparency: Optional[float] = None
    font_size: float = 18.0
    alignment: HorizontalAlignment = HorizontalAlignment.LEFT
    alignment_v: VerticalAlignment = VerticalAlignment.TOP
    direction: Direction = Direction.HORIZONTAL_TB
    letter_spacing: Optional[float] = None
    line_height: Optional[float] = None
    word_spacing: Optional[float] = None
    perspective: Optional[float] = None
    text_indent: Optional[float] = None
    line_indent: Optional[float] = None
    text_rotate: Optional[float] = None
    skew_x: Optional[float] = None
    skew_y: Optional[float] = None

    @property
    def rotation(self) -> float:
        return self.text_rotate or 0.0

    @classmethod
    def from_payload(cls, payload: Optional[Mapping[str, Any]]) -> "TextSettings":
        defaults = cls()
        if not isinstance(payload, Mapping):
            return defaults
        font_size = _float(payload.get("fontSize"), defaults.font_size)
        if font_size is None or font_size <= 0:
            font_size = defaults.font_size
        return cls(
            color=_color(payload.get("color"), defaults.color),
            transparency=_clamp(_float(payload.get("transparency"), None), 0.0, TRANSPARENCY_MAX),
            font_size=font_size,
            alignment=_enum(HorizontalAlignment, payload.get("alignment"), defaults.alignment, "alignment"),
            alignment_v=_enum(VerticalAlignment, payload.get("alignmentV"), defaults.alignment_v, "vertical alignment"),
            direction=_enum(Direction, payload.get("direction"), defaults.direction, "direction"),
            letter_spacing=_clamp(_float(payload.get("letterSpacing"), None), SPACING_MIN, SPACING_MAX),
            line_height=_clamp(_float(payload.get("lineHeight"), None), 0.0, LINE_HEIGHT_MAX),
            word_spacing=_clamp(_float(payload.get("wordSpacing"), None), SPACING_MIN, SPACING_MAX),
            perspective=_clamp(_float(payload.get("perspective"), None), 0.0),
            text_indent=_clamp(_float(payload.get("textIndent"), None), INDENT_MIN),
            line_indent=_clamp(_float(payload.get("lineIndent"), None), INDENT_MIN),
            text_rotate=_clamp(_float(payload.get("textRotate"), None), 0.0, DEGREE_LIMIT),
            skew_x=_clamp(_float(payload.get("skewX"), None), 0.0, DEGREE_LIMIT),
            skew_y=_clamp(_float(payload.get("skewY"), None), 0.0, DEGREE_LIMIT),
        )


@dataclass(frozen=True)
class FragmentStyle:
    """Styling shared by the static label and the dynamic value."""

    background_color: str = "#ffffff"
    transparency: Optional[float] = None
    text_transform: str = ""
    text_shadow: str = "none"
    text_shadow_blur: str = "low"
    text_shadow_color: str = "#000000"
    font_family: str = "Segoe UI"
    bold: bool = False
    italic: bool = False
    underline: bool = False
    overline: bool = False
    strike_through: bool = False

    @classmethod
    def _style_kwargs(cls, payload: Mapping[str, Any]) -> dict:
        defaults = cls()
        return dict(
            background_color=_color(payload.get("backgroundColor"), defaults.background_color),
            transparency=_clamp(_float(payload.get("transparency"), None), 0.0, TRANSPARENCY_MAX),
            text_transform=_choice(payload.get("textTransform"), TEXT_TRANSFORMS, defaults.text_transform, "text transform"),
            text_shadow=_choice(payload.get("textShadow"), SHADOW_POSITIONS, defaults.text_shadow, "text shadow"),
            text_shadow_blur=_choice(
                payload.get("textShadowBlur"), SHADOW_BLURS, defaults.text_shadow_blur, "shadow blur"
            ),
            text_shadow_color=_color(payload.get("textShadowColor"), defaults.text_shadow_color),
            font_family=_str(payload.get("fontFamily"), defaults.font_family).strip() or defaults.font_family,
            bold=_bool(payload.get("boldStyle"), defaults.bold),
            italic=_bool(payload.get("italicStyle"), defaults.italic),
            underline=_bool(payload.get("underline"), defaults.underline),
            overline=_bool(payload.get("overline"), defaults.overline),
            strike_through=_bool(payload.get("strikeThrough"), defaults.strike_through),
        )


@dataclass(frozen=True)
class StaticTextSettings(FragmentStyle):
    show_colon: bool = True
    text_position: str = "prefix"
    post_text: str = ""

    @classmethod
    def from_payload(cls, payload: Optional[Mapping[str, Any]]) -> "StaticTextSettings":
        defaults = cls()
        if not isinstance(payload, Mapping):
            return defaults
        return cls(
            show_colon=_bool(payload.get("showColon"), defaults.show_colon),
            text_position=_choice(payload.get("textPosition"), TEXT_POSITIONS, defaults.text_position, "text position"),
            post_text=_str(payload.get("postText"), defaults.post_text),
            **cls._style_kwargs(payload),
        )


@dataclass(frozen=True)
class DynamicTextSettings(FragmentStyle):
    @classmethod
    def from_payload(cls, payload: Optional[Mapping[str, Any]]) -> "DynamicTextSettings":
        if not isinstance(payload, Mapping):
            return cls()
        return cls(**cls._style_kwargs(payload))


@dataclass(frozen=True)
class VisualSettings:
    text: TextSettings = field(default_factory=TextSettings)
    static: StaticTextSettings = field(default_factory=StaticTextSettings)
    dynamic: DynamicTextSettings = field(default_factory=DynamicTextSettings)

    @classmethod
    def from_payload(cls, payload: Optional[Mapping[str, Any]]) -> "VisualSettings":
        if not isinstance(payload, Mapping):
            return cls()
        return cls(
            text=TextSettings.from_payload(payload.get("textSettings")),
            static=StaticTextSettings.from_payload(payload.get("staticText")),
            dynamic=DynamicTextSettings.from_payload(payload.get("Settings")),
        )


def load_visual_settings(settings_path: Path) -> VisualSettings:
    """Read visual settings from a JSON file, falling back to defaults."""
    try:
        raw = settings_path.read_text(encoding="utf-8")
    except (FileNotFoundError, OSError):
        _CLIENT_LOGGER.debug("No settings file at %s; using defaults", settings_path)
        return VisualSettings()

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        _CLIENT_LOGGER.warning("Settings file %s is not valid JSON (%s); using defaults", settings_path, exc)
        return VisualSettings()

    return VisualSettings.from_payload(data)
