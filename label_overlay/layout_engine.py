"""Two-phase layout pass: place the block, then correct for rotation overflow."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from label_overlay.layout_types import (
    Direction,
    HorizontalAlignment,
    LayoutResult,
    MeasuredBox,
    PositionResult,
)
from label_overlay.overflow_compensator import HALF_TURN, compensate_overflow
from label_overlay.position_solver import solve_position
from label_overlay.text_settings import TextSettings

_LOGGER_NAME = "LabelOverlay.Client"
_CLIENT_LOGGER = logging.getLogger(_LOGGER_NAME)

PERSPECTIVE_TILT_DEGREES = 25.0
PERSPECTIVE_SCALE = 100.0


@dataclass(frozen=True)
class Placement:
    """Phase-one output: everything needed to paint the block once and measure it."""

    settings: TextSettings
    position: PositionResult
    rotation_degrees: float
    writing_mode: str
    text_align: HorizontalAlignment


@dataclass(frozen=True)
class PerspectiveTilt:
    axis: str
    degrees: float
    distance: float


def final_rotation(direction: Direction, rotation_degrees: float) -> float:
    """Fold the direction's base turn into the user rotation."""
    rotation = float(rotation_degrees or 0.0)
    if direction.is_mirrored:
        return HALF_TURN + rotation
    return rotation


def writing_mode(direction: Direction) -> str:
    # Both vertical modes run top-to-bottom columns; lr is the rl run turned over.
    if direction.is_vertical:
        return "vertical-rl"
    return "horizontal-tb"


def effective_text_align(direction: Direction, align_h: HorizontalAlignment) -> HorizontalAlignment:
    if direction is Direction.HORIZONTAL_BT:
        if align_h is HorizontalAlignment.LEFT:
            return HorizontalAlignment.RIGHT
        if align_h is HorizontalAlignment.RIGHT:
            return HorizontalAlignment.LEFT
    return align_h


def perspective_tilt(settings: TextSettings) -> Optional[PerspectiveTilt]:
    """Return the 3D tilt used to fake perspective, or None when it is off."""
    if not settings.perspective or settings.perspective <= 0:
        return None
    axis = "y" if settings.direction.is_vertical else "x"
    distance = max(1.0, PERSPECTIVE_SCALE - settings.perspective + 1.0)
    return PerspectiveTilt(axis=axis, degrees=PERSPECTIVE_TILT_DEGREES, distance=distance)


def place_text(settings: TextSettings) -> Placement:
    position = solve_position(
        settings.direction,
        settings.alignment,
        settings.alignment_v,
        settings.line_indent or 0.0,
    )
    return Placement(
        settings=settings,
        position=position,
        rotation_degrees=final_rotation(settings.direction, settings.rotation),
        writing_mode=writing_mode(settings.direction),
        text_align=effective_text_align(settings.direction, settings.alignment),
    )


def correct_overflow(placement: Placement, measured: MeasuredBox) -> LayoutResult:
    settings = placement.settings
    position = placement.position
    correction = compensate_overflow(
        settings.direction,
        settings.alignment,
        settings.alignment_v,
        placement.rotation_degrees,
        measured.width,
        measured.height,
        settings.font_size,
        content_width=measured.content_width,
    )
    result = LayoutResult(
        translate_x_percent=position.translate_x_percent,
        translate_y_percent=position.translate_y_percent,
        anchor_side=position.anchor.side,
        anchor_value_percent=position.anchor.percent,
        padding_side=position.padding_side,
        padding_value=position.padding_value,
        margin_top=correction.margin_top,
        margin_left=correction.margin_left,
        rotation_degrees=placement.rotation_degrees,
        skew_x=settings.skew_x or 0.0,
        skew_y=settings.skew_y or 0.0,
        writing_mode=placement.writing_mode,
        text_align=placement.text_align,
        secondary_anchor=position.secondary_anchor,
        float_right=position.float_right,
        fit_content=position.fit_content,
    )
    _CLIENT_LOGGER.debug(
        "Layout pass: direction=%s align=%s/%s rotation=%.1f box=%.1fx%.1f margins=(%.2f, %.2f)",
        settings.direction.value,
        settings.alignment.value,
        settings.alignment_v.value,
        placement.rotation_degrees,
        measured.width,
        measured.height,
        result.margin_top,
        result.margin_left,
    )
    return result


def solve_layout(settings: TextSettings, measured: MeasuredBox) -> LayoutResult:
    """Run both phases with an already measured box."""
    return correct_overflow(place_text(settings), measured)
