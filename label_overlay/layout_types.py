"""Value types shared by the layout solvers and the render surface (pure, no Qt)."""
from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Dict, Optional


class Direction(str, Enum):
    HORIZONTAL_TB = "horizontal-tb"
    HORIZONTAL_BT = "horizontal-bt"
    VERTICAL_RL = "vertical-rl"
    VERTICAL_LR = "vertical-lr"

    @property
    def is_vertical(self) -> bool:
        return self in (Direction.VERTICAL_RL, Direction.VERTICAL_LR)

    @property
    def is_mirrored(self) -> bool:
        """True for the modes drawn as their partner mode turned by 180 degrees."""
        return self in (Direction.HORIZONTAL_BT, Direction.VERTICAL_LR)


class HorizontalAlignment(str, Enum):
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


class VerticalAlignment(str, Enum):
    TOP = "top"
    MIDDLE = "middle"
    BOTTOM = "bottom"


class Side(str, Enum):
    TOP = "top"
    BOTTOM = "bottom"
    LEFT = "left"
    RIGHT = "right"


@dataclass(frozen=True)
class AnchorOffset:
    side: Side
    percent: float


@dataclass(frozen=True)
class PositionResult:
    """Placement of the text block before rotation is applied."""

    translate_x_percent: float
    translate_y_percent: float
    anchor: AnchorOffset
    padding_side: Side
    padding_value: float
    secondary_anchor: Optional[AnchorOffset] = None
    float_right: bool = False
    fit_content: bool = True


@dataclass(frozen=True)
class MarginCorrection:
    margin_top: float = 0.0
    margin_left: float = 0.0


ZERO_CORRECTION = MarginCorrection()


@dataclass(frozen=True)
class MeasuredBox:
    """Size of the placed text block, read back after the first paint."""

    width: float
    height: float
    content_width: Optional[float] = None

    @property
    def is_empty(self) -> bool:
        return self.width <= 0.0 and self.height <= 0.0


@dataclass(frozen=True)
class LayoutResult:
    translate_x_percent: float
    translate_y_percent: float
    anchor_side: Side
    anchor_value_percent: float
    padding_side: Side
    padding_value: float
    margin_top: float
    margin_left: float
    rotation_degrees: float = 0.0
    skew_x: float = 0.0
    skew_y: float = 0.0
    writing_mode: str = "horizontal-tb"
    text_align: HorizontalAlignment = HorizontalAlignment.LEFT
    secondary_anchor: Optional[AnchorOffset] = None
    float_right: bool = False
    fit_content: bool = True

    def anchor_percent(self, side: Side) -> Optional[float]:
        """Return the anchor percentage applied to ``side``, if any."""
        if self.anchor_side is side:
            return self.anchor_value_percent
        if self.secondary_anchor is not None and self.secondary_anchor.side is side:
            return self.secondary_anchor.percent
        return None

    def as_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["anchor_side"] = self.anchor_side.value
        data["padding_side"] = self.padding_side.value
        data["text_align"] = self.text_align.value
        if self.secondary_anchor is not None:
            data["secondary_anchor"] = {
                "side": self.secondary_anchor.side.value,
                "percent": self.secondary_anchor.percent,
            }
        return data
