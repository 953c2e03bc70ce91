"""Qt widget that measures, lays out and paints the label."""
from __future__ import annotations

import logging
import os
from typing import Callable, List, Optional, Tuple

from PyQt6.QtCore import QPointF, QRectF, Qt, QUrl
from PyQt6.QtGui import QColor, QDesktopServices, QFont, QFontMetricsF, QPainter, QPolygonF, QTransform
from PyQt6.QtWidgets import QWidget

from label_overlay.debug_config import DEBUG_CONFIG_ENABLED
from label_overlay.fragments import FragmentRole, TextFragment, build_fragments
from label_overlay.layout_engine import PerspectiveTilt, correct_overflow, perspective_tilt, place_text
from label_overlay.layout_types import LayoutResult, MeasuredBox
from label_overlay.logging_utils import resolve_log_level
from label_overlay.style_helpers import (
    decoration_flags,
    line_height_factor,
    point_to_pixel,
    qcolor_with_transparency,
    shadow_blur_radius,
    shadow_offsets,
)
from label_overlay.surface_geometry import (
    BoxPlacement,
    MeasuredText,
    box_placement,
    measure_fragments,
    skew_factor,
)
from label_overlay.text_settings import VisualSettings
from label_overlay.value_format import DynamicValue, row_count_message

PROPAGATE_ENV_VAR = "LABEL_OVERLAY_PROPAGATE_LOGS"

_LOGGER_NAME = "LabelOverlay.Client"
_CLIENT_LOGGER = logging.getLogger(_LOGGER_NAME)
_CLIENT_LOGGER.setLevel(resolve_log_level(DEBUG_CONFIG_ENABLED))
_CLIENT_LOGGER.propagate = False
# Opt-in propagation flag for environments/tests that want client logs upstream.
if os.environ.get(PROPAGATE_ENV_VAR, "").lower() in {"1", "true", "yes", "on"}:
    _CLIENT_LOGGER.propagate = True

ERROR_FONT_FAMILY = "Segoe UI Semibold"
ERROR_COLOR = "#777777"
SEPARATOR_FONT_FAMILY = "Segoe UI"
BACKGROUND_RADIUS = 5.0

TextMeasurer = Callable[[TextFragment], MeasuredText]


def build_transform(geometry: BoxPlacement, layout: LayoutResult) -> QTransform:
    """Compose skew, rotation and translation about the box centre.

    QTransform calls read in the same order as a CSS transform list: the last
    call is applied to a point first.
    """
    pivot_x, pivot_y = geometry.pivot
    transform = QTransform()
    transform.translate(geometry.x + pivot_x, geometry.y + pivot_y)
    if layout.skew_x:
        transform.shear(skew_factor(layout.skew_x), 0.0)
    if layout.skew_y:
        transform.shear(0.0, skew_factor(layout.skew_y))
    if layout.rotation_degrees:
        transform.rotate(layout.rotation_degrees)
    transform.translate(geometry.translate_x, geometry.translate_y)
    transform.translate(-pivot_x, -pivot_y)
    return transform


def tilt_transform(tilt: Optional[PerspectiveTilt], width: float, height: float) -> QTransform:
    transform = QTransform()
    if tilt is None:
        return transform
    axis = Qt.Axis.YAxis if tilt.axis == "y" else Qt.Axis.XAxis
    transform.translate(width / 2.0, height / 2.0)
    transform.rotate(tilt.degrees, axis, tilt.distance)
    transform.translate(-width / 2.0, -height / 2.0)
    return transform


class LabelSurface(QWidget):
    """Paints a static label and a dynamic value with the configured layout."""

    def __init__(self, parent: Optional[QWidget] = None, settings: Optional[VisualSettings] = None) -> None:
        super().__init__(parent)
        self._settings = settings or VisualSettings()
        self._label = ""
        self._value = DynamicValue(text="", row_count=0)
        self._text_measurer: Optional[TextMeasurer] = None
        self._trace_layout = False
        self._link_polygon = None
        self.setAttribute(Qt.WidgetAttribute.WA_TranslucentBackground, True)

    # Configuration ------------------------------------------------------

    @property
    def settings(self) -> VisualSettings:
        return self._settings

    def set_settings(self, settings: VisualSettings) -> None:
        self._settings = settings
        self.update()

    def set_content(self, label: str, value: DynamicValue) -> None:
        self._label = label or ""
        self._value = value
        self.update()

    def set_text_measurer(self, measurer: Optional[TextMeasurer]) -> None:
        self._text_measurer = measurer

    def set_trace_layout(self, enabled: bool) -> None:
        self._trace_layout = bool(enabled)

    # Layout -------------------------------------------------------------

    @property
    def error_message(self) -> Optional[str]:
        return row_count_message(self._value.row_count)

    def fragments(self) -> List[TextFragment]:
        text = self._settings.text
        message = self.error_message
        if message is not None:
            return [TextFragment(text=message, role=FragmentRole.STATIC, font_size_px=point_to_pixel(text.font_size))]
        return build_fragments(
            self._label,
            self._value.text,
            self._settings.static,
            self._settings.dynamic,
            text.font_size,
            url=self._value.url,
        )

    def _font_for(self, fragment: TextFragment) -> QFont:
        text = self._settings.text
        style = fragment.style
        if self.error_message is not None:
            family = ERROR_FONT_FAMILY
        elif style is not None:
            family = style.font_family
        else:
            family = SEPARATOR_FONT_FAMILY
        font = QFont(family)
        font.setPixelSize(max(1, int(round(fragment.font_size_px))))
        if text.letter_spacing:
            font.setLetterSpacing(QFont.SpacingType.AbsoluteSpacing, text.letter_spacing)
        if text.word_spacing:
            font.setWordSpacing(text.word_spacing)
        if style is not None:
            font.setBold(style.bold)
            font.setItalic(style.italic)
            flags = decoration_flags(style)
            font.setUnderline("underline" in flags)
            font.setOverline("overline" in flags)
            font.setStrikeOut("line-through" in flags)
        return font

    def _qt_measure(self, fragment: TextFragment) -> MeasuredText:
        metrics = QFontMetricsF(self._font_for(fragment))
        return MeasuredText(
            width=metrics.horizontalAdvance(fragment.text),
            ascent=metrics.ascent(),
            descent=metrics.descent(),
        )

    def measure(self, fragments: List[TextFragment]) -> MeasuredBox:
        measurer = self._text_measurer or self._qt_measure
        return measure_fragments(
            fragments,
            measurer,
            vertical=self._settings.text.direction.is_vertical,
            line_height_factor=line_height_factor(self._settings.text.line_height),
        )

    def compute_layout(self) -> Tuple[List[TextFragment], MeasuredBox, LayoutResult, BoxPlacement]:
        fragments = self.fragments()
        placement = place_text(self._settings.text)
        measured = self.measure(fragments)
        layout = correct_overflow(placement, measured)
        geometry = box_placement(layout, (float(self.width()), float(self.height())), measured)
        if self._trace_layout:
            _CLIENT_LOGGER.debug("Layout trace: %s box=%s", layout.as_dict(), geometry)
        return fragments, measured, layout, geometry

    # Painting -----------------------------------------------------------

    def paintEvent(self, event) -> None:  # type: ignore[override]
        painter = QPainter(self)
        try:
            painter.setRenderHint(QPainter.RenderHint.Antialiasing)
            painter.setRenderHint(QPainter.RenderHint.TextAntialiasing)
            self._paint_label(painter)
        except Exception:
            _CLIENT_LOGGER.exception("Failed to paint label")
            raise
        finally:
            painter.end()
        super().paintEvent(event)

    def _paint_label(self, painter: QPainter) -> None:
        fragments, measured, layout, geometry = self.compute_layout()
        if measured.is_empty:
            self._link_polygon = None
            return
        transform = build_transform(geometry, layout)
        tilt = None if self.error_message is not None else perspective_tilt(self._settings.text)
        painter.setTransform(tilt_transform(tilt, geometry.width, geometry.height) * transform)
        box_rect = QRectF(0.0, 0.0, geometry.width, geometry.height)
        self._link_polygon = painter.transform().map(QPolygonF(box_rect)) if self._value.url else None

        painter.translate(geometry.text_x, geometry.text_y)
        if self._settings.text.direction.is_vertical:
            painter.translate(measured.width, 0.0)
            painter.rotate(90.0)
            run_height = measured.width
        else:
            run_height = measured.height
        cursor = float(self._settings.text.text_indent or 0.0)
        measurer = self._text_measurer or self._qt_measure
        for fragment in fragments:
            metrics = measurer(fragment)
            cursor += fragment.padding_left
            self._paint_fragment(painter, fragment, cursor, run_height, metrics)
            cursor += metrics.width

    def _text_color(self) -> QColor:
        if self.error_message is not None:
            return QColor(ERROR_COLOR)
        text = self._settings.text
        return qcolor_with_transparency(text.color, text.transparency)

    def _paint_fragment(
        self,
        painter: QPainter,
        fragment: TextFragment,
        x: float,
        run_height: float,
        metrics: MeasuredText,
    ) -> None:
        style = fragment.style
        baseline = (run_height - (metrics.ascent + metrics.descent)) / 2.0 + metrics.ascent
        painter.setFont(self._font_for(fragment))
        if style is not None and self.error_message is None:
            background = qcolor_with_transparency(style.background_color, style.transparency)
            painter.setPen(Qt.PenStyle.NoPen)
            painter.setBrush(background)
            painter.drawRoundedRect(QRectF(x, 0.0, metrics.width, run_height), BACKGROUND_RADIUS, BACKGROUND_RADIUS)
            offsets = shadow_offsets(style.text_shadow)
            if offsets is not None:
                shadow = QColor(style.text_shadow_color)
                # Soften the single offset copy as the blur grows.
                blur = shadow_blur_radius(style.text_shadow_blur)
                shadow.setAlpha(max(64, 255 - blur * 12))
                painter.setPen(shadow)
                painter.drawText(QPointF(x + offsets[0], baseline + offsets[1]), fragment.text)
        painter.setPen(self._text_color())
        painter.drawText(QPointF(x, baseline), fragment.text)

    # Interaction --------------------------------------------------------

    def mousePressEvent(self, event) -> None:  # type: ignore[override]
        polygon = self._link_polygon
        if polygon is not None and self._value.url and polygon.containsPoint(
            event.position(), Qt.FillRule.OddEvenFill
        ):
            _CLIENT_LOGGER.debug("Opening link %s", self._value.url)
            QDesktopServices.openUrl(QUrl(self._value.url))
            event.accept()
            return
        super().mousePressEvent(event)
