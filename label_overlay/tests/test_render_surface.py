from __future__ import annotations

import pytest
from PyQt6.QtCore import QPointF

from label_overlay.fragments import build_fragments
from label_overlay.layout_engine import solve_layout
from label_overlay.layout_types import Direction, MeasuredBox
from label_overlay.render_surface import LabelSurface, build_transform, tilt_transform
from label_overlay.surface_geometry import BoxPlacement, MeasuredText, box_placement
from label_overlay.text_settings import DynamicTextSettings, StaticTextSettings, TextSettings, VisualSettings
from label_overlay.value_format import MULTIPLE_ROWS_MESSAGE, DynamicValue


def _fake_measurer(calls):
    def measure(fragment) -> MeasuredText:
        calls.append(fragment.text)
        return MeasuredText(width=10.0 * len(fragment.text), ascent=14.0, descent=4.0)

    return measure


def test_injected_measurer_used_without_qt() -> None:
    calls = []

    class Dummy:
        pass

    surface = Dummy()
    surface._text_measurer = _fake_measurer(calls)  # type: ignore[attr-defined]
    surface._qt_measure = None  # type: ignore[attr-defined]
    surface._settings = VisualSettings(text=TextSettings(direction=Direction.VERTICAL_RL))  # type: ignore[attr-defined]
    fragments = build_fragments("Sales", "42", StaticTextSettings(), DynamicTextSettings(), 18)

    measured = LabelSurface.measure(surface, fragments)

    assert calls == ["Sales", " : ", "42"]
    assert measured.height == 100.0
    assert measured.width == pytest.approx(1.6 * 24.0)


def test_transform_without_rotation_is_a_translation() -> None:
    box = MeasuredBox(width=100.0, height=20.0)
    layout = solve_layout(TextSettings(), box)
    geometry = box_placement(layout, (400, 200), box)

    mapped = build_transform(geometry, layout).map(QPointF(0.0, 0.0))

    assert mapped.x() == pytest.approx(geometry.x + geometry.translate_x)
    assert mapped.y() == pytest.approx(geometry.y + geometry.translate_y)


def test_rotation_turns_about_the_box_centre() -> None:
    box = MeasuredBox(width=100.0, height=20.0)
    layout = solve_layout(TextSettings(text_rotate=90.0), box)
    geometry = BoxPlacement(x=10.0, y=30.0, width=100.0, height=20.0, text_x=0.0, text_y=0.0, translate_x=0.0, translate_y=0.0)

    transform = build_transform(geometry, layout)
    centre = transform.map(QPointF(50.0, 10.0))
    corner = transform.map(QPointF(0.0, 0.0))

    assert centre.x() == pytest.approx(60.0)
    assert centre.y() == pytest.approx(40.0)
    # Top-left corner swings to the top-right of the centre after a quarter turn.
    assert corner.x() == pytest.approx(70.0)
    assert corner.y() == pytest.approx(-10.0)


def test_tilt_transform_is_identity_without_perspective() -> None:
    assert tilt_transform(None, 100.0, 20.0).isIdentity()


@pytest.fixture
def qt_app():
    from PyQt6.QtWidgets import QApplication

    app = QApplication.instance() or QApplication([])
    yield app


@pytest.mark.pyqt_required
def test_surface_replaces_label_with_row_count_error(qt_app) -> None:
    surface = LabelSurface()
    surface.set_text_measurer(_fake_measurer([]))
    surface.set_content("Sales", DynamicValue(text="", row_count=3))

    fragments = surface.fragments()

    assert [fragment.text for fragment in fragments] == [MULTIPLE_ROWS_MESSAGE]
    assert surface.error_message == MULTIPLE_ROWS_MESSAGE


@pytest.mark.pyqt_required
def test_surface_layout_and_paint(qt_app) -> None:
    settings = VisualSettings(text=TextSettings(text_rotate=30.0, skew_x=10.0, perspective=20.0))
    surface = LabelSurface(settings=settings)
    surface.set_text_measurer(_fake_measurer([]))
    surface.set_content("Sales", DynamicValue(text="42", row_count=1, url="https://example.com"))
    surface.resize(400, 200)

    fragments, measured, layout, geometry = surface.compute_layout()

    assert [fragment.text for fragment in fragments] == ["Sales", " : ", "42"]
    assert measured.width == 100.0
    assert layout.rotation_degrees == 30.0
    assert layout.margin_top > 0.0
    assert geometry.width == 100.0

    pixmap = surface.grab()
    assert not pixmap.isNull()
