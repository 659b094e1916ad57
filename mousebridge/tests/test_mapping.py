"""Tests for mouseinput.mapping — y flip and button translation."""

from PySide6.QtCore import Qt

from mouseinput.mapping import to_engine_button, to_engine_y
from mouseinput.models import MouseButton


# ── to_engine_y ─────────────────────────────────────────────────────


class TestToEngineY:
    def test_flip(self) -> None:
        assert to_engine_y(20, 100) == 80

    def test_top_edge_is_height(self) -> None:
        assert to_engine_y(0, 100) == 100

    def test_sum_is_height(self) -> None:
        for raw in (0, 1, 37, 99, 100):
            assert to_engine_y(raw, 100) + raw == 100

    def test_zero_height_returns_raw(self) -> None:
        assert to_engine_y(42, 0) == 42

    def test_negative_height_returns_raw(self) -> None:
        assert to_engine_y(7, -5) == 7


# ── to_engine_button ────────────────────────────────────────────────


class TestToEngineButton:
    def test_qt_buttons(self) -> None:
        assert to_engine_button(Qt.MouseButton.LeftButton) is MouseButton.LEFT
        assert to_engine_button(Qt.MouseButton.MiddleButton) is MouseButton.MIDDLE
        assert to_engine_button(Qt.MouseButton.RightButton) is MouseButton.RIGHT

    def test_engine_index_passes_through(self) -> None:
        assert to_engine_button(MouseButton.RIGHT) is MouseButton.RIGHT

    def test_unknown_qt_button_is_left(self) -> None:
        assert to_engine_button(Qt.MouseButton.BackButton) is MouseButton.LEFT
        assert to_engine_button(Qt.MouseButton.NoButton) is MouseButton.LEFT

    def test_garbage_is_left(self) -> None:
        assert to_engine_button(None) is MouseButton.LEFT
        assert to_engine_button("wheel") is MouseButton.LEFT

    def test_unhashable_is_left(self) -> None:
        assert to_engine_button([1]) is MouseButton.LEFT

    def test_indices(self) -> None:
        assert [int(b) for b in MouseButton] == [0, 1, 2]
