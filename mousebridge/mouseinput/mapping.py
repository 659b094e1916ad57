"""Coordinate and button translation between toolkit and engine conventions."""

from typing import Dict

from PySide6.QtCore import Qt

from .models import MouseButton


def to_engine_y(raw_y: int, height: int) -> int:
    """Flip a toolkit y (top-left origin) into engine space (bottom-left).

    A component without height has no meaningful flip; the raw value is
    returned unchanged.
    """
    if height <= 0:
        return raw_y
    return height - raw_y


_QT_BUTTONS: Dict[Qt.MouseButton, MouseButton] = {
    Qt.MouseButton.LeftButton: MouseButton.LEFT,
    Qt.MouseButton.MiddleButton: MouseButton.MIDDLE,
    Qt.MouseButton.RightButton: MouseButton.RIGHT,
}


def to_engine_button(token: object) -> MouseButton:
    """Map a toolkit button token to an engine button index.

    Engine indices pass through untouched.  Anything unrecognised
    (back/forward buttons, ``NoButton``) is reported as ``LEFT``.
    """
    if isinstance(token, MouseButton):
        return token
    try:
        return _QT_BUTTONS.get(token, MouseButton.LEFT)  # type: ignore[arg-type]
    except TypeError:  # unhashable token
        return MouseButton.LEFT
