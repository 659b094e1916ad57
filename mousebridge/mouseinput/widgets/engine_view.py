"""Engine view — a stand-in engine surface that shows what the adapter delivers."""

from collections import deque
from typing import Deque, Optional

from PySide6.QtCore import Qt, QTimer
from PySide6.QtGui import QColor, QFont, QPainter, QPen
from PySide6.QtWidgets import QWidget

from ..input_adapter import InputAdapter
from ..models import ButtonEvent, MotionEvent, MouseButton, RawInputListener
from ..qt_host import QtMouseHost
from ..settings import InputSettings

PUMP_INTERVAL_MS = 16  # ~60 Hz, one pump per simulated frame
LOG_LINES = 12


def format_button(evt: ButtonEvent) -> str:
    """One button-log line, e.g. ``RIGHT  down (10, 80)  t=99``."""
    d = evt.to_dict()
    name = MouseButton(d["button"]).name
    state = "down" if d["pressed"] else "up"
    return f"{name:<6} {state:<4} ({d['x']}, {d['y']})  t={d['timestamp']}"


def format_motion(evt: MotionEvent) -> str:
    return "motion " + " ".join(f"{k}={v}" for k, v in evt.to_dict().items())


class EngineView(QWidget, RawInputListener):
    """Pumps an :class:`InputAdapter` bound to itself and draws the results.

    A crosshair is driven purely by relative ``dx``/``dy`` so grab mode
    can be checked by eye: it must keep moving while the real pointer is
    pinned.  Space toggles the grab, Escape releases it.
    """

    def __init__(self, settings: InputSettings | None = None,
                 parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setMinimumSize(640, 400)
        self.setFocusPolicy(Qt.FocusPolicy.StrongFocus)
        self._settings = settings or InputSettings()

        self._last_motion: Optional[MotionEvent] = None
        self._log: Deque[str] = deque(maxlen=LOG_LINES)
        self._cross_x: float = 0.0
        self._cross_y: float = 0.0

        self.adapter = InputAdapter(QtMouseHost(), wheel_amp=self._settings.wheel_amp)
        self.adapter.set_listener(self)
        self.adapter.bind(self)
        if self._settings.start_grabbed:
            self.adapter.set_cursor_visible(False)

        self._pump_timer = QTimer(self)
        self._pump_timer.setInterval(PUMP_INTERVAL_MS)
        self._pump_timer.timeout.connect(self._frame)
        self._pump_timer.start()

    # ── listener ────────────────────────────────────────────────────

    def on_mouse_motion_event(self, evt: MotionEvent) -> None:
        self._last_motion = evt
        self._cross_x = max(0.0, min(float(self.width()), self._cross_x + evt.dx))
        self._cross_y = max(0.0, min(float(self.height()), self._cross_y + evt.dy))

    def on_mouse_button_event(self, evt: ButtonEvent) -> None:
        self._log.append(format_button(evt))

    # ── frame ───────────────────────────────────────────────────────

    def _frame(self) -> None:
        self.adapter.pump()
        self.update()

    def keyPressEvent(self, event) -> None:  # type: ignore[override]
        if event.key() == Qt.Key.Key_Space:
            self.adapter.set_cursor_visible(not self.adapter.cursor_visible)
        elif event.key() == Qt.Key.Key_Escape:
            self.adapter.set_cursor_visible(True)
        else:
            super().keyPressEvent(event)

    def closeEvent(self, event) -> None:  # type: ignore[override]
        self._pump_timer.stop()
        # next launch starts in the grab mode the user left
        self._settings.start_grabbed = not self.adapter.cursor_visible
        self._settings.save()
        self.adapter.destroy()
        super().closeEvent(event)

    def paintEvent(self, event) -> None:  # type: ignore[override]
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)
        painter.fillRect(self.rect(), QColor(19, 18, 33))

        # crosshair, engine space → widget space
        px = int(self._cross_x)
        py = self.height() - int(self._cross_y)
        painter.setPen(QPen(QColor(139, 92, 246), 2))
        painter.drawLine(px - 10, py, px + 10, py)
        painter.drawLine(px, py - 10, px, py + 10)

        font = QFont()
        font.setFamily("Consolas")
        font.setPixelSize(13)
        painter.setFont(font)
        painter.setPen(QColor(228, 228, 237))

        lines = [
            f"grab: {self.adapter.grab_state.value}   (Space toggles, Esc releases)",
        ]
        m = self._last_motion
        if m is not None:
            lines.append(format_motion(m))
        lines.append("")
        lines.extend(self._log)

        y = 20
        for line in lines:
            painter.drawText(12, y, line)
            y += 18
        painter.end()
