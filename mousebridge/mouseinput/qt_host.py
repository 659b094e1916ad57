"""PySide6 binding of :class:`MouseHost`.

Mouse events are picked up with an event filter on the bound widget so
the widget keeps its own handlers; nothing is consumed.  Cursor and
warp operations are queued onto the GUI thread through a signal on a
dispatcher object that lives there.
"""

import logging
from typing import Callable, Dict, Tuple

from PySide6.QtCore import QEvent, QObject, QPoint, Qt, Signal
from PySide6.QtGui import QCursor, QGuiApplication, QPixmap
from PySide6.QtWidgets import QApplication, QWidget

from .host import MouseHost, MouseSink, Warp, WarpUnavailable
from .models import Point

logger = logging.getLogger(__name__)

# Qt reports wheel rotation in eighths of a degree; one notch is 15°.
WHEEL_NOTCH = 120

# Platform plugins on which QCursor.setPos() is a silent no-op.
_NO_WARP_PLATFORMS = ("wayland", "offscreen", "minimal")


class WheelStepper:
    """Converts Qt angle deltas into whole scroll units.

    Units are positive toward the user (Qt's angle is positive away).
    High-resolution wheels and touchpads report fractions of a notch;
    those are carried over until they add up to a full notch.
    """

    def __init__(self) -> None:
        self.remainder = 0

    def feed(self, angle: int, lines_per_notch: int) -> int:
        self.remainder += angle
        notches = int(self.remainder / WHEEL_NOTCH)
        if notches == 0:
            return 0
        self.remainder -= notches * WHEEL_NOTCH
        return -notches * lines_per_notch


class _UiDispatcher(QObject):
    """Runs thunks on the thread this object lives in (the GUI thread)."""

    invoke = Signal(object)

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)
        # Always queued, even from the GUI thread itself.
        self.invoke.connect(self._run, Qt.ConnectionType.QueuedConnection)

    def _run(self, thunk: Callable[[], None]) -> None:
        try:
            thunk()
        except Exception:
            logger.exception("Error in UI-thread mouse task")


class _MouseEventFilter(QObject):
    """Translates one widget's Qt mouse events into :class:`MouseSink` calls."""

    def __init__(self, widget: QWidget, sink: MouseSink) -> None:
        super().__init__(widget)
        self._widget = widget
        self._sink = sink
        self._wheel = WheelStepper()

    def eventFilter(self, watched, event) -> bool:  # type: ignore[override]
        try:
            self._dispatch(event)
        except Exception:
            logger.exception("Error in mouse event callback")
        return False

    def _dispatch(self, event) -> None:
        t = event.type()
        if t in (QEvent.Type.MouseButtonPress, QEvent.Type.MouseButtonDblClick):
            # Qt replaces the second press of a double click; keep presses paired
            x, y = _pos(event)
            self._sink.on_pressed(x, y, event.button(), event.timestamp())
        elif t == QEvent.Type.MouseButtonRelease:
            x, y = _pos(event)
            self._sink.on_released(x, y, event.button(), event.timestamp())
        elif t == QEvent.Type.MouseMove:
            x, y = _pos(event)
            if event.buttons() != Qt.MouseButton.NoButton:
                self._sink.on_dragged(x, y)
            else:
                self._sink.on_moved(x, y)
        elif t == QEvent.Type.Wheel:
            units = self._wheel.feed(event.angleDelta().y(), QApplication.wheelScrollLines())
            if units:
                self._sink.on_wheel(units)
        elif t == QEvent.Type.Enter:
            x, y = _pos(event)
            self._sink.on_entered(x, y)
        elif t == QEvent.Type.Leave:
            # QEvent.Leave carries no position
            p = self._widget.mapFromGlobal(QCursor.pos())
            self._sink.on_exited(p.x(), p.y())


def _pos(event) -> Tuple[int, int]:
    p = event.position().toPoint()
    return p.x(), p.y()


class QtMouseHost(MouseHost):
    """:class:`MouseHost` for ``QWidget`` components.

    Create it on the GUI thread, after the ``QApplication``.
    """

    def __init__(self) -> None:
        self._dispatcher = _UiDispatcher()
        self._filters: Dict[QWidget, _MouseEventFilter] = {}

    # ── event registration ──────────────────────────────────────────

    def attach(self, component: QWidget, sink: MouseSink) -> None:
        self.detach(component, sink)
        flt = _MouseEventFilter(component, sink)
        component.setMouseTracking(True)
        component.installEventFilter(flt)
        self._filters[component] = flt

    def detach(self, component: QWidget, sink: MouseSink) -> None:
        flt = self._filters.pop(component, None)
        if flt is not None:
            component.removeEventFilter(flt)
            flt.deleteLater()

    # ── geometry ────────────────────────────────────────────────────

    def component_size(self, component: QWidget) -> Tuple[int, int]:
        return component.width(), component.height()

    def point_to_screen(self, component: QWidget, point: Point) -> Point:
        g = component.mapToGlobal(QPoint(point.x, point.y))
        return Point(g.x(), g.y())

    # ── warp / UI thread ────────────────────────────────────────────

    def create_warp(self) -> Warp:
        if QGuiApplication.instance() is None:
            raise WarpUnavailable("no QGuiApplication instance")
        platform = QGuiApplication.platformName()
        if platform.startswith(_NO_WARP_PLATFORMS):
            raise WarpUnavailable(
                f"platform {platform!r} does not allow moving the pointer"
            )
        return _warp

    def marshal(self, thunk: Callable[[], None]) -> None:
        self._dispatcher.invoke.emit(thunk)

    # ── cursors ─────────────────────────────────────────────────────

    def install_cursor(self, component: QWidget, cursor: QCursor | None) -> None:
        if cursor is None:
            component.unsetCursor()
        else:
            component.setCursor(cursor)

    def create_transparent_cursor(self) -> QCursor:
        pm = QPixmap(1, 1)
        pm.fill(Qt.GlobalColor.transparent)
        return QCursor(pm, 0, 0)


def _warp(screen_x: int, screen_y: int) -> None:
    QCursor.setPos(screen_x, screen_y)
