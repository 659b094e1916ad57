"""Shared pytest fixtures for MouseBridge tests."""

import os
from typing import Any, Callable, List, Tuple

import pytest
from PySide6.QtWidgets import QApplication

from mouseinput.host import MouseHost, MouseSink, WarpUnavailable
from mouseinput.input_adapter import InputAdapter
from mouseinput.models import ButtonEvent, MotionEvent, Point, RawInputListener


TRANSPARENT = "transparent-cursor"


class FakeComponent:
    """A widget stand-in with a size and a position on screen."""

    def __init__(self, width: int = 100, height: int = 100,
                 screen_x: int = 200, screen_y: int = 300, name: str = "comp") -> None:
        self.width = width
        self.height = height
        self.screen_x = screen_x
        self.screen_y = screen_y
        self.name = name

    def __repr__(self) -> str:
        return f"FakeComponent({self.name})"


class FakeHost(MouseHost):
    """Records everything the adapter asks of the toolkit.

    Marshaled thunks are parked in ``ui_queue`` until ``run_ui()``;
    warps are recorded in screen coordinates and do not generate echo
    events (tests deliver those explicitly).
    """

    def __init__(self, warp_available: bool = True) -> None:
        self.warp_available = warp_available
        self.sinks: dict = {}
        self.detached: List[Any] = []
        self.ui_queue: List[Callable[[], None]] = []
        self.warps: List[Tuple[int, int]] = []
        self.cursors: List[Tuple[Any, Any]] = []
        self.transparent_created = 0

    def attach(self, component: Any, sink: MouseSink) -> None:
        self.sinks[component] = sink

    def detach(self, component: Any, sink: MouseSink) -> None:
        self.sinks.pop(component, None)
        self.detached.append(component)

    def component_size(self, component: Any) -> Tuple[int, int]:
        return component.width, component.height

    def point_to_screen(self, component: Any, point: Point) -> Point:
        return Point(point.x + component.screen_x, point.y + component.screen_y)

    def create_warp(self):
        if not self.warp_available:
            raise WarpUnavailable("pointer warping not permitted")
        return lambda x, y: self.warps.append((x, y))

    def marshal(self, thunk: Callable[[], None]) -> None:
        self.ui_queue.append(thunk)

    def run_ui(self) -> None:
        while self.ui_queue:
            self.ui_queue.pop(0)()

    def install_cursor(self, component: Any, cursor: Any) -> None:
        self.cursors.append((component, cursor))

    def create_transparent_cursor(self) -> Any:
        self.transparent_created += 1
        return TRANSPARENT


class RecordingListener(RawInputListener):
    """Keeps every delivered event, in delivery order."""

    def __init__(self) -> None:
        self.events: List[object] = []

    def on_mouse_motion_event(self, evt: MotionEvent) -> None:
        self.events.append(evt)

    def on_mouse_button_event(self, evt: ButtonEvent) -> None:
        self.events.append(evt)

    @property
    def motions(self) -> List[MotionEvent]:
        return [e for e in self.events if isinstance(e, MotionEvent)]

    @property
    def buttons(self) -> List[ButtonEvent]:
        return [e for e in self.events if isinstance(e, ButtonEvent)]


# ── fixtures ───────────────────────────────────────────────────────

@pytest.fixture(scope="session")
def qapp() -> QApplication:
    """One QApplication for the whole run, headless unless told otherwise."""
    os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
    return QApplication.instance() or QApplication([])


@pytest.fixture
def host() -> FakeHost:
    return FakeHost()


@pytest.fixture
def component() -> FakeComponent:
    """A 100×100 component at screen (200, 300)."""
    return FakeComponent()


@pytest.fixture
def listener() -> RecordingListener:
    return RecordingListener()


@pytest.fixture
def adapter(host: FakeHost, component: FakeComponent,
            listener: RecordingListener) -> InputAdapter:
    """An adapter bound to ``component`` with ``listener`` installed."""
    a = InputAdapter(host)
    a.set_listener(listener)
    a.bind(component)
    return a


@pytest.fixture
def grabbed(adapter: InputAdapter, host: FakeHost) -> InputAdapter:
    """``adapter`` with the cursor hidden and the first warp already issued."""
    adapter.set_cursor_visible(False)
    host.run_ui()
    return adapter
