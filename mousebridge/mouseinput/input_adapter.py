"""Input adapter — bridges toolkit mouse callbacks to an engine's raw listener.

Toolkit callbacks arrive on the UI thread at whatever rate the toolkit
delivers them.  The engine calls :meth:`InputAdapter.pump` once per
frame from its own thread and receives, in order:

1. at most one coalesced :class:`MotionEvent` (only if the pointer or
   wheel moved since the previous pump), then
2. every queued :class:`ButtonEvent`, in the order the toolkit
   reported the presses and releases.

Click events are not forwarded; the engine sees the raw press/release
pair only.

Motion and grab state share one lock.  It is only held for short
updates, never while a warp is issued or a listener runs.
"""

import logging
import threading
import time
from typing import Any, Optional

from .event_queue import ButtonEventQueue
from .grab import GrabController
from .host import MouseHost, MouseSink, WarpUnavailable
from .mapping import to_engine_button, to_engine_y
from .models import (
    BUTTON_COUNT,
    WHEEL_AMP,
    ButtonEvent,
    GrabState,
    Point,
    RawInputListener,
)
from .motion import MotionAccumulator

logger = logging.getLogger(__name__)


class InputAdapter(MouseSink):
    """Pump-driven mouse input for one toolkit component at a time.

    *host* provides the toolkit services (see :class:`MouseHost`).
    *wheel_amp* multiplies every raw wheel unit.
    """

    def __init__(self, host: MouseHost, wheel_amp: int = WHEEL_AMP) -> None:
        self._host = host
        self.wheel_amp = wheel_amp
        self._lock = threading.RLock()
        self._queue = ButtonEventQueue()
        self._motion = MotionAccumulator()
        self._component: Any = None
        self._listener: Optional[RawInputListener] = None
        self._transparent_cursor: Any = None

        self._warp = None
        try:
            self._warp = host.create_warp()
        except WarpUnavailable as exc:
            logger.error("Could not create a pointer warp, so the mouse cannot be grabbed: %s", exc)
        self._grab = GrabController(can_warp=self._warp is not None)

    # ── lifecycle ───────────────────────────────────────────────────

    def initialize(self) -> None:
        pass

    def is_initialized(self) -> bool:
        return True

    def destroy(self) -> None:
        """Detach from the component and release the cursor and warp."""
        self.bind(None)
        with self._lock:
            self._transparent_cursor = None
            self._warp = None
            self._grab.can_warp = False

    def bind(self, component: Any) -> None:
        """Take mouse input from *component*, dropping the previous one.

        All pointer, wheel, grab-point and queued-button state is reset
        so deltas never leak from one surface to the next.  ``None``
        only detaches.
        """
        with self._lock:
            old = self._component
            hidden = not self._grab.visible
            if old is not None:
                self._host.detach(old, self)
                self._queue.clear()
                self._motion.reset()
                self._grab.reset()
                logger.info("Mouse input unbound from %r", old)
            self._component = component
            if component is not None:
                self._host.attach(component, self)
                logger.info("Mouse input bound to %r", component)

        if hidden:
            if old is not None and old is not component:
                self._host.marshal(lambda: self._host.install_cursor(old, None))
            if component is not None:
                self._host.marshal(lambda: self._apply_cursor(component, False))

    def set_listener(self, listener: Optional[RawInputListener]) -> None:
        with self._lock:
            self._listener = listener

    # ── engine-facing API ───────────────────────────────────────────

    def set_cursor_visible(self, visible: bool) -> None:
        """Show the cursor, or hide it and grab the pointer.

        Safe to call from any thread; the cursor change and the first
        warp happen later on the UI thread.
        """
        with self._lock:
            anchor = self._motion.last_raw if self._motion.position_known else None
            if not self._grab.set_visible(visible, anchor):
                return
            component = self._component
        logger.info("Mouse cursor %s", "released" if visible else "grabbed")
        if component is not None:
            self._host.marshal(lambda: self._apply_cursor(component, visible))

    def set_native_cursor(self, cursor: Any) -> None:
        # Custom engine cursors are not supported by this adapter.
        pass

    def button_count(self) -> int:
        return BUTTON_COUNT

    def input_time_nanos(self) -> int:
        return time.monotonic_ns()

    def pump(self) -> None:
        """Deliver pending motion, then pending button events, to the listener."""
        with self._lock:
            listener = self._listener
            evt = None
            if self._motion.dirty and self._component is not None:
                _, height = self._host.component_size(self._component)
                evt = self._motion.take_event(height)
        buttons = self._queue.drain()

        if listener is None:
            if evt is not None or buttons:
                logger.debug("No input listener; dropped %d mouse event(s)",
                             len(buttons) + (evt is not None))
            return
        if evt is not None:
            listener.on_mouse_motion_event(evt)
        for b in buttons:
            listener.on_mouse_button_event(b)

    # ── inspection ──────────────────────────────────────────────────

    @property
    def component(self) -> Any:
        return self._component

    @property
    def cursor_visible(self) -> bool:
        with self._lock:
            return self._grab.visible

    @property
    def grab_state(self) -> GrabState:
        with self._lock:
            return self._grab.state

    @property
    def cumulative(self) -> Point:
        with self._lock:
            return self._motion.cumulative

    # ── toolkit callbacks (UI thread) ───────────────────────────────

    def on_pressed(self, x: int, y: int, button: object, timestamp: int) -> None:
        self._enqueue_button(x, y, button, timestamp, True)

    def on_released(self, x: int, y: int, button: object, timestamp: int) -> None:
        self._enqueue_button(x, y, button, timestamp, False)

    def on_clicked(self, x: int, y: int, button: object, timestamp: int) -> None:
        # Press and release were already queued; a click would duplicate them.
        pass

    def on_entered(self, x: int, y: int) -> None:
        self._recenter_if_grabbed()

    def on_exited(self, x: int, y: int) -> None:
        self._recenter_if_grabbed()

    def on_dragged(self, x: int, y: int) -> None:
        self.on_moved(x, y)

    def on_moved(self, x: int, y: int) -> None:
        with self._lock:
            component = self._component
            if component is None:
                return
            if self._grab.recentering:
                rebase = self._grab.filter_move(x, y)
                if rebase is not None:
                    self._motion.rebase(rebase)
                return
            self._motion.apply_move(x, y)
            grabbed = not self._grab.visible
        if grabbed:
            self._recenter(component)

    def on_wheel(self, units: int) -> None:
        with self._lock:
            if self._component is None:
                return
            self._motion.apply_wheel(units * self.wheel_amp)

    # ── internals ───────────────────────────────────────────────────

    def _enqueue_button(self, x: int, y: int, button: object,
                        timestamp: int, pressed: bool) -> None:
        with self._lock:
            component = self._component
            if component is None:
                return
            _, height = self._host.component_size(component)
            self._queue.put(ButtonEvent(
                button_index=to_engine_button(button),
                pressed=pressed,
                x=x,
                y_engine=to_engine_y(y, height),
                timestamp=timestamp,
            ))

    def _recenter_if_grabbed(self) -> None:
        with self._lock:
            component = self._component
            grabbed = component is not None and not self._grab.visible
        if grabbed:
            self._recenter(component)

    def _recenter(self, component: Any) -> None:
        """Warp the pointer back to the grab centre (UI thread only)."""
        with self._lock:
            if component is not self._component:
                return
            width, height = self._host.component_size(component)
            target = self._grab.begin_recenter(width, height)
            warp = self._warp
        if target is None or warp is None:
            return
        screen = self._host.point_to_screen(component, target)
        warp(screen.x, screen.y)

    def _apply_cursor(self, component: Any, visible: bool) -> None:
        """Install the cursor for *visible* and, when hiding, park the pointer."""
        with self._lock:
            # A later bind or visibility toggle supersedes this request.
            if component is not self._component or self._grab.visible != visible:
                return
            if visible:
                cursor = None
            else:
                if self._transparent_cursor is None:
                    self._transparent_cursor = self._host.create_transparent_cursor()
                cursor = self._transparent_cursor
        self._host.install_cursor(component, cursor)
        if not visible:
            self._recenter(component)
