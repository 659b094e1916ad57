"""Core data models for the mouse input bridge.

Defines the value types passed between the toolkit side and the engine
side: points, button indices, the two engine event types, and the
listener interface the engine implements.  All coordinates handed to
the engine are in **engine space** (origin bottom-left, y up).
"""

from dataclasses import dataclass
from enum import Enum, IntEnum


WHEEL_AMP = 40  # toolkit wheel units are much coarser than native gaming input
RECENTER_EVENT_LIMIT = 5  # suppressed moves tolerated before a lost warp echo is assumed
BUTTON_COUNT = 3


@dataclass(frozen=True)
class Point:
    """An integer pixel position."""
    x: int = 0
    y: int = 0

    def offset(self, dx: int, dy: int) -> "Point":
        """Return a new point moved by ``(dx, dy)``."""
        return Point(self.x + dx, self.y + dy)


ORIGIN = Point(0, 0)


class MouseButton(IntEnum):
    """Engine button indices."""
    LEFT = 0
    MIDDLE = 1
    RIGHT = 2


class GrabState(Enum):
    """Observable state of the cursor grab.

    * ``FREE`` — cursor visible, no recentering.
    * ``ARMED`` — cursor hidden, pointer at the grab centre.
    * ``RECENTERING`` — a warp was issued and its echo is awaited.
    """
    FREE = "free"
    ARMED = "armed"
    RECENTERING = "recentering"


@dataclass
class MotionEvent:
    """Coalesced pointer motion delivered once per pump.

    ``x``/``y`` are absolute engine-space coordinates of the pointer;
    ``dx``/``dy`` are relative engine-space deltas since the previous
    motion event.  ``wheel`` is the accumulated wheel position and
    ``dwheel`` the change reported with this event.
    """
    x: int
    y: int
    dx: int
    dy: int
    wheel: int
    dwheel: int

    def to_dict(self) -> dict:
        return {
            "x": self.x,
            "y": self.y,
            "dx": self.dx,
            "dy": self.dy,
            "wheel": self.wheel,
            "dwheel": self.dwheel,
        }


@dataclass
class ButtonEvent:
    """A button press or release.

    ``y_engine`` is already flipped into engine space.  ``timestamp`` is
    the toolkit's own event time (ms); it is not comparable with
    :meth:`InputAdapter.input_time_nanos`.
    """
    button_index: MouseButton
    pressed: bool
    x: int
    y_engine: int
    timestamp: int = 0

    def to_dict(self) -> dict:
        return {
            "button": int(self.button_index),
            "pressed": self.pressed,
            "x": self.x,
            "y": self.y_engine,
            "timestamp": self.timestamp,
        }


class RawInputListener:
    """Engine-side receiver of translated mouse events.

    Subclass and override the callbacks you care about.  Both are called
    from the thread that runs :meth:`InputAdapter.pump`.
    """

    def on_mouse_motion_event(self, evt: MotionEvent) -> None:
        pass

    def on_mouse_button_event(self, evt: ButtonEvent) -> None:
        pass
