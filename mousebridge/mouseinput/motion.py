"""Motion accumulator — turns raw toolkit positions into coalesced engine motion.

Raw positions arrive in toolkit space (top-left origin, y down).  Each
real move adds its delta to a cumulative absolute position that is
never touched by recentering; at pump time the difference between that
position and the snapshot taken at the previous emission becomes the
engine's ``dx``/``dy``.  Any number of raw moves between two pumps
collapse into a single :class:`MotionEvent`.

The accumulator is not synchronised itself; :class:`InputAdapter`
guards it together with the grab controller under one lock.
"""

from typing import Optional

from .mapping import to_engine_y
from .models import ORIGIN, MotionEvent, Point


class MotionAccumulator:
    """Cumulative pointer and wheel state between pumps."""

    def __init__(self) -> None:
        self.reset()

    def reset(self) -> None:
        """Forget everything; used when the adapter is re-bound."""
        self.cumulative: Point = ORIGIN
        self.wheel: int = 0
        self.last_raw: Point = ORIGIN
        # True once the toolkit has reported a real pointer position
        self.position_known: bool = False
        self._last_emitted: Point = ORIGIN
        self._last_emitted_wheel: int = 0
        self.dirty: bool = False

    # ── raw input ───────────────────────────────────────────────────

    def apply_move(self, rx: int, ry: int) -> None:
        """Record a real pointer move; the delta is taken from ``last_raw``."""
        dx = rx - self.last_raw.x
        dy = ry - self.last_raw.y
        self.cumulative = self.cumulative.offset(dx, dy)
        self.last_raw = Point(rx, ry)
        self.position_known = True
        self.dirty = True

    def rebase(self, point: Point) -> None:
        """Move the delta origin without contributing to ``cumulative``.

        Used after a warp so the next real move is measured from where
        the pointer was put, not from where the user left it.
        """
        self.last_raw = point
        self.position_known = True

    def apply_wheel(self, amount: int) -> None:
        """Add an already amplified wheel amount."""
        self.wheel += amount
        self.dirty = True

    # ── pump ────────────────────────────────────────────────────────

    def take_event(self, height: int) -> Optional[MotionEvent]:
        """Return the coalesced motion since the last call, or None if idle.

        Clears the dirty flag and moves the emission snapshot forward.
        """
        if not self.dirty:
            return None
        evt = MotionEvent(
            x=self.last_raw.x,
            y=to_engine_y(self.last_raw.y, height),
            dx=self.cumulative.x - self._last_emitted.x,
            # toolkit y grows downward, engine y grows upward
            dy=self._last_emitted.y - self.cumulative.y,
            wheel=self.wheel,
            dwheel=self._last_emitted_wheel - self.wheel,
        )
        self._last_emitted = self.cumulative
        self._last_emitted_wheel = self.wheel
        self.dirty = False
        return evt
