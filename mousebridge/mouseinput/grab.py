"""Cursor grab — hidden cursor with relative motion via continuous recentering.

While the cursor is hidden, every real move is followed by a synthetic
warp back to a centre point.  The toolkit reports that warp as an
ordinary move, so the controller has to tell the echo apart from user
motion:

* after a warp is issued the controller is ``RECENTERING`` and every
  raw move is a suppression candidate;
* a move landing exactly on the centre is the echo; the delta origin
  is re-based there and the controller returns to ``ARMED``;
* echoes can be dropped, merged with user motion or land a pixel off
  under DPI scaling, so after :data:`RECENTER_EVENT_LIMIT` suppressed
  moves the next one is accepted as the new delta origin anyway.

This module holds state only.  Issuing the warp and installing cursors
is the adapter's job, and all calls are made under the adapter's lock.
"""

import logging
from typing import Optional

from .models import RECENTER_EVENT_LIMIT, GrabState, Point

logger = logging.getLogger(__name__)


class GrabController:
    """Visibility, grab point and the recenter state machine."""

    def __init__(self, can_warp: bool = True,
                 event_limit: int = RECENTER_EVENT_LIMIT) -> None:
        self.can_warp = can_warp
        self.event_limit = event_limit
        self.visible: bool = True
        self.reset()

    def reset(self) -> None:
        """Drop the grab point and any pending recenter.

        Visibility is a user setting and survives re-binding.
        """
        # None means "no known pointer position": recenter to the middle
        self.grab_point: Optional[Point] = None
        self.center: Point = Point()
        self.recentering: bool = False
        self.events_since_recenter: int = 0

    @property
    def state(self) -> GrabState:
        if self.visible:
            return GrabState.FREE
        if self.recentering:
            return GrabState.RECENTERING
        return GrabState.ARMED

    # ── visibility ──────────────────────────────────────────────────

    def set_visible(self, visible: bool, anchor: Optional[Point]) -> bool:
        """Change cursor visibility.  Returns False if nothing changed.

        *anchor* is the last known pointer position in component
        coordinates, or None when the pointer has not been seen yet.
        Hiding captures it as the grab point; showing cancels any
        pending recenter.
        """
        if self.visible == visible:
            return False
        self.visible = visible
        if visible:
            self.recentering = False
            self.events_since_recenter = 0
        else:
            self.grab_point = anchor
        return True

    # ── recentering ─────────────────────────────────────────────────

    def resolve_center(self, width: int, height: int) -> Point:
        """Where the pointer is parked while grabbed, in component coords."""
        if self.grab_point is None:
            return Point(width // 2, height // 2)
        return self.grab_point

    def begin_recenter(self, width: int, height: int) -> Optional[Point]:
        """Arm suppression and return the warp target in component coords.

        Returns None when the cursor is visible or no warp facility
        exists; in the latter case grab degrades to a plain hidden
        cursor and motion keeps flowing unfiltered.
        """
        if self.visible or not self.can_warp:
            return None
        self.center = self.resolve_center(width, height)
        self.recentering = True
        self.events_since_recenter = 0
        logger.debug("Recentering to (%d, %d)", self.center.x, self.center.y)
        return self.center

    def filter_move(self, x: int, y: int) -> Optional[Point]:
        """Classify a raw move that arrived while recentering.

        Returns the point to re-base the delta origin on when the
        recenter is over (echo matched or limit hit), or None when the
        move is suppressed.  Either way the move contributes nothing to
        cumulative motion.
        """
        if x == self.center.x and y == self.center.y:
            logger.debug("Warp echo matched at (%d, %d)", x, y)
        elif self.events_since_recenter >= self.event_limit:
            logger.debug(
                "No warp echo after %d moves, re-basing at (%d, %d)",
                self.events_since_recenter, x, y,
            )
        else:
            self.events_since_recenter += 1
            return None
        self.recentering = False
        return Point(x, y)
