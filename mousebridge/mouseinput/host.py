"""The toolkit surface the input adapter depends on.

:class:`InputAdapter` never touches widgets directly.  Everything it
needs from the windowing toolkit goes through a :class:`MouseHost`:
registering callbacks, component geometry, screen mapping, warping the
pointer, cursor changes and running code on the UI thread.
``QtMouseHost`` is the PySide6 implementation; tests use a fake.
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, Tuple

from .models import Point

Warp = Callable[[int, int], None]


class WarpUnavailable(RuntimeError):
    """The synthetic pointer-warp facility could not be created."""


class MouseSink:
    """Callbacks a host delivers raw toolkit events to.

    Coordinates are component-relative toolkit coordinates (top-left
    origin, y down).  ``timestamp`` is the toolkit event time in ms.
    """

    def on_pressed(self, x: int, y: int, button: object, timestamp: int) -> None:
        pass

    def on_released(self, x: int, y: int, button: object, timestamp: int) -> None:
        pass

    def on_clicked(self, x: int, y: int, button: object, timestamp: int) -> None:
        pass

    def on_entered(self, x: int, y: int) -> None:
        pass

    def on_exited(self, x: int, y: int) -> None:
        pass

    def on_moved(self, x: int, y: int) -> None:
        pass

    def on_dragged(self, x: int, y: int) -> None:
        pass

    def on_wheel(self, units: int) -> None:
        pass


class MouseHost(ABC):
    """Abstract base class for windowing-toolkit bindings.

    A binding that leaves any method unimplemented cannot be
    instantiated.
    """

    @abstractmethod
    def attach(self, component: Any, sink: MouseSink) -> None:
        """Start delivering *component*'s mouse events to *sink*."""

    @abstractmethod
    def detach(self, component: Any, sink: MouseSink) -> None:
        """Stop delivering *component*'s mouse events to *sink*."""

    @abstractmethod
    def component_size(self, component: Any) -> Tuple[int, int]:
        """Return ``(width, height)`` of *component* in pixels."""

    @abstractmethod
    def point_to_screen(self, component: Any, point: Point) -> Point:
        """Map a component-relative point to global screen coordinates."""

    @abstractmethod
    def create_warp(self) -> Warp:
        """Return a ``warp(screen_x, screen_y)`` callable.

        Raises:
            WarpUnavailable: if the platform refuses synthetic pointer
                moves.
        """

    @abstractmethod
    def marshal(self, thunk: Callable[[], None]) -> None:
        """Run *thunk* later on the UI thread (never synchronously)."""

    @abstractmethod
    def install_cursor(self, component: Any, cursor: Any) -> None:
        """Set *component*'s cursor; ``None`` restores the default."""

    @abstractmethod
    def create_transparent_cursor(self) -> Any:
        """Return a 1×1 fully transparent cursor."""
