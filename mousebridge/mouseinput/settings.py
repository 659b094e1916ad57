"""Persisted input preferences (``QSettings``)."""

import logging
from dataclasses import dataclass

from PySide6.QtCore import QSettings

from .models import WHEEL_AMP

logger = logging.getLogger(__name__)

ORGANIZATION = "MouseBridge"
APPLICATION = "MouseBridge"


@dataclass
class InputSettings:
    """User-tunable input options.

    ``wheel_amp`` scales every raw wheel unit; ``start_grabbed`` hides
    and grabs the cursor as soon as the view is shown.
    """
    wheel_amp: int = WHEEL_AMP
    start_grabbed: bool = False

    @staticmethod
    def load(settings: QSettings | None = None) -> "InputSettings":
        """Read settings, falling back to defaults for bad or missing values."""
        s = settings if settings is not None else QSettings(ORGANIZATION, APPLICATION)
        amp = _positive_int(s.value("input/wheelAmp"), WHEEL_AMP)
        grabbed = str(s.value("input/startGrabbed", "false")).lower() in ("1", "true", "yes")
        return InputSettings(wheel_amp=amp, start_grabbed=grabbed)

    def save(self, settings: QSettings | None = None) -> None:
        s = settings if settings is not None else QSettings(ORGANIZATION, APPLICATION)
        s.setValue("input/wheelAmp", self.wheel_amp)
        s.setValue("input/startGrabbed", self.start_grabbed)


def _positive_int(value: object, default: int) -> int:
    if value is None:
        return default
    try:
        n = int(value)  # type: ignore[call-overload]
    except (TypeError, ValueError):
        logger.warning("Ignoring invalid setting value %r", value)
        return default
    return n if n > 0 else default
