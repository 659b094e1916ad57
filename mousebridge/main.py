"""MouseBridge — demo window for the pump-driven mouse input adapter."""

import logging
import sys
from PySide6.QtWidgets import QApplication
from mouseinput.settings import InputSettings
from mouseinput.version import __version__
from mouseinput.widgets.engine_view import EngineView

logging.basicConfig(
    level=logging.INFO,
    format="%(name)s | %(levelname)s | %(message)s",
)

_logger = logging.getLogger(__name__)


def _global_exception_handler(exc_type, exc_value, exc_tb):
    """Log unhandled exceptions instead of crashing silently."""
    if issubclass(exc_type, KeyboardInterrupt):
        sys.__excepthook__(exc_type, exc_value, exc_tb)
        return
    _logger.critical("Unhandled exception", exc_info=(exc_type, exc_value, exc_tb))


def main() -> None:
    """Application entry point — creates QApplication and shows the engine view."""
    sys.excepthook = _global_exception_handler

    app = QApplication(sys.argv)
    app.setApplicationName("MouseBridge")
    app.setApplicationVersion(__version__)

    settings = InputSettings.load()
    _logger.info("Wheel amplification: %d", settings.wheel_amp)

    view = EngineView(settings)
    view.setWindowTitle(f"MouseBridge v{__version__}")
    view.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
