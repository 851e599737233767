# main.py
from __future__ import annotations
import sys
import logging
from pathlib import Path

from PySide6.QtWidgets import QApplication, QMessageBox

from app.config import load_config
from app.errors import TypiError
from app.themes import load_custom_themes
from ui.main_window import MainWindow


def setup_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        handlers=[
            logging.StreamHandler(sys.stdout),
            logging.FileHandler("typi.log", encoding="utf-8"),
        ],
        force=True,
    )

    # Log any uncaught exceptions rather than silently dying
    def excepthook(exctype, value, tb):
        logging.critical("Unhandled exception", exc_info=(exctype, value, tb))
        if QApplication.instance() is not None:
            QMessageBox.critical(
                None, "Application Error", f"{exctype.__name__}: {value}"
            )
        sys.exit(1)

    sys.excepthook = excepthook


def load_stylesheet(app: QApplication) -> None:
    qss = Path("resources/style.qss")
    if qss.exists():
        try:
            app.setStyleSheet(qss.read_text(encoding="utf-8"))
        except OSError as e:
            logging.warning("Failed to load stylesheet: %s", e)


def main() -> int:
    setup_logging()
    app = QApplication.instance() or QApplication(sys.argv)
    app.setApplicationName("Typi")
    app.setOrganizationName("Typi")

    try:
        config = load_config()
    except TypiError as e:
        logging.error("Startup aborted: %s", e)
        QMessageBox.critical(None, "Typi", str(e))
        return 1
    logging.getLogger().setLevel(getattr(logging, config.log_level.upper(), logging.INFO))

    load_custom_themes()
    load_stylesheet(app)

    win = MainWindow(config)
    win.show()
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
