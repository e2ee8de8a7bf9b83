import logging
import os
import sys
from pathlib import Path

from PySide6.QtCore import QCoreApplication
from PySide6.QtWidgets import QApplication

from lyricdeck.ui_main import LyricDeckWindow

def main():
    logging.basicConfig(
        level=os.environ.get("LYRICDECK_LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    QCoreApplication.setOrganizationName("LyricDeck")
    QCoreApplication.setApplicationName("LyricDeck")

    if sys.platform.startswith("linux"):
        os.environ.setdefault("QT_QPA_PLATFORM", "xcb")

    app = QApplication(sys.argv)

    base_dir = Path(__file__).resolve().parent
    window = LyricDeckWindow(base_dir)
    window.show_configured()

    sys.exit(app.exec())

if __name__ == "__main__":
    main()
