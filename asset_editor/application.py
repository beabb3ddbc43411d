"""Application factory — logging setup, QApplication creation, theme loading."""

import logging
import os
from pathlib import Path

from PyQt6.QtCore import QtMsgType, qInstallMessageHandler
from PyQt6.QtGui import QFont
from PyQt6.QtWidgets import QApplication

from asset_editor.constants import APP_NAME, APP_ORGANIZATION

LOG_LEVEL_ENV = "ASSET_EDITOR_LOG_LEVEL"

_qt_logger = logging.getLogger("qt")

_QT_LEVELS = {
    QtMsgType.QtDebugMsg: logging.DEBUG,
    QtMsgType.QtInfoMsg: logging.INFO,
    QtMsgType.QtWarningMsg: logging.WARNING,
    QtMsgType.QtCriticalMsg: logging.ERROR,
    QtMsgType.QtFatalMsg: logging.CRITICAL,
}


def _qt_message_handler(msg_type, context, message):
    """Route Qt messages into logging.

    Suppresses harmless QPainter warnings that occur when Qt's style
    engine creates image caches for widgets before they have a valid size.
    """
    if "QPainter" in message:
        return
    if "Paint device returned engine == 0" in message:
        return
    _qt_logger.log(_QT_LEVELS.get(msg_type, logging.WARNING), message)


def configure_logging() -> None:
    """basicConfig at INFO, or at the level named by ASSET_EDITOR_LOG_LEVEL."""
    name = os.environ.get(LOG_LEVEL_ENV, "INFO").upper()
    level = logging.getLevelName(name)
    if not isinstance(level, int):
        level = logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def create_application(argv: list[str]) -> QApplication:
    """Create and configure the QApplication instance."""
    configure_logging()
    qInstallMessageHandler(_qt_message_handler)

    app = QApplication(argv)
    app.setApplicationName(APP_NAME)
    app.setOrganizationName(APP_ORGANIZATION)

    # Font
    font = QFont("Segoe UI", 10)
    font.setStyleHint(QFont.StyleHint.SansSerif)
    app.setFont(font)

    # Dark theme QSS
    qss_path = Path(__file__).parent / "ui" / "styles" / "dark_theme.qss"
    if qss_path.exists():
        app.setStyleSheet(qss_path.read_text(encoding="utf-8"))

    return app
