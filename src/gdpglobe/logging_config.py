"""
Logging Configuration
Sets up the 'gdpglobe' logger, tones down chatty HTTP client libraries and forwards
Qt's own warnings into the same handlers.
"""
import logging
import sys
from typing import Iterable, Optional

from PySide6.QtCore import QtMsgType, qInstallMessageHandler

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%H:%M:%S'

# Third-party loggers that log every request at INFO/DEBUG
NOISY_LOGGERS: tuple[str, ...] = ("urllib3", "httpx", "httpcore", "google_genai")

_QT_LEVELS = {
    QtMsgType.QtDebugMsg: logging.DEBUG,
    QtMsgType.QtInfoMsg: logging.INFO,
    QtMsgType.QtWarningMsg: logging.WARNING,
    QtMsgType.QtCriticalMsg: logging.ERROR,
    QtMsgType.QtFatalMsg: logging.CRITICAL,
}


def setup_logging(
    level: int = logging.INFO,
    log_file: Optional[str] = None,
    quiet: Iterable[str] = NOISY_LOGGERS,
) -> None:
    """
    Configures the logger of the 'gdpglobe' namespace.

    Args:
        level: Logging level (e.g. logging.DEBUG, logging.INFO)
        log_file: Optional path to save logs to a file.
        quiet: Logger names raised to WARNING unless `level` is DEBUG.
    """
    logger = logging.getLogger("gdpglobe")
    logger.setLevel(level)

    # Avoid duplicate handlers when setup runs twice in one process
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode='w', encoding='utf-8'))
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    if level > logging.DEBUG:
        for name in quiet:
            logging.getLogger(name).setLevel(logging.WARNING)

    qInstallMessageHandler(_qt_message_handler)
    logger.info("Logging initialized.")


def _qt_message_handler(mode: QtMsgType, context, message: str) -> None:
    logging.getLogger("gdpglobe.qt").log(_QT_LEVELS.get(mode, logging.WARNING), message)


def parse_level(name: Optional[str], default: int = logging.INFO) -> int:
    """Translate a level name such as 'debug' into a logging constant."""
    if not name:
        return default
    level = logging.getLevelName(name.strip().upper())
    return level if isinstance(level, int) else default
