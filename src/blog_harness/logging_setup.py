"""Root logger setup shared by the reference API and the harness CLI."""
import logging
import os
from typing import Optional

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

CONSOLE_HANDLER_NAME = 'blog_harness.console'


def _find_handler(root_logger: logging.Logger, name: str) -> Optional[logging.Handler]:
    for handler in root_logger.handlers:
        if handler.get_name() == name:
            return handler
    return None


def configure_logging(level: str = 'INFO', log_file: Optional[str] = None) -> None:
    """
    Attach a stream handler (and optionally a file handler) to the root logger.

    Safe to call repeatedly: handlers added by an earlier call are reused
    with the new level instead of being added again.
    Falls back to basicConfig if the log file cannot be opened.
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    formatter = logging.Formatter(LOG_FORMAT)
    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)

    stream_handler = _find_handler(root_logger, CONSOLE_HANDLER_NAME)
    if stream_handler is None:
        stream_handler = logging.StreamHandler()
        stream_handler.set_name(CONSOLE_HANDLER_NAME)
        stream_handler.setFormatter(formatter)
        root_logger.addHandler(stream_handler)
    stream_handler.setLevel(numeric_level)

    logger = logging.getLogger(__name__)
    if not log_file:
        logger.debug(f"Logging initialized at level {level}")
        return

    file_handler_name = f"blog_harness.file:{os.path.abspath(log_file)}"
    file_handler = _find_handler(root_logger, file_handler_name)
    if file_handler is not None:
        file_handler.setLevel(numeric_level)
        return

    try:
        file_handler = logging.FileHandler(log_file, mode='a')
        file_handler.set_name(file_handler_name)
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)
        logger.info(f"Logging initialized to {log_file} at level {level}")
    except OSError as e:
        logging.basicConfig(level=numeric_level)
        logger.error(f"Failed to setup file logging: {e}")
