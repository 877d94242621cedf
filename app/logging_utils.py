"""
Logging configuration for the application
"""
import logging
from typing import Iterable, Optional, Union

DEFAULT_LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(level: Union[int, str] = logging.INFO,
                      handlers: Optional[Iterable[logging.Handler]] = None) -> logging.Logger:
    """
    Configure the root logger

    Calling it again replaces the handlers added by a previous call.

    Args:
        level: Log level (number or name such as "INFO")
        handlers: Handlers to install instead of the default stderr handler

    Returns:
        logging.Logger: The root logger
    """
    logger = logging.getLogger()
    logger.setLevel(level.upper() if isinstance(level, str) else level)

    for handler in [h for h in logger.handlers if getattr(h, "_portal_handler", False)]:
        logger.removeHandler(handler)

    if handlers is None:
        stream_handler = logging.StreamHandler()
        stream_handler.setFormatter(logging.Formatter(DEFAULT_LOG_FORMAT))
        handlers = [stream_handler]

    for handler in handlers:
        handler._portal_handler = True
        logger.addHandler(handler)

    return logger
