"""
Logging configuration for filesearch.

The interactive screen owns the terminal, so logs go to a file there. The
one-shot command line mode logs to stderr through rich.
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

from .models.config import LoggingConfig


LOG_FORMAT = "%(asctime)s %(levelname)s [%(threadName)s] %(name)s: %(message)s"


def configure_logging(config: LoggingConfig, console: Optional[Console] = None) -> logging.Logger:
    """
    Install handlers on the ``filesearch`` logger.

    Args:
        config: Logging settings
        console: When given, log to this console with rich instead of a file

    Returns:
        The configured package logger
    """
    package_logger = logging.getLogger("filesearch")
    package_logger.setLevel(config.get_level())
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()

    if console is not None:
        package_logger.addHandler(RichHandler(console=console, show_path=False, rich_tracebacks=True))
    else:
        log_path = config.get_file_path()
        if log_path is None:
            package_logger.addHandler(logging.NullHandler())
        else:
            try:
                log_path.parent.mkdir(parents=True, exist_ok=True)
                file_handler = logging.FileHandler(log_path, encoding="utf-8")
            except OSError:
                # no usable log file and the terminal belongs to the screen
                package_logger.addHandler(logging.NullHandler())
            else:
                file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
                package_logger.addHandler(file_handler)

    package_logger.propagate = False
    return package_logger
