"""logging_config.py - Package Logger Setup"""
import logging
import sys
from typing import Optional

__all__ = ['setup_logging']

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> logging.Logger:
    """Attaches console and optional file handlers to the :code:`sdf_dom`
    logger. Loaders only emit records; applications call this once.

    :param level: Logger and handler level, defaults to :code:`logging.INFO`
    :type level: int, optional

    :param log_file: Path of a log file to write as well, defaults to None
    :type log_file: str | None, optional

    :return: Package logger
    :rtype: logging.Logger
    """
    logger = logging.getLogger('sdf_dom')
    logger.setLevel(level)

    # Repeated calls replace handlers
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt='%H:%M:%S')

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode='w', encoding='utf-8'))

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.debug("Logging initialized for %d handler(s)", len(handlers))
    return logger
