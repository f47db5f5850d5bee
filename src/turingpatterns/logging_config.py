"""
Logging Configuration
Sets up the package logger for the engine, the worker thread and the CLI.
"""
import logging
import sys
from typing import Optional, Union

PACKAGE_LOGGER = "turingpatterns"

# Stepping runs on a QThread, so records carry the thread name
LOG_FORMAT = '%(asctime)s - %(threadName)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%H:%M:%S'


def setup_logging(level: Union[int, str] = logging.INFO, log_file: Optional[str] = None) -> logging.Logger:
    """
    Configures the 'turingpatterns' logger namespace.

    Args:
        level: Logging level, as a number (logging.DEBUG) or a name ("DEBUG").
        log_file: Optional path to also write the log to (overwritten).

    Returns:
        The configured package logger.
    """
    if isinstance(level, str):
        name = level.upper()
        level = logging.getLevelName(name)
        if not isinstance(level, int):
            raise ValueError(f"Unknown logging level: {name}")

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)

    # Calling this again (tests, repeated CLI runs) replaces the handlers
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

    logger.debug(f"Logging initialized at {logging.getLevelName(level)}"
                 + (f", writing to {log_file}." if log_file else "."))
    return logger
