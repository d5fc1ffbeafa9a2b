import logging
import sys
from photo_retoucher.config import settings

# Map string level names to logging constants
LOG_LEVEL_MAP = {
    'DEBUG': logging.DEBUG,
    'INFO': logging.INFO,
    'WARNING': logging.WARNING,
    'ERROR': logging.ERROR,
    'CRITICAL': logging.CRITICAL
}

# Get the desired level from settings, default to INFO if invalid or not found
log_level_str = str(getattr(settings, 'LOGGING_LEVEL', 'INFO')).upper()
log_level = LOG_LEVEL_MAP.get(log_level_str, logging.INFO)

log_formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')

# Console Handler
console_handler = logging.StreamHandler(sys.stdout)
console_handler.setFormatter(log_formatter)

_configured_loggers = []


def get_logger(name):
    """
    Gets a logger instance configured with the application's settings.
    """
    logger = logging.getLogger(name)
    logger.setLevel(log_level)

    # Prevent adding handlers multiple times if get_logger is called repeatedly for the same name
    if not logger.handlers:
        logger.addHandler(console_handler)

    logger.propagate = False
    if logger not in _configured_loggers:
        _configured_loggers.append(logger)

    return logger


def set_log_level(level_name):
    """Change the level of every logger handed out by get_logger (used by the CLI)."""
    global log_level
    level = LOG_LEVEL_MAP.get(str(level_name).upper())
    if level is None:
        raise ValueError(f"Unknown log level '{level_name}'")
    log_level = level
    for logger in _configured_loggers:
        logger.setLevel(level)
    return level
