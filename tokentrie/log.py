import logging
import sys

CONSOLE_LOG_FORMAT = "[%(levelname)s] %(name)s: %(message)s"

LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
}


def setup_logger(name: str = "tokentrie", level: str = "info", console: bool = True) -> logging.Logger:
    """Set up and return a logger with a single stdout handler."""
    logger = logging.getLogger(name)
    logger.setLevel(LEVELS.get(level.lower(), logging.INFO))
    if logger.handlers:  # avoid stacking handlers on repeated calls
        return logger

    if console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(logging.Formatter(CONSOLE_LOG_FORMAT))
        logger.addHandler(console_handler)

    return logger


def get_logger(name: str, **kwargs) -> logging.Logger:
    return setup_logger(name, **kwargs)
