import logging

from . import config


def get_logger(name: str) -> logging.Logger:
    """
    Configure and return a project-level logger.

    Handlers write to stderr; stdout is reserved for the stdio transport.
    """
    logger = logging.getLogger(name)

    if not logger.handlers:
        logger.setLevel(config.LOG_LEVEL)

        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            fmt="%(asctime)s | %(levelname)s | %(name)s | %(message)s"
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger
