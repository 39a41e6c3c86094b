import logging
import sys

LOG_FORMAT = "[todo] %(levelname)s %(message)s"


def setup_logging(level: str = "WARNING") -> logging.Logger:
    """Route the package logger to the current stderr at the given level.

    Called once per invocation; a previously installed handler is replaced so
    records never go to a stale stream.
    """
    logger = logging.getLogger("todo")
    logger.setLevel(level)
    for handler in list(logger.handlers):
        if getattr(handler, "_todo_handler", False):
            logger.removeHandler(handler)
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._todo_handler = True
    logger.addHandler(handler)
    logger.propagate = False
    return logger
