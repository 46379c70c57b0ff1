# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

import logging
import os

from rich.console import Console
from rich.logging import RichHandler

from .config import CFG


def get_logger(name: str, show_time: bool | None = None) -> logging.Logger:
    """
    Return the logger of an rmq module.

    Messages are written to stderr using rich's RichHandler so that they are kept
    apart from the queue reports printed to stdout. Debug messages are only
    emitted if the `RMQ_DEBUG` environment variable is set.

    Args:
        name (str): Name of the logger, usually `__name__` of the module.
        show_time (bool | None): Prefix messages with a timestamp.
            If None, timestamps are shown only in debug mode.

    Returns:
        logging.Logger: The configured logger.
    """
    logger = logging.getLogger(name)

    debug_mode = os.environ.get(CFG.env_vars.debug_mode) is not None
    level = logging.DEBUG if debug_mode else logging.INFO
    logger.setLevel(level)
    logger.propagate = False

    # a module may ask for its logger more than once
    if logger.handlers:
        for handler in logger.handlers:
            handler.setLevel(level)
        return logger

    handler = RichHandler(
        console=Console(stderr=True),
        rich_tracebacks=True,
        show_path=False,
        show_level=True,
        show_time=debug_mode if show_time is None else show_time,
        log_time_format=CFG.date_formats.standard,
        tracebacks_width=None,
        tracebacks_code_width=None,
    )
    handler.setLevel(level)
    logger.addHandler(handler)

    return logger
