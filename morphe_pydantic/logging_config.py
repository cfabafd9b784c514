"""Logging setup shared by every morphe_pydantic module.

Modules obtain their logger with ``get_logger(__name__)``; the CLI calls
``setup_logging`` once to route records through a rich handler.
"""

import logging

from rich.logging import RichHandler

LOGGER_NAME = "morphe_pydantic"


def setup_logging(verbose: bool = False, level: int | None = None) -> logging.Logger:
    """Configure the package logger.

    Args:
        verbose: Emit debug diagnostics (soft degradations included).
        level: Explicit level, overrides ``verbose``.

    Returns:
        The configured package logger.
    """
    if level is None:
        level = logging.DEBUG if verbose else logging.WARNING

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(show_time=False, show_path=verbose, markup=False)
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)

    for handler in logger.handlers:
        handler.setLevel(level)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Return a logger living under the package namespace."""
    if name != LOGGER_NAME and not name.startswith(LOGGER_NAME + "."):
        name = f"{LOGGER_NAME}.{name}"
    return logging.getLogger(name)
