"""Logging setup shared by the generator and the CLI."""

import logging

from rich.logging import RichHandler

LOGGER_NAME = "proto_lisp"


def get_logger(name: str) -> logging.Logger:
    """Return a logger under the package namespace.

    Args:
        name: Usually ``__name__`` of the calling module.
    """
    if not name.startswith(LOGGER_NAME):
        name = f"{LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def configure_logging(level: int | str = logging.WARNING, use_rich: bool = True) -> None:
    """Attach a console handler to the package logger.

    Calling this again replaces the previous handler instead of stacking.

    Args:
        level: Log level for the package logger.
        use_rich: Render records through rich instead of a plain stream.
    """
    root = logging.getLogger(LOGGER_NAME)
    for handler in list(root.handlers):
        root.removeHandler(handler)

    if use_rich:
        handler: logging.Handler = RichHandler(
            show_time=False, show_path=False, markup=False
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
    else:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter("%(levelname)s %(name)s: %(message)s")
        )

    root.addHandler(handler)
    root.setLevel(level)
    root.propagate = False
