"""Logging setup for the cnp command line."""

from __future__ import annotations

import logging

import click

_LOGGER_NAME = "cnp"


class ClickEchoHandler(logging.Handler):
    """Send records to stderr through click.echo, resolved at emit time."""

    _colors = {
        logging.WARNING: "yellow",
        logging.ERROR: "red",
        logging.CRITICAL: "red",
    }

    def emit(self, record: logging.LogRecord) -> None:
        try:
            message = self.format(record)
            click.echo(click.style(message, fg=self._colors.get(record.levelno)), err=True)
        except Exception:
            self.handleError(record)


def configure_logging(*, verbose: bool = False) -> logging.Logger:
    """Configure the cnp logger; calling it again replaces the handler."""
    level = logging.DEBUG if verbose else logging.WARNING
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)

    for handler in list(logger.handlers):
        if isinstance(handler, ClickEchoHandler):
            logger.removeHandler(handler)

    handler = ClickEchoHandler(level)
    handler.setFormatter(logging.Formatter("[cnp] %(levelname)s %(message)s"))
    logger.addHandler(handler)
    return logger


__all__ = ["ClickEchoHandler", "configure_logging"]
