#!/usr/bin/env python3
"""
common/logging.py
=================

Rich console and file logging for `hcimporter`.

Console output goes to `stderr`, so the JSON document printed to `stdout`
stays machine-readable when the importer is used in a pipe.
"""

from __future__ import annotations

__author__ = "jslorrma"
__maintainer__ = "jslorrma"
__email__ = "jslorrma@gmail.com"

import logging
import os
import pathlib
from typing import TYPE_CHECKING

from rich.console import Console, ConsoleRenderable, RenderableType
from rich.logging import LogRender, RichHandler
from rich.text import Text, TextType
from rich.theme import Theme

from .. import LIBRARY_NAME

if TYPE_CHECKING:
    from collections.abc import Iterable
    from datetime import datetime

    from rich._log_render import FormatTimeCallable
    from rich.table import Table

# environment variable to set the log level
LOG_LEVEL_ENV = "HCIMPORT_LOG_LEVEL"

# setup theme
_logging_theme = Theme(
    {
        # repr
        "repr.str": "not bold not italic grey39",
        "repr.number": "#598A44",
        "repr.url": "not bold not italic underline #4585C9",
        "repr.path": "#4585C9",
        "repr.filename": "bold #4585C9",
        # logging
        "logging.level.debug": "not dim bold #598A44",
        "logging.level.info": "not dim #FED00B",
        "logging.level.warning": "not dim red3",
        "logging.level.error": "not dim bold red3",
        "logging.level.critical": "not dim bright_white on red3",
        # traceback
        "traceback.error": "bold red3",
        "traceback.border": "#4585C9",
        "traceback.title": "#4585C9",
        "traceback.exc_type": "bold red3",
        "traceback.exc_value": "#4585C9",
    }
)


class _LogRender(LogRender):
    # renders `[LEVEL time] message path:line`
    def __call__(  # noqa: PLR0913
        self,
        console: Console,
        renderables: Iterable[ConsoleRenderable],
        log_time: datetime | None = None,
        time_format: str | FormatTimeCallable | None = None,
        level: TextType = "",
        path: str | None = None,
        line_no: int | None = None,
        link_path: str | None = None,
    ) -> Table:
        from rich.containers import Renderables
        from rich.table import Table

        def _get_style(level: TextType):
            _name = level.plain if isinstance(level, Text) else str(level)
            return _logging_theme.styles.get(f"logging.level.{_name.strip().lower()}", None)

        output = Table.grid(padding=(0, 1), expand=True)
        output.add_column(style="log.level", width=self.level_width)
        output.add_column(style="log.time")
        output.add_column(ratio=1, style="log.message", overflow="fold")
        output.add_column(style="log.path")

        row: list[RenderableType] = []
        row.append(Text("[", style=_get_style(level)) + level)

        log_time = log_time or console.get_datetime()
        time_format = time_format or self.time_format
        row.append(
            time_format(log_time)
            if callable(time_format)
            else Text(f"{log_time.strftime(time_format)}]", style=_get_style(level))
        )

        row.append(Renderables(renderables))

        path_text = Text()
        path_text.append(path or "", style=f"link file://{link_path}" if link_path else "")
        if line_no:
            path_text.append(":")
            path_text.append(
                f"{line_no}", style=f"link file://{link_path}#{line_no}" if link_path else ""
            )
        row.append(path_text)

        output.add_row(*row)

        return output


class _RichHandler(RichHandler):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._log_render = _LogRender(time_format=kwargs.get("log_time_format"))
        self.setFormatter(logging.Formatter("[bold]%(name)s[/] - %(message)s"))


def get_logger(
    name: str | None = None,
    log_level: str | int | None = None,
    log: pathlib.Path | str | bool | None = None,
) -> logging.Logger:
    """
    Get a logger with the given name.

    Parameters
    ----------
    name : str
        The name of the logger.
    log_level : str | int, optional
        The log level of the logger. If not given, the value of the
        `HCIMPORT_LOG_LEVEL` environment variable is used.
    log : pathlib.Path | str | bool, optional
        Sets the logging behavior. Values may be a path for logs to be written
        to, `True` to log to stderr, or `False` to only show warnings and
        errors, by default `False`.

    Returns
    -------
    logging.Logger
        The logger with the given name.
    """
    log_level = log_level or os.getenv(LOG_LEVEL_ENV)
    log = log if log is not None else (log_level is not None)

    _logger = logging.getLogger(name or LIBRARY_NAME)
    _logger.propagate = False

    # replace the handler when the requested destination changed
    _wants_file = isinstance(log, str | pathlib.Path)
    if _logger.handlers and (
        (_wants_file and not isinstance(_logger.handlers[0], logging.FileHandler))
        or (not _wants_file and not isinstance(_logger.handlers[0], _RichHandler))
    ):
        for _handler in list(_logger.handlers):
            _logger.removeHandler(_handler)
            _handler.close()

    if not _logger.handlers:
        if _wants_file:
            _file_handler = logging.FileHandler(log)
            _file_handler.setFormatter(
                logging.Formatter(
                    "[%(levelname)s %(asctime)s %(name)s] : %(message)s",
                    datefmt="%Y-%m-%d %H:%M:%S",
                )
            )
            _logger.addHandler(_file_handler)
        else:
            _logger.addHandler(
                _RichHandler(
                    rich_tracebacks=True,
                    tracebacks_show_locals=False,
                    console=Console(stderr=True, theme=_logging_theme),
                    log_time_format="%Y-%m-%d %H:%M:%S",
                    markup=True,
                )
            )

    if not log:
        _logger.setLevel(logging.WARNING)
    else:
        _logger.setLevel(
            log_level.upper() if isinstance(log_level, str) else (log_level or logging.INFO)
        )

    return _logger
