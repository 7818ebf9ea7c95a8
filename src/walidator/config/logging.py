"""Logging setup for the walidator CLI.

Records from structlog and from plain ``logging.getLogger(__name__)``
loggers both end up on stderr, rendered by structlog: a console layout by
default, one JSON object per line with ``--log-json``.

While a command runs, :func:`bind_command` attaches the command name and its
arguments (the rule being checked, the document being validated) to every
record, so a plugin warning can be traced back to the invocation that
triggered it.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

LOGGER_NAME = "walidator"
HANDLER_NAME = "walidator-stderr"


def _shared_processors(*, log_json: bool) -> list[structlog.types.Processor]:
    processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
    ]
    if log_json:
        # Plugin failures are logged with exc_info; keep the traceback as data.
        processors.append(structlog.processors.dict_tracebacks)
    return processors


def _renderer(*, log_json: bool) -> structlog.types.Processor:
    if log_json:
        return structlog.processors.JSONRenderer(sort_keys=True)
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


def configure_logging(*, verbose: bool = False, log_json: bool = False) -> None:
    """Route walidator logging to stderr.

    Calling it again replaces the handler installed by the previous call;
    handlers installed by anything else are left alone.

    Args:
        verbose: Show DEBUG records from ``walidator.*`` loggers.
        log_json: Render JSON lines instead of the console layout.
    """
    shared = _shared_processors(log_json=log_json)

    structlog.configure(
        processors=[*shared, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(HANDLER_NAME)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(log_json=log_json),
            ],
        )
    )

    root = logging.getLogger()
    for existing in [h for h in root.handlers if h.get_name() == HANDLER_NAME]:
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(logging.WARNING)

    logging.getLogger(LOGGER_NAME).setLevel(logging.DEBUG if verbose else logging.WARNING)
    logging.getLogger("pluggy").setLevel(logging.WARNING)


def bind_command(command: str, **context: Any) -> None:
    """Tag every following record with *command* and *context*.

    Context from an earlier command is dropped first.
    """
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(command=command, **context)
