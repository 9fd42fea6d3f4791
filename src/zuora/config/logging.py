"""structlog setup for the ``zuora`` logger tree.

structlog events and plain stdlib records share one processor chain and
one stderr handler. ``log_json`` swaps the console layout for JSON
lines. Event keys that carry credentials are masked before rendering.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

from zuora.wire.envelope import PASSWORD_MASK

PACKAGE_LOGGER = "zuora"
# Transport libraries stay at WARNING even in verbose mode.
QUIET_LOGGERS = ("httpx", "httpcore")
SECRET_KEYS = frozenset({"password", "session_key", "token"})


def redact_secrets(_logger: Any, _method: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """Mask credential-bearing keys in an event."""
    for key in SECRET_KEYS.intersection(event_dict):
        event_dict[key] = PASSWORD_MASK
    return event_dict


def _shared_processors() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        redact_secrets,
    ]


def _renderer(log_json: bool) -> structlog.types.Processor:
    if log_json:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


def configure_logging(*, verbose: bool = False, log_json: bool = False) -> None:
    """Route zuora and stdlib records through structlog to stderr.

    Args:
        verbose: ``zuora`` loggers emit DEBUG (SOAP payloads, session
            events); otherwise WARNING and above.
        log_json: JSON lines instead of the console layout.

    Repeated calls replace the root handler rather than stacking one.
    """
    shared = _shared_processors()
    structlog.configure(
        processors=[*shared, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(log_json),
            ],
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(logging.WARNING)

    logging.getLogger(PACKAGE_LOGGER).setLevel(logging.DEBUG if verbose else logging.WARNING)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
