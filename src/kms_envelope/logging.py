"""Structured logging for kms-envelope.

Library code logs through structlog on top of stdlib ``logging``. Until an
application calls ``configure_logging`` the ``kms_envelope`` logger only has
a ``NullHandler``, so importing the library prints nothing. The CLI calls
``configure_logging``, which switches to JSON lines on stderr with the keys
``ts``, ``level``, ``msg`` and ``component``, plus the ``op`` and
``key_name`` bound by the operation that is running.

Payloads (plaintext, ciphertext, digests, signatures) are never logged.
"""
from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

ROOT_LOGGER = "kms_envelope"


def _level(name: str | None) -> int:
    value = logging.getLevelName((name or "info").upper())
    return value if isinstance(value, int) else logging.INFO


def _shared_processors() -> list[Any]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.processors.TimeStamper(fmt="iso", key="ts"),
        structlog.stdlib.add_log_level,
        structlog.processors.EventRenamer("msg"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.JSONRenderer(),
    ]


def use_library_defaults() -> None:
    """Route structlog events to stdlib loggers that stay silent by default."""

    logging.getLogger(ROOT_LOGGER).addHandler(logging.NullHandler())
    if structlog.is_configured():
        return
    structlog.configure(
        processors=[structlog.stdlib.filter_by_level, *_shared_processors()],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )


def configure_logging(level: str | None = None) -> None:
    """Emit JSON lines on stderr at ``level`` (default ``info``).

    Stderr keeps command output on stdout machine readable. Loggers are not
    cached, so calling this again takes effect for existing module loggers.
    """

    numeric_level = _level(level)
    logging.basicConfig(
        level=numeric_level,
        handlers=[logging.StreamHandler(sys.stderr)],
        format="%(message)s",
        force=True,
    )
    structlog.configure(
        processors=_shared_processors(),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        cache_logger_on_first_use=False,
    )


def get_logger(name: str = ROOT_LOGGER) -> Any:
    return structlog.get_logger(name, component=name)


use_library_defaults()


__all__ = ["configure_logging", "get_logger", "use_library_defaults"]
