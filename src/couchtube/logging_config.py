"""Logging configuration and custom formatters for Couchtube.

This module provides the log record factory, context filter and formatters
used by the service. Logs are emitted either in a human-readable form that
appends structured ``extra`` fields, or as JSON lines.
"""

from contextvars import ContextVar, Token
import json
import logging
from logging.config import dictConfig
import sys
from typing import Any, Literal

_original_log_record_factory = logging.getLogRecordFactory()


def custom_record_factory(*args: Any, **kwargs: Any) -> logging.LogRecord:
    """Create a log record carrying structured exception details.

    Walks the exception chain of ``exc_info`` (if any), collecting the public
    attributes of every exception (e.g. ``video_id`` or ``channel_name``) and
    the message of each link in the chain.

    Args:
        *args: Arguments passed to the original log record factory.
        **kwargs: Keyword arguments passed to the original log record factory.

    Returns:
        LogRecord with ``exc_custom_attrs`` and ``semantic_trace`` set when an
        exception is attached.
    """
    record = _original_log_record_factory(*args, **kwargs)

    if record.exc_info and record.exc_info[1]:
        collected_attrs: dict[str, Any] = {}
        semantic_chain_messages: list[str] = []

        current_exc: BaseException | None = record.exc_info[1]
        while current_exc:
            for name, val in vars(current_exc).items():
                if not name.startswith("_") and name not in collected_attrs:
                    if val is not None:
                        collected_attrs[name] = val
            semantic_chain_messages.append(
                str(current_exc) or type(current_exc).__name__
            )
            current_exc = current_exc.__cause__ or current_exc.__context__

        if collected_attrs:
            record.exc_custom_attrs = collected_attrs
        record.semantic_trace = semantic_chain_messages

    return record


_context_id_var: ContextVar[str | None] = ContextVar("context_id", default=None)


def set_context_id(context_id: str) -> Token[str | None]:
    """Set the context ID for the current async context.

    Every log record emitted within the context carries the ID via
    ``ContextIdFilter``.

    Args:
        context_id: The context identifier (e.g., "populate-1640995200").

    Returns:
        Token that restores the previous context ID when passed to
        ``reset_context_id``.
    """
    return _context_id_var.set(context_id)


def reset_context_id(token: Token[str | None]) -> None:
    """Restore the context ID that was active before ``set_context_id``."""
    _context_id_var.reset(token)


class ContextIdFilter(logging.Filter):
    """Inject the current context_id into log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        """Attach the active context_id, if any.

        Args:
            record: The log record to modify.

        Returns:
            Always True to allow the record to be processed.
        """
        context_id = _context_id_var.get()
        if context_id is not None:
            record.context_id = context_id
        return True


_should_include_stacktrace: bool = False

# LogRecord attributes that are never rendered as extras
_STANDARD_ATTRS = frozenset(
    {
        "args",
        "asctime",
        "created",
        "exc_info",
        "exc_text",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "module",
        "msecs",
        "message",
        "msg",
        "name",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "stack_info",
        "thread",
        "threadName",
        "context_id",
        "taskName",
        "exc_custom_attrs",
        "semantic_trace",
        "color_message",
    }
)


def _format_extra_value(value: Any) -> str:
    if isinstance(value, dict | list | tuple):
        try:
            return json.dumps(value, sort_keys=True, separators=(", ", ":"))
        except TypeError:
            return f"[Unserializable Value: {type(value).__name__}]"  # type: ignore
    return str(value)


class HumanReadableExtrasFormatter(logging.Formatter):
    """Formatter for human-readable logs with extra fields.

    Output looks like::

        2024-01-01 12:00:00 INFO [couchtube.x] CtxID:populate-1 channel_name:A - Message

    Exceptions are rendered either as a full stack trace or, when stack traces
    are disabled, as the chain of exception messages.
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format a log record with extra fields appended.

        Args:
            record: The log record to format.

        Returns:
            Formatted log message string.
        """
        prefix_parts = [
            self.formatTime(record, self.datefmt),
            record.levelname,
            f"[{record.name}]",
        ]
        ctx_id = getattr(record, "context_id", None)
        if ctx_id is not None:
            prefix_parts.append(f"CtxID:{ctx_id}")

        extras: dict[str, Any] = {}
        exc_custom_attrs = getattr(record, "exc_custom_attrs", None)
        if isinstance(exc_custom_attrs, dict):
            extras.update(exc_custom_attrs)  # type: ignore
        for key, value in record.__dict__.items():
            if key not in _STANDARD_ATTRS and not key.startswith("_"):
                extras[key] = value

        parts = [" ".join(prefix_parts)]
        if extras:
            parts.append(
                " ".join(
                    f"{key}:{_format_extra_value(value)}"
                    for key, value in extras.items()
                )
            )
        parts.append(f"- {record.getMessage()}")
        final_log_string = " ".join(parts)

        if record.exc_info:
            if _should_include_stacktrace:
                if not record.exc_text:
                    record.exc_text = self.formatException(record.exc_info)
                if record.exc_text:
                    final_log_string += "\n" + record.exc_text
            else:
                semantic_trace: list[str] | None = getattr(
                    record, "semantic_trace", None
                )
                if semantic_trace:
                    final_log_string += f"\nError: {semantic_trace[0]}"
                    for msg in semantic_trace[1:]:
                        final_log_string += f"\n  Caused by: {msg}"

        if record.stack_info:
            final_log_string += "\n" + self.formatStack(record.stack_info)

        return final_log_string


LOGGING_CONFIG: dict[str, Any] = {
    "version": 1,
    "disable_existing_loggers": False,
    "filters": {
        "context_id_filter": {
            "()": ContextIdFilter,
        },
    },
    "formatters": {
        "human_readable_formatter": {
            "()": HumanReadableExtrasFormatter,
            "datefmt": "%Y-%m-%d %H:%M:%S",
        },
        "json_formatter": {
            "()": "pythonjsonlogger.json.JsonFormatter",
            "format": "%(asctime)s %(levelname)s %(name)s %(message)s",
        },
    },
    "handlers": {
        "console_handler": {
            "class": "logging.StreamHandler",
            "formatter": "human_readable_formatter",
            "stream": "ext://sys.stdout",
            "filters": ["context_id_filter"],
        },
    },
    "loggers": {
        "couchtube": {
            "handlers": ["console_handler"],
            "level": "INFO",
            "propagate": False,
        },
        "uvicorn.error": {
            "handlers": ["console_handler"],
            "level": "INFO",
            "propagate": False,
        },
    },
    "root": {
        "handlers": ["console_handler"],
        "level": "WARNING",
    },
}


def setup_logging(
    log_format_type: Literal["human", "json"],
    app_log_level_name: str,
    include_stacktrace: bool,
) -> None:
    """Configure logging for the application.

    Args:
        log_format_type: Format for logs ('human' or 'json').
        app_log_level_name: Logging level name (e.g., 'INFO', 'DEBUG').
        include_stacktrace: Whether to include full stack traces in error logs.
    """
    global _should_include_stacktrace
    _should_include_stacktrace = include_stacktrace

    logging.setLogRecordFactory(custom_record_factory)

    log_level_upper = app_log_level_name.upper()
    if not isinstance(getattr(logging, log_level_upper, None), int):
        print(
            f"Warning: Invalid LOG_LEVEL '{app_log_level_name}'. Defaulting to INFO.",
            file=sys.stderr,
        )
        log_level_upper = "INFO"
    LOGGING_CONFIG["loggers"]["couchtube"]["level"] = log_level_upper

    match log_format_type.lower():
        case "json":
            LOGGING_CONFIG["handlers"]["console_handler"]["formatter"] = (
                "json_formatter"
            )
        case _:
            LOGGING_CONFIG["handlers"]["console_handler"]["formatter"] = (
                "human_readable_formatter"
            )

    dictConfig(LOGGING_CONFIG)
