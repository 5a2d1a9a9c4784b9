"""Structured JSON logging with corpus context."""
import logging
import sys
from typing import Any

from pythonjsonlogger.json import JsonFormatter

from skill_catalog.config import get_settings


class DocumentContextFilter(logging.Filter):
    """Add corpus context to log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        """Add default context fields if not present."""
        if not hasattr(record, "document"):
            record.document = None
        if not hasattr(record, "manifest"):
            record.manifest = None
        if not hasattr(record, "kind"):
            record.kind = None
        return True


class CustomJsonFormatter(JsonFormatter):
    """Custom JSON formatter with standardized field names."""

    def add_fields(
        self,
        log_record: dict[str, Any],
        record: logging.LogRecord,
        message_dict: dict[str, Any],
    ) -> None:
        """Add custom fields to the log record."""
        super().add_fields(log_record, record, message_dict)

        if not log_record.get("timestamp"):
            log_record["timestamp"] = self.formatTime(record, self.datefmt)

        log_record["level"] = record.levelname
        log_record["logger"] = record.name

        # Context fields are dropped when empty
        for key in ("document", "manifest", "kind"):
            if not getattr(record, key, None):
                log_record.pop(key, None)


def setup_logging(level: str | None = None) -> None:
    """
    Configure logging for the CLI.

    Logs are written to stderr; stdout is reserved for command output
    such as the compressed index.
    """
    settings = get_settings()

    handler = logging.StreamHandler(sys.stderr)

    if settings.log_format == "json":
        formatter: logging.Formatter = CustomJsonFormatter(
            "%(timestamp)s %(level)s %(name)s %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S",
        )
    else:
        formatter = logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")
    handler.setFormatter(formatter)
    handler.addFilter(DocumentContextFilter())

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(level or settings.log_level)


class ContextLoggerAdapter(logging.LoggerAdapter):
    """LoggerAdapter that merges per-call extra with the adapter context."""

    def process(self, msg: Any, kwargs: Any) -> tuple[Any, Any]:
        kwargs["extra"] = {**(self.extra or {}), **kwargs.get("extra", {})}
        return msg, kwargs


def get_logger(name: str, **context: Any) -> ContextLoggerAdapter:
    """
    Get a logger with corpus context support.

    Args:
        name: Logger name (typically __name__)
        **context: Fields attached to every record from this adapter

    Returns:
        LoggerAdapter that can accept context in extra dict
    """
    logger = logging.getLogger(name)
    return ContextLoggerAdapter(logger, extra=context)


def with_document_context(
    document: str | None = None,
    manifest: str | None = None,
    kind: str | None = None,
    **kwargs: Any,
) -> dict[str, Any]:
    """Build an extra dict carrying corpus context for logger calls."""
    extra = kwargs.copy()
    if document:
        extra["document"] = document
    if manifest:
        extra["manifest"] = manifest
    if kind:
        extra["kind"] = kind
    return extra
