"""Observability package."""
from skill_catalog.observability.logging import (
    get_logger,
    setup_logging,
    with_document_context,
)

__all__ = ["get_logger", "setup_logging", "with_document_context"]
