"""Structured logging helpers."""

import logging
from typing import Any

from app.core.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def configure_logging() -> None:
    """Configure root logging once from LOG_LEVEL."""
    logging.basicConfig(level=settings.LOG_LEVEL.upper(), format=LOG_FORMAT)


def build_log_context(
    *,
    request_id: str | None = None,
    route: str | None = None,
    method: str | None = None,
    status_code: int | None = None,
    program_type: str | None = None,
) -> dict[str, Any]:
    """Return a log context dict for `extra=` (contact details are never included)."""
    context: dict[str, Any] = {}
    if request_id:
        context["request_id"] = request_id
    if route:
        context["route"] = route
    if method:
        context["method"] = method
    if status_code is not None:
        context["status_code"] = status_code
    if program_type:
        context["program_type"] = program_type
    return context
