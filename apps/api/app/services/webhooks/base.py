"""Webhook handler interface."""

from __future__ import annotations

from typing import ClassVar, Protocol

from fastapi import Request, Response
from sqlalchemy.orm import Session

WebhookResult = dict | Response


class WebhookHandler(Protocol):
    """An inbound integration mounted at /webhooks/{name}."""

    name: ClassVar[str]

    async def handle(self, request: Request, db: Session, **kwargs) -> WebhookResult:
        """Verify, parse and apply one webhook delivery."""
