"""Webhooks router - inbound integrations."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from app.core.deps import get_db
from app.core.rate_limit import WEBHOOK_LIMIT, limiter
from app.services.webhooks.registry import get_handler

router = APIRouter(prefix="/webhooks", tags=["webhooks"])
logger = logging.getLogger(__name__)


@router.post("/{provider}")
@limiter.limit(WEBHOOK_LIMIT)
async def receive_webhook(
    provider: str,
    request: Request,
    db: Session = Depends(get_db),
):
    """Dispatch a webhook delivery to the handler registered for the provider."""
    try:
        handler = get_handler(provider)
    except KeyError:
        logger.warning("Webhook for unknown provider: %s", provider)
        raise HTTPException(status_code=404, detail="Unknown webhook provider")
    return await handler.handle(request, db)
