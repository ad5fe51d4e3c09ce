"""Cal.com booking webhook handler."""

from __future__ import annotations

import hashlib
import hmac
import json
import logging

from fastapi import HTTPException, Request
from sqlalchemy.orm import Session

from app.core.config import settings
from app.services import booking_service

logger = logging.getLogger(__name__)

# Trigger events that create a booking row; others are acknowledged and ignored
INGESTED_TRIGGERS = {"BOOKING_CREATED"}


def verify_cal_signature(body: bytes, signature: str, secret: str) -> bool:
    """Cal.com signs the raw body with HMAC-SHA256 (hex) in X-Cal-Signature-256."""
    expected = hmac.new(secret.encode("utf-8"), body, hashlib.sha256).hexdigest()
    return hmac.compare_digest(expected, signature.strip())


async def _read_body_safe(request: Request) -> bytes:
    max_bytes = settings.CAL_WEBHOOK_MAX_PAYLOAD_BYTES
    content_length = request.headers.get("content-length")
    if content_length:
        try:
            if int(content_length) > max_bytes:
                raise HTTPException(413, "Payload too large")
        except ValueError:
            pass

    chunks: list[bytes] = []
    total = 0
    async for chunk in request.stream():
        if not chunk:
            continue
        total += len(chunk)
        if total > max_bytes:
            raise HTTPException(413, "Payload too large")
        chunks.append(chunk)
    return b"".join(chunks)


class CalWebhookHandler:
    name = "cal"

    async def handle(self, request: Request, db: Session, **kwargs):
        """
        Receive Cal.com booking webhooks.

        Security:
        - Validates X-Cal-Signature-256 when CAL_WEBHOOK_SECRET is set
        - Enforces CAL_WEBHOOK_MAX_PAYLOAD_BYTES

        Processing:
        - Finds or creates the attendee's contact
        - Inserts one booking row per BOOKING_CREATED event
        """
        body = await _read_body_safe(request)

        if settings.CAL_WEBHOOK_SECRET:
            signature = request.headers.get("X-Cal-Signature-256", "")
            if not signature:
                logger.warning("Cal.com webhook missing signature")
                raise HTTPException(403, "Missing signature")
            if not verify_cal_signature(body, signature, settings.CAL_WEBHOOK_SECRET):
                logger.warning("Cal.com webhook invalid signature")
                raise HTTPException(403, "Invalid signature")

        try:
            data = json.loads(body)
        except json.JSONDecodeError:
            raise HTTPException(400, "Invalid JSON")
        if not isinstance(data, dict):
            raise HTTPException(400, "No booking data found")

        trigger = data.get("triggerEvent")
        if trigger and trigger not in INGESTED_TRIGGERS:
            logger.info("Cal.com webhook ignored trigger: %s", trigger)
            return {"success": True, "ignored": trigger}

        try:
            booking = booking_service.ingest_cal_booking(db, data)
        except booking_service.BookingPayloadError as exc:
            raise HTTPException(400, str(exc)) from exc

        return {"success": True, "booking_id": str(booking.id)}
