"""HTTP client for the program report endpoints."""

from __future__ import annotations

import logging
from datetime import date
from typing import Any
from uuid import UUID

import httpx

from app.core.deps import CSRF_HEADER, CSRF_HEADER_VALUE
from app.schemas.program import ProgramTypeListItem, ProgramTypeRead
from app.schemas.report import EntryForm, ReportRead

logger = logging.getLogger(__name__)


class ReportsClient:
    """Thin async wrapper over the reports API; raises httpx errors on failure."""

    def __init__(self, http: httpx.AsyncClient):
        self._http = http
        self._http.headers.setdefault(CSRF_HEADER, CSRF_HEADER_VALUE)

    async def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        response = await self._http.request(method, path, **kwargs)
        if response.status_code >= 400:
            logger.warning(
                "Reports API error method=%s path=%s status=%s", method, path, response.status_code
            )
        response.raise_for_status()
        return response

    async def list_program_types(self) -> list[ProgramTypeListItem]:
        response = await self._request("GET", "/program-types")
        return [ProgramTypeListItem.model_validate(item) for item in response.json()]

    async def get_program_type(self, program_type_id: UUID) -> ProgramTypeRead:
        response = await self._request("GET", f"/program-types/{program_type_id}")
        return ProgramTypeRead.model_validate(response.json())

    async def fetch_report(
        self,
        program_type_id: UUID,
        date_from: date | None = None,
        date_to: date | None = None,
        request_seq: int | None = None,
    ) -> ReportRead:
        params: dict[str, str] = {}
        if date_from:
            params["date_from"] = date_from.isoformat()
        if date_to:
            params["date_to"] = date_to.isoformat()
        if request_seq is not None:
            params["request_seq"] = str(request_seq)
        response = await self._request("GET", f"/reports/{program_type_id}", params=params)
        return ReportRead.model_validate(response.json())

    async def get_form(self, program_type_id: UUID, entry_id: UUID | None = None) -> EntryForm:
        params = {"entry_id": str(entry_id)} if entry_id else None
        response = await self._request("GET", f"/reports/{program_type_id}/form", params=params)
        return EntryForm.model_validate(response.json())

    async def create_entry(self, program_type_id: UUID, payload: dict[str, Any]) -> dict[str, Any]:
        response = await self._request(
            "POST", f"/reports/{program_type_id}/entries", json=payload
        )
        return response.json()

    async def update_entry(
        self, program_type_id: UUID, entry_id: UUID, payload: dict[str, Any]
    ) -> dict[str, Any]:
        response = await self._request(
            "PUT", f"/reports/{program_type_id}/entries/{entry_id}", json=payload
        )
        return response.json()

    async def delete_entry(self, program_type_id: UUID, entry_id: UUID) -> None:
        await self._request("DELETE", f"/reports/{program_type_id}/entries/{entry_id}")

    async def set_booking_report_data(
        self, program_type_id: UUID, booking_id: UUID, data: dict[str, Any]
    ) -> dict[str, Any]:
        response = await self._request(
            "PUT",
            f"/reports/{program_type_id}/bookings/{booking_id}/report-data",
            json={"data": data},
        )
        return response.json()
