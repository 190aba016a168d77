"""Privacy router -- anonymize analytics payloads before they leave the practice."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter

from ahpra_check.privacy.anonymize import anonymize

from web.backend.app.models.api import AnonymizeRequest

router = APIRouter(prefix="/api/privacy", tags=["privacy"])


@router.post("/anonymize", response_model=dict[str, Any])
async def anonymize_record(request: AnonymizeRequest):
    return anonymize(request.record, request.level)
