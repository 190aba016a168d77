"""Fields router -- ABN, phone, email and AHPRA registration checks."""

from __future__ import annotations

from fastapi import APIRouter

from ahpra_check.fields.validators import (
    validate_abn,
    validate_ahpra_registration,
    validate_australian_phone,
    validate_healthcare_email,
)

from web.backend.app.models.api import AbnResponse, FieldRequest, ValidationResultResponse

router = APIRouter(prefix="/api/fields", tags=["fields"])


@router.post("/abn", response_model=AbnResponse)
async def check_abn(request: FieldRequest):
    return AbnResponse(abn=request.value, is_valid=validate_abn(request.value))


@router.post("/phone", response_model=ValidationResultResponse)
async def check_phone(request: FieldRequest):
    """Classify and format an Australian phone number."""
    return ValidationResultResponse(**validate_australian_phone(request.value).to_dict())


@router.post("/email", response_model=ValidationResultResponse)
async def check_email(request: FieldRequest):
    return ValidationResultResponse(**validate_healthcare_email(request.value).to_dict())


@router.post("/ahpra", response_model=ValidationResultResponse)
async def check_ahpra_registration(request: FieldRequest):
    return ValidationResultResponse(**validate_ahpra_registration(request.value).to_dict())
