# backend/otp_basic/api/routes/tokens.py
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import JSONResponse

from otp_basic.api.deps import get_app_settings, get_credential_manager
from otp_basic.core.config import Settings
from otp_basic.core.errors import EntropyError, StorageError
from otp_basic.schemas.tokens import (
    MasterTokenOut,
    RegisterIn,
    RegisterOut,
    ValidateOTPIn,
    ValidateOTPOut,
)
from otp_basic.services.credentials import CredentialManager

logger = logging.getLogger(__name__)

router = APIRouter(tags=["tokens"])


@router.post("/register", response_model=RegisterOut, status_code=status.HTTP_201_CREATED)
def register(
    payload: RegisterIn,
    manager: CredentialManager = Depends(get_credential_manager),
    settings: Settings = Depends(get_app_settings),
):
    issuer = payload.issuer or settings.default_issuer
    try:
        reg = manager.register(issuer, payload.account_name)
    except (StorageError, EntropyError):
        logger.exception("Registration failed")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to register master token",
        )

    rec = reg.record
    return RegisterOut(
        master_token=MasterTokenOut(
            id=rec.id,
            secret=rec.secret,
            created_at=rec.created_at,
            is_active=rec.is_active,
            issuer=rec.issuer,
            account_name=rec.account_name,
        ),
        provisioning_uri=reg.provisioning_uri,
        secret=rec.secret,
    )


@router.post("/validate-otp", response_model=ValidateOTPOut)
def validate_otp(payload: ValidateOTPIn, manager: CredentialManager = Depends(get_credential_manager)):
    # Same body for wrong code, unknown id and inactive id
    try:
        valid = manager.validate_code(payload.user_id, payload.otp)
    except StorageError:
        logger.exception("OTP validation failed")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to validate OTP",
        )
    code = status.HTTP_200_OK if valid else status.HTTP_401_UNAUTHORIZED
    return JSONResponse(status_code=code, content=ValidateOTPOut(valid=valid).model_dump())
