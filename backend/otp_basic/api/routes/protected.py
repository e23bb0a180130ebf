# backend/otp_basic/api/routes/protected.py
from __future__ import annotations

from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException, status

from otp_basic.api.deps import get_credential_manager, get_user_id, require_otp
from otp_basic.core.errors import UnknownTokenError
from otp_basic.schemas.tokens import CodeOut, StatusOut
from otp_basic.services.credentials import CredentialManager

router = APIRouter(prefix="/api", tags=["protected"], dependencies=[Depends(require_otp)])


@router.get("/status", response_model=StatusOut)
def get_status(
    user_id: str = Depends(get_user_id),
    manager: CredentialManager = Depends(get_credential_manager),
):
    token = manager.get_token(user_id)
    if token is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Master token not found")

    return StatusOut(
        status="authenticated",
        user_id=user_id,
        created_at=token.created_at,
        is_active=token.is_active,
        timestamp=datetime.now(timezone.utc),
    )


@router.get("/protected-data")
def get_protected_data(user_id: str = Depends(get_user_id)):
    return {
        "message": "This is protected data",
        "user_id": user_id,
        "data": {
            "secret_info": "This information is only accessible with valid OTP",
            "timestamp": datetime.now(timezone.utc).isoformat(),
        },
    }


@router.get("/code", response_model=CodeOut)
def get_code(
    user_id: str = Depends(get_user_id),
    manager: CredentialManager = Depends(get_credential_manager),
):
    try:
        code = manager.generate_code(user_id)
    except UnknownTokenError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Master token not found")
    return CodeOut(code=code, remaining_seconds=manager.engine.remaining_seconds(manager.clock()))


@router.post("/deactivate")
def deactivate(
    user_id: str = Depends(get_user_id),
    manager: CredentialManager = Depends(get_credential_manager),
):
    try:
        manager.deactivate(user_id)
    except UnknownTokenError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Master token not found")
    return {"status": "deactivated", "user_id": user_id}
