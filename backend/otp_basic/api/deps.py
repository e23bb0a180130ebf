# backend/otp_basic/api/deps.py
from __future__ import annotations

import json
from typing import Any, Mapping, Optional

from fastapi import Depends, HTTPException, Request, status
from starlette.concurrency import run_in_threadpool

from otp_basic.core.config import Settings
from otp_basic.core.errors import InvalidCredentialError, MissingCredentialsError
from otp_basic.security.gate import AuthGate
from otp_basic.services.credentials import CredentialManager


def get_credential_manager(request: Request) -> CredentialManager:
    return request.app.state.credentials


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_auth_gate(request: Request) -> AuthGate:
    return request.app.state.auth_gate


async def _json_body(request: Request) -> Optional[Mapping[str, Any]]:
    """Parsed JSON object body, or None when absent or not an object."""
    raw = await request.body()
    if not raw:
        return None
    try:
        data = json.loads(raw)
    except (UnicodeDecodeError, ValueError):
        return None
    return data if isinstance(data, dict) else None


async def require_otp(request: Request, gate: AuthGate = Depends(get_auth_gate)) -> str:
    """
    Dependency: admit the call only with a valid (user id, OTP) pair.
    Looks at X-User-ID / X-OTP headers first, then a JSON body.
    Returns the verified user id, also stored on request.state.user_id.
    Raises: HTTPException 400 if credentials are missing, 401 if invalid
    """
    headers = request.headers
    body = None
    if gate.from_headers(headers) is None:
        body = await _json_body(request)

    try:
        user_id = await run_in_threadpool(gate.authenticate, headers, body)
    except MissingCredentialsError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except InvalidCredentialError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid OTP")

    request.state.user_id = user_id
    return user_id


def get_user_id(request: Request, _verified: str = Depends(require_otp)) -> str:
    """Verified user id placed on the request by require_otp."""
    user_id = getattr(request.state, "user_id", None)
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="User ID not found in context",
        )
    return user_id
