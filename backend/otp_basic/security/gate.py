# backend/otp_basic/security/gate.py
"""
Request-time OTP gate.

A call starts unauthenticated and ends either authenticated (the verified
token id is returned) or rejected (a GateError is raised). Nothing carries
over between calls.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from otp_basic.core.errors import InvalidCredentialError, MissingCredentialsError
from otp_basic.services.credentials import CredentialManager

logger = logging.getLogger(__name__)

USER_ID_HEADER = "X-User-ID"
OTP_HEADER = "X-OTP"
USER_ID_FIELD = "user_id"
OTP_FIELD = "otp"

MISSING_CREDENTIALS_DETAIL = (
    "Missing OTP credentials. Provide X-User-ID and X-OTP headers "
    "or JSON body with user_id and otp"
)


@dataclass(frozen=True)
class Credentials:
    user_id: str
    otp: str

    def __repr__(self) -> str:
        return f"Credentials(user_id={self.user_id!r}, otp=<redacted>)"


def _text(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


def _pair(user_id: Any, otp: Any) -> Optional[Credentials]:
    user_id, otp = _text(user_id), _text(otp)
    if user_id and otp:
        return Credentials(user_id=user_id, otp=otp)
    return None


class AuthGate:
    def __init__(self, manager: CredentialManager):
        self.manager = manager

    @staticmethod
    def from_headers(headers: Mapping[str, str]) -> Optional[Credentials]:
        """Header credentials, or None unless both values are non-blank."""
        return _pair(headers.get(USER_ID_HEADER), headers.get(OTP_HEADER))

    def extract(self, headers: Mapping[str, str], body: Optional[Mapping[str, Any]] = None) -> Credentials:
        """Headers win when they carry both values; otherwise the body is tried."""
        creds = self.from_headers(headers)
        if creds is None and isinstance(body, Mapping):
            creds = _pair(body.get(USER_ID_FIELD), body.get(OTP_FIELD))
        if creds is None:
            raise MissingCredentialsError(MISSING_CREDENTIALS_DETAIL)
        return creds

    def authenticate(self, headers: Mapping[str, str], body: Optional[Mapping[str, Any]] = None) -> str:
        creds = self.extract(headers, body)
        if not self.manager.validate_code(creds.user_id, creds.otp):
            logger.info("Rejected OTP for user %s", creds.user_id)
            raise InvalidCredentialError("Invalid OTP")
        return creds.user_id
