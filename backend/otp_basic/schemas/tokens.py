from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from otp_basic.security.sanitizer import InputSanitizer

LABEL_MAX_LENGTH = 255


class RegisterIn(BaseModel):
    """Registration request."""
    model_config = ConfigDict(extra='forbid')

    # Omitted issuer falls back to the configured DEFAULT_ISSUER
    issuer: str | None = Field(default=None, min_length=1, max_length=LABEL_MAX_LENGTH)
    account_name: str = Field(min_length=1, max_length=LABEL_MAX_LENGTH)

    @field_validator('issuer', 'account_name')
    @classmethod
    def validate_label(cls, v: str | None) -> str | None:
        if v is None:
            return v
        return InputSanitizer.sanitize_label(v, max_length=LABEL_MAX_LENGTH)


class MasterTokenOut(BaseModel):
    id: str
    secret: str
    created_at: datetime
    is_active: bool
    issuer: str | None = None
    account_name: str | None = None


class RegisterOut(BaseModel):
    """Returned once, at registration; the only response that carries the secret."""
    master_token: MasterTokenOut
    provisioning_uri: str
    secret: str


class ValidateOTPIn(BaseModel):
    model_config = ConfigDict(extra='forbid')

    user_id: str = Field(min_length=1, max_length=64)
    # Length is not constrained here; a wrong-length code is just invalid
    otp: str = Field(min_length=1, max_length=32)


class ValidateOTPOut(BaseModel):
    valid: bool


class StatusOut(BaseModel):
    status: str
    user_id: str
    created_at: datetime
    is_active: bool
    timestamp: datetime


class CodeOut(BaseModel):
    code: str
    remaining_seconds: int
