# backend/otp_basic/models/master_token.py
from datetime import datetime

from sqlalchemy import Boolean, DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from otp_basic.db.base import Base


class MasterToken(Base):
    __tablename__ = "master_tokens"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)

    # base32 text, or base64 AES-GCM blob when secret encryption is enabled
    secret: Mapped[str] = mapped_column(Text, nullable=False)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), index=True, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    issuer: Mapped[str | None] = mapped_column(String(255), nullable=True)
    account_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
