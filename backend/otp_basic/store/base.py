# backend/otp_basic/store/base.py
from __future__ import annotations

import abc
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Optional


@dataclass(frozen=True)
class TokenRecord:
    """
    A registered master token.

    Frozen so that a record handed out by a store can never alias the
    store's own state; use dataclasses.replace() to derive a changed copy.
    """

    id: str
    secret: str = field(repr=False)
    created_at: datetime
    is_active: bool = True
    issuer: Optional[str] = None
    account_name: Optional[str] = None


class TokenStore(abc.ABC):
    """
    Repository of TokenRecords keyed by id.

    Every method is atomic with respect to concurrent callers: a get never
    observes a half-written record and create never overwrites.
    """

    @abc.abstractmethod
    def create(self, record: TokenRecord) -> None:
        """Insert a new record. Raises DuplicateIdError if the id exists."""

    @abc.abstractmethod
    def get(self, token_id: str) -> Optional[TokenRecord]:
        """Return the record, or None when no such id exists."""

    @abc.abstractmethod
    def update(self, record: TokenRecord) -> None:
        """
        Persist the is_active flag of an existing record.

        Every other field is write-once; values passed for them are ignored.
        Raises NotFoundError if the id does not exist.
        """

    @abc.abstractmethod
    def list(self, limit: int = 50, offset: int = 0) -> List[TokenRecord]:
        """Records ordered newest first, ties broken by id descending."""

    @abc.abstractmethod
    def delete(self, token_id: str) -> None:
        """Remove a record. Raises NotFoundError if the id does not exist."""

    def close(self) -> None:
        """Release backend resources."""


def as_utc(value: datetime) -> datetime:
    # Naive values (SQLite hands these back) are taken to be UTC already
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def check_page(limit: int, offset: int) -> None:
    if limit < 0 or offset < 0:
        raise ValueError("limit and offset must not be negative")
