# backend/otp_basic/store/sql.py
from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator, List, Optional

from sqlalchemy import exc as sa_exc
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from otp_basic.core.errors import (
    DuplicateIdError,
    NotFoundError,
    StorageError,
    StorageTimeoutError,
)
from otp_basic.crud import tokens as crud
from otp_basic.crypto.aead import SecretCipher
from otp_basic.db.init_db import init_db
from otp_basic.db.session import build_session_factory
from otp_basic.models.master_token import MasterToken
from otp_basic.store.base import TokenRecord, TokenStore, as_utc, check_page

logger = logging.getLogger(__name__)

# Placed in a record whose stored secret cannot be opened; CodeEngine
# rejects it as an invalid secret
UNREADABLE_SECRET = ""


class SqlTokenStore(TokenStore):
    """Durable store over any SQLAlchemy engine, one session per operation."""

    def __init__(self, engine: Engine, cipher: SecretCipher | None = None, create_schema: bool = True):
        self._engine = engine
        self._session_factory = build_session_factory(engine)
        self._cipher = cipher
        if create_schema:
            with self._errors("initialise schema"):
                init_db(engine)

    @contextmanager
    def _errors(self, action: str) -> Iterator[None]:
        try:
            yield
        except sa_exc.TimeoutError as e:
            logger.error("Token store timed out: %s", action)
            raise StorageTimeoutError(f"Timed out trying to {action}") from e
        except sa_exc.SQLAlchemyError as e:
            logger.error("Token store failed to %s: %s", action, e.__class__.__name__)
            raise StorageError(f"Failed to {action}") from e

    @contextmanager
    def _transaction(self, action: str) -> Iterator[Session]:
        with self._errors(action):
            with self._session_factory() as db, db.begin():
                yield db

    def _to_row(self, record: TokenRecord) -> MasterToken:
        secret = record.secret
        if self._cipher is not None:
            secret = self._cipher.seal(record.id, secret)
        return MasterToken(
            id=record.id,
            secret=secret,
            created_at=as_utc(record.created_at),
            is_active=record.is_active,
            issuer=record.issuer,
            account_name=record.account_name,
        )

    def _to_record(self, row: MasterToken) -> TokenRecord:
        secret = row.secret
        if self._cipher is not None:
            try:
                secret = self._cipher.open(row.id, row.secret)
            except ValueError:
                logger.error("Stored secret for token %s could not be decrypted", row.id)
                secret = UNREADABLE_SECRET
        return TokenRecord(
            id=row.id,
            secret=secret,
            created_at=as_utc(row.created_at),
            is_active=bool(row.is_active),
            issuer=row.issuer,
            account_name=row.account_name,
        )

    def create(self, record: TokenRecord) -> None:
        try:
            with self._transaction("create master token") as db:
                crud.insert_token(db, self._to_row(record))
        except StorageError as e:
            if isinstance(e.__cause__, sa_exc.IntegrityError):
                raise DuplicateIdError(record.id) from e.__cause__
            raise

    def get(self, token_id: str) -> Optional[TokenRecord]:
        with self._transaction("get master token") as db:
            row = crud.get_by_id(db, token_id)
            return self._to_record(row) if row is not None else None

    def update(self, record: TokenRecord) -> None:
        with self._transaction("update master token") as db:
            found = crud.update_token(db, record.id, is_active=record.is_active)
        if not found:
            raise NotFoundError(record.id)

    def list(self, limit: int = 50, offset: int = 0) -> List[TokenRecord]:
        check_page(limit, offset)
        with self._transaction("list master tokens") as db:
            return [self._to_record(row) for row in crud.list_tokens(db, limit, offset)]

    def delete(self, token_id: str) -> None:
        with self._transaction("delete master token") as db:
            found = crud.delete_token(db, token_id)
        if not found:
            raise NotFoundError(token_id)

    def close(self) -> None:
        self._engine.dispose()
