# backend/otp_basic/services/credentials.py
"""
Master token lifecycle: registration, code generation, validation and
provisioning.

The manager holds no token state of its own; it is handed a TokenStore at
construction so each app (or test) owns its store explicitly.
"""
from __future__ import annotations

import dataclasses
import logging
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, List, Optional

from otp_basic.core.errors import DuplicateIdError, StorageError, UnknownTokenError
from otp_basic.security.provisioning import build_totp_uri
from otp_basic.security.secrets import SecretGenerator
from otp_basic.security.totp import CodeEngine
from otp_basic.store.base import TokenRecord, TokenStore

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Registration:
    record: TokenRecord
    provisioning_uri: str


class CredentialManager:
    def __init__(
        self,
        store: TokenStore,
        engine: CodeEngine | None = None,
        secrets: SecretGenerator | None = None,
        clock: Clock = utcnow,
    ):
        self.store = store
        self.engine = engine or CodeEngine()
        self.secrets = secrets or SecretGenerator()
        self.clock = clock
        # Unknown and inactive ids are checked against this so they take the
        # same path as a wrong code
        self._decoy_secret = self.secrets.generate()

    def _active(self, token_id: str) -> Optional[TokenRecord]:
        record = self.store.get(token_id)
        if record is None or not record.is_active:
            return None
        return record

    def register(self, issuer: str, account_name: str) -> Registration:
        """
        Create an active master token and its provisioning URI.

        The secret is returned here and nowhere else. On failure nothing is
        persisted and the secret is dropped.
        """
        secret = self.secrets.generate()
        record = TokenRecord(
            id=str(uuid.uuid4()),
            secret=secret,
            created_at=self.clock(),
            is_active=True,
            issuer=issuer,
            account_name=account_name,
        )
        try:
            self.store.create(record)
        except DuplicateIdError as e:
            raise StorageError("Failed to register master token") from e

        logger.info("Registered master token %s", record.id)
        uri = build_totp_uri(
            secret,
            issuer,
            account_name,
            digits=self.engine.digits,
            period=self.engine.interval,
        )
        return Registration(record=record, provisioning_uri=uri)

    def generate_code(self, token_id: str) -> str:
        record = self._active(token_id)
        if record is None:
            raise UnknownTokenError(token_id)
        return self.engine.derive_code(record.secret, self.clock())

    def validate_code(self, token_id: str, code: str) -> bool:
        record = self._active(token_id)
        secret = record.secret if record is not None else self._decoy_secret
        valid = self.engine.validate_code(secret, code, self.clock())
        return valid and record is not None

    def build_provisioning_uri(self, token_id: str, issuer: str, account_name: str) -> str:
        record = self._active(token_id)
        if record is None:
            raise UnknownTokenError(token_id)
        return build_totp_uri(
            record.secret,
            issuer,
            account_name,
            digits=self.engine.digits,
            period=self.engine.interval,
        )

    def get_token(self, token_id: str) -> Optional[TokenRecord]:
        return self.store.get(token_id)

    def list_tokens(self, limit: int = 50, offset: int = 0) -> List[TokenRecord]:
        return self.store.list(limit=limit, offset=offset)

    def deactivate(self, token_id: str) -> TokenRecord:
        record = self.store.get(token_id)
        if record is None:
            raise UnknownTokenError(token_id)
        if record.is_active:
            record = dataclasses.replace(record, is_active=False)
            self.store.update(record)
            logger.info("Deactivated master token %s", token_id)
        return record
