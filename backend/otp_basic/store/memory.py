# backend/otp_basic/store/memory.py
import dataclasses
import threading
from typing import Dict, List, Optional

from otp_basic.core.errors import DuplicateIdError, NotFoundError
from otp_basic.store.base import TokenRecord, TokenStore, as_utc, check_page


class InMemoryTokenStore(TokenStore):
    """Process-local, non-durable store. Records are lost on restart."""

    def __init__(self):
        self._records: Dict[str, TokenRecord] = {}
        self._lock = threading.RLock()

    def create(self, record: TokenRecord) -> None:
        with self._lock:
            if record.id in self._records:
                raise DuplicateIdError(record.id)
            self._records[record.id] = dataclasses.replace(record, created_at=as_utc(record.created_at))

    def get(self, token_id: str) -> Optional[TokenRecord]:
        with self._lock:
            return self._records.get(token_id)

    def update(self, record: TokenRecord) -> None:
        with self._lock:
            current = self._records.get(record.id)
            if current is None:
                raise NotFoundError(record.id)
            self._records[record.id] = dataclasses.replace(current, is_active=record.is_active)

    def list(self, limit: int = 50, offset: int = 0) -> List[TokenRecord]:
        check_page(limit, offset)
        with self._lock:
            records = sorted(self._records.values(), key=lambda r: (r.created_at, r.id), reverse=True)
        return records[offset:offset + limit]

    def delete(self, token_id: str) -> None:
        with self._lock:
            if token_id not in self._records:
                raise NotFoundError(token_id)
            del self._records[token_id]
