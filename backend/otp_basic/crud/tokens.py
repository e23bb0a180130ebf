# backend/otp_basic/crud/tokens.py
from __future__ import annotations

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from otp_basic.models.master_token import MasterToken


def get_by_id(db: Session, token_id: str) -> MasterToken | None:
    return db.get(MasterToken, token_id)


def insert_token(db: Session, token: MasterToken) -> None:
    db.add(token)
    # flush now so a primary key clash surfaces here, not at commit
    db.flush()


def update_token(db: Session, token_id: str, *, is_active: bool) -> bool:
    t = db.get(MasterToken, token_id, with_for_update=True)
    if t is None:
        return False
    t.is_active = is_active
    db.flush()
    return True


def list_tokens(db: Session, limit: int, offset: int) -> list[MasterToken]:
    stmt = (
        select(MasterToken)
        .order_by(MasterToken.created_at.desc(), MasterToken.id.desc())
        .limit(limit)
        .offset(offset)
    )
    return list(db.execute(stmt).scalars().all())


def delete_token(db: Session, token_id: str) -> bool:
    result = db.execute(delete(MasterToken).where(MasterToken.id == token_id))
    return result.rowcount > 0
