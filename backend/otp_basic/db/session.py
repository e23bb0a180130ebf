# backend/otp_basic/db/session.py
from __future__ import annotations

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker


def build_engine(database_url: str, pool_timeout: float = 5.0) -> Engine:
    if database_url.startswith("sqlite"):
        # SQLite connections are shared across the request threadpool
        return create_engine(
            database_url,
            connect_args={"check_same_thread": False, "timeout": pool_timeout},
        )
    return create_engine(
        database_url,
        pool_size=5,
        max_overflow=20,
        pool_timeout=pool_timeout,
        pool_recycle=300,
        pool_pre_ping=True,
    )


def build_session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
        bind=engine,
    )
