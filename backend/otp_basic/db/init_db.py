# backend/otp_basic/db/init_db.py
from sqlalchemy.engine import Engine

from otp_basic.db.base import Base

# Import models so the metadata knows about their tables
from otp_basic import models  # noqa: F401


def init_db(engine: Engine) -> None:
    Base.metadata.create_all(bind=engine)
