# backend/otp_basic/models/__init__.py
from .master_token import MasterToken

__all__ = ["MasterToken"]
