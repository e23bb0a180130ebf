from .base import TokenRecord, TokenStore
from .memory import InMemoryTokenStore
from .sql import SqlTokenStore

__all__ = ["TokenRecord", "TokenStore", "InMemoryTokenStore", "SqlTokenStore"]
