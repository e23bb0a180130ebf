# backend/otp_basic/core/errors.py
"""
Error taxonomy for the credential engine.

Resource failures (entropy, storage) are the only errors the HTTP layer
renders as server-side failures. Everything a caller can cause by sending
bad input resolves to a typed failure or a plain ``False``.
"""
from __future__ import annotations


class OTPError(Exception):
    """Base class for all errors raised by otp_basic."""


class EntropyError(OTPError):
    """The operating system random source is unavailable."""


class InvalidSecretError(OTPError):
    """A stored secret is not valid base32 (or failed to decrypt)."""


class StorageError(OTPError):
    """The token store could not complete an operation."""


class DuplicateIdError(StorageError):
    def __init__(self, token_id: str):
        super().__init__(f"Master token already exists: {token_id}")
        self.token_id = token_id


class NotFoundError(StorageError):
    def __init__(self, token_id: str):
        super().__init__(f"Master token not found: {token_id}")
        self.token_id = token_id


class StorageTimeoutError(StorageError, TimeoutError):
    """A store operation did not finish before its deadline."""


class UnknownTokenError(OTPError):
    """
    Token is absent or inactive.

    Only raised on flows where the caller already owns the id (code
    generation, provisioning). The public validation path returns False.
    """

    def __init__(self, token_id: str):
        super().__init__("Master token not found")
        self.token_id = token_id


class GateError(OTPError):
    """Base class for request gate rejections."""


class MissingCredentialsError(GateError):
    pass


class InvalidCredentialError(GateError):
    pass
