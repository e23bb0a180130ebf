# backend/otp_basic/security/totp.py
"""
Time-stepped code derivation and validation (RFC 6238, HMAC-SHA1).

Codes are handled as zero-padded strings throughout; "012345" and "12345"
are different codes.
"""
from __future__ import annotations

import binascii
import logging
import time
from datetime import datetime
from typing import Union

import pyotp

from otp_basic.core.errors import InvalidSecretError

logger = logging.getLogger(__name__)

DEFAULT_DIGITS = 6
DEFAULT_INTERVAL = 30
DEFAULT_VALID_WINDOW = 1

Timestamp = Union[datetime, int, float]


class CodeEngine:
    """
    Derive and check TOTP codes for base32 secrets.

    valid_window is the number of adjacent steps accepted on each side of the
    current one to absorb clock skew; 0 accepts the current step only.
    """

    def __init__(
        self,
        digits: int = DEFAULT_DIGITS,
        interval: int = DEFAULT_INTERVAL,
        valid_window: int = DEFAULT_VALID_WINDOW,
    ):
        if digits < 6 or digits > 8:
            raise ValueError("digits must be between 6 and 8")
        if interval <= 0:
            raise ValueError("interval must be positive")
        if valid_window < 0:
            raise ValueError("valid_window must not be negative")
        self.digits = digits
        self.interval = interval
        self.valid_window = valid_window

    def _totp(self, secret: str) -> pyotp.TOTP:
        if not isinstance(secret, str) or not secret.strip():
            raise InvalidSecretError("Empty secret")
        totp = pyotp.TOTP(secret, digits=self.digits, interval=self.interval)
        try:
            totp.byte_secret()
        except (binascii.Error, ValueError) as e:
            raise InvalidSecretError("Secret is not valid base32") from e
        return totp

    def derive_code(self, secret: str, timestamp: Timestamp) -> str:
        """Code for the step covering ``timestamp``."""
        return self._totp(secret).at(timestamp)

    def remaining_seconds(self, now: Timestamp | None = None) -> int:
        """Seconds until the current code rolls over."""
        epoch = self._epoch(time.time() if now is None else now)
        return self.interval - (epoch % self.interval)

    def is_well_formed(self, code: object) -> bool:
        return isinstance(code, str) and len(code) == self.digits and code.isascii() and code.isdigit()

    def validate_code(self, secret: str, presented: object, now: Timestamp | None = None) -> bool:
        """
        True iff ``presented`` matches the code for the current step or one of
        the tolerated adjacent steps. Never raises on caller input.
        """
        if not self.is_well_formed(presented):
            return False
        try:
            totp = self._totp(secret)
        except InvalidSecretError:
            logger.warning("Stored secret could not be decoded; rejecting code")
            return False
        for_time = datetime.now().astimezone() if now is None else now
        return totp.verify(presented, for_time=for_time, valid_window=self.valid_window)

    @staticmethod
    def _epoch(timestamp: Timestamp) -> int:
        if isinstance(timestamp, datetime):
            return int(timestamp.timestamp())
        return int(timestamp)
