# backend/otp_basic/security/secrets.py
import pyotp

from otp_basic.core.errors import EntropyError

# 32 base32 characters carry 160 bits, the RFC 4226 recommended key size
MIN_SECRET_LENGTH = 32


class SecretGenerator:
    """Produce base32 TOTP secrets from the OS CSPRNG."""

    def __init__(self, length: int = MIN_SECRET_LENGTH):
        if length < MIN_SECRET_LENGTH:
            raise ValueError(f"Secret length must be at least {MIN_SECRET_LENGTH} characters")
        # Whole bytes only, so the secret decodes without padding
        if length % 8:
            raise ValueError("Secret length must be a multiple of 8")
        self.length = length

    def generate(self) -> str:
        try:
            return pyotp.random_base32(length=self.length)
        except (NotImplementedError, OSError) as e:
            raise EntropyError("Random source unavailable") from e
