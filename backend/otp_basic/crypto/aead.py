# backend/otp_basic/crypto/aead.py
import base64
import binascii
import os

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

KEY_LEN = 32
NONCE_LEN = 12


def encrypt_aesgcm(key: bytes, plaintext: bytes, aad: bytes = b"") -> bytes:
    if len(key) != KEY_LEN:
        raise ValueError("AES-256-GCM requires 32-byte key")
    nonce = os.urandom(NONCE_LEN)
    ct = AESGCM(key).encrypt(nonce, plaintext, aad)
    return nonce + ct


def decrypt_aesgcm(key: bytes, blob: bytes, aad: bytes = b"") -> bytes:
    if len(key) != KEY_LEN:
        raise ValueError("AES-256-GCM requires 32-byte key")
    if len(blob) < NONCE_LEN + 16:
        raise ValueError("Invalid ciphertext blob")
    nonce = blob[:NONCE_LEN]
    ct = blob[NONCE_LEN:]
    try:
        return AESGCM(key).decrypt(nonce, ct, aad)
    except InvalidTag as e:
        raise ValueError("Ciphertext failed authentication") from e


class SecretCipher:
    """
    Seals TOTP secrets for storage.

    The row id is bound in as associated data, so a sealed secret copied
    onto another row fails to open.
    """

    def __init__(self, key: bytes):
        if len(key) != KEY_LEN:
            raise ValueError("Secret encryption key must be 32 bytes")
        self._key = key

    @classmethod
    def from_b64(cls, encoded: str) -> "SecretCipher":
        try:
            key = base64.b64decode(encoded, validate=True)
        except binascii.Error as e:
            raise ValueError("Secret encryption key must be base64") from e
        return cls(key)

    def seal(self, token_id: str, secret: str) -> str:
        blob = encrypt_aesgcm(self._key, secret.encode("ascii"), aad=token_id.encode("utf-8"))
        return base64.b64encode(blob).decode("ascii")

    def open(self, token_id: str, sealed: str) -> str:
        try:
            blob = base64.b64decode(sealed, validate=True)
        except binascii.Error as e:
            raise ValueError("Sealed secret is not base64") from e
        return decrypt_aesgcm(self._key, blob, aad=token_id.encode("utf-8")).decode("ascii")
