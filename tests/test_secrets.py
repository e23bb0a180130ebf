import base64

import pyotp
import pytest

from otp_basic.core.errors import EntropyError
from otp_basic.security.secrets import SecretGenerator


def test_secret_carries_at_least_160_bits():
    secret = SecretGenerator().generate()
    assert len(secret) == 32
    assert "=" not in secret
    assert len(base64.b32decode(secret)) == 20


def test_secrets_are_distinct():
    gen = SecretGenerator()
    secrets = {gen.generate() for _ in range(200)}
    assert len(secrets) == 200


def test_longer_secret():
    secret = SecretGenerator(length=48).generate()
    assert len(base64.b32decode(secret)) == 30


@pytest.mark.parametrize("length", [16, 31, 33])
def test_rejects_short_or_unaligned_length(length):
    with pytest.raises(ValueError):
        SecretGenerator(length=length)


def test_missing_random_source_raises_entropy_error(monkeypatch):
    def no_entropy(*args, **kwargs):
        raise NotImplementedError("no urandom")

    monkeypatch.setattr(pyotp, "random_base32", no_entropy)

    with pytest.raises(EntropyError):
        SecretGenerator().generate()
