from datetime import datetime, timedelta, timezone

import pytest

from otp_basic.core.errors import InvalidSecretError
from otp_basic.security.totp import CodeEngine

RFC_SECRET = "GEZDGNBVGY3TQOJQGEZDGNBVGY3TQOJQ"


def at(epoch: int) -> datetime:
    return datetime.fromtimestamp(epoch, tz=timezone.utc)


@pytest.mark.parametrize(
    "epoch, expected",
    [
        (59, "287082"),
        (1111111109, "081804"),
        (1111111111, "050471"),
        (1234567890, "005924"),
        (2000000000, "279037"),
        (20000000000, "353130"),
    ],
)
def test_derive_code_matches_rfc6238_vectors(epoch, expected):
    assert CodeEngine().derive_code(RFC_SECRET, at(epoch)) == expected


def test_derive_code_eight_digits():
    engine = CodeEngine(digits=8)
    assert engine.derive_code(RFC_SECRET, at(59)) == "94287082"
    assert engine.derive_code(RFC_SECRET, at(1111111109)) == "07081804"


def test_derive_code_accepts_epoch_seconds():
    engine = CodeEngine()
    assert engine.derive_code(RFC_SECRET, 1234567890) == engine.derive_code(RFC_SECRET, at(1234567890))


def test_code_is_constant_within_a_step():
    engine = CodeEngine()
    start = at(1714564800)  # multiple of 30
    codes = {engine.derive_code(RFC_SECRET, start + timedelta(seconds=s)) for s in range(30)}
    assert len(codes) == 1
    assert engine.derive_code(RFC_SECRET, start + timedelta(seconds=30)) not in codes


def test_round_trip_validates():
    engine = CodeEngine(valid_window=0)
    now = at(1714564812)
    assert engine.validate_code(RFC_SECRET, engine.derive_code(RFC_SECRET, now), now) is True


def test_adjacent_steps_are_tolerated_with_window():
    engine = CodeEngine(valid_window=1)
    now = at(1714564800)
    previous = engine.derive_code(RFC_SECRET, now - timedelta(seconds=30))
    following = engine.derive_code(RFC_SECRET, now + timedelta(seconds=30))
    two_back = engine.derive_code(RFC_SECRET, now - timedelta(seconds=60))

    assert engine.validate_code(RFC_SECRET, previous, now) is True
    assert engine.validate_code(RFC_SECRET, following, now) is True
    assert engine.validate_code(RFC_SECRET, two_back, now) is False


def test_zero_window_rejects_adjacent_steps():
    engine = CodeEngine(valid_window=0)
    now = at(1714564800)
    previous = engine.derive_code(RFC_SECRET, now - timedelta(seconds=30))
    assert engine.validate_code(RFC_SECRET, previous, now) is False


def test_codes_outside_window_are_rejected():
    engine = CodeEngine(valid_window=1)
    now = at(1714564800)
    accepted = {engine.derive_code(RFC_SECRET, now + timedelta(seconds=30 * i)) for i in (-1, 0, 1)}
    wrong = next(f"{n:06d}" for n in range(1000) if f"{n:06d}" not in accepted)

    assert engine.validate_code(RFC_SECRET, wrong, now) is False


def test_leading_zeros_matter():
    engine = CodeEngine(valid_window=0)
    now = at(1234567890)
    assert engine.derive_code(RFC_SECRET, now) == "005924"
    assert engine.validate_code(RFC_SECRET, "005924", now) is True
    assert engine.validate_code(RFC_SECRET, "5924", now) is False


@pytest.mark.parametrize(
    "presented",
    ["", "12345", "1234567", "abcdef", "12 456", "１２３４５６", None, 123456, b"287082"],
)
def test_malformed_codes_are_not_valid(presented):
    assert CodeEngine().validate_code(RFC_SECRET, presented, at(59)) is False


@pytest.mark.parametrize("secret", ["", "   ", "not-base32!", "A1B8"])
def test_invalid_secret_fails_derivation(secret):
    with pytest.raises(InvalidSecretError):
        CodeEngine().derive_code(secret, at(59))


def test_invalid_secret_is_not_valid_at_validation():
    assert CodeEngine().validate_code("not-base32!", "287082", at(59)) is False


def test_remaining_seconds():
    engine = CodeEngine()
    assert engine.remaining_seconds(at(1714564800)) == 30
    assert engine.remaining_seconds(at(1714564829)) == 1


@pytest.mark.parametrize("kwargs", [{"digits": 5}, {"digits": 9}, {"interval": 0}, {"valid_window": -1}])
def test_rejects_bad_parameters(kwargs):
    with pytest.raises(ValueError):
        CodeEngine(**kwargs)
