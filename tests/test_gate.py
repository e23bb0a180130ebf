import pytest

from otp_basic.core.errors import InvalidCredentialError, MissingCredentialsError
from otp_basic.security.gate import AuthGate


@pytest.fixture
def gate(manager):
    return AuthGate(manager)


@pytest.fixture
def registered(manager):
    rec = manager.register("Acme", "alice@acme.com").record
    return rec.id, manager.generate_code(rec.id)


def test_headers_are_used_first(gate, registered):
    token_id, code = registered
    headers = {"X-User-ID": token_id, "X-OTP": code}
    body = {"user_id": "someone-else", "otp": "000000"}

    assert gate.authenticate(headers, body) == token_id


def test_body_is_used_when_headers_are_incomplete(gate, registered):
    token_id, code = registered
    headers = {"X-User-ID": token_id}
    body = {"user_id": token_id, "otp": code}

    assert gate.authenticate(headers, body) == token_id


def test_incomplete_headers_do_not_mix_with_body(gate):
    headers = {"X-User-ID": "from-header"}
    body = {"otp": "123456"}

    with pytest.raises(MissingCredentialsError):
        gate.extract(headers, body)


@pytest.mark.parametrize(
    "headers, body",
    [
        ({}, None),
        ({}, {}),
        ({"X-User-ID": "", "X-OTP": ""}, {"user_id": "  ", "otp": "123456"}),
        ({}, {"user_id": 42, "otp": 123456}),
        ({}, ["user_id", "otp"]),
    ],
)
def test_missing_credentials(gate, headers, body):
    with pytest.raises(MissingCredentialsError):
        gate.authenticate(headers, body)


def test_wrong_code_is_rejected(gate, registered, manager):
    token_id, code = registered
    wrong = "000000" if code != "000000" else "111111"
    if manager.validate_code(token_id, wrong):
        pytest.skip("wrong code collides with an adjacent step")

    with pytest.raises(InvalidCredentialError):
        gate.authenticate({"X-User-ID": token_id, "X-OTP": wrong})


def test_unknown_identity_is_rejected_as_invalid(gate, registered):
    _, code = registered
    with pytest.raises(InvalidCredentialError):
        gate.authenticate({"X-User-ID": "nonexistent-id", "X-OTP": code})


def test_credentials_repr_hides_code():
    from otp_basic.security.gate import Credentials

    creds = Credentials(user_id="abc", otp="123456")
    assert "123456" not in repr(creds)
