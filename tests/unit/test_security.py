import pytest

from app.core.exceptions import ValidationError
from app.core.security import CredentialVerifier, generate_session_token


def test_hash_and_verify(verifier: CredentialVerifier):
    digest = verifier.hash("123456")

    assert digest != "123456"
    assert digest.startswith("$2")
    assert verifier.verify(digest, "123456") is True
    assert verifier.verify(digest, "wrong") is False


def test_hashes_are_salted(verifier: CredentialVerifier):
    assert verifier.hash("123456") != verifier.hash("123456")


def test_configured_cost_factor_is_used():
    digest = CredentialVerifier(rounds=5).hash("secret")

    assert digest.split("$")[2] == "05"


def test_verify_rejects_unusable_digests(verifier: CredentialVerifier):
    assert verifier.verify("", "123456") is False
    assert verifier.verify("not-a-bcrypt-hash", "123456") is False


def test_session_tokens_are_unique_and_url_safe():
    tokens = {generate_session_token() for _ in range(200)}

    assert len(tokens) == 200
    for token in tokens:
        assert len(token) >= 43
        assert all(c.isalnum() or c in "-_" for c in token)


@pytest.mark.parametrize("password", ["x" * 4097, "nul\x00byte"])
def test_unhashable_password_is_a_validation_error(verifier: CredentialVerifier, password: str):
    with pytest.raises(ValidationError) as exc_info:
        verifier.hash(password)

    assert exc_info.value.status_code == 400
    assert exc_info.value.detail == "Invalid password"
