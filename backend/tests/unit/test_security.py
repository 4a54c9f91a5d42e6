"""
Unit tests for tokens, passwords and the provider secret.
"""
import uuid
from datetime import timedelta
from types import SimpleNamespace

from flexhub.core.security import (
    create_access_token,
    create_user_token,
    decode_token,
    hash_password,
    verify_password,
    verify_provider_secret,
)
from flexhub.models.user import UserRole


class TestPasswords:

    def test_hash_and_verify(self):
        hashed = hash_password("s3cret-pass")

        assert hashed != "s3cret-pass"
        assert verify_password("s3cret-pass", hashed)
        assert not verify_password("wrong", hashed)


class TestTokens:

    def test_user_token_claims(self):
        user = SimpleNamespace(id=uuid.uuid4(), email="a@example.com", role=UserRole.ADMIN)

        payload = decode_token(create_user_token(user))

        assert payload["sub"] == str(user.id)
        assert payload["email"] == "a@example.com"
        assert payload["role"] == "ADMIN"

    def test_expired_token_is_rejected(self):
        token = create_access_token({"sub": "x"}, expires_delta=timedelta(seconds=-1))

        assert decode_token(token) is None

    def test_garbage_token_is_rejected(self):
        assert decode_token("not-a-token") is None


class TestProviderSecret:

    def test_matching_secret(self):
        assert verify_provider_secret("test-provider-secret")

    def test_wrong_or_missing_secret(self):
        assert not verify_provider_secret("nope")
        assert not verify_provider_secret(None)
