"""Tests for tokens and password hashing."""
from datetime import timedelta

import jwt

from fittrack.services.auth_service import AuthService

from conftest import USER_ID, make_user


class TestAccessTokens:
    """Tests for JWT issue and verification."""

    def test_round_trip(self):
        service = AuthService()
        token = service.create_access_token(USER_ID, "alex@example.com")

        payload = service.verify_token(token)

        assert payload is not None
        assert payload.sub == str(USER_ID)
        assert payload.email == "alex@example.com"
        assert payload.type == "access"

    def test_expired_token_rejected(self):
        service = AuthService()
        token = service.create_access_token(USER_ID, "alex@example.com", expires_delta=timedelta(seconds=-10))

        assert service.verify_token(token) is None

    def test_wrong_type_rejected(self):
        service = AuthService()
        token = service.create_access_token(USER_ID, "alex@example.com")

        assert service.verify_token(token, expected_type="refresh") is None

    def test_foreign_signature_rejected(self):
        service = AuthService()
        token = jwt.encode({"sub": str(USER_ID), "type": "access"}, "another-secret", algorithm="HS256")

        assert service.verify_token(token) is None

    def test_token_response_carries_metrics(self):
        service = AuthService()

        response = service.create_token_response(make_user())

        assert response.token_type == "bearer"
        assert response.expires_in == 7 * 24 * 60 * 60
        assert response.user.bmr == 1854
        assert response.user.daily_calories == 2874


class TestPasswords:
    def test_hash_and_verify(self):
        service = AuthService()
        hashed = service.hash_password("s3cret!")

        assert hashed != "s3cret!"
        assert service.verify_password("s3cret!", hashed)
        assert not service.verify_password("wrong", hashed)
