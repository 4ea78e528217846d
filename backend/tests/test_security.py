"""
Tests for password hashing, token issuance and the auth gate.
"""
from datetime import datetime, timedelta, timezone

import jwt
from fastapi import status

from app.core.config import settings
from app.core.security import (
    create_access_token,
    decode_access_token,
    get_password_hash,
    get_token_subject,
    verify_password,
)


class TestPasswordHashing:

    def test_hash_is_not_plaintext(self):
        hashed = get_password_hash("s3cret-pass")
        assert hashed != "s3cret-pass"
        assert verify_password("s3cret-pass", hashed)

    def test_wrong_password_fails(self):
        hashed = get_password_hash("s3cret-pass")
        assert not verify_password("other-pass", hashed)


class TestTokens:

    def test_round_trip_subject(self):
        token = create_access_token(42)
        assert get_token_subject(token) == 42

    def test_default_expiry_is_seven_days(self):
        payload = decode_access_token(create_access_token(1))
        expires = datetime.fromtimestamp(payload["exp"], tz=timezone.utc)
        remaining = expires - datetime.now(timezone.utc)
        assert timedelta(days=6, hours=23) < remaining <= timedelta(days=7)

    def test_expired_token_rejected(self):
        token = create_access_token(1, expires_delta=timedelta(seconds=-10))
        assert decode_access_token(token) is None
        assert get_token_subject(token) is None

    def test_token_from_other_secret_rejected(self):
        token = jwt.encode(
            {"sub": "1", "exp": datetime.now(timezone.utc) + timedelta(hours=1)},
            "a-completely-different-secret-value-0000",
            algorithm="HS256",
        )
        assert get_token_subject(token) is None

    def test_non_numeric_subject_rejected(self):
        token = jwt.encode(
            {"sub": "someone@example.com", "exp": datetime.now(timezone.utc) + timedelta(hours=1)},
            settings.SECRET_KEY,
            algorithm=settings.ALGORITHM,
        )
        assert get_token_subject(token) is None

    def test_token_without_expiry_rejected(self):
        token = jwt.encode({"sub": "1"}, settings.SECRET_KEY, algorithm=settings.ALGORITHM)
        assert get_token_subject(token) is None


class TestAuthGate:

    def test_missing_header(self, test_client):
        response = test_client.get("/api/users/data")
        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.headers["www-authenticate"] == "Bearer"

    def test_malformed_token(self, test_client):
        response = test_client.get("/api/users/data", headers={"Authorization": "Bearer not-a-jwt"})
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_expired_token(self, test_client, register_user):
        _, user = register_user()
        token = create_access_token(user["id"], expires_delta=timedelta(seconds=-10))
        response = test_client.get("/api/users/data", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_wrong_secret(self, test_client, register_user):
        _, user = register_user()
        token = jwt.encode(
            {"sub": str(user["id"]), "exp": datetime.now(timezone.utc) + timedelta(hours=1)},
            "a-completely-different-secret-value-0000",
            algorithm="HS256",
        )
        response = test_client.get("/api/users/data", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_valid_token_attaches_subject(self, test_client, register_user):
        _, user = register_user()
        token = create_access_token(user["id"])
        response = test_client.get("/api/users/data", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["user"]["id"] == user["id"]
