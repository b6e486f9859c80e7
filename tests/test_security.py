"""
Security Service Tests

Unit tests for password hashing and token signing.
"""

from datetime import timedelta

from catalog.services.security import (
    create_access_token,
    decode_token,
    hash_password,
    verify_password,
    verify_token_type,
)

SECRET = "unit-test-secret-key-with-more-than-32-characters"


class TestPasswordHashing:
    """Tests for hash_password and verify_password."""

    def test_hash_is_not_plain_text(self):
        hashed = hash_password("SecurePass123")

        assert hashed != "SecurePass123"
        assert hashed.startswith("$2b$")

    def test_verify_correct_password(self):
        hashed = hash_password("SecurePass123")
        assert verify_password("SecurePass123", hashed) is True

    def test_verify_wrong_password(self):
        hashed = hash_password("SecurePass123")
        assert verify_password("WrongPassword", hashed) is False

    def test_hashes_are_salted(self):
        """Test hashing the same password twice gives different hashes."""
        assert hash_password("SecurePass123") != hash_password("SecurePass123")


class TestAccessTokens:
    """Tests for token creation and verification."""

    def test_token_round_trip(self):
        token = create_access_token({"sub": "1", "username": "testuser"}, SECRET)

        payload = decode_token(token, SECRET)

        assert payload["sub"] == "1"
        assert payload["username"] == "testuser"
        assert payload["type"] == "access"

    def test_token_without_expiry(self):
        token = create_access_token({"sub": "1"}, SECRET)
        assert "exp" not in decode_token(token, SECRET)

    def test_token_with_expiry(self):
        token = create_access_token({"sub": "1"}, SECRET, timedelta(minutes=5))
        assert "exp" in decode_token(token, SECRET)

    def test_expired_token(self):
        token = create_access_token({"sub": "1"}, SECRET, timedelta(minutes=-5))
        assert decode_token(token, SECRET) is None

    def test_wrong_secret(self):
        token = create_access_token({"sub": "1"}, SECRET)
        assert decode_token(token, "some-other-secret-key-of-sufficient-length") is None

    def test_garbage_token(self):
        assert decode_token("not-a-jwt", SECRET) is None

    def test_create_does_not_mutate_input(self):
        data = {"sub": "1"}
        create_access_token(data, SECRET)
        assert data == {"sub": "1"}

    def test_verify_token_type(self):
        token = create_access_token({"sub": "1"}, SECRET)

        assert verify_token_type(token, SECRET, "access")["sub"] == "1"
        assert verify_token_type(token, SECRET, "refresh") is None
