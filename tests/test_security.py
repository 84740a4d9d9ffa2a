"""Tests for password hashing, access tokens and the role policy table."""

from dataclasses import replace
from datetime import timedelta

import pytest

from conftest import TEST_SETTINGS
from stockbook.core.errors import InvalidToken, MalformedToken, MissingToken
from stockbook.core.policy import Identity, Policy, UserRole, is_allowed
from stockbook.core.security import create_access_token, decode_token, hash_password, verify_password
from stockbook.services.auth import validate_token

ALICE = Identity(id=7, username="alice", role=UserRole.ADMIN)


# ============== Password hashing ==============

class TestPasswordHashing:
    def test_hash_and_verify(self):
        h = hash_password("secret123")
        assert h != "secret123"
        assert verify_password("secret123", h)

    def test_wrong_password_rejected(self):
        h = hash_password("secret123")
        assert not verify_password("wrong", h)

    def test_hash_is_salted(self):
        assert hash_password("same") != hash_password("same")

    def test_invalid_hash_returns_false(self):
        assert not verify_password("test", "not-a-hash")


# ============== Access tokens ==============

class TestAccessTokens:
    def test_create_and_decode(self):
        payload = decode_token(create_access_token(ALICE, TEST_SETTINGS), TEST_SETTINGS)
        assert payload["sub"] == "7"
        assert payload["username"] == "alice"
        assert payload["role"] == "Admin"
        assert payload["type"] == "access"

    def test_default_expiry_is_a_day(self):
        payload = decode_token(create_access_token(ALICE, TEST_SETTINGS), TEST_SETTINGS)
        assert payload["exp"] - payload["iat"] == 24 * 60 * 60

    def test_valid_header_yields_embedded_identity(self):
        token = create_access_token(ALICE, TEST_SETTINGS)
        assert validate_token(f"Bearer {token}", TEST_SETTINGS) == ALICE

    def test_bearer_scheme_is_case_insensitive(self):
        token = create_access_token(ALICE, TEST_SETTINGS)
        assert validate_token(f"bearer {token}", TEST_SETTINGS) == ALICE

    @pytest.mark.parametrize("header", [None, "", "   "])
    def test_missing_header(self, header):
        with pytest.raises(MissingToken):
            validate_token(header, TEST_SETTINGS)

    @pytest.mark.parametrize("header", ["Bearer", "Token abc", "Bearer a b", "justatoken"])
    def test_malformed_header(self, header):
        with pytest.raises(MalformedToken):
            validate_token(header, TEST_SETTINGS)

    def test_token_signed_with_other_key(self):
        other = replace(TEST_SETTINGS, secret_key="a-completely-different-signing-key-000000")
        token = create_access_token(ALICE, other)
        with pytest.raises(InvalidToken):
            validate_token(f"Bearer {token}", TEST_SETTINGS)

    def test_expired_token(self):
        token = create_access_token(ALICE, TEST_SETTINGS, expires_delta=timedelta(seconds=-5))
        with pytest.raises(InvalidToken):
            validate_token(f"Bearer {token}", TEST_SETTINGS)

    def test_wrong_issuer(self):
        other = replace(TEST_SETTINGS, issuer="someone-else")
        token = create_access_token(ALICE, other)
        with pytest.raises(InvalidToken):
            validate_token(f"Bearer {token}", TEST_SETTINGS)

    def test_garbage_token(self):
        with pytest.raises(InvalidToken):
            validate_token("Bearer not.a.jwt", TEST_SETTINGS)


# ============== Role policy ==============

class TestPolicy:
    @pytest.mark.parametrize(
        "role,policy,allowed",
        [
            (UserRole.VIEWER, Policy.AUTHENTICATED, True),
            (UserRole.VIEWER, Policy.ADMIN_OR_ABOVE, False),
            (UserRole.VIEWER, Policy.SUPER_ADMIN_ONLY, False),
            (UserRole.ADMIN, Policy.ADMIN_OR_ABOVE, True),
            (UserRole.ADMIN, Policy.SUPER_ADMIN_ONLY, False),
            (UserRole.SUPER_ADMIN, Policy.ADMIN_OR_ABOVE, True),
            (UserRole.SUPER_ADMIN, Policy.SUPER_ADMIN_ONLY, True),
        ],
    )
    def test_policy_table(self, role, policy, allowed):
        assert is_allowed(Identity(id=1, username="u", role=role), policy) is allowed
