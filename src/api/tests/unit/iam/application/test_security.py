"""Unit tests for access token and password security utilities.

Note: Test strings in this file are synthetic test data, not real secrets.
"""

from iam.application.security import (
    ACCESS_TOKEN_PREFIX,
    extract_prefix,
    generate_access_token,
    hash_password,
    hash_secret,
    verify_password,
    verify_secret,
)


class TestAccessTokenGeneration:
    def test_has_adm_prefix(self):
        assert generate_access_token().startswith(ACCESS_TOKEN_PREFIX)

    def test_is_a_single_word(self):
        """Tokens contain only alphanumerics and underscores."""
        token = generate_access_token()
        allowed = set("ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789_")
        assert all(c in allowed for c in token)

    def test_generates_unique_tokens(self):
        tokens = [generate_access_token() for _ in range(100)]

        assert len(tokens) == len(set(tokens))

    def test_has_sufficient_entropy(self):
        # token_urlsafe(40) produces 54 characters
        assert len(generate_access_token()) >= len(ACCESS_TOKEN_PREFIX) + 54


class TestExtractPrefix:
    def test_extracts_first_12_characters(self):
        assert extract_prefix("adm_abcdefghijklmnop") == "adm_abcdefgh"

    def test_short_token_returns_whole_token(self):
        assert extract_prefix("adm_ab") == "adm_ab"


class TestHashing:
    def test_hash_is_not_plaintext(self):
        hashed = hash_secret("adm_test_token")

        assert hashed != "adm_test_token"
        assert hashed.startswith("$2")

    def test_verify_accepts_correct_secret(self):
        hashed = hash_secret("adm_test_token")

        assert verify_secret("adm_test_token", hashed) is True

    def test_verify_rejects_wrong_secret(self):
        hashed = hash_secret("adm_test_token")

        assert verify_secret("adm_other_token", hashed) is False

    def test_verify_rejects_malformed_hash(self):
        assert verify_secret("anything", "not-a-bcrypt-hash") is False

    def test_password_helpers(self):
        hashed = hash_password("correct horse")

        assert verify_password("correct horse", hashed) is True
        assert verify_password("wrong horse", hashed) is False
