"""Unit tests for API key format rules"""

import re
import pytest
from src.domain.api_key_rules import (
    API_KEY_PREFIX,
    extract_key_id,
    generate_api_key,
    hash_secret,
    mask_key_id,
    sanitize_prefix,
    secret_matches,
    split_api_key,
    validate_api_key_format,
)

SECRET = "ab" * 32


class TestGenerateApiKey:
    def test_plain_key_format(self):
        key = generate_api_key()
        assert re.fullmatch(r"sk_live_[0-9a-f]{64}", key)

    def test_custom_prefix(self):
        key = generate_api_key("Acme Corp!")
        assert re.fullmatch(r"sk_live_acmecorp_[0-9a-f]{64}", key)

    def test_keys_are_unique(self):
        assert generate_api_key() != generate_api_key()


class TestSanitizePrefix:
    def test_strips_invalid_characters_and_lowercases(self):
        assert sanitize_prefix("My-Team.Key") == "myteamkey"

    def test_truncates_to_twenty_characters(self):
        assert sanitize_prefix("a" * 30) == "a" * 20

    def test_underscores_kept_inside(self):
        assert sanitize_prefix("ci_bot") == "ci_bot"

    @pytest.mark.parametrize("value", [None, "", "   ", "!!!", "___"])
    def test_empty_result_is_none(self, value):
        assert sanitize_prefix(value) is None


class TestSplitApiKey:
    def test_plain_key(self):
        assert split_api_key(f"{API_KEY_PREFIX}{SECRET}") == (None, SECRET)

    def test_prefixed_key(self):
        assert split_api_key(f"{API_KEY_PREFIX}ci_bot_{SECRET}") == ("ci_bot", SECRET)

    @pytest.mark.parametrize(
        "key",
        [
            "",
            "sk_test_" + SECRET,
            API_KEY_PREFIX + SECRET[:-1],
            API_KEY_PREFIX + "zz" * 32,
            API_KEY_PREFIX + "Bad-Prefix_" + SECRET,
            API_KEY_PREFIX + "_" + SECRET,
        ],
    )
    def test_malformed_keys(self, key):
        assert split_api_key(key) is None
        assert validate_api_key_format(key) is False


class TestKeyId:
    def test_plain_key_id(self):
        assert extract_key_id(f"{API_KEY_PREFIX}{SECRET}") == f"{API_KEY_PREFIX}abababab"

    def test_prefixed_key_id(self):
        assert extract_key_id(f"{API_KEY_PREFIX}ci_{SECRET}") == f"{API_KEY_PREFIX}ci_abababab"

    def test_malformed_key_has_no_id(self):
        assert extract_key_id("nope") is None

    def test_mask(self):
        assert mask_key_id("sk_live_abababab") == "sk_live_abababab****"


class TestSecretHash:
    def test_matches_own_hash(self):
        assert secret_matches(SECRET, hash_secret(SECRET))

    def test_rejects_other_secret(self):
        assert not secret_matches("cd" * 32, hash_secret(SECRET))

    def test_rejects_missing_hash(self):
        assert not secret_matches(SECRET, None)
