"""
Tests for the log sanitizer.

Tests cover:
- Key-based redaction in nested mappings
- Shape-based redaction of bearer tokens and hex keys
- Depth bound on deep and cyclic input
- Typed secrets (pydantic SecretStr/SecretBytes)
- Free-form text rewriting
"""
import pytest
from pydantic import SecretBytes, SecretStr

from navigator_secrets.redaction import (
    REDACTED,
    is_sensitive_key,
    sanitize_text,
    sanitize_value,
)

JWT = "eyJhbGciOiJIUzI1NiJ9.e30.abc123"
HEX_40 = "0123456789abcdef0123456789abcdef01234567"


def _nested(levels: int) -> dict:
    value = {"leaf": "bottom"}
    for _ in range(levels):
        value = {"a": value}
    return value


# --- sanitize_value: mappings ---

class TestKeyRedaction:
    """Tests for redaction by field name."""

    def test_nested_keys(self):
        """Test the canonical nested redaction example."""
        data = {"password": "x", "nested": {"apiKey": "y", "ok": 1}}
        assert sanitize_value(data) == {
            "password": REDACTED,
            "nested": {"apiKey": REDACTED, "ok": 1},
        }

    @pytest.mark.parametrize("key", [
        "password", "PASSWORD", "userPassword", "client_secret",
        "accessToken", "refresh_token", "Authorization", "x-api-key",
        "DATABASE_URL", "private_key_pem", "jwt_secret",
    ])
    def test_sensitive_names(self, key):
        """Test that sensitive substrings match case-insensitively."""
        assert is_sensitive_key(key) is True
        assert sanitize_value({key: "value"}) == {key: REDACTED}

    @pytest.mark.parametrize("key", ["username", "email", "status", "id"])
    def test_ordinary_names(self, key):
        """Test that ordinary field names are kept."""
        assert is_sensitive_key(key) is False
        assert sanitize_value({key: "value"}) == {key: "value"}

    def test_sensitive_container_replaced_wholesale(self):
        """Test that a sensitive key hides its whole subtree."""
        data = {"tokens": {"access": "a", "refresh": "b"}, "keys": [1, 2]}
        assert sanitize_value(data) == {"tokens": REDACTED, "keys": REDACTED}

    def test_non_string_keys(self):
        """Test that non-string keys are matched on their string form."""
        assert sanitize_value({1: "one", None: "none"}) == {1: "one", None: "none"}

    def test_scalar_values_under_plain_keys_pass_through(self):
        """Test that scalar values under ordinary keys are not pattern-checked."""
        data = {"note": JWT, "count": 3, "flag": False, "ratio": 0.5}
        assert sanitize_value(data) == data

    def test_list_of_records(self):
        """Test that lists inside mappings are walked."""
        data = {"users": [{"name": "ana", "password": "p1"}, {"name": "bo"}]}
        assert sanitize_value(data) == {
            "users": [{"name": "ana", "password": REDACTED}, {"name": "bo"}],
        }

    def test_input_not_mutated(self):
        """Test that the original mapping is left untouched."""
        data = {"password": "x", "nested": {"secret": "y"}}
        sanitize_value(data)
        assert data == {"password": "x", "nested": {"secret": "y"}}


# --- sanitize_value: scalars and sequences ---

class TestShapeRedaction:
    """Tests for redaction by value shape."""

    def test_jwt_string(self):
        """Test that a three-segment token is redacted."""
        assert sanitize_value(JWT) == "[REDACTED: JWT Token]"

    def test_jwt_with_empty_signature(self):
        """Test that an unsigned token is still recognized."""
        assert sanitize_value("eyJhbGciOiJub25lIn0.e30.") == "[REDACTED: JWT Token]"

    def test_hex_string(self):
        """Test that a 40-char hex string is redacted."""
        assert sanitize_value(HEX_40) == "[REDACTED: Secret Key]"

    def test_short_hex_string(self):
        """Test that hex strings under 32 chars are kept."""
        assert sanitize_value("deadbeef") == "deadbeef"

    def test_plain_string(self):
        """Test that ordinary strings are kept."""
        assert sanitize_value("hello") == "hello"

    def test_embedded_token_is_not_whole_string_match(self):
        """Test that only whole-string shapes are redacted."""
        text = f"token was {JWT}"
        assert sanitize_value(text) == text

    @pytest.mark.parametrize("value", [None, 0, 3.14, True, b"bytes"])
    def test_other_scalars(self, value):
        """Test that non-string scalars pass through."""
        assert sanitize_value(value) == value

    def test_list_order_preserved(self):
        """Test that lists are sanitized element-wise in order."""
        assert sanitize_value(["a", JWT, HEX_40, 1]) == [
            "a", "[REDACTED: JWT Token]", "[REDACTED: Secret Key]", 1,
        ]

    def test_tuple_type_preserved(self):
        """Test that tuples come back as tuples."""
        assert sanitize_value(("a", JWT)) == ("a", "[REDACTED: JWT Token]")

    def test_secret_types(self):
        """Test that pydantic secret types are always redacted."""
        data = {"note": SecretStr("hunter2"), "blob": [SecretBytes(b"raw")]}
        assert sanitize_value(data) == {"note": REDACTED, "blob": [REDACTED]}
        assert sanitize_value(SecretStr("x")) == REDACTED


# --- sanitize_value: depth ---

class TestDepthBound:
    """Tests for the recursion bound."""

    def test_deep_nesting_is_cut(self):
        """Test that a 15-level nest shows the marker at depth 11."""
        result = sanitize_value(_nested(15))
        node = result
        for _ in range(11):
            node = node["a"]
        assert node == "[Max depth reached]"

    def test_depth_ten_is_kept(self):
        """Test that content at depth 10 is still sanitized normally."""
        result = sanitize_value(_nested(10))
        node = result
        for _ in range(10):
            node = node["a"]
        assert node == {"leaf": "bottom"}

    def test_cyclic_structure_terminates(self):
        """Test that self-referencing data does not recurse forever."""
        data = {"name": "loop"}
        data["self"] = data
        result = sanitize_value(data)
        node = result
        for _ in range(10):
            node = node["self"]
        assert node["self"] == "[Max depth reached]"

    def test_initial_depth_over_bound(self):
        """Test that a call already past the bound returns the marker."""
        assert sanitize_value({"a": 1}, depth=11) == "[Max depth reached]"


# --- sanitize_text ---

class TestSanitizeText:
    """Tests for free-form text rewriting."""

    def test_key_with_hex_value(self):
        """Test that a hex value under a sensitive name becomes [REDACTED]."""
        text = "token: abcdef0123456789abcdef0123456789"
        assert sanitize_text(text) == "token: [REDACTED]"

    def test_authorization_bearer(self):
        """Test that bearer tokens in headers are redacted."""
        text = "Authorization: Bearer eyJ.e30.abc"
        assert sanitize_text(text) == "Authorization: Bearer [REDACTED]"

    def test_authorization_opaque_bearer(self):
        """Test that non-JWT bearer values are redacted through the header name."""
        text = "Authorization: Bearer opaque-token-value"
        assert sanitize_text(text) == "Authorization: Bearer [REDACTED]"

    def test_bearer_inside_sentence(self):
        """Test that bearer tokens are found anywhere in a line."""
        text = f"request failed with Bearer {JWT} attached"
        assert sanitize_text(text) == (
            "request failed with Bearer [REDACTED] attached"
        )

    def test_standalone_hex(self):
        """Test that a bare hex run is redacted."""
        text = f"using {HEX_40} for signing"
        assert sanitize_text(text) == "using [REDACTED: Secret] for signing"

    def test_hex_inside_identifier_kept(self):
        """Test that hex runs glued to other word characters are kept."""
        text = f"id=req_{HEX_40}"
        assert sanitize_text(text) == text

    def test_key_value_preserves_case_and_separator(self):
        """Test that the matched name and separator are kept as written."""
        assert sanitize_text("PASSWORD = hunter2") == "PASSWORD = [REDACTED]"
        assert sanitize_text("Client_Secret:abc") == "Client_Secret:[REDACTED]"

    def test_value_stops_at_comma_and_brace(self):
        """Test that values end at whitespace, comma and closing brace."""
        text = "{password=p4ss, user=ana}"
        assert sanitize_text(text) == "{password=[REDACTED], user=ana}"
        assert sanitize_text("{secret:xyz}") == "{secret:[REDACTED]}"

    def test_multiple_pairs(self):
        """Test that every sensitive pair in a line is rewritten."""
        text = "api_key=abc refresh_token=def user=bob"
        assert sanitize_text(text) == (
            "api_key=[REDACTED] refresh_token=[REDACTED] user=bob"
        )

    def test_database_url(self):
        """Test that connection strings are hidden."""
        text = "DATABASE_URL=postgres://u:p@db:5432/app"
        assert sanitize_text(text) == "DATABASE_URL=[REDACTED]"

    def test_plain_text_unchanged(self):
        """Test that text without secrets is returned as-is."""
        text = "Lead 42 moved to status qualified"
        assert sanitize_text(text) == text

    def test_idempotent(self):
        """Test that sanitizing twice gives the same result."""
        text = f"token: {HEX_40}, Authorization: Bearer {JWT}"
        once = sanitize_text(text)
        assert sanitize_text(once) == once

    @pytest.mark.parametrize("value", ["", None])
    def test_empty_input(self, value):
        """Test that empty input is returned unchanged."""
        assert sanitize_text(value) == value
