"""
Log Sanitizer — Redaction of secrets from structured and free-form log data.

Two independent passes are provided:
- ``sanitize_value`` walks dicts/lists/scalars and redacts by field name,
  by typed secret (pydantic ``SecretStr``/``SecretBytes``) and by shape.
- ``sanitize_text`` rewrites secrets found in rendered strings.

Detection is heuristic: secrets in unrecognized shapes are missed, and
hex-looking identifiers may be redacted.
"""
import re
from collections.abc import Mapping
from typing import Any

from pydantic import SecretBytes, SecretStr

MAX_DEPTH = 10

REDACTED = "[REDACTED]"
MAX_DEPTH_MARKER = "[Max depth reached]"
JWT_MARKER = "[REDACTED: JWT Token]"
SECRET_KEY_MARKER = "[REDACTED: Secret Key]"
SECRET_TEXT_MARKER = "[REDACTED: Secret]"

SENSITIVE_KEYS = (
    "password",
    "secret",
    "token",
    "key",
    "authorization",
    "apikey",
    "api_key",
    "access_token",
    "refresh_token",
    "jwt_secret",
    "encryption_key",
    "private_key",
    "client_secret",
    "database_url",
)

_TOKEN = r"[A-Za-z0-9_-]+\.[A-Za-z0-9_-]+\.[A-Za-z0-9_-]*"

JWT_PATTERN = re.compile(_TOKEN)
HEX_SECRET_PATTERN = re.compile(r"[0-9a-fA-F]{32,}")

BEARER_PATTERN = re.compile(r"Bearer\s+" + _TOKEN)
HEX_RUN_PATTERN = re.compile(r"\b[0-9a-fA-F]{32,}\b")

# an earlier rewrite may already have put a marker where the value was
_VALUE = r"(\[REDACTED[^\]]*\]|[^\s,}]+)"
# auth scheme words are kept: "Authorization: Bearer [REDACTED]"
_SCHEME = r"(?:(?:Bearer|Basic)\s+)?"

KEY_VALUE_PATTERNS = tuple(
    re.compile(
        r"(" + re.escape(name) + r"\s*[:=]\s*" + _SCHEME + r")" + _VALUE,
        re.IGNORECASE,
    )
    for name in SENSITIVE_KEYS
)

_SEQUENCE_TYPES = (list, tuple, set, frozenset)


def is_sensitive_key(key: Any) -> bool:
    """Return True if a field name contains any sensitive key substring."""
    lowered = str(key).lower()
    return any(name in lowered for name in SENSITIVE_KEYS)


def _sanitize_string(value: str) -> str:
    if JWT_PATTERN.fullmatch(value):
        return JWT_MARKER
    if HEX_SECRET_PATTERN.fullmatch(value):
        return SECRET_KEY_MARKER
    return value


def sanitize_value(value: Any, depth: int = 0) -> Any:
    """Return a copy of ``value`` with sensitive content redacted.

    Mapping values under a sensitive key are replaced wholesale, whatever
    their shape. Lists, tuples and sets keep their type and order. Strings
    are checked for bearer-token and hex-key shapes. Recursion stops past
    ``MAX_DEPTH`` with a marker string, so cyclic or hostile nesting
    always terminates.

    Args:
        value: Any log payload (dict, list, scalar, None).
        depth: Current nesting depth, 0 for the top-level call.

    Returns:
        Sanitized value of the same shape. The input is never mutated.
    """
    if depth > MAX_DEPTH:
        return MAX_DEPTH_MARKER
    if value is None:
        return None
    if isinstance(value, (SecretStr, SecretBytes)):
        return REDACTED
    if isinstance(value, str):
        return _sanitize_string(value)
    if isinstance(value, _SEQUENCE_TYPES):
        items = [sanitize_value(item, depth + 1) for item in value]
        if isinstance(value, list):
            return items
        if isinstance(value, tuple):
            return tuple(items)
        return type(value)(items)
    if isinstance(value, Mapping):
        sanitized = {}
        for key, item in value.items():
            if is_sensitive_key(key):
                sanitized[key] = REDACTED
            elif isinstance(item, (Mapping, SecretStr, SecretBytes) + _SEQUENCE_TYPES):
                sanitized[key] = sanitize_value(item, depth + 1)
            else:
                sanitized[key] = item
        return sanitized
    return value


def sanitize_text(text: str) -> str:
    """Redact secrets from a rendered log line or error message.

    Rewrites, applied in order on the same string:
    1. ``Bearer <jwt>`` becomes ``Bearer [REDACTED]``.
    2. Standalone hex runs of 32+ characters become ``[REDACTED: Secret]``.
    3. ``<sensitive name>: <value>`` / ``<name>=<value>`` keeps the name
       and separator as written and replaces the value with ``[REDACTED]``.
    """
    if not text or not isinstance(text, str):
        return text
    text = BEARER_PATTERN.sub("Bearer " + REDACTED, text)
    text = HEX_RUN_PATTERN.sub(SECRET_TEXT_MARKER, text)
    for pattern in KEY_VALUE_PATTERNS:
        text = pattern.sub(lambda m: m.group(1) + REDACTED, text)
    return text
