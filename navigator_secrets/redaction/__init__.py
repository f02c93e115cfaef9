"""Redaction — Keeps secrets out of diagnostic and log output."""

from .sanitizer import (
    sanitize_value,
    sanitize_text,
    is_sensitive_key,
    SENSITIVE_KEYS,
    REDACTED,
)
from .filters import SanitizingFilter, install_log_sanitizer

__all__ = [
    "sanitize_value",
    "sanitize_text",
    "is_sensitive_key",
    "SENSITIVE_KEYS",
    "REDACTED",
    "SanitizingFilter",
    "install_log_sanitizer",
]
