"""Navigator Secrets.

Encryption of sensitive values at rest and redaction of secrets from logs.
"""
from .version import __version__
from .exceptions import (
    SecretsError,
    KeyConfigurationError,
    MalformedFrameError,
    IntegrityError,
    ValueDecodeError,
)
from .vault import EncryptionService, EncryptionConfig, generate_key
from .redaction import (
    sanitize_value,
    sanitize_text,
    SanitizingFilter,
    install_log_sanitizer,
)

__all__ = [
    "__version__",
    "SecretsError",
    "KeyConfigurationError",
    "MalformedFrameError",
    "IntegrityError",
    "ValueDecodeError",
    "EncryptionService",
    "EncryptionConfig",
    "generate_key",
    "sanitize_value",
    "sanitize_text",
    "SanitizingFilter",
    "install_log_sanitizer",
]
