"""Exceptions raised by navigator_secrets."""


class SecretsError(Exception):
    """Base class for all navigator_secrets errors."""


class KeyConfigurationError(SecretsError, ValueError):
    """The configured encryption key is missing or does not decode to 32 bytes.

    Raised at construction time; the service must not start with this key.
    """


class MalformedFrameError(SecretsError, ValueError):
    """A stored payload is not a valid encrypted frame (strict mode only)."""


class IntegrityError(SecretsError):
    """Authentication tag verification failed.

    The frame was well-formed but was either tampered with, corrupted,
    or encrypted under a different key.
    """


class ValueDecodeError(SecretsError, ValueError):
    """A frame opened correctly but its plaintext is not a stored JSON value.

    Raised by ``decrypt_value`` for frames written with ``encrypt``.
    """
