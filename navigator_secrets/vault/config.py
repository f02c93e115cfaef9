"""
Vault Configuration — Key material loading and validated settings.

Reads the encryption key from the environment in the format:
    ENCRYPTION_KEY = <base64 or hex encoded 32-byte key>
    ENCRYPTION_STRICT_FRAMES = <true|false>  (optional, default false)

Security Note:
    Never log key material. Only log lengths and encodings.
"""
import os
import base64
import binascii
import secrets
import logging
from typing import Optional

from pydantic import BaseModel, Field, SecretStr, field_validator

from ..conf import ENCRYPTION_KEY_ENV, STRICT_FRAMES_ENV, TRUTHY_VALUES
from ..exceptions import KeyConfigurationError

logger = logging.getLogger("navigator.secrets")

KEY_LENGTH = 32  # AES-256


def _decode_base64(raw: str) -> Optional[bytes]:
    try:
        return base64.b64decode(raw, validate=True)
    except (binascii.Error, ValueError):
        return None


def _decode_hex(raw: str) -> Optional[bytes]:
    try:
        return bytes.fromhex(raw)
    except ValueError:
        return None


def load_key_material(raw: Optional[str]) -> bytes:
    """Decode a configured key string into 32 raw key bytes.

    Base64 is tried first; when it fails to decode, or decodes to anything
    other than 32 bytes, the string is decoded as hex instead.

    Args:
        raw: Configured key string (base64 or hex).

    Returns:
        32-byte key.

    Raises:
        KeyConfigurationError: If the key is missing or does not decode
            to exactly 32 bytes under either encoding.
    """
    if raw is None or not raw.strip():
        raise KeyConfigurationError(
            f"{ENCRYPTION_KEY_ENV} is not set. Configure a 32-byte key "
            "(base64 or hex encoded) for AES-256-GCM."
        )
    raw = raw.strip()
    key = _decode_base64(raw)
    encoding = "base64"
    if not key or len(key) != KEY_LENGTH:
        key = _decode_hex(raw)
        encoding = "hex"
    if not key or len(key) != KEY_LENGTH:
        raise KeyConfigurationError(
            f"{ENCRYPTION_KEY_ENV} must decode to exactly {KEY_LENGTH} bytes "
            "(256 bits) for AES-256-GCM."
        )
    logger.debug("Loaded %d-byte encryption key (%s)", len(key), encoding)
    return key


def generate_key(encoding: str = "base64") -> str:
    """Generate a random 32-byte key and return it encoded.

    This is a utility for operators to provision ENCRYPTION_KEY.

    Args:
        encoding: Either "base64" or "hex".

    Returns:
        Encoded 32-byte key string.
    """
    key = secrets.token_bytes(KEY_LENGTH)
    if encoding == "base64":
        return base64.b64encode(key).decode("ascii")
    if encoding == "hex":
        return key.hex()
    raise ValueError(f"Unsupported key encoding: {encoding}")


class EncryptionConfig(BaseModel):
    """Validated encryption settings."""

    encryption_key: Optional[SecretStr] = None
    strict_frames: bool = Field(default=False)

    @field_validator("encryption_key", mode="before")
    @classmethod
    def blank_key_is_missing(cls, v):
        """Treat an empty or whitespace-only key as not configured."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @classmethod
    def from_env(cls) -> "EncryptionConfig":
        """Create EncryptionConfig by loading values from environment.

        Returns:
            Populated EncryptionConfig instance.
        """
        strict = os.environ.get(STRICT_FRAMES_ENV, "").strip().lower()
        return cls(
            encryption_key=os.environ.get(ENCRYPTION_KEY_ENV),
            strict_frames=strict in TRUTHY_VALUES,
        )
