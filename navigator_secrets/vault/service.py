"""
EncryptionService — Authenticated encryption for values stored at rest.

Provides the public API used by data-access code:
- ``encrypt(plaintext)`` — seal a string into a base64 frame
- ``decrypt(payload)`` — open a frame (``None`` when nothing is stored)
- ``encrypt_value(value)`` / ``decrypt_value(payload)`` — JSON values
- ``is_encrypted(value)`` — cheap frame-shape check

Security Note:
    Never log plaintext or ciphertext values. Only log lengths and modes.
    An IntegrityError means a wrong key or tampered storage; it is never
    turned into "no value".
"""
import logging
from typing import Any, Optional

import orjson
from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from ..exceptions import IntegrityError, MalformedFrameError, ValueDecodeError
from .config import EncryptionConfig, load_key_material
from .crypto import (
    HEADER_SIZE,
    seal,
    open_frame,
    encode_frame,
    decode_frame,
    dump_value,
    load_value,
)

logger = logging.getLogger("navigator.secrets")


class EncryptionService:
    """AES-256-GCM encryption bound to one key for the instance lifetime.

    The key is decoded once at construction; a misconfigured key raises
    KeyConfigurationError immediately so the host never starts with it.
    Instances are safe to share between threads and tasks.
    """

    def __init__(self, config: EncryptionConfig):
        raw_key = None
        if config.encryption_key is not None:
            raw_key = config.encryption_key.get_secret_value()
        key = load_key_material(raw_key)
        self._cipher = AESGCM(key)
        self._strict = config.strict_frames

    def __repr__(self) -> str:
        return f"<EncryptionService [AES-256-GCM, strict:{self._strict}]>"

    @property
    def strict_frames(self) -> bool:
        return self._strict

    # ------------------------------------------------------------------
    # Constructors
    # ------------------------------------------------------------------

    @classmethod
    def from_key(cls, raw_key: str, strict_frames: bool = False) -> "EncryptionService":
        """Build a service from an encoded key string.

        Args:
            raw_key: base64 or hex encoded 32-byte key.
            strict_frames: Raise on malformed frames instead of returning None.

        Returns:
            Configured EncryptionService.

        Raises:
            KeyConfigurationError: If the key is missing or not 32 bytes.
        """
        config = EncryptionConfig(
            encryption_key=raw_key, strict_frames=strict_frames,
        )
        return cls(config)

    @classmethod
    def from_env(cls) -> "EncryptionService":
        """Build a service from ENCRYPTION_KEY / ENCRYPTION_STRICT_FRAMES."""
        return cls(EncryptionConfig.from_env())

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def encrypt(self, plaintext: str) -> str:
        """Encrypt a string.

        Output layout (base64): [nonce 12B][tag 16B][ciphertext]. A fresh
        nonce is drawn on every call, so equal inputs give different outputs.

        Args:
            plaintext: Any string, including the empty string.

        Returns:
            base64-encoded frame.
        """
        return encode_frame(seal(self._cipher, plaintext.encode("utf-8")))

    def encrypt_optional(self, plaintext: Optional[str]) -> Optional[str]:
        """Encrypt a string, passing ``None`` through unchanged."""
        if plaintext is None:
            return None
        return self.encrypt(plaintext)

    def decrypt(self, payload: Optional[str]) -> Optional[str]:
        """Decrypt a stored frame.

        Args:
            payload: base64 frame, or None/empty when nothing is stored.

        Returns:
            Decrypted string, or None for absent or malformed payloads.

        Raises:
            IntegrityError: If the frame is well-formed but fails
                authentication (tampering, corruption or wrong key).
            MalformedFrameError: In strict mode, if the payload is not
                a frame.
        """
        frame = self._frame(payload)
        if frame is None:
            return None
        return self._open(frame).decode("utf-8")

    def encrypt_value(self, value: Any) -> str:
        """Serialize a JSON-compatible value and encrypt it.

        Supported types: str, int, float, bool, None, and dicts/lists of
        them; bytes are accepted at any depth.

        Raises:
            TypeError: If the value holds a type JSON cannot represent.
        """
        return encode_frame(seal(self._cipher, dump_value(value)))

    def decrypt_value(self, payload: Optional[str]) -> Any:
        """Decrypt a frame produced by ``encrypt_value``.

        Returns:
            The original value, or None for absent or malformed payloads.

        Raises:
            IntegrityError: If the frame fails authentication.
            ValueDecodeError: If the frame opens but does not hold a
                JSON value (e.g. it was written by ``encrypt``).
        """
        frame = self._frame(payload)
        if frame is None:
            return None
        plaintext = self._open(frame)
        try:
            return load_value(plaintext)
        except orjson.JSONDecodeError as err:
            raise ValueDecodeError(
                "Encrypted value does not hold a stored JSON value"
            ) from err

    @staticmethod
    def is_encrypted(value: Optional[str]) -> bool:
        """Check whether a stored value has the shape of an encrypted frame.

        No key is involved; a True result does not mean the frame opens.
        """
        if not value:
            return False
        frame = decode_frame(value)
        return frame is not None and len(frame) >= HEADER_SIZE

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _frame(self, payload: Optional[str]) -> Optional[bytes]:
        """Decode a payload into frame bytes, or None when there is no frame."""
        if not payload:
            return None
        frame = decode_frame(payload)
        if frame is None or len(frame) < HEADER_SIZE:
            size = -1 if frame is None else len(frame)
            if self._strict:
                raise MalformedFrameError(
                    f"Stored value is not an encrypted frame "
                    f"(decoded size {size}, minimum {HEADER_SIZE})"
                )
            logger.debug(
                "Ignoring non-frame payload (decoded size %d, minimum %d)",
                size, HEADER_SIZE,
            )
            return None
        return frame

    def _open(self, frame: bytes) -> bytes:
        try:
            return open_frame(self._cipher, frame)
        except InvalidTag as err:
            logger.warning(
                "Integrity check failed for %d-byte frame", len(frame),
            )
            raise IntegrityError(
                "Encrypted value failed authentication: "
                "wrong key or tampered data"
            ) from err
