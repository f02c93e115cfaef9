"""
Vault Crypto Core — Frame layout, AES-256-GCM sealing, and serialization.

Stored values use a single self-contained frame:
    [nonce 12B][auth tag 16B][ciphertext NB]  → base64 text

Security Note:
    Never log plaintext or ciphertext values.
    Nonces are random 96-bit, drawn per call; they are never reused.
"""
import os
import base64
import binascii
from typing import Any, Optional

import orjson
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

NONCE_SIZE = 12  # 96-bit nonce
TAG_SIZE = 16  # 128-bit GCM tag
HEADER_SIZE = NONCE_SIZE + TAG_SIZE

_BYTES_TAG = "$bytes"


# ---------------------------------------------------------------------------
# Frame sealing
# ---------------------------------------------------------------------------

def seal(cipher: AESGCM, plaintext: bytes) -> bytes:
    """Encrypt plaintext into a raw frame.

    AESGCM emits ``ciphertext || tag``; the tag is moved in front of the
    ciphertext so the stored layout is ``nonce || tag || ciphertext``.

    Args:
        cipher: AESGCM instance bound to the 32-byte key.
        plaintext: Data to encrypt (may be empty).

    Returns:
        Raw frame bytes, exactly ``HEADER_SIZE + len(plaintext)`` long.
    """
    nonce = os.urandom(NONCE_SIZE)
    ct = cipher.encrypt(nonce, plaintext, None)
    return nonce + ct[-TAG_SIZE:] + ct[:-TAG_SIZE]


def open_frame(cipher: AESGCM, frame: bytes) -> bytes:
    """Verify and decrypt a raw frame.

    Args:
        cipher: AESGCM instance bound to the 32-byte key.
        frame: Raw frame bytes, at least ``HEADER_SIZE`` long.

    Returns:
        Decrypted plaintext bytes.

    Raises:
        ValueError: If the frame is shorter than the header.
        cryptography.exceptions.InvalidTag: If authentication fails.
    """
    if len(frame) < HEADER_SIZE:
        raise ValueError(
            f"frame too short: {len(frame)} bytes (minimum {HEADER_SIZE})"
        )
    nonce = frame[:NONCE_SIZE]
    tag = frame[NONCE_SIZE:HEADER_SIZE]
    ct = frame[HEADER_SIZE:]
    return cipher.decrypt(nonce, ct + tag, None)


# ---------------------------------------------------------------------------
# Text encoding
# ---------------------------------------------------------------------------

def encode_frame(frame: bytes) -> str:
    """Base64-encode a raw frame for a text column."""
    return base64.b64encode(frame).decode("ascii")


def decode_frame(payload: str) -> Optional[bytes]:
    """Decode stored text into a raw frame.

    Line breaks are dropped and missing ``=`` padding is restored, so
    frames that were wrapped or trimmed by another system still open.

    Returns:
        Frame bytes, or None when the text is not base64 at all.
    """
    text = payload.replace("\r", "").replace("\n", "")
    text += "=" * (-len(text) % 4)
    try:
        return base64.b64decode(text, validate=True)
    except (binascii.Error, ValueError):
        return None


# ---------------------------------------------------------------------------
# Value serialization
# ---------------------------------------------------------------------------

def _encode_default(obj: Any) -> Any:
    # orjson has no native bytes support; it calls this hook at any depth
    if isinstance(obj, (bytes, bytearray)):
        return {_BYTES_TAG: base64.b64encode(obj).decode("ascii")}
    raise TypeError(f"{type(obj).__name__} values cannot be stored encrypted")


def _restore(node: Any) -> Any:
    if isinstance(node, dict):
        if len(node) == 1 and _BYTES_TAG in node:
            return base64.b64decode(node[_BYTES_TAG])
        return {key: _restore(item) for key, item in node.items()}
    if isinstance(node, list):
        return [_restore(item) for item in node]
    return node


def dump_value(value: Any) -> bytes:
    """JSON-encode a value for sealing; bytes anywhere in it are tagged."""
    return orjson.dumps(value, default=_encode_default)


def load_value(data: bytes) -> Any:
    """Inverse of ``dump_value``.

    Raises:
        orjson.JSONDecodeError: If the plaintext is not JSON.
    """
    return _restore(orjson.loads(data))
