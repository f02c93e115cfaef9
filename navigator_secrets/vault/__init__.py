"""Vault — Authenticated encryption for values persisted at rest.

Security Note (Threat Model):
    Decrypted values exist in process memory while they are in use, and the
    key lives in process memory for the lifetime of the service.
    A memory dump of the application process could expose both.
    This is an accepted limitation; mitigation requires HSM/KMS
    integration which is out of scope.
"""

from .service import EncryptionService
from .config import EncryptionConfig, load_key_material, generate_key

__all__ = [
    "EncryptionService",
    "EncryptionConfig",
    "load_key_material",
    "generate_key",
]
