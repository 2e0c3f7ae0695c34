# --------------------------------------------------------------
# File: __init__.py
# Description: Exposición pública del cifrado híbrido de vídeos.
# --------------------------------------------------------------
"""Inicializa el paquete `videolock` y expone sus operaciones principales."""

from videolock.crypto_hash import sha256_hex
from videolock.crypto_rsa import export_key, generate_keypair, import_private_key, import_public_key
from videolock.errors import (
    DecryptionError,
    EncryptionError,
    IntegrityVerificationFailed,
    KeyGenerationError,
    KeyImportError,
    KeyMismatchError,
    PackageFormatError,
    VideoLockError,
)
from videolock.hybrid import decrypt_package, encrypt_video
from videolock.models import DecryptedVideo, EncryptedPackage, KeyPair, VerificationStatus

__all__ = [
    "DecryptedVideo",
    "DecryptionError",
    "EncryptedPackage",
    "EncryptionError",
    "IntegrityVerificationFailed",
    "KeyGenerationError",
    "KeyImportError",
    "KeyMismatchError",
    "KeyPair",
    "PackageFormatError",
    "VerificationStatus",
    "VideoLockError",
    "decrypt_package",
    "encrypt_video",
    "export_key",
    "generate_keypair",
    "import_private_key",
    "import_public_key",
    "sha256_hex",
]
