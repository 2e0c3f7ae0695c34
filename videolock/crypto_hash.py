# --------------------------------------------------------------
# File: crypto_hash.py
# Description: Huella SHA-256 para sellar y verificar la integridad del vídeo.
# --------------------------------------------------------------
"""Cálculo y comparación de digests de integridad."""

import hashlib
import hmac

DIGEST_HEX_LENGTH = 64


def sha256_hex(data: bytes) -> str:
    """Calcula el SHA-256 del contenido completo en hexadecimal minúsculo.

    Args:
        data (bytes): Contenido a resumir como un único mensaje.

    Returns:
        str: Digest de 64 caracteres hexadecimales.

    """

    return hashlib.sha256(data).hexdigest()


def digests_match(expected: str, actual: str) -> bool:
    """Compara dos digests hexadecimales en tiempo constante."""

    try:
        return hmac.compare_digest(expected, actual)
    except TypeError:
        # compare_digest solo admite str ASCII.
        return False
