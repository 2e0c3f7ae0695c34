# --------------------------------------------------------------
# File: crypto_sym.py
# Description: Primitivas AES-GCM para cifrado y descifrado simétrico del vídeo.
# --------------------------------------------------------------
"""Rutinas de cifrado simétrico con claves efímeras de un solo uso."""

import os
from contextlib import contextmanager
from typing import Iterator, Optional, Tuple

from cryptography.hazmat.primitives.ciphers.aead import AESGCM

AES_KEY_SIZE = 32
NONCE_SIZE = 12
TAG_SIZE = 16


@contextmanager
def ephemeral_key() -> Iterator[bytearray]:
    """Genera una clave AES-256 aleatoria y la sobrescribe con ceros al salir.

    Returns:
        Iterator[bytearray]: Clave mutable válida solo dentro del bloque ``with``.

    """

    key = bytearray(AESGCM.generate_key(bit_length=AES_KEY_SIZE * 8))
    try:
        yield key
    finally:
        key[:] = bytes(len(key))


def aes_gcm_encrypt_with_key(
    key: bytes, plaintext: bytes, aad: Optional[bytes] = None
) -> Tuple[bytes, bytes]:
    """Cifra datos con AES-GCM utilizando una clave proporcionada.

    Args:
        key (bytes): Clave simétrica de 256 bits.
        plaintext (bytes): Datos a cifrar.
        aad (Optional[bytes]): Datos autenticados adicionales.

    Returns:
        Tuple[bytes, bytes]: Ciphertext con la etiqueta de 128 bits al final y
        el nonce de 96 bits recién generado.

    """

    nonce = os.urandom(NONCE_SIZE)
    aes = AESGCM(key)
    return aes.encrypt(nonce, plaintext, aad), nonce


def aes_gcm_decrypt_with_key(
    key: bytes, nonce: bytes, ciphertext: bytes, aad: Optional[bytes] = None
) -> bytes:
    """Descifra datos con AES-GCM utilizando la clave simétrica proporcionada.

    Args:
        key (bytes): Clave simétrica que protege los datos.
        nonce (bytes): Vector de inicialización de 96 bits.
        ciphertext (bytes): Datos cifrados con la etiqueta al final.
        aad (Optional[bytes]): Datos autenticados adicionales.

    Returns:
        bytes: Mensaje original en claro.

    Raises:
        cryptography.exceptions.InvalidTag: Si la etiqueta no verifica.

    """

    aes = AESGCM(key)
    return aes.decrypt(nonce, ciphertext, aad)
