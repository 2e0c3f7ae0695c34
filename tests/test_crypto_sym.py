# --------------------------------------------------------------
# File: test_crypto_sym.py
# Description: Pruebas del cifrado y descifrado simétrico con AES-GCM.
# --------------------------------------------------------------

import os

import pytest
from cryptography.exceptions import InvalidTag

from videolock.crypto_sym import (
    AES_KEY_SIZE,
    NONCE_SIZE,
    TAG_SIZE,
    aes_gcm_decrypt_with_key,
    aes_gcm_encrypt_with_key,
    ephemeral_key,
)


def test_aes_gcm_roundtrip_ok():
    """Comprueba que un cifrado con AES-GCM pueda revertirse correctamente.

    Returns:
        None: Las aserciones evalúan la igualdad entre claro y descifrado.
    """
    key = os.urandom(32)
    plaintext = os.urandom(128)
    ct, nonce = aes_gcm_encrypt_with_key(key, plaintext)
    assert len(nonce) == NONCE_SIZE
    assert len(ct) == len(plaintext) + TAG_SIZE
    assert aes_gcm_decrypt_with_key(key, nonce, ct) == plaintext


def test_aes_gcm_detects_tampering_ciphertext():
    """Verifica que cualquier alteración del ciphertext sea detectada.

    Returns:
        None: La expectativa es InvalidTag al descifrar.
    """
    key = os.urandom(32)
    ct, nonce = aes_gcm_encrypt_with_key(key, b"hola mundo")
    tampered = bytes([ct[0] ^ 1]) + ct[1:]
    with pytest.raises(InvalidTag):
        aes_gcm_decrypt_with_key(key, nonce, tampered)


def test_aes_gcm_detects_tampering_tag():
    """Garantiza que un tag modificado invalide el descifrado.

    Returns:
        None: Se espera InvalidTag durante la verificación.
    """
    key = os.urandom(32)
    ct, nonce = aes_gcm_encrypt_with_key(key, b"msg")
    bad = ct[:-1] + bytes([ct[-1] ^ 1])
    with pytest.raises(InvalidTag):
        aes_gcm_decrypt_with_key(key, nonce, bad)


def test_aes_gcm_detects_tampering_nonce():
    """Comprueba que modificar el nonce provoque fallo en la autenticación.

    Returns:
        None: Se espera InvalidTag durante el descifrado.
    """
    key = os.urandom(32)
    ct, nonce = aes_gcm_encrypt_with_key(key, b"msg")
    bad_nonce = bytes([nonce[0] ^ 1]) + nonce[1:]
    with pytest.raises(InvalidTag):
        aes_gcm_decrypt_with_key(key, bad_nonce, ct)


def test_aes_gcm_nonce_uniqueness():
    """Evalúa que los nonces aleatorios generados no se repitan.

    Returns:
        None: Las aserciones verifican la unicidad dentro del muestreo.
    """
    key = os.urandom(32)
    nonces = set()
    for _ in range(200):
        _, nonce = aes_gcm_encrypt_with_key(key, b"x")
        assert nonce not in nonces
        nonces.add(nonce)


def test_ephemeral_key_is_wiped_on_exit():
    """Comprueba que la clave efímera quede a ceros tras el bloque, incluso con error.

    Returns:
        None: Las aserciones inspeccionan la clave después de salir del contexto.
    """
    with ephemeral_key() as key:
        assert len(key) == AES_KEY_SIZE
        assert any(key)
    assert key == bytearray(AES_KEY_SIZE)

    with pytest.raises(RuntimeError):
        with ephemeral_key() as failing_key:
            raise RuntimeError("fallo simulado")
    assert failing_key == bytearray(AES_KEY_SIZE)
