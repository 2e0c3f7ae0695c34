# --------------------------------------------------------------
# File: test_async_ops.py
# Description: Pruebas de las variantes awaitables de cifrado y descifrado.
# --------------------------------------------------------------

import asyncio

import pytest

from videolock.async_ops import decrypt_package_async, encrypt_video_async, generate_keypair_async
from videolock.errors import KeyGenerationError, KeyMismatchError


def test_async_roundtrip(keypair):
    """Cifra y descifra desde un bucle de eventos.

    Args:
        keypair (KeyPair): Par compartido de la sesión.

    Returns:
        None: El contenido descifrado debe coincidir.
    """

    async def scenario():
        pkg = await encrypt_video_async(b"async", keypair.public_key, "a.mp4", "video/mp4")
        return await decrypt_package_async(pkg, keypair.private_key)

    assert asyncio.run(scenario()).video == b"async"


def test_async_concurrent_encryptions_are_independent(keypair):
    """Cifrados concurrentes no comparten clave ni IV.

    Args:
        keypair (KeyPair): Par compartido de la sesión.

    Returns:
        None: Las aserciones verifican IVs distintos y descifrado correcto.
    """

    async def scenario():
        return await asyncio.gather(
            *(encrypt_video_async(b"same", keypair.public_key, "a.mp4", "video/mp4") for _ in range(8))
        )

    packages = asyncio.run(scenario())
    assert len({pkg.iv for pkg in packages}) == len(packages)
    assert len({pkg.wrapped_key for pkg in packages}) == len(packages)


def test_async_errors_propagate(keypair, other_keypair):
    """Los errores tipados llegan intactos al llamador asíncrono.

    Args:
        keypair (KeyPair): Par del destinatario legítimo.
        other_keypair (KeyPair): Par ajeno.

    Returns:
        None: Se esperan KeyGenerationError y KeyMismatchError.
    """
    with pytest.raises(KeyGenerationError):
        asyncio.run(generate_keypair_async(1024))

    async def scenario():
        pkg = await encrypt_video_async(b"x", keypair.public_key, "a.mp4", "video/mp4")
        return await decrypt_package_async(pkg, other_keypair.private_key)

    with pytest.raises(KeyMismatchError):
        asyncio.run(scenario())
