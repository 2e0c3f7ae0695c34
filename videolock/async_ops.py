# --------------------------------------------------------------
# File: async_ops.py
# Description: Variantes awaitables de las operaciones criptográficas largas.
# --------------------------------------------------------------
"""Ejecuta generación, cifrado y descifrado fuera del bucle de eventos."""

import asyncio
from typing import Optional

from cryptography.hazmat.primitives.asymmetric import rsa

from videolock.crypto_rsa import generate_keypair
from videolock.hybrid import PackageSource, decrypt_package, encrypt_video
from videolock.models import DecryptedVideo, EncryptedPackage, KeyPair


async def generate_keypair_async(modulus_bits: Optional[int] = None) -> KeyPair:
    return await asyncio.to_thread(generate_keypair, modulus_bits)


async def encrypt_video_async(
    video: bytes, public_key: rsa.RSAPublicKey, file_name: str, file_type: str
) -> EncryptedPackage:
    return await asyncio.to_thread(encrypt_video, video, public_key, file_name, file_type)


async def decrypt_package_async(
    package: PackageSource, private_key: rsa.RSAPrivateKey
) -> DecryptedVideo:
    return await asyncio.to_thread(decrypt_package, package, private_key)
