# --------------------------------------------------------------
# File: hybrid.py
# Description: Cifrado híbrido RSA-OAEP + AES-GCM de vídeos con verificación SHA-256.
# --------------------------------------------------------------
"""Empaquetado y desempaquetado de vídeos cifrados para un destinatario."""

import base64
import binascii
import logging
from typing import Any, Dict, Union

from cryptography.exceptions import InvalidTag, UnsupportedAlgorithm
from cryptography.hazmat.primitives.asymmetric import rsa

from videolock.crypto_hash import digests_match, sha256_hex
from videolock.crypto_rsa import oaep_padding
from videolock.crypto_sym import (
    AES_KEY_SIZE,
    aes_gcm_decrypt_with_key,
    aes_gcm_encrypt_with_key,
    ephemeral_key,
)
from videolock.errors import (
    DecryptionError,
    EncryptionError,
    IntegrityVerificationFailed,
    KeyMismatchError,
    PackageFormatError,
)
from videolock.models import (
    DecryptedVideo,
    DecryptStage,
    EncryptedPackage,
    VerificationStatus,
    format_bytes,
)

logger = logging.getLogger(__name__)

PackageSource = Union[EncryptedPackage, Dict[str, Any], str]


def _b64(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


def _b64d(value: str, field: str) -> bytes:
    try:
        return base64.b64decode(value, validate=True)
    except binascii.Error as exc:
        raise PackageFormatError(f"El campo '{field}' no es Base64 válido.") from exc


def encrypt_video(
    video: bytes,
    public_key: rsa.RSAPublicKey,
    file_name: str,
    file_type: str,
) -> EncryptedPackage:
    """Cifra un vídeo para el titular de la clave privada correspondiente.

    Se sella el SHA-256 del vídeo original, se cifra con una clave AES-256
    efímera y un IV de 96 bits nuevos, y la clave AES se envuelve con
    RSA-OAEP. La clave efímera se borra al terminar, incluso si falla.

    Args:
        video (bytes): Contenido original del vídeo.
        public_key (rsa.RSAPublicKey): Clave pública del destinatario.
        file_name (str): Nombre del archivo, viaja sin cifrar.
        file_type (str): Tipo MIME del archivo, viaja sin cifrar.

    Returns:
        EncryptedPackage: Paquete listo para serializar en formato `.enc`.

    Raises:
        EncryptionError: Si la clave no sirve para envolver o el cifrado falla.

    """

    if not isinstance(public_key, rsa.RSAPublicKey):
        raise EncryptionError(
            f"La clave {type(public_key).__name__} no puede envolver claves AES."
        )

    file_hash = sha256_hex(video)

    with ephemeral_key() as aes_key:
        try:
            encrypted_video, iv = aes_gcm_encrypt_with_key(aes_key, video)
            wrapped_key = public_key.encrypt(bytes(aes_key), oaep_padding())
        except (UnsupportedAlgorithm, ValueError, TypeError) as exc:
            raise EncryptionError(f"No se pudo cifrar el vídeo: {exc}") from exc

    logger.info(
        "Vídeo %r cifrado (%s, AES-GCM-256, RSA-OAEP-SHA256)",
        file_name,
        format_bytes(len(video)),
    )
    return EncryptedPackage(
        file_hash=file_hash,
        wrapped_key=_b64(wrapped_key),
        iv=_b64(iv),
        encrypted_video=_b64(encrypted_video),
        video_file_name=file_name,
        video_file_type=file_type,
    )


def _as_package(source: PackageSource) -> EncryptedPackage:
    if isinstance(source, EncryptedPackage):
        # model_copy y model_construct omiten la validación.
        return EncryptedPackage.from_dict(source.model_dump(by_alias=True))
    if isinstance(source, dict):
        return EncryptedPackage.from_dict(source)
    if isinstance(source, str):
        return EncryptedPackage.from_json(source)
    raise PackageFormatError(f"Paquete de tipo {type(source).__name__} no soportado.")


def decrypt_package(package: PackageSource, private_key: rsa.RSAPrivateKey) -> DecryptedVideo:
    """Descifra un paquete y verifica que el vídeo no haya sido manipulado.

    El intento avanza por ``unwrapping``, ``decrypting`` y ``hash_verifying``
    y termina en ``success`` o ``failed``; no se reintenta ni guarda estado.

    Args:
        package (PackageSource): Paquete validado, su dict o su texto JSON.
        private_key (rsa.RSAPrivateKey): Clave privada del destinatario.

    Returns:
        DecryptedVideo: Vídeo original con nombre, tipo y estado verificado.

    Raises:
        PackageFormatError: Si el paquete está mal formado.
        KeyMismatchError: Si la clave privada no desenvuelve la clave AES.
        DecryptionError: Si la etiqueta AES-GCM no verifica.
        IntegrityVerificationFailed: Si el hash recalculado no coincide.

    """

    stage = DecryptStage.PENDING
    try:
        pkg = _as_package(package)
        wrapped_key = _b64d(pkg.wrapped_key, "wrappedKey")
        iv = _b64d(pkg.iv, "iv")
        encrypted_video = _b64d(pkg.encrypted_video, "encryptedVideo")

        stage = DecryptStage.UNWRAPPING
        if not isinstance(private_key, rsa.RSAPrivateKey):
            raise KeyMismatchError(
                f"La clave {type(private_key).__name__} no puede desenvolver claves AES."
            )
        try:
            aes_key = bytearray(private_key.decrypt(wrapped_key, oaep_padding()))
        except ValueError as exc:
            raise KeyMismatchError("La clave privada no corresponde a este paquete.") from exc

        try:
            if len(aes_key) != AES_KEY_SIZE:
                raise KeyMismatchError("La clave desenvuelta no es una clave AES-256.")
            stage = DecryptStage.DECRYPTING
            try:
                video = aes_gcm_decrypt_with_key(aes_key, iv, encrypted_video)
            except (InvalidTag, ValueError) as exc:
                raise DecryptionError(
                    "La etiqueta AES-GCM no verifica: archivo corrupto o clave incorrecta."
                ) from exc
        finally:
            aes_key[:] = bytes(len(aes_key))

        stage = DecryptStage.HASH_VERIFYING
        actual = sha256_hex(video)
        if not digests_match(pkg.file_hash, actual):
            raise IntegrityVerificationFailed(expected=pkg.file_hash, actual=actual)
    except (DecryptionError, IntegrityVerificationFailed) as exc:
        failed_at = stage
        stage = DecryptStage.FAILED
        logger.warning(
            "Descifrado %s en la etapa %s: %s", stage.value, failed_at.value, exc
        )
        raise

    stage = DecryptStage.SUCCESS
    logger.info(
        "Vídeo %r descifrado y verificado (%s, %s)",
        pkg.video_file_name,
        format_bytes(len(video)),
        stage.value,
    )
    return DecryptedVideo(
        video=video,
        file_name=pkg.video_file_name,
        file_type=pkg.video_file_type,
        status=VerificationStatus.SUCCESS,
    )
