# --------------------------------------------------------------
# File: models.py
# Description: Modelos de datos del paquete cifrado y resultados de descifrado.
# --------------------------------------------------------------
"""Modelos Pydantic que encapsulan estructuras de intercambio criptográfico."""

import base64
import binascii
from enum import Enum
from typing import Any, Dict, NamedTuple

from cryptography.hazmat.primitives.asymmetric import rsa
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from videolock.errors import PackageFormatError

IV_SIZE = 12
HEX_DIGEST_PATTERN = r"^[0-9a-f]{64}$"


class KeyPair(NamedTuple):
    """Par de claves RSA-OAEP generado en una misma operación."""

    public_key: rsa.RSAPublicKey
    private_key: rsa.RSAPrivateKey


class VerificationStatus(str, Enum):
    """Veredicto de autenticidad de un intento de descifrado."""

    SUCCESS = "success"


class DecryptStage(str, Enum):
    """Etapas por las que avanza un único intento de descifrado."""

    PENDING = "pending"
    UNWRAPPING = "unwrapping"
    DECRYPTING = "decrypting"
    HASH_VERIFYING = "hash_verifying"
    SUCCESS = "success"
    FAILED = "failed"


class EncryptedPackage(BaseModel):
    """Paquete `.enc` intercambiado entre quien cifra y quien descifra.

    Los campos binarios viajan en Base64 estándar. El nombre y el tipo MIME
    del vídeo no están cubiertos por ``file_hash``.

    Attributes:
        file_hash (str): SHA-256 en hexadecimal del vídeo original.
        wrapped_key (str): Clave AES envuelta con RSA-OAEP.
        iv (str): Vector de inicialización AES-GCM de 96 bits.
        encrypted_video (str): Ciphertext AES-GCM con la etiqueta al final.
        video_file_name (str): Nombre original del archivo.
        video_file_type (str): Tipo MIME original del archivo.

    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    file_hash: str = Field(alias="fileHash", pattern=HEX_DIGEST_PATTERN)
    wrapped_key: str = Field(alias="wrappedKey", min_length=1)
    iv: str
    encrypted_video: str = Field(alias="encryptedVideo", min_length=1)
    video_file_name: str = Field(alias="videoFileName")
    video_file_type: str = Field(alias="videoFileType")

    @field_validator("iv")
    @classmethod
    def _iv_has_96_bits(cls, value: str) -> str:
        try:
            raw = base64.b64decode(value, validate=True)
        except binascii.Error as exc:
            raise ValueError("iv no es Base64 válido") from exc
        if len(raw) != IV_SIZE:
            raise ValueError(f"iv debe medir {IV_SIZE} bytes, recibido {len(raw)}")
        return value

    def to_json(self) -> str:
        """Serializa el paquete con los nombres de campo del formato `.enc`."""

        return self.model_dump_json(by_alias=True, indent=2)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EncryptedPackage":
        """Valida un diccionario con el formato `.enc`.

        Args:
            data (Dict[str, Any]): Objeto JSON ya decodificado.

        Returns:
            EncryptedPackage: Paquete validado.

        Raises:
            PackageFormatError: Si faltan campos o alguno es inválido.

        """

        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            raise PackageFormatError(f"Paquete cifrado inválido: {exc}") from exc

    @classmethod
    def from_json(cls, text: str) -> "EncryptedPackage":
        """Valida el texto JSON de un paquete `.enc`.

        Raises:
            PackageFormatError: Si el JSON está mal formado o no es un paquete.

        """

        try:
            return cls.model_validate_json(text)
        except ValidationError as exc:
            raise PackageFormatError(f"Paquete cifrado inválido: {exc}") from exc


class DecryptedVideo(BaseModel):
    """Vídeo recuperado tras verificar su autenticidad."""

    video: bytes
    file_name: str
    file_type: str
    status: VerificationStatus = VerificationStatus.SUCCESS

    @property
    def size(self) -> int:
        return len(self.video)


_SIZE_UNITS = ("Bytes", "KB", "MB", "GB", "TB")


def format_bytes(size: int, decimals: int = 2) -> str:
    """Convierte un tamaño en bytes a una cadena legible (p. ej. ``1.5 MB``)."""

    if size <= 0:
        return "0 Bytes"
    value = float(size)
    index = 0
    while value >= 1024 and index < len(_SIZE_UNITS) - 1:
        value /= 1024
        index += 1
    return f"{round(value, decimals):g} {_SIZE_UNITS[index]}"
