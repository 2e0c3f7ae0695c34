# --------------------------------------------------------------
# File: errors.py
# Description: Jerarquía de excepciones del cifrado híbrido de vídeo.
# --------------------------------------------------------------
"""Errores tipados que la capa criptográfica expone a sus llamadores."""

from typing import Optional


class VideoLockError(Exception):
    """Error base de todas las operaciones de ``videolock``."""


class KeyGenerationError(VideoLockError):
    """No se pudo generar el par de claves (algoritmo o aleatoriedad no disponible)."""


class KeyImportError(VideoLockError):
    """El texto JWK está mal formado o no corresponde al uso requerido."""


class EncryptionError(VideoLockError):
    """Falló el cifrado simétrico o el envoltorio de la clave."""


class DecryptionError(VideoLockError):
    """No se pudo descifrar el paquete: clave incorrecta o archivo corrupto."""


class KeyMismatchError(DecryptionError):
    """La clave privada no corresponde a la pública que envolvió la clave AES."""


class PackageFormatError(DecryptionError):
    """El paquete cifrado no respeta el formato de intercambio."""


class IntegrityVerificationFailed(VideoLockError):
    """El hash del vídeo descifrado no coincide con el almacenado en el paquete.

    El contenido recuperado no se expone: debe tratarse igual que un fallo
    de descifrado.

    Attributes:
        expected (str): Hash declarado en el paquete.
        actual (str): Hash recalculado sobre el contenido descifrado.

    """

    def __init__(self, expected: str, actual: str, message: Optional[str] = None) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(message or "Integridad del vídeo comprometida: el hash no coincide.")
