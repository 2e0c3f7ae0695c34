# --------------------------------------------------------------
# File: storage.py
# Description: Persistencia local de paquetes `.enc` y claves JWK exportadas.
# --------------------------------------------------------------
"""Funciones auxiliares de entrada/salida para paquetes y claves."""

from __future__ import annotations

import logging
import os

from videolock import config
from videolock.models import EncryptedPackage

__all__ = ["key_filename", "load_key", "load_package", "package_path", "save_key", "save_package"]

logger = logging.getLogger(__name__)


def _ensure_parent_dir(path: str) -> None:
    """Garantiza que exista el directorio padre del archivo de destino."""

    parent = os.path.dirname(path) or "."
    os.makedirs(parent, exist_ok=True)


def _write_atomic(path: str, text: str) -> None:
    _ensure_parent_dir(path)
    tmp_path = f"{path}.tmp"
    with open(tmp_path, "w", encoding="utf-8") as handler:
        handler.write(text)
    os.replace(tmp_path, path)


def package_path(video_file_name: str, directory: str | None = None) -> str:
    """Construye la ruta del paquete cifrado para un vídeo.

    Args:
        video_file_name (str): Nombre original del vídeo.
        directory (str | None): Carpeta destino; por defecto ``STORAGE_PATH``.

    Returns:
        str: Ruta ``<directorio>/<nombre><PACKAGE_SUFFIX>`` sin componentes de ruta del nombre.

    """

    base = os.path.basename(video_file_name.replace("\\", "/")) or "video"
    return os.path.join(directory or config.STORAGE_PATH, base + config.PACKAGE_SUFFIX)


def key_filename(title: str) -> str:
    """Nombre de archivo para descargar una clave, p. ej. ``public-key.json``."""

    return "-".join(title.lower().split()) + ".json"


def save_package(package: EncryptedPackage, path: str) -> None:
    """Guarda el paquete cifrado como JSON aplicando escritura atómica."""

    _write_atomic(path, package.to_json())
    logger.debug("Paquete guardado en %s", path)


def load_package(path: str) -> EncryptedPackage:
    """Carga y valida un paquete `.enc`.

    Args:
        path (str): Ruta del paquete.

    Returns:
        EncryptedPackage: Paquete validado.

    Raises:
        FileNotFoundError: Si el archivo no existe.
        PackageFormatError: Si el contenido no es un paquete válido.

    """

    with open(path, "r", encoding="utf-8") as handler:
        return EncryptedPackage.from_json(handler.read())


def save_key(key_text: str, path: str) -> None:
    """Guarda una clave JWK exportada aplicando escritura atómica."""

    _write_atomic(path, key_text)
    logger.debug("Clave guardada en %s", path)


def load_key(path: str) -> str:
    """Lee el texto JWK de una clave previamente guardada."""

    with open(path, "r", encoding="utf-8") as handler:
        return handler.read()
