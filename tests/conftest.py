# --------------------------------------------------------------
# File: conftest.py
# Description: Fixtures compartidas: pares de claves y almacenamiento aislado.
# --------------------------------------------------------------

from typing import Iterator

import pytest

from videolock import config
from videolock.crypto_rsa import generate_keypair
from videolock.models import KeyPair


@pytest.fixture(autouse=True)
def _isolate_storage(tmp_path, monkeypatch) -> Iterator[None]:
    """Aísla STORAGE_PATH en una carpeta temporal para cada prueba.

    Args:
        tmp_path (Path): Carpeta temporal proporcionada por pytest.
        monkeypatch (pytest.MonkeyPatch): Fixture para ajustar la configuración.

    Returns:
        Iterator[None]: Control del fixture autouse durante la ejecución de cada test.
    """
    data_dir = tmp_path / "_data"
    data_dir.mkdir()
    monkeypatch.setattr(config, "STORAGE_PATH", str(data_dir))

    yield
    # tmp_path se limpia automáticamente por pytest


@pytest.fixture(scope="session")
def keypair() -> KeyPair:
    """Par RSA-OAEP de 2048 bits compartido por toda la sesión de pruebas."""
    return generate_keypair(2048)


@pytest.fixture(scope="session")
def other_keypair() -> KeyPair:
    """Segundo par independiente para comprobar rechazos por clave ajena."""
    return generate_keypair(2048)
