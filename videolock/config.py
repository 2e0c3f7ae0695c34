# --------------------------------------------------------------
# File: config.py
# Description: Parámetros de configuración leídos del entorno (.env).
# --------------------------------------------------------------
"""Configuración de la aplicación cargada mediante python-dotenv."""

import logging
import os

from dotenv import load_dotenv

load_dotenv()

RSA_MODULUS_BITS = os.getenv("RSA_MODULUS_BITS", "2048")
MIN_RSA_MODULUS_BITS = 2048
PACKAGE_SUFFIX = os.getenv("PACKAGE_SUFFIX", ".enc")
STORAGE_PATH = os.getenv("STORAGE_PATH", "./_data")
LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING")


def configure_logging(level: str = LOG_LEVEL) -> None:
    """Configura el logging para aplicaciones que usan la librería.

    Args:
        level (str): Nombre del nivel (``DEBUG``, ``INFO``...) aplicado al
            logger ``videolock``.

    """

    logging.basicConfig(format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    logging.getLogger("videolock").setLevel(getattr(logging, level.upper(), logging.WARNING))
