# --------------------------------------------------------------
# File: crypto_rsa.py
# Description: Generación, exportación e importación JWK de claves RSA-OAEP.
# --------------------------------------------------------------
"""Gestión del par de claves RSA-OAEP usado para envolver claves AES."""

import base64
import binascii
import json
import logging
from typing import Any, Dict, Optional, Union

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import padding, rsa

from videolock import config
from videolock.errors import KeyGenerationError, KeyImportError
from videolock.models import KeyPair

logger = logging.getLogger(__name__)

JWK_ALGORITHM = "RSA-OAEP-256"
PUBLIC_EXPONENT = 65537
WRAP_USAGE = "wrapKey"
UNWRAP_USAGE = "unwrapKey"
_CRT_FIELDS = ("p", "q", "dp", "dq", "qi")


def _b64u(data: bytes) -> str:
    """Codifica datos binarios en Base64 URL-safe sin relleno."""

    return base64.urlsafe_b64encode(data).decode("ascii").rstrip("=")


def _unb64u(value: str) -> bytes:
    """Decodifica datos codificados en Base64 URL-safe gestionando el relleno."""

    pad = "=" * (-len(value) % 4)
    return base64.urlsafe_b64decode(value + pad)


def _int_to_b64u(value: int) -> str:
    length = max(1, (value.bit_length() + 7) // 8)
    return _b64u(value.to_bytes(length, "big"))


def oaep_padding() -> padding.OAEP:
    """Devuelve el relleno OAEP con SHA-256 (hash y MGF1) usado en el envoltorio."""

    return padding.OAEP(
        mgf=padding.MGF1(algorithm=hashes.SHA256()),
        algorithm=hashes.SHA256(),
        label=None,
    )


def generate_keypair(modulus_bits: Optional[int] = None) -> KeyPair:
    """Genera un par RSA-OAEP nuevo restringido a envolver/desenvolver claves.

    Args:
        modulus_bits (Optional[int]): Tamaño del módulo; por defecto el de
            ``RSA_MODULUS_BITS``.

    Returns:
        KeyPair: Clave pública y privada generadas juntas.

    Raises:
        KeyGenerationError: Si el tamaño no es un entero, es inseguro o el
            proveedor criptográfico falla.

    """

    raw_bits = config.RSA_MODULUS_BITS if modulus_bits is None else modulus_bits
    try:
        bits = int(raw_bits)
    except (TypeError, ValueError) as exc:
        raise KeyGenerationError(f"Tamaño de módulo RSA no válido: {raw_bits!r}") from exc
    if bits < config.MIN_RSA_MODULUS_BITS:
        raise KeyGenerationError(
            f"Módulo RSA de {bits} bits insuficiente (mínimo {config.MIN_RSA_MODULUS_BITS})."
        )

    try:
        private_key = rsa.generate_private_key(public_exponent=PUBLIC_EXPONENT, key_size=bits)
    except (UnsupportedAlgorithm, ValueError) as exc:
        raise KeyGenerationError(f"No se pudo generar el par RSA: {exc}") from exc

    logger.info("Par RSA-OAEP de %d bits generado", bits)
    return KeyPair(public_key=private_key.public_key(), private_key=private_key)


def export_key(key: Union[rsa.RSAPublicKey, rsa.RSAPrivateKey]) -> str:
    """Serializa una de las dos mitades del par como JWK en texto JSON.

    Args:
        key (Union[rsa.RSAPublicKey, rsa.RSAPrivateKey]): Clave a exportar.

    Returns:
        str: Documento JWK con algoritmo, material de clave y ``key_ops``.

    """

    if isinstance(key, rsa.RSAPrivateKey):
        numbers = key.private_numbers()
        public = numbers.public_numbers
        jwk: Dict[str, Any] = {
            "alg": JWK_ALGORITHM,
            "d": _int_to_b64u(numbers.d),
            "dp": _int_to_b64u(numbers.dmp1),
            "dq": _int_to_b64u(numbers.dmq1),
            "e": _int_to_b64u(public.e),
            "ext": True,
            "key_ops": [UNWRAP_USAGE],
            "kty": "RSA",
            "n": _int_to_b64u(public.n),
            "p": _int_to_b64u(numbers.p),
            "q": _int_to_b64u(numbers.q),
            "qi": _int_to_b64u(numbers.iqmp),
        }
    elif isinstance(key, rsa.RSAPublicKey):
        public = key.public_numbers()
        jwk = {
            "alg": JWK_ALGORITHM,
            "e": _int_to_b64u(public.e),
            "ext": True,
            "key_ops": [WRAP_USAGE],
            "kty": "RSA",
            "n": _int_to_b64u(public.n),
        }
    else:
        raise TypeError(f"Tipo de clave no soportado: {type(key).__name__}")
    return json.dumps(jwk, indent=2)


def _parse_jwk(text: str, usage: str) -> Dict[str, Any]:
    """Decodifica el JWK y comprueba algoritmo y uso permitido."""

    try:
        jwk = json.loads(text)
    except (json.JSONDecodeError, TypeError) as exc:
        raise KeyImportError(f"La clave no es un JSON válido: {exc}") from exc
    if not isinstance(jwk, dict):
        raise KeyImportError("La clave debe ser un objeto JSON.")

    if jwk.get("kty") != "RSA":
        raise KeyImportError(f"Tipo de clave no soportado: {jwk.get('kty')!r}")
    alg = jwk.get("alg")
    if alg is not None and alg != JWK_ALGORITHM:
        raise KeyImportError(f"Algoritmo no soportado: {alg!r}")
    use = jwk.get("use")
    if use is not None and use != "enc":
        raise KeyImportError(f"Uso de clave no válido: {use!r}")
    key_ops = jwk.get("key_ops")
    if not isinstance(key_ops, list) or usage not in key_ops:
        raise KeyImportError(f"La clave no está habilitada para '{usage}'.")
    return jwk


def _jwk_int(jwk: Dict[str, Any], name: str) -> int:
    value = jwk.get(name)
    if not isinstance(value, str) or not value:
        raise KeyImportError(f"Falta el campo '{name}' en la clave.")
    try:
        return int.from_bytes(_unb64u(value), "big")
    except (binascii.Error, ValueError) as exc:
        raise KeyImportError(f"Campo '{name}' mal codificado.") from exc


def _check_modulus(n: int) -> None:
    if n.bit_length() < config.MIN_RSA_MODULUS_BITS:
        raise KeyImportError(
            f"Módulo RSA de {n.bit_length()} bits insuficiente (mínimo {config.MIN_RSA_MODULUS_BITS})."
        )


def import_public_key(text: str) -> rsa.RSAPublicKey:
    """Reconstruye una clave pública RSA-OAEP desde su JWK.

    Args:
        text (str): Documento JWK producido por :func:`export_key`.

    Returns:
        rsa.RSAPublicKey: Clave apta para envolver claves AES.

    Raises:
        KeyImportError: Si el JSON es inválido, el algoritmo no coincide, la
            clave no permite ``wrapKey`` o contiene material privado.

    """

    jwk = _parse_jwk(text, WRAP_USAGE)
    if "d" in jwk:
        raise KeyImportError("Se esperaba una clave pública y se recibió una privada.")
    n = _jwk_int(jwk, "n")
    e = _jwk_int(jwk, "e")
    _check_modulus(n)
    try:
        return rsa.RSAPublicNumbers(e, n).public_key()
    except ValueError as exc:
        raise KeyImportError(f"Material de clave pública inválido: {exc}") from exc


def import_private_key(text: str) -> rsa.RSAPrivateKey:
    """Reconstruye una clave privada RSA-OAEP desde su JWK.

    Si faltan los parámetros CRT se recuperan los primos a partir de
    ``n``, ``e`` y ``d``.

    Raises:
        KeyImportError: Si el JSON es inválido, el algoritmo no coincide, la
            clave no permite ``unwrapKey`` o no contiene material privado.

    """

    jwk = _parse_jwk(text, UNWRAP_USAGE)
    if "d" not in jwk:
        raise KeyImportError("Se esperaba una clave privada y se recibió una pública.")
    n = _jwk_int(jwk, "n")
    e = _jwk_int(jwk, "e")
    d = _jwk_int(jwk, "d")
    _check_modulus(n)

    try:
        if all(name in jwk for name in _CRT_FIELDS):
            p, q, dp, dq, qi = (_jwk_int(jwk, name) for name in _CRT_FIELDS)
        else:
            p, q = rsa.rsa_recover_prime_factors(n, e, d)
            dp = rsa.rsa_crt_dmp1(d, p)
            dq = rsa.rsa_crt_dmq1(d, q)
            qi = rsa.rsa_crt_iqmp(p, q)
        numbers = rsa.RSAPrivateNumbers(p, q, d, dp, dq, qi, rsa.RSAPublicNumbers(e, n))
        return numbers.private_key()
    except ValueError as exc:
        raise KeyImportError(f"Material de clave privada inválido: {exc}") from exc
