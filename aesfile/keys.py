# --------------------------------------------------------------
# File: keys.py
# Description: Generación de claves AES aleatorias y validación del IV.
# --------------------------------------------------------------
"""Proveedor del material criptográfico de una ejecución: clave e IV."""

from __future__ import annotations

import logging
import os
from typing import Callable, Tuple

from aesfile.errors import InvalidIvLengthError, RandomSourceError, UnsupportedKeySizeError
from aesfile.models import BLOCK_SIZE, KeySize

__all__ = [
    "RandomSource",
    "generate_key",
    "validate_iv",
    "cbc_iv",
    "encode_key",
    "key_size_from_choice",
]

logger = logging.getLogger(__name__)

# Fuente de bytes aleatorios: recibe n y devuelve n bytes seguros.
RandomSource = Callable[[int], bytes]

VALID_LENGTHS = frozenset(size.value for size in KeySize)


def generate_key(length_bytes: int, random_source: RandomSource = os.urandom) -> bytes:
    """Genera una clave AES aleatoria de la longitud solicitada.

    Args:
        length_bytes (int): Longitud de la clave en bytes (16, 24 o 32).
        random_source (RandomSource): Fuente CSPRNG; por defecto `os.urandom`.

    Returns:
        bytes: Clave aleatoria lista para el motor de cifrado.

    Raises:
        UnsupportedKeySizeError: Si la longitud no corresponde a AES.
        RandomSourceError: Si la fuente de entropía no está disponible.

    """

    if length_bytes not in VALID_LENGTHS:
        raise UnsupportedKeySizeError(length_bytes)
    try:
        key = random_source(length_bytes)
    except (OSError, NotImplementedError) as exc:
        raise RandomSourceError(f"Failed to generate key: {exc}") from exc
    # Una fuente que devuelve menos bytes de los pedidos no es aceptable.
    if len(key) != length_bytes:
        raise RandomSourceError(
            f"Random source returned {len(key)} bytes, expected {length_bytes}"
        )
    logger.debug("Generated %d-bit key", length_bytes * 8)
    return bytes(key)


def validate_iv(raw: str) -> bytes:
    """Convierte la frase del usuario en un IV si su longitud es válida.

    Args:
        raw (str): Frase introducida por el usuario.

    Returns:
        bytes: Frase codificada en UTF-8.

    Raises:
        InvalidIvLengthError: Si la frase no mide 16, 24 o 32 bytes o no
            puede codificarse en UTF-8.

    """

    try:
        iv = raw.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise InvalidIvLengthError(
            0, f"IV phrase is not valid UTF-8 text: {exc.reason}"
        ) from exc
    if len(iv) not in VALID_LENGTHS:
        raise InvalidIvLengthError(len(iv))
    return iv


def cbc_iv(iv: bytes) -> bytes:
    """Devuelve el bloque que CBC usa realmente como vector de inicialización.

    CBC necesita exactamente un bloque (16 bytes); de una frase de 24 o 32
    bytes sólo se aprovechan los 16 primeros.
    """

    if len(iv) < BLOCK_SIZE:
        raise InvalidIvLengthError(len(iv))
    return iv[:BLOCK_SIZE]


def encode_key(key: bytes) -> str:
    """Codifica la clave en hexadecimal para mostrarla al usuario."""

    return key.hex()


def key_size_from_choice(choice: str) -> Tuple[KeySize, bool]:
    """Resuelve la opción de menú aplicando AES-128 como valor por defecto.

    Args:
        choice (str): Opción escrita por el usuario ("1", "2" o "3").

    Returns:
        Tuple[KeySize, bool]: Longitud elegida e indicador de si se aplicó
        el valor por defecto por ser una opción desconocida.

    """

    size = KeySize.from_choice(choice)
    if size is None:
        logger.debug("Unknown key size choice %r, defaulting to 128 bits", choice)
        return KeySize.AES128, True
    return size, False
