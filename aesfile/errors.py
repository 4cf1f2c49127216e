# --------------------------------------------------------------
# File: errors.py
# Description: Jerarquía de excepciones del cifrado de archivos AES-CBC.
# --------------------------------------------------------------
"""Excepciones tipadas que sustituyen a los fallos irrecuperables del flujo."""

from __future__ import annotations

__all__ = [
    "AesFileError",
    "RandomSourceError",
    "InvalidIvLengthError",
    "UnsupportedKeySizeError",
    "MalformedCiphertextError",
    "PaddingError",
    "IoError",
    "NotFoundError",
    "IsDirectoryError",
    "StageError",
]


class AesFileError(Exception):
    """Base común de todos los errores del paquete."""


class RandomSourceError(AesFileError):
    """La fuente de entropía del sistema no pudo proporcionar bytes."""


class InvalidIvLengthError(AesFileError):
    """El IV introducido no mide 16, 24 ni 32 bytes."""

    def __init__(self, length: int, message: str = "") -> None:
        super().__init__(message or f"IV must be 16, 24, or 32 bytes long, got {length}")
        self.length = length


class UnsupportedKeySizeError(AesFileError):
    """La clave no corresponde a AES-128, AES-192 ni AES-256."""

    def __init__(self, length: int) -> None:
        super().__init__(f"Unsupported key size: {length} bytes")
        self.length = length


class MalformedCiphertextError(AesFileError):
    """El texto cifrado no es un múltiplo positivo del tamaño de bloque."""


class PaddingError(AesFileError):
    """El relleno PKCS#7 recuperado no es válido."""


class IoError(AesFileError):
    """Fallo genérico de lectura o escritura de archivos."""

    def __init__(self, message: str, path: str = "") -> None:
        super().__init__(message)
        self.path = path


class NotFoundError(IoError):
    """La ruta indicada no existe."""


class IsDirectoryError(IoError):
    """La ruta indicada es un directorio y no un archivo."""


class StageError(AesFileError):
    """Error fatal del pipeline que identifica la etapa en la que ocurrió.

    Attributes:
        stage (str): Nombre legible de la etapa fallida.
        cause (Exception): Excepción original que abortó la ejecución.

    """

    def __init__(self, stage: str, cause: Exception) -> None:
        super().__init__(f"{stage} failed: {cause}")
        self.stage = stage
        self.cause = cause
