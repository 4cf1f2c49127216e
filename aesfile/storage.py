# --------------------------------------------------------------
# File: storage.py
# Description: Lectura y escritura binaria de los archivos procesados.
# --------------------------------------------------------------
"""Funciones auxiliares de entrada/salida para el archivo original y sus artefactos."""

from __future__ import annotations

import logging
import os
import tempfile

from aesfile.errors import IoError, IsDirectoryError, NotFoundError

__all__ = ["read_file_bytes", "write_file_bytes"]

logger = logging.getLogger(__name__)


def _ensure_parent_dir(path: str) -> None:
    """Garantiza que exista el directorio padre del archivo de destino."""

    parent = os.path.dirname(path) or "."
    os.makedirs(parent, exist_ok=True)


def read_file_bytes(path: str) -> bytes:
    """Lee el contenido completo de un archivo en binario.

    Args:
        path (str): Ruta del archivo que se cifrará.

    Returns:
        bytes: Contenido íntegro del archivo.

    Raises:
        NotFoundError: Si la ruta no existe.
        IsDirectoryError: Si la ruta apunta a un directorio.
        IoError: Ante cualquier otro fallo de lectura.

    """

    if os.path.isdir(path):
        raise IsDirectoryError(
            "The path provided is a directory, not a file.", path=path
        )
    try:
        with open(path, "rb") as handler:
            data = handler.read()
    except FileNotFoundError as exc:
        raise NotFoundError(f"File not found: {path}", path=path) from exc
    except IsADirectoryError as exc:
        raise IsDirectoryError(
            "The path provided is a directory, not a file.", path=path
        ) from exc
    except OSError as exc:
        raise IoError(f"Failed to read {path}: {exc}", path=path) from exc
    logger.debug("Read %d bytes from %s", len(data), path)
    return data


def write_file_bytes(path: str, data: bytes) -> None:
    """Escribe el buffer completo sustituyendo el archivo de forma atómica.

    Args:
        path (str): Ruta de destino; se crea o se trunca.
        data (bytes): Contenido que se persistirá.

    Raises:
        IoError: Si no es posible escribir el archivo.

    """

    tmp_path = None
    try:
        _ensure_parent_dir(path)
        fd, tmp_path = tempfile.mkstemp(
            dir=os.path.dirname(path) or ".",
            prefix=f".{os.path.basename(path)}.",
            suffix=".tmp",
        )
        with os.fdopen(fd, "wb") as handler:
            handler.write(data)
        os.replace(tmp_path, path)
        tmp_path = None
    except OSError as exc:
        raise IoError(f"Failed to write {path}: {exc}", path=path) from exc
    finally:
        # El temporal solo sobrevive si os.replace no llegó a ejecutarse.
        if tmp_path is not None and os.path.exists(tmp_path):
            os.remove(tmp_path)
    logger.debug("Wrote %d bytes to %s", len(data), path)
