# --------------------------------------------------------------
# File: conftest.py
# Description: Fixtures compartidas para aislar directorio de trabajo y configuración.
# --------------------------------------------------------------

import importlib
from typing import Iterator

import pytest

_ENV_VARS = (
    "AESFILE_ENC_SUFFIX",
    "AESFILE_DECRYPTED_SUFFIX",
    "AESFILE_LOG_LEVEL",
    "AESFILE_PREVIEW_BYTES",
)


@pytest.fixture(autouse=True)
def _isolate_config(tmp_path, monkeypatch) -> Iterator[None]:
    """Ejecuta cada prueba en una carpeta temporal con la configuración por defecto.

    Args:
        tmp_path (Path): Carpeta temporal proporcionada por pytest.
        monkeypatch (pytest.MonkeyPatch): Fixture para ajustar variables de entorno.

    Returns:
        Iterator[None]: Control del fixture autouse durante la ejecución de cada test.
    """
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)

    import aesfile.config as config_module

    importlib.reload(config_module)

    yield

    importlib.reload(config_module)


@pytest.fixture
def sample_file(tmp_path):
    """Crea un archivo de texto de ejemplo que no es múltiplo del bloque.

    Returns:
        Path: Ruta del archivo creado.
    """
    path = tmp_path / "notes.txt"
    path.write_bytes(b"mensaje secreto de prueba\n")
    return path
