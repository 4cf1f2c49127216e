# --------------------------------------------------------------
# File: test_config.py
# Description: Pruebas de la validación de variables de entorno en aesfile.config.
# --------------------------------------------------------------

import importlib

import pytest

from aesfile import config


def _reload_expecting(monkeypatch, env, match):
    """Recarga la configuración con `env` y espera un ValueError que nombre la variable.

    Args:
        monkeypatch (pytest.MonkeyPatch): Fixture para ajustar variables de entorno.
        env (dict): Variables que se fijarán antes de recargar.
        match (str): Texto que debe aparecer en el mensaje de error.
    """
    for name, value in env.items():
        monkeypatch.setenv(name, value)
    with pytest.raises(ValueError, match=match):
        importlib.reload(config)
    # Restaura una configuración válida para el resto de la prueba.
    for name in env:
        monkeypatch.delenv(name)
    importlib.reload(config)


def test_defaults():
    assert config.encrypted_path_for("a.txt") == "a.txt.enc"
    assert config.decrypted_path_for("a.txt") == "a.txt_decrypted.txt"
    assert config.LOG_LEVEL == "WARNING"
    assert config.PREVIEW_BYTES == 2048


def test_empty_enc_suffix_rejected(monkeypatch):
    """Un sufijo vacío haría que el cifrado sustituyera al archivo original."""
    _reload_expecting(monkeypatch, {"AESFILE_ENC_SUFFIX": ""}, "AESFILE_ENC_SUFFIX")


def test_empty_decrypted_suffix_rejected(monkeypatch):
    _reload_expecting(
        monkeypatch, {"AESFILE_DECRYPTED_SUFFIX": ""}, "AESFILE_DECRYPTED_SUFFIX"
    )


def test_equal_suffixes_rejected(monkeypatch):
    """Sufijos iguales harían que el descifrado pisara el archivo cifrado."""
    _reload_expecting(
        monkeypatch,
        {"AESFILE_ENC_SUFFIX": ".out", "AESFILE_DECRYPTED_SUFFIX": ".out"},
        "must differ",
    )


def test_non_integer_preview_names_variable(monkeypatch):
    _reload_expecting(monkeypatch, {"AESFILE_PREVIEW_BYTES": "lots"}, "AESFILE_PREVIEW_BYTES")


def test_unknown_log_level_names_variable(monkeypatch):
    _reload_expecting(monkeypatch, {"AESFILE_LOG_LEVEL": "chatty"}, "AESFILE_LOG_LEVEL")


def test_valid_overrides(monkeypatch):
    """Valores válidos se aplican tras recargar el módulo."""
    monkeypatch.setenv("AESFILE_LOG_LEVEL", " debug ")
    monkeypatch.setenv("AESFILE_PREVIEW_BYTES", "0")
    importlib.reload(config)
    assert config.LOG_LEVEL == "DEBUG"
    assert config.PREVIEW_BYTES == 0
