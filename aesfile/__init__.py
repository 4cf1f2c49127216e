# --------------------------------------------------------------
# File: __init__.py
# Description: Exposición pública de los módulos del cifrado de archivos AES-CBC.
# --------------------------------------------------------------
"""Inicializa el paquete `aesfile` y documenta sus módulos principales."""

__all__ = [
    "config",
    "crypto_cbc",
    "errors",
    "keys",
    "models",
    "pipeline",
    "storage",
]
