# --------------------------------------------------------------
# File: models.py
# Description: Modelos de datos comunes del cifrado y del pipeline.
# --------------------------------------------------------------
"""Enumeraciones y modelos Pydantic que describen claves, etapas y resultados."""

from __future__ import annotations

from enum import Enum, IntEnum
from typing import List, Optional, Tuple

from pydantic import BaseModel, Field

from aesfile.errors import UnsupportedKeySizeError

# Tamaño de bloque de AES en bytes, idéntico para las tres longitudes de clave.
BLOCK_SIZE = 16


class KeySize(IntEnum):
    """Longitudes de clave admitidas, expresadas en bytes."""

    AES128 = 16
    AES192 = 24
    AES256 = 32

    @property
    def bits(self) -> int:
        return self.value * 8

    @classmethod
    def from_choice(cls, choice: str) -> Optional["KeySize"]:
        """Traduce la opción del menú (1, 2 o 3) a una longitud de clave.

        Args:
            choice (str): Texto introducido por el usuario.

        Returns:
            Optional[KeySize]: Longitud elegida o None si la opción no existe.

        """

        return _CHOICES.get(choice.strip())


_CHOICES = {"1": KeySize.AES128, "2": KeySize.AES192, "3": KeySize.AES256}


class CipherVariant(Enum):
    """Variante de AES determinada únicamente por la longitud de la clave."""

    AES128 = "AES-128"
    AES192 = "AES-192"
    AES256 = "AES-256"

    @property
    def key_bytes(self) -> int:
        return _VARIANT_SIZES[self].value

    @property
    def key_bits(self) -> int:
        return self.key_bytes * 8

    @classmethod
    def from_key_length(cls, length: int) -> "CipherVariant":
        """Selecciona la variante a partir de la longitud de la clave.

        Args:
            length (int): Longitud de la clave en bytes.

        Returns:
            CipherVariant: Variante AES correspondiente.

        Raises:
            UnsupportedKeySizeError: Si la longitud no es 16, 24 ni 32.

        """

        for variant, size in _VARIANT_SIZES.items():
            if size.value == length:
                return variant
        raise UnsupportedKeySizeError(length)


_VARIANT_SIZES = {
    CipherVariant.AES128: KeySize.AES128,
    CipherVariant.AES192: KeySize.AES192,
    CipherVariant.AES256: KeySize.AES256,
}


class Stage(Enum):
    """Estados del pipeline en el orden en que se recorren."""

    CHOOSE_KEY_SIZE = "choose_key_size"
    GENERATE_KEY = "generate_key"
    ACQUIRE_IV = "acquire_iv"
    READ_INPUT = "read_input"
    ENCRYPT = "encrypt"
    PERSIST_CIPHERTEXT = "persist_ciphertext"
    DECRYPT = "decrypt"
    PERSIST_RECOVERED = "persist_recovered"
    DONE = "done"

    @property
    def label(self) -> str:
        """Nombre de la etapa tal y como aparece en los diagnósticos."""

        return _STAGE_LABELS[self]


_STAGE_LABELS = {
    Stage.CHOOSE_KEY_SIZE: "key size selection",
    Stage.GENERATE_KEY: "key generation",
    Stage.ACQUIRE_IV: "IV acquisition",
    Stage.READ_INPUT: "file read",
    Stage.ENCRYPT: "encryption",
    Stage.PERSIST_CIPHERTEXT: "file write",
    Stage.DECRYPT: "decryption",
    Stage.PERSIST_RECOVERED: "file write",
    Stage.DONE: "done",
}


# Orden estricto de transiciones; ninguna etapa puede saltarse.
STAGE_ORDER: Tuple[Stage, ...] = (
    Stage.CHOOSE_KEY_SIZE,
    Stage.GENERATE_KEY,
    Stage.ACQUIRE_IV,
    Stage.READ_INPUT,
    Stage.ENCRYPT,
    Stage.PERSIST_CIPHERTEXT,
    Stage.DECRYPT,
    Stage.PERSIST_RECOVERED,
    Stage.DONE,
)


class ArtifactInfo(BaseModel):
    """Identidad de un archivo generado durante la ejecución.

    Attributes:
        path (str): Ruta donde se escribió el artefacto.
        size (int): Tamaño en bytes del contenido escrito.

    """

    path: str
    size: int


class RunReport(BaseModel):
    """Resumen observable de una ejecución completa del pipeline.

    Attributes:
        variant (CipherVariant): Variante AES utilizada.
        key_hex (str): Clave generada codificada en hexadecimal.
        iv_length (int): Longitud en bytes de la frase usada como IV.
        plaintext_size (int): Tamaño del archivo original.
        ciphertext (ArtifactInfo): Archivo cifrado escrito en disco.
        recovered (ArtifactInfo): Archivo descifrado escrito en disco.
        verified (bool): True si el descifrado coincide byte a byte.
        trace (List[str]): Traza legible de cada etapa.
        plaintext_preview (Optional[str]): Vista previa del contenido original.
        recovered_preview (Optional[str]): Vista previa del contenido descifrado.

    """

    variant: CipherVariant
    key_hex: str
    iv_length: int
    plaintext_size: int
    ciphertext: ArtifactInfo
    recovered: ArtifactInfo
    verified: bool
    trace: List[str] = Field(default_factory=list)
    plaintext_preview: Optional[str] = None
    recovered_preview: Optional[str] = None
