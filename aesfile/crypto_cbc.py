# --------------------------------------------------------------
# File: crypto_cbc.py
# Description: Primitivas AES-CBC con relleno PKCS#7 para cifrar archivos.
# --------------------------------------------------------------
"""Motor de cifrado simétrico AES en modo CBC para 128, 192 y 256 bits."""

from __future__ import annotations

import logging

from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from aesfile.errors import MalformedCiphertextError, PaddingError
from aesfile.keys import cbc_iv
from aesfile.models import BLOCK_SIZE, CipherVariant

__all__ = ["AesCbcCipher", "ciphertext_length", "encrypt", "decrypt"]

logger = logging.getLogger(__name__)

BLOCK_SIZE_BITS = BLOCK_SIZE * 8


def ciphertext_length(plaintext_length: int) -> int:
    """Calcula el tamaño del texto cifrado tras aplicar PKCS#7.

    Args:
        plaintext_length (int): Tamaño del texto en claro.

    Returns:
        int: Tamaño del texto cifrado, siempre mayor que el de entrada.

    """

    return plaintext_length + (BLOCK_SIZE - plaintext_length % BLOCK_SIZE)


class AesCbcCipher:
    """Cifrador AES-CBC cuya variante se fija una sola vez a partir de la clave.

    Attributes:
        variant (CipherVariant): AES-128, AES-192 o AES-256 según la clave.
        iv (bytes): Bloque de 16 bytes que inicia el encadenamiento.

    """

    def __init__(self, key: bytes, iv: bytes) -> None:
        self.variant = CipherVariant.from_key_length(len(key))
        self.iv = cbc_iv(iv)
        self._cipher = Cipher(algorithms.AES(key), modes.CBC(self.iv))

    def encrypt(self, plaintext: bytes) -> bytes:
        """Rellena con PKCS#7 y cifra en CBC.

        Args:
            plaintext (bytes): Datos en claro de cualquier longitud.

        Returns:
            bytes: Concatenación de los bloques cifrados.

        """

        padder = padding.PKCS7(BLOCK_SIZE_BITS).padder()
        padded = padder.update(plaintext) + padder.finalize()

        encryptor = self._cipher.encryptor()
        ciphertext = encryptor.update(padded) + encryptor.finalize()
        logger.debug(
            "%s-CBC encrypted %d -> %d bytes",
            self.variant.value,
            len(plaintext),
            len(ciphertext),
        )
        return ciphertext

    def decrypt(self, ciphertext: bytes) -> bytes:
        """Descifra en CBC y retira el relleno PKCS#7.

        Args:
            ciphertext (bytes): Texto cifrado producido por `encrypt`.

        Returns:
            bytes: Datos en claro sin relleno.

        Raises:
            MalformedCiphertextError: Si la longitud no es un múltiplo
                positivo del tamaño de bloque.
            PaddingError: Si el relleno recuperado no es PKCS#7 válido.

        """

        if not ciphertext or len(ciphertext) % BLOCK_SIZE:
            raise MalformedCiphertextError(
                f"Ciphertext length {len(ciphertext)} is not a positive multiple of {BLOCK_SIZE}"
            )

        decryptor = self._cipher.decryptor()
        padded = decryptor.update(ciphertext) + decryptor.finalize()

        # SECURITY: el relleno es la única comprobación disponible; CBC no autentica.
        unpadder = padding.PKCS7(BLOCK_SIZE_BITS).unpadder()
        try:
            plaintext = unpadder.update(padded) + unpadder.finalize()
        except ValueError as exc:
            raise PaddingError("Invalid PKCS#7 padding") from exc
        logger.debug(
            "%s-CBC decrypted %d -> %d bytes",
            self.variant.value,
            len(ciphertext),
            len(plaintext),
        )
        return plaintext


def encrypt(plaintext: bytes, key: bytes, iv: bytes) -> bytes:
    """Cifra datos con AES-CBC usando la variante que marca la clave.

    Args:
        plaintext (bytes): Datos en claro.
        key (bytes): Clave de 16, 24 o 32 bytes.
        iv (bytes): IV validado de 16, 24 o 32 bytes.

    Returns:
        bytes: Texto cifrado con relleno PKCS#7.

    """

    return AesCbcCipher(key, iv).encrypt(plaintext)


def decrypt(ciphertext: bytes, key: bytes, iv: bytes) -> bytes:
    """Descifra datos AES-CBC producidos por `encrypt` con la misma clave e IV.

    Args:
        ciphertext (bytes): Texto cifrado.
        key (bytes): Clave de 16, 24 o 32 bytes.
        iv (bytes): IV validado de 16, 24 o 32 bytes.

    Returns:
        bytes: Datos en claro originales.

    """

    return AesCbcCipher(key, iv).decrypt(ciphertext)
