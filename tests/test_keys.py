# --------------------------------------------------------------
# File: test_keys.py
# Description: Pruebas de generación de claves y validación del IV.
# --------------------------------------------------------------

import pytest

from aesfile.errors import InvalidIvLengthError, RandomSourceError, UnsupportedKeySizeError
from aesfile.keys import cbc_iv, encode_key, generate_key, key_size_from_choice, validate_iv
from aesfile.models import KeySize


@pytest.mark.parametrize("length", [16, 24, 32])
def test_generate_key_lengths(length):
    """Comprueba que la clave generada tenga exactamente la longitud pedida.

    Args:
        length (int): Longitud en bytes proporcionada por el parámetro.
    """
    key = generate_key(length)
    assert isinstance(key, bytes)
    assert len(key) == length


def test_generate_key_is_random():
    """Verifica que dos claves consecutivas no coincidan."""
    assert generate_key(32) != generate_key(32)


@pytest.mark.parametrize("length", [0, 8, 15, 17, 64])
def test_generate_key_rejects_other_lengths(length):
    """Valida que longitudes ajenas a AES se rechacen antes de pedir entropía."""
    calls = []
    with pytest.raises(UnsupportedKeySizeError):
        generate_key(length, random_source=lambda n: calls.append(n) or bytes(n))
    assert not calls


def test_generate_key_propagates_entropy_failure():
    """Garantiza que un fallo del CSPRNG se propague como RandomSourceError."""

    def broken(_n):
        raise OSError("no entropy")

    with pytest.raises(RandomSourceError) as info:
        generate_key(16, random_source=broken)
    assert isinstance(info.value.__cause__, OSError)


def test_generate_key_rejects_short_random_output():
    """Una fuente que devuelve menos bytes de los pedidos se considera rota."""
    with pytest.raises(RandomSourceError):
        generate_key(24, random_source=lambda n: bytes(n - 1))


@pytest.mark.parametrize("raw", ["0123456789abcdef", "x" * 24, "y" * 32, "ñ" * 8])
def test_validate_iv_accepts_valid_lengths(raw):
    """Comprueba que las frases de 16, 24 o 32 bytes sean aceptadas."""
    iv = validate_iv(raw)
    assert iv == raw.encode("utf-8")


@pytest.mark.parametrize("raw", ["", "short", "x" * 15, "x" * 17, "x" * 31, "x" * 33, "ñ" * 16 + "a"])
def test_validate_iv_rejects_other_lengths(raw):
    """Verifica que cualquier otra longitud, incluida 0, sea rechazada."""
    with pytest.raises(InvalidIvLengthError) as info:
        validate_iv(raw)
    assert info.value.length == len(raw.encode("utf-8"))


def test_validate_iv_counts_bytes_not_characters():
    """Ocho eñes son 16 bytes en UTF-8 aunque sólo sean 8 caracteres."""
    assert len(validate_iv("ñ" * 8)) == 16
    with pytest.raises(InvalidIvLengthError):
        validate_iv("a" * 16 + "ñ")


def test_cbc_iv_uses_first_block():
    """Solo el primer bloque de un IV largo se usa en CBC."""
    iv = b"0123456789abcdefGHIJKLMNOPQRSTUV"
    assert cbc_iv(iv) == b"0123456789abcdef"
    assert cbc_iv(iv[:16]) == iv[:16]


def test_encode_key_hex():
    assert encode_key(bytes(range(4))) == "00010203"


@pytest.mark.parametrize(
    "choice, expected",
    [("1", KeySize.AES128), ("2", KeySize.AES192), ("3", KeySize.AES256), (" 3 ", KeySize.AES256)],
)
def test_key_size_from_choice(choice, expected):
    """Comprueba la traducción de las opciones del menú."""
    size, defaulted = key_size_from_choice(choice)
    assert size is expected
    assert defaulted is False


@pytest.mark.parametrize("choice", ["", "4", "256", "abc"])
def test_key_size_from_choice_defaults_to_128(choice):
    """Una opción desconocida aplica AES-128 e indica que se usó el valor por defecto."""
    size, defaulted = key_size_from_choice(choice)
    assert size is KeySize.AES128
    assert defaulted is True


def test_validate_iv_rejects_unencodable_text():
    """Surrogates sueltos (terminal no UTF-8) se tratan como IV inválido."""
    with pytest.raises(InvalidIvLengthError) as info:
        validate_iv("\udcff" * 16)
    assert isinstance(info.value.__cause__, UnicodeEncodeError)
    assert "UTF-8" in str(info.value)
