import os
import re

import pytest

from inventory.core.cipher import FieldCipher
from inventory.core.errors import ConfigurationError, DecryptionError

SERIALIZED_FORM = re.compile(r"^[0-9a-f]+:[0-9a-f]+$")


@pytest.mark.parametrize(
    "plaintext",
    ["apple", "", "0", "2.5", "ünïcødé ✓", "a:b:c", "x" * 1000],
)
def test_round_trip(cipher, plaintext):
    assert cipher.decrypt(cipher.encrypt(plaintext)) == plaintext


def test_serialized_form(cipher):
    serialized = cipher.encrypt("apple")
    assert SERIALIZED_FORM.match(serialized)

    iv_hex, ciphertext_hex = serialized.split(":")
    assert len(bytes.fromhex(iv_hex)) == 16
    # One block of PKCS#7 padded ciphertext
    assert len(bytes.fromhex(ciphertext_hex)) == 16


def test_fresh_iv_per_call(cipher):
    first = cipher.encrypt("apple")
    second = cipher.encrypt("apple")

    assert first != second
    assert first.split(":")[0] != second.split(":")[0]


def test_tampered_ciphertext_is_rejected(cipher):
    # Two blocks; flipping the last byte of the first block flips the
    # padding byte of the second, which can never be valid padding
    serialized = cipher.encrypt("apple" * 4)
    iv_hex, ciphertext_hex = serialized.split(":")
    ciphertext = bytearray.fromhex(ciphertext_hex)
    ciphertext[15] ^= 0xFF

    with pytest.raises(DecryptionError):
        cipher.decrypt(iv_hex + ":" + ciphertext.hex())


def test_wrong_key_is_rejected(cipher):
    other = FieldCipher(os.urandom(32))

    with pytest.raises(DecryptionError):
        other.decrypt(cipher.encrypt("apple"))


@pytest.mark.parametrize(
    "serialized",
    [
        "not-a-cipher",  # no separator
        "zz:zz",  # not hex
        "00ff:" + "00" * 16,  # iv too short
        "00" * 16 + ":" + "00" * 15,  # not a whole block
        "00" * 16 + ":",  # no ciphertext
    ],
)
def test_malformed_input_is_rejected(cipher, serialized):
    with pytest.raises(DecryptionError):
        cipher.decrypt(serialized)


def test_non_string_is_rejected(cipher):
    with pytest.raises(DecryptionError):
        cipher.decrypt(10)


def test_key_must_be_32_bytes():
    with pytest.raises(ConfigurationError):
        FieldCipher(b"short")
