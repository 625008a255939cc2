import os

from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from inventory.core.errors import ConfigurationError, DecryptionError

__all__ = ["FieldCipher", "IV_LENGTH", "KEY_LENGTH", "SEPARATOR"]

KEY_LENGTH = 32
IV_LENGTH = 16
SEPARATOR = ":"


class FieldCipher:
    """
    AES-256-CBC encryption of single string values.

    Every call to encrypt draws a fresh IV, so equal plaintexts never
    share a ciphertext. The serialized form is ``hex(iv):hex(ciphertext)``.
    """

    def __init__(self, key: bytes):
        if len(key) != KEY_LENGTH:
            raise ConfigurationError(
                f"Encryption key must be {KEY_LENGTH} bytes, got {len(key)}"
            )
        self.__algorithm = algorithms.AES(key)

    def encrypt(self, plaintext: str) -> str:
        iv = os.urandom(IV_LENGTH)

        padder = padding.PKCS7(algorithms.AES.block_size).padder()
        padded = padder.update(plaintext.encode("utf-8")) + padder.finalize()

        encryptor = Cipher(self.__algorithm, modes.CBC(iv)).encryptor()
        ciphertext = encryptor.update(padded) + encryptor.finalize()

        return iv.hex() + SEPARATOR + ciphertext.hex()

    def decrypt(self, serialized: str) -> str:
        if not isinstance(serialized, str):
            raise DecryptionError(f"Expected a cipher string, got {type(serialized).__name__}")

        iv_hex, separator, ciphertext_hex = serialized.partition(SEPARATOR)
        if not separator:
            raise DecryptionError("Cipher text is missing the iv separator")

        try:
            iv = bytes.fromhex(iv_hex)
            ciphertext = bytes.fromhex(ciphertext_hex)

            decryptor = Cipher(self.__algorithm, modes.CBC(iv)).decryptor()
            padded = decryptor.update(ciphertext) + decryptor.finalize()

            unpadder = padding.PKCS7(algorithms.AES.block_size).unpadder()
            plaintext = unpadder.update(padded) + unpadder.finalize()

            return plaintext.decode("utf-8")
        # Bad hex, iv size, block length, padding and utf-8 all raise ValueError
        except ValueError as e:
            raise DecryptionError(f"Could not decrypt value: {e}") from e
