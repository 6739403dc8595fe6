"""
Encryption of user-supplied provider API keys

Stored format is ``<iv hex>:<ciphertext hex>``: AES-256-CBC with PKCS7
padding, a fresh random IV per write, and a key derived with scrypt from
the server-wide secret. Rotating that secret makes every stored key
undecryptable.
"""

import os
from functools import lru_cache
from typing import Optional

from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes
from cryptography.hazmat.primitives.kdf.scrypt import Scrypt

from backend.config import settings
from backend.core.exceptions import DecryptionError

IV_LENGTH = 16
KEY_LENGTH = 32
SALT = b"salt"
DELIMITER = ":"


@lru_cache(maxsize=8)
def derive_key(secret: str) -> bytes:
    """Derive the 32-byte AES key from a server secret (scrypt N=2^14, r=8, p=1)"""
    if not secret:
        raise ValueError("API key encryption secret is not configured")
    kdf = Scrypt(salt=SALT, length=KEY_LENGTH, n=2 ** 14, r=8, p=1)
    return kdf.derive(secret.encode("utf-8"))


def encrypt_api_key(plaintext: str, secret: Optional[str] = None) -> str:
    """
    Encrypt an API key for storage

    Args:
        plaintext: Key as entered by the user
        secret: Key-derivation secret (defaults to the configured one)

    Returns:
        str: ``iv_hex:ciphertext_hex``
    """
    key = derive_key(secret or settings.encryption_secret)
    iv = os.urandom(IV_LENGTH)

    padder = padding.PKCS7(algorithms.AES.block_size).padder()
    padded = padder.update(plaintext.encode("utf-8")) + padder.finalize()

    encryptor = Cipher(algorithms.AES(key), modes.CBC(iv)).encryptor()
    ciphertext = encryptor.update(padded) + encryptor.finalize()

    return f"{iv.hex()}{DELIMITER}{ciphertext.hex()}"


def decrypt_api_key(stored: str, secret: Optional[str] = None) -> str:
    """
    Decrypt a value produced by encrypt_api_key

    Raises:
        DecryptionError: Malformed value, wrong secret or corrupt ciphertext
    """
    if not stored or DELIMITER not in stored:
        raise DecryptionError("Stored API key is malformed")

    iv_hex, ciphertext_hex = stored.split(DELIMITER, 1)

    try:
        iv = bytes.fromhex(iv_hex)
        ciphertext = bytes.fromhex(ciphertext_hex)
    except ValueError as e:
        raise DecryptionError("Stored API key is not valid hex") from e

    if len(iv) != IV_LENGTH or not ciphertext or len(ciphertext) % IV_LENGTH:
        raise DecryptionError("Stored API key has an invalid length")

    key = derive_key(secret or settings.encryption_secret)
    decryptor = Cipher(algorithms.AES(key), modes.CBC(iv)).decryptor()
    padded = decryptor.update(ciphertext) + decryptor.finalize()

    try:
        unpadder = padding.PKCS7(algorithms.AES.block_size).unpadder()
        plaintext = unpadder.update(padded) + unpadder.finalize()
        return plaintext.decode("utf-8")
    except ValueError as e:
        # UnicodeDecodeError is a ValueError too
        raise DecryptionError("Stored API key could not be decrypted") from e
