"""AES-128 and the SEA-128 variant (AES whose output is XORed with a fixed constant)."""

from __future__ import annotations

import base64

from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from gfcrypt.blocks import BLOCK_SIZE, from_base64, int_to_bytes, to_base64

SEA_CONSTANT = 0xC0FFEEC0FFEEC0FFEEC0FFEEC0FFEE11


def _cipher(key: int) -> Cipher:
    return Cipher(algorithms.AES(int_to_bytes(key, BLOCK_SIZE)), modes.ECB())


def aes_encrypt(key: int, message: int) -> int:
    """Encrypt one 16-byte block with AES-128; key and block are big-endian integers."""
    encryptor = _cipher(key).encryptor()
    out = encryptor.update(int_to_bytes(message, BLOCK_SIZE)) + encryptor.finalize()
    return int.from_bytes(out, "big")


def aes_decrypt(key: int, ciphertext: int) -> int:
    """Decrypt one 16-byte block with AES-128."""
    decryptor = _cipher(key).decryptor()
    out = decryptor.update(int_to_bytes(ciphertext, BLOCK_SIZE)) + decryptor.finalize()
    return int.from_bytes(out, "big")


def sea128_encrypt(key: int, message: int) -> int:
    """AES-128 encryption followed by an XOR with the SEA constant."""
    return aes_encrypt(key, message) ^ SEA_CONSTANT


def sea128_decrypt(key: int, ciphertext: int) -> int:
    """Undo :func:`sea128_encrypt`."""
    return aes_decrypt(key, ciphertext ^ SEA_CONSTANT)


def sea128(mode: str, key: str, data: str) -> str:
    """Encrypt or decrypt a base64 block with SEA-128 and return it in base64."""
    message = from_base64(data)
    key_number = from_base64(key)
    if mode == "encrypt":
        result = sea128_encrypt(key_number, message)
    elif mode == "decrypt":
        result = sea128_decrypt(key_number, message)
    else:
        raise ValueError(f"invalid mode: {mode!r}")
    return to_base64(result, BLOCK_SIZE)


__all__ = [
    "SEA_CONSTANT",
    "aes_decrypt",
    "aes_encrypt",
    "base64",
    "sea128",
    "sea128_decrypt",
    "sea128_encrypt",
]