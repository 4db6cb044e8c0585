"""Galois/Counter Mode with AES-128 or SEA-128 as the block cipher."""

from __future__ import annotations

import base64
from collections.abc import Callable
from dataclasses import dataclass

from gfcrypt.blocks import (
    BLOCK_SIZE,
    Text,
    from_base64,
    from_gcm_base64,
    gcm_toggle,
    reverse_bits,
    to_base64,
)
from gfcrypt.gf128 import gfmul128
from gfcrypt.sea128 import aes_encrypt, sea128_encrypt

Encryption = Callable[[int, int], int]

_MASK_128 = (1 << 128) - 1

_ALGORITHMS: dict[str, Encryption] = {
    "aes128": aes_encrypt,
    "sea128": sea128_encrypt,
}


@dataclass(frozen=True)
class GcmEncryption:
    """Result of a GCM encryption, every field in base64."""

    ciphertext: str
    tag: str
    length_block: str
    hash_key: str


@dataclass(frozen=True)
class GcmDecryption:
    """Result of a GCM decryption."""

    authentic: bool
    plaintext: str


def _cipher_for(algorithm: str) -> Encryption:
    try:
        return _ALGORITHMS[algorithm]
    except KeyError:
        raise ValueError(f"unknown algorithm: {algorithm!r}") from None


def _counter_start(nonce: int) -> int:
    return (nonce << 32) | 1


def first_block(key: int, nonce: int, encrypt: Encryption) -> int:
    """Encrypt the initial counter block ``nonce || 1`` that masks the tag."""
    return encrypt(key, _counter_start(nonce))


def calculate_h(key: int, encrypt: Encryption) -> tuple[int, int]:
    """The hash key in GCM order and in big-endian order."""
    h_gcm = encrypt(key, 0)
    return h_gcm, gcm_toggle(h_gcm)


def calculate_l(text: str, ad: str) -> tuple[int, int]:
    """The length block for base64 ``text`` and ``ad``, in GCM and big-endian order."""
    text_bits = len(base64.b64decode(text, validate=True)) * 8
    ad_bits = len(base64.b64decode(ad, validate=True)) * 8
    l_gcm = (ad_bits << 64) + text_bits
    return l_gcm, gcm_toggle(l_gcm)


def gcm_blocks(key: int, nonce: int, text: int, encrypt: Encryption) -> tuple[int, int]:
    """Counter-mode encryption of big-endian ``text``; counters start at ``nonce || 2``.

    Returns the result as GCM-ordered bytes and in big-endian block order.
    """
    text_gcm = 0
    text_big = 0
    counter = _counter_start(nonce)
    remaining = text
    index = 0
    while remaining > 0:
        counter += 1
        keystream = gcm_toggle(encrypt(key, counter))
        block = remaining & _MASK_128
        block_bits = (block.bit_length() + 7) // 8 * 8
        cipher_block = (keystream ^ block) & ((1 << block_bits) - 1)
        text_big |= cipher_block << (index * 128)
        text_gcm = (text_gcm << block_bits) | reverse_bits(cipher_block, block_bits)
        index += 1
        remaining >>= 128
    return text_gcm, text_big


def ghash(h: int, ciphertext: Text, length_block: int, ad: Text) -> int:
    """GHASH over associated data, ciphertext and length block, all big-endian."""
    ad_rest = ad.content
    acc = gfmul128(ad_rest & _MASK_128, h)
    ad_rest >>= 128
    for _ in range(BLOCK_SIZE, ad.length, BLOCK_SIZE):
        acc = gfmul128(acc ^ (ad_rest & _MASK_128), h)
        ad_rest >>= 128

    cipher_rest = ciphertext.content
    while cipher_rest > 0:
        acc = gfmul128(acc ^ (cipher_rest & _MASK_128), h)
        cipher_rest >>= 128

    return gfmul128(acc ^ length_block, h)


def _text(content: int) -> Text:
    return Text(content=content, length=(content.bit_length() + 7) // 8)


def gcm_encrypt(algorithm: str, nonce: str, key: str, plaintext: str, ad: str) -> GcmEncryption:
    """Encrypt and authenticate base64 ``plaintext`` with associated data ``ad``."""
    encrypt = _cipher_for(algorithm)
    nonce_number = from_base64(nonce)
    key_number = from_base64(key)
    plain = from_gcm_base64(plaintext)
    ad_number = from_gcm_base64(ad)

    mask = first_block(key_number, nonce_number, encrypt)
    h_gcm, h_big = calculate_h(key_number, encrypt)
    text_gcm, text_big = gcm_blocks(key_number, nonce_number, plain, encrypt)
    l_gcm, l_big = calculate_l(plaintext, ad)

    digest = ghash(h_big, _text(text_big), l_big, _text(ad_number))
    tag = gcm_toggle(digest) ^ mask

    plain_len = len(base64.b64decode(plaintext, validate=True))
    return GcmEncryption(
        ciphertext=to_base64(text_gcm, plain_len),
        tag=to_base64(tag, BLOCK_SIZE),
        length_block=to_base64(l_gcm, BLOCK_SIZE),
        hash_key=to_base64(h_gcm, BLOCK_SIZE),
    )


def gcm_decrypt(
    algorithm: str, nonce: str, key: str, ciphertext: str, ad: str, tag: str
) -> GcmDecryption:
    """Decrypt base64 ``ciphertext`` and check ``tag``."""
    encrypt = _cipher_for(algorithm)
    nonce_number = from_base64(nonce)
    key_number = from_base64(key)
    cipher = from_gcm_base64(ciphertext)
    ad_number = from_gcm_base64(ad)

    mask = first_block(key_number, nonce_number, encrypt)
    _, h_big = calculate_h(key_number, encrypt)
    text_gcm, _ = gcm_blocks(key_number, nonce_number, cipher, encrypt)
    _, l_big = calculate_l(ciphertext, ad)

    digest = ghash(h_big, _text(cipher), l_big, _text(ad_number))
    expected_tag = gcm_toggle(digest) ^ mask

    cipher_len = len(base64.b64decode(ciphertext, validate=True))
    return GcmDecryption(
        authentic=to_base64(expected_tag, BLOCK_SIZE) == tag,
        plaintext=to_base64(text_gcm, cipher_len),
    )