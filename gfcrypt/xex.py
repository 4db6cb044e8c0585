"""XEX mode full-disk encryption built on SEA-128."""

from __future__ import annotations

import base64
from collections.abc import Callable, Iterator

from gfcrypt.blocks import BLOCK_SIZE, from_base64, int_to_bytes, little_endian_bytes
from gfcrypt.gf128 import coefficients_to_number, gfmul128
from gfcrypt.sea128 import sea128_decrypt, sea128_encrypt

_ALPHA = coefficients_to_number([1])


def _blocks(data: bytes) -> Iterator[int]:
    if len(data) % BLOCK_SIZE:
        raise ValueError(f"data length {len(data)} is not a multiple of {BLOCK_SIZE}")
    for start in range(0, len(data), BLOCK_SIZE):
        yield int.from_bytes(data[start:start + BLOCK_SIZE], "big")


def _next_tweak(tweak: int) -> int:
    product = gfmul128(int.from_bytes(little_endian_bytes(tweak), "big"), _ALPHA)
    return int.from_bytes(little_endian_bytes(product), "big")


def _process(cipher: Callable[[int, int], int], key: int, tweak: int, data: bytes) -> bytes:
    out = bytearray()
    for block in _blocks(data):
        result = cipher(key, block ^ tweak) ^ tweak
        out += int_to_bytes(result, BLOCK_SIZE)
        tweak = _next_tweak(tweak)
    return bytes(out)


def xex_encrypt(key: int, tweak: int, message: bytes) -> bytes:
    """Encrypt ``message`` with ``key`` starting from the already encrypted ``tweak``."""
    return _process(sea128_encrypt, key, tweak, message)


def xex_decrypt(key: int, tweak: int, ciphertext: bytes) -> bytes:
    """Decrypt ``ciphertext`` with ``key`` starting from the already encrypted ``tweak``."""
    return _process(sea128_decrypt, key, tweak, ciphertext)


def xex(mode: str, key: str, tweak: str, data: str) -> str:
    """Run XEX on base64 input; ``key`` holds both 16-byte keys."""
    full_key = base64.b64decode(key, validate=True)
    if len(full_key) != 2 * BLOCK_SIZE:
        raise ValueError("invalid key")
    data_key = int.from_bytes(full_key[:BLOCK_SIZE], "big")
    tweak_key = int.from_bytes(full_key[BLOCK_SIZE:], "big")
    encrypted_tweak = sea128_encrypt(tweak_key, from_base64(tweak))
    raw = base64.b64decode(data, validate=True)
    if mode == "encrypt":
        result = xex_encrypt(data_key, encrypted_tweak, raw)
    elif mode == "decrypt":
        result = xex_decrypt(data_key, encrypted_tweak, raw)
    else:
        raise ValueError(f"invalid mode: {mode!r}")
    return base64.b64encode(result).decode("ascii")