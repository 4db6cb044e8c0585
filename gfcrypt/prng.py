"""The glasskey pseudo-random generator: HMAC-SHA256 over a little-endian counter."""

from __future__ import annotations

import base64
import hashlib
import hmac
import itertools
from collections.abc import Iterable


def glasskey_block(key_star: bytes, counter: int) -> bytes:
    """One 32-byte output block for the given counter."""
    return hmac.new(key_star, counter.to_bytes(8, "little"), hashlib.sha256).digest()


def glasskey_prng(agency_key: str, seed: str, lengths: Iterable[int]) -> list[str]:
    """Cut the generator's byte stream into pieces of ``lengths`` bytes, base64 encoded.

    ``agency_key`` and ``seed`` are base64 strings.
    """
    key = base64.b64decode(agency_key, validate=True)
    seed_bytes = base64.b64decode(seed, validate=True)
    key_star = hashlib.sha256(key).digest() + hashlib.sha256(seed_bytes).digest()

    blocks = (glasskey_block(key_star, counter) for counter in itertools.count())
    buffer = b""
    result = []
    for length in lengths:
        if length < 0:
            raise ValueError(f"negative length: {length}")
        while len(buffer) < length:
            buffer += next(blocks)
        result.append(base64.b64encode(buffer[:length]).decode("ascii"))
        buffer = buffer[length:]
    return result