"""Arithmetic in GF(2^128) and conversions between blocks and polynomials."""

from __future__ import annotations

from collections.abc import Iterable

from gfcrypt.blocks import (
    from_gcm_base64,
    from_xex_base64,
    gcm_toggle,
    to_base64,
    to_xex_base64,
)

ONE_BLOCK = 1


def coefficients_to_number(coefficients: Iterable[int]) -> int:
    """Set one bit for every exponent in ``coefficients``."""
    number = 0
    for coefficient in coefficients:
        number |= 1 << coefficient
    return number


def number_to_coefficients(number: int) -> list[int]:
    """Exponents of the set bits of ``number``, in ascending order."""
    return [bit for bit in range(number.bit_length()) if number >> bit & 1]


REDUCE_128 = coefficients_to_number([128, 7, 2, 1, 0])


def gfmul(a: int, b: int, reduce: int) -> int:
    """Multiply two field elements modulo the polynomial ``reduce``."""
    if a.bit_length() < b.bit_length():
        a, b = b, a
    reduce_len = reduce.bit_length()
    result = 0
    while b > 0:
        if b & 1:
            result ^= a
        a <<= 1
        if a.bit_length() >= reduce_len:
            a ^= reduce
        b >>= 1
    return result


def gfmul128(a: int, b: int) -> int:
    return gfmul(a, b, REDUCE_128)


def gf_inverse(b: int, reduce: int) -> int:
    """Multiplicative inverse of ``b`` modulo ``reduce`` (extended Euclid)."""
    u, v = b, reduce
    g1, g2 = 1, 0
    while v != 0:
        shift = u.bit_length() - v.bit_length()
        if shift >= 0:
            u ^= v << shift
            g1 ^= g2 << shift
        u, v = v, u
        g1, g2 = g2, g1
    inverse_len = g1.bit_length()
    reduce_len = reduce.bit_length()
    if inverse_len >= reduce_len:
        g1 ^= reduce << (inverse_len - reduce_len)
    return g1


def gfdiv(a: int, b: int, reduce: int) -> int:
    return gfmul(a, gf_inverse(b, reduce), reduce)


def gfdiv128(a: int, b: int) -> int:
    return gfdiv(a, b, REDUCE_128)


def gf_pow(a: int, exponent: int) -> int:
    """Raise ``a`` to ``exponent`` in GF(2^128) by square-and-multiply."""
    result = ONE_BLOCK
    base = a
    while exponent > 0:
        if exponent & 1:
            result = gfmul128(result, base)
        base = gfmul128(base, base)
        exponent >>= 1
    return result


def _check_semantic(semantic: str) -> None:
    if semantic not in ("xex", "gcm"):
        raise ValueError(f"invalid semantic: {semantic!r}")


def poly2block(semantic: str, coefficients: Iterable[int]) -> str:
    """Encode polynomial exponents as a base64 block."""
    _check_semantic(semantic)
    number = coefficients_to_number(coefficients)
    if semantic == "xex":
        return to_xex_base64(number, 16)
    return to_base64(gcm_toggle(number), 16)


def block2poly(semantic: str, block: str) -> list[int]:
    """Decode a base64 block into the exponents of its polynomial."""
    _check_semantic(semantic)
    if semantic == "xex":
        return number_to_coefficients(from_xex_base64(block))
    return number_to_coefficients(from_gcm_base64(block))


def gfmul_blocks(semantic: str, a: str, b: str) -> str:
    """Multiply two base64 blocks in the given semantic."""
    _check_semantic(semantic)
    if semantic == "xex":
        product = gfmul128(from_xex_base64(a), from_xex_base64(b))
        return to_xex_base64(product, 16)
    product = gfmul128(from_gcm_base64(a), from_gcm_base64(b))
    return to_base64(gcm_toggle(product), 16)


def gfdiv_blocks(a: str, b: str) -> str:
    """Divide two base64 blocks in GCM semantics."""
    quotient = gfdiv128(from_gcm_base64(a), from_gcm_base64(b))
    return to_base64(gcm_toggle(quotient), 16)