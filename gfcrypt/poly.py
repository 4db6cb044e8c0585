"""Polynomials over GF(2^128) with coefficients in big-endian block order."""

from __future__ import annotations

import random
from collections.abc import Iterable
from dataclasses import dataclass
from functools import total_ordering

from gfcrypt.blocks import Text, from_gcm_base64, gcm_toggle, to_base64
from gfcrypt.gf128 import REDUCE_128, gf_pow, gfdiv128, gfmul128

_MASK_128 = (1 << 128) - 1
_BLOCK_BYTES = 16
_SQRT_EXPONENT = 1 << (REDUCE_128.bit_length() - 2)

_rng = random.Random()


@total_ordering
@dataclass(frozen=True)
class Poly:
    """A polynomial whose coefficient at index ``i`` belongs to ``x**i``.

    Leading zero coefficients are dropped; the zero polynomial is ``(0,)``.
    """

    coefficients: tuple[int, ...] = (0,)

    def __post_init__(self) -> None:
        coeffs = list(self.coefficients)
        while coeffs and coeffs[-1] == 0:
            coeffs.pop()
        object.__setattr__(self, "coefficients", tuple(coeffs) or (0,))

    @classmethod
    def from_base64(cls, blocks: Iterable[str]) -> Poly:
        """Build a polynomial from base64 blocks in GCM semantics."""
        return cls(tuple(from_gcm_base64(block) for block in blocks))

    @classmethod
    def from_texts(cls, texts: Iterable[Text]) -> Poly:
        """Split each text into 16-byte blocks; the first block becomes the highest coefficient."""
        blocks: list[int] = []
        for text in texts:
            rest = text.content
            for _ in range(0, text.length, _BLOCK_BYTES):
                blocks.append(rest & _MASK_128)
                rest >>= 128
        return cls(tuple(reversed(blocks)))

    @classmethod
    def random(cls, max_degree: int) -> Poly:
        """A random polynomial of degree below ``max_degree`` with non-zero coefficients."""
        if max_degree <= 0:
            raise ValueError("max_degree must be greater than 0")
        count = _rng.randrange(max_degree) + 1
        coeffs = [_rng.randrange(_MASK_128) or 1 for _ in range(count)]
        while coeffs and coeffs[-1] == 1:
            coeffs.pop()
        return cls(tuple(coeffs) or (1,))

    def to_base64(self) -> list[str]:
        """The coefficients as base64 blocks in GCM semantics."""
        return [to_base64(gcm_toggle(c), _BLOCK_BYTES) for c in self.coefficients]

    def degree(self) -> int:
        """The degree, or -1 for the zero polynomial."""
        if self.coefficients == (0,):
            return -1
        return len(self.coefficients) - 1

    def is_zero(self) -> bool:
        return self.degree() == -1

    def is_one(self) -> bool:
        return self.coefficients == (1,)

    def _sort_key(self) -> tuple[int, tuple[int, ...]]:
        return self.degree(), tuple(reversed(self.coefficients))

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Poly):
            return NotImplemented
        return self._sort_key() < other._sort_key()

    def __add__(self, other: Poly) -> Poly:
        if not isinstance(other, Poly):
            return NotImplemented
        longer, shorter = self.coefficients, other.coefficients
        if len(longer) < len(shorter):
            longer, shorter = shorter, longer
        summed = list(longer)
        for index, value in enumerate(shorter):
            summed[index] ^= value
        return Poly(tuple(summed))

    def __mul__(self, other: Poly) -> Poly:
        if not isinstance(other, Poly):
            return NotImplemented
        product = [0] * (len(self.coefficients) + len(other.coefficients) - 1)
        for i, a in enumerate(self.coefficients):
            if not a:
                continue
            for j, b in enumerate(other.coefficients):
                if b:
                    product[i + j] ^= gfmul128(a, b)
        return Poly(tuple(product))

    def __divmod__(self, other: Poly) -> tuple[Poly, Poly]:
        if not isinstance(other, Poly):
            return NotImplemented
        if other.is_zero():
            raise ZeroDivisionError("polynomial division by zero")
        divisor = other.coefficients
        size = len(divisor)
        remainder = list(self.coefficients)
        if len(remainder) < size:
            return Poly(), self
        lead = divisor[-1]
        quotient = [0] * (len(remainder) - size + 1)
        while len(remainder) >= size and remainder[-1]:
            shift = len(remainder) - size
            factor = gfdiv128(remainder[-1], lead)
            quotient[shift] = factor
            for index, value in enumerate(divisor):
                remainder[shift + index] ^= gfmul128(factor, value)
            while remainder and remainder[-1] == 0:
                remainder.pop()
        return Poly(tuple(quotient)), Poly(tuple(remainder))

    def __mod__(self, other: Poly) -> Poly:
        if not isinstance(other, Poly):
            return NotImplemented
        return divmod(self, other)[1]

    def __pow__(self, exponent: int) -> Poly:
        if exponent < 0:
            raise ValueError("exponent must not be negative")
        result = Poly((1,))
        base = self
        while exponent > 0:
            if exponent & 1:
                result = result * base
            base = base * base
            exponent >>= 1
        return result

    def powmod(self, exponent: int, modulus: Poly) -> Poly:
        """``self ** exponent`` reduced modulo ``modulus`` after every step."""
        if exponent < 0:
            raise ValueError("exponent must not be negative")
        result = Poly((1,))
        base = self
        while exponent > 0:
            if exponent & 1:
                result = (result * base) % modulus
            base = (base * base) % modulus
            exponent >>= 1
        return result

    def make_monic(self) -> Poly:
        """Divide every coefficient by the leading one."""
        if self.is_zero():
            return self
        lead = self.coefficients[-1]
        return Poly(tuple(gfdiv128(c, lead) for c in self.coefficients))

    def diff(self) -> Poly:
        """The formal derivative; in characteristic 2 only odd powers survive."""
        coeffs = self.coefficients
        derived = [0] * len(coeffs)
        for index in range(1, len(coeffs), 2):
            derived[index - 1] = coeffs[index]
        return Poly(tuple(derived))

    def gcd(self, other: Poly) -> Poly:
        """The monic greatest common divisor."""
        a, b = self, other
        while not b.is_zero():
            a, b = b, a % b
        return a.make_monic()

    def sqrt(self) -> Poly:
        """Square root of a polynomial whose odd coefficients are zero."""
        return Poly(
            tuple(gf_pow(c, _SQRT_EXPONENT) for c in self.coefficients[::2])
        )


def sort_polys(polys: Iterable[Poly]) -> list[Poly]:
    """Sort by degree, then by coefficients from the highest down; stable."""
    return sorted(polys)