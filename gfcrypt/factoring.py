"""Factoring polynomials over GF(2^128): square-free, distinct-degree and equal-degree."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from operator import attrgetter

from gfcrypt.poly import Poly

_FIELD_SIZE = 1 << 128
_X = Poly((0, 1))
_ONE = Poly((1,))


@dataclass(frozen=True)
class Factor:
    """A factor together with its exponent (``sff``) or degree (``ddf``)."""

    factor: Poly
    exponent: int

    def to_json(self, key: str = "exponent") -> dict[str, object]:
        """The factor as base64 blocks, with the number stored under ``key``."""
        return {"factor": self.factor.to_base64(), key: self.exponent}


def sort_factors(factors: Iterable[Factor]) -> list[Factor]:
    """Stable sort by the factor polynomial."""
    return sorted(factors, key=attrgetter("factor"))


def sff(f: Poly) -> list[Factor]:
    """Square-free factorization; each factor comes with its multiplicity."""
    if f.is_zero():
        raise ValueError("cannot factor the zero polynomial")
    c = f.gcd(f.diff())
    f = divmod(f, c)[0]
    factors: list[Factor] = []
    exponent = 1
    while not f.is_one():
        y = f.gcd(c)
        if f != y:
            factors.append(Factor(divmod(f, y)[0], exponent))
        f = y
        c = divmod(c, y)[0]
        exponent += 1
    if not c.is_one():
        factors.extend(
            Factor(part.factor, 2 * part.exponent) for part in sff(c.sqrt())
        )
    return factors


def ddf(f: Poly) -> list[Factor]:
    """Distinct-degree factorization; ``exponent`` holds the degree of the irreducible parts."""
    if f.is_zero():
        raise ValueError("cannot factor the zero polynomial")
    factors: list[Factor] = []
    rest = f
    power = _X
    d = 1
    while rest.degree() >= 2 * d:
        # power is X ** (q ** d) reduced modulo the current rest
        power = power.powmod(_FIELD_SIZE, rest)
        g = (power + _X).gcd(rest)
        if not g.is_one():
            factors.append(Factor(g, d))
            rest = divmod(rest, g)[0]
        d += 1
    if not rest.is_one():
        factors.append(Factor(rest, rest.degree()))
    elif not factors:
        factors.append(Factor(rest, 1))
    return factors


def edf(f: Poly, d: int) -> list[Poly]:
    """Equal-degree factorization of ``f`` into irreducible factors of degree ``d``."""
    if d <= 0:
        raise ValueError("d must be greater than 0")
    target = f.degree() // d
    exponent = (_FIELD_SIZE**d - 1) // 3
    parts = [f]
    while len(parts) < target:
        h = Poly.random(f.degree())
        g = h.powmod(exponent, f) + _ONE
        split: list[Poly] = []
        for u in parts:
            if u.degree() > d:
                j = u.gcd(g)
                if not j.is_one() and j != u:
                    split.append(j.make_monic())
                    split.append(divmod(u, j)[0].make_monic())
                    continue
            split.append(u)
        parts = split
    return parts