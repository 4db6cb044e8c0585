"""Recovering the GHASH key of GCM messages that share a nonce, and forging tags."""

from __future__ import annotations

from dataclasses import dataclass

from gfcrypt.blocks import BLOCK_SIZE, Text, from_gcm_base64, gcm_toggle, to_base64
from gfcrypt.factoring import ddf, edf, sff
from gfcrypt.gcm import calculate_l, ghash
from gfcrypt.poly import Poly


@dataclass(frozen=True)
class Message:
    """A GCM message in base64; a forgery leaves ``tag`` empty."""

    ciphertext: str
    associated_data: str
    tag: str = ""


@dataclass(frozen=True)
class CrackResult:
    """The forged tag, the tag mask and the hash key, all in base64."""

    tag: str
    mask: str
    h: str


@dataclass(frozen=True)
class _Prepared:
    ciphertext: Text
    associated_data: Text
    tag: int
    length_block: int
    poly: Poly


def _prepare(message: Message) -> _Prepared:
    ciphertext = Text.from_base64(message.ciphertext)
    associated_data = Text.from_base64(message.associated_data)
    tag = from_gcm_base64(message.tag)
    _, length_block = calculate_l(message.ciphertext, message.associated_data)
    poly = Poly.from_texts(
        [
            associated_data,
            ciphertext,
            Text(length_block, BLOCK_SIZE),
            Text(tag, BLOCK_SIZE),
        ]
    )
    return _Prepared(ciphertext, associated_data, tag, length_block, poly)


def find_roots(poly: Poly) -> list[int]:
    """Constant terms of the linear factors found through sff, ddf and edf."""
    candidates: list[int] = []
    for factor in sff(poly):
        if factor.factor.degree() <= 1:
            continue
        for part in ddf(factor.factor):
            if part.factor.degree() == 1:
                candidates.append(part.factor.coefficients[0])
            elif part.exponent == 1:
                candidates.extend(
                    piece.coefficients[0]
                    for piece in edf(part.factor, part.exponent)
                    if piece.degree() == 1
                )
    return candidates


def gcm_crack(
    nonce: str, m1: Message, m2: Message, m3: Message, forgery: Message
) -> CrackResult:
    """Find H from ``m1`` and ``m2``, confirm it with ``m3`` and tag ``forgery``.

    The nonce is accepted for completeness; the attack does not need it.
    """
    first, second, third = (_prepare(m) for m in (m1, m2, m3))
    for candidate in find_roots(first.poly + second.poly):
        mask = (
            ghash(candidate, first.ciphertext, first.length_block, first.associated_data)
            ^ first.tag
        )
        third_hash = ghash(
            candidate, third.ciphertext, third.length_block, third.associated_data
        )
        if third_hash ^ mask != third.tag:
            continue
        _, forgery_length = calculate_l(forgery.ciphertext, forgery.associated_data)
        forged = (
            ghash(
                candidate,
                Text.from_base64(forgery.ciphertext),
                forgery_length,
                Text.from_base64(forgery.associated_data),
            )
            ^ mask
        )
        return CrackResult(
            tag=to_base64(gcm_toggle(forged), BLOCK_SIZE),
            mask=to_base64(gcm_toggle(mask), BLOCK_SIZE),
            h=to_base64(gcm_toggle(candidate), BLOCK_SIZE),
        )
    raise ValueError("no candidate for H matches the third message")