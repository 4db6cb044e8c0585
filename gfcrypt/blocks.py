"""Conversions between base64 blocks, integers and the XEX/GCM bit orders."""

from __future__ import annotations

import base64
import binascii
from dataclasses import dataclass

BLOCK_SIZE = 16


def _decode(text: str) -> bytes:
    try:
        return base64.b64decode(text, validate=True)
    except binascii.Error as exc:
        raise ValueError(f"invalid base64 input: {text!r}") from exc


def _pad_to_blocks(raw: bytes) -> bytes:
    size = (len(raw) + BLOCK_SIZE - 1) // BLOCK_SIZE * BLOCK_SIZE
    return raw + bytes(size - len(raw))


def reverse_bits(number: int, bit_len: int) -> int:
    """Mirror the lowest ``bit_len`` bits of ``number``; higher bits are dropped."""
    if bit_len <= 0:
        return 0
    bits = format(number & ((1 << bit_len) - 1), f"0{bit_len}b")
    return int(bits[::-1], 2)


def gcm_toggle(number: int) -> int:
    """Switch between GCM bit order and plain big-endian order.

    The width is the byte length of ``number`` rounded up to whole 16-byte blocks.
    """
    byte_len = (number.bit_length() + 7) // 8
    width = (byte_len + BLOCK_SIZE - 1) // BLOCK_SIZE * 128
    return reverse_bits(number, width)


def int_to_bytes(number: int, length: int) -> bytes:
    """Big-endian bytes of ``number``, left-padded with zeros to ``length``."""
    try:
        return number.to_bytes(length, "big")
    except OverflowError as exc:
        raise ValueError(f"{number} does not fit into {length} bytes") from exc


def little_endian_bytes(number: int) -> bytes:
    """The 16-byte block of ``number`` with its byte order reversed."""
    return int_to_bytes(number, BLOCK_SIZE)[::-1]


def from_base64(text: str) -> int:
    """Read base64 bytes as a big-endian integer."""
    return int.from_bytes(_decode(text), "big")


def from_xex_base64(text: str) -> int:
    """Read a base64 block in XEX (little-endian) semantics."""
    return int.from_bytes(little_endian_bytes(from_base64(text)), "big")


def from_gcm_base64(text: str) -> int:
    """Read base64 data in GCM semantics, zero-padded to whole blocks."""
    raw = _pad_to_blocks(_decode(text))
    return gcm_toggle(int.from_bytes(raw, "big"))


def to_base64(number: int, length: int) -> str:
    """Encode ``number`` as ``length`` big-endian bytes in base64."""
    return base64.b64encode(int_to_bytes(number, length)).decode("ascii")


def to_xex_base64(number: int, length: int) -> str:
    """Encode ``number`` as a little-endian block in base64, cut or padded to ``length``."""
    data = little_endian_bytes(number).ljust(length, b"\0")[:length]
    return base64.b64encode(data).decode("ascii")


def xor_bytes(a: bytes, b: bytes) -> bytes:
    """XOR two byte strings of equal length."""
    if len(a) != len(b):
        raise ValueError(f"length mismatch: {len(a)} != {len(b)}")
    return bytes(x ^ y for x, y in zip(a, b))


@dataclass(frozen=True)
class Text:
    """GCM-ordered content together with its padded byte length."""

    content: int
    length: int

    @classmethod
    def from_base64(cls, text: str) -> Text:
        raw = _pad_to_blocks(_decode(text))
        content = gcm_toggle(int.from_bytes(raw, "big"))
        return cls(content=content, length=max(len(raw), 1))

    def to_base64(self) -> str:
        return to_base64(gcm_toggle(self.content), self.length)