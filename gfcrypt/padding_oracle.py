"""CBC padding-oracle attack against a TCP oracle server."""

from __future__ import annotations

import base64
import socket

from gfcrypt.blocks import BLOCK_SIZE, xor_bytes

_BATCH = 32
_TIMEOUT = 5.0


class PaddingOracleError(Exception):
    """Communication with the oracle server failed."""


class _BlockAttack:
    """Recovers the decryption intermediate of one ciphertext block over one connection."""

    def __init__(self, conn: socket.socket) -> None:
        self._conn = conn
        self._intermediate = bytearray(BLOCK_SIZE)
        self._query = bytearray(BLOCK_SIZE)

    def run(self, block: bytes) -> bytes:
        self._send(block)
        for byte_index in range(1, BLOCK_SIZE + 1):
            self._solve_byte(byte_index)
        return bytes(self._intermediate)

    def _send(self, data: bytes) -> None:
        try:
            self._conn.sendall(data)
        except OSError as exc:
            raise PaddingOracleError(f"failed to send message: {exc}") from exc

    def _receive(self, length: int) -> list[int]:
        data = bytearray()
        try:
            while len(data) < length:
                chunk = self._conn.recv(length - len(data))
                if not chunk:
                    break
                data += chunk
        except OSError as exc:
            raise PaddingOracleError(f"failed to receive message: {exc}") from exc
        if len(data) != length:
            raise PaddingOracleError(
                f"received message length mismatch: expected {length}, got {len(data)}"
            )
        return [index for index, value in enumerate(data) if value & 1]

    def _solve_byte(self, byte_index: int) -> None:
        position = BLOCK_SIZE - byte_index
        for start in range(0, 256, _BATCH):
            payload = bytearray(_BATCH.to_bytes(2, "little"))
            for guess in range(start, start + _BATCH):
                self._query[position] = guess
                payload += self._query
            self._send(bytes(payload))
            hits = self._receive(_BATCH)
            if not hits:
                continue
            chosen = hits[0]
            if byte_index == 1:
                chosen = self._disambiguate(position, hits, start)
            self._record(byte_index, chosen + start)
            return

    def _disambiguate(self, position: int, hits: list[int], start: int) -> int:
        """Change the byte before the last to rule out paddings longer than one."""
        payload = bytearray(len(hits).to_bytes(2, "little"))
        for hit in hits:
            guess = hit + start
            self._query[position - 1] = guess ^ 0xFF
            self._query[position] = guess
            payload += self._query
        self._send(bytes(payload))
        confirmed = self._receive(len(hits))
        if len(confirmed) != 1:
            return hits[0]
        return hits[confirmed[0]]

    def _record(self, byte_index: int, guess: int) -> None:
        position = BLOCK_SIZE - byte_index
        self._intermediate[position] = byte_index ^ guess
        next_pad = byte_index + 1
        for index in range(position, BLOCK_SIZE):
            self._query[index] = next_pad ^ self._intermediate[index]


def _recover_block(hostname: str, port: int, block: bytes) -> bytes:
    try:
        conn = socket.create_connection((hostname, port), timeout=_TIMEOUT)
    except OSError as exc:
        raise PaddingOracleError(f"failed to connect to server: {exc}") from exc
    with conn:
        return _BlockAttack(conn).run(block)


def padding_oracle(hostname: str, port: int, iv: str, ciphertext: str) -> str:
    """Decrypt base64 CBC ``ciphertext`` with the oracle at ``hostname:port``.

    Returns the base64 plaintext, padding included.
    """
    data = base64.b64decode(ciphertext, validate=True)
    previous = base64.b64decode(iv, validate=True)
    if len(data) % BLOCK_SIZE:
        raise ValueError(
            f"ciphertext length {len(data)} is not a multiple of {BLOCK_SIZE}"
        )
    plaintext = bytearray()
    for start in range(0, len(data), BLOCK_SIZE):
        block = data[start:start + BLOCK_SIZE]
        intermediate = _recover_block(hostname, port, block)
        plaintext += xor_bytes(intermediate, previous)
        previous = block
    return base64.b64encode(bytes(plaintext)).decode("ascii")