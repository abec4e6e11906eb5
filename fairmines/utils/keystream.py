"""Deterministic float stream derived from HMAC(server_seed, client_seed:nonce:counter).

Each MAC block is sliced into 4-byte big-endian words, and every word is
normalized into [0, 1) by dividing by 2**32. When fewer than 4 bytes remain in
the buffer, the next block is computed with an incremented counter.
"""

from typing import Callable, Iterator

from fairmines.constants import KEYSTREAM_DIVISOR, KEYSTREAM_WORD_BYTES
from fairmines.exceptions import CryptoProviderError
from fairmines.utils.crypto import hmac_sha256

MacFunc = Callable[[str, str], bytes]


class Keystream:
    """Lazy, unbounded sequence of unit-interval floats for one round."""

    __slots__ = ("server_seed", "client_seed", "nonce", "counter", "_buffer", "_mac")

    def __init__(self, server_seed: str, client_seed: str, nonce: int, mac: MacFunc = hmac_sha256):
        self.server_seed = server_seed
        self.client_seed = client_seed
        self.nonce = nonce
        self.counter = 0
        self._buffer = b""
        self._mac = mac

    def block_message(self, counter: int) -> str:
        """Message authenticated for the given block counter."""
        return f"{self.client_seed}:{self.nonce}:{counter}"

    def refill(self) -> None:
        """Replace the buffer with the next MAC block and advance the counter."""
        block = self._mac(self.server_seed, self.block_message(self.counter))
        self.counter += 1
        if len(block) < KEYSTREAM_WORD_BYTES:
            raise CryptoProviderError(
                f"MAC returned {len(block)} bytes, need at least {KEYSTREAM_WORD_BYTES}"
            )
        self._buffer = bytes(block)

    def next_float(self) -> float:
        """Consume the next 4 bytes and return them as a float in [0, 1)."""
        if len(self._buffer) < KEYSTREAM_WORD_BYTES:
            self.refill()
        word = int.from_bytes(self._buffer[:KEYSTREAM_WORD_BYTES], "big")
        self._buffer = self._buffer[KEYSTREAM_WORD_BYTES:]
        return word / KEYSTREAM_DIVISOR

    def __iter__(self) -> Iterator[float]:
        return self

    def __next__(self) -> float:
        return self.next_float()
