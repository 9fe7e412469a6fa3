"""Deterministic random number generator based on SplitMix64.

``SeededGenerator`` is a ``random.Random`` subclass, so every stdlib
sampling helper (``uniform``, ``randrange``, ``choice`` …) works on it,
while the underlying stream is a fixed 64-bit algorithm that replays
bit-for-bit on every platform.
"""

from __future__ import annotations

import os
import random

from tilekit.config import PLACEMENT_RULES


_MASK_64 = (1 << 64) - 1
_GOLDEN_GAMMA = 0x9E37_79B9_7F4A_7C15
_TWO_POW_53 = float(1 << 53)


class SeededGenerator(random.Random):
    """SplitMix64 stream behind the ``random.Random`` interface."""

    VERSION = "splitmix64"

    def __init__(self, seed: int = 0) -> None:
        self._state = PLACEMENT_RULES.zero_seed_replacement
        super().__init__(seed)

    def seed(self, a: int | None = 0, version: int = 2) -> None:
        if a is None:
            a = int.from_bytes(os.urandom(8), "little")
        if not isinstance(a, int):
            raise TypeError(f"SeededGenerator seed must be an int, not {type(a).__name__}")
        a &= _MASK_64
        self._state = a if a != 0 else PLACEMENT_RULES.zero_seed_replacement
        self.gauss_next = None

    def next_uint64(self) -> int:
        self._state = (self._state + _GOLDEN_GAMMA) & _MASK_64
        z = self._state
        z = ((z ^ (z >> 30)) * 0xBF58_476D_1CE4_E5B9) & _MASK_64
        z = ((z ^ (z >> 27)) * 0x94D0_49BB_1331_11EB) & _MASK_64
        return z ^ (z >> 31)

    def random(self) -> float:
        """Float in ``[0, 1)`` from the top 53 bits of the next output."""
        return (self.next_uint64() >> 11) / _TWO_POW_53

    def getrandbits(self, k: int) -> int:
        if k < 0:
            raise ValueError("number of bits must be non-negative")
        result = 0
        filled = 0
        while filled < k:
            result |= self.next_uint64() << filled
            filled += 64
        return result & ((1 << k) - 1)

    def getstate(self) -> tuple:
        return (self.VERSION, self._state, self.gauss_next)

    def setstate(self, state: tuple) -> None:
        version, value, gauss_next = state
        if version != self.VERSION:
            raise ValueError(f"state from version {version!r} passed to SeededGenerator")
        self._state = value
        self.gauss_next = gauss_next
