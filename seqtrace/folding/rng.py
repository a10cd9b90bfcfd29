"""Seeded pseudo-random generator for reproducible folding traces.

The folding drivers derive all of their randomness from a 32-bit linear
congruential generator seeded by hashing the input sequence (plus a
per-algorithm salt), so the same input always replays the same trace.

:class:`LatticeRandom` plugs that generator into :class:`random.Random`, so
the usual helpers (``choice``, ``shuffle``, ``randrange``) work on top of it.
"""

from __future__ import annotations

import os
import random
from typing import Final

_MODULUS: Final = 2**32
_MULTIPLIER: Final = 1664525
_INCREMENT: Final = 1013904223


def seed_from_text(text: str) -> int:
    """Hash ``text`` with the polynomial ``h <- 31 h + ord(c) (mod 2^32)``."""
    value = 0
    for char in text:
        value = (value * 31 + ord(char)) % _MODULUS
    return value


class LatticeRandom(random.Random):
    """``random.Random`` driven by the LCG ``x <- 1664525 x + 1013904223 (mod 2^32)``.

    Parameters
    ----------
    seed : int | str | None
        Integer state, text hashed with :func:`seed_from_text`, or ``None``
        for a seed drawn from the operating system.
    """

    def __init__(self, seed: int | str | None = None) -> None:
        self._state = 0
        super().__init__(seed)

    def seed(self, a: int | str | None = None, version: int = 2) -> None:  # noqa: ARG002
        if a is None:
            a = int.from_bytes(os.urandom(4), "big")
        elif isinstance(a, str):
            a = seed_from_text(a)
        self._state = int(a) % _MODULUS
        self.gauss_next = None

    def random(self) -> float:
        """Advance the generator and return a float in ``[0, 1)``."""
        self._state = (self._state * _MULTIPLIER + _INCREMENT) % _MODULUS
        return self._state / _MODULUS

    def _randbelow(self, n: int) -> int:
        # Scale the high bits; the LCG's low bits cycle with short periods.
        return int(self.random() * n)

    def getstate(self) -> tuple[int, float | None]:
        return (self._state, self.gauss_next)

    def setstate(self, state: tuple[int, float | None]) -> None:
        self._state, self.gauss_next = state


def make_rng(sequence: str, salt: str = "", rng: random.Random | None = None) -> random.Random:
    """Return ``rng`` when injected, else a :class:`LatticeRandom` seeded by ``sequence + salt``."""
    if rng is not None:
        return rng
    return LatticeRandom(sequence + salt)
