"""Portable linear-congruential random stream.

The generator is the multiplicative congruential ``i = 7**5 * i mod (2**31 - 1)``
computed with the classic 16-bit split so that no intermediate product needs
more than 31 bits plus sign. Every random decision of the network builder goes
through one stream, so the exact recurrence is what makes seeds reproducible.
"""

from __future__ import annotations

MULTIPLIER = 16807
MODULUS = 2147483647


class RandomStream:
    """Uniform integer draws over closed intervals from a single seed."""

    def __init__(self, seed: int = 0) -> None:
        self._state = seed

    def seed(self, value: int) -> None:
        """Reset the stream state to ``value``."""
        self._state = value

    @property
    def state(self) -> int:
        """Current internal state (the last value produced by the recurrence)."""
        return self._state

    def _advance(self) -> int:
        hi = MULTIPLIER * (self._state >> 16)
        lo = MULTIPLIER * (self._state & 0xFFFF)
        hi += lo >> 16
        lo &= 0xFFFF
        lo += hi >> 15
        hi &= 0x7FFF
        lo -= MODULUS
        self._state = (hi << 16) + lo
        if self._state < 0:
            self._state += MODULUS
        return self._state

    def next(self, a: int, b: int) -> int:
        """Return an integer uniformly drawn from ``[a, b]``.

        The state always advances. When ``b <= a`` the draw degenerates and
        ``b`` is returned unchanged.

        Args:
            a: Lower bound, non-negative.
            b: Upper bound.

        Returns:
            The drawn integer.
        """
        state = self._advance()
        if b <= a:
            return b
        return a + state % (b - a + 1)
