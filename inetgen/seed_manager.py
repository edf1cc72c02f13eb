"""Deterministic seed derivation for batches of generated instances."""

from __future__ import annotations

import hashlib
from typing import Any, List

from inetgen.random_stream import MODULUS


class SeedManager:
    """Derives per-instance generator seeds from a master seed.

    Seeds come from a SHA-256 hash of the master seed and component
    identifiers, so instance ``k`` of a batch gets the same seed no matter how
    many instances are generated or in which order. Derived seeds fall in
    ``[1, 2**31 - 2]``, the range in which the random stream never degenerates.

    Usage:
        seed_mgr = SeedManager(42)
        seed = seed_mgr.instance_seed(3)
    """

    def __init__(self, master_seed: int) -> None:
        self.master_seed = master_seed

    def derive_seed(self, *components: Any) -> int:
        """Derive a deterministic seed from master seed and component identifiers.

        Args:
            *components: Identifiers (strings, integers, etc.) that uniquely
                name what the seed is for.

        Returns:
            Derived seed in ``[1, 2**31 - 2]``.
        """
        seed_input = f"{self.master_seed}:" + ":".join(str(c) for c in components)
        hash_digest = hashlib.sha256(seed_input.encode()).digest()
        seed_value = int.from_bytes(hash_digest[:4], byteorder="big")
        return seed_value % (MODULUS - 1) + 1

    def instance_seed(self, index: int) -> int:
        """Seed for instance ``index`` of a batch."""
        return self.derive_seed("instance", index)

    def instance_seeds(self, count: int) -> List[int]:
        return [self.instance_seed(i) for i in range(count)]
