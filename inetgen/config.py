"""Configuration classes for inetgen components."""

from dataclasses import dataclass


@dataclass(frozen=True)
class GeneratorLimits:
    """Hard limits and fixed constants used by the network builder."""

    # Largest node count accepted by validation
    max_nodes: int = 5000

    # Largest requested arc count (DENSITY) accepted by validation
    max_arcs: int = 60000

    # Draws allowed in the filler-arc rejection loop before giving up
    max_filler_attempts: int = 1_000_000

    # Cost placed on the auxiliary arcs that replace node parents
    delivery_cost: int = -100

    def arc_capacity(self, inter: int) -> int:
        """Return the arena size needed for generated plus auxiliary arcs."""
        return self.max_arcs + max(inter, 0)


# Global configuration instance
DEFAULT_LIMITS = GeneratorLimits()
