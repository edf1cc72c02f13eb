"""Generation parameters and their structural validation."""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from enum import IntEnum
from typing import Any, Dict, List, Optional, Tuple

from inetgen.config import DEFAULT_LIMITS, GeneratorLimits
from inetgen.errors import (
    BadSeedError,
    InvalidParametersError,
    ProblemTooLargeError,
)


class ParentMode(IntEnum):
    """What the parent side of an interdependency refers to."""

    #: Parents are sink nodes (rewritten to delivery arcs after generation).
    NODE = 0
    #: Parents are arcs.
    ARC = 1

    @property
    def token(self) -> str:
        """Single-letter tag used on the problem line."""
        return "n" if self is ParentMode.NODE else "a"

    @classmethod
    def parse(cls, value: Any) -> Optional["ParentMode"]:
        """Parse an int (0/1), a name ("node"/"arc") or a token ("n"/"a").

        Returns:
            The matching mode, or ``None`` if the value names no mode.
        """
        if isinstance(value, ParentMode):
            return value
        if isinstance(value, int) and not isinstance(value, bool):
            return next((mode for mode in cls if mode.value == value), None)
        if isinstance(value, str):
            key = value.strip().lower()
            for mode in cls:
                if key in (mode.name.lower(), mode.token, str(mode.value)):
                    return mode
        return None

    @classmethod
    def from_value(cls, value: Any) -> "ParentMode":
        """Like ``parse`` but raise on unknown values.

        Raises:
            InvalidParametersError: If the value names no mode.
        """
        mode = cls.parse(value)
        if mode is not None:
            return mode
        raise InvalidParametersError(
            f"parent mode must be 0 (node) or 1 (arc), got {value!r}",
            reason="parent_mode",
        )


@dataclass(frozen=True)
class GenerationParameters:
    """Inputs of one generator run.

    Attributes:
        seed: Positive seed for the random stream.
        nodes: Total node count.
        sources: Source count (nodes ``1..sources``).
        sinks: Sink count (the last ``sinks`` node ids).
        density: Requested arc count.
        min_cost: Minimum arc cost.
        max_cost: Maximum arc cost.
        supply: Total supply shared among the sources.
        tsources: Transshipment sources.
        tsinks: Transshipment sinks.
        hicost: Percentage of skeleton arcs forced to ``max_cost``.
        capacitated: Percentage of arcs given a finite capacity.
        min_cap: Minimum capacity for capacitated arcs.
        max_cap: Maximum capacity for capacitated arcs.
        parent: Parent mode of the interdependencies.
        inter: Interdependency count.
    """

    seed: int
    nodes: int
    sources: int
    sinks: int
    density: int
    min_cost: int
    max_cost: int
    supply: int
    tsources: int
    tsinks: int
    hicost: int
    capacitated: int
    min_cap: int
    max_cap: int
    parent: ParentMode
    inter: int

    def __post_init__(self) -> None:
        # Unknown modes are kept as given and reported by validate()
        mode = ParentMode.parse(self.parent)
        if mode is not None:
            object.__setattr__(self, "parent", mode)

    @classmethod
    def field_names(cls) -> List[str]:
        """Return parameter names in command-line order."""
        return [f.name for f in fields(cls)]

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GenerationParameters":
        """Build parameters from a mapping keyed by field name.

        Raises:
            InvalidParametersError: On missing or unknown keys.
        """
        names = cls.field_names()
        missing = [name for name in names if name not in data]
        if missing:
            raise InvalidParametersError(
                f"missing parameter(s): {', '.join(missing)}", reason="missing"
            )
        extra = sorted(set(data) - set(names))
        if extra:
            raise InvalidParametersError(
                f"unknown parameter(s): {', '.join(extra)}", reason="unknown"
            )
        values = {name: data[name] for name in names}
        values["parent"] = ParentMode.from_value(values["parent"])
        return cls(**values)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["parent"] = int(self.parent)
        return data

    @property
    def transshipment_nodes(self) -> int:
        return self.nodes - self.sources - self.sinks

    @property
    def is_max_flow(self) -> bool:
        """True when the instance is emitted in the maximum-flow variant."""
        return self.min_cost == 1 and self.max_cost == 1

    def validate(self, limits: Optional[GeneratorLimits] = None) -> None:
        """Check the structural parameter constraints.

        The checks run in a fixed order: seed, size limits, then consistency.
        The first violated condition is reported.

        Args:
            limits: Size limits to enforce; defaults to ``DEFAULT_LIMITS``.

        Raises:
            BadSeedError: If ``seed <= 0``.
            ProblemTooLargeError: If ``nodes`` or ``density`` exceed the limits,
                or if no skeleton can fit in ``density`` arcs.
            InvalidParametersError: For any inconsistent setting; ``reason``
                names the condition.
        """
        limits = limits or DEFAULT_LIMITS
        if self.seed <= 0:
            raise BadSeedError(f"seed must be positive, got {self.seed}")
        if self.nodes > limits.max_nodes or self.density > limits.max_arcs:
            raise ProblemTooLargeError(
                f"{self.nodes} nodes / {self.density} arcs requested, limits are "
                f"{limits.max_nodes} / {limits.max_arcs}",
                reason="limits",
            )
        for reason, violated, message in self._consistency_checks():
            if violated:
                raise InvalidParametersError(message, reason=reason)
        # Every chain node and at least min(2, sinks) sink hooks per source
        smallest_skeleton = self.transshipment_nodes + self.sources * min(
            2, self.sinks
        )
        if smallest_skeleton > self.density:
            raise ProblemTooLargeError(
                f"skeleton needs at least {smallest_skeleton} arcs, only "
                f"{self.density} requested",
                reason="skeleton_exceeds_density",
            )

    def _consistency_checks(self) -> List[Tuple[str, bool, str]]:
        parent = ParentMode.parse(self.parent)
        return [
            ("nodes_not_positive", self.nodes <= 0, "node count must be positive"),
            (
                "nodes_exceed_density",
                self.nodes > self.density,
                f"node count {self.nodes} exceeds arc count {self.density}",
            ),
            (
                "sources_not_positive",
                self.sources <= 0,
                "source count must be positive",
            ),
            ("sinks_not_positive", self.sinks <= 0, "sink count must be positive"),
            (
                "sources_plus_sinks_exceed_nodes",
                self.sources + self.sinks > self.nodes,
                f"{self.sources} sources + {self.sinks} sinks exceed "
                f"{self.nodes} nodes",
            ),
            (
                "min_cost_exceeds_max_cost",
                self.min_cost > self.max_cost,
                f"min cost {self.min_cost} exceeds max cost {self.max_cost}",
            ),
            (
                "supply_below_sources",
                self.supply < self.sources,
                f"total supply {self.supply} is below the source count {self.sources}",
            ),
            (
                "tsources_exceed_sources",
                self.tsources > self.sources,
                "more transshipment sources than sources",
            ),
            (
                "tsinks_exceed_sinks",
                self.tsinks > self.sinks,
                "more transshipment sinks than sinks",
            ),
            (
                "hicost_out_of_range",
                not 0 <= self.hicost <= 100,
                f"max-cost percentage {self.hicost} outside [0, 100]",
            ),
            (
                "capacitated_out_of_range",
                not 0 <= self.capacitated <= 100,
                f"capacitated percentage {self.capacitated} outside [0, 100]",
            ),
            (
                "min_cap_exceeds_max_cap",
                self.min_cap > self.max_cap,
                f"min capacity {self.min_cap} exceeds max capacity {self.max_cap}",
            ),
            (
                "parent_mode",
                parent is None,
                f"parent mode must be 0 (node) or 1 (arc), got {self.parent!r}",
            ),
            ("inter_negative", self.inter < 0, "interdependency count is negative"),
            (
                "inter_exceeds_sinks",
                parent is ParentMode.NODE and self.inter > self.sinks,
                f"{self.inter} node-parent interdependencies but only "
                f"{self.sinks} sinks",
            ),
            (
                "inter_exceeds_half_density",
                parent is ParentMode.ARC and self.inter > self.density // 2,
                f"{self.inter} arc-parent interdependencies exceed half of "
                f"{self.density} arcs",
            ),
        ]
