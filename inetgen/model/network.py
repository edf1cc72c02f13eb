"""Flow network model produced by the generator.

This module provides the arc, interdependency and network containers plus the
``GeneratedNetwork`` bundle handed from the builder to writers and exporters.
Node ids and arc ids are 1-based, matching the emitted file format.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional

from inetgen.errors import AllocationFailureError, ProblemTooLargeError
from inetgen.model.parameters import GenerationParameters, ParentMode


@dataclass
class Arc:
    """One directed arc of the generated network.

    Attributes:
        id (int): 1-based creation index.
        tail (int): Origin node id.
        head (int): Destination node id; ``0`` for delivery arcs.
        capacity (int): Upper bound on flow (lower bound is always zero).
        cost (int): Per-unit cost.
        delivery (bool): True for the auxiliary arcs that replace node parents.
    """

    id: int
    tail: int
    head: int
    capacity: int
    cost: int
    delivery: bool = False


@dataclass
class Interdependency:
    """Couples a child arc's utilization to a parent's.

    Attributes:
        parent (int): Parent id; a node id while parents are nodes, an arc id
            once the node-parent transformation has run.
        child (int): Child arc id.
        parent_node (Optional[int]): The sink node originally drawn as parent,
            kept after the parent is rewritten to its delivery arc.
    """

    parent: int
    child: int
    parent_node: Optional[int] = None


@dataclass
class Network:
    """Node balances and arcs of one generated instance.

    Balances live in a list indexed by node id (slot 0 is unused). Arcs live
    in an append-only list bounded by ``max_arcs``.

    Attributes:
        nodes (int): Node count.
        sources (int): Source count; sources are ``1..sources``.
        sinks (int): Sink count; sinks are ``nodes - sinks + 1..nodes``.
        max_arcs (int): Hard arena bound for ``add_arc``.
    """

    nodes: int
    sources: int
    sinks: int
    max_arcs: int
    balances: List[int] = field(init=False, repr=False)
    arcs: List[Arc] = field(default_factory=list, init=False, repr=False)

    def __post_init__(self) -> None:
        try:
            self.balances = [0] * (self.nodes + 1)
        except MemoryError as exc:
            raise AllocationFailureError(
                f"cannot allocate balances for {self.nodes} nodes"
            ) from exc

    @property
    def arc_count(self) -> int:
        return len(self.arcs)

    @property
    def first_sink(self) -> int:
        return self.nodes - self.sinks + 1

    def node_ids(self) -> range:
        return range(1, self.nodes + 1)

    def sink_ids(self) -> range:
        return range(self.first_sink, self.nodes + 1)

    def is_source(self, node: int) -> bool:
        return 1 <= node <= self.sources

    def is_sink(self, node: int) -> bool:
        return self.first_sink <= node <= self.nodes

    def balance(self, node: int) -> int:
        """Return the signed balance of ``node``."""
        return self.balances[node]

    def adjust_balance(self, node: int, delta: int) -> None:
        self.balances[node] += delta

    def set_balance(self, node: int, value: int) -> None:
        self.balances[node] = value

    def add_arc(
        self, tail: int, head: int, capacity: int, cost: int, delivery: bool = False
    ) -> Arc:
        """Append an arc and return it.

        Raises:
            ProblemTooLargeError: If the arena is full.
        """
        if len(self.arcs) >= self.max_arcs:
            raise ProblemTooLargeError(
                f"arc arena full at {self.max_arcs} arcs", reason="arc_arena"
            )
        arc = Arc(
            id=len(self.arcs) + 1,
            tail=tail,
            head=head,
            capacity=capacity,
            cost=cost,
            delivery=delivery,
        )
        self.arcs.append(arc)
        return arc

    def arc(self, arc_id: int) -> Arc:
        """Return the arc with 1-based id ``arc_id``."""
        if not 1 <= arc_id <= len(self.arcs):
            raise KeyError(f"no arc with id {arc_id}")
        return self.arcs[arc_id - 1]

    def nonzero_balances(self) -> Iterator[tuple[int, int]]:
        """Yield ``(node, balance)`` for every node with nonzero balance."""
        for node in self.node_ids():
            value = self.balances[node]
            if value != 0:
                yield node, value

    def total_supply(self) -> int:
        return sum(b for b in self.balances if b > 0)

    def total_balance(self) -> int:
        """Sum of node balances plus the demand carried by delivery arcs.

        Delivery arcs take over the demand of the sink they replace, so their
        capacity counts as demand here. The result is zero for every network
        the builder produces.
        """
        carried = sum(arc.capacity for arc in self.arcs if arc.delivery)
        return sum(self.balances) - carried


@dataclass
class GeneratedNetwork:
    """A finished network together with its interdependencies.

    Attributes:
        parameters (GenerationParameters): Inputs that produced the network.
        network (Network): Balances and arcs.
        interdependencies (List[Interdependency]): Parent/child pairs in draw
            order.
    """

    parameters: GenerationParameters
    network: Network
    interdependencies: List[Interdependency] = field(default_factory=list)

    @property
    def parent_mode(self) -> ParentMode:
        return self.parameters.parent

    def summary(self) -> Dict[str, int]:
        """Return headline counts for logging and inspection."""
        net = self.network
        return {
            "nodes": net.nodes,
            "arcs": net.arc_count,
            "interdependencies": len(self.interdependencies),
            "delivery_arcs": sum(1 for arc in net.arcs if arc.delivery),
            "total_supply": net.total_supply(),
        }
