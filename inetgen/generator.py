"""NETGEN-style network builder with interdependencies.

The builder follows the classic NETGEN construction (Klingman, Napier and
Stutz, 1974): sources receive random shares of the total supply, every source
grows a chain of transshipment nodes, chains are hooked to sinks, and filler
arcs are sprayed out of every chain node until the requested arc count is
approached. On top of that it draws interdependency pairs and, when parents
are sink nodes, replaces each parent node by a delivery arc.

All random decisions are taken from one ``RandomStream`` in a fixed order.
Changing the order of draws changes every network produced for a seed, so the
phases below keep the original sequence exactly.

Example:
    >>> from inetgen.generator import generate_network
    >>> from inetgen.model.parameters import GenerationParameters, ParentMode
    >>> params = GenerationParameters(
    ...     seed=123, nodes=10, sources=2, sinks=2, density=20,
    ...     min_cost=1, max_cost=100, supply=1000, tsources=0, tsinks=0,
    ...     hicost=100, capacitated=100, min_cap=100, max_cap=500,
    ...     parent=ParentMode.ARC, inter=2,
    ... )
    >>> generated = generate_network(params)
    >>> len(generated.interdependencies)
    2
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from inetgen.config import DEFAULT_LIMITS, GeneratorLimits
from inetgen.errors import (
    AllocationFailureError,
    InvalidParametersError,
    ProblemTooLargeError,
)
from inetgen.logging import get_logger
from inetgen.model.network import GeneratedNetwork, Interdependency, Network
from inetgen.model.parameters import GenerationParameters, ParentMode
from inetgen.random_stream import RandomStream
from inetgen.selection import OrderedSelectionSet

logger = get_logger(__name__)


@dataclass
class _SkeletonBuffer:
    """Tail/head pairs of one source's skeleton, 1-based like the sort expects."""

    tails: List[int] = field(default_factory=lambda: [0])
    heads: List[int] = field(default_factory=lambda: [0])

    def __len__(self) -> int:
        return len(self.tails) - 1

    def append(self, tail: int, head: int) -> None:
        self.tails.append(tail)
        self.heads.append(head)

    def shell_sort(self) -> None:
        """Sort pairs by tail with gap-halving Shell sort.

        Equal tails keep whatever order this sort leaves them in; the filler
        step consumes random draws in that order.
        """
        tails, heads = self.tails, self.heads
        count = len(self)
        gap = count
        while True:
            gap //= 2
            if gap == 0:
                break
            for j in range(1, count - gap + 1):
                i = j
                while i >= 1 and tails[i] > tails[i + gap]:
                    tails[i], tails[i + gap] = tails[i + gap], tails[i]
                    heads[i], heads[i + gap] = heads[i + gap], heads[i]
                    i -= gap


class NetworkBuilder:
    """Generates one network from ``GenerationParameters``.

    A builder owns its random stream and arenas for the duration of
    ``build``; it may be reused, and every ``build`` call starts afresh from
    the seed.
    """

    def __init__(
        self,
        parameters: GenerationParameters,
        limits: Optional[GeneratorLimits] = None,
    ) -> None:
        self.parameters = parameters
        self.limits = limits or DEFAULT_LIMITS
        self._rng = RandomStream()
        self._network: Optional[Network] = None
        self._pred: List[int] = []
        self._nodes_left = 0
        self._pending_skeleton = 0

    def build(self) -> GeneratedNetwork:
        """Validate the parameters and generate the network.

        Returns:
            The generated network with its interdependencies.

        Raises:
            GenerationError: A subclass carrying the failure code. Validation
                failures are raised before any random draw.
        """
        p = self.parameters
        p.validate(self.limits)

        self._rng.seed(p.seed)
        self._network = Network(
            nodes=p.nodes,
            sources=p.sources,
            sinks=p.sinks,
            max_arcs=self.limits.arc_capacity(p.inter),
        )
        try:
            self._pred = [0] * (p.nodes + 1)
        except MemoryError as exc:
            raise AllocationFailureError(
                f"cannot allocate chain links for {p.nodes} nodes"
            ) from exc
        self._nodes_left = p.nodes - p.sinks + p.tsinks

        logger.debug(
            "Generating network: seed=%d nodes=%d arcs=%d inter=%d parent=%s",
            p.seed,
            p.nodes,
            p.density,
            p.inter,
            p.parent.name.lower(),
        )
        self._create_supply()
        self._build_chains()
        # Filler arcs only spend what the skeletons still to come leave free
        self._pending_skeleton = sum(
            self._skeleton_estimate(source) for source in range(1, p.sources + 1)
        )
        for source in range(1, p.sources + 1):
            estimate = self._skeleton_estimate(source)
            skeleton = self._attach_sinks(source)
            self._pending_skeleton += len(skeleton) - estimate
            self._emit_skeleton(source, skeleton)
        self._transshipment_sink_fillers()
        logger.debug("Generated %d arcs", self._network.arc_count)

        interdependencies = self._select_interdependencies()
        if p.parent is ParentMode.NODE:
            self._node_parents_to_arcs(interdependencies)

        generated = GeneratedNetwork(
            parameters=p,
            network=self._network,
            interdependencies=interdependencies,
        )
        self._network = None
        return generated

    # Phase 1

    def _create_supply(self) -> None:
        """Split the total supply across the sources."""
        p, net, rng = self.parameters, self._network, self._rng
        per_source = p.supply // p.sources
        for source in range(1, p.sources + 1):
            partial = rng.next(1, per_source)
            net.adjust_balance(source, partial)
            net.adjust_balance(rng.next(0, p.sources - 1) + 1, per_source - partial)
        net.adjust_balance(rng.next(0, p.sources - 1) + 1, p.supply % p.sources)

    # Phase 2

    def _build_chains(self) -> None:
        """Thread the transshipment nodes onto per-source chains.

        ``pred[source]`` points at the newest node of its chain and every
        chain node points at the one added before it; the oldest points back
        at the source.
        """
        p, rng, pred = self.parameters, self._rng, self._pred
        for source in range(1, p.sources + 1):
            pred[source] = source

        pool = OrderedSelectionSet(p.sources + 1, p.nodes - p.sinks)
        remaining = p.transshipment_nodes
        even_share_floor = (4 * remaining + 9) // 10
        source = 1
        while remaining > even_share_floor:
            node = pool.choose_at(rng.next(1, pool.size()))
            pred[node] = pred[source]
            pred[source] = node
            source = source + 1 if source < p.sources else 1
            remaining -= 1
        while remaining > 0:
            node = pool.choose_at(rng.next(1, pool.size()))
            source = rng.next(1, p.sources)
            pred[node] = pred[source]
            pred[source] = node
            remaining -= 1

    # Phase 3

    def _chain_length(self, source: int) -> int:
        pred = self._pred
        length = 0
        node = pred[source]
        while node != source:
            length += 1
            node = pred[node]
        return length

    def _sinks_per_source(self, chain_length: int) -> int:
        p = self.parameters
        if p.transshipment_nodes == 0:
            sink_count = p.sinks // p.sources + 1
        else:
            sink_count = 2 * chain_length * p.sinks // p.transshipment_nodes
        return max(2, min(sink_count, p.sinks))

    def _skeleton_estimate(self, source: int) -> int:
        """Upper estimate of a source's skeleton arcs before its sinks are drawn.

        The last source also collects every sink left without demand, so it
        is charged for all of them.
        """
        p = self.parameters
        chain_length = self._chain_length(source)
        if source == p.sources:
            return chain_length + max(p.sinks, 2)
        return chain_length + self._sinks_per_source(chain_length)

    def _attach_sinks(self, source: int) -> _SkeletonBuffer:
        """Collect a source's chain arcs, pick its sinks and split its supply.

        Returns:
            The source's skeleton pairs: chain arcs followed by one arc per
            chosen sink.
        """
        p, net, rng, pred = self.parameters, self._network, self._rng, self._pred
        skeleton = _SkeletonBuffer()
        node = pred[source]
        while node != source:
            skeleton.append(pred[node], node)
            node = pred[node]
        chain_length = len(skeleton)
        sink_count = self._sinks_per_source(chain_length)

        pool = OrderedSelectionSet(net.first_sink, p.nodes)
        chosen: List[int] = []
        for _ in range(sink_count):
            sink = pool.choose_at(rng.next(1, pool.size()))
            # A single sink still gets two draws; the second finds the pool empty
            if sink is not None:
                chosen.append(sink)
        if source == p.sources:
            # Every sink must be reachable: the last source takes the leftovers
            while pool.size() > 0:
                sink = pool.choose_at(1)
                if net.balance(sink) == 0:
                    chosen.append(sink)
        sink_count = len(chosen)

        source_supply = net.balance(source)
        supply_per_sink = source_supply // sink_count
        tail = pred[source]
        for i in range(sink_count):
            partial = rng.next(1, supply_per_sink)
            j = rng.next(0, sink_count - 1)
            skeleton.append(tail, chosen[i])
            net.adjust_balance(chosen[i], -partial)
            net.adjust_balance(chosen[j], -(supply_per_sink - partial))
            tail = source
            for _ in range(rng.next(1, chain_length)):
                tail = pred[tail]
        net.adjust_balance(chosen[0], -(source_supply % sink_count))

        logger.debug(
            "Source %d: chain of %d nodes, %d sinks, supply %d",
            source,
            chain_length,
            sink_count,
            source_supply,
        )
        return skeleton

    # Phase 4

    def _emit_skeleton(self, source: int, skeleton: _SkeletonBuffer) -> None:
        """Turn the sorted skeleton into arcs, with filler arcs per tail."""
        p, net, rng = self.parameters, self._network, self._rng
        skeleton.shell_sort()
        tails, heads = skeleton.tails, skeleton.heads
        count = len(skeleton)
        source_supply = net.balance(source)

        i = 1
        while i <= count:
            tail = tails[i]
            pool = OrderedSelectionSet(p.sources - p.tsources + 1, p.nodes)
            pool.remove_value(tail)
            while i <= count and tails[i] == tail:
                pool.remove_value(heads[i])
                capacity = p.supply
                if rng.next(1, 100) <= p.capacitated:
                    capacity = max(source_supply, p.min_cap)
                cost = p.max_cost
                if rng.next(1, 100) > p.hicost:
                    cost = rng.next(p.min_cost, p.max_cost)
                if net.arc_count >= p.density:
                    raise ProblemTooLargeError(
                        f"skeleton needs more than the {p.density} requested arcs",
                        reason="skeleton_exceeds_density",
                    )
                self._pending_skeleton -= 1
                net.add_arc(tail, heads[i], capacity, cost)
                i += 1
            self._add_filler_arcs(pool, tail)

    def _add_filler_arcs(self, pool: OrderedSelectionSet, tail: int) -> None:
        """Add random arcs out of ``tail`` to push the arc count toward density.

        Args:
            pool: Candidate heads; consumed by this call.
            tail: Node the filler arcs leave from.
        """
        p, net, rng = self.parameters, self._network, self._rng
        non_sources = p.nodes - p.sources + p.tsources
        remaining_arcs = max(p.density - net.arc_count - self._pending_skeleton, 0)

        self._nodes_left -= 1
        nodes_left = self._nodes_left
        if 2 * nodes_left >= remaining_arcs:
            return

        saturating = (remaining_arcs + non_sources - pool.pseudo_size() - 1) // (
            nodes_left + 1
        )
        if saturating >= non_sources - 1:
            limit = non_sources
        else:
            upper_bound = 2 * (remaining_arcs // (nodes_left + 1) - 1)
            attempts = 0
            while True:
                attempts += 1
                if attempts > self.limits.max_filler_attempts:
                    raise ProblemTooLargeError(
                        f"no filler arc count for node {tail} fits the remaining "
                        f"{remaining_arcs} arcs",
                        reason="filler_budget",
                    )
                limit = rng.next(1, upper_bound)
                if nodes_left == 0:
                    limit = remaining_arcs
                if nodes_left * (non_sources - 1) >= remaining_arcs - limit:
                    break

        for _ in range(limit):
            head = pool.choose_at(rng.next(1, pool.pseudo_size()))
            capacity = p.supply
            if rng.next(1, 100) <= p.capacitated:
                capacity = rng.next(p.min_cap, p.max_cap)
            cost = rng.next(p.min_cost, p.max_cost)
            if head is not None:
                net.add_arc(tail, head, capacity, cost)

    # Phase 5

    def _transshipment_sink_fillers(self) -> None:
        p = self.parameters
        first_sink = self._network.first_sink
        for sink in range(first_sink, first_sink + p.tsinks):
            pool = OrderedSelectionSet(p.sources - p.tsources + 1, p.nodes)
            pool.remove_value(sink)
            self._add_filler_arcs(pool, sink)

    # Phase 6

    def _select_interdependencies(self) -> List[Interdependency]:
        """Draw distinct children, then distinct parents."""
        p, net = self.parameters, self._network
        arc_pool = OrderedSelectionSet(1, net.arc_count)
        children = self._draw(arc_pool, p.inter, "child arcs")
        if p.parent is ParentMode.NODE:
            node_pool = OrderedSelectionSet(net.first_sink, p.nodes)
            parents = self._draw(node_pool, p.inter, "parent sinks")
            return [
                Interdependency(parent=parent, child=child, parent_node=parent)
                for parent, child in zip(parents, children)
            ]
        parents = self._draw(arc_pool, p.inter, "parent arcs")
        return [
            Interdependency(parent=parent, child=child)
            for parent, child in zip(parents, children)
        ]

    def _draw(self, pool: OrderedSelectionSet, count: int, what: str) -> List[int]:
        drawn = []
        for _ in range(count):
            value = pool.choose_at(self._rng.next(1, pool.size()))
            if value is None:
                raise InvalidParametersError(
                    f"only {len(drawn)} {what} available for {count} "
                    f"interdependencies ({self._network.arc_count} arcs generated)",
                    reason="insufficient_arcs",
                )
            drawn.append(value)
        return drawn

    # Phase 7

    def _node_parents_to_arcs(self, interdependencies: List[Interdependency]) -> None:
        """Replace each parent sink by a delivery arc draining its demand."""
        net = self._network
        for dep in interdependencies:
            node = dep.parent
            arc = net.add_arc(
                tail=node,
                head=0,
                capacity=-net.balance(node),
                cost=self.limits.delivery_cost,
                delivery=True,
            )
            net.set_balance(node, 0)
            dep.parent = arc.id
        logger.debug("Added %d delivery arcs", len(interdependencies))


def generate_network(
    parameters: GenerationParameters, limits: Optional[GeneratorLimits] = None
) -> GeneratedNetwork:
    """Generate one network; see ``NetworkBuilder.build``."""
    return NetworkBuilder(parameters, limits).build()
