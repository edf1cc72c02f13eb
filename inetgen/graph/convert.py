"""Conversion of generated networks to NetworkX graphs.

The resulting ``nx.MultiDiGraph`` follows NetworkX's flow conventions: node
attribute ``demand`` is the negated balance (positive means the node consumes
flow) and edges carry ``capacity`` and ``weight``. Edge keys are arc ids, so
interdependencies can be looked up on the graph directly.
"""

from __future__ import annotations

from typing import Union

import networkx as nx

from inetgen.io.reader import ParsedNetwork
from inetgen.model.network import GeneratedNetwork

#: Node that receives the delivery arcs created for node parents.
DELIVERY_NODE = 0


def to_networkx(source: Union[GeneratedNetwork, ParsedNetwork]) -> nx.MultiDiGraph:
    """Convert a generated or parsed network to a NetworkX multigraph.

    Delivery arcs (head ``0``) end at an explicit node ``0`` whose demand is
    the sum of their capacities, which keeps total demand at zero.

    Args:
        source: A ``GeneratedNetwork`` or a min-cost ``ParsedNetwork``.

    Returns:
        A ``MultiDiGraph`` with nodes ``1..n`` (plus ``0`` when delivery arcs
        exist). Graph attribute ``interdependencies`` holds the
        ``(parent, child)`` arc id pairs.
    """
    graph = nx.MultiDiGraph()
    if isinstance(source, GeneratedNetwork):
        net = source.network
        balances = {node: net.balance(node) for node in net.node_ids()}
        arcs = [(a.id, a.tail, a.head, a.capacity, a.cost) for a in net.arcs]
        pairs = [(dep.parent, dep.child) for dep in source.interdependencies]
        graph.graph["parent_mode"] = source.parent_mode.token
    else:
        if source.problem != "min":
            raise ValueError("only min-cost networks carry costs and balances")
        balances = {
            node: source.balances.get(node, 0) for node in range(1, source.nodes + 1)
        }
        arcs = [
            (i, a.tail, a.head, a.capacity, a.cost)
            for i, a in enumerate(source.arcs, start=1)
        ]
        pairs = list(source.interdependencies)
        if source.parent_mode is not None:
            graph.graph["parent_mode"] = source.parent_mode.token

    for node, balance in balances.items():
        graph.add_node(node, demand=-balance)

    delivered = 0
    for arc_id, tail, head, capacity, cost in arcs:
        if head == DELIVERY_NODE:
            delivered += capacity
        graph.add_edge(tail, head, key=arc_id, capacity=capacity, weight=cost)
    if graph.has_node(DELIVERY_NODE):
        graph.nodes[DELIVERY_NODE]["demand"] = delivered

    graph.graph["interdependencies"] = pairs
    return graph
