"""Tests for the NetworkX export."""

from __future__ import annotations

import networkx as nx
import pytest

from inetgen.generator import generate_network
from inetgen.graph.convert import DELIVERY_NODE, to_networkx
from inetgen.io.reader import parse_network
from inetgen.io.writer import render_network
from inetgen.model.parameters import ParentMode


def test_arc_mode_graph(medium_params) -> None:
    generated = generate_network(medium_params)
    graph = to_networkx(generated)
    net = generated.network

    assert isinstance(graph, nx.MultiDiGraph)
    assert graph.number_of_nodes() == medium_params.nodes
    assert graph.number_of_edges() == net.arc_count
    assert DELIVERY_NODE not in graph
    assert graph.graph["parent_mode"] == "a"
    assert graph.graph["interdependencies"] == [
        (d.parent, d.child) for d in generated.interdependencies
    ]

    arc = net.arc(1)
    data = graph.edges[arc.tail, arc.head, 1]
    assert data == {"capacity": arc.capacity, "weight": arc.cost}
    for node in net.node_ids():
        assert graph.nodes[node]["demand"] == -net.balance(node)
    assert sum(d for _, d in graph.nodes(data="demand")) == 0


def test_node_mode_graph_adds_delivery_node(make_params) -> None:
    generated = generate_network(
        make_params(base="medium", parent=ParentMode.NODE, inter=5)
    )
    graph = to_networkx(generated)

    assert DELIVERY_NODE in graph
    assert graph.in_degree(DELIVERY_NODE) == 5
    assert graph.graph["parent_mode"] == "n"
    assert sum(d for _, d in graph.nodes(data="demand")) == 0


def test_uncapacitated_network_is_feasible(make_params) -> None:
    """With every arc at full supply each source can reach its own sinks."""
    generated = generate_network(make_params(base="medium", capacitated=0))
    graph = to_networkx(generated)
    cost, flow = nx.network_simplex(graph)
    assert cost >= 0
    shipped = sum(
        flow[u][v][k] for u, v, k in graph.edges(keys=True) if u <= 6
    )
    assert shipped >= generated.parameters.supply


def test_parsed_network_matches_generated(make_params) -> None:
    generated = generate_network(make_params(parent=ParentMode.NODE, inter=2))
    parsed = parse_network(render_network(generated).splitlines())

    from_generated = to_networkx(generated)
    from_parsed = to_networkx(parsed)
    assert sorted(from_parsed.edges(keys=True, data=True)) == sorted(
        from_generated.edges(keys=True, data=True)
    )
    assert dict(from_parsed.nodes(data="demand")) == dict(
        from_generated.nodes(data="demand")
    )


def test_max_flow_files_are_rejected(make_params) -> None:
    generated = generate_network(make_params(min_cost=1, max_cost=1))
    parsed = parse_network(render_network(generated).splitlines())
    with pytest.raises(ValueError, match="min-cost"):
        to_networkx(parsed)
