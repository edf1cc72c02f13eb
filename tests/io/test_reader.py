"""Tests for parsing network files, including round trips through the writer."""

from __future__ import annotations

from pathlib import Path

import pytest

from inetgen.errors import NetworkFormatError
from inetgen.generator import generate_network
from inetgen.io.reader import parse_network, read_network
from inetgen.io.writer import render_network, write_network
from inetgen.model.parameters import ParentMode


def test_round_trip_small_instance(tmp_path: Path, small_params) -> None:
    generated = generate_network(small_params)
    path = write_network(generated, tmp_path / "small.min")
    parsed = read_network(path)
    net = generated.network

    assert parsed.problem == "min"
    assert parsed.nodes == small_params.nodes
    assert parsed.parent_mode is ParentMode.ARC
    assert parsed.arc_count == net.arc_count
    assert len(parsed.interdependencies) == small_params.inter
    assert parsed.total_supply() == small_params.supply
    assert parsed.total_demand() == small_params.supply
    assert parsed.balances == dict(net.nonzero_balances())
    assert parsed.interdependencies == [
        (d.parent, d.child) for d in generated.interdependencies
    ]
    assert parsed.comments[0] == "NETGEN flow network generator (Python version)"


def test_round_trip_node_parents(make_params) -> None:
    generated = generate_network(make_params(parent=ParentMode.NODE, inter=2))
    parsed = parse_network(render_network(generated).splitlines())

    assert parsed.parent_mode is ParentMode.NODE
    delivery = parsed.delivery_arcs()
    assert delivery == [d.parent for d in generated.interdependencies]
    carried = sum(parsed.arcs[i - 1].capacity for i in delivery)
    assert parsed.total_supply() == parsed.total_demand() + carried


def test_round_trip_max_flow(make_params) -> None:
    generated = generate_network(make_params(min_cost=1, max_cost=1))
    parsed = parse_network(render_network(generated).splitlines(keepends=True))

    assert parsed.problem == "max"
    assert parsed.arc_count == generated.network.arc_count
    assert parsed.sources == [1, 2]
    assert parsed.sinks == [9, 10]
    assert all(arc.cost is None for arc in parsed.arcs)


def test_blank_lines_are_ignored() -> None:
    text = ["c hi", "", "p min 2 1 0 a", "n 1 5", "   ", "n 2 -5", "a 1 2 0 5 3"]
    parsed = parse_network(text)
    assert parsed.balances == {1: 5, 2: -5}
    assert parsed.arcs[0].cost == 3


@pytest.mark.parametrize(
    "lines,match",
    [
        (["c only comments"], "missing problem line"),
        (["n 1 5"], "before problem line"),
        (["p min 2 0 0 a", "p min 2 0 0 a"], "repeated problem line"),
        (["p lp 2 0"], "bad problem line"),
        (["p min 2 0 0"], "bad problem line"),
        (["p min 2 0 0 x"], "unknown parent tag"),
        (["p max 2 0 0"], "bad problem line"),
        (["p min 2 1 0 a", "a 1 2 0 5"], "bad arc line"),
        (["p min 2 1 0 a", "a 1 2 1 5 3"], "lower bound must be 0"),
        (["p min 2 1 0 a", "a 1 two 0 5 3"], "expected integers"),
        (["p min 2 0 0 a", "n 3 1"], "out of range"),
        (["p max 2 0", "n 1 x"], "node tag"),
        (["p min 2 0 0 a", "x 1"], "unknown line tag"),
        (["p min 2 1 0 a"], "declares 1 arcs, found 0"),
        (["p min 2 1 1 a", "a 1 2 0 5 3"], "declares 1 interdependencies"),
        (["p min 2 1 1 a", "a 1 2 0 5 3", "i 1"], "bad interdependency line"),
    ],
)
def test_format_errors(lines, match) -> None:
    with pytest.raises(NetworkFormatError, match=match):
        parse_network(lines)


def test_format_error_reports_line_number() -> None:
    with pytest.raises(NetworkFormatError) as exc_info:
        parse_network(["c", "p min 2 1 0 a", "a 1 2 0 five 3"])
    assert exc_info.value.line_number == 3
    assert str(exc_info.value).startswith("line 3:")
