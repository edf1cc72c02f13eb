"""Parser for the min-cost-flow-with-interdependencies text format.

Consumers dispatch on the first character of each line, the same way the
downstream solvers read these files. See ``inetgen.io.writer`` for the
grammar.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple, Union

from inetgen.errors import NetworkFormatError
from inetgen.model.parameters import ParentMode


@dataclass
class ParsedArc:
    """An ``a`` line. ``cost`` is ``None`` in the maximum-flow variant."""

    tail: int
    head: int
    capacity: int
    cost: Optional[int] = None


@dataclass
class ParsedNetwork:
    """Contents of a network file.

    Attributes:
        problem: ``"min"`` or ``"max"``.
        nodes: Node count from the problem line.
        parent_mode: Parent mode tag (min-cost files only).
        balances: Node id -> balance for ``n`` lines of min-cost files.
        sources: Node ids tagged ``s`` (max-flow files).
        sinks: Node ids tagged ``t`` (max-flow files).
        arcs: Arcs in file order; arc id ``k`` is ``arcs[k - 1]``.
        interdependencies: ``(parent, child)`` arc id pairs in file order.
        comments: Comment text with the leading ``c`` stripped.
    """

    problem: str
    nodes: int
    parent_mode: Optional[ParentMode] = None
    balances: Dict[int, int] = field(default_factory=dict)
    sources: List[int] = field(default_factory=list)
    sinks: List[int] = field(default_factory=list)
    arcs: List[ParsedArc] = field(default_factory=list)
    interdependencies: List[Tuple[int, int]] = field(default_factory=list)
    comments: List[str] = field(default_factory=list)

    @property
    def arc_count(self) -> int:
        return len(self.arcs)

    def total_supply(self) -> int:
        return sum(b for b in self.balances.values() if b > 0)

    def total_demand(self) -> int:
        return -sum(b for b in self.balances.values() if b < 0)

    def delivery_arcs(self) -> List[int]:
        """Return ids of arcs whose head is the placeholder node ``0``."""
        return [i for i, arc in enumerate(self.arcs, start=1) if arc.head == 0]


def _ints(tokens: List[str], line_number: int) -> List[int]:
    try:
        return [int(tok) for tok in tokens]
    except ValueError:
        raise NetworkFormatError(
            f"expected integers, got {' '.join(tokens)!r}", line_number
        ) from None


def parse_network(lines: Iterable[str]) -> ParsedNetwork:
    """Parse network text.

    Args:
        lines: Lines of a network file, with or without newlines.

    Returns:
        The parsed network.

    Raises:
        NetworkFormatError: On malformed lines, a missing or repeated problem
            line, or counts that disagree with the problem line.
    """
    result: Optional[ParsedNetwork] = None
    declared_arcs = 0
    declared_inter = 0
    comments: List[str] = []

    for line_number, raw in enumerate(lines, start=1):
        line = raw.rstrip("\r\n")
        if not line.strip():
            continue
        tag = line[0]
        tokens = line.split()
        if tag == "c":
            comments.append(line[1:].strip())
            continue
        if tag == "p":
            if result is not None:
                raise NetworkFormatError("repeated problem line", line_number)
            if len(tokens) < 4 or tokens[1] not in ("min", "max"):
                raise NetworkFormatError(f"bad problem line {line!r}", line_number)
            if tokens[1] == "max":
                if len(tokens) != 4:
                    raise NetworkFormatError(f"bad problem line {line!r}", line_number)
                nodes, declared_arcs = _ints(tokens[2:4], line_number)
                result = ParsedNetwork(problem="max", nodes=nodes)
            else:
                if len(tokens) != 6:
                    raise NetworkFormatError(f"bad problem line {line!r}", line_number)
                nodes, declared_arcs, declared_inter = _ints(tokens[2:5], line_number)
                mode = ParentMode.parse(tokens[5])
                if mode is None:
                    raise NetworkFormatError(
                        f"unknown parent tag {tokens[5]!r}", line_number
                    )
                result = ParsedNetwork(problem="min", nodes=nodes, parent_mode=mode)
            continue
        if result is None:
            raise NetworkFormatError(f"{tag!r} line before problem line", line_number)
        if tag == "n":
            if len(tokens) != 3:
                raise NetworkFormatError(f"bad node line {line!r}", line_number)
            (node,) = _ints(tokens[1:2], line_number)
            if not 1 <= node <= result.nodes:
                raise NetworkFormatError(f"node {node} out of range", line_number)
            if result.problem == "max":
                if tokens[2] == "s":
                    result.sources.append(node)
                elif tokens[2] == "t":
                    result.sinks.append(node)
                else:
                    raise NetworkFormatError(
                        f"node tag must be 's' or 't', got {tokens[2]!r}", line_number
                    )
            else:
                result.balances[node] = _ints(tokens[2:3], line_number)[0]
        elif tag == "a":
            if result.problem == "max":
                if len(tokens) != 4:
                    raise NetworkFormatError(f"bad arc line {line!r}", line_number)
                tail, head, capacity = _ints(tokens[1:4], line_number)
                result.arcs.append(ParsedArc(tail, head, capacity))
            else:
                if len(tokens) != 6:
                    raise NetworkFormatError(f"bad arc line {line!r}", line_number)
                tail, head, lower, capacity, cost = _ints(tokens[1:6], line_number)
                if lower != 0:
                    raise NetworkFormatError(
                        f"lower bound must be 0, got {lower}", line_number
                    )
                result.arcs.append(ParsedArc(tail, head, capacity, cost))
        elif tag == "i":
            if len(tokens) != 3:
                raise NetworkFormatError(
                    f"bad interdependency line {line!r}", line_number
                )
            parent, child = _ints(tokens[1:3], line_number)
            result.interdependencies.append((parent, child))
        else:
            raise NetworkFormatError(f"unknown line tag {tag!r}", line_number)

    if result is None:
        raise NetworkFormatError("missing problem line")
    if result.arc_count != declared_arcs:
        raise NetworkFormatError(
            f"problem line declares {declared_arcs} arcs, found {result.arc_count}"
        )
    if len(result.interdependencies) != declared_inter:
        raise NetworkFormatError(
            f"problem line declares {declared_inter} interdependencies, "
            f"found {len(result.interdependencies)}"
        )
    result.comments = comments
    return result


def read_network(path: Union[str, Path]) -> ParsedNetwork:
    """Read and parse a network file."""
    with open(path, "r", encoding="utf-8") as handle:
        return parse_network(handle)
