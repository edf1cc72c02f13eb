"""Serialization of generated networks to the min-cost-flow text format.

Line grammar (space-separated, one record per line, tagged by first letter):

    c <comment>
    p min <nodes> <arcs> <interdependencies> <n|a>
    n <node> <balance>
    a <tail> <head> 0 <capacity> <cost>
    i <parent arc> <child arc>

When ``min_cost == max_cost == 1`` the instance is written as a maximum-flow
problem instead: ``p max <nodes> <arcs>``, ``n <node> s|t`` and
``a <tail> <head> <capacity>``, with no interdependency lines.
"""

from __future__ import annotations

import contextlib
import os
import tempfile
from pathlib import Path
from typing import Iterator, List, TextIO, Union

from inetgen.errors import NetworkWriteError
from inetgen.logging import get_logger
from inetgen.model.network import GeneratedNetwork
from inetgen.model.parameters import ParentMode

logger = get_logger(__name__)


def _header(generated: GeneratedNetwork) -> List[str]:
    p = generated.parameters
    parents = "Sink Nodes" if p.parent is ParentMode.NODE else "Arcs"
    return [
        "c NETGEN flow network generator (Python version)",
        "c Modified to generate interdependent networks",
        "c  ---------------------------",
        f"c   Random seed:          {p.seed}",
        f"c   Number of nodes:      {p.nodes}",
        f"c   Source nodes:         {p.sources}",
        f"c   Sink nodes:           {p.sinks}",
        f"c   Number of arcs:       {p.density}",
        f"c   Minimum arc cost:     {p.min_cost}",
        f"c   Maximum arc cost:     {p.max_cost}",
        f"c   Total supply:         {p.supply}",
        "c   Transshipment -",
        f"c     Sources:            {p.tsources}",
        f"c     Sinks:              {p.tsinks}",
        "c   Skeleton arcs -",
        f"c     With max cost:      {p.hicost}%",
        f"c     Capacitated:        {p.capacitated}%",
        f"c   Minimum arc capacity: {p.min_cap}",
        f"c   Maximum arc capacity: {p.max_cap}",
        "c   Interdependencies -",
        f"c     Parents:            {parents}",
        f"c     Number:             {p.inter}",
    ]


class NetworkWriter:
    """Renders one ``GeneratedNetwork``; output depends only on its contents."""

    def __init__(self, generated: GeneratedNetwork) -> None:
        self.generated = generated

    def lines(self) -> Iterator[str]:
        """Yield output lines without trailing newlines."""
        generated = self.generated
        p = generated.parameters
        net = generated.network

        yield from _header(generated)
        if p.is_max_flow:
            yield "c"
            yield "c  *** Maximum flow ***"
            yield "c"
            yield f"p max {net.nodes} {net.arc_count}"
            for node, balance in net.nonzero_balances():
                yield f"n {node} {'s' if balance > 0 else 't'}"
            for arc in net.arcs:
                yield f"a {arc.tail} {arc.head} {arc.capacity}"
            return

        yield "c"
        yield "c  *** Minimum cost flow ***"
        yield "c"
        yield (
            f"p min {net.nodes} {net.arc_count} {p.inter} {p.parent.token}"
        )
        for node, balance in net.nonzero_balances():
            yield f"n {node} {balance}"
        for arc in net.arcs:
            yield f"a {arc.tail} {arc.head} 0 {arc.capacity} {arc.cost}"
        for dep in generated.interdependencies:
            yield f"i {dep.parent} {dep.child}"

    def render(self) -> str:
        """Return the whole file as a string."""
        return "".join(f"{line}\n" for line in self.lines())

    def write_to(self, stream: TextIO) -> None:
        for line in self.lines():
            stream.write(f"{line}\n")

    def write(self, path: Union[str, Path]) -> Path:
        """Write the network to ``path`` atomically.

        The text is written to a temporary file next to ``path`` and renamed
        over it, so ``path`` is either untouched or complete.

        Returns:
            The written path.

        Raises:
            NetworkWriteError: If the file cannot be written.
        """
        target = Path(path)
        tmp_name = None
        try:
            with tempfile.NamedTemporaryFile(
                mode="w",
                encoding="utf-8",
                newline="\n",
                dir=target.parent,
                prefix=f".{target.name}.",
                suffix=".tmp",
                delete=False,
            ) as handle:
                tmp_name = handle.name
                self.write_to(handle)
            os.replace(tmp_name, target)
        except OSError as exc:
            if tmp_name is not None:
                with contextlib.suppress(OSError):
                    os.unlink(tmp_name)
            raise NetworkWriteError(f"unable to write to file {target}: {exc}") from exc
        logger.debug("Wrote %d arcs to %s", self.generated.network.arc_count, target)
        return target


def write_network(generated: GeneratedNetwork, path: Union[str, Path]) -> Path:
    """Write ``generated`` to ``path``; see ``NetworkWriter.write``."""
    return NetworkWriter(generated).write(path)


def render_network(generated: GeneratedNetwork) -> str:
    """Return the text form of ``generated``."""
    return NetworkWriter(generated).render()
