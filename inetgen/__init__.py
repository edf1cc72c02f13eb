"""inetgen: NETGEN-style flow networks with interdependencies.

inetgen generates reproducible capacitated minimum-cost flow instances in the
spirit of NETGEN (Klingman, Napier and Stutz, 1974) and annotates them with
interdependencies: parent/child pairs coupling the utilization of a child arc
to that of a parent sink node or arc.

Primary API:
    GenerationParameters - Structural inputs of one run
    generate_network() - Build a network from parameters
    write_network() / read_network() - Text format I/O
    to_networkx() - Convert to a NetworkX MultiDiGraph

Example:
    from inetgen import GenerationParameters, ParentMode, generate_network

    params = GenerationParameters(
        seed=123, nodes=10, sources=2, sinks=2, density=20,
        min_cost=1, max_cost=100, supply=1000, tsources=0, tsinks=0,
        hicost=100, capacitated=100, min_cap=100, max_cap=500,
        parent=ParentMode.ARC, inter=2,
    )
    generated = generate_network(params)
    write_network(generated, "instance.min")
"""

from __future__ import annotations

from inetgen import cli, logging
from inetgen._version import __version__
from inetgen.config import DEFAULT_LIMITS, GeneratorLimits
from inetgen.errors import (
    AllocationFailureError,
    BadSeedError,
    ErrorCode,
    GenerationError,
    InvalidParametersError,
    NetworkFormatError,
    NetworkWriteError,
    ProblemTooLargeError,
)
from inetgen.generator import NetworkBuilder, generate_network
from inetgen.graph.convert import to_networkx
from inetgen.io import ParsedNetwork, parse_network, read_network, write_network
from inetgen.model.network import Arc, GeneratedNetwork, Interdependency, Network
from inetgen.model.parameters import GenerationParameters, ParentMode
from inetgen.random_stream import RandomStream
from inetgen.selection import OrderedSelectionSet

__all__ = [
    # Version
    "__version__",
    # Model
    "Arc",
    "GeneratedNetwork",
    "GenerationParameters",
    "Interdependency",
    "Network",
    "ParentMode",
    # Generation
    "NetworkBuilder",
    "OrderedSelectionSet",
    "RandomStream",
    "generate_network",
    # Configuration
    "DEFAULT_LIMITS",
    "GeneratorLimits",
    # Errors
    "AllocationFailureError",
    "BadSeedError",
    "ErrorCode",
    "GenerationError",
    "InvalidParametersError",
    "NetworkFormatError",
    "NetworkWriteError",
    "ProblemTooLargeError",
    # I/O
    "ParsedNetwork",
    "parse_network",
    "read_network",
    "write_network",
    # Library integrations (NetworkX)
    "to_networkx",
    # Utilities
    "cli",
    "logging",
]
