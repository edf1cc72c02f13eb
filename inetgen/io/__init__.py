"""Reading and writing the min-cost-flow-with-interdependencies format."""

from inetgen.io.reader import ParsedArc, ParsedNetwork, parse_network, read_network
from inetgen.io.writer import NetworkWriter, render_network, write_network

__all__ = [
    "NetworkWriter",
    "ParsedArc",
    "ParsedNetwork",
    "parse_network",
    "read_network",
    "render_network",
    "write_network",
]
