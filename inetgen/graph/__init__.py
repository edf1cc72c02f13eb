"""Graph library integrations."""

from inetgen.graph.convert import DELIVERY_NODE, to_networkx

__all__ = ["DELIVERY_NODE", "to_networkx"]
