"""Data model: generation parameters, networks and interdependencies."""

from inetgen.model.network import Arc, GeneratedNetwork, Interdependency, Network
from inetgen.model.parameters import GenerationParameters, ParentMode

__all__ = [
    "Arc",
    "GeneratedNetwork",
    "GenerationParameters",
    "Interdependency",
    "Network",
    "ParentMode",
]
