"""YAML loader + schema validation for batch files.

A batch file names a master seed, an instance count and one set of generation
parameters (without a seed). Each instance gets its own seed derived from the
master seed, so a batch is reproducible as a whole.

Example:
    seed: 42
    instances: 3
    prefix: trial
    parameters:
      nodes: 256
      sources: 52
      sinks: 52
      density: 1024
      min_cost: 1
      max_cost: 100
      supply: 10000
      tsources: 0
      tsinks: 0
      hicost: 100
      capacitated: 100
      min_cap: 100
      max_cap: 500
      parent: arc
      inter: 10
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from importlib import resources
from typing import Any, Dict, Iterator, Optional, Tuple

import jsonschema
import yaml

from inetgen.model.parameters import GenerationParameters
from inetgen.seed_manager import SeedManager
from inetgen.utils.yaml_utils import normalize_yaml_dict_keys


@dataclass
class BatchSpec:
    """A validated batch description.

    Attributes:
        seed: Master seed used to derive per-instance seeds.
        instances: Number of instances to generate.
        prefix: Filename prefix for generated files (None: batch file stem).
        parameters: Generation parameters shared by all instances, minus seed.
    """

    seed: int
    instances: int
    prefix: Optional[str] = None
    parameters: Dict[str, Any] = field(default_factory=dict)

    def instance_parameters(self, index: int) -> GenerationParameters:
        """Return the parameters of instance ``index`` with its derived seed."""
        seed = SeedManager(self.seed).instance_seed(index)
        return GenerationParameters.from_dict({"seed": seed, **self.parameters})

    def __iter__(self) -> Iterator[Tuple[int, GenerationParameters]]:
        for index in range(self.instances):
            yield index, self.instance_parameters(index)


def _load_schema() -> Dict[str, Any]:
    with (
        resources.files("inetgen.schemas")
        .joinpath("batch.json")
        .open("r", encoding="utf-8")
    ) as f:
        return json.load(f)


def load_batch_yaml(yaml_str: str) -> BatchSpec:
    """Load, normalize, and validate a batch YAML string.

    Raises:
        ValueError: If the document is not a mapping.
        jsonschema.ValidationError: If it does not match the batch schema.
    """
    data = yaml.safe_load(yaml_str)
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError("The provided YAML must map to a dictionary at top-level.")
    data = normalize_yaml_dict_keys(data)
    if isinstance(data.get("parameters"), dict):
        data["parameters"] = normalize_yaml_dict_keys(data["parameters"])

    jsonschema.validate(data, _load_schema())

    return BatchSpec(
        seed=data["seed"],
        instances=data["instances"],
        prefix=data.get("prefix"),
        parameters=dict(data["parameters"]),
    )
