"""Tests for batch YAML loading and schema validation."""

from __future__ import annotations

import jsonschema
import pytest
import yaml

from inetgen.dsl.loader import BatchSpec, load_batch_yaml
from inetgen.errors import InvalidParametersError
from inetgen.model.parameters import ParentMode
from inetgen.seed_manager import SeedManager

BATCH_YAML = """
seed: 42
instances: 3
prefix: trial
parameters:
  nodes: 60
  sources: 6
  sinks: 8
  density: 400
  min_cost: 1
  max_cost: 100
  supply: 10000
  tsources: 2
  tsinks: 2
  hicost: 30
  capacitated: 60
  min_cap: 50
  max_cap: 800
  parent: arc
  inter: 20
"""


def test_load_valid_batch() -> None:
    batch = load_batch_yaml(BATCH_YAML)
    assert isinstance(batch, BatchSpec)
    assert batch.seed == 42
    assert batch.instances == 3
    assert batch.prefix == "trial"
    assert batch.parameters["nodes"] == 60


def test_instance_parameters_use_derived_seeds() -> None:
    batch = load_batch_yaml(BATCH_YAML)
    seeds = SeedManager(42).instance_seeds(3)
    instances = list(batch)
    assert [index for index, _ in instances] == [0, 1, 2]
    assert [params.seed for _, params in instances] == seeds
    assert all(params.parent is ParentMode.ARC for _, params in instances)
    assert batch.instance_parameters(1) == instances[1][1]


def test_prefix_is_optional() -> None:
    batch = load_batch_yaml(BATCH_YAML.replace("prefix: trial\n", ""))
    assert batch.prefix is None


@pytest.mark.parametrize("parent", ["0", "1", "node", "n", "a"])
def test_parent_spellings_accepted(parent: str) -> None:
    load_batch_yaml(BATCH_YAML.replace("parent: arc", f"parent: {parent}"))


@pytest.mark.parametrize(
    "old,new",
    [
        ("seed: 42", "seed: 0"),
        ("instances: 3", "instances: 0"),
        ("prefix: trial", "prefix: 'bad/prefix'"),
        ("parent: arc", "parent: edge"),
        ("parent: arc", "parent: 2"),
        ("inter: 20", "inter: -1"),
        ("nodes: 60", "nodes: sixty"),
        ("  inter: 20", "  inter: 20\n  colour: red"),
        ("seed: 42", "seed: 42\nextra: 1"),
        ("  nodes: 60\n", ""),
    ],
)
def test_schema_rejects_invalid_documents(old: str, new: str) -> None:
    with pytest.raises(jsonschema.ValidationError):
        load_batch_yaml(BATCH_YAML.replace(old, new))


def test_boolean_keys_are_reported_as_unknown() -> None:
    """YAML 1.1 turns `on:` into True; it must fail as an unknown key."""
    with pytest.raises(jsonschema.ValidationError, match="True"):
        load_batch_yaml(BATCH_YAML + "on: 1\n")


def test_non_mapping_documents_rejected() -> None:
    with pytest.raises(ValueError, match="dictionary"):
        load_batch_yaml("- 1\n- 2\n")


def test_empty_document_fails_schema() -> None:
    with pytest.raises(jsonschema.ValidationError):
        load_batch_yaml("")


def test_malformed_yaml_raises_yaml_error() -> None:
    with pytest.raises(yaml.YAMLError):
        load_batch_yaml("seed: [1, 2\n")


def test_consistency_is_checked_at_generation_not_load() -> None:
    batch = load_batch_yaml(BATCH_YAML.replace("sources: 6", "sources: 0"))
    params = batch.instance_parameters(0)
    with pytest.raises(InvalidParametersError):
        params.validate()
