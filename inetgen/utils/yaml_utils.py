"""Utilities for handling YAML parsing quirks."""

from typing import Any, Dict, TypeVar

V = TypeVar("V")


def normalize_yaml_dict_keys(data: Dict[Any, V]) -> Dict[str, V]:
    """Normalize dictionary keys from YAML parsing to consistent string keys.

    YAML 1.1 boolean keys (e.g., true, false, yes, no, on, off) get converted to
    Python True/False boolean values. This function converts them to "True" /
    "False" and ensures all keys are strings, so schema validation reports
    them as unknown keys instead of failing on a non-string key.

    Args:
        data: Dictionary that may contain boolean or other non-string keys.

    Returns:
        Dictionary with all keys converted to strings.

    Examples:
        >>> normalize_yaml_dict_keys({True: 1, 7: 2, "nodes": 3})
        {'True': 1, '7': 2, 'nodes': 3}
    """
    return {str(key): value for key, value in data.items()}
