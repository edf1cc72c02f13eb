"""Batch file loading."""

from inetgen.dsl.loader import BatchSpec, load_batch_yaml

__all__ = ["BatchSpec", "load_batch_yaml"]
