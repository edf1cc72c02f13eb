"""Utilities for building CLI artifact output paths.

Paths are built from an optional output directory, a prefix (the batch
prefix or batch file stem) and a per-artifact suffix.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional


def ensure_parent_dir(path: Path) -> None:
    """Ensure the parent directory exists for a file path."""
    path.parent.mkdir(parents=True, exist_ok=True)


def build_artifact_path(output_dir: Optional[Path], prefix: str, suffix: str) -> Path:
    """Compose an artifact path as output_dir / (prefix + suffix).

    If ``output_dir`` is None, the path is created relative to the current
    working directory.

    Args:
        output_dir: Base directory for outputs; if None, use CWD.
        prefix: Filename prefix.
        suffix: Per-artifact suffix including the dot (e.g. ".min").

    Returns:
        The composed path.
    """
    base = output_dir if output_dir is not None else Path.cwd()
    return base / f"{prefix}{suffix}"


def instance_path(
    output_dir: Optional[Path], prefix: str, index: int, width: int = 3
) -> Path:
    """Return the network file path for instance ``index`` of a batch.

    Example: ``instance_path(Path("out"), "trial", 7)`` -> ``out/trial.007.min``.
    """
    return build_artifact_path(output_dir, prefix, f".{index:0{width}d}.min")


def manifest_path(output_dir: Optional[Path], prefix: str) -> Path:
    """Return the path of the batch manifest listing instance seeds."""
    return build_artifact_path(output_dir, prefix, ".manifest.json")
