"""Tests for batch artifact path helpers."""

from pathlib import Path

from inetgen.utils.output_paths import (
    build_artifact_path,
    ensure_parent_dir,
    instance_path,
    manifest_path,
)


def test_build_artifact_path_defaults_to_cwd(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    assert build_artifact_path(None, "trial", ".min") == tmp_path / "trial.min"


def test_instance_and_manifest_paths() -> None:
    out = Path("out")
    assert instance_path(out, "trial", 7) == out / "trial.007.min"
    assert instance_path(out, "trial", 12, width=5) == out / "trial.00012.min"
    assert manifest_path(out, "trial") == out / "trial.manifest.json"


def test_ensure_parent_dir(tmp_path: Path) -> None:
    target = tmp_path / "a" / "b" / "net.min"
    ensure_parent_dir(target)
    assert target.parent.is_dir()
    ensure_parent_dir(target)  # idempotent
