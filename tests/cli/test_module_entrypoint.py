"""Tests for running inetgen as a module (`python -m inetgen`)."""

from __future__ import annotations

import runpy
from unittest.mock import patch

import pytest


def test_module_help_exits_zero() -> None:
    with patch("sys.argv", ["inetgen", "--help"]):
        with pytest.raises(SystemExit) as exc_info:
            runpy.run_module("inetgen", run_name="__main__")
    assert exc_info.value.code == 0


def test_module_cli_subcommand_help_exits_zero() -> None:
    with patch("sys.argv", ["inetgen", "generate", "--help"]):
        with pytest.raises(SystemExit) as exc_info:
            runpy.run_module("inetgen", run_name="__main__")
    assert exc_info.value.code == 0


def test_module_without_arguments_prints_help(capsys) -> None:
    with patch("sys.argv", ["inetgen"]):
        with pytest.raises(SystemExit) as exc_info:
            runpy.run_module("inetgen", run_name="__main__")
    assert exc_info.value.code == 0
    assert "generate" in capsys.readouterr().out
