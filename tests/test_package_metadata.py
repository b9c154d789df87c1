"""Tests for ensuring project packaging metadata stays consistent."""

from __future__ import annotations

import tomllib
from pathlib import Path

import gamecal

ROOT = Path(__file__).resolve().parents[1]


def _load_pyproject() -> dict:
    with (ROOT / "pyproject.toml").open("rb") as handle:
        return tomllib.load(handle)


def test_pyproject_declares_expected_metadata() -> None:
    pyproject = _load_pyproject()
    poetry = pyproject["tool"]["poetry"]

    assert poetry["name"] == "gamecal"
    assert poetry["version"] == gamecal.__version__
    assert poetry["scripts"]["gamecal"] == "gamecal.__main__:main"
    assert "readme" not in poetry

    dependencies = poetry["dependencies"]
    for dependency in ("pydantic", "textual", "rich", "platformdirs"):
        assert dependency in dependencies, f"missing dependency declaration for {dependency}"


def test_pytest_is_only_a_test_extra() -> None:
    poetry = _load_pyproject()["tool"]["poetry"]

    assert poetry["dependencies"]["pytest"]["optional"] is True
    assert poetry["extras"]["test"] == ["pytest"]
