"""Tests for project metadata shipped with the distribution."""

from __future__ import annotations

import tomllib
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]


def test_readme_is_a_usage_document() -> None:
    project = tomllib.loads((ROOT / "pyproject.toml").read_text())["project"]
    readme = ROOT / project["readme"]

    assert project["readme"] == "README.md"
    text = readme.read_text()
    assert "flyaop run" in text
    assert "GET /users/exceptions" in text
