from __future__ import annotations

from pathlib import Path

import pytest

tomllib = pytest.importorskip("tomllib")

PYPROJECT = Path(__file__).resolve().parents[1] / "pyproject.toml"


def test_project_metadata():
    project = tomllib.loads(PYPROJECT.read_text(encoding="utf-8"))["project"]

    assert project["name"] == "attendance-tracker"
    assert "readme" not in project
    deps = {d.split(">=")[0].lower() for d in project["dependencies"]}
    assert {"flask", "flask-cors", "pyjwt", "mysql-connector-python", "email-validator"} <= deps
