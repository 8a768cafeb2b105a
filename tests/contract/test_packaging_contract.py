from __future__ import annotations

import tomllib
from pathlib import Path

"""Packaging contract: runtime deps cover the package imports only."""

PYPROJECT = Path(__file__).resolve().parents[2] / "pyproject.toml"


def _project() -> dict:
    return tomllib.loads(PYPROJECT.read_text(encoding="utf-8"))["project"]


def test_runtime_dependencies():
    names = {d.split(">=")[0] for d in _project()["dependencies"]}
    assert names == {"pandas", "openpyxl", "xlrd", "PyYAML", "jsonschema", "tqdm", "python-dotenv"}


def test_numpy_only_in_scripts_extra():
    extras = _project()["optional-dependencies"]
    assert [d.split(">=")[0] for d in extras["scripts"]] == ["numpy"]
    assert not any(d.startswith("numpy") for d in _project()["dependencies"])


def test_console_script():
    assert _project()["scripts"]["timecard"] == "timecard.cli.__main__:main"
