from pathlib import Path

import pytest

tomllib = pytest.importorskip("tomllib")

ROOT = Path(__file__).resolve().parents[1]


def load_project():
    with open(ROOT / "pyproject.toml", "rb") as f:
        return tomllib.load(f)["project"]


def test_declared_dependencies():
    project = load_project()
    assert any(d.startswith("PySide6") for d in project["dependencies"])
    assert any(d.startswith("pytest") for d in project["optional-dependencies"]["test"])


def test_readme_is_a_real_readme():
    readme = load_project().get("readme")
    if readme is not None:
        assert Path(readme).stem.upper() == "README"
        assert (ROOT / readme).exists()
