import json
from pathlib import Path

import pytest

from lexi.exceptions import InputError
from lexi.scaffold import init_project


def test_init_project_layout(tmp_path: Path) -> None:
    root = init_project("demo", parent=tmp_path)

    assert root == tmp_path / "demo"
    assert (root / "build").is_dir()
    assert "palindrome" in (root / "src" / "main.lxi").read_text(encoding="utf-8")
    descriptor = json.loads((root / "lexi.config.json").read_text(encoding="utf-8"))
    assert descriptor["name"] == "demo"
    assert descriptor["defaultTarget"] == "javascript"
    assert descriptor["targets"]["python"] == {"extension": ".py"}
    assert (root / "README.md").read_text(encoding="utf-8").startswith("# demo")


def test_init_project_refuses_existing_directory(tmp_path: Path) -> None:
    (tmp_path / "demo").mkdir()
    with pytest.raises(InputError, match="already exists"):
        init_project("demo", parent=tmp_path)
