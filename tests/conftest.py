"""Shared test fixtures for Code Insights."""

import os
from pathlib import Path

import pytest


def _write_tree(root: Path, files: dict) -> Path:
    for relative, content in files.items():
        target = root / relative
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")
    return root


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path_factory):
    """Keep user config files and CODE_INSIGHTS_* variables out of tests."""
    home = tmp_path_factory.mktemp("home")
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setattr(Path, "home", classmethod(lambda cls: home))
    for name in list(os.environ):
        if name.startswith("CODE_INSIGHTS_"):
            monkeypatch.delenv(name)


@pytest.fixture
def write_files(tmp_path):
    """Write ``{relative_path: content}`` under tmp_path and return tmp_path."""

    def write(files: dict) -> Path:
        return _write_tree(tmp_path, files)

    return write


@pytest.fixture
def js_project(write_files):
    """A small JavaScript project with nested directories."""
    return write_files(
        {
            "index.js": "module.exports = require('./lib/math');\n",
            "lib/math.js": (
                "function add(a, b) {\n"
                "  return a + b;\n"
                "}\n"
                "module.exports = { add: add };\n"
            ),
            "lib/util/strings.js": "var upper = function (s) { return s.toUpperCase(); };\n",
            "node_modules/dep/index.js": "module.exports = 1;\n",
            "README.md": "# readme\n",
        }
    )
