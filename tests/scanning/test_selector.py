"""Tests for file selection."""

import pytest

from code_insights.config import ToolConfig
from code_insights.exceptions import SelectionError
from code_insights.scanning import FileSelector, expand_braces


def select(base, **kwargs):
    return sorted(r.path_for_display for r in FileSelector(ToolConfig(base_dir=str(base), **kwargs)).select())


class TestExpandBraces:
    """Test brace alternatives in globs."""

    def test_no_braces(self):
        assert expand_braces("**/*.js") == ["**/*.js"]

    def test_single_group(self):
        assert expand_braces("{src,bin}/**/*") == ["src/**/*", "bin/**/*"]

    def test_two_groups(self):
        assert expand_braces("{a,b}/{x,y}") == ["a/x", "a/y", "b/x", "b/y"]


class TestFileSelector:
    """Test glob, exclusion, grep and override handling."""

    def test_default_excludes_node_modules(self, js_project):
        """Dependency directories never show up."""
        assert select(js_project) == ["index.js", "lib/math.js", "lib/util/strings.js"]

    def test_paths_are_absolute(self, js_project):
        records = FileSelector(ToolConfig(base_dir=str(js_project))).select()
        assert all(record.path.startswith("/") for record in records)

    def test_grep_keeps_matching(self, js_project):
        assert select(js_project, grep=r"util/") == ["lib/util/strings.js"]

    def test_grep_invert_drops_matching(self, js_project):
        assert select(js_project, grep=r"util/", invert=True) == ["index.js", "lib/math.js"]

    def test_grep_matching_nothing(self, js_project):
        assert select(js_project, grep="nothing-matches-this") == []

    def test_extensions_filter(self, tmp_path, write_files):
        write_files({"src/a.js": "", "src/b.css": "", "src/c.txt": ""})
        assert select(tmp_path, glob="src/**/*", extensions=["js", "css"]) == ["src/a.js", "src/b.css"]

    def test_brace_glob_deduplicates(self, tmp_path, write_files):
        write_files({"src/a.js": ""})
        assert select(tmp_path, glob="{src,src}/*.js") == ["src/a.js"]

    def test_missing_brace_directory_is_empty(self, tmp_path, write_files):
        write_files({"bin/run.js": ""})
        assert select(tmp_path, glob="{src,bin}/**/*.js") == ["bin/run.js"]

    def test_hidden_files_and_dirs_skipped(self, tmp_path, write_files):
        write_files({"a.js": "", ".hidden.js": "", ".storybook/config.js": "", "src/.cache/b.js": ""})
        assert select(tmp_path) == ["a.js"]

    def test_hidden_names_spelled_out_by_glob(self, tmp_path, write_files):
        write_files({"a.js": "", ".babelrc": "", "src/.babelrc": "", ".storybook/config.js": ""})
        assert select(tmp_path, glob="**/{.babelrc,*.js}") == [".babelrc", "a.js", "src/.babelrc"]
        assert select(tmp_path, glob=".storybook/*.js") == [".storybook/config.js"]

    def test_override_selects_one_file(self, js_project):
        assert select(js_project, debug_file_path="lib/math.js") == ["lib/math.js"]

    def test_override_missing_file(self, js_project):
        with pytest.raises(SelectionError):
            select(js_project, debug_file_path="missing.js")

    def test_missing_base_dir(self, tmp_path):
        with pytest.raises(SelectionError):
            select(tmp_path / "nope")

    def test_describe_includes_grep(self, tmp_path):
        selector = FileSelector(ToolConfig(base_dir=str(tmp_path), grep=".*/test/.*", invert=True))
        assert selector.describe() == "**/*.js with !.*/test/.*"
