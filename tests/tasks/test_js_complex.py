"""Tests for the js-complex command."""

import pytest
from typer.testing import CliRunner

from code_insights.syntax import TREE_SITTER_AVAILABLE
from code_insights.tasks import js_complex

runner = CliRunner()

needs_parser = pytest.mark.skipif(not TREE_SITTER_AVAILABLE, reason="tree-sitter not installed")


class TestJsComplexCommand:
    """Test the command end to end."""

    def test_help(self):
        result = runner.invoke(js_complex.app, ["--help"])
        assert result.exit_code == 0
        assert "--grep" in result.stdout

    def test_no_matching_files(self, js_project):
        result = runner.invoke(js_complex.app, ["-C", str(js_project), "--grep", "nothing-here"])
        assert result.exit_code == 0
        assert "Total files:  0" in result.stdout
        assert "No files with low maintainability." in result.stdout

    def test_invalid_grep(self, js_project):
        result = runner.invoke(js_complex.app, ["-C", str(js_project), "--grep", "("])
        assert result.exit_code == 1
        assert "Error:" in result.output

    def test_missing_path(self, tmp_path):
        result = runner.invoke(js_complex.app, ["-C", str(tmp_path / "missing")])
        assert result.exit_code == 2

    @needs_parser
    def test_modern_syntax(self, write_files, tmp_path):
        write_files(
            {
                "a.js": "import x from './b';\nexport const f = () => x;\n",
                "b.js": "export default class B { render() { return 1; } }\n",
            }
        )

        result = runner.invoke(js_complex.app, ["-C", str(tmp_path)])

        assert result.exit_code == 0
        assert "] a.js" in result.stdout
        assert "] b.js" in result.stdout
        assert "Total files:  2" in result.stdout

    @needs_parser
    def test_single_module_with_import_and_arrow_export(self, write_files, tmp_path):
        write_files({"a.js": "import b from './b';\nexport const f = (x) => b(x) + 1;\n"})

        result = runner.invoke(js_complex.app, ["-C", str(tmp_path)])

        assert result.exit_code == 0
        file_lines = [line for line in result.stdout.splitlines() if line.startswith("[")]
        assert len(file_lines) == 1
        score, _, path = file_lines[0].partition("]")
        assert path.strip() == "a.js"
        assert 0 < float(score.strip("[ ")) <= 171
        assert "Total files:  1" in result.stdout

    @needs_parser
    def test_grep_and_invert(self, js_project):
        result = runner.invoke(
            js_complex.app, ["-C", str(js_project), "--grep", "^lib/", "--invert"]
        )
        assert result.exit_code == 0
        assert "index.js" in result.stdout
        assert "lib/math.js" not in result.stdout
        assert "Total files:  1" in result.stdout

    @needs_parser
    def test_verbose(self, js_project):
        result = runner.invoke(js_complex.app, ["-C", str(js_project), "--verbose"])
        assert result.exit_code == 0
        assert "metrics report:" in result.stdout
        assert "maintainability:" in result.stdout

    @needs_parser
    def test_project_metrics(self, js_project):
        result = runner.invoke(js_complex.app, ["-C", str(js_project), "--project-metrics"])
        assert result.exit_code == 0
        assert "First-order density:" in result.stdout
        assert "Core size:" in result.stdout

    @needs_parser
    def test_parse_error_exits_nonzero(self, write_files, tmp_path):
        write_files({"ok.js": "var a = 1;\n", "broken.js": "function (\n"})

        result = runner.invoke(js_complex.app, ["-C", str(tmp_path)])

        assert result.exit_code == 1
        assert "Error:" in result.output
        assert "Total files:" not in result.stdout
