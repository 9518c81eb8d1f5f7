"""Tests for the loc tool."""

from typer.testing import CliRunner

from code_insights.tasks import loc
from code_insights.tasks.loc import FileLoc, bucket_of, count_loc, render_loc, summarize

runner = CliRunner()


class TestCountLoc:
    """Test comment and blank line removal."""

    def test_comments_and_blank_lines(self):
        content = (
            "// header\n"
            "var a = 1; // trailing\n"
            "\n"
            "/* block\n"
            "   comment */\n"
            "function f() {}\n"
        )
        assert count_loc(content) == 2

    def test_urls_are_not_comments(self):
        assert count_loc('var url = "http://example.com";\n') == 1

    def test_empty(self):
        assert count_loc("") == 0
        assert count_loc("\n\n   \n") == 0


class TestSummarize:
    """Test aggregation."""

    def test_buckets(self):
        assert bucket_of(0) == 0
        assert bucket_of(1) == 10
        assert bucket_of(10) == 10
        assert bucket_of(11) == 20

    def test_totals(self):
        totals = summarize([FileLoc("a.js", 3), FileLoc("b.js", 4), FileLoc("c.js", 25)])
        assert totals.total == 3
        assert totals.total_loc == 32
        assert totals.average == 11
        assert totals.histogram == {10: 2, 30: 1}
        assert [f.path_for_display for f in totals.top_files] == ["c.js", "b.js", "a.js"]
        assert [f.path_for_display for f in totals.bottom_files] == ["a.js", "b.js", "c.js"]

    def test_average_rounds_half_up(self):
        assert summarize([FileLoc("a.js", 3), FileLoc("b.js", 4)]).average == 4

    def test_empty(self):
        totals = summarize([])
        assert totals.average == 0
        assert totals.histogram == {}

    def test_top_lists_capped(self):
        totals = summarize([FileLoc(f"f{i}.js", i) for i in range(20)])
        assert len(totals.top_files) == 15
        assert totals.top_files[0].loc == 19
        assert totals.bottom_files[0].loc == 0


class TestRenderLoc:
    """Test report layout."""

    def test_layout(self):
        report = render_loc([FileLoc("a.js", 3), FileLoc("lib/b.js", 12)])
        texts = [line.text for line in report.lines]

        assert texts[:2] == ["     10-20 | 1", "        20 | 1"]
        assert "Total files:            2" in texts
        assert "Total LOC:             15" in texts
        assert "Average LOC:            8" in texts
        top = texts.index("Top 2 LOC:")
        assert texts[top + 1 : top + 3] == ["        12 lib/b.js", "         3 a.js"]
        assert "Bottom 2 LOC:" in texts


class TestLocCommand:
    """Test the command end to end."""

    def test_counts_source_files(self, write_files, tmp_path):
        write_files(
            {
                "src/a.js": "var a = 1;\n// comment\nvar b = 2;\n",
                "src/styles/main.scss": "body {\n  color: red;\n}\n",
                "src/notes.txt": "ignored\n",
                "test/a.js": "ignored();\n",
            }
        )

        result = runner.invoke(loc.app, ["-C", str(tmp_path)])

        assert result.exit_code == 0
        assert "Total files:            2" in result.stdout
        assert "Total LOC:              5" in result.stdout
        assert "src/styles/main.scss" in result.stdout

    def test_js_only(self, write_files, tmp_path):
        write_files({"src/a.js": "a();\n", "src/main.css": "a {}\n"})

        result = runner.invoke(loc.app, ["-C", str(tmp_path), "--js-only"])

        assert result.exit_code == 0
        assert "Total files:            1" in result.stdout
        assert "main.css" not in result.stdout
