"""Tests for configuration loading."""

import pytest

from code_insights.config import DEFAULT_EXCLUDE_PATTERN, ToolConfig, load_config
from code_insights.exceptions import ConfigurationError, InvalidConfigError


class TestToolConfig:
    """Test ToolConfig defaults and validation."""

    def test_defaults(self):
        config = ToolConfig()
        assert config.glob == "**/*.js"
        assert config.exclude_pattern == DEFAULT_EXCLUDE_PATTERN
        assert config.max_low_maintainability == 20
        assert config.skip_project_calculation is True
        assert config.new_mi is False

    def test_invalid_grep(self):
        with pytest.raises(InvalidConfigError):
            ToolConfig(grep="(unclosed")

    def test_empty_glob(self):
        with pytest.raises(InvalidConfigError):
            ToolConfig(glob="")

    def test_negative_cap(self):
        with pytest.raises(InvalidConfigError):
            ToolConfig(max_low_maintainability=-1)

    def test_default_exclusion_rule(self):
        exclude = ToolConfig().exclude_re
        for path in ("node_modules/a.js", "build/x.js", "static/y.js", "a/package.json", ".eslintrc.js"):
            assert exclude.search(path), path
        assert not exclude.search("src/app.js")


class TestLoadConfig:
    """Test merging of defaults, files, environment and overrides."""

    def test_tool_defaults(self):
        config = load_config("loc", defaults={"glob": "src/**/*"})
        assert config.glob == "src/**/*"

    def test_none_overrides_are_ignored(self):
        config = load_config("js-complex", grep=None, verbose=True)
        assert config.grep is None
        assert config.verbose is True

    def test_project_file_with_tool_table(self, tmp_path):
        (tmp_path / "code-insights.toml").write_text(
            'max_low_maintainability = 5\n\n[tools.js-complex]\ngrep = "components/"\n'
        )
        config = load_config("js-complex", base_dir=str(tmp_path))
        assert config.max_low_maintainability == 5
        assert config.grep == "components/"

    def test_tool_table_applies_to_its_tool_only(self, tmp_path):
        (tmp_path / "code-insights.toml").write_text('[tools.todo]\nteam_username = "team"\n')
        assert load_config("loc", base_dir=str(tmp_path)).team_username is None
        assert load_config("todo", base_dir=str(tmp_path)).team_username == "team"

    def test_environment_overrides_file(self, tmp_path, monkeypatch):
        (tmp_path / "code-insights.toml").write_text("invert = false\n")
        monkeypatch.setenv("CODE_INSIGHTS_INVERT", "true")
        monkeypatch.setenv("CODE_INSIGHTS_DEBUG_FILE_PATH", "src/a.js")
        config = load_config("js-complex", base_dir=str(tmp_path))
        assert config.invert is True
        assert config.debug_file_path == "src/a.js"

    def test_cli_overrides_environment(self, monkeypatch):
        monkeypatch.setenv("CODE_INSIGHTS_GREP", "from-env")
        assert load_config("js-complex", grep="from-cli").grep == "from-cli"

    def test_list_from_environment(self, monkeypatch):
        monkeypatch.setenv("CODE_INSIGHTS_EXTENSIONS", "js, css")
        assert load_config("loc").extensions == ["js", "css"]

    def test_bad_environment_value(self, monkeypatch):
        monkeypatch.setenv("CODE_INSIGHTS_MAX_LOW_MAINTAINABILITY", "many")
        with pytest.raises(ConfigurationError):
            load_config("js-complex")

    def test_unknown_key(self, tmp_path):
        path = tmp_path / "extra.toml"
        path.write_text("colour = 'red'\n")
        with pytest.raises(ConfigurationError):
            load_config("js-complex", config_file=path)

    def test_missing_explicit_file(self, tmp_path):
        with pytest.raises(ConfigurationError):
            load_config("js-complex", config_file=tmp_path / "missing.toml")

    def test_invalid_toml(self, tmp_path):
        path = tmp_path / "broken.toml"
        path.write_text("this is = = not toml")
        with pytest.raises(ConfigurationError):
            load_config("js-complex", config_file=path)
