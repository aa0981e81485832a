"""Tests for commitor.user_config module."""

import yaml

from commitor.user_config import (
    DEFAULT_CONFIG,
    add_ignore_pattern,
    get_config_file,
    get_ignore_patterns,
    load_config,
    remove_ignore_pattern,
    save_config,
)


class TestLoadConfig:
    """Tests for load_config function."""

    def test_defaults_without_file(self, mock_repo_root):
        """Test that defaults are returned and nothing is written."""
        config = load_config(mock_repo_root)

        assert config["ignore"] == DEFAULT_CONFIG["ignore"]
        assert not get_config_file(mock_repo_root).exists()

    def test_defaults_are_copies(self, mock_repo_root):
        load_config(mock_repo_root)["ignore"].append("*.tmp")
        assert "*.tmp" not in DEFAULT_CONFIG["ignore"]

    def test_missing_keys_merged(self, mock_repo_root):
        save_config(mock_repo_root, {"other": 1})

        config = load_config(mock_repo_root)

        assert config["other"] == 1
        assert config["ignore"] == DEFAULT_CONFIG["ignore"]

    def test_invalid_yaml_falls_back(self, mock_repo_root):
        config_file = get_config_file(mock_repo_root)
        config_file.parent.mkdir()
        config_file.write_text("ignore: [unclosed", encoding="utf-8")

        assert load_config(mock_repo_root)["ignore"] == DEFAULT_CONFIG["ignore"]


class TestIgnorePatterns:
    """Tests for the ignore pattern helpers."""

    def test_add_pattern(self, mock_repo_root):
        assert add_ignore_pattern(mock_repo_root, "build/*")

        assert "build/*" in get_ignore_patterns(mock_repo_root)
        saved = yaml.safe_load(get_config_file(mock_repo_root).read_text(encoding="utf-8"))
        assert "build/*" in saved["ignore"]

    def test_add_duplicate(self, mock_repo_root):
        assert not add_ignore_pattern(mock_repo_root, "poetry.lock")

    def test_remove_pattern(self, mock_repo_root):
        assert remove_ignore_pattern(mock_repo_root, "poetry.lock")
        assert "poetry.lock" not in get_ignore_patterns(mock_repo_root)

    def test_remove_missing_pattern(self, mock_repo_root):
        assert not remove_ignore_pattern(mock_repo_root, "nothing/*")
        assert not get_config_file(mock_repo_root).exists()
