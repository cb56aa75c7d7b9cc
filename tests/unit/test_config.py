"""Unit tests for configuration loading."""

from depspy.config import DEFAULT_MAX_LEVEL, LOG_LEVEL_ENV, load_config


class TestLoadConfig:
    def test_missing_file_uses_defaults(self, tmp_path, monkeypatch):
        monkeypatch.delenv(LOG_LEVEL_ENV, raising=False)
        config = load_config(tmp_path / "config.yaml")

        assert config.max_level == DEFAULT_MAX_LEVEL
        assert config.reverse is False
        assert config.log_level == "WARNING"

    def test_values_from_yaml(self, tmp_path, monkeypatch):
        monkeypatch.delenv(LOG_LEVEL_ENV, raising=False)
        path = tmp_path / "config.yaml"
        path.write_text("max_level: 5\nreverse: true\nlog_level: info\nunknown: 1\n")

        config = load_config(path)

        assert config.max_level == 5
        assert config.reverse is True
        assert config.log_level == "INFO"

    def test_env_overrides_log_level(self, tmp_path, monkeypatch):
        monkeypatch.setenv(LOG_LEVEL_ENV, "debug")
        assert load_config(tmp_path / "config.yaml").log_level == "DEBUG"

    def test_invalid_values_fall_back(self, tmp_path, monkeypatch):
        monkeypatch.delenv(LOG_LEVEL_ENV, raising=False)
        path = tmp_path / "config.yaml"
        path.write_text("max_level: 0\n")

        assert load_config(path).max_level == DEFAULT_MAX_LEVEL

    def test_non_mapping_yaml_is_ignored(self, tmp_path, monkeypatch):
        monkeypatch.delenv(LOG_LEVEL_ENV, raising=False)
        path = tmp_path / "config.yaml"
        path.write_text("- just\n- a list\n")

        assert load_config(path).reverse is False
