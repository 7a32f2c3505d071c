import pytest

from param_check.config import DEFAULT_CONFIG_FILE, ValidatorConfig, load_config
from param_check.errors import ConfigurationError
from param_check.validator.findings import Severity


class TestLoadConfig:
    def test_defaults_without_file(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        config = load_config()
        assert config == ValidatorConfig()
        assert config.severity == Severity.ERROR
        assert config.exempt_locations == ["header"]

    def test_default_file_in_working_directory(self, tmp_path, monkeypatch):
        (tmp_path / DEFAULT_CONFIG_FILE).write_text("severity: warning\nfail_on_warning: true\n")
        monkeypatch.chdir(tmp_path)
        config = load_config()
        assert config.severity == Severity.WARNING
        assert config.fail_on_warning is True

    def test_explicit_file(self, tmp_path):
        f = tmp_path / "custom.yaml"
        f.write_text("exempt_locations: [header, cookie]\nlog_level: DEBUG\n")
        config = load_config(f)
        assert config.exempt_locations == ["header", "cookie"]
        assert config.log_level == "DEBUG"

    def test_empty_file(self, tmp_path):
        f = tmp_path / "empty.yaml"
        f.write_text("")
        assert load_config(f) == ValidatorConfig()

    def test_invalid_value(self, tmp_path):
        f = tmp_path / "bad.yaml"
        f.write_text("severity: fatal\n")
        with pytest.raises(ConfigurationError):
            load_config(f)

    def test_not_a_mapping(self, tmp_path):
        f = tmp_path / "bad.yaml"
        f.write_text("- severity\n")
        with pytest.raises(ConfigurationError):
            load_config(f)
