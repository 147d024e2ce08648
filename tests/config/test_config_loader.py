# SPDX-License-Identifier: MIT
"""
Tests for configuration loading.
"""
import pytest

from slc.config.loader import get_default_config, load_config
from slc.core.exceptions import ConfigError


class TestDefaults:
    """Test the built-in configuration."""

    def test_default_config(self):
        config = get_default_config()
        assert config["version"] == 1
        assert config["server"]["port"] == 8080
        assert config["store"]["backend"] == "memory"
        assert config["identity"] == {"header": "X-User-ID", "cookie": "slc_uid"}
        assert config["cors"]["allow_origins"] == ["*"]

    def test_no_file_uses_defaults(self, tmp_path):
        assert load_config(search_dir=str(tmp_path), environ={}) == get_default_config()


class TestFileLoading:
    """Test YAML files and the search order."""

    def test_explicit_file_merged_over_defaults(self, tmp_path):
        cfg = tmp_path / "slc.yml"
        cfg.write_text("server:\n  port: 9000\nlogging:\n  level: DEBUG\n")
        config = load_config(str(cfg), environ={})
        assert config["server"] == {"host": "0.0.0.0", "port": 9000}
        assert config["logging"]["level"] == "DEBUG"

    def test_dotfile_discovered(self, tmp_path):
        (tmp_path / ".slc.yaml").write_text("identity:\n  cookie: uid\n")
        config = load_config(search_dir=str(tmp_path), environ={})
        assert config["identity"]["cookie"] == "uid"

    def test_missing_explicit_file(self, tmp_path):
        with pytest.raises(ConfigError) as exc:
            load_config(str(tmp_path / "nope.yml"), environ={})
        assert exc.value.config_path

    def test_malformed_yaml(self, tmp_path):
        cfg = tmp_path / "bad.yml"
        cfg.write_text("cors:\n  allow_origins: [\n  - a\n")
        with pytest.raises(ConfigError) as exc:
            load_config(str(cfg), environ={})
        assert "Failed to parse" in str(exc.value)

    def test_section_must_be_mapping(self, tmp_path):
        cfg = tmp_path / "bad.yml"
        cfg.write_text("store: postgres\n")
        with pytest.raises(ConfigError) as exc:
            load_config(str(cfg), environ={})
        assert exc.value.section == "store"
        assert exc.value.config_path == str(cfg.resolve())

    def test_postgres_requires_dsn(self, tmp_path):
        cfg = tmp_path / "pg.yml"
        cfg.write_text("store:\n  backend: postgres\n")
        with pytest.raises(ConfigError):
            load_config(str(cfg), environ={})

    def test_unknown_backend(self, tmp_path):
        cfg = tmp_path / "x.yml"
        cfg.write_text("store:\n  backend: mysql\n")
        with pytest.raises(ConfigError):
            load_config(str(cfg), environ={})

    def test_bad_version(self, tmp_path):
        cfg = tmp_path / "v.yml"
        cfg.write_text("version: 2\n")
        with pytest.raises(ConfigError):
            load_config(str(cfg), environ={})


class TestEnvOverrides:
    """Test environment overrides."""

    def test_database_url_switches_backend(self, tmp_path):
        config = load_config(
            search_dir=str(tmp_path),
            environ={"DATABASE_URL": "postgresql://u@localhost/slc", "PORT": "9090"},
        )
        assert config["store"]["backend"] == "postgres"
        assert config["store"]["dsn"] == "postgresql://u@localhost/slc"
        assert config["server"]["port"] == 9090

    def test_identity_and_log_level(self, tmp_path):
        config = load_config(
            search_dir=str(tmp_path),
            environ={
                "USER_ID_HEADER": "X-Client",
                "ANON_COOKIE_NAME": "cid",
                "SLC_LOG_LEVEL": "warning",
            },
        )
        assert config["identity"] == {"header": "X-Client", "cookie": "cid"}
        assert config["logging"]["level"] == "WARNING"

    def test_bad_port(self, tmp_path):
        with pytest.raises(ConfigError):
            load_config(search_dir=str(tmp_path), environ={"PORT": "eighty"})
