"""
Tests for configuration loading — environment, config.yml and defaults.
"""

import textwrap
from pathlib import Path

import pytest

from ferry.core.config.loader import (
    DEFAULT_GITHUB_API,
    DEFAULT_REGISTRY_URL,
    ConfigError,
    default_config_path,
    load_settings,
    read_config_file,
)
from ferry.core.context import EngineContext


@pytest.fixture
def config_yml(tmp_path: Path) -> Path:
    path = tmp_path / "config.yml"
    path.write_text(textwrap.dedent(f"""\
        registry: /srv/registry
        root: {tmp_path / "install-root"}
        github_api: https://github.example.com/api/v3
    """))
    return path


class TestDefaults:
    def test_no_file_no_env(self, tmp_path: Path):
        settings = load_settings(environ={}, config_path=tmp_path / "missing.yml")
        assert settings.registry == DEFAULT_REGISTRY_URL
        assert settings.github_api == DEFAULT_GITHUB_API
        assert settings.root == Path.home()
        assert settings.config_path is None

    def test_default_config_path(self):
        assert default_config_path({}) == Path.home() / ".config" / "ferry" / "config.yml"

    def test_explicit_config_env(self, tmp_path: Path):
        assert default_config_path({"FERRY_CONFIG": str(tmp_path / "c.yml")}) == tmp_path / "c.yml"


class TestConfigFile:
    def test_values_from_file(self, config_yml: Path, tmp_path: Path):
        settings = load_settings(environ={}, config_path=config_yml)
        assert settings.registry == "/srv/registry"
        assert settings.root == tmp_path / "install-root"
        assert settings.github_api == "https://github.example.com/api/v3"
        assert settings.config_path == config_yml

    def test_env_overrides_file(self, config_yml: Path, tmp_path: Path):
        settings = load_settings(
            environ={
                "FERRY_REGISTRY_URL": "https://mirror.example.com/r.tar.gz",
                "FERRY_ROOT": str(tmp_path / "other"),
            },
            config_path=config_yml,
        )
        assert settings.registry == "https://mirror.example.com/r.tar.gz"
        assert settings.root == tmp_path / "other"
        assert settings.github_api == "https://github.example.com/api/v3"

    def test_empty_env_var_ignored(self, config_yml: Path):
        settings = load_settings(environ={"FERRY_REGISTRY_URL": ""}, config_path=config_yml)
        assert settings.registry == "/srv/registry"

    def test_config_env_selects_file(self, config_yml: Path):
        settings = load_settings(environ={"FERRY_CONFIG": str(config_yml)})
        assert settings.registry == "/srv/registry"

    def test_empty_file(self, tmp_path: Path):
        path = tmp_path / "config.yml"
        path.write_text("")
        assert read_config_file(path) == {}

    def test_unknown_keys_dropped(self, tmp_path: Path, caplog):
        path = tmp_path / "config.yml"
        path.write_text("registry: /r\ncolour: blue\n")
        assert read_config_file(path) == {"registry": "/r"}
        assert "colour" in caplog.text

    def test_invalid_yaml(self, tmp_path: Path):
        path = tmp_path / "config.yml"
        path.write_text("registry: [unclosed\n")
        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_settings(environ={}, config_path=path)

    def test_not_a_mapping(self, tmp_path: Path):
        path = tmp_path / "config.yml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ConfigError, match="mapping"):
            load_settings(environ={}, config_path=path)


class TestEngineFromSettings:
    def test_builds_layout(self, tmp_path: Path):
        settings = load_settings(
            environ={"FERRY_ROOT": str(tmp_path), "FERRY_REGISTRY_URL": "/srv/r"},
            config_path=tmp_path / "none.yml",
        )
        ctx = EngineContext.from_settings(settings)

        assert ctx.registry_source == "/srv/r"
        assert ctx.bin_path == tmp_path / ".local" / "bin"
        assert ctx.state_path == tmp_path / ".local" / "share" / "ferry" / "installed.json"
        assert ctx.bin_path.is_dir()
        assert ctx.state.packages == {}
