"""Tests for configuration loading."""

from pathlib import Path

import pytest

from singularis.config import (
    SingularisConfig,
    _apply_env_overrides,
    get_config,
    load_config,
    reset_config,
)
from singularis.core.errors import ErrorCode, SingularisError


class TestDefaults:
    def test_defaults(self) -> None:
        config = get_config()
        assert config.server.port == 5000
        assert config.monitor.auth_required is True
        assert config.monitor.max_connections == 100
        assert config.monitor.heartbeat_interval == 30.0
        assert config.runtime.seed is None
        assert config.docs.source_dirs == ["src"]

    def test_get_config_is_cached(self) -> None:
        assert get_config() is get_config()
        first = get_config()
        reset_config()
        assert get_config() is not first


class TestFileLoading:
    def test_project_config(self, tmp_path: Path) -> None:
        config_dir = tmp_path / ".singularis"
        config_dir.mkdir()
        (config_dir / "config.yaml").write_text(
            "server:\n  port: 8080\nmonitor:\n  auth_required: false\nruntime:\n  seed: 7\n"
        )
        config = load_config()
        assert config.server.port == 8080
        assert config.server.host == "127.0.0.1"
        assert config.monitor.auth_required is False
        assert config.runtime.seed == 7

    def test_explicit_path(self, tmp_path: Path) -> None:
        path = tmp_path / "custom.yaml"
        path.write_text("debug: true\ndocs:\n  output_dir: site\n")
        config = load_config(path)
        assert config.debug is True
        assert config.docs.output_dir == "site"

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "broken.yaml"
        path.write_text("server: [unclosed\n")
        with pytest.raises(SingularisError) as exc_info:
            load_config(path)
        assert exc_info.value.code == ErrorCode.CONFIG_INVALID

    def test_unknown_key(self, tmp_path: Path) -> None:
        path = tmp_path / "unknown.yaml"
        path.write_text("server:\n  colour: blue\n")
        with pytest.raises(SingularisError):
            load_config(path)


class TestEnvOverrides:
    def test_section_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SINGULARIS_SERVER_PORT", "9000")
        monkeypatch.setenv("SINGULARIS_MONITOR_AUTH_REQUIRED", "false")
        monkeypatch.setenv("SINGULARIS_DOCS_SOURCE_DIRS", "src,scripts")
        config = load_config()
        assert config.server.port == 9000
        assert config.monitor.auth_required is False
        assert config.docs.source_dirs == ["src", "scripts"]

    def test_heartbeat_interval_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SINGULARIS_MONITOR_HEARTBEAT_INTERVAL", "2.5")
        assert load_config().monitor.heartbeat_interval == 2.5

    def test_unknown_override_is_ignored(self) -> None:
        data = SingularisConfig().to_dict()
        _apply_env_overrides(data, {"SINGULARIS_SERVER_NOPE": "1", "OTHER": "x"})
        assert "nope" not in data["server"]

    def test_debug_override(self) -> None:
        data = _apply_env_overrides(SingularisConfig().to_dict(), {"SINGULARIS_DEBUG": "true"})
        assert data["debug"] is True

    def test_single_value_for_list_field(self) -> None:
        data = _apply_env_overrides(
            SingularisConfig().to_dict(), {"SINGULARIS_DOCS_SOURCE_DIRS": "lib"}
        )
        assert data["docs"]["source_dirs"] == ["lib"]

    def test_seed_override(self) -> None:
        data = _apply_env_overrides(
            SingularisConfig().to_dict(), {"SINGULARIS_RUNTIME_SEED": "42"}
        )
        assert data["runtime"]["seed"] == 42
