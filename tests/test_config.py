"""Tests for spaserve.config — ServerConfig frozen dataclass."""

from pathlib import Path

import pytest

from spaserve.config import ONE_YEAR, ServerConfig
from spaserve.errors import ConfigurationError
from spaserve.routes import SITE_ROUTES


class TestServerConfig:
    def test_defaults(self) -> None:
        cfg = ServerConfig()

        assert cfg.host == "0.0.0.0"
        assert cfg.port == 3000
        assert cfg.environment == "production"
        assert cfg.debug is False
        assert cfg.dist_dir == "dist"
        assert cfg.index == "index.html"
        assert cfg.assets_prefix == "/assets"
        assert cfg.asset_cache_control == "public, max-age=31536000, immutable"
        assert cfg.static_cache_control == "public, max-age=3600"
        assert cfg.shell_cache_control == "no-cache"
        assert cfg.routes == SITE_ROUTES
        assert cfg.strict_routes is False
        assert cfg.health_path == "/health"
        assert ONE_YEAR == 365 * 24 * 60 * 60

    def test_override(self) -> None:
        cfg = ServerConfig(port=8080, dist_dir=Path("build"), strict_routes=True)

        assert cfg.port == 8080
        assert cfg.dist_dir == Path("build")
        assert cfg.strict_routes is True

    def test_frozen(self) -> None:
        cfg = ServerConfig()

        with pytest.raises(AttributeError):
            cfg.debug = True  # type: ignore[misc]

    def test_introspection_follows_debug(self) -> None:
        assert ServerConfig().introspection_enabled is False
        assert ServerConfig(debug=True).introspection_enabled is True
        assert ServerConfig(introspection=True).introspection_enabled is True


class TestFromEnv:
    def test_empty_environment_gives_defaults(self) -> None:
        assert ServerConfig.from_env({}) == ServerConfig()

    def test_reads_variables(self) -> None:
        cfg = ServerConfig.from_env(
            {
                "PORT": "8080",
                "HOST": "127.0.0.1",
                "DIST_DIR": "/srv/site/dist",
                "STRICT_ROUTES": "true",
                "WORKERS": "4",
                "LOG_LEVEL": "DEBUG",
            }
        )
        assert cfg.port == 8080
        assert cfg.host == "127.0.0.1"
        assert cfg.dist_dir == "/srv/site/dist"
        assert cfg.strict_routes is True
        assert cfg.workers == 4
        assert cfg.log_level == "debug"

    @pytest.mark.parametrize("value", ["development", "dev", "Development"])
    def test_development_enables_debug(self, value: str) -> None:
        cfg = ServerConfig.from_env({"APP_ENV": value})
        assert cfg.debug is True
        assert cfg.environment == value.lower()

    def test_node_env_fallback(self) -> None:
        cfg = ServerConfig.from_env({"NODE_ENV": "development"})
        assert cfg.debug is True

    def test_app_env_wins_over_node_env(self) -> None:
        cfg = ServerConfig.from_env({"APP_ENV": "production", "NODE_ENV": "development"})
        assert cfg.environment == "production"
        assert cfg.debug is False

    def test_overrides_win(self) -> None:
        cfg = ServerConfig.from_env({"PORT": "8080"}, port=9000, strict_routes=True)
        assert cfg.port == 9000
        assert cfg.strict_routes is True

    def test_unknown_override(self) -> None:
        with pytest.raises(ConfigurationError, match="Unknown config field"):
            ServerConfig.from_env({}, colour="blue")

    @pytest.mark.parametrize(
        ("name", "value"), [("PORT", "http"), ("PORT", "-1"), ("WORKERS", "many")]
    )
    def test_bad_integers(self, name: str, value: str) -> None:
        with pytest.raises(ConfigurationError, match=name):
            ServerConfig.from_env({name: value})

    @pytest.mark.parametrize(("raw", "expected"), [("1", True), ("on", True), ("no", False)])
    def test_booleans(self, raw: str, expected: bool) -> None:
        assert ServerConfig.from_env({"STRICT_ROUTES": raw}).strict_routes is expected

    def test_bad_boolean(self) -> None:
        with pytest.raises(ConfigurationError, match="STRICT_ROUTES"):
            ServerConfig.from_env({"STRICT_ROUTES": "maybe"})
