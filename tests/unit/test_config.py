"""Unit tests for Settings and the YAML config loader."""

from __future__ import annotations

from pathlib import Path

import pytest

from src.config.loader import load_config
from src.config.settings import Settings


def _settings(**overrides) -> Settings:
    return Settings(_env_file=None, **overrides)


class TestSettings:
    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        for var in ("OS_ENDPOINT", "CACHE_BACKEND", "REDIS_HOST", "REDIS_PORT", "PORT"):
            monkeypatch.delenv(var, raising=False)

        settings = _settings()

        assert settings.os_endpoint == "http://localhost:9200"
        assert settings.cache_backend == "redis"
        assert settings.redis_port == 6379
        assert settings.port == 8080
        assert settings.search_include_video_url is False

    def test_environment_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("OS_ENDPOINT", "https://search.internal:9200")
        monkeypatch.setenv("REDIS_TLS", "true")
        monkeypatch.setenv("SEARCH_INCLUDE_VIDEO_URL", "1")

        settings = _settings()

        assert settings.os_endpoint == "https://search.internal:9200"
        assert settings.redis_tls is True
        assert settings.search_include_video_url is True

    def test_cors_origins_are_split(self) -> None:
        settings = _settings(cors_origins="https://a.example, https://b.example ,")
        assert settings.get_cors_origins() == ["https://a.example", "https://b.example"]

    def test_blank_cors_origins_allow_all(self) -> None:
        assert _settings(cors_origins=" ").get_cors_origins() == ["*"]


class TestLoadConfig:
    def test_missing_file_uses_default_collections(self, tmp_path: Path) -> None:
        config = load_config(str(tmp_path / "absent.yaml"), settings=_settings())

        assert config["store"]["collections"] == {"programs": "programs", "episodes": "episodes"}

    def test_yaml_values_survive_merge(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text(
            "store:\n"
            "  collections:\n"
            "    programs: programs-v2\n"
            "    episodes: episodes-v2\n",
            encoding="utf-8",
        )

        config = load_config(str(path), settings=_settings(os_endpoint="http://es:9200"))

        assert config["store"]["collections"]["programs"] == "programs-v2"
        assert config["store"]["endpoint"] == "http://es:9200"

    def test_settings_override_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text(
            "views:\n  search_include_video_url: false\n  extra: kept\n", encoding="utf-8"
        )

        config = load_config(str(path), settings=_settings(search_include_video_url=True))

        assert config["views"]["search_include_video_url"] is True
        assert config["views"]["extra"] == "kept"

    def test_only_store_and_views_sections_are_emitted(self, tmp_path: Path) -> None:
        config = load_config(str(tmp_path / "absent.yaml"), settings=_settings())

        assert set(config) == {"store", "views"}
        assert config["store"]["timeout_seconds"] == _settings().store_timeout_seconds

    def test_empty_yaml_file(self, tmp_path: Path) -> None:
        path = tmp_path / "config.yaml"
        path.write_text("", encoding="utf-8")

        config = load_config(str(path), settings=_settings())

        assert config["views"] == {"search_include_video_url": False}
