"""Tests for UI preferences and environment settings."""

import json

import pytest

from vibeguide.config import settings, ui_config
from vibeguide.exceptions import ConfigurationError


class TestUIConfig:
    def test_defaults_without_file(self):
        assert ui_config.load_ui_config() == ui_config.DEFAULT_CONFIG
        assert ui_config.get_theme() == "vibeguide-dark"
        assert ui_config.get_include_leading_blank_rows() is True
        assert ui_config.get_size_by_name() is False

    def test_round_trip(self, isolated_config):
        ui_config.set_include_leading_blank_rows(False)
        ui_config.set_size_by_name(True)
        ui_config.set_theme("vibeguide-nord")

        saved = json.loads((isolated_config / "ui_config.json").read_text())
        assert saved == {
            "theme": "vibeguide-nord",
            "include_leading_blank_rows": False,
            "size_by_name": True,
        }
        assert ui_config.get_include_leading_blank_rows() is False

    def test_partial_file_merged_with_defaults(self, isolated_config):
        isolated_config.mkdir(parents=True)
        (isolated_config / "ui_config.json").write_text('{"size_by_name": true}')

        config = ui_config.load_ui_config()
        assert config["size_by_name"] is True
        assert config["include_leading_blank_rows"] is True

    @pytest.mark.parametrize("content", ["{not json", "[1, 2, 3]"])
    def test_unreadable_file_uses_defaults(self, isolated_config, content):
        isolated_config.mkdir(parents=True)
        (isolated_config / "ui_config.json").write_text(content)

        assert ui_config.load_ui_config() == ui_config.DEFAULT_CONFIG


class TestSettings:
    def test_api_url_default(self):
        assert settings.get_api_url() == "http://localhost:8080"

    def test_api_url_strips_slash(self, monkeypatch):
        monkeypatch.setenv("VIBEGUIDE_API_URL", "https://guide.example.com/")
        assert settings.get_api_url() == "https://guide.example.com"

    def test_limit_default(self):
        assert settings.get_limit("VIBEGUIDE_CATEGORY_LIMIT") == 20

    @pytest.mark.parametrize("raw,expected", [("0", 1), ("45", 45), ("1000", 100)])
    def test_limit_clamped(self, monkeypatch, raw, expected):
        monkeypatch.setenv("VIBEGUIDE_STREAM_LIMIT", raw)
        assert settings.get_limit("VIBEGUIDE_STREAM_LIMIT") == expected

    def test_limit_not_a_number(self, monkeypatch):
        monkeypatch.setenv("VIBEGUIDE_STREAM_LIMIT", "ten")

        with pytest.raises(ConfigurationError) as exc_info:
            settings.get_limit("VIBEGUIDE_STREAM_LIMIT")
        assert exc_info.value.context["setting"] == "VIBEGUIDE_STREAM_LIMIT"

    def test_auto_scroll(self, monkeypatch):
        assert settings.is_auto_scroll_enabled()

        monkeypatch.setenv("VIBEGUIDE_AUTO_SCROLL", "FALSE")
        assert not settings.is_auto_scroll_enabled()

    def test_invalid_auto_scroll(self, monkeypatch):
        monkeypatch.setenv("VIBEGUIDE_AUTO_SCROLL", "sometimes")

        with pytest.raises(ConfigurationError):
            settings.is_auto_scroll_enabled()
        assert len(settings.validate_all_env_vars()) == 1

    def test_unknown_vars_are_valid(self):
        assert settings.validate_env_var("SOMETHING_ELSE", "x") == (True, None)

    def test_env_info(self, monkeypatch):
        monkeypatch.setenv("VIBEGUIDE_CATEGORY_LIMIT", "7")

        info = settings.get_env_info()

        assert set(info) == {
            "VIBEGUIDE_API_URL",
            "VIBEGUIDE_CATEGORY_LIMIT",
            "VIBEGUIDE_STREAM_LIMIT",
            "VIBEGUIDE_AUTO_SCROLL",
        }
        assert info["VIBEGUIDE_CATEGORY_LIMIT"]["value"] == "7"
        assert info["VIBEGUIDE_API_URL"]["is_set"] is False
        assert info["VIBEGUIDE_API_URL"]["default"] == "http://localhost:8080"
