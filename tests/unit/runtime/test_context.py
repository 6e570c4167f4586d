"""Unit tests for the application context and configuration overrides."""

import pytest

from src.account_link.runtime.config.config_data import (
    ConfigData,
    ProvisioningConfig,
    SessionConfig,
)
from src.account_link.runtime.config.settings import EnvironmentVariables
from src.account_link.runtime.context import (
    _app_context,
    get_config,
    get_context,
    load_default_config,
    set_config,
    set_context,
    with_context,
)


class TestWithContext:
    def test_override_is_scoped(self):
        before = get_config().provisioning.allowed_access_scopes

        override = ConfigData(
            provisioning=ProvisioningConfig(allowed_access_scopes=["private", "public"])
        )
        with with_context(override):
            assert get_config().provisioning.allowed_access_scopes == ["private", "public"]

        assert get_config().provisioning.allowed_access_scopes == before

    def test_unset_fields_keep_current_values(self):
        current = get_config()

        with with_context(ConfigData(session=SessionConfig(max_age=60))):
            merged = get_config()
            assert merged.session.max_age == 60
            assert merged.session.key_prefix == current.session.key_prefix
            assert merged.database.url == current.database.url
            assert merged.provisioning.admin_roles == current.provisioning.admin_roles

    def test_nested_overrides(self):
        with with_context(ConfigData(session=SessionConfig(max_age=60))):
            with with_context(ConfigData(session=SessionConfig(key_prefix="sso"))):
                assert get_config().session.max_age == 60
                assert get_config().session.key_prefix == "sso"
            assert get_config().session.max_age == 60
            assert get_config().session.key_prefix == "user"

    def test_none_is_a_no_op(self):
        before = get_config()

        with with_context(None):
            assert get_config() is before

    def test_rejects_non_config(self):
        with pytest.raises(ValueError, match="must be ConfigData"):
            with with_context({"session": {"max_age": 60}}):
                pass


class TestSetContext:
    def test_set_context_returns_reset_token(self):
        original = get_context()
        replacement = type(original)(config=ConfigData(session=SessionConfig(max_age=5)))

        token = set_context(replacement)
        try:
            assert get_config().session.max_age == 5
        finally:
            _app_context.reset(token)

        assert get_context() is original


class TestSetConfig:
    def test_replaces_whole_config(self):
        token = set_context(get_context())
        try:
            set_config(ConfigData(session=SessionConfig(max_age=42)))
            assert get_config().session.max_age == 42
        finally:
            _app_context.reset(token)


class TestLoadDefaultConfig:
    def test_falls_back_to_defaults_without_file(self, tmp_path, monkeypatch):
        monkeypatch.setenv("APP_CONFIG_FILE", str(tmp_path / "absent.yaml"))
        monkeypatch.setenv("APP_ENVIRONMENT", "test")
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")

        config = load_default_config(EnvironmentVariables())

        assert config.app.environment == "test"
        assert config.logging.level == "DEBUG"
        assert config.provisioning.allowed_access_scopes == ["private"]

    def test_reads_configured_file(self, tmp_path, monkeypatch):
        path = tmp_path / "config.yaml"
        path.write_text("config:\n  session:\n    max_age: 120\n")
        monkeypatch.setenv("APP_CONFIG_FILE", str(path))

        config = load_default_config(EnvironmentVariables())

        assert config.session.max_age == 120
