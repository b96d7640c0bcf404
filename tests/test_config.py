"""Tests for settings, the DI container and logging configuration."""

from pathlib import Path
from unittest.mock import MagicMock

import pytest
import structlog
from pydantic import ValidationError

from chromagen.config import Environment, Settings, StoreType, get_settings
from chromagen.container import Container, get_container, reset_container
from chromagen.exceptions import AIClientNotConfiguredError
from chromagen.logging_config import (
    LogContext,
    bind_context,
    clear_context,
    configure_logging,
    get_logger,
)
from chromagen.repositories.memory import InMemoryKeyValueStore
from chromagen.repositories.sqlite import SQLiteKeyValueStore


class TestSettings:
    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        for name in ("CHROMAGEN_ENVIRONMENT", "CHROMAGEN_STORE_TYPE"):
            monkeypatch.delenv(name, raising=False)
        settings = Settings(_env_file=None)
        assert settings.app_name == "ChromaGen AI"
        assert settings.daily_free_quota == 3
        assert settings.share_bonus == 1
        assert settings.record_ttl_seconds == 604800
        assert settings.usage_key_prefix == "ip:"
        assert settings.ai_model == "google/gemini-2.5-flash"
        assert settings.store_type is StoreType.MEMORY

    def test_environment_variables_use_prefix(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CHROMAGEN_DAILY_FREE_QUOTA", "5")
        monkeypatch.setenv("CHROMAGEN_STORE_TYPE", "none")
        settings = Settings(_env_file=None)
        assert settings.daily_free_quota == 5
        assert settings.store_type is StoreType.NONE

    def test_development_enables_debug(self) -> None:
        assert Settings(environment=Environment.DEVELOPMENT).debug is True

    def test_production_requires_turnstile_secret(self) -> None:
        with pytest.raises(ValidationError):
            Settings(environment=Environment.PRODUCTION, turnstile_secret_key=None)

    def test_production_with_secret(self) -> None:
        settings = Settings(environment=Environment.PRODUCTION, turnstile_secret_key="s")
        assert settings.is_production
        assert settings.skip_turnstile_when_unconfigured is False

    def test_testing_skips_unconfigured_turnstile(self, test_settings: Settings) -> None:
        assert test_settings.skip_turnstile_when_unconfigured is True

    def test_get_settings_is_cached(self) -> None:
        get_settings.cache_clear()
        assert get_settings() is get_settings()
        get_settings.cache_clear()


class TestContainer:
    def test_memory_store(self, test_settings: Settings) -> None:
        container = Container(settings=test_settings)
        assert isinstance(container.store, InMemoryKeyValueStore)
        assert container.store is container.store

    def test_sqlite_store(self, test_settings: Settings, tmp_path: Path) -> None:
        settings = test_settings.model_copy(
            update={"store_type": StoreType.SQLITE, "sqlite_path": tmp_path / "db" / "usage.db"}
        )
        with Container(settings=settings) as container:
            assert isinstance(container.store, SQLiteKeyValueStore)
            container.usage_service.consume("A")
            assert container.usage_service.check("A").remaining == 2

    def test_none_store_fails_open(self, test_settings: Settings) -> None:
        settings = test_settings.model_copy(update={"store_type": StoreType.NONE})
        container = Container(settings=settings)
        assert container.store is None
        for _ in range(5):
            assert container.usage_service.consume("A").success is True

    def test_usage_limits_come_from_settings(self, test_settings: Settings) -> None:
        settings = test_settings.model_copy(update={"daily_free_quota": 7, "share_bonus": 2})
        container = Container(settings=settings)
        assert container.usage_service.check("A").total == 7
        container.usage_service.claim_bonus("A")
        assert container.usage_service.check("A").total == 9

    def test_generator_requires_api_key(self, test_settings: Settings) -> None:
        with pytest.raises(AIClientNotConfiguredError):
            _ = Container(settings=test_settings).color_scheme_generator

    def test_generator_with_api_key(self, test_settings: Settings) -> None:
        settings = test_settings.model_copy(update={"ai_api_key": "sk-test"})
        generator = Container(settings=settings).color_scheme_generator
        assert generator is not None

    def test_captcha_verifier_skips_in_testing(self, test_settings: Settings) -> None:
        verifier = Container(settings=test_settings).captcha_verifier
        assert verifier.verify("token").success is True

    def test_global_container_reset(self) -> None:
        reset_container()
        first = get_container()
        assert get_container() is first
        reset_container()
        assert get_container() is not first
        reset_container()


class TestLogging:
    def test_configure_console_logging(self, test_settings: Settings) -> None:
        configure_logging(test_settings)
        assert get_logger("chromagen.test") is not None

    def test_configure_json_logging(self, test_settings: Settings) -> None:
        settings = test_settings.model_copy(update={"log_format": "json"})
        configure_logging(settings)
        get_logger("chromagen.test").info("json_event", answer=42)
        configure_logging(test_settings)

    def test_production_defaults_to_debug_off(self) -> None:
        settings = Settings(environment=Environment.PRODUCTION, turnstile_secret_key="s")
        assert settings.debug is False

    def test_context_binding(self) -> None:
        clear_context()
        bind_context(request_id="abc")
        assert structlog.contextvars.get_contextvars() == {"request_id": "abc"}
        clear_context()
        assert structlog.contextvars.get_contextvars() == {}

    def test_log_context_manager(self) -> None:
        clear_context()
        with LogContext(identifier="203.0.113.7"):
            assert structlog.contextvars.get_contextvars()["identifier"] == "203.0.113.7"
        assert "identifier" not in structlog.contextvars.get_contextvars()

    def test_secrets_are_masked(self) -> None:
        from chromagen.logging_config import _drop_secrets

        event = {"event": "verify", "secret": "s3", "turnstile_token": "tok", "ip": "1.2.3.4"}
        assert _drop_secrets(None, "info", event) == {
            "event": "verify",
            "secret": "***",
            "turnstile_token": "***",
            "ip": "1.2.3.4",
        }

    def test_store_unavailable_is_logged(self, monkeypatch: pytest.MonkeyPatch) -> None:
        from chromagen.services import usage

        fake_logger = MagicMock()
        monkeypatch.setattr(usage, "logger", fake_logger)
        usage.UsageServiceImpl(None).check("A")

        fake_logger.warning.assert_called_once()
        assert fake_logger.warning.call_args.args == ("usage_store_unavailable",)
        assert fake_logger.warning.call_args.kwargs["operation"] == "check"
