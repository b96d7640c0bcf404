"""Dependency injection container for ChromaGen.

Provides centralized dependency management using a simple container pattern.
External collaborators (key-value store, Turnstile, AI client) are created
here from settings and handed to the services, never read from module
globals, so tests can swap any of them for in-memory fakes.

Usage:
    from chromagen.container import Container, get_container

    container = get_container()
    status = container.usage_service.check("203.0.113.7")
"""

from functools import cached_property, lru_cache
from typing import TYPE_CHECKING

from chromagen.config import Settings, StoreType, get_settings
from chromagen.domain.usage import UsageLimits
from chromagen.logging_config import get_logger

if TYPE_CHECKING:
    from chromagen.repositories.interfaces import KeyValueStore
    from chromagen.services.color_scheme import OpenAIColorSchemeGenerator
    from chromagen.services.palette import PaletteServiceImpl
    from chromagen.services.turnstile import TurnstileVerifier
    from chromagen.services.usage import UsageServiceImpl

logger = get_logger(__name__)


class Container:
    """Dependency injection container.

    Provides lazy-loaded access to the store and services. Services are
    instantiated on first access and cached for reuse.

    The container can be configured with custom settings for testing:

        test_settings = Settings(store_type=StoreType.MEMORY)
        container = Container(settings=test_settings)
    """

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings or get_settings()
        logger.debug(
            "container_created",
            store_type=self._settings.store_type.value,
            environment=self._settings.environment.value,
        )

    @property
    def settings(self) -> Settings:
        """Get application settings."""
        return self._settings

    @cached_property
    def store(self) -> "KeyValueStore | None":
        """Get the key-value store for usage records.

        Returns None when store_type is 'none'; the usage service then
        fails open.
        """
        if self._settings.store_type == StoreType.NONE:
            logger.warning("usage_store_disabled")
            return None
        if self._settings.store_type == StoreType.SQLITE:
            return self._create_sqlite_store()
        return self._create_memory_store()

    def _create_memory_store(self) -> "KeyValueStore":
        from chromagen.repositories.memory import InMemoryKeyValueStore

        logger.info("initializing_memory_store")
        return InMemoryKeyValueStore()

    def _create_sqlite_store(self) -> "KeyValueStore":
        from chromagen.repositories.sqlite import SQLiteKeyValueStore

        path = self._settings.sqlite_path
        logger.info("initializing_sqlite_store", path=str(path))
        path.parent.mkdir(parents=True, exist_ok=True)
        store = SQLiteKeyValueStore(path, check_same_thread=False)
        store.initialize()
        return store

    @cached_property
    def usage_limits(self) -> UsageLimits:
        return UsageLimits(
            daily_free=self._settings.daily_free_quota,
            share_bonus=self._settings.share_bonus,
            record_ttl_seconds=self._settings.record_ttl_seconds,
        )

    @cached_property
    def usage_service(self) -> "UsageServiceImpl":
        """Get the usage quota service."""
        from chromagen.services.usage import UsageServiceImpl

        return UsageServiceImpl(
            self.store,
            limits=self.usage_limits,
            key_prefix=self._settings.usage_key_prefix,
        )

    @cached_property
    def palette_service(self) -> "PaletteServiceImpl":
        """Get the palette editing/export service."""
        from chromagen.services.palette import PaletteServiceImpl

        return PaletteServiceImpl()

    @cached_property
    def captcha_verifier(self) -> "TurnstileVerifier":
        """Get the Turnstile verifier."""
        from chromagen.services.turnstile import TurnstileVerifier

        return TurnstileVerifier(
            secret_key=self._settings.turnstile_secret_key,
            verify_url=self._settings.turnstile_verify_url,
            skip_when_unconfigured=self._settings.skip_turnstile_when_unconfigured,
            timeout=self._settings.turnstile_timeout,
        )

    @cached_property
    def color_scheme_generator(self) -> "OpenAIColorSchemeGenerator":
        """Get the AI color scheme generator.

        Raises AIClientNotConfiguredError when no API key is set.
        """
        from chromagen.services.color_scheme import (
            OpenAIColorSchemeGenerator,
            create_ai_client,
        )

        return OpenAIColorSchemeGenerator(
            client=create_ai_client(self._settings),
            model=self._settings.ai_model,
            temperature=self._settings.ai_temperature,
            max_tokens=self._settings.ai_max_tokens,
            palette_service=self.palette_service,
        )

    def close(self) -> None:
        """Close all resources held by the container."""
        store = self.__dict__.get("store")
        if store is not None and hasattr(store, "close"):
            logger.info("closing_usage_store")
            store.close()

    def __enter__(self) -> "Container":
        return self

    def __exit__(self, *args: object) -> None:
        self.close()


_container: Container | None = None


@lru_cache
def get_container() -> Container:
    """Get the global container singleton.

    For testing, create a Container directly with custom settings instead
    of using this function.
    """
    global _container
    if _container is None:
        _container = Container()
    return _container


def reset_container() -> None:
    """Reset the global container (used by tests and app shutdown)."""
    global _container
    if _container is not None:
        _container.close()
        _container = None
    get_container.cache_clear()


# FastAPI dependency functions
def get_usage_service() -> "UsageServiceImpl":
    """FastAPI dependency for the usage service."""
    return get_container().usage_service


def get_palette_service() -> "PaletteServiceImpl":
    """FastAPI dependency for the palette service."""
    return get_container().palette_service


def get_captcha_verifier() -> "TurnstileVerifier":
    """FastAPI dependency for the Turnstile verifier."""
    return get_container().captcha_verifier


def get_color_scheme_generator() -> "OpenAIColorSchemeGenerator":
    """FastAPI dependency for the AI color scheme generator."""
    return get_container().color_scheme_generator
