from datetime import UTC, datetime

import pytest

from chromagen.config import Environment, Settings, StoreType
from chromagen.domain.colors import ColorToken, Palette
from chromagen.domain.usage import UsageLimits
from chromagen.repositories.memory import InMemoryKeyValueStore
from chromagen.services.palette import PaletteServiceImpl
from chromagen.services.usage import UsageServiceImpl


class FakeClock:
    """Manually advanced clock for TTL tests."""

    def __init__(self, start: float = 1_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def memory_store(clock: FakeClock) -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore(clock=clock)


@pytest.fixture
def usage_service(memory_store: InMemoryKeyValueStore) -> UsageServiceImpl:
    return UsageServiceImpl(memory_store, limits=UsageLimits())


@pytest.fixture
def today() -> datetime:
    return datetime(2026, 10, 19, 15, 30, tzinfo=UTC)


@pytest.fixture
def palette_service() -> PaletteServiceImpl:
    return PaletteServiceImpl()


@pytest.fixture
def sample_palette(palette_service: PaletteServiceImpl) -> Palette:
    result = palette_service.build_palette(
        {
            "primary": ("Royal Blue", "#3b82f6"),
            "secondary": ("Slate", "#64748b"),
            "accent": ("Amber", "#f59e0b"),
            "background": ("Snow", "#ffffff"),
            "surface": ("Mist", "#f1f5f9"),
            "text": ("Ink", "#0f172a"),
        },
        mood="Calm",
    )
    return result.to_palette()


@pytest.fixture
def primary_token(sample_palette: Palette) -> ColorToken:
    token = sample_palette.find_by_role("primary")
    assert token is not None
    return token


@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        environment=Environment.TESTING,
        store_type=StoreType.MEMORY,
        turnstile_secret_key=None,
        ai_api_key=None,
    )
