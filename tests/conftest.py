"""Test configuration and fixtures for the underwriting engine."""

from collections.abc import Generator

import pytest

from life_underwriting.core.config import UnderwritingSettings, clear_settings_cache
from life_underwriting.services.underwriting import UnderwritingEngine
from tests.fixtures.application_factory import FIXED_NOW, ApplicationFactory


@pytest.fixture(autouse=True)
def _reset_settings() -> Generator[None, None, None]:
    """Keep cached settings from leaking between tests."""
    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def factory() -> type[ApplicationFactory]:
    """Application factory."""
    return ApplicationFactory


@pytest.fixture
def settings() -> UnderwritingSettings:
    """Default engine settings, independent of the environment."""
    return UnderwritingSettings()


@pytest.fixture
def engine(settings: UnderwritingSettings) -> UnderwritingEngine:
    """Engine with a fixed clock."""
    return UnderwritingEngine(settings, clock=lambda: FIXED_NOW)
