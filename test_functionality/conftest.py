"""
Shared fixtures: a throw-away SQLite database per test and a fixed clock.
"""

from __future__ import annotations

from datetime import datetime

import pytest

from wellness_chat.application.dto import CreateUserRequest
from wellness_chat.factory import ServiceFactory
from wellness_chat.infrastructure.config import Settings

NOW = datetime(2024, 3, 10, 9, 0)


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        db_path=str(tmp_path / "wellness.db"),
        log_level="DEBUG",
        digest_size=3,
        session_dir=tmp_path / "session",
    )


@pytest.fixture
async def factory(settings) -> ServiceFactory:
    service_factory = ServiceFactory(settings, clock=lambda: NOW)
    await service_factory.initialize()
    return service_factory


@pytest.fixture
async def user(factory):
    return await factory.create_profile_service().register(
        CreateUserRequest(name="Ana", email="ana@example.com")
    )
