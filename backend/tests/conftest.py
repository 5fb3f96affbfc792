import sys
from pathlib import Path
from typing import Any, Mapping

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest

from ecotrails_admin.settings import Settings


class RecordingNotifier:
    def __init__(self) -> None:
        self.alerts: list[tuple[str, str]] = []

    def alert(self, title: str, message: str) -> None:
        self.alerts.append((title, message))

    @property
    def titles(self) -> list[str]:
        return [title for title, _ in self.alerts]


class RecordingNavigator:
    def __init__(self) -> None:
        self.screens: list[tuple[str, Mapping[str, Any] | None]] = []
        self.back_calls = 0

    def navigate_to(self, screen: str, params: Mapping[str, Any] | None = None) -> None:
        self.screens.append((screen, params))

    def go_back(self) -> None:
        self.back_calls += 1

    @property
    def current(self) -> str | None:
        return self.screens[-1][0] if self.screens else None


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def navigator() -> RecordingNavigator:
    return RecordingNavigator()


@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        app_env="dev",
        bookings_api_base_url="https://bookings.test/api",
        itineraries_api_base_url="https://itineraries.test/api",
        partners_api_base_url="https://partners.test/api",
        users_api_base_url="https://users.test/api",
        _env_file=None,
    )
