import pytest
from pydantic import ValidationError

from ecotrails_admin.settings import Settings


def test_defaults_point_at_dev_functions():
    settings = Settings(_env_file=None)

    assert settings.app_env == "prod"
    assert settings.request_timeout_seconds is None
    assert settings.api_base_url("users") == (
        "https://ecotrails-dev-users-func20250717225342.azurewebsites.net/api/api"
    )


@pytest.mark.parametrize(
    "value, expected",
    [
        ("https://bookings.test/api?", "https://bookings.test/api"),
        ("https://bookings.test/api/", "https://bookings.test/api"),
        ("  https://bookings.test/api/?  ", "https://bookings.test/api"),
    ],
)
def test_base_urls_are_normalized(monkeypatch, value, expected):
    monkeypatch.setenv("BOOKINGS_API_BASE_URL", value)

    settings = Settings(_env_file=None)

    assert settings.bookings_api_base_url == expected


def test_empty_base_url_rejected():
    with pytest.raises(ValidationError):
        Settings(partners_api_base_url=" / ", _env_file=None)


@pytest.mark.parametrize("timeout", [0, -1])
def test_non_positive_timeout_rejected(timeout):
    with pytest.raises(ValidationError):
        Settings(request_timeout_seconds=timeout, _env_file=None)


def test_timeout_from_env(monkeypatch):
    monkeypatch.setenv("REQUEST_TIMEOUT_SECONDS", "7.5")

    assert Settings(_env_file=None).request_timeout_seconds == 7.5


def test_prod_requires_https():
    with pytest.raises(ValidationError) as exc_info:
        Settings(app_env="prod", users_api_base_url="http://users.internal/api", _env_file=None)

    assert "USERS_API_BASE_URL" in str(exc_info.value)


def test_dev_allows_plain_http_and_normalizes_log_level():
    settings = Settings(
        app_env="dev",
        users_api_base_url="http://localhost:7071/api",
        log_level="debug",
        _env_file=None,
    )

    assert settings.api_base_url("users") == "http://localhost:7071/api"
    assert settings.log_level == "DEBUG"
