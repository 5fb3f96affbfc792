import json

import httpx
import pytest

from ecotrails_admin.domain.auth.service import AdminAuthService, AdminSession, LoginError


def _service(handler, navigator, notifier, test_settings) -> tuple[AdminAuthService, httpx.AsyncClient]:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    service = AdminAuthService(navigator, notifier=notifier, http_client=client, app_settings=test_settings)
    return service, client


@pytest.mark.anyio
async def test_login_success_navigates_to_dashboard(navigator, notifier, test_settings):
    sent = []

    def handler(request: httpx.Request) -> httpx.Response:
        sent.append(request)
        return httpx.Response(200, json={"success": True, "role": "Admin"})

    service, client = _service(handler, navigator, notifier, test_settings)
    async with client:
        session = await service.login("admin@ecotrails.test", "hunter2")

    assert session == AdminSession(email="admin@ecotrails.test", role="Admin")
    assert str(sent[0].url) == "https://users.test/api/user/login"
    assert json.loads(sent[0].content) == {"Email": "admin@ecotrails.test", "PasswordHash": "hunter2"}
    assert navigator.current == "AdminDashboard"
    assert service.loading is False


@pytest.mark.anyio
@pytest.mark.parametrize("email, password", [("", "pw"), ("a@b.test", ""), ("", "")])
async def test_missing_credentials_sends_nothing(navigator, notifier, test_settings, email, password):
    sent = []

    def handler(request: httpx.Request) -> httpx.Response:
        sent.append(request)
        return httpx.Response(200)

    service, client = _service(handler, navigator, notifier, test_settings)
    async with client:
        with pytest.raises(LoginError) as exc_info:
            await service.login(email, password)

    assert exc_info.value.code == "missing_credentials"
    assert sent == []
    assert navigator.screens == []


@pytest.mark.anyio
@pytest.mark.parametrize(
    "response, code, title",
    [
        (httpx.Response(200, text="Login successful"), "role_missing", "Login Failed"),
        (httpx.Response(200, json={"message": "Login Success", "role": "Partner"}), "not_admin", "Access Denied"),
        (httpx.Response(401, json={"message": "Invalid credentials"}), "rejected", "Login Failed"),
        (httpx.Response(200, json={"success": False, "error": "Locked out"}), "rejected", "Login Failed"),
    ],
)
async def test_login_failures(navigator, notifier, test_settings, response, code, title):
    service, client = _service(lambda request: response, navigator, notifier, test_settings)
    async with client:
        with pytest.raises(LoginError) as exc_info:
            await service.login("admin@ecotrails.test", "pw")

    assert exc_info.value.code == code
    assert exc_info.value.title == title
    assert navigator.screens == []


@pytest.mark.anyio
async def test_rejected_login_uses_server_message(navigator, notifier, test_settings):
    service, client = _service(
        lambda request: httpx.Response(401, json={"message": "Invalid credentials"}), navigator, notifier, test_settings
    )
    async with client:
        assert await service.submit("admin@ecotrails.test", "pw") is None

    assert notifier.alerts == [("Login Failed", "Invalid credentials")]


@pytest.mark.anyio
async def test_submit_alerts_on_network_error_and_success(navigator, notifier, test_settings):
    calls = 0

    def handler(request: httpx.Request) -> httpx.Response:
        nonlocal calls
        calls += 1
        if calls == 1:
            raise httpx.ConnectError("offline", request=request)
        return httpx.Response(200, json={"message": "Login successful", "role": "Admin"})

    service, client = _service(handler, navigator, notifier, test_settings)
    async with client:
        assert await service.submit("admin@ecotrails.test", "pw") is None
        session = await service.submit("admin@ecotrails.test", "pw")

    assert session is not None
    assert notifier.alerts == [
        ("Login Failed", "Network or server error."),
        ("Admin Login Successful", "Welcome Admin!"),
    ]
    assert navigator.screens == [("AdminDashboard", None)]
