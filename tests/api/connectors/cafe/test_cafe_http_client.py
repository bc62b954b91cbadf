"""Testes do AuthApiClient sobre o backend fake.

Cobre:
    - renew-and-retry transparente em 401
    - no máximo uma renovação e um reenvio por requisição
    - 401 da renovação publica SESSION_EXPIRED
    - mapeamento de falhas (NetworkError, HttpError, ValidationError)
    - header de correlação
"""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator

import httpx
import pytest
import pytest_asyncio

from api.connectors.cafe import (
    CURRENT_USER_PATH,
    LOGIN_PATH,
    RENEWAL_PATH,
    AuthApiClient,
    RegisterData,
    create_auth_api_client,
)
from app.events import EventBus, SessionSignal
from app.observability import correlation_scope
from config.settings import ApiSettings
from tests.fakes.fake_cafe_api import PHONE, FakeCafeApi
from utils.errors import HttpError, NetworkError, ValidationError

# ──────────────────────────────────────────────────────────────────────────────
# Fixtures
# ──────────────────────────────────────────────────────────────────────────────


@pytest.fixture
def event_bus() -> EventBus:
    return EventBus()


@pytest.fixture
def expired(event_bus: EventBus) -> list[SessionSignal]:
    """Registra cada SESSION_EXPIRED publicado."""
    received: list[SessionSignal] = []
    event_bus.subscribe(SessionSignal.SESSION_EXPIRED, received.append)
    return received


@pytest_asyncio.fixture
async def client(
    api_settings: ApiSettings,
    event_bus: EventBus,
    fake_api: FakeCafeApi,
) -> AsyncIterator[AuthApiClient]:
    api = create_auth_api_client(
        api_settings, event_bus=event_bus, transport=fake_api.transport()
    )
    yield api
    await api.aclose()


# ──────────────────────────────────────────────────────────────────────────────
# Interceptor de 401
# ──────────────────────────────────────────────────────────────────────────────


class TestUnauthorizedInterceptor:
    """Regras de renovação e reenvio."""

    @pytest.mark.asyncio
    async def test_cookies_authenticate_following_requests(
        self, client: AuthApiClient, fake_api: FakeCafeApi
    ) -> None:
        """Cookies do login são reenviados pelo cookie jar."""
        await client.login(PHONE)
        user = await client.get_current_user()
        assert user.phone_number == PHONE
        assert fake_api.count(RENEWAL_PATH) == 0

    @pytest.mark.asyncio
    async def test_expired_access_is_renewed_and_retried_once(
        self,
        client: AuthApiClient,
        fake_api: FakeCafeApi,
        expired: list[SessionSignal],
    ) -> None:
        await client.login(PHONE)
        fake_api.expire_access()

        user = await client.get_current_user()

        assert user.phone_number == PHONE
        assert fake_api.count(RENEWAL_PATH) == 1
        assert fake_api.count(CURRENT_USER_PATH) == 2
        assert expired == []

    @pytest.mark.asyncio
    async def test_retried_request_unauthorized_gives_up(
        self,
        client: AuthApiClient,
        fake_api: FakeCafeApi,
        expired: list[SessionSignal],
    ) -> None:
        """Segundo 401 não gera terceira tentativa e anuncia expiração."""
        await client.login(PHONE)
        fake_api.script(CURRENT_USER_PATH, 401, 401, 401)

        with pytest.raises(HttpError) as exc_info:
            await client.get_current_user()

        assert exc_info.value.status_code == 401
        assert fake_api.count(CURRENT_USER_PATH) == 2
        assert fake_api.count(RENEWAL_PATH) == 1
        assert expired == [SessionSignal.SESSION_EXPIRED]

    @pytest.mark.asyncio
    async def test_renewal_unauthorized_publishes_expiry(
        self,
        client: AuthApiClient,
        fake_api: FakeCafeApi,
        expired: list[SessionSignal],
    ) -> None:
        """Sem refresh válido: uma renovação, nenhum reenvio."""
        with pytest.raises(HttpError) as exc_info:
            await client.get_current_user()

        assert exc_info.value.is_unauthorized
        assert isinstance(exc_info.value.__cause__, HttpError)
        assert fake_api.count(RENEWAL_PATH) == 1
        assert fake_api.count(CURRENT_USER_PATH) == 1
        assert expired == [SessionSignal.SESSION_EXPIRED]

    @pytest.mark.asyncio
    async def test_direct_renewal_unauthorized_is_not_renewed(
        self,
        client: AuthApiClient,
        fake_api: FakeCafeApi,
        expired: list[SessionSignal],
    ) -> None:
        with pytest.raises(HttpError):
            await client.refresh_access()
        assert fake_api.count(RENEWAL_PATH) == 1
        assert expired == [SessionSignal.SESSION_EXPIRED]

    @pytest.mark.asyncio
    async def test_renewal_network_failure_keeps_original_error(
        self,
        client: AuthApiClient,
        fake_api: FakeCafeApi,
        expired: list[SessionSignal],
    ) -> None:
        """Falha de rede na renovação não anuncia expiração."""
        await client.login(PHONE)
        fake_api.expire_access()
        fake_api.script(RENEWAL_PATH, httpx.ConnectError("offline"))

        with pytest.raises(HttpError) as exc_info:
            await client.get_current_user()

        assert exc_info.value.status_code == 401
        assert isinstance(exc_info.value.__cause__, NetworkError)
        assert expired == []

    @pytest.mark.asyncio
    async def test_concurrent_renewals_share_one_call(
        self,
        client: AuthApiClient,
        fake_api: FakeCafeApi,
        expired: list[SessionSignal],
    ) -> None:
        """Renovação explícita e interceptor aguardam a mesma chamada."""
        await client.login(PHONE)
        gate = fake_api.hold(RENEWAL_PATH)
        explicit = asyncio.create_task(client.refresh_access())
        await fake_api.wait_for(RENEWAL_PATH)

        fake_api.expire_access()
        lookup = asyncio.create_task(client.get_current_user())
        await fake_api.wait_for(CURRENT_USER_PATH)
        await asyncio.sleep(0.05)
        gate.set()
        _, user = await asyncio.gather(explicit, lookup)

        assert user.phone_number == PHONE
        assert fake_api.count(RENEWAL_PATH) == 1
        assert fake_api.count(CURRENT_USER_PATH) == 2
        assert expired == []

    @pytest.mark.asyncio
    async def test_shared_renewal_rejection_announces_expiry_once(
        self,
        client: AuthApiClient,
        fake_api: FakeCafeApi,
        expired: list[SessionSignal],
    ) -> None:
        gate = fake_api.hold(RENEWAL_PATH)
        calls = [asyncio.create_task(client.refresh_access()) for _ in range(3)]
        await fake_api.wait_for(RENEWAL_PATH)
        await asyncio.sleep(0.05)
        gate.set()
        results = await asyncio.gather(*calls, return_exceptions=True)

        assert all(isinstance(r, HttpError) and r.is_unauthorized for r in results)
        assert fake_api.count(RENEWAL_PATH) == 1
        assert expired == [SessionSignal.SESSION_EXPIRED]

    @pytest.mark.asyncio
    async def test_logout_is_not_renewed(
        self,
        client: AuthApiClient,
        fake_api: FakeCafeApi,
        expired: list[SessionSignal],
    ) -> None:
        fake_api.script("/users/1/logout", 401)

        with pytest.raises(HttpError):
            await client.logout(1)

        assert fake_api.count(RENEWAL_PATH) == 0
        assert expired == []

    @pytest.mark.asyncio
    async def test_server_error_is_not_renewed(
        self, client: AuthApiClient, fake_api: FakeCafeApi
    ) -> None:
        fake_api.script(CURRENT_USER_PATH, 500)
        with pytest.raises(HttpError) as exc_info:
            await client.get_current_user()
        assert exc_info.value.status_code == 500
        assert exc_info.value.detail == "scripted"
        assert fake_api.count(RENEWAL_PATH) == 0


# ──────────────────────────────────────────────────────────────────────────────
# Mapeamento de falhas e payloads
# ──────────────────────────────────────────────────────────────────────────────


class TestErrorMapping:
    @pytest.mark.asyncio
    async def test_transport_failure_is_network_error(
        self, client: AuthApiClient, fake_api: FakeCafeApi
    ) -> None:
        fake_api.script(LOGIN_PATH, httpx.ConnectError("offline"))
        with pytest.raises(NetworkError):
            await client.login(PHONE)

    @pytest.mark.asyncio
    async def test_unknown_phone_is_http_error(self, client: AuthApiClient) -> None:
        with pytest.raises(HttpError) as exc_info:
            await client.login("000")
        assert exc_info.value.status_code == 404
        assert exc_info.value.detail == "User not found"

    @pytest.mark.asyncio
    async def test_field_errors_are_validation_error(
        self, client: AuthApiClient, fake_api: FakeCafeApi
    ) -> None:
        fake_api.script(
            "/users/register",
            (422, {"detail": [{"loc": ["body", "username"], "msg": "field required"}]}),
        )
        data = RegisterData(
            username="ali", phone_number="998900000001", provider="telegram",
            provider_id="42",
        )
        with pytest.raises(ValidationError) as exc_info:
            await client.register(data)
        assert exc_info.value.messages == ["field required"]

    @pytest.mark.asyncio
    async def test_invalid_body_is_http_error(
        self, client: AuthApiClient, fake_api: FakeCafeApi
    ) -> None:
        fake_api.script(CURRENT_USER_PATH, (200, {"unexpected": True}))
        with pytest.raises(HttpError, match="invalid_response_body"):
            await client.get_current_user()

    @pytest.mark.asyncio
    async def test_non_utf8_body_is_http_error(
        self, client: AuthApiClient, fake_api: FakeCafeApi
    ) -> None:
        fake_api.script(LOGIN_PATH, (200, b'{"id": 1, "name": "\xc3\x28"}'))
        with pytest.raises(HttpError, match="invalid_response_body") as exc_info:
            await client.login(PHONE)
        assert exc_info.value.status_code == 200

    @pytest.mark.asyncio
    async def test_register_returns_created_user(
        self, client: AuthApiClient, fake_api: FakeCafeApi
    ) -> None:
        data = RegisterData(
            username="bek", name="Bek", phone_number="998900000002",
            provider="telegram", provider_id="43",
        )
        user = await client.register(data)
        assert user.name == "Bek"
        assert "998900000002" in fake_api.users


class TestCorrelationHeader:
    @pytest.mark.asyncio
    async def test_scope_id_is_sent(
        self, client: AuthApiClient, fake_api: FakeCafeApi
    ) -> None:
        with correlation_scope("login") as correlation_id:
            await client.login(PHONE)
        assert correlation_id.startswith("login-")
        assert fake_api.correlation_ids == [correlation_id]

    @pytest.mark.asyncio
    async def test_retry_shares_correlation_id(
        self, client: AuthApiClient, fake_api: FakeCafeApi
    ) -> None:
        await client.login(PHONE)
        fake_api.expire_access()
        fake_api.correlation_ids.clear()

        with correlation_scope("validate") as correlation_id:
            await client.get_current_user()

        assert fake_api.correlation_ids == [correlation_id] * 3

    @pytest.mark.asyncio
    async def test_no_header_outside_scope(
        self, client: AuthApiClient, fake_api: FakeCafeApi
    ) -> None:
        await client.login(PHONE)
        assert fake_api.correlation_ids == [None]
