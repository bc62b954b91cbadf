"""Configuração do pytest para o projeto cafe_session."""

import sys
from collections.abc import AsyncIterator
from pathlib import Path
from unittest.mock import MagicMock

import pytest
import pytest_asyncio

# Adiciona src/ ao PYTHONPATH para permitir imports absolutos
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from app.bootstrap.factory import create_session_manager  # noqa: E402
from app.sessions import SessionManager  # noqa: E402
from config.settings import ApiSettings, TokenRefreshSettings  # noqa: E402
from tests.fakes.fake_cafe_api import PHONE, TEST_BASE_URL, FakeCafeApi  # noqa: E402


@pytest.fixture
def fake_api() -> FakeCafeApi:
    """Backend fake com um usuário cadastrado."""
    api = FakeCafeApi()
    api.add_user(PHONE)
    return api


@pytest.fixture
def api_settings() -> ApiSettings:
    return ApiSettings(base_url=TEST_BASE_URL, request_timeout_seconds=5.0)


@pytest.fixture
def refresh_settings() -> TokenRefreshSettings:
    """Settings padrão (15/1 -> 840000 ms): o timer nunca dispara no teste."""
    return TokenRefreshSettings()


@pytest.fixture
def notifier() -> MagicMock:
    """Notifier mock (success/error)."""
    return MagicMock()


@pytest_asyncio.fixture
async def manager(
    api_settings: ApiSettings,
    refresh_settings: TokenRefreshSettings,
    fake_api: FakeCafeApi,
    notifier: MagicMock,
) -> AsyncIterator[SessionManager]:
    """SessionManager iniciado (anônimo) com histórico de chamadas limpo."""
    session_manager = create_session_manager(
        api_settings,
        lambda: refresh_settings,
        notifier=notifier,
        transport=fake_api.transport(),
    )
    await session_manager.start()
    fake_api.calls.clear()
    fake_api.correlation_ids.clear()
    yield session_manager
    await session_manager.close()
