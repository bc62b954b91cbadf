"""Factory do SessionManager com dependências concretas."""

from __future__ import annotations

from typing import TYPE_CHECKING

from api.connectors.cafe import create_auth_api_client
from app.events import EventBus
from app.sessions import SessionManager
from config.settings import get_token_refresh_settings

if TYPE_CHECKING:
    from collections.abc import Callable

    import httpx

    from app.protocols import NotifierProtocol
    from config.settings import ApiSettings, TokenRefreshSettings


def create_session_manager(
    api_settings: ApiSettings | None = None,
    refresh_settings_provider: Callable[[], TokenRefreshSettings] = (
        get_token_refresh_settings
    ),
    *,
    event_bus: EventBus | None = None,
    notifier: NotifierProtocol | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> SessionManager:
    """Monta o grafo de sessão.

    Args:
        api_settings: Settings do backend (carrega do ambiente se None)
        refresh_settings_provider: Fonte das settings de renovação, relida
            a cada agendamento
        event_bus: Bus compartilhado com os colaboradores (novo se None)
        notifier: Destino das mensagens ao usuário
        transport: Transporte httpx alternativo (testes)

    Returns:
        SessionManager ainda não iniciado (chamar start() ou usar async with).
    """
    bus = event_bus or EventBus()
    api = create_auth_api_client(api_settings, event_bus=bus, transport=transport)
    return SessionManager(
        api,
        bus,
        notifier=notifier,
        refresh_settings_provider=refresh_settings_provider,
    )
