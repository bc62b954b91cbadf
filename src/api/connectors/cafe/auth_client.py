"""Cliente de identidade do backend da cafeteria.

Estende HttpClient com os endpoints de sessão:
- cadastro, login por telefone, renovação, identidade atual e logout

Logs usam apenas o id do usuário; telefone nunca é logado.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError as PydanticValidationError

from api.connectors.cafe.http_base import (
    RENEWAL_PATH,
    ApiRequest,
    HttpClient,
    HttpClientConfig,
)
from api.connectors.cafe.models import RegisterData, RegistrationResult, UserSession
from utils.errors import HttpError

if TYPE_CHECKING:
    import httpx

    from app.events import EventBus
    from config.settings import ApiSettings

logger = logging.getLogger(__name__)

REGISTER_PATH = "/users/register"
LOGIN_PATH = "/users/log-in"
CURRENT_USER_PATH = "/users/me"
LOGOUT_PATH_TEMPLATE = "/users/{user_id}/logout"


class AuthApiClient(HttpClient):
    """Operações de identidade sobre o canal com cookies."""

    async def register(self, data: RegisterData) -> UserSession:
        """Cadastra usuário e retorna a identidade criada."""
        response = await self.send(
            ApiRequest("POST", REGISTER_PATH, json=data.model_dump(exclude_none=True))
        )
        result = _parse_model(RegistrationResult, response, REGISTER_PATH)
        logger.info("user_registered", extra={"user_id": result.user.id})
        return result.user

    async def login(self, phone_number: str) -> UserSession:
        """Autentica por número de telefone."""
        response = await self.send(
            ApiRequest("POST", LOGIN_PATH, params={"phone_number": phone_number})
        )
        user = _parse_model(UserSession, response, LOGIN_PATH)
        logger.info("user_logged_in", extra={"user_id": user.id})
        return user

    async def refresh_access(self) -> None:
        """Renova o access token (cookie) usando o refresh token."""
        await self.renew()

    async def get_current_user(self) -> UserSession:
        """Busca a identidade atual na fonte da verdade."""
        response = await self.send(ApiRequest("GET", CURRENT_USER_PATH))
        return _parse_model(UserSession, response, CURRENT_USER_PATH)

    async def logout(self, user_id: int) -> None:
        """Invalida a sessão no servidor.

        Não passa pelo renew-and-retry: as credenciais serão descartadas
        de qualquer forma.
        """
        path = LOGOUT_PATH_TEMPLATE.format(user_id=user_id)
        await self.send(ApiRequest("POST", path, renewable=False))
        logger.info("user_logged_out", extra={"user_id": user_id})


def _parse_model(model: type[Any], response: httpx.Response, path: str) -> Any:
    """Valida o corpo JSON contra o modelo; corpo inválido vira HttpError."""
    # ValueError cobre JSON inválido e corpo fora de UTF-8
    try:
        return model.model_validate(response.json())
    except (ValueError, PydanticValidationError) as exc:
        logger.error(
            "invalid_response_body",
            extra={"path": path, "status_code": response.status_code},
        )
        raise HttpError(
            "invalid_response_body", status_code=response.status_code
        ) from exc


def create_auth_api_client(
    settings: ApiSettings | None = None,
    event_bus: EventBus | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> AuthApiClient:
    """Factory para criar cliente de identidade com config padrão.

    Args:
        settings: ApiSettings opcional. Se None, carrega do ambiente.
        event_bus: Bus onde SESSION_EXPIRED é publicado.
        transport: Transporte httpx alternativo (testes).
    """
    # Import local para evitar dependência circular
    from config.settings import get_api_settings

    api = settings or get_api_settings()
    config = HttpClientConfig(
        base_url=api.base_url,
        timeout_seconds=api.request_timeout_seconds,
        verify_ssl=api.verify_ssl,
    )
    return AuthApiClient(config=config, event_bus=event_bus, transport=transport)
