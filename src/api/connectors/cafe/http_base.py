"""Cliente HTTP base com credenciais em cookie.

Interceptor de 401:
- endpoint de renovação recebeu 401 -> SESSION_EXPIRED, sem retry
- requisição já reenviada recebeu 401 -> SESSION_EXPIRED, sem terceira tentativa
- demais casos -> uma única renovação e um único reenvio (retried=True)

É o único ponto de recuperação transparente de credenciais expiradas.
"""

from __future__ import annotations

import asyncio
import dataclasses
import logging
import time
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import httpx

from api.connectors.cafe.error_detail import parse_error_response
from app.events import SessionSignal
from app.observability import CORRELATION_HEADER, get_correlation_id, record_latency
from utils.errors import HttpError, NetworkError

if TYPE_CHECKING:
    from app.events import EventBus

logger = logging.getLogger(__name__)

RENEWAL_PATH = "/tokens/refresh-access"


@dataclass
class HttpClientConfig:
    """Configuração do cliente HTTP."""

    base_url: str = "http://localhost:8000/api/v1"
    timeout_seconds: float = 30.0
    renewal_path: str = RENEWAL_PATH
    default_headers: dict[str, str] = field(
        default_factory=lambda: {"Content-Type": "application/json"}
    )
    verify_ssl: bool = True


@dataclass(frozen=True)
class ApiRequest:
    """Requisição lógica ao backend.

    Attributes:
        method: Verbo HTTP
        path: Caminho relativo à base_url
        params: Query string
        json: Corpo JSON
        retried: Marcador de reenvio após renovação
        renewable: False desliga o renew-and-retry (ex: logout)
    """

    method: str
    path: str
    params: dict[str, Any] | None = None
    json: Any = None
    retried: bool = False
    renewable: bool = True


class HttpClient:
    """Cliente HTTP assíncrono com interceptor de credenciais expiradas.

    Mantém um único httpx.AsyncClient: o cookie jar dele é o único lugar
    onde o par access/refresh existe.
    """

    def __init__(
        self,
        config: HttpClientConfig | None = None,
        event_bus: EventBus | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config or HttpClientConfig()
        self._event_bus = event_bus
        self._client = httpx.AsyncClient(
            base_url=self._config.base_url,
            headers=self._config.default_headers,
            timeout=self._config.timeout_seconds,
            verify=self._config.verify_ssl,
            transport=transport,
        )
        self._renewal: asyncio.Task[httpx.Response] | None = None

    @property
    def renewal_path(self) -> str:
        return self._config.renewal_path

    async def send(self, request: ApiRequest) -> httpx.Response:
        """Envia requisição aplicando o interceptor de 401.

        Raises:
            NetworkError: Sem resposta do servidor
            HttpError: Resposta não-2xx (ValidationError para detail em lista)
        """
        response = await self._dispatch(request)
        if response.status_code == 401:
            return await self._handle_unauthorized(request, response)
        if response.is_error:
            raise parse_error_response(response)
        return response

    async def _dispatch(self, request: ApiRequest) -> httpx.Response:
        headers: dict[str, str] = {}
        correlation_id = get_correlation_id()
        if correlation_id:
            headers[CORRELATION_HEADER] = correlation_id

        start = time.perf_counter()
        try:
            response = await self._client.request(
                request.method,
                request.path,
                params=request.params,
                json=request.json,
                headers=headers,
            )
        except httpx.TransportError as exc:
            record_latency("http_client", request.path, _elapsed_ms(start))
            logger.warning(
                "http_connection_error",
                extra={"path": request.path, "error_type": type(exc).__name__},
            )
            raise NetworkError("http_connection_error") from exc

        record_latency(
            "http_client", request.path, _elapsed_ms(start), response.status_code
        )
        return response

    async def _handle_unauthorized(
        self,
        request: ApiRequest,
        response: httpx.Response,
    ) -> httpx.Response:
        error = parse_error_response(response)

        if request.path == self._config.renewal_path:
            logger.warning("renewal_rejected", extra={"path": request.path})
            self._announce_expired()
            raise error

        if request.retried:
            logger.warning("retry_unauthorized", extra={"path": request.path})
            self._announce_expired()
            raise error

        if not request.renewable:
            raise error

        logger.info("access_expired_renewing", extra={"path": request.path})
        try:
            await self.renew()
        except (HttpError, NetworkError) as renewal_error:
            raise error from renewal_error

        return await self.send(dataclasses.replace(request, retried=True))

    async def renew(self) -> None:
        """Renova o access token, compartilhando a chamada já em curso.

        Agendador e interceptor passam por aqui: nunca há duas chamadas
        de renovação simultâneas para a mesma sessão.

        Raises:
            NetworkError: Sem resposta do servidor
            HttpError: Renovação rejeitada (401 já publicou SESSION_EXPIRED)
        """
        if self._renewal is None:
            self._renewal = asyncio.get_running_loop().create_task(
                self.send(ApiRequest("POST", self._config.renewal_path))
            )
            self._renewal.add_done_callback(self._on_renewal_done)
        else:
            logger.debug("renewal_joined", extra={"path": self._config.renewal_path})
        await asyncio.shield(self._renewal)

    def _on_renewal_done(self, task: asyncio.Task[httpx.Response]) -> None:
        if self._renewal is task:
            self._renewal = None
        if not task.cancelled():
            # Marca a exceção como consumida mesmo sem awaiters restantes
            task.exception()

    def _announce_expired(self) -> None:
        if self._event_bus is None:
            return
        self._event_bus.publish(SessionSignal.SESSION_EXPIRED)

    async def aclose(self) -> None:
        """Fecha o httpx.AsyncClient subjacente."""
        if self._renewal is not None:
            self._renewal.cancel()
        await self._client.aclose()


def _elapsed_ms(start: float) -> float:
    return (time.perf_counter() - start) * 1000
