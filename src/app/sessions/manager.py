"""Dono do estado de autenticação (SessionState).

Operações expostas aos colaboradores:
- login / register: instalam a identidade; falhas viram mensagem, nunca exceção
- logout: best-effort remoto, limpeza local incondicional
- validate_session: busca a identidade atual; falha = anônimo
- refresh_session: renovação forçada fora do agendamento
- update_session: substitui a identidade após edição de perfil

Somente este objeto altera o AuthState. Conclusões de rede que chegam
depois de uma mudança de estado são descartadas (contador de geração).
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Self

from api.connectors.cafe.error_detail import describe_error
from app.events import SessionSignal
from app.infra.notifier import LoggingNotifier
from app.observability import correlation_scope
from app.sessions.models import AuthState
from app.sessions.refresh_scheduler import RefreshScheduler
from app.sessions.visibility import VisibilityMonitor
from config.logging import log_fallback
from config.settings import get_token_refresh_settings
from fsm import AuthStateMachine, AuthStatus
from utils.errors import SessionClientError

if TYPE_CHECKING:
    from collections.abc import Callable
    from types import TracebackType

    from api.connectors.cafe.models import RegisterData, UserSession
    from app.events import EventBus
    from app.protocols import AuthApiProtocol, NotifierProtocol
    from config.settings import TokenRefreshSettings

logger = logging.getLogger(__name__)

LOGIN_FAILED_MESSAGE = "Login failed"
REGISTRATION_FAILED_MESSAGE = "Registration failed"
SESSION_EXPIRED_MESSAGE = "Session expired. Please log in again."


class SessionManager:
    """Gerenciador de sessão com ciclo de vida explícito.

    Construído uma vez no composition root e injetado por referência.
    start() faz a primeira validação; close() encerra timer, inscrições
    e transporte.
    """

    def __init__(
        self,
        api: AuthApiProtocol,
        event_bus: EventBus,
        *,
        notifier: NotifierProtocol | None = None,
        refresh_settings_provider: Callable[[], TokenRefreshSettings] = (
            get_token_refresh_settings
        ),
    ) -> None:
        self._api = api
        self._event_bus = event_bus
        self._notifier = notifier or LoggingNotifier()
        self._fsm = AuthStateMachine()
        self._session: UserSession | None = None
        self._generation = 0
        self._last_error: str | None = None
        self._unsubscribe: list[Callable[[], None]] = []
        self._scheduler = RefreshScheduler(self, refresh_settings_provider)
        self._visibility = VisibilityMonitor(self, event_bus)

    # ── leitura ──────────────────────────────────────────────────────────

    @property
    def state(self) -> AuthState:
        """Snapshot imutável do estado atual."""
        return AuthState(session=self._session, is_loading=self._fsm.is_loading)

    @property
    def status(self) -> AuthStatus:
        return self._fsm.current_state

    @property
    def session(self) -> UserSession | None:
        return self._session

    @property
    def is_authenticated(self) -> bool:
        return self._session is not None

    @property
    def is_loading(self) -> bool:
        return self._fsm.is_loading

    @property
    def last_error(self) -> str | None:
        """Última mensagem de falha de login/cadastro."""
        return self._last_error

    @property
    def event_bus(self) -> EventBus:
        return self._event_bus

    @property
    def scheduler(self) -> RefreshScheduler:
        return self._scheduler

    @property
    def visibility(self) -> VisibilityMonitor:
        return self._visibility

    @property
    def state_machine(self) -> AuthStateMachine:
        return self._fsm

    # ── ciclo de vida ────────────────────────────────────────────────────

    async def start(self) -> None:
        """Inscreve no sinal de expiração e faz a primeira validação."""
        if not self._unsubscribe:
            self._unsubscribe.append(
                self._event_bus.subscribe(
                    SessionSignal.SESSION_EXPIRED, self._on_session_expired
                )
            )
        await self.validate_session()

    async def close(self) -> None:
        """Teardown: cancela timer, remove inscrições e fecha o transporte."""
        self._scheduler.stop()
        self._visibility.deactivate()
        for unsubscribe in self._unsubscribe:
            unsubscribe()
        self._unsubscribe.clear()
        await self._scheduler.drain()
        await self._visibility.drain()
        await self._api.aclose()
        logger.info("session_manager_closed")

    async def __aenter__(self) -> Self:
        await self.start()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.close()

    # ── operações ────────────────────────────────────────────────────────

    async def login(self, phone_number: str) -> bool:
        """Autentica por telefone.

        Returns:
            True se a identidade foi instalada; False com last_error preenchido.
        """
        with correlation_scope("login"):
            try:
                user = await self._api.login(phone_number)
            except SessionClientError as exc:
                self._report_failure("login", exc, LOGIN_FAILED_MESSAGE)
                return False

            self._last_error = None
            self._install(user, trigger="login")
            self._notifier.success("Successfully logged in!")
            return True

    async def register(self, data: RegisterData) -> bool:
        """Cadastra e instala a identidade recém-criada."""
        with correlation_scope("register"):
            try:
                user = await self._api.register(data)
            except SessionClientError as exc:
                self._report_failure("register", exc, REGISTRATION_FAILED_MESSAGE)
                return False

            self._last_error = None
            self._install(user, trigger="register")
            self._notifier.success("Registration successful!")
            return True

    async def logout(self) -> None:
        """Encerra a sessão; nunca falha por causa do servidor.

        O estado local é limpo e SESSION_EXPIRED publicado mesmo que a
        invalidação remota falhe.
        """
        with correlation_scope("logout"):
            session = self._session
            try:
                if session is not None:
                    await self._api.logout(session.id)
            except SessionClientError as exc:
                log_fallback(logger, "logout", reason=type(exc).__name__)
            finally:
                self._install(None, trigger="logout")
                self._event_bus.publish(SessionSignal.SESSION_EXPIRED)
                self._event_bus.publish(SessionSignal.STATE_CHANGED)
            self._notifier.success("Logged out successfully")

    async def validate_session(self) -> None:
        """Busca a identidade atual; qualquer falha resulta em anônimo."""
        with correlation_scope("validate"):
            generation = self._generation
            user: UserSession | None
            try:
                user = await self._api.get_current_user()
            except SessionClientError as exc:
                logger.info(
                    "session_validation_failed",
                    extra={
                        "error_type": type(exc).__name__,
                        "status_code": getattr(exc, "status_code", None),
                    },
                )
                user = None

            if generation != self._generation:
                logger.info("stale_validation_dropped")
                return
            self._install(user, trigger="validate")

    async def refresh_session(self) -> UserSession:
        """Renova credenciais e relê a identidade.

        Raises:
            SessionClientError: Falha de renovação ou de leitura; o estado
                não é alterado aqui (o 401 da renovação já publicou expiração).
        """
        with correlation_scope("refresh"):
            generation = self._generation
            await self._api.refresh_access()
            user = await self._api.get_current_user()
            if generation == self._generation:
                self._install(user, trigger="refresh")
            else:
                logger.info("stale_refresh_dropped")
            return user

    def update_session(self, session: UserSession) -> None:
        """Substitui a identidade após edição de perfil.

        Raises:
            RuntimeError: Se não houver sessão autenticada.
        """
        if self._session is None:
            raise RuntimeError("update_session exige sessão autenticada")
        self._install(session, trigger="profile_update")

    # ── internos ─────────────────────────────────────────────────────────

    def _install(self, session: UserSession | None, trigger: str) -> None:
        """Único ponto de mutação do AuthState."""
        self._session = session
        target = AuthStatus.AUTHENTICATED if session is not None else AuthStatus.ANONYMOUS
        previous = self._fsm.current_state
        if target == previous:
            if target is AuthStatus.AUTHENTICATED and trigger in ("login", "register"):
                # Nova credencial com sessão ativa: reinicia o ciclo de renovação
                self._generation += 1
                logger.info("auth_session_reissued", extra={"trigger": trigger})
                self._scheduler.start()
                self._visibility.activate()
            return

        result = self._fsm.transition(
            target,
            trigger,
            metadata={"user_id": session.id} if session is not None else {},
        )
        if not result.success:
            logger.error(
                "auth_transition_rejected",
                extra={"reason": result.error_reason, "trigger": trigger},
            )
            return

        self._generation += 1
        logger.info("auth_state_changed", extra=result.transition.to_log_dict())

        if target is AuthStatus.AUTHENTICATED:
            self._scheduler.start()
            self._visibility.activate()
        elif previous is AuthStatus.AUTHENTICATED:
            self._scheduler.stop()
            self._visibility.deactivate()

    def _report_failure(
        self, operation: str, exc: SessionClientError, fallback: str
    ) -> None:
        message = describe_error(exc, fallback)
        self._last_error = message
        logger.warning(
            "auth_operation_failed",
            extra={
                "operation": operation,
                "error_type": type(exc).__name__,
                "status_code": getattr(exc, "status_code", None),
            },
        )
        self._notifier.error(message)

    def _on_session_expired(self, signal: SessionSignal) -> None:
        if self._session is None:
            return
        logger.warning("session_expired_by_transport")
        self._install(None, trigger="credentials_expired")
        self._event_bus.publish(SessionSignal.STATE_CHANGED)
        self._notifier.error(SESSION_EXPIRED_MESSAGE)
