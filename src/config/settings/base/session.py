"""Settings de renovação de credenciais.

O intervalo de renovação é derivado do tempo de vida do access token
menos a margem de antecedência, com piso para evitar polling agressivo.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

MS_PER_MINUTE = 60 * 1000
DEFAULT_MIN_INTERVAL_MS = 60 * 1000
MIN_OVERRIDE_INTERVAL_MS = 1000


@dataclass(frozen=True)
class TokenRefreshSettings:
    """Configurações do agendador de renovação.

    Attributes:
        access_token_lifetime_minutes: Tempo de vida do access token
        refresh_before_expiry_minutes: Antecedência da renovação
        refresh_interval_minutes: Intervalo explícito (0 = derivar)
        failure_threshold: Falhas consecutivas até abrir o circuito
        min_interval_ms: Piso do intervalo derivado
    """

    access_token_lifetime_minutes: float = 15
    refresh_before_expiry_minutes: float = 1
    refresh_interval_minutes: float = 0
    failure_threshold: int = 3
    min_interval_ms: int = DEFAULT_MIN_INTERVAL_MS

    @property
    def interval_ms(self) -> int:
        """Intervalo efetivo entre renovações, em milissegundos."""
        return compute_refresh_interval_ms(self)

    def validate(self) -> list[str]:
        """Valida configurações de renovação.

        Returns:
            Lista de erros de validação.
        """
        errors: list[str] = []

        if self.access_token_lifetime_minutes <= 0:
            errors.append("ACCESS_TOKEN_LIFETIME deve ser > 0")

        if self.refresh_before_expiry_minutes < 0:
            errors.append("TOKEN_REFRESH_BEFORE_EXPIRY deve ser >= 0")

        if self.refresh_interval_minutes < 0:
            errors.append("TOKEN_REFRESH_INTERVAL deve ser >= 0")
        elif self.refresh_interval_minutes > 0 and self.interval_ms < MIN_OVERRIDE_INTERVAL_MS:
            errors.append(
                f"TOKEN_REFRESH_INTERVAL deve resultar em >= {MIN_OVERRIDE_INTERVAL_MS} ms"
            )

        if self.failure_threshold < 1:
            errors.append("TOKEN_REFRESH_FAILURE_THRESHOLD deve ser >= 1")

        if self.min_interval_ms <= 0:
            errors.append("min_interval_ms deve ser > 0")

        return errors


def compute_refresh_interval_ms(settings: TokenRefreshSettings) -> int:
    """Calcula o intervalo de renovação em milissegundos.

    Override explícito (> 0) tem precedência; caso contrário usa
    lifetime - buffer, com piso em ``min_interval_ms``.

    Exemplo:
        lifetime=15, buffer=1, sem override -> 840000
    """
    if settings.refresh_interval_minutes > 0:
        return int(settings.refresh_interval_minutes * MS_PER_MINUTE)

    lifetime_ms = settings.access_token_lifetime_minutes * MS_PER_MINUTE
    buffer_ms = settings.refresh_before_expiry_minutes * MS_PER_MINUTE
    return int(max(lifetime_ms - buffer_ms, settings.min_interval_ms))


def _env_number(key: str, fallback: float) -> float:
    """Lê número do ambiente; valor ausente ou inválido usa o fallback."""
    raw = os.getenv(key)
    if not raw:
        return fallback
    try:
        return float(raw)
    except ValueError:
        return fallback


def _load_token_refresh_from_env() -> TokenRefreshSettings:
    """Carrega TokenRefreshSettings de variáveis de ambiente."""
    return TokenRefreshSettings(
        access_token_lifetime_minutes=_env_number("ACCESS_TOKEN_LIFETIME", 15),
        refresh_before_expiry_minutes=_env_number("TOKEN_REFRESH_BEFORE_EXPIRY", 1),
        refresh_interval_minutes=_env_number("TOKEN_REFRESH_INTERVAL", 0),
        failure_threshold=int(_env_number("TOKEN_REFRESH_FAILURE_THRESHOLD", 3)),
    )


@lru_cache(maxsize=1)
def get_token_refresh_settings() -> TokenRefreshSettings:
    """Retorna instância cacheada de TokenRefreshSettings."""
    return _load_token_refresh_from_env()
