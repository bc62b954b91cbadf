"""Settings do backend da cafeteria.

Configurações do canal HTTP autenticado por cookies.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

from config.settings.base.core import parse_bool

DEFAULT_API_BASE_URL: str = "http://localhost:8000/api/v1"


@dataclass(frozen=True)
class ApiSettings:
    """Configurações do backend.

    Attributes:
        base_url: URL base da API (ex: http://localhost:8000/api/v1)
        request_timeout_seconds: Timeout para requisições HTTP
        verify_ssl: Verificação de certificado TLS
    """

    base_url: str = DEFAULT_API_BASE_URL
    request_timeout_seconds: float = 30.0
    verify_ssl: bool = True

    def validate(self) -> list[str]:
        """Valida configurações do backend.

        Returns:
            Lista de erros (vazia = OK).
        """
        errors: list[str] = []

        if not self.base_url.startswith(("http://", "https://")):
            errors.append(f"API_BASE_URL inválida: {self.base_url!r}")

        if self.request_timeout_seconds <= 0:
            errors.append("API_TIMEOUT_SECONDS deve ser > 0")

        return errors


def _load_api_from_env() -> ApiSettings:
    """Carrega ApiSettings de variáveis de ambiente."""
    try:
        timeout = float(os.getenv("API_TIMEOUT_SECONDS", "30"))
    except ValueError:
        timeout = 30.0
    return ApiSettings(
        base_url=os.getenv("API_BASE_URL", DEFAULT_API_BASE_URL).rstrip("/"),
        request_timeout_seconds=timeout,
        verify_ssl=parse_bool(os.getenv("API_VERIFY_SSL"), True),
    )


@lru_cache(maxsize=1)
def get_api_settings() -> ApiSettings:
    """Retorna instância cacheada de ApiSettings."""
    return _load_api_from_env()
