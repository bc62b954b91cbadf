"""Modelos de payload do backend da cafeteria.

Tokens presentes em respostas nunca são modelados: as credenciais
vivem apenas no cookie jar do cliente HTTP.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class UserSession(BaseModel):
    """Identidade autenticada retornada por /users/me e /users/log-in."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: int
    name: str | None = None
    surname: str | None = None
    phone_number: str
    created_at: datetime


class RegisterData(BaseModel):
    """Dados de cadastro enviados para /users/register."""

    model_config = ConfigDict(extra="forbid")

    username: str = Field(..., min_length=1)
    name: str | None = None
    surname: str | None = None
    phone_number: str = Field(..., min_length=1)
    provider: str
    provider_id: str


class RegistrationResult(BaseModel):
    """Resposta de /users/register (tokens ignorados)."""

    model_config = ConfigDict(extra="ignore")

    user: UserSession
