"""Sessão autenticada: estado, renovação e revalidação.

- manager: SessionManager (dono do AuthState)
- refresh_scheduler: renovação periódica com single-flight e circuit breaker
- visibility: revalidação ao voltar para o primeiro plano
"""

from app.sessions.manager import SessionManager
from app.sessions.models import AuthState
from app.sessions.refresh_scheduler import RefreshScheduler
from app.sessions.visibility import VisibilityMonitor

__all__ = [
    "AuthState",
    "RefreshScheduler",
    "SessionManager",
    "VisibilityMonitor",
]
