"""Protocolos e contratos do core da aplicação."""

from .http_client import AuthApiProtocol
from .notifier import NotifierProtocol
from .session_manager import SessionControlProtocol

__all__ = [
    "AuthApiProtocol",
    "NotifierProtocol",
    "SessionControlProtocol",
]
