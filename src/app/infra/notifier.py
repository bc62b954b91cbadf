"""Notifier padrão: mensagens ao usuário viram logs estruturados."""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


class LoggingNotifier:
    """Implementa NotifierProtocol registrando as mensagens em log."""

    def success(self, message: str) -> None:
        logger.info("user_notice", extra={"kind": "success", "notice": message})

    def error(self, message: str) -> None:
        logger.warning("user_notice", extra={"kind": "error", "notice": message})
