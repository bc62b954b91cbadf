"""Parsing e classificação de erros do backend.

O backend devolve falhas como ``{"detail": ...}`` onde detail pode ser:
- string: mensagem pronta
- lista: erros por campo (``[{"loc": [...], "msg": "..."}]``)
- objeto: ``{"msg": ...}`` ou ``{"message": ...}``
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from utils.errors import HttpError, NetworkError, SessionClientError, ValidationError

if TYPE_CHECKING:
    import httpx

DEFAULT_FIELD_MESSAGE = "Validation error"


def _item_message(item: Any) -> str:
    if isinstance(item, dict):
        return str(item.get("msg") or item.get("message") or DEFAULT_FIELD_MESSAGE)
    if isinstance(item, str) and item:
        return item
    return DEFAULT_FIELD_MESSAGE


def parse_error_response(response: httpx.Response) -> HttpError:
    """Converte resposta não-2xx no erro da taxonomia.

    Args:
        response: Resposta com status >= 400

    Returns:
        ValidationError se detail for lista; HttpError caso contrário.
    """
    try:
        body = response.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        body = None

    detail = body.get("detail") if isinstance(body, dict) else None
    message = f"http_{response.status_code}"

    if isinstance(detail, list):
        return ValidationError(
            message,
            status_code=response.status_code,
            detail=detail,
            messages=[_item_message(item) for item in detail],
        )
    return HttpError(message, status_code=response.status_code, detail=detail)


def describe_error(error: SessionClientError, fallback: str) -> str:
    """Reduz uma falha a uma única mensagem para o usuário.

    Args:
        error: Falha capturada do cliente
        fallback: Mensagem usada quando não há detail aproveitável

    Returns:
        Mensagem pronta para exibição.
    """
    if isinstance(error, NetworkError):
        return fallback
    if isinstance(error, ValidationError) and error.messages:
        return ", ".join(error.messages)
    if not isinstance(error, HttpError):
        return fallback

    detail = error.detail
    if isinstance(detail, str) and detail:
        return detail
    if isinstance(detail, list):
        return ", ".join(_item_message(item) for item in detail) or fallback
    if isinstance(detail, dict):
        return str(detail.get("msg") or detail.get("message") or fallback)
    return fallback
