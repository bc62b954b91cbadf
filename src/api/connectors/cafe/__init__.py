"""Conector HTTP do backend da cafeteria (canal com cookies)."""

from api.connectors.cafe.auth_client import (
    CURRENT_USER_PATH,
    LOGIN_PATH,
    LOGOUT_PATH_TEMPLATE,
    REGISTER_PATH,
    AuthApiClient,
    create_auth_api_client,
)
from api.connectors.cafe.error_detail import describe_error, parse_error_response
from api.connectors.cafe.http_base import (
    RENEWAL_PATH,
    ApiRequest,
    HttpClient,
    HttpClientConfig,
)
from api.connectors.cafe.models import RegisterData, RegistrationResult, UserSession

__all__ = [
    "CURRENT_USER_PATH",
    "LOGIN_PATH",
    "LOGOUT_PATH_TEMPLATE",
    "REGISTER_PATH",
    "RENEWAL_PATH",
    "ApiRequest",
    "AuthApiClient",
    "HttpClient",
    "HttpClientConfig",
    "RegisterData",
    "RegistrationResult",
    "UserSession",
    "create_auth_api_client",
    "describe_error",
    "parse_error_response",
]
