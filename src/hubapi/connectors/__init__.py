"""Request construction, authentication and transport for the HubSpot API.

Key components:
- params: query-string encoding (ranges, timestamps, batch keys)
- paths: ``:name`` placeholder interpolation
- auth: per-request API-key / OAuth2 selection
- request: URL builder shared by every HTTP verb
- http_client: httpx transport and response classification
"""

from .auth import AuthSelection, oauth2_usage_valid, select_auth
from .base import (
    API_KEY_PARAM,
    DEFAULT_POLICY,
    ApiError,
    ApiKeyAuth,
    AuthenticationError,
    AuthStrategy,
    AuthType,
    ConfigurationError,
    ConnectorError,
    ContactExistsError,
    InvalidParameter,
    MissingInterpolation,
    NoAuth,
    OAuthTokenAuth,
    RequestError,
    RequestPolicy,
)
from .http_client import Connection, FormsConnection, default_connection
from .params import Span, generate_query
from .paths import resolve_path
from .request import RequestDescriptor, RequestOptions, build_request, build_url

__all__ = [
    # Auth
    "AuthType",
    "AuthStrategy",
    "NoAuth",
    "ApiKeyAuth",
    "OAuthTokenAuth",
    "AuthSelection",
    "select_auth",
    "oauth2_usage_valid",
    "API_KEY_PARAM",
    # Policy
    "RequestPolicy",
    "DEFAULT_POLICY",
    # Errors
    "ConnectorError",
    "ConfigurationError",
    "MissingInterpolation",
    "InvalidParameter",
    "RequestError",
    "ContactExistsError",
    "AuthenticationError",
    "ApiError",
    # Building
    "Span",
    "generate_query",
    "resolve_path",
    "RequestOptions",
    "RequestDescriptor",
    "build_request",
    "build_url",
    # Transport
    "Connection",
    "FormsConnection",
    "default_connection",
]
