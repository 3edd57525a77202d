"""Core connector abstractions for the HubSpot adapter.

Defines the pieces every request passes through:
- AuthStrategy: API-key query auth or OAuth2 bearer header
- RequestPolicy: timeouts and default headers for the transport
- ConnectorError hierarchy: typed exceptions raised to callers

Nothing here performs network I/O.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional

# =============================================================================
# Authentication Strategies
# =============================================================================

API_KEY_PARAM = "hapikey"


class AuthType(str, Enum):
    """Authentication mode selected for a request."""

    UNCONFIGURED = "unconfigured"
    API_KEY = "api_key"
    OAUTH2 = "oauth2"


@dataclass
class AuthStrategy:
    """Base authentication strategy (data holder).

    Strategies contribute query params and/or headers to a request.
    """

    auth_type: AuthType = AuthType.UNCONFIGURED

    def is_configured(self) -> bool:
        """Check if authentication is properly configured."""
        return True

    def get_headers(self) -> Dict[str, str]:
        """Get authentication headers for requests."""
        return {}

    def get_query_params(self) -> Dict[str, str]:
        """Get authentication query params for requests."""
        return {}


@dataclass
class NoAuth(AuthStrategy):
    """No credentials attached."""

    auth_type: AuthType = field(default=AuthType.UNCONFIGURED, init=False)


@dataclass
class ApiKeyAuth(AuthStrategy):
    """API key authentication, sent as the ``hapikey`` query param."""

    auth_type: AuthType = field(default=AuthType.API_KEY, init=False)
    api_key: str = ""
    param_name: str = API_KEY_PARAM

    def is_configured(self) -> bool:
        """Check if API key is set."""
        return bool(self.api_key)

    def get_query_params(self) -> Dict[str, str]:
        if not self.api_key:
            return {}
        return {self.param_name: self.api_key}


@dataclass
class OAuthTokenAuth(AuthStrategy):
    """OAuth2 access token, sent as ``Authorization: Bearer <token>``."""

    auth_type: AuthType = field(default=AuthType.OAUTH2, init=False)
    access_token: str = ""
    token_type: str = "Bearer"

    def is_configured(self) -> bool:
        """Check if token is set."""
        return bool(self.access_token)

    def get_headers(self) -> Dict[str, str]:
        """Get authorization header."""
        if not self.access_token:
            return {}
        return {"Authorization": f"{self.token_type} {self.access_token}"}


# =============================================================================
# Request Policy
# =============================================================================


@dataclass
class RequestPolicy:
    """Transport settings: timeouts and default headers.

    No retries or rate limiting; each call is a single attempt.
    """

    connect_timeout: float = 10.0  # seconds
    read_timeout: float = 30.0  # seconds
    pool_timeout: float = 60.0  # seconds

    user_agent: str = "hubapi/1.0"
    default_headers: Dict[str, str] = field(default_factory=dict)


DEFAULT_POLICY = RequestPolicy()


# =============================================================================
# Connector Error Hierarchy
# =============================================================================


class ConnectorError(Exception):
    """Base exception for adapter errors."""

    def __init__(self, message: str = "", details: Optional[Dict[str, Any]] = None):
        self.details = details or {}
        super().__init__(message)


class ConfigurationError(ConnectorError):
    """Missing or contradictory configuration, detected before any network I/O."""

    pass


class MissingInterpolation(ConnectorError):
    """A path placeholder was left unresolved after interpolation."""

    pass


class InvalidParameter(ConnectorError):
    """A parameter value does not fit its key (e.g. a non-range under a range key)."""

    def __init__(self, message: str, key: str = "", value: Any = None):
        super().__init__(message, {"key": key, "value": value})
        self.key = key
        self.value = value


class RequestError(ConnectorError):
    """Non-success HTTP outcome or transport failure.

    Carries the raw response (``None`` for transport failures).
    """

    def __init__(self, response: Any = None, message: Optional[str] = None):
        self.response = response
        self.status_code: Optional[int] = getattr(response, "status_code", None)
        self.body: str = getattr(response, "text", "") if response is not None else ""
        prefix = f"{message}\n" if message else ""
        super().__init__(
            f"{prefix}Response body: {self.body}",
            {"status_code": self.status_code},
        )


class ContactExistsError(RequestError):
    """Contact creation rejected because the contact already exists."""

    pass


class AuthenticationError(ConnectorError):
    """Failure whose body carries an engagement/message/status triple."""

    def __init__(self, response: Any):
        parsed = response.json()
        self.response = response
        self.engagement = parsed.get("engagement")
        self.message = parsed.get("message")
        self.status = parsed.get("status")
        super().__init__(
            f"status: {self.status} message: {self.message} engagement_info: {self.engagement}",
            {"status_code": getattr(response, "status_code", None)},
        )


class ApiError(ConnectorError):
    """Domain-level semantic failure surfaced by callers."""

    pass
