"""Per-request authentication selection.

``select_auth`` is a preflight step: it never raises, it returns an
``AuthSelection`` carrying either the credentials to attach or the
``ConfigurationError`` that must stop the request before any I/O.

Rules:
- ``use_oauth2`` set: valid only with an access token AND no API key.
  Valid -> bearer header, never the ``hapikey`` param.
- ``use_oauth2`` unset: API key required (even for requests that opt
  out of key auth); attached as ``hapikey`` unless the request opts out.
- Template references ``:portal_id``: portal id required.
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Dict, Optional

from .base import (
    ApiKeyAuth,
    AuthStrategy,
    AuthType,
    ConfigurationError,
    NoAuth,
    OAuthTokenAuth,
)
from .paths import references

if TYPE_CHECKING:
    from hubapi.config import HubSpotConfig

PORTAL_PLACEHOLDER = "portal_id"


@dataclass
class AuthSelection:
    """Outcome of the authentication preflight for one request."""

    mode: AuthType
    strategy: AuthStrategy = field(default_factory=NoAuth)
    error: Optional[ConfigurationError] = None
    portal_id: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def headers(self) -> Dict[str, str]:
        return self.strategy.get_headers()

    @property
    def query_params(self) -> Dict[str, str]:
        return self.strategy.get_query_params()

    def raise_for_error(self) -> None:
        if self.error is not None:
            raise self.error


def oauth2_usage_valid(config: "HubSpotConfig") -> bool:
    """Token present and no API key configured alongside it."""
    token = OAuthTokenAuth(access_token=config.oauth2_access_token or "")
    return token.is_configured() and not config.api_key


def select_auth(
    config: "HubSpotConfig",
    template: str = "",
    *,
    disable_api_key: bool = False,
) -> AuthSelection:
    """Decide which credentials a request carries.

    Args:
        config: Configuration to read (not modified)
        template: Path template of the request, checked for ``:portal_id``
        disable_api_key: Request opts out of key-based auth

    Returns:
        AuthSelection; check ``.ok`` before issuing the request
    """
    if config.use_oauth2:
        if not oauth2_usage_valid(config):
            return AuthSelection(
                mode=AuthType.OAUTH2,
                error=ConfigurationError(
                    "OAuth2 access token must be provided when using OAuth2"
                    " and no API key may be configured alongside it"
                ),
            )
        selection = AuthSelection(
            mode=AuthType.OAUTH2,
            strategy=OAuthTokenAuth(access_token=config.oauth2_access_token or ""),
        )
    else:
        try:
            config.ensure("api_key")
        except ConfigurationError as e:
            return AuthSelection(mode=AuthType.UNCONFIGURED, error=e)
        strategy: AuthStrategy = (
            NoAuth() if disable_api_key else ApiKeyAuth(api_key=config.api_key or "")
        )
        selection = AuthSelection(mode=AuthType.API_KEY, strategy=strategy)

    if references(template, PORTAL_PLACEHOLDER):
        try:
            config.ensure("portal_id")
        except ConfigurationError as e:
            selection.error = e
        else:
            selection.portal_id = str(config.portal_id)

    return selection
