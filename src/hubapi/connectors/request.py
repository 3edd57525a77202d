"""URL and request construction.

``build_request`` is the single place where a URL is produced; every
HTTP verb on ``Connection`` goes through it.

Query order: ``hapikey`` first, then ``portal_id`` (when not consumed by
the path), then caller params in insertion order minus the ones the path
consumed. Injected values replace caller values of the same name.
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, Mapping, Optional

from .auth import PORTAL_PLACEHOLDER, select_auth
from .params import generate_query
from .paths import resolve_path

if TYPE_CHECKING:
    from hubapi.config import HubSpotConfig


@dataclass(frozen=True)
class RequestOptions:
    """Per-request overrides."""

    base_url: Optional[str] = None
    disable_api_key_auth: bool = False


@dataclass
class RequestDescriptor:
    """Fully resolved request, built fresh for each call."""

    method: str
    url: str
    headers: Dict[str, str] = field(default_factory=dict)
    body: Any = None


def build_request(
    config: "HubSpotConfig",
    method: str,
    template: str,
    params: Optional[Mapping[str, Any]] = None,
    body: Any = None,
    options: Optional[RequestOptions] = None,
) -> RequestDescriptor:
    """Resolve template + params + config into a request.

    Args:
        config: Configuration to read
        method: HTTP method
        template: Path template with ``:name`` placeholders
        params: Path and query params; the caller's mapping is not modified
        body: Request body, passed through untouched
        options: Base URL override / key-auth opt-out

    Raises:
        ConfigurationError: Missing or contradictory auth/portal settings
        MissingInterpolation: Unresolved placeholder left in the path
        InvalidParameter: Malformed range value
    """
    options = options or RequestOptions()

    selection = select_auth(
        config, template, disable_api_key=options.disable_api_key_auth
    )
    selection.raise_for_error()

    merged: Dict[str, Any] = dict(selection.query_params)
    if selection.portal_id is not None:
        merged[PORTAL_PLACEHOLDER] = selection.portal_id
    for key, value in (params or {}).items():
        merged.setdefault(key, value)

    path, remaining = resolve_path(template, merged)
    query = generate_query(remaining)

    base_url = options.base_url or config.base_url
    url = base_url + path
    if query:
        url += ("&" if "?" in path else "?") + query

    return RequestDescriptor(
        method=method.upper(),
        url=url,
        headers=selection.headers,
        body=body,
    )


def build_url(
    config: "HubSpotConfig",
    template: str,
    params: Optional[Mapping[str, Any]] = None,
    options: Optional[RequestOptions] = None,
) -> str:
    """Absolute URL for ``template`` + ``params``."""
    return build_request(config, "GET", template, params, options=options).url
