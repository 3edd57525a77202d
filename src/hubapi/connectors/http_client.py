"""HTTP transport and response classification.

Wraps httpx. Each verb builds its URL through ``build_request``, issues
exactly one request (no retries), logs url/body/status/response to the
configured logger, and then either returns the payload or raises:

- 2xx -> parsed JSON (``None`` for an empty body), or the raw
  ``httpx.Response`` for DELETE and ``no_parse`` POSTs
- body with engagement/message/status -> AuthenticationError
- any other failure, including transport errors -> RequestError
"""

import json
from typing import Any, Dict, Mapping, Optional
from urllib.parse import urlencode

import httpx

from hubapi.config import FORMS_BASE_URL, HubSpotConfig
from hubapi.config import config as default_config

from .base import (
    DEFAULT_POLICY,
    AuthenticationError,
    ConnectorError,
    RequestError,
    RequestPolicy,
)
from .request import RequestDescriptor, RequestOptions, build_request

AUTH_ERROR_KEYS = frozenset({"engagement", "message", "status"})

JSON_HEADERS = {"Content-Type": "application/json"}
FORM_HEADERS = {"Content-Type": "application/x-www-form-urlencoded"}


class Connection:
    """Synchronous HubSpot connection.

    Holds an explicit ``HubSpotConfig`` or, when none is given, reads the
    process-wide default at call time. Safe to share across threads only
    while nobody reconfigures it.
    """

    def __init__(
        self,
        config: Optional[HubSpotConfig] = None,
        policy: Optional[RequestPolicy] = None,
        client: Optional[httpx.Client] = None,
    ):
        """Initialize the connection.

        Args:
            config: Configuration to use (default: process-wide instance)
            policy: Transport policy (timeouts, user agent)
            client: Pre-built httpx client, e.g. with a mock transport
        """
        self._config = config
        self.policy = policy or DEFAULT_POLICY
        self._client = client or httpx.Client(
            timeout=httpx.Timeout(
                connect=self.policy.connect_timeout,
                read=self.policy.read_timeout,
                write=self.policy.read_timeout,
                pool=self.policy.pool_timeout,
            )
        )

    @property
    def config(self) -> HubSpotConfig:
        return self._config if self._config is not None else default_config

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "Connection":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    # -------------------------------------------------------------------------
    # Transport
    # -------------------------------------------------------------------------

    def _build_headers(self, extra_headers: Optional[Dict[str, str]] = None) -> Dict[str, str]:
        """Build request headers including auth and defaults."""
        headers = {"User-Agent": self.policy.user_agent}
        headers.update(self.policy.default_headers)
        if extra_headers:
            headers.update(extra_headers)
        return headers

    def _log_request_and_response(
        self,
        url: str,
        body: Any,
        status: Any,
        response_body: str,
    ) -> None:
        self.config.logger.info(
            "HubSpot: %s.\nBody: %s.\nResponse: %s %s", url, body, status, response_body
        )

    def _send(
        self,
        descriptor: RequestDescriptor,
        *,
        content: Optional[str] = None,
        headers: Optional[Dict[str, str]] = None,
        follow_redirects: bool = False,
    ) -> httpx.Response:
        """Issue one request and log it, whatever the outcome."""
        request_headers = self._build_headers({**descriptor.headers, **(headers or {})})
        try:
            response = self._client.request(
                descriptor.method,
                descriptor.url,
                content=content,
                headers=request_headers,
                follow_redirects=follow_redirects,
            )
        except httpx.HTTPError as e:
            self._log_request_and_response(descriptor.url, content, "-", str(e))
            raise RequestError(
                None, f"{descriptor.method} {descriptor.url} failed: {e}"
            ) from e

        self._log_request_and_response(
            descriptor.url, content, response.status_code, response.text
        )
        return response

    # -------------------------------------------------------------------------
    # Classification
    # -------------------------------------------------------------------------

    @staticmethod
    def _parse(response: httpx.Response) -> Any:
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise RequestError(response, "Response body is not valid JSON") from e

    @staticmethod
    def _map_error(response: httpx.Response) -> ConnectorError:
        """Map a non-success response to the matching error type."""
        try:
            parsed = response.json()
        except ValueError:
            parsed = None

        if isinstance(parsed, dict) and AUTH_ERROR_KEYS <= parsed.keys():
            return AuthenticationError(response)
        return RequestError(response)

    def _classify(self, response: httpx.Response, parse: bool = True) -> Any:
        if not response.is_success:
            raise self._map_error(response)
        return self._parse(response) if parse else response

    # -------------------------------------------------------------------------
    # Verbs
    # -------------------------------------------------------------------------

    def _request(
        self,
        method: str,
        template: str,
        params: Optional[Mapping[str, Any]] = None,
        body: Any = None,
    ) -> httpx.Response:
        descriptor = build_request(self.config, method, template, params, body)
        content = json.dumps(body) if body is not None else None
        headers = JSON_HEADERS if content is not None else None
        return self._send(descriptor, content=content, headers=headers)

    def get_json(self, template: str, params: Optional[Mapping[str, Any]] = None) -> Any:
        """GET ``template`` and return the parsed JSON body."""
        return self._classify(self._request("GET", template, params))

    def post_json(
        self,
        template: str,
        params: Optional[Mapping[str, Any]] = None,
        body: Any = None,
        no_parse: bool = False,
    ) -> Any:
        """POST a JSON body.

        Args:
            template: Path template
            params: Path and query params
            body: JSON-serializable body
            no_parse: Return the raw response instead of parsed JSON
        """
        response = self._request("POST", template, params, body)
        return self._classify(response, parse=not no_parse)

    def put_json(
        self,
        template: str,
        params: Optional[Mapping[str, Any]] = None,
        body: Any = None,
    ) -> Any:
        """PUT a JSON body and return the parsed JSON response."""
        return self._classify(self._request("PUT", template, params, body))

    def delete_json(
        self, template: str, params: Optional[Mapping[str, Any]] = None
    ) -> httpx.Response:
        """DELETE ``template``; returns the raw response on success."""
        return self._classify(self._request("DELETE", template, params), parse=False)


class FormsConnection(Connection):
    """Connection to the unauthenticated form-submission host.

    No credentials are sent; redirects are followed and the raw response
    is returned without classification.
    """

    def submit(
        self,
        template: str,
        params: Optional[Mapping[str, Any]] = None,
        body: Any = None,
    ) -> httpx.Response:
        """POST a form-encoded body to the forms host."""
        descriptor = build_request(
            self.config,
            "POST",
            template,
            params,
            body,
            RequestOptions(base_url=FORMS_BASE_URL, disable_api_key_auth=True),
        )
        descriptor.headers = {}
        if isinstance(body, Mapping):
            content: Optional[str] = urlencode(body, doseq=True)
        else:
            content = body
        return self._send(
            descriptor, content=content, headers=FORM_HEADERS, follow_redirects=True
        )


_default_connection: Optional[Connection] = None


def default_connection() -> Connection:
    """Shared connection bound to the process-wide config."""
    global _default_connection
    if _default_connection is None:
        _default_connection = Connection()
    return _default_connection
