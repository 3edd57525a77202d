"""Tests for URL/request construction.

Tests cover:
- Query ordering (hapikey, portal_id, caller params)
- Path interpolation through the builder
- OAuth2 vs API-key selection
- Base URL override and key-auth opt-out
- No mutation of caller params, repeatable output
"""

import pytest

from hubapi.config import HubSpotConfig
from hubapi.connectors import (
    ConfigurationError,
    MissingInterpolation,
    RequestOptions,
    Span,
    build_request,
    build_url,
)

BASE = "https://api.hubapi.com"


@pytest.fixture
def demo_config() -> HubSpotConfig:
    return HubSpotConfig(api_key="demo")


class TestBuildUrl:
    """Tests for build_url()."""

    def test_api_key_first_then_params(self, demo_config):
        url = build_url(demo_config, "/owners/v2/owners", {"includeInactive": False})
        assert url == f"{BASE}/owners/v2/owners?hapikey=demo&includeInactive=false"

    def test_interpolated_param_not_in_query(self, demo_config):
        url = build_url(demo_config, "/owners/v2/owners/:owner_id", {"owner_id": 42})
        assert url == f"{BASE}/owners/v2/owners/42?hapikey=demo"
        assert "owner_id" not in url

    def test_portal_id_interpolated(self):
        config = HubSpotConfig(api_key="demo", portal_id="62515")
        url = build_url(config, "/contacts/v1/:portal_id/lists", {"count": 2})
        assert url == f"{BASE}/contacts/v1/62515/lists?hapikey=demo&count=2"

    def test_portal_id_missing(self, demo_config):
        with pytest.raises(ConfigurationError):
            build_url(demo_config, "/contacts/v1/:portal_id/lists")

    def test_existing_query_marker(self, demo_config):
        url = build_url(demo_config, "/deals/v1/deal/recent/modified?since=1", {"count": 2})
        assert url == f"{BASE}/deals/v1/deal/recent/modified?since=1&hapikey=demo&count=2"

    def test_no_separator_without_query(self):
        config = HubSpotConfig(use_oauth2=True, oauth2_access_token="T")
        assert build_url(config, "/owners/v2/owners") == f"{BASE}/owners/v2/owners"

    def test_injected_key_wins(self, demo_config):
        url = build_url(demo_config, "/x", {"hapikey": "other", "a": 1})
        assert url == f"{BASE}/x?hapikey=demo&a=1"

    def test_custom_base_url(self):
        config = HubSpotConfig(api_key="demo", base_url="http://localhost:8080")
        assert build_url(config, "/x") == "http://localhost:8080/x?hapikey=demo"

    def test_base_url_override(self, demo_config):
        options = RequestOptions(base_url="https://forms.hubspot.com")
        url = build_url(demo_config, "/x", options=options)
        assert url == "https://forms.hubspot.com/x?hapikey=demo"

    def test_disable_api_key_auth(self, demo_config):
        options = RequestOptions(disable_api_key_auth=True)
        assert build_url(demo_config, "/x", {"a": 1}, options) == f"{BASE}/x?a=1"

    def test_range_and_batch_params(self, demo_config):
        url = build_url(
            demo_config,
            "/engagements",
            {"time_range": Span(1, 2), "batch_company_id": 5},
        )
        assert url == f"{BASE}/engagements?hapikey=demo&time_range=1&time_range=2&companyId=5"

    def test_unresolved_placeholder(self, demo_config):
        with pytest.raises(MissingInterpolation):
            build_url(demo_config, "/deals/v1/deal/:deal_id")

    def test_missing_api_key(self):
        with pytest.raises(ConfigurationError):
            build_url(HubSpotConfig(), "/owners/v2/owners")

    def test_oauth2_with_api_key(self):
        config = HubSpotConfig(use_oauth2=True, oauth2_access_token="T", api_key="demo")
        with pytest.raises(ConfigurationError):
            build_url(config, "/owners/v2/owners")

    def test_config_checked_before_interpolation(self):
        """Auth preflight runs first, even when the path is also broken."""
        with pytest.raises(ConfigurationError):
            build_url(HubSpotConfig(), "/deals/:deal_id")


class TestBuildRequest:
    """Tests for build_request()."""

    def test_oauth2_header_and_no_key(self):
        config = HubSpotConfig(use_oauth2=True, oauth2_access_token="T")
        request = build_request(config, "get", "/owners/v2/owners", {"includeInactive": True})
        assert request.method == "GET"
        assert request.headers == {"Authorization": "Bearer T"}
        assert "hapikey" not in request.url
        assert request.url == f"{BASE}/owners/v2/owners?includeInactive=true"

    def test_api_key_has_no_auth_header(self, demo_config):
        request = build_request(demo_config, "POST", "/x", body={"a": 1})
        assert request.headers == {}
        assert request.body == {"a": 1}

    def test_caller_params_not_mutated(self, demo_config):
        params = {"owner_id": 42, "includeInactive": False}
        build_request(demo_config, "GET", "/owners/v2/owners/:owner_id", params)
        assert params == {"owner_id": 42, "includeInactive": False}

    def test_repeatable(self, demo_config):
        params = {"owner_id": 42, "property": ["a", "b"], "time_range": Span(1, 2)}
        first = build_request(demo_config, "GET", "/owners/:owner_id", params)
        second = build_request(demo_config, "GET", "/owners/:owner_id", params)
        assert first == second
