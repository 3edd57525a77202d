"""Tests for per-request authentication selection."""

import pytest

from hubapi.config import HubSpotConfig
from hubapi.connectors import (
    ApiKeyAuth,
    AuthType,
    ConfigurationError,
    NoAuth,
    OAuthTokenAuth,
    oauth2_usage_valid,
    select_auth,
)


class TestAuthStrategies:
    """Tests for the strategy data holders."""

    def test_api_key_query_param(self):
        auth = ApiKeyAuth(api_key="demo")
        assert auth.auth_type == AuthType.API_KEY
        assert auth.get_query_params() == {"hapikey": "demo"}
        assert auth.get_headers() == {}

    def test_api_key_unset(self):
        auth = ApiKeyAuth()
        assert auth.is_configured() is False
        assert auth.get_query_params() == {}

    def test_oauth_header(self):
        auth = OAuthTokenAuth(access_token="T")
        assert auth.auth_type == AuthType.OAUTH2
        assert auth.get_headers() == {"Authorization": "Bearer T"}
        assert auth.get_query_params() == {}

    def test_no_auth(self):
        auth = NoAuth()
        assert auth.get_headers() == {}
        assert auth.get_query_params() == {}


class TestOAuth2UsageValid:
    """Tests for oauth2_usage_valid()."""

    def test_token_only(self):
        assert oauth2_usage_valid(HubSpotConfig(use_oauth2=True, oauth2_access_token="T"))

    def test_token_and_key(self):
        config = HubSpotConfig(use_oauth2=True, oauth2_access_token="T", api_key="k")
        assert not oauth2_usage_valid(config)

    def test_empty_token(self):
        assert not oauth2_usage_valid(HubSpotConfig(use_oauth2=True, oauth2_access_token=""))


class TestSelectAuth:
    """Tests for select_auth()."""

    def test_api_key_mode(self):
        selection = select_auth(HubSpotConfig(api_key="demo"), "/owners/v2/owners")
        assert selection.ok
        assert selection.mode == AuthType.API_KEY
        assert selection.query_params == {"hapikey": "demo"}
        assert selection.headers == {}

    def test_api_key_opt_out(self):
        selection = select_auth(HubSpotConfig(api_key="demo"), "/x", disable_api_key=True)
        assert selection.ok
        assert selection.query_params == {}

    def test_unconfigured(self):
        selection = select_auth(HubSpotConfig(), "/x")
        assert not selection.ok
        assert selection.mode == AuthType.UNCONFIGURED
        assert isinstance(selection.error, ConfigurationError)

    def test_key_required_even_when_opted_out(self):
        selection = select_auth(HubSpotConfig(), "/x", disable_api_key=True)
        assert isinstance(selection.error, ConfigurationError)

    def test_oauth2_mode(self):
        config = HubSpotConfig(use_oauth2=True, oauth2_access_token="T")
        selection = select_auth(config, "/x")
        assert selection.ok
        assert selection.mode == AuthType.OAUTH2
        assert selection.headers == {"Authorization": "Bearer T"}
        assert selection.query_params == {}

    def test_oauth2_without_token(self):
        selection = select_auth(HubSpotConfig(use_oauth2=True), "/x")
        assert isinstance(selection.error, ConfigurationError)

    def test_oauth2_with_api_key_is_contradictory(self):
        config = HubSpotConfig(use_oauth2=True, oauth2_access_token="T", api_key="demo")
        selection = select_auth(config, "/x")
        assert isinstance(selection.error, ConfigurationError)
        assert selection.query_params == {}

    def test_portal_required_by_template(self):
        selection = select_auth(HubSpotConfig(api_key="demo"), "/forms/:portal_id")
        assert isinstance(selection.error, ConfigurationError)
        assert "portal_id" in str(selection.error)

    def test_portal_resolved(self):
        config = HubSpotConfig(api_key="demo", portal_id=62515)
        selection = select_auth(config, "/forms/:portal_id")
        assert selection.ok
        assert selection.portal_id == "62515"

    def test_portal_not_needed(self):
        selection = select_auth(HubSpotConfig(api_key="demo"), "/owners/v2/owners")
        assert selection.ok
        assert selection.portal_id is None

    def test_missing_key_message_matches_ensure(self):
        config = HubSpotConfig()
        selection = select_auth(config, "/x")
        with pytest.raises(ConfigurationError) as exc_info:
            config.ensure("api_key")
        assert str(selection.error) == str(exc_info.value) == "'api_key' not configured"

    def test_missing_portal_message(self):
        selection = select_auth(HubSpotConfig(api_key="demo"), "/forms/:portal_id")
        assert str(selection.error) == "'portal_id' not configured"

    def test_raise_for_error(self):
        with pytest.raises(ConfigurationError):
            select_auth(HubSpotConfig(), "/x").raise_for_error()
