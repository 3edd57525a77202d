"""HubSpot API adapter.

Turns domain calls into authenticated HubSpot requests and JSON
responses back into typed objects.

Usage:
    import hubapi

    hubapi.configure(api_key="demo")
    owners = hubapi.Owner.all()
"""

from hubapi.config import HubSpotConfig, configure, reset
from hubapi.connectors import (
    ApiError,
    AuthenticationError,
    ConfigurationError,
    Connection,
    ConnectorError,
    ContactExistsError,
    FormsConnection,
    InvalidParameter,
    MissingInterpolation,
    RequestError,
    Span,
)
from hubapi.crm import DealPipeline, Owner, Topic

__version__ = "0.1.0"

__all__ = [
    "HubSpotConfig",
    "configure",
    "reset",
    "Connection",
    "FormsConnection",
    "Span",
    "ConnectorError",
    "ConfigurationError",
    "MissingInterpolation",
    "InvalidParameter",
    "RequestError",
    "ContactExistsError",
    "AuthenticationError",
    "ApiError",
    "Owner",
    "Topic",
    "DealPipeline",
]
