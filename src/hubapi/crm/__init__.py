"""Thin HubSpot entity wrappers built on the connection layer."""

from hubapi.crm.deal_pipeline import DealPipeline
from hubapi.crm.owner import Owner
from hubapi.crm.topic import Topic

__all__ = [
    "DealPipeline",
    "Owner",
    "Topic",
]
