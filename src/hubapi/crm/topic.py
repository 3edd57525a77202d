"""HubSpot blog Topics API."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from hubapi.connectors.base import InvalidParameter
from hubapi.connectors.http_client import Connection, default_connection

TOPICS_PATH = "/blogs/v3/topics"
TOPIC_PATH = "/blogs/v3/topics/:topic_id"


class Topic(BaseModel):
    """A blog topic, kept as the raw property mapping the API returns."""

    properties: Dict[str, Any] = Field(
        default_factory=dict, description="Topic fields as returned by the API"
    )

    def __getitem__(self, key: str) -> Any:
        return self.properties.get(key)

    @classmethod
    def list(cls, connection: Optional[Connection] = None) -> List["Topic"]:
        """All topics of the portal."""
        conn = connection or default_connection()
        response = conn.get_json(TOPICS_PATH)
        if not isinstance(response, dict):
            return []
        return [cls(properties=t) for t in response.get("objects") or []]

    @classmethod
    def find_by_topic_id(
        cls, topic_id: Any, connection: Optional[Connection] = None
    ) -> "Topic":
        if not topic_id:
            raise InvalidParameter("topic_id is required", key="topic_id", value=topic_id)
        conn = connection or default_connection()
        response = conn.get_json(TOPIC_PATH, {"topic_id": topic_id})
        return cls(properties=response or {})
