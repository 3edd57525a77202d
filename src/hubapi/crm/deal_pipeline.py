"""HubSpot Deal Pipelines API.

{http://developers.hubspot.com/docs/methods/deal-pipelines/overview}
"""

from typing import Any, Dict, List, Optional

import httpx
from pydantic import BaseModel, Field

from hubapi.connectors.base import InvalidParameter
from hubapi.connectors.http_client import Connection, default_connection

PIPELINES_PATH = "/deals/v1/pipelines"  # GET, POST
PIPELINE_PATH = "/deals/v1/pipelines/:pipeline_id"  # GET, DELETE


def _require_id(pipeline_id: Any) -> None:
    if not pipeline_id:
        raise InvalidParameter(
            "pipeline_id is required", key="pipeline_id", value=pipeline_id
        )


class DealPipeline(BaseModel):
    """A deal pipeline and its ordered stages."""

    pipeline_id: Optional[str] = None
    label: Optional[str] = None
    active: Optional[bool] = None
    display_order: Optional[int] = None
    stages: List[Dict[str, Any]] = Field(default_factory=list)

    @classmethod
    def from_api(cls, payload: Dict[str, Any]) -> "DealPipeline":
        return cls(
            pipeline_id=payload.get("pipelineId"),
            label=payload.get("label"),
            active=payload.get("active"),
            display_order=payload.get("displayOrder"),
            stages=payload.get("stages") or [],
        )

    def __getitem__(self, index: int) -> Dict[str, Any]:
        return self.stages[index]

    @classmethod
    def find(cls, pipeline_id: str, connection: Optional[Connection] = None) -> "DealPipeline":
        """Fetch one pipeline; RequestError if it does not exist."""
        _require_id(pipeline_id)
        conn = connection or default_connection()
        response = conn.get_json(PIPELINE_PATH, {"pipeline_id": pipeline_id})
        return cls.from_api(response)

    @classmethod
    def all(cls, connection: Optional[Connection] = None) -> List["DealPipeline"]:
        conn = connection or default_connection()
        response = conn.get_json(PIPELINES_PATH) or []
        return [cls.from_api(p) for p in response]

    @classmethod
    def create(
        cls,
        label: str,
        stages: List[Dict[str, Any]],
        display_order: int = 0,
        connection: Optional[Connection] = None,
    ) -> "DealPipeline":
        """Create a pipeline.

        Args:
            label: Pipeline name
            stages: Stage dicts (``label``, ``displayOrder``, ``probability``)
            display_order: Position among pipelines
        """
        conn = connection or default_connection()
        body = {"label": label, "displayOrder": display_order, "stages": stages}
        response = conn.post_json(PIPELINES_PATH, body=body)
        return cls.from_api(response)

    def destroy(self, connection: Optional[Connection] = None) -> httpx.Response:
        _require_id(self.pipeline_id)
        conn = connection or default_connection()
        return conn.delete_json(PIPELINE_PATH, {"pipeline_id": self.pipeline_id})
