"""HubSpot Owners API.

Read-only: owners are listed or looked up by email.
"""

from typing import Any, Dict, Iterable, List, Optional

from pydantic import BaseModel, Field

from hubapi.connectors.http_client import Connection, default_connection

GET_OWNERS_PATH = "/owners/v2/owners"  # GET


class Owner(BaseModel):
    """A HubSpot owner (user who can be assigned records)."""

    properties: Dict[str, Any] = Field(default_factory=dict, description="Raw API payload")
    owner_id: Optional[int] = Field(None, description="HubSpot ownerId")
    email: Optional[str] = None

    @classmethod
    def from_api(cls, payload: Dict[str, Any]) -> "Owner":
        return cls(
            properties=payload,
            owner_id=payload.get("ownerId"),
            email=payload.get("email"),
        )

    def __getitem__(self, key: str) -> Any:
        return self.properties.get(key)

    @classmethod
    def all(
        cls,
        include_inactive: bool = False,
        connection: Optional[Connection] = None,
    ) -> List["Owner"]:
        """List all owners."""
        conn = connection or default_connection()
        response = conn.get_json(GET_OWNERS_PATH, {"includeInactive": include_inactive})
        return [cls.from_api(r) for r in response or []]

    @classmethod
    def find_by_email(
        cls,
        email: str,
        include_inactive: bool = False,
        connection: Optional[Connection] = None,
    ) -> Optional["Owner"]:
        """First owner with ``email``, or None."""
        conn = connection or default_connection()
        params = {"email": email, "includeInactive": include_inactive}
        response = conn.get_json(GET_OWNERS_PATH, params)
        if not response:
            return None
        return cls.from_api(response[0])

    @classmethod
    def find_by_emails(
        cls,
        emails: Iterable[str],
        include_inactive: bool = False,
        connection: Optional[Connection] = None,
    ) -> List["Owner"]:
        """Look up several emails; misses are skipped."""
        owners = (
            cls.find_by_email(email, include_inactive, connection=connection)
            for email in emails
        )
        return [owner for owner in owners if owner is not None]
