"""Clicks Connector: Persisted User Properties."""

from datetime import datetime, timezone
from sqlmodel import SQLModel, Field


class UserProperty(SQLModel, table=True):
    """One key-value slot of the per-user property store.

    The connector only ever writes one row, keyed by the credential
    property name (``dscc.key`` by default).
    """

    __tablename__ = "user_properties"

    key: str = Field(primary_key=True, description="Property name")
    value: str = Field(description="Raw property value")
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
