"""Clicks Connector: Per-User Property Store."""

from datetime import datetime, timezone
from typing import Optional

from sqlmodel import Session

from app.models.property_models import UserProperty


class PropertyStore:
    """Opaque key-value slots backed by the ``user_properties`` table."""

    def __init__(self, session: Session):
        self.session = session

    def get_property(self, key: str) -> Optional[str]:
        prop = self.session.get(UserProperty, key)
        return prop.value if prop else None

    def set_property(self, key: str, value: str) -> None:
        """Insert or overwrite ``key``."""
        prop = self.session.get(UserProperty, key)
        if prop:
            prop.value = value
            prop.updated_at = datetime.now(timezone.utc)
        else:
            prop = UserProperty(key=key, value=value)
        self.session.add(prop)
        self.session.commit()

    def delete_property(self, key: str) -> None:
        """Remove ``key``. Deleting an absent key is a no-op."""
        prop = self.session.get(UserProperty, key)
        if prop is None:
            return
        self.session.delete(prop)
        self.session.commit()
