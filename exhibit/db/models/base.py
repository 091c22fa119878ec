"""
Shared SQLAlchemy base and helpers.
"""
from datetime import datetime, UTC

from sqlalchemy.orm import declarative_base


def now_utc():
    """Return an aware UTC datetime for default/updated timestamps."""
    return datetime.now(UTC)


class EntityMixin:
    """Behaviour shared by every API-exposed entity."""

    def get_id(self):
        return self.id

    def get_resource_id(self) -> str:
        """Return the ACL resource identifier for this entity."""
        return type(self).__name__


Base = declarative_base(cls=EntityMixin)
