"""
SQLAlchemy entities exposed through the API.

Re-exports ``Base``, ``now_utc`` and every ORM class so callers can import
from ``exhibit.db.models`` directly.
"""

from .base import Base, EntityMixin, now_utc  # re-export

from .users import User
from .vocabularies import Vocabulary, ResourceClass
from .items import Item
from .jobs import Job

__all__ = [
    # base
    "Base",
    "EntityMixin",
    "now_utc",
    # entities
    "User",
    "Vocabulary",
    "ResourceClass",
    "Item",
    "Job",
]
