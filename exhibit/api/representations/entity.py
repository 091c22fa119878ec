"""Representations backed by ORM entities."""
from __future__ import annotations

from typing import Any, Dict, Optional

from exhibit.api.exceptions import InvalidArgumentException
from exhibit.api.representations.base import AbstractRepresentation, serialize

JSON_LD_CONTEXT = {
    "o": "urn:exhibit:vocab:o#",
    "xsd": "http://www.w3.org/2001/XMLSchema#",
}


class AbstractEntityRepresentation(AbstractRepresentation):
    #: JSON-LD type, e.g. ``o:Item``.
    json_ld_type: Optional[str] = None

    def __init__(self, id: Any, data: Any, adapter):
        super().__init__(adapter.get_service_locator())
        self.id = id
        self.adapter = adapter
        self._frozen: Optional[Dict[str, Any]] = None
        self.set_data(data)

    def validate_data(self, data: Any) -> None:
        entity_class = self.adapter.entity_class
        if entity_class is None or not isinstance(data, entity_class):
            raise InvalidArgumentException(
                self.get_translator().translate('Invalid data sent to %s.') % type(self).__name__
            )

    def api_url(self) -> str:
        return self.adapter.get_api_url(self.data)

    def reference(self) -> "ResourceReference":
        return ResourceReference(self.id, self.data, self.adapter)

    def get_json_ld(self) -> Dict[str, Any]:
        """Resource-specific JSON-LD fields."""
        return {}

    def json_serialize(self) -> Dict[str, Any]:
        if self._frozen is not None:
            return self._frozen
        return {
            "@context": JSON_LD_CONTEXT,
            "@id": self.api_url(),
            "@type": self.json_ld_type,
            "o:id": self.id,
            **self.get_json_ld(),
        }

    def freeze(self) -> Dict[str, Any]:
        """Serialize now and keep the result, e.g. before the entity is removed."""
        self._frozen = serialize(self.json_serialize())
        return self._frozen

    def get_reference(self, entity, resource_name: str) -> Optional["ResourceReference"]:
        """Reference a related entity through its own adapter."""
        if entity is None:
            return None
        adapter = self.get_adapter(resource_name)
        return ResourceReference(entity.id, entity, adapter)


class ResourceReference(AbstractEntityRepresentation):
    """A minimal pointer to another resource."""

    def json_serialize(self) -> Dict[str, Any]:
        return {"@id": self.api_url(), "o:id": self.id}
