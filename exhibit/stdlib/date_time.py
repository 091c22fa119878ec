"""JSON-serializable datetime wrapper used by representations."""
from __future__ import annotations

from datetime import datetime

XSD_DATETIME = "http://www.w3.org/2001/XMLSchema#dateTime"


class DateTime:
    def __init__(self, value: datetime):
        if not isinstance(value, datetime):
            raise TypeError(f"DateTime expects a datetime, got {type(value).__name__}")
        self.value = value

    def get_datetime(self) -> datetime:
        return self.value

    def json_serialize(self) -> dict:
        return {"@value": self.value.isoformat(), "@type": XSD_DATETIME}

    def __str__(self) -> str:
        return self.value.isoformat()

    def __eq__(self, other) -> bool:
        return isinstance(other, DateTime) and other.value == self.value
