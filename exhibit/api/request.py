"""API request envelope."""
from __future__ import annotations

from typing import Any, Optional

SEARCH = "search"
CREATE = "create"
BATCH_CREATE = "batch_create"
READ = "read"
UPDATE = "update"
DELETE = "delete"

OPERATIONS = (SEARCH, CREATE, BATCH_CREATE, READ, UPDATE, DELETE)
# Operations addressing a single existing resource by id.
ID_OPERATIONS = (READ, UPDATE, DELETE)


class Request:
    SEARCH = SEARCH
    CREATE = CREATE
    BATCH_CREATE = BATCH_CREATE
    READ = READ
    UPDATE = UPDATE
    DELETE = DELETE

    def __init__(self, operation: str, resource: str, id: Any = None, content: Any = None):
        self.operation = operation
        self.resource = resource
        self.id = id
        self.content = {} if content is None else content

    def is_valid_operation(self) -> bool:
        return self.operation in OPERATIONS

    def get_operation(self) -> str:
        return self.operation

    def get_resource(self) -> str:
        return self.resource

    def get_id(self):
        return self.id

    def get_content(self):
        return self.content

    def __repr__(self) -> str:
        return f"Request({self.operation!r}, {self.resource!r}, id={self.id!r})"
