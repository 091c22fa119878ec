"""
Abstract entity API adapter.

Implements the CRUD pipeline shared by every ORM-backed resource:
authorization, hydration, pre-validation events, validation, persistence
and representation. Concrete adapters provide the entity class, hydration,
validation and search query building.
"""
from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional, Type

from sqlalchemy import inspect as sa_inspect
from sqlalchemy import select

from exhibit.api.adapters.base import AbstractAdapter
from exhibit.api.exceptions import (
    BadRequestException,
    InvalidArgumentException,
    NotFoundException,
    PermissionDeniedException,
    ValidationException,
)
from exhibit.api.request import Request
from exhibit.api.response import Response
from exhibit.db.models import EntityMixin
from exhibit.db.query import QueryBuilder
from exhibit.event import Event
from exhibit.stdlib.error_store import ErrorStore

logger = logging.getLogger(__name__)

SORT_ASC = "asc"
SORT_DESC = "desc"

# Largest value a signed 64-bit integer column holds.
MAX_ID = 2**63 - 1


class AbstractEntityAdapter(AbstractAdapter):
    #: The ORM entity class this adapter manages.
    entity_class: Optional[Type[EntityMixin]] = None

    #: Columns that may never be used as ``sort_by``.
    unsortable_columns: frozenset = frozenset()

    def __init__(self):
        super().__init__()
        # Unique token index for query aliases and placeholders.
        self.index = 0

    # Abstract members ----------------------------------------------------

    def hydrate(self, data: Dict[str, Any], entity, error_store: ErrorStore) -> None:
        """Hydrate an entity with the provided data.

        Do not validate here: validation belongs in ``validate``. Authorize
        state changes of individual fields with ``authorize``.
        """
        raise NotImplementedError

    def build_query(self, qb: QueryBuilder, query: Dict[str, Any]) -> None:
        """Narrow the search query from request parameters.

        ``sort_by``, ``sort_order``, ``page``, ``per_page``, ``limit`` and
        ``offset`` are applied separately.
        """
        raise NotImplementedError

    def validate(self, entity, error_store: ErrorStore, is_persistent: bool) -> None:
        """Record validation errors; any error prevents persistence."""
        raise NotImplementedError

    # Operations ----------------------------------------------------------

    def search(self, request: Request) -> Response:
        query = request.get_content()
        qb = QueryBuilder(self.entity_class)
        self.build_query(qb, query)

        self.get_event_manager().trigger(Event(Event.API_SEARCH_QUERY, self, {
            "services": self.get_service_locator(),
            "query_builder": qb,
            "request": request,
        }))

        self.sort_query(qb, query)
        self.set_limit_and_offset(qb, query)

        em = self.get_entity_manager()
        entities = qb.fetch_all(em)
        representations = [self.get_representation(entity.id, entity) for entity in entities]
        response = Response(representations)
        response.set_total_results(qb.count(em))
        return response

    def create(self, request: Request) -> Response:
        em = self.get_entity_manager()
        entity = self.entity_class()
        self.hydrate_entity(Request.CREATE, request.get_content(), entity, ErrorStore())
        em.add(entity)
        em.commit()
        # Reload so associations reflect the database.
        em.refresh(entity)
        return Response(self.get_representation(entity.id, entity))

    def batch_create(self, request: Request) -> Response:
        em = self.get_entity_manager()
        error_store = ErrorStore()
        entities = []
        try:
            for datum in request.get_content():
                if not isinstance(datum, dict):
                    raise BadRequestException(
                        self.get_translator().translate("Each batch_create datum must be an object.")
                    )
                entity = self.entity_class()
                self.hydrate_entity(Request.CREATE, datum, entity, error_store)
                em.add(entity)
                # Flush so later data validate against earlier ones.
                em.flush()
                entities.append(entity)
        except Exception:
            logger.info("Rolling back %s batch_create after %d entities", self.get_resource_name(), len(entities))
            em.rollback()
            raise
        em.commit()
        return Response([self.get_representation(entity.id, entity) for entity in entities])

    def read(self, request: Request) -> Response:
        entity = self.find_entity({"id": request.get_id()})
        self.authorize(entity, Request.READ)

        self.get_event_manager().trigger(Event(Event.API_READ_FIND_POST, self, {
            "services": self.get_service_locator(),
            "entity": entity,
        }))

        return Response(self.get_representation(entity.id, entity))

    def update(self, request: Request) -> Response:
        em = self.get_entity_manager()
        entity = self.find_entity({"id": request.get_id()})
        self.hydrate_entity(Request.UPDATE, request.get_content(), entity, ErrorStore())
        em.commit()
        return Response(self.get_representation(entity.id, entity))

    def delete(self, request: Request) -> Response:
        em = self.get_entity_manager()
        entity = self.find_entity({"id": request.get_id()})
        self.authorize(entity, Request.DELETE)

        self.get_event_manager().trigger(Event(Event.API_DELETE_FIND_POST, self, {
            "services": self.get_service_locator(),
            "entity": entity,
        }))

        # Serialize while associations can still be loaded.
        representation = self.get_representation(entity.id, entity)
        representation.freeze()
        em.delete(entity)
        em.commit()
        return Response(representation)

    def get_api_url(self, data: Any) -> str:
        if not isinstance(data, EntityMixin):
            raise InvalidArgumentException(
                self.get_translator().translate('The passed resource is not an API entity.')
            )
        url = self.get_service_locator().get("ViewHelperManager").get("Url")
        return url(
            "api",
            {"resource": self.get_resource_name(), "id": data.id},
            {"force_canonical": True},
        )

    # Helpers -------------------------------------------------------------

    def get_entity_manager(self):
        return self.get_service_locator().get("EntityManager")

    def get_current_user(self):
        return self.get_acl().current_user

    def hydrate_entity(self, operation: str, data: Dict[str, Any], entity, error_store: ErrorStore) -> None:
        """Authorize, hydrate, fire the validate.pre event and validate.

        :raises ValidationException: when the error store holds errors
        """
        if operation == Request.CREATE:
            event_name = Event.API_CREATE_VALIDATE_PRE
        elif operation == Request.UPDATE:
            event_name = Event.API_UPDATE_VALIDATE_PRE
        else:
            raise InvalidArgumentException(
                self.get_translator().translate('Invalid operation for hydration.')
            )
        if not isinstance(data, dict):
            raise BadRequestException(
                self.get_translator().translate('Hydration data must be an object.')
            )

        # Check access to the entity in its original state.
        self.authorize(entity, operation)
        self.hydrate(data, entity, error_store)

        self.get_event_manager().trigger(Event(event_name, self, {
            "services": self.get_service_locator(),
            "entity": entity,
            "data": data,
        }))

        self.validate(entity, error_store, self.entity_is_persistent(entity))
        if error_store.has_errors():
            if operation == Request.UPDATE:
                # Discard local changes that have not been persisted.
                self.get_entity_manager().refresh(entity)
            raise ValidationException(error_store=error_store)

    def authorize(self, entity, privilege: str) -> None:
        """Verify that the current user has ``privilege`` on the entity.

        :raises PermissionDeniedException:
        """
        if not self.get_acl().user_is_allowed(entity, privilege):
            raise PermissionDeniedException(
                self.get_translator().translate('Permission denied for the current user to %s the %s resource.')
                % (privilege, entity.get_resource_id())
            )

    def entity_is_persistent(self, entity) -> bool:
        return sa_inspect(entity).persistent

    def find_entity(self, criteria):
        """Find a single entity by id or by a dict of criteria.

        :raises NotFoundException:
        """
        em = self.get_entity_manager()
        entity = None
        if isinstance(criteria, dict):
            normalized = dict(criteria)
            if "id" in normalized:
                normalized["id"] = self._normalize_id(normalized["id"])
            if all(value is not None for value in normalized.values()):
                entity = em.execute(
                    select(self.entity_class).filter_by(**normalized)
                ).scalars().first()
        else:
            entity_id = self._normalize_id(criteria)
            if entity_id is not None:
                entity = em.get(self.entity_class, entity_id)
        if entity is None:
            raise NotFoundException(
                self.get_translator().translate('%s entity not found using criteria: %s.')
                % (self.entity_class.__name__, json.dumps(criteria, default=str) if isinstance(criteria, dict) else criteria)
            )
        return entity

    @staticmethod
    def _normalize_id(value):
        if isinstance(value, str) and value.strip().isdecimal():
            value = int(value)
        if isinstance(value, int) and not isinstance(value, bool) and value <= MAX_ID:
            return value
        return None

    def sort_query(self, qb: QueryBuilder, query: Dict[str, Any]) -> None:
        """Order by ``sort_by`` when it names an entity column; id otherwise."""
        order = str(query.get("sort_order") or SORT_ASC).lower()
        if order not in (SORT_ASC, SORT_DESC):
            raise BadRequestException(
                self.get_translator().translate('Invalid sort_order "%s".') % order
            )
        sort_by = query.get("sort_by")
        column_attrs = sa_inspect(self.entity_class).column_attrs
        if not (isinstance(sort_by, str) and sort_by in column_attrs) or sort_by in self.unsortable_columns:
            sort_by = "id"
        column = getattr(self.entity_class, sort_by)
        qb.order_by(column.desc() if order == SORT_DESC else column.asc())

    def set_limit_and_offset(self, qb: QueryBuilder, query: Dict[str, Any]) -> None:
        """Apply page/per_page, or limit/offset, to the query builder."""
        if query.get("page") not in (None, ""):
            paginator = self.get_service_locator().get("Paginator")
            paginator.set_current_page(self._non_negative_int(query["page"], "page"))
            if query.get("per_page") not in (None, ""):
                paginator.set_per_page(self._non_negative_int(query["per_page"], "per_page"))
            if paginator.get_offset() > MAX_ID:
                raise BadRequestException(
                    self.get_translator().translate('The "page" parameter is out of range.')
                )
            qb.set_max_results(paginator.get_per_page())
            qb.set_first_result(paginator.get_offset())
            return
        if query.get("limit") not in (None, ""):
            qb.set_max_results(self._non_negative_int(query["limit"], "limit"))
        if query.get("offset") not in (None, ""):
            qb.set_first_result(self._non_negative_int(query["offset"], "offset"))

    def _non_negative_int(self, value, name: str) -> int:
        try:
            number = int(value)
        except (TypeError, ValueError, OverflowError):
            number = -1
        if isinstance(value, bool) or not 0 <= number <= MAX_ID:
            raise BadRequestException(
                self.get_translator().translate('The "%s" parameter must be a non-negative integer.') % name
            )
        return number

    def hydrate_string(
        self, data: Dict[str, Any], key: str, error_store: ErrorStore, default: Optional[str] = "", strip: bool = True
    ) -> Optional[str]:
        """Return ``data[key]`` as a string, or ``default`` when it is null.

        A value of any other type records an error under ``key`` and yields
        ``default``.
        """
        value = data[key]
        if value is None:
            return default
        if not isinstance(value, str):
            error_store.add_error(
                key, self.get_translator().translate('The "%s" value must be a string.') % key
            )
            return default
        return value.strip() if strip else value

    def get_token(self, prefix: str = "exhibit_") -> str:
        """Return a unique token for query aliases and placeholders."""
        token = f"{prefix}{self.index}"
        self.index += 1
        return token


_TRUE_VALUES = {"1", "true", "yes", "on"}


def query_bool(value) -> bool:
    """Interpret a query-string flag such as ``is_public=1``."""
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in _TRUE_VALUES


def reference_id(value):
    """Extract the id from a ``{"o:id": n}`` reference, or None."""
    if isinstance(value, dict):
        value = value.get("o:id")
    return AbstractEntityAdapter._normalize_id(value)
