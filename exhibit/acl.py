"""
Role-based access control for API adapters and entities.

Key helpers:
- Acl.is_allowed(role_or_user, resource, privilege)
- Acl.allow(roles, resources, privileges, assertion=None)
- acl_factory(services) builds the default rule set bound to the current user

Roles inherit from a parent so rules only need to list what a role adds.
Resources are identified by string: adapters by their class name
(``ItemAdapter``) and entities by their class name (``Item``). Objects
exposing ``get_resource_id()`` are resolved to that identifier; rules with an
assertion only match such instances.
"""
from __future__ import annotations

from typing import Any, Callable, Dict, FrozenSet, Iterable, List, Optional, Tuple

ROLE_GLOBAL_ADMIN = "global_admin"
ROLE_SITE_ADMIN = "site_admin"
ROLE_EDITOR = "editor"
ROLE_REVIEWER = "reviewer"
ROLE_RESEARCHER = "researcher"
ROLE_GUEST = "guest"

# role -> parent role
ROLE_PARENTS: Dict[str, Optional[str]] = {
    ROLE_GUEST: None,
    ROLE_RESEARCHER: ROLE_GUEST,
    ROLE_REVIEWER: ROLE_RESEARCHER,
    ROLE_EDITOR: ROLE_REVIEWER,
    ROLE_SITE_ADMIN: ROLE_EDITOR,
    ROLE_GLOBAL_ADMIN: ROLE_SITE_ADMIN,
}

# Roles a user account may hold; guest is reserved for anonymous requests.
USER_ROLES: FrozenSet[str] = frozenset(ROLE_PARENTS) - {ROLE_GUEST}

CURRENT_USER = "current_user"
ALL = "*"

READ_OPERATIONS = ("search", "read")
WRITE_OPERATIONS = ("create", "batch_create", "update", "delete")
ALL_OPERATIONS = READ_OPERATIONS + WRITE_OPERATIONS

Assertion = Callable[["Acl", Any, Any, str], bool]


def is_owner(acl: "Acl", user, resource, privilege: str) -> bool:
    """True when the user owns the resource."""
    return user is not None and getattr(resource, "owner_id", None) == user.id


def is_self(acl: "Acl", user, resource, privilege: str) -> bool:
    """True when the resource is the user's own account."""
    return user is not None and resource is not None and getattr(resource, "id", None) == user.id


def is_public_or_owner(acl: "Acl", user, resource, privilege: str) -> bool:
    return bool(getattr(resource, "is_public", False)) or is_owner(acl, user, resource, privilege)


class Acl:
    def __init__(self, current_user=None):
        self.current_user = current_user
        self._rules: Dict[Tuple[str, str], List[Tuple[FrozenSet[str], Optional[Assertion]]]] = {}

    # -- rule definition -------------------------------------------------

    def allow(
        self,
        roles: Iterable[str] | str,
        resources: Iterable[str] | str,
        privileges: Iterable[str] | str = ALL,
        assertion: Optional[Assertion] = None,
    ) -> None:
        roles = [roles] if isinstance(roles, str) else list(roles)
        resources = [resources] if isinstance(resources, str) else list(resources)
        privs = frozenset([privileges] if isinstance(privileges, str) else privileges)
        for role in roles:
            if role not in ROLE_PARENTS:
                raise ValueError(f"Unknown role: {role}. Allowed roles: {sorted(ROLE_PARENTS)}")
            for resource in resources:
                self._rules.setdefault((role, resource), []).append((privs, assertion))

    # -- resolution ------------------------------------------------------

    def get_role(self, subject) -> str:
        """Resolve a role name, user entity, or ``current_user`` to a role."""
        if subject == CURRENT_USER:
            subject = self.current_user
        if subject is None:
            return ROLE_GUEST
        if isinstance(subject, str):
            if subject not in ROLE_PARENTS:
                raise ValueError(f"Unknown role: {subject}")
            return subject
        if not getattr(subject, "is_active", True):
            return ROLE_GUEST
        return getattr(subject, "role", None) or ROLE_GUEST

    def _user_for(self, subject):
        if subject == CURRENT_USER:
            return self.current_user
        if subject is None or isinstance(subject, str):
            return None
        return subject

    @staticmethod
    def _resource_id(resource) -> str:
        if isinstance(resource, str):
            return resource
        get_resource_id = getattr(resource, "get_resource_id", None)
        if callable(get_resource_id):
            return get_resource_id()
        raise TypeError(f"Object of type {type(resource).__name__} is not an ACL resource")

    def _role_chain(self, role: str) -> List[str]:
        chain = []
        while role is not None:
            chain.append(role)
            role = ROLE_PARENTS[role]
        return chain

    def is_allowed(self, subject, resource, privilege: str) -> bool:
        role = self.get_role(subject)
        user = self._user_for(subject)
        resource_id = self._resource_id(resource)
        instance = None if isinstance(resource, str) else resource
        for candidate_role in self._role_chain(role):
            for key in ((candidate_role, resource_id), (candidate_role, ALL)):
                for privs, assertion in self._rules.get(key, []):
                    if ALL not in privs and privilege not in privs:
                        continue
                    if assertion is None:
                        return True
                    if instance is not None and assertion(self, user, instance, privilege):
                        return True
        return False

    def user_is_allowed(self, resource, privilege: str) -> bool:
        """Shortcut for checks against the current user."""
        return self.is_allowed(CURRENT_USER, resource, privilege)


def build_default_rules(acl: Acl) -> Acl:
    # Guests browse public content.
    acl.allow(ROLE_GUEST, ["ItemAdapter", "VocabularyAdapter", "ResourceClassAdapter"], READ_OPERATIONS)
    acl.allow(ROLE_GUEST, ["Vocabulary", "ResourceClass"], "read")
    acl.allow(ROLE_GUEST, "Item", "read", assertion=is_public_or_owner)

    # Researchers manage their own items and account.
    acl.allow(ROLE_RESEARCHER, "ItemAdapter", ALL_OPERATIONS)
    acl.allow(ROLE_RESEARCHER, ["UserAdapter", "JobAdapter"], READ_OPERATIONS)
    acl.allow(ROLE_RESEARCHER, "UserAdapter", "update")
    acl.allow(ROLE_RESEARCHER, "Item", "create")
    acl.allow(ROLE_RESEARCHER, "Item", ["update", "delete"], assertion=is_owner)
    acl.allow(ROLE_RESEARCHER, "User", "read")
    acl.allow(ROLE_RESEARCHER, "User", "update", assertion=is_self)
    acl.allow(ROLE_RESEARCHER, "Job", "read", assertion=is_owner)

    # Reviewers see and edit every item.
    acl.allow(ROLE_REVIEWER, "Item", ["read", "update", "view-all"])

    # Editors curate vocabularies and may delete any item.
    acl.allow(ROLE_EDITOR, ["VocabularyAdapter", "ResourceClassAdapter"], ALL_OPERATIONS)
    acl.allow(ROLE_EDITOR, ["Vocabulary", "ResourceClass"], ["create", "update", "delete"])
    acl.allow(ROLE_EDITOR, "Item", "delete")
    acl.allow(ROLE_EDITOR, "Job", ["read", "view-all"])

    # Site admins manage accounts.
    acl.allow(ROLE_SITE_ADMIN, "UserAdapter", ALL_OPERATIONS)
    acl.allow(ROLE_SITE_ADMIN, "User", ["create", "update", "delete", "change-role", "activate-user"])

    acl.allow(ROLE_GLOBAL_ADMIN, ALL, ALL)
    return acl


def acl_factory(services) -> Acl:
    current_user = services.get("CurrentUser") if services.has("CurrentUser") else None
    return build_default_rules(Acl(current_user=current_user))
