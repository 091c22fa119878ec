import re

from exhibit.acl import ROLE_RESEARCHER, USER_ROLES
from exhibit.api.adapters.entity import AbstractEntityAdapter, query_bool
from exhibit.api.representations.user import UserRepresentation
from exhibit.db.models import User
from exhibit.utils.passwords import MIN_PASSWORD_LENGTH, hash_password

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class UserAdapter(AbstractEntityAdapter):
    entity_class = User
    representation_class = UserRepresentation
    unsortable_columns = frozenset({"password_hash"})

    def hydrate(self, data, entity, error_store):
        t = self.get_translator()
        persistent = self.entity_is_persistent(entity)

        if "o:email" in data:
            entity.email = self.hydrate_string(data, "o:email", error_store).lower()
        if "o:name" in data:
            entity.name = self.hydrate_string(data, "o:name", error_store)

        if "o:role" in data:
            role = self.hydrate_string(data, "o:role", error_store, default=None)
            current_role = entity.role if persistent else ROLE_RESEARCHER
            if role is not None:
                if role != current_role:
                    self.authorize(entity, "change-role")
                entity.role = role

        if "o:is_active" in data:
            is_active = bool(data["o:is_active"])
            current = bool(entity.is_active) if persistent else True
            if is_active != current:
                self.authorize(entity, "activate-user")
            entity.is_active = is_active

        password = None
        if "o:password" in data:
            password = self.hydrate_string(data, "o:password", error_store, default=None, strip=False)
        if password is not None:
            if len(password) < MIN_PASSWORD_LENGTH:
                error_store.add_error(
                    "o:password",
                    t.translate("The password must be at least %d characters long.") % MIN_PASSWORD_LENGTH,
                )
            else:
                entity.password_hash = hash_password(password)

    def validate(self, entity, error_store, is_persistent):
        t = self.get_translator()
        if not entity.name:
            error_store.add_error("o:name", t.translate("The name cannot be empty."))
        if not entity.email or not EMAIL_PATTERN.match(entity.email):
            error_store.add_error("o:email", t.translate("A valid email address is required."))
        elif self._email_taken(entity, is_persistent):
            error_store.add_error(
                "o:email", t.translate('The email "%s" is already taken.') % entity.email
            )
        if entity.role is not None and entity.role not in USER_ROLES:
            error_store.add_error("o:role", t.translate('Invalid role "%s".') % entity.role)

    def _email_taken(self, entity, is_persistent) -> bool:
        query = self.get_entity_manager().query(User.id).filter(User.email == entity.email)
        if is_persistent:
            query = query.filter(User.id != entity.id)
        return query.first() is not None

    def build_query(self, qb, query):
        if query.get("email"):
            qb.where(User.email == str(query["email"]).strip().lower())
        if query.get("name"):
            qb.where(User.name == query["name"])
        if query.get("role"):
            qb.where(User.role == query["role"])
        if query.get("is_active") not in (None, ""):
            qb.where(User.is_active.is_(query_bool(query["is_active"])))
