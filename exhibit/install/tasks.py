"""Install tasks run in order by the Installer."""
from __future__ import annotations

import logging
from pathlib import Path

from alembic import command
from alembic.config import Config
from alembic.util import CommandError
from sqlalchemy import func, text
from sqlalchemy.exc import SQLAlchemyError

from exhibit.acl import ROLE_GLOBAL_ADMIN
from exhibit.api.adapters.users import EMAIL_PATTERN
from exhibit.db.models import User
from exhibit.install.installer import AbstractTask
from exhibit.utils.passwords import MIN_PASSWORD_LENGTH, hash_password

logger = logging.getLogger(__name__)


def _text(value) -> str:
    """Return submitted form text; anything but a string counts as empty."""
    return value if isinstance(value, str) else ""


class ConnectionTask(AbstractTask):
    """Check that the configured database answers."""

    def perform(self, data):
        em = self.get_services().get("EntityManager")
        t = self.get_translator()
        try:
            em.execute(text("SELECT 1"))
        except SQLAlchemyError as exc:
            em.rollback()
            self.add_error(t.translate("Cannot connect to the database: %s") % exc)
            return
        self.add_info(t.translate("Connected to the database."))


class SchemaTask(AbstractTask):
    """Bring the schema up to the latest migration."""

    def _alembic_config(self, connection) -> Config:
        ini_path = Path(self.get_services().config["install"]["alembic_ini"])
        cfg = Config(str(ini_path))
        cfg.set_main_option("script_location", str(ini_path.parent / "migrations"))
        cfg.attributes["connection"] = connection
        return cfg

    def perform(self, data):
        em = self.get_services().get("EntityManager")
        t = self.get_translator()
        try:
            command.upgrade(self._alembic_config(em.connection()), "head")
            em.commit()
        except (SQLAlchemyError, CommandError) as exc:
            em.rollback()
            self.add_error(t.translate("Cannot install the database schema: %s") % exc)
            return
        self.add_info(t.translate("Installed the database schema."))


class UserOneTask(AbstractTask):
    """Create the first global administrator."""

    def perform(self, data):
        em = self.get_services().get("EntityManager")
        t = self.get_translator()

        email = _text(data.get("email")).strip().lower()
        name = _text(data.get("name")).strip()
        password = _text(data.get("password"))
        if not EMAIL_PATTERN.match(email):
            self.add_error(t.translate("A valid email address is required."))
        if not name:
            self.add_error(t.translate("The name cannot be empty."))
        if len(password) < MIN_PASSWORD_LENGTH:
            self.add_error(
                t.translate("The password must be at least %d characters long.") % MIN_PASSWORD_LENGTH
            )
        if self.installer.get_errors():
            return

        if em.query(func.count(User.id)).scalar():
            self.add_error(t.translate("Cannot create the first user: users already exist."))
            return

        user = User(
            email=email,
            name=name,
            role=ROLE_GLOBAL_ADMIN,
            is_active=True,
            password_hash=hash_password(password),
        )
        em.add(user)
        em.commit()
        logger.info("install: created global admin id=%s", user.id)
        self.add_info(t.translate("Created the first user %s.") % email)
