"""
First-run installer.

Runs the configured install tasks in order and stops at the first task that
records an error. Tasks report progress through ``add_info`` and failures
through ``add_error``.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from exhibit.services import import_string

logger = logging.getLogger(__name__)


class AbstractTask:
    """One step of the installation."""

    def __init__(self, installer: "Installer"):
        self.installer = installer

    def get_services(self):
        return self.installer.services

    def get_translator(self):
        return self.get_services().get("MvcTranslator")

    def add_error(self, message: str) -> None:
        self.installer.add_error(message)

    def add_info(self, message: str) -> None:
        self.installer.add_info(message)

    def get_name(self) -> str:
        return type(self).__name__

    def perform(self, data: Dict[str, Any]) -> None:
        raise NotImplementedError


class Installer:
    def __init__(self, services, tasks: Optional[List[Any]] = None):
        self.services = services
        if tasks is None:
            tasks = services.config.get("install", {}).get("tasks", [])
        self.tasks = [import_string(task) if isinstance(task, str) else task for task in tasks]
        self._errors: List[str] = []
        self._info: List[str] = []

    def add_error(self, message: str) -> None:
        self._errors.append(message)

    def get_errors(self) -> List[str]:
        return list(self._errors)

    def add_info(self, message: str) -> None:
        self._info.append(message)

    def get_info(self) -> List[str]:
        return list(self._info)

    def install(self, data: Optional[Dict[str, Any]] = None) -> bool:
        """Run every task; return True when all of them succeed."""
        data = dict(data or {})
        for task_class in self.tasks:
            task = task_class(self)
            logger.info("install: running %s", task.get_name())
            task.perform(data)
            if self._errors:
                logger.warning("install: %s failed: %s", task.get_name(), "; ".join(self._errors))
                return False
        return True
