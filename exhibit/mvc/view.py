"""
Jinja2 rendering for HTML views.

Templates are looked up on ``view_manager.template_path_stack`` by name
without extension (``error/404`` resolves to ``error/404.html``).
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict

from jinja2 import Environment, FileSystemLoader, select_autoescape

logger = logging.getLogger(__name__)

TEMPLATE_SUFFIX = ".html"


class ViewRenderer:
    def __init__(self, view_manager: Dict[str, Any]):
        self.view_manager = view_manager
        paths = [p for p in view_manager.get("template_path_stack", []) if Path(p).exists()]
        if not paths:
            logger.warning("No template directories found in %s", view_manager.get("template_path_stack"))
        self.template_env = Environment(
            loader=FileSystemLoader(paths or ["."]),
            autoescape=select_autoescape(["html"]),
        )

    def render(self, template: str, **context: Any) -> str:
        context.setdefault("doctype", self.view_manager.get("doctype", "HTML5"))
        return self.template_env.get_template(f"{template}{TEMPLATE_SUFFIX}").render(**context)
