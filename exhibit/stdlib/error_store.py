"""Collects validation errors keyed by field name."""
from __future__ import annotations

from typing import Dict, List, Optional


class ErrorStore:
    def __init__(self):
        self._errors: Dict[str, List[str]] = {}

    def add_error(self, key: str, message: str) -> None:
        self._errors.setdefault(key, []).append(message)

    def add_errors(self, errors: Dict[str, List[str] | str]) -> None:
        for key, messages in errors.items():
            if isinstance(messages, str):
                messages = [messages]
            for message in messages:
                self.add_error(key, message)

    def merge_errors(self, error_store: "ErrorStore", key: Optional[str] = None) -> None:
        """Merge another store, optionally nesting its messages under ``key``."""
        for orig_key, messages in error_store.get_errors().items():
            for message in messages:
                self.add_error(key if key is not None else orig_key, message)

    def get_errors(self) -> Dict[str, List[str]]:
        return {key: list(messages) for key, messages in self._errors.items()}

    def has_errors(self) -> bool:
        return bool(self._errors)

    def clear_errors(self) -> None:
        self._errors.clear()

    def __repr__(self) -> str:
        return f"ErrorStore({self._errors!r})"
