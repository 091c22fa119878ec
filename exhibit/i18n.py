"""Message translation backed by gettext catalogs."""
from __future__ import annotations

import gettext

DOMAIN = "exhibit"


class Translator:
    def __init__(self, locale: str = "en_US", directory: str | None = None):
        self.locale = locale
        self._catalog = gettext.translation(DOMAIN, localedir=directory, languages=[locale], fallback=True)

    def translate(self, message: str) -> str:
        return self._catalog.gettext(message)


def translator_factory(services) -> Translator:
    settings = services.config.get("translator", {})
    return Translator(locale=settings.get("locale", "en_US"), directory=settings.get("directory"))
