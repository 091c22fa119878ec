"""
URL utilities for building absolute API links.

Primary source: the configured ``app.base_url`` (APP_BASE_URL).
Fallback: the base URL of the request being served, then APP_HOST.
"""
from __future__ import annotations

import os
from typing import Optional

DEFAULT_BASE_URL = "http://localhost:8000"


def _add_scheme_if_missing(host: str) -> str:
    h = host.strip()
    if not h:
        return DEFAULT_BASE_URL
    if h.startswith("http://") or h.startswith("https://"):
        return h
    # Simple heuristic: use http for localhost, otherwise https
    lower = h.lower()
    if lower.startswith("localhost") or lower.startswith("127.0.0.1"):
        return f"http://{h}"
    return f"https://{h}"


def _strip_trailing_slash(url: str) -> str:
    return url[:-1] if url.endswith("/") else url


def get_app_base_url(configured: Optional[str] = None, request_base: Optional[str] = None) -> str:
    """Return the normalized base URL for canonical links.

    Precedence:
    1. ``configured`` (``app.base_url``)
    2. ``request_base`` (base URL of the current request)
    3. APP_HOST (legacy) with scheme added if missing
    Defaults to http://localhost:8000.
    """
    if configured and configured.strip():
        return _strip_trailing_slash(configured.strip())
    if request_base and request_base.strip():
        return _strip_trailing_slash(request_base.strip())
    host = os.getenv("APP_HOST")
    if host and host.strip():
        return _strip_trailing_slash(_add_scheme_if_missing(host))
    return DEFAULT_BASE_URL
