"""
App assembly entry point.

Re-exports the FastAPI `app` from `exhibit.main` so `uvicorn app:app` works
from the repository root.
"""

from exhibit.main import app  # noqa: F401
