"""
App assembly entry point.

Re-exports the FastAPI `app` from `location_admin.api.main` so the service
can be started with ``uvicorn app:app``.
"""

from location_admin.api.main import app  # noqa: F401
