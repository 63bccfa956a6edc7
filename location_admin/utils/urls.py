"""
URL utilities for building links to named admin routes.
"""
from __future__ import annotations

from typing import Any

from starlette.requests import Request


class UrlBuilder:
    """Resolve named routes against the current request's base URL."""

    def __init__(self, request: Request):
        self.request = request

    def route(self, name: str, **path_params: Any) -> str:
        return str(self.request.url_for(name, **{k: str(v) for k, v in path_params.items()}))
