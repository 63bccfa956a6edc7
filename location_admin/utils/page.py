"""Per-request page metadata (the admin page title)."""

import os
from typing import Optional


class PageTitle:
    def __init__(self, site_title: Optional[str] = None, separator: str = " | "):
        self.site_title = site_title if site_title is not None else os.getenv("ADMIN_TITLE", "Location Admin")
        self.separator = separator
        self._title: Optional[str] = None

    def set_title(self, title: str) -> "PageTitle":
        self._title = title
        return self

    def get_title(self, full: bool = True) -> str:
        if not self._title:
            return self.site_title
        if not full or not self.site_title:
            return self._title
        return f"{self._title}{self.separator}{self.site_title}"
