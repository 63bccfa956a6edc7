"""
City admin table.

Serves the HTML list page, and the DataTables-style JSON payload when the
page's script asks for rows over AJAX.
"""
from __future__ import annotations

from typing import Any, Dict

from starlette.requests import Request
from starlette.responses import HTMLResponse, JSONResponse, Response

from location_admin.db import models
from location_admin.db.repositories.cities import CityRepository, SORTABLE_COLUMNS
from location_admin.i18n import Translator
from location_admin.utils.page import PageTitle
from location_admin.utils.templates import render
from location_admin.utils.urls import UrlBuilder

DEFAULT_PAGE_LENGTH = 10
MAX_PAGE_LENGTH = 100

# DataTables column indexes -> sortable column names
COLUMN_INDEX = ["id", "name", "order", "status", "created_at"]


def wants_json(request: Request) -> bool:
    if request.headers.get("x-requested-with", "").lower() == "xmlhttprequest":
        return True
    return "application/json" in request.headers.get("accept", "").lower()


class CityTable:
    template = "cities/table.html"

    def __init__(self, repository: CityRepository, translator: Translator, page: PageTitle, urls: UrlBuilder):
        self.repository = repository
        self.t = translator
        self.page = page
        self.urls = urls

    def query_options(self, request: Request, start: int = 0, length: int = DEFAULT_PAGE_LENGTH) -> Dict[str, Any]:
        # Bracketed DataTables keys cannot be declared as Query params
        params = request.query_params
        if length <= 0:
            # DataTables sends -1 for "show all"
            length = DEFAULT_PAGE_LENGTH
        column = params.get("order[0][column]")
        if column is not None and column.isdigit() and int(column) < len(COLUMN_INDEX):
            order_column = COLUMN_INDEX[int(column)]
        else:
            order_column = params.get("order_by", "id")
        if order_column not in SORTABLE_COLUMNS:
            order_column = "id"
        direction = (params.get("order[0][dir]") or params.get("direction") or "desc").lower()
        return {
            "search": (params.get("search[value]") or params.get("q") or "").strip() or None,
            "offset": start,
            "limit": length,
            "order_column": order_column,
            "direction": "asc" if direction == "asc" else "desc",
        }

    def format_row(self, city: models.City) -> Dict[str, Any]:
        return {
            "id": city.id,
            "name": city.name,
            "state": city.state.name if city.state else None,
            "order": city.order,
            "status": city.status,
            "status_label": self.t(f"core/base::enums.statuses.{city.status}"),
            "created_at": city.created_at.strftime("%Y-%m-%d") if city.created_at else None,
            "edit_url": self.urls.route("city.edit", city_id=city.id),
            "delete_url": self.urls.route("city.destroy", city_id=city.id),
        }

    def rows(self, request: Request, start: int = 0, length: int = DEFAULT_PAGE_LENGTH):
        options = self.query_options(request, start, length)
        cities, total, filtered = self.repository.paginate(**options)
        return [self.format_row(c) for c in cities], total, filtered

    def render(self, request: Request, *, start: int = 0, length: int = DEFAULT_PAGE_LENGTH, draw: int = 0) -> Response:
        rows, total, filtered = self.rows(request, start, length)
        if wants_json(request):
            return JSONResponse({
                "draw": draw,
                "recordsTotal": total,
                "recordsFiltered": filtered,
                "data": rows,
            })
        html = render(
            self.template,
            page_title=self.page.get_title(),
            locale=self.t.locale,
            t=self.t,
            rows=rows,
            total=total,
            filtered=filtered,
            create_url=self.urls.route("city.create"),
            bulk_delete_url=self.urls.route("city.deletes"),
            ajax_url=self.urls.route("city.index"),
        )
        return HTMLResponse(html)
