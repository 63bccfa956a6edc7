"""
API dependency helpers.

Builds the per-request collaborators the admin routes rely on (repository,
notifier, translator, page title, URL builder, form and table renderers) and
parses explicit input models from JSON or form-encoded bodies.
"""
from typing import Any, Dict

from fastapi import Depends
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError
from sqlalchemy.orm import Session
from starlette.requests import Request

from location_admin.audit import AuditTrailListener
from location_admin.db import schemas
from location_admin.db.database import get_db
from location_admin.db.repositories.cities import CityRepository
from location_admin.events import EventDispatcher
from location_admin.forms.cities import CityForm
from location_admin.i18n import Translator
from location_admin.tables.cities import CityTable
from location_admin.api.responses import ResponseEnvelope
from location_admin.utils.page import PageTitle
from location_admin.utils.urls import UrlBuilder


def get_city_repository(db: Session = Depends(get_db)) -> CityRepository:
    return CityRepository(db)


def get_notifier(request: Request, db: Session = Depends(get_db)) -> EventDispatcher:
    """Dispatcher seeded with the app's registered listeners plus the audit trail."""
    registered = getattr(request.app.state, "content_listeners", None) or {}
    dispatcher = EventDispatcher(registered)
    AuditTrailListener(db).register(dispatcher)
    return dispatcher


def get_translator() -> Translator:
    return Translator()


def get_page_title() -> PageTitle:
    return PageTitle()


def get_url_builder(request: Request) -> UrlBuilder:
    return UrlBuilder(request)


def get_response() -> ResponseEnvelope:
    return ResponseEnvelope()


def get_city_form(
    db: Session = Depends(get_db),
    translator: Translator = Depends(get_translator),
    page: PageTitle = Depends(get_page_title),
    urls: UrlBuilder = Depends(get_url_builder),
) -> CityForm:
    return CityForm(db, translator, page, urls)


def get_city_table(
    repository: CityRepository = Depends(get_city_repository),
    translator: Translator = Depends(get_translator),
    page: PageTitle = Depends(get_page_title),
    urls: UrlBuilder = Depends(get_url_builder),
) -> CityTable:
    return CityTable(repository, translator, page, urls)


async def _read_body(request: Request) -> Dict[str, Any]:
    # Admin forms post form-encoded while scripts post JSON, so the body is
    # read by hand instead of through a bound Body model
    content_type = request.headers.get("content-type", "")
    if "application/json" in content_type:
        if not (await request.body()).strip():
            return {}
        try:
            payload = await request.json()
        except ValueError:
            raise RequestValidationError([{
                "type": "json_invalid",
                "loc": ("body",),
                "msg": "JSON decode error",
                "input": {},
            }])
        if not isinstance(payload, dict):
            raise RequestValidationError([{
                "type": "dict_type",
                "loc": ("body",),
                "msg": "Input should be a valid object",
                "input": payload,
            }])
        return payload
    form = await request.form()
    data: Dict[str, Any] = {}
    for key in form.keys():
        values = form.getlist(key)
        if key.endswith("[]"):
            data[key[:-2]] = values
        else:
            data[key] = values[-1] if values else None
    return data


def _validate(model, data: Dict[str, Any]):
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise RequestValidationError(e.errors(include_url=False))


async def parse_city_input(request: Request) -> schemas.CityInput:
    """Validated city fields; only keys the client submitted count as set."""
    data = await _read_body(request)
    known = {k: v for k, v in data.items() if k in schemas.CityInput.model_fields}
    return _validate(schemas.CityInput, known)


async def parse_bulk_delete(request: Request) -> schemas.BulkDeleteRequest:
    data = await _read_body(request)
    ids = data.get("ids")
    if ids is None or ids == "":
        ids = []
    elif not isinstance(ids, list):
        ids = [ids]
    return _validate(schemas.BulkDeleteRequest, {"ids": ids})
