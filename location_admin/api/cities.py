"""
City admin endpoints.

List/create/edit pages, store/update/delete mutations answering with the
response envelope, and the two dropdown search endpoints. Lifecycle events
are emitted through the injected notifier.
"""
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.exc import SQLAlchemyError
from starlette.requests import Request
from starlette.responses import HTMLResponse

from location_admin.api.deps import (
    get_city_form,
    get_city_repository,
    get_city_table,
    get_notifier,
    get_page_title,
    get_response,
    get_translator,
    get_url_builder,
    parse_bulk_delete,
    parse_city_input,
)
from location_admin.api.responses import ResponseEnvelope
from location_admin.db import models, schemas
from location_admin.db.repositories.cities import CityRepository, DEFAULT_SEARCH_LIMIT
from location_admin.events import CITY_MODULE_SCREEN_NAME, ContentEvent, ContentEventPayload, Notifier
from location_admin.exceptions import NotFoundError
from location_admin.forms.cities import CityForm
from location_admin.i18n import Translator
from location_admin.tables.cities import CityTable, DEFAULT_PAGE_LENGTH, MAX_PAGE_LENGTH
from location_admin.utils.page import PageTitle
from location_admin.utils.urls import UrlBuilder

logger = logging.getLogger(__name__)

router = APIRouter(tags=["cities"])

# Values dropdown scripts send when no state is chosen
NO_STATE_VALUES = ("", "0", "null")


def _payload(item, data: Optional[dict] = None) -> ContentEventPayload:
    return ContentEventPayload(screen=CITY_MODULE_SCREEN_NAME, item=item, data=data or {})


def _with_placeholder(cities: List[models.City], t: Translator) -> List[dict]:
    options = [schemas.CityOption(id=0, name=t("plugins/location::city.select_city"))]
    options.extend(schemas.CityOption.model_validate(c) for c in cities)
    return [o.model_dump() for o in options]


@router.get("/cities", name="city.index")
def index(
    request: Request,
    start: int = Query(default=0, ge=0),
    length: int = Query(default=DEFAULT_PAGE_LENGTH, ge=-1, le=MAX_PAGE_LENGTH),
    draw: int = Query(default=0, ge=0),
    table: CityTable = Depends(get_city_table),
    page: PageTitle = Depends(get_page_title),
    t: Translator = Depends(get_translator),
):
    page.set_title(t("plugins/location::city.name"))
    return table.render(request, start=start, length=length, draw=draw)


@router.get("/cities/create", name="city.create", response_class=HTMLResponse)
def create(
    form: CityForm = Depends(get_city_form),
    page: PageTitle = Depends(get_page_title),
    t: Translator = Depends(get_translator),
):
    page.set_title(t("plugins/location::city.create"))
    return HTMLResponse(form.render())


@router.post("/cities/create", name="city.store")
def store(
    payload: schemas.CityInput = Depends(parse_city_input),
    repository: CityRepository = Depends(get_city_repository),
    notifier: Notifier = Depends(get_notifier),
    urls: UrlBuilder = Depends(get_url_builder),
    response: ResponseEnvelope = Depends(get_response),
    t: Translator = Depends(get_translator),
):
    city = repository.create_or_update(payload)
    logger.info("city_created: id=%s name=%s", city.id, city.name)

    notifier.notify(ContentEvent.CREATED, _payload(city, payload.model_dump(mode="json")))

    return (
        response
        .set_previous_url(urls.route("city.index"))
        .set_next_url(urls.route("city.edit", city_id=city.id))
        .set_message(t("core/base::notices.create_success_message"))
        .to_response()
    )


@router.get("/cities/edit/{city_id}", name="city.edit", response_class=HTMLResponse)
def edit(
    city_id: int,
    request: Request,
    repository: CityRepository = Depends(get_city_repository),
    notifier: Notifier = Depends(get_notifier),
    form: CityForm = Depends(get_city_form),
    page: PageTitle = Depends(get_page_title),
    t: Translator = Depends(get_translator),
):
    city = repository.find_or_fail(city_id)

    # Listeners may adjust the instance or veto the edit
    notifier.notify(ContentEvent.BEFORE_EDIT, _payload(city, dict(request.query_params)))

    page.set_title(f'{t("plugins/location::city.edit")} "{city.name}"')
    return HTMLResponse(form.render(city))


@router.api_route("/cities/edit/{city_id}", methods=["POST", "PUT"], name="city.update")
def update(
    city_id: int,
    payload: schemas.CityInput = Depends(parse_city_input),
    repository: CityRepository = Depends(get_city_repository),
    notifier: Notifier = Depends(get_notifier),
    urls: UrlBuilder = Depends(get_url_builder),
    response: ResponseEnvelope = Depends(get_response),
    t: Translator = Depends(get_translator),
):
    city = repository.find_or_fail(city_id)

    submitted = payload.model_dump(exclude_unset=True)
    for key, value in submitted.items():
        setattr(city, key, value.value if isinstance(value, models.ContentStatus) else value)

    repository.create_or_update(city)
    logger.info("city_updated: id=%s fields=%s", city.id, sorted(submitted))

    notifier.notify(ContentEvent.UPDATED, _payload(city, payload.model_dump(mode="json", exclude_unset=True)))

    return (
        response
        .set_previous_url(urls.route("city.index"))
        .set_message(t("core/base::notices.update_success_message"))
        .to_response()
    )


@router.delete("/cities/items/{city_id}", name="city.destroy")
def destroy(
    city_id: int,
    repository: CityRepository = Depends(get_city_repository),
    notifier: Notifier = Depends(get_notifier),
    response: ResponseEnvelope = Depends(get_response),
    t: Translator = Depends(get_translator),
):
    try:
        city = repository.find_or_fail(city_id)
        snapshot = schemas.City.model_validate(city)

        repository.delete(city)
        logger.info("city_deleted: id=%s", snapshot.id)

        notifier.notify(ContentEvent.DELETED, _payload(snapshot))

        return response.set_message(t("core/base::notices.delete_success_message")).to_response()
    except (NotFoundError, SQLAlchemyError) as e:
        logger.warning("city_delete_failed: id=%s error=%s", city_id, e)
        return response.set_error().set_message(str(e)).to_response()


@router.delete("/cities/items", name="city.deletes")
def deletes(
    payload: schemas.BulkDeleteRequest = Depends(parse_bulk_delete),
    repository: CityRepository = Depends(get_city_repository),
    notifier: Notifier = Depends(get_notifier),
    response: ResponseEnvelope = Depends(get_response),
    t: Translator = Depends(get_translator),
):
    if not payload.ids:
        return response.set_error().set_message(t("core/base::notices.no_select")).to_response()

    # Resolve every id first so a missing one aborts before anything is deleted
    cities = [repository.find_or_fail(city_id) for city_id in dict.fromkeys(payload.ids)]
    snapshots = [schemas.City.model_validate(city) for city in cities]

    repository.delete_many(cities)
    logger.info("cities_deleted: ids=%s", [s.id for s in snapshots])

    for snapshot in snapshots:
        notifier.notify(ContentEvent.DELETED, _payload(snapshot))

    return response.set_message(t("core/base::notices.delete_success_message")).to_response()


@router.get("/cities/list", name="city.list")
def get_list(
    q: Optional[str] = Query(default=None),
    repository: CityRepository = Depends(get_city_repository),
    response: ResponseEnvelope = Depends(get_response),
    t: Translator = Depends(get_translator),
):
    # Surrounding whitespace is not part of the keyword
    keyword = (q or "").strip()
    if not keyword:
        return response.set_data([]).to_response()

    cities = repository.search_by_name(keyword, limit=DEFAULT_SEARCH_LIMIT)
    return response.set_data(_with_placeholder(cities, t)).to_response()


@router.get("/ajax/cities", name="city.ajax")
def ajax_get_cities(
    state_id: Optional[str] = Query(default=None),
    repository: CityRepository = Depends(get_city_repository),
    response: ResponseEnvelope = Depends(get_response),
    t: Translator = Depends(get_translator),
):
    state_filter = (state_id or "").strip()
    if state_filter in NO_STATE_VALUES:
        cities = repository.list_published()
    elif state_filter.isdigit():
        cities = repository.list_published(state_id=int(state_filter))
    else:
        # No state can match a non-numeric identifier
        cities = []
    return response.set_data(_with_placeholder(cities, t)).to_response()
