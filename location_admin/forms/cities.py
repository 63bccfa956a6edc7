"""
City entry form.

Builds the field list for a new or existing city and renders it with the
admin layout. Select options come from the states table and the status enum.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from sqlalchemy.orm import Session

from location_admin.db import models
from location_admin.db.repositories import states as state_repo
from location_admin.i18n import Translator
from location_admin.utils.page import PageTitle
from location_admin.utils.templates import render
from location_admin.utils.urls import UrlBuilder


@dataclass
class FormOption:
    value: str
    label: str


@dataclass
class FormField:
    name: str
    label: str
    type: str = "text"
    value: str = ""
    required: bool = False
    max_length: Optional[int] = None
    options: List[FormOption] = field(default_factory=list)


class CityForm:
    template = "cities/form.html"

    def __init__(self, db: Session, translator: Translator, page: PageTitle, urls: UrlBuilder):
        self.db = db
        self.t = translator
        self.page = page
        self.urls = urls

    def state_options(self) -> List[FormOption]:
        options = [FormOption(value="", label=self.t("plugins/location::city.select_state"))]
        options.extend(FormOption(value=str(s.id), label=s.name) for s in state_repo.list_states(self.db))
        return options

    def status_options(self) -> List[FormOption]:
        return [
            FormOption(value=status.value, label=self.t(f"core/base::enums.statuses.{status.value}"))
            for status in models.ContentStatus
        ]

    def build_fields(self, model: Optional[models.City] = None) -> List[FormField]:
        return [
            FormField(
                name="name",
                label=self.t("core/base::forms.name"),
                value=model.name if model else "",
                required=True,
                max_length=120,
            ),
            FormField(
                name="state_id",
                label=self.t("plugins/location::city.state"),
                type="select",
                value=str(model.state_id) if model and model.state_id else "",
                options=self.state_options(),
            ),
            FormField(
                name="order",
                label=self.t("plugins/location::city.order"),
                type="number",
                value=str(model.order if model else 0),
            ),
            FormField(
                name="status",
                label=self.t("core/base::tables.status"),
                type="select",
                value=model.status if model else models.ContentStatus.PUBLISHED.value,
                options=self.status_options(),
            ),
        ]

    def action_url(self, model: Optional[models.City] = None) -> str:
        if model is None:
            return self.urls.route("city.store")
        return self.urls.route("city.update", city_id=model.id)

    def render(self, model: Optional[models.City] = None) -> str:
        return render(
            self.template,
            page_title=self.page.get_title(),
            locale=self.t.locale,
            t=self.t,
            action=self.action_url(model),
            fields=self.build_fields(model),
        )
