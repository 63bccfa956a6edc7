"""
City repository.

Typed queries over the `cities` table: insert-or-update, lookup-or-fail,
deletes, name search for autocomplete and the published list used by
state-dependent dropdowns.
"""
from __future__ import annotations

from typing import Iterable, List, Optional, Tuple, Union
from sqlalchemy import or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from location_admin.db import models, schemas
from location_admin.exceptions import NotFoundError

DEFAULT_SEARCH_LIMIT = 10

# Columns the admin table may sort on
SORTABLE_COLUMNS = {
    "id": models.City.id,
    "name": models.City.name,
    "order": models.City.order,
    "status": models.City.status,
    "created_at": models.City.created_at,
}


class CityRepository:
    """Data access for cities bound to one session."""

    def __init__(self, db: Session):
        self.db = db

    def _ordered(self, q):
        return q.order_by(models.City.order.asc(), models.City.name.asc())

    def create_or_update(self, city: Union[schemas.CityInput, models.City]) -> models.City:
        """Insert a city from submitted fields, or persist a loaded instance."""
        if isinstance(city, schemas.CityInput):
            data = city.model_dump()
            data["status"] = city.status.value
            city = models.City(**data)
        try:
            self.db.add(city)
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise
        self.db.refresh(city)
        return city

    def find_or_fail(self, city_id: int) -> models.City:
        city = self.db.get(models.City, city_id)
        if city is None:
            raise NotFoundError("City", city_id)
        return city

    def delete(self, city: models.City) -> None:
        try:
            self.db.delete(city)
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise

    def delete_many(self, cities: Iterable[models.City]) -> None:
        """Delete every given city in a single transaction."""
        try:
            for city in cities:
                self.db.delete(city)
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise

    def search_by_name(self, keyword: str, limit: int = DEFAULT_SEARCH_LIMIT) -> List[models.City]:
        q = self.db.query(models.City).filter(
            models.City.name.icontains(keyword, autoescape=True)
        )
        return self._ordered(q).limit(limit).all()

    def list_published(self, state_id: Optional[int] = None) -> List[models.City]:
        q = self.db.query(models.City).filter(
            models.City.status == models.ContentStatus.PUBLISHED.value
        )
        if state_id is not None:
            q = q.filter(models.City.state_id == state_id)
        return self._ordered(q).all()

    def paginate(
        self,
        *,
        search: Optional[str] = None,
        offset: int = 0,
        limit: int = 10,
        order_column: str = "id",
        direction: str = "desc",
    ) -> Tuple[List[models.City], int, int]:
        """Return (rows, total, filtered) for the admin table."""
        base = self.db.query(models.City)
        total = base.count()
        q = base
        if search:
            q = q.outerjoin(models.State, models.City.state_id == models.State.id).filter(
                or_(
                    models.City.name.icontains(search, autoescape=True),
                    models.State.name.icontains(search, autoescape=True),
                )
            )
        filtered = q.count()
        column = SORTABLE_COLUMNS.get(order_column, models.City.id)
        q = q.order_by(column.asc() if direction == "asc" else column.desc())
        rows = q.offset(offset).limit(limit).all()
        return rows, total, filtered
