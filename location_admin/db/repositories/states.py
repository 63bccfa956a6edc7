"""
State repository functions.

Helpers for the parent states that cities reference.
"""
from __future__ import annotations

from typing import List, Optional
from sqlalchemy.orm import Session

from location_admin.db import models


def create_state(db: Session, name: str, abbreviation: Optional[str] = None, order: int = 0, status: str = models.ContentStatus.PUBLISHED.value):
    db_state = models.State(name=name, abbreviation=abbreviation, order=order, status=status)
    db.add(db_state)
    db.commit()
    db.refresh(db_state)
    return db_state


def list_states(db: Session) -> List[models.State]:
    return db.query(models.State).order_by(models.State.order.asc(), models.State.name.asc()).all()
