from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

from location_admin.db.models.base import ContentStatus


class CityInput(BaseModel):
    """Recognized fields of a city create/update submission."""
    name: str = Field(min_length=1, max_length=120)
    state_id: Optional[int] = Field(default=None, ge=1)
    order: int = Field(default=0, ge=0, le=127)
    status: ContentStatus = ContentStatus.PUBLISHED

    @field_validator("name")
    @classmethod
    def _strip_name(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("name must not be blank")
        return value

    @field_validator("state_id", mode="before")
    @classmethod
    def _blank_state_is_none(cls, value):
        # HTML selects submit "" for the empty option
        if value in ("", "null", "0", 0):
            return None
        return value


class City(BaseModel):
    id: int
    name: str
    state_id: Optional[int] = None
    order: int
    status: ContentStatus
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    model_config = ConfigDict(from_attributes=True)


class CityOption(BaseModel):
    """Dropdown projection of a city."""
    id: int
    name: str
    model_config = ConfigDict(from_attributes=True)


class BulkDeleteRequest(BaseModel):
    ids: List[int] = Field(default_factory=list)
