"""Album model."""

from datetime import datetime

from pydantic import Field

from familyphotos.models.base import Record, new_id, utcnow


class Album(Record):
    id: str = Field(default_factory=new_id)
    name: str = Field(min_length=1, max_length=60)
    created_at: datetime = Field(default_factory=utcnow)
