"""Photo record model.

A record is one half of a photo; the other half is the image file stored
next to the album's ``metadata.json`` under ``filename``.
"""

from datetime import datetime
from pathlib import PurePath

from pydantic import Field, field_validator

from familyphotos.models.base import Record, new_id, utcnow


class PhotoRecord(Record):
    id: str = Field(default_factory=new_id)
    filename: str = Field(min_length=1)  # relative to the album directory
    caption: str = Field(default="", max_length=300)
    uploaded_at: datetime = Field(default_factory=utcnow)

    @field_validator("filename")
    @classmethod
    def _bare_filename(cls, v: str) -> str:
        if PurePath(v).name != v or v in (".", ".."):
            raise ValueError("filename must not contain a directory part")
        return v
