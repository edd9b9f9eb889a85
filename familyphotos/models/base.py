"""Shared configuration for records persisted as JSON documents."""

import uuid
from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


def new_id() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Record(BaseModel):
    """Base for stored records: camelCase on disk and on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_document(self) -> dict:
        """JSON form exactly as written to disk (camelCase keys, ISO timestamps)."""
        return self.model_dump(mode="json", by_alias=True)
