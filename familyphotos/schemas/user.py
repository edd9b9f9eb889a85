"""User request/response schemas."""

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class NameRequest(BaseModel):
    name: Any = ""  # coerced by clean_name


class OkResponse(BaseModel):
    ok: bool = True


class UserResponse(CamelModel):
    id: str
    name: str
    created_at: str


class UserSummaryResponse(UserResponse):
    album_count: int
