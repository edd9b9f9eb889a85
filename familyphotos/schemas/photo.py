"""Photo request/response schemas."""

from pydantic import BaseModel

from familyphotos.schemas.user import CamelModel


class CreatedPhotoResponse(BaseModel):
    id: str
    url: str
    caption: str


class PhotoResponse(CamelModel):
    id: str
    url: str
    caption: str
    uploaded_at: str


class UploadResponse(BaseModel):
    ok: bool = True
    created: list[CreatedPhotoResponse]
    count: int


class SystemStatusResponse(BaseModel):
    app_name: str
    version: str
    user_count: int
    storage_total_bytes: int
    storage_used_bytes: int
    storage_free_bytes: int
    storage_usage_percent: float
