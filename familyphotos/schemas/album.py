"""Album request/response schemas."""

from familyphotos.schemas.user import CamelModel


class AlbumResponse(CamelModel):
    id: str
    name: str
    created_at: str


class AlbumSummaryResponse(AlbumResponse):
    count: int  # photo records in the album
