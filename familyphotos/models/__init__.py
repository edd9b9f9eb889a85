"""Family Photos record models."""

from pydantic import TypeAdapter

from familyphotos.models.user import User
from familyphotos.models.album import Album
from familyphotos.models.photo import PhotoRecord

UserList = TypeAdapter(list[User])
AlbumList = TypeAdapter(list[Album])
PhotoRecordList = TypeAdapter(list[PhotoRecord])

__all__ = [
    "User",
    "Album",
    "PhotoRecord",
    "UserList",
    "AlbumList",
    "PhotoRecordList",
]
