"""Photo API endpoints (per user + album)."""

import logging
import os

from fastapi import APIRouter, Depends, File, Form, UploadFile, status

from familyphotos.api.deps import get_client_ip
from familyphotos.database import DocumentStore, get_store
from familyphotos.errors import AlbumError, InternalError
from familyphotos.schemas.photo import CreatedPhotoResponse, PhotoResponse, UploadResponse
from familyphotos.schemas.user import OkResponse
from familyphotos.services.photo_service import delete_photo_record, list_photos, photo_url
from familyphotos.services.upload_service import IncomingFile, upload_photos

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users/{user_id}/albums/{album_id}", tags=["photos"])


def _upload_size(file: UploadFile) -> int:
    if file.size is not None:
        return file.size
    file.file.seek(0, os.SEEK_END)
    size = file.file.tell()
    file.file.seek(0)
    return size


@router.get("/photos", response_model=list[PhotoResponse])
def get_photos(user_id: str, album_id: str, store: DocumentStore = Depends(get_store)):
    """List photos whose files are present on disk."""
    return [
        PhotoResponse(**r.to_document(), url=photo_url(user_id, album_id, r.filename))
        for r in list_photos(user_id, album_id, store)
    ]


@router.post("/upload", response_model=UploadResponse, status_code=status.HTTP_201_CREATED)
def upload(
    user_id: str,
    album_id: str,
    photos: list[UploadFile] | None = File(default=None),
    caption: str = Form(default=""),
    client_ip: str = Depends(get_client_ip),
    store: DocumentStore = Depends(get_store),
):
    """Upload a batch of images sharing one caption."""
    files = [
        IncomingFile(
            filename=f.filename or "",
            content_type=f.content_type or "",
            stream=f.file,
            size=_upload_size(f),
        )
        for f in photos or []
    ]

    try:
        records = upload_photos(user_id, album_id, files, caption, store, client_ip=client_ip)
    except AlbumError:
        raise
    except Exception:
        logger.exception("Upload failed: ip=%s album=%s", client_ip, album_id)
        raise InternalError("Upload failed")

    created = [
        CreatedPhotoResponse(
            id=r.id,
            url=photo_url(user_id, album_id, r.filename),
            caption=r.caption,
        )
        for r in records
    ]
    return UploadResponse(created=created, count=len(created))


@router.delete("/photos/{photo_id}", response_model=OkResponse)
def remove_photo(
    user_id: str,
    album_id: str,
    photo_id: str,
    client_ip: str = Depends(get_client_ip),
    store: DocumentStore = Depends(get_store),
):
    removed = delete_photo_record(user_id, album_id, photo_id, store)
    logger.info("Photo deleted: ip=%s photo=%s file=%s", client_ip, photo_id, removed.filename)
    return OkResponse()
