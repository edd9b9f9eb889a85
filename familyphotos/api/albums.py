"""Album API endpoints (per user)."""

import logging

from fastapi import APIRouter, Depends, status

from familyphotos.api.deps import get_client_ip
from familyphotos.database import DocumentStore, get_store
from familyphotos.schemas.album import AlbumResponse, AlbumSummaryResponse
from familyphotos.schemas.user import NameRequest, OkResponse
from familyphotos.services.album_service import (
    count_photos,
    create_album,
    delete_album,
    list_albums,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users/{user_id}/albums", tags=["albums"])


@router.get("", response_model=list[AlbumSummaryResponse])
def get_albums(user_id: str, store: DocumentStore = Depends(get_store)):
    """List a user's albums with photo counts."""
    return [
        AlbumSummaryResponse(**a.to_document(), count=count_photos(user_id, a.id, store))
        for a in list_albums(user_id, store)
    ]


@router.post("", response_model=AlbumResponse, status_code=status.HTTP_201_CREATED)
def post_album(
    user_id: str,
    request: NameRequest,
    client_ip: str = Depends(get_client_ip),
    store: DocumentStore = Depends(get_store),
):
    album = create_album(user_id, request.name, store)
    logger.info("Album created: ip=%s album=%r id=%s", client_ip, album.name, album.id)
    return AlbumResponse(**album.to_document())


@router.delete("/{album_id}", response_model=OkResponse)
def remove_album(
    user_id: str,
    album_id: str,
    client_ip: str = Depends(get_client_ip),
    store: DocumentStore = Depends(get_store),
):
    """Delete an empty album."""
    removed = delete_album(user_id, album_id, store)
    logger.info("Album deleted: ip=%s album=%r id=%s", client_ip, removed.name, album_id)
    return OkResponse()
