"""User API endpoints."""

import logging

from fastapi import APIRouter, Depends, status

from familyphotos.api.deps import get_client_ip
from familyphotos.database import DocumentStore, get_store
from familyphotos.models.user import User
from familyphotos.schemas.user import (
    NameRequest,
    OkResponse,
    UserResponse,
    UserSummaryResponse,
)
from familyphotos.services.user_service import (
    count_albums,
    create_user,
    delete_user,
    list_users,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["users"])


def _user_to_response(user: User) -> UserResponse:
    return UserResponse(**user.to_document())


@router.get("", response_model=list[UserSummaryResponse])
def get_users(store: DocumentStore = Depends(get_store)):
    """List users with their album counts."""
    return [
        UserSummaryResponse(**u.to_document(), album_count=count_albums(u.id, store))
        for u in list_users(store)
    ]


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def post_user(
    request: NameRequest,
    client_ip: str = Depends(get_client_ip),
    store: DocumentStore = Depends(get_store),
):
    user = create_user(request.name, store)
    logger.info("User created: ip=%s user=%r id=%s", client_ip, user.name, user.id)
    return _user_to_response(user)


@router.delete("/{user_id}", response_model=OkResponse)
def remove_user(
    user_id: str,
    client_ip: str = Depends(get_client_ip),
    store: DocumentStore = Depends(get_store),
):
    """Delete a user. Only allowed once every album is gone."""
    removed = delete_user(user_id, store)
    logger.info("User deleted: ip=%s user=%r id=%s", client_ip, removed.name, user_id)
    return OkResponse()
