"""System status API endpoints."""

from fastapi import APIRouter, Depends

from familyphotos.config import APP_VERSION, settings
from familyphotos.database import DocumentStore, get_store
from familyphotos.schemas.photo import SystemStatusResponse
from familyphotos.services.user_service import list_users
from familyphotos.utils.storage import get_storage_info

router = APIRouter(prefix="/system", tags=["system"])


@router.get("/status", response_model=SystemStatusResponse)
def system_status(store: DocumentStore = Depends(get_store)):
    storage = get_storage_info(store.root)
    return SystemStatusResponse(
        app_name=settings.app_name,
        version=APP_VERSION,
        user_count=len(list_users(store)),
        storage_total_bytes=storage["total_bytes"],
        storage_used_bytes=storage["used_bytes"],
        storage_free_bytes=storage["free_bytes"],
        storage_usage_percent=storage["usage_percent"],
    )
