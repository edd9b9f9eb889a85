"""Photo record listing and deletion."""

from familyphotos.database import DocumentStore
from familyphotos.errors import NotFound
from familyphotos.models import PhotoRecord, PhotoRecordList
from familyphotos.services.album_service import get_album
from familyphotos.utils.storage import album_dir, ensure_album, unlink_quietly


def photo_url(user_id: str, album_id: str, filename: str) -> str:
    """Public URL of a stored photo file (served from /uploads)."""
    return f"/uploads/{user_id}/{album_id}/{filename}"


def list_photos(user_id: str, album_id: str, store: DocumentStore) -> list[PhotoRecord]:
    """List an album's photo records, newest first.

    Records whose file is missing on disk are skipped without error.
    """
    get_album(user_id, album_id, store)

    records = store.read(ensure_album(store, user_id, album_id), PhotoRecordList)
    directory = album_dir(store.root, user_id, album_id)
    return [r for r in records if (directory / r.filename).is_file()]


def delete_photo_record(
    user_id: str, album_id: str, photo_id: str, store: DocumentStore
) -> PhotoRecord:
    """Unlink the photo's file (best effort) and drop its record."""
    get_album(user_id, album_id, store)

    path = ensure_album(store, user_id, album_id)
    with store.guard(path):
        records = store.read(path, PhotoRecordList)
        idx = next((i for i, r in enumerate(records) if r.id == photo_id), None)
        if idx is None:
            raise NotFound("Not found")

        removed = records.pop(idx)
        unlink_quietly(album_dir(store.root, user_id, album_id) / removed.filename)
        store.write(path, records, PhotoRecordList)
    return removed
