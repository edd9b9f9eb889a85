"""Album listing, creation and deletion for a single user."""

from familyphotos.database import DocumentStore
from familyphotos.errors import Conflict, NotFound, ValidationError
from familyphotos.models import Album, AlbumList, PhotoRecordList
from familyphotos.services.user_service import clean_name, get_user
from familyphotos.utils.storage import (
    album_dir,
    albums_file,
    ensure_album,
    ensure_user,
    remove_tree,
)


def list_albums(user_id: str, store: DocumentStore) -> list[Album]:
    """List a user's albums, newest first."""
    get_user(user_id, store)
    return store.read(ensure_user(store, user_id), AlbumList)


def get_album(user_id: str, album_id: str, store: DocumentStore) -> Album:
    for album in list_albums(user_id, store):
        if album.id == album_id:
            return album
    raise NotFound("Album not found")


def count_photos(user_id: str, album_id: str, store: DocumentStore) -> int:
    """Raw record count of the album, including records whose file is gone."""
    return len(store.read(ensure_album(store, user_id, album_id), PhotoRecordList))


def create_album(user_id: str, name: str, store: DocumentStore) -> Album:
    get_user(user_id, store)

    name = clean_name(name)
    if not name:
        raise ValidationError("Album name required")

    album = Album(name=name)
    store.append_guarded(albums_file(store.root, user_id), [album], AlbumList)
    ensure_album(store, user_id, album.id)
    return album


def delete_album(user_id: str, album_id: str, store: DocumentStore) -> Album:
    """Delete an album that holds no photo records.

    Like user deletion, the directory goes first and the list rewrite second.
    """
    get_user(user_id, store)

    path = albums_file(store.root, user_id)
    with store.guard(path):
        albums = store.read(path, AlbumList)
        idx = next((i for i, a in enumerate(albums) if a.id == album_id), None)
        if idx is None:
            raise NotFound("Album not found")

        if count_photos(user_id, album_id, store) > 0:
            raise Conflict("Album is not empty")

        remove_tree(album_dir(store.root, user_id, album_id))
        removed = albums.pop(idx)
        store.write(path, albums, AlbumList)
    return removed
