"""Metadata store: users, albums and photo records."""

import pytest

from familyphotos.errors import Conflict, NotFound, ValidationError
from familyphotos.models import PhotoRecord, PhotoRecordList
from familyphotos.services.album_service import (
    count_photos,
    create_album,
    delete_album,
    list_albums,
)
from familyphotos.services.photo_service import (
    delete_photo_record,
    list_photos,
    photo_url,
)
from familyphotos.services.user_service import (
    count_albums,
    create_user,
    delete_user,
    list_users,
)
from familyphotos.utils.storage import album_dir, metadata_file, user_dir


def _add_photo(store, user_id, album_id, filename, with_file=True):
    if with_file:
        (album_dir(store.root, user_id, album_id) / filename).write_bytes(b"img")
    record = PhotoRecord(filename=filename, caption=filename)
    store.append_guarded(metadata_file(store.root, user_id, album_id), [record], PhotoRecordList)
    return record


# --- Users ---

@pytest.mark.parametrize("name", ["", "   ", "\t\n", None])
def test_create_user_rejects_blank_name(store, name):
    with pytest.raises(ValidationError, match="User name required"):
        create_user(name, store)
    assert list_users(store) == []


def test_create_user_trims_and_truncates(store):
    user = create_user("  " + "x" * 100 + "  ", store)
    assert user.name == "x" * 60
    assert (user_dir(store.root, user.id) / "albums.json").is_file()


def test_users_listed_newest_first(store):
    create_user("Alice", store)
    create_user("Bob", store)
    assert [u.name for u in list_users(store)] == ["Bob", "Alice"]


def test_delete_user_with_albums_conflicts(store):
    user = create_user("Alice", store)
    create_album(user.id, "Trip", store)

    with pytest.raises(Conflict, match="User has albums"):
        delete_user(user.id, store)
    assert [u.id for u in list_users(store)] == [user.id]


def test_delete_user_removes_directory(store):
    user = create_user("Alice", store)
    delete_user(user.id, store)

    assert list_users(store) == []
    assert not user_dir(store.root, user.id).exists()


def test_delete_unknown_user_not_found(store):
    with pytest.raises(NotFound):
        delete_user("missing", store)


def test_dangling_user_directory_recreated_empty(store):
    user = create_user("Alice", store)
    user_dir(store.root, user.id).rename(store.root / "elsewhere")

    assert count_albums(user.id, store) == 0
    assert list_albums(user.id, store) == []


# --- Albums ---

def test_album_requires_existing_user(store):
    with pytest.raises(NotFound, match="User not found"):
        create_album("missing", "Trip", store)
    with pytest.raises(NotFound):
        list_albums("missing", store)


def test_path_like_ids_never_reach_the_filesystem(store):
    with pytest.raises(NotFound):
        list_albums("..", store)
    assert not (store.root.parent / "albums.json").exists()


@pytest.mark.parametrize("name", ["", "    "])
def test_create_album_rejects_blank_name(store, name):
    user = create_user("Alice", store)
    with pytest.raises(ValidationError, match="Album name required"):
        create_album(user.id, name, store)


def test_create_album_truncates_name(store):
    user = create_user("Alice", store)
    album = create_album(user.id, "a" * 61, store)
    assert album.name == "a" * 60
    assert metadata_file(store.root, user.id, album.id).is_file()
    assert count_albums(user.id, store) == 1


def test_delete_album_with_photos_conflicts(store):
    user = create_user("Alice", store)
    album = create_album(user.id, "Trip", store)
    _add_photo(store, user.id, album.id, "a.jpg")

    with pytest.raises(Conflict, match="Album is not empty"):
        delete_album(user.id, album.id, store)
    assert album_dir(store.root, user.id, album.id).is_dir()


def test_delete_album_counts_records_without_files(store):
    user = create_user("Alice", store)
    album = create_album(user.id, "Trip", store)
    _add_photo(store, user.id, album.id, "gone.jpg", with_file=False)

    assert count_photos(user.id, album.id, store) == 1
    with pytest.raises(Conflict):
        delete_album(user.id, album.id, store)


def test_delete_empty_album(store):
    user = create_user("Alice", store)
    album = create_album(user.id, "Trip", store)

    delete_album(user.id, album.id, store)
    assert list_albums(user.id, store) == []
    assert not album_dir(store.root, user.id, album.id).exists()


def test_delete_unknown_album_not_found(store):
    user = create_user("Alice", store)
    with pytest.raises(NotFound, match="Album not found"):
        delete_album(user.id, "missing", store)


# --- Photos ---

def test_list_photos_skips_records_without_file(store):
    user = create_user("Alice", store)
    album = create_album(user.id, "Trip", store)
    kept = _add_photo(store, user.id, album.id, "kept.jpg")
    _add_photo(store, user.id, album.id, "lost.jpg", with_file=False)

    photos = list_photos(user.id, album.id, store)
    assert [p.id for p in photos] == [kept.id]
    # the stale record stays in the document
    assert count_photos(user.id, album.id, store) == 2


def test_list_photos_missing_album(store):
    user = create_user("Alice", store)
    with pytest.raises(NotFound):
        list_photos(user.id, "missing", store)


def test_delete_photo_record_unlinks_file(store):
    user = create_user("Alice", store)
    album = create_album(user.id, "Trip", store)
    record = _add_photo(store, user.id, album.id, "a.jpg")

    delete_photo_record(user.id, album.id, record.id, store)
    assert not (album_dir(store.root, user.id, album.id) / "a.jpg").exists()
    assert count_photos(user.id, album.id, store) == 0


def test_delete_photo_record_tolerates_missing_file(store):
    user = create_user("Alice", store)
    album = create_album(user.id, "Trip", store)
    record = _add_photo(store, user.id, album.id, "gone.jpg", with_file=False)

    delete_photo_record(user.id, album.id, record.id, store)
    assert count_photos(user.id, album.id, store) == 0


def test_delete_unknown_photo_not_found(store):
    user = create_user("Alice", store)
    album = create_album(user.id, "Trip", store)
    with pytest.raises(NotFound):
        delete_photo_record(user.id, album.id, "missing", store)


def test_photo_url_contains_ids():
    assert photo_url("u1", "a1", "f.png") == "/uploads/u1/a1/f.png"


def test_listings_are_idempotent(store):
    user = create_user("Alice", store)
    album = create_album(user.id, "Trip", store)
    _add_photo(store, user.id, album.id, "a.jpg")

    assert list_users(store) == list_users(store)
    assert list_albums(user.id, store) == list_albums(user.id, store)
    assert list_photos(user.id, album.id, store) == list_photos(user.id, album.id, store)
