"""Document store: lazy creation, whole-document rewrites, per-path locking."""

import gc
import threading

import pytest

from familyphotos.errors import InternalError
from familyphotos.models import PhotoRecordList, User, UserList


def test_read_creates_empty_document(store):
    path = store.root / "nested" / "albums.json"
    assert store.read(path, UserList) == []
    assert path.read_text() == "[]"


def test_write_uses_camel_case_on_disk(store):
    path = store.root / "users.json"
    store.write(path, [User(name="Alice")], UserList)

    text = path.read_text()
    assert '"createdAt"' in text
    assert "created_at" not in text
    assert [u.name for u in store.read(path, UserList)] == ["Alice"]


def test_append_guarded_puts_newest_first(store):
    path = store.root / "users.json"
    store.append_guarded(path, [User(name="first")], UserList)
    store.append_guarded(path, [User(name="second"), User(name="third")], UserList)

    assert [u.name for u in store.read(path, UserList)] == ["third", "second", "first"]


def test_corrupt_document_is_internal_error(store):
    path = store.root / "users.json"
    path.parent.mkdir(parents=True)
    path.write_text('[{"name": "no id or date"}, {"id": 3}]')

    with pytest.raises(InternalError):
        store.read(path, UserList)


def test_concurrent_appends_lose_nothing(store):
    path = store.root / "users.json"
    barrier = threading.Barrier(16)

    def worker(n):
        barrier.wait()
        store.append_guarded(path, [User(name=f"user-{n}")], UserList)

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(16)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    names = {u.name for u in store.read(path, UserList)}
    assert names == {f"user-{n}" for n in range(16)}


def test_guard_is_reentrant(store):
    path = store.root / "users.json"
    with store.guard(path):
        with store.guard(path):
            store.append_guarded(path, [User(name="Alice")], UserList)
    assert len(store.read(path, UserList)) == 1


def test_oversized_name_on_disk_is_rejected(store):
    path = store.root / "users.json"
    path.parent.mkdir(parents=True)
    path.write_text(
        '[{"id": "u1", "name": "%s", "createdAt": "2024-01-01T00:00:00Z"}]' % ("n" * 61)
    )

    with pytest.raises(InternalError):
        store.read(path, UserList)


def test_oversized_caption_on_disk_is_rejected(store):
    path = store.root / "metadata.json"
    path.parent.mkdir(parents=True)
    path.write_text(
        '[{"id": "p1", "filename": "a.jpg", "caption": "%s",'
        ' "uploadedAt": "2024-01-01T00:00:00Z"}]' % ("c" * 301)
    )

    with pytest.raises(InternalError):
        store.read(path, PhotoRecordList)


def test_lock_registry_does_not_grow(store):
    for n in range(20):
        store.read(store.root / f"user-{n}" / "albums.json", UserList)
    gc.collect()
    assert len(store._locks) == 0
