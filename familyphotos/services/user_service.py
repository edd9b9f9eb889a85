"""User listing, creation and deletion."""

from familyphotos.config import settings
from familyphotos.database import DocumentStore
from familyphotos.errors import Conflict, NotFound, ValidationError
from familyphotos.models import AlbumList, User, UserList
from familyphotos.utils.storage import ensure_user, remove_tree, user_dir, users_file


def clean_name(raw: object) -> str:
    """Trim and truncate a user or album name."""
    return str(raw or "").strip()[: settings.name_max_length]


def list_users(store: DocumentStore) -> list[User]:
    return store.read(users_file(store.root), UserList)


def get_user(user_id: str, store: DocumentStore) -> User:
    for user in list_users(store):
        if user.id == user_id:
            return user
    raise NotFound("User not found")


def count_albums(user_id: str, store: DocumentStore) -> int:
    """Number of albums the user owns (creates the user directory if missing)."""
    return len(store.read(ensure_user(store, user_id), AlbumList))


def create_user(name: str, store: DocumentStore) -> User:
    """Create a user at the head of the user list."""
    name = clean_name(name)
    if not name:
        raise ValidationError("User name required")

    user = User(name=name)
    store.append_guarded(users_file(store.root), [user], UserList)
    ensure_user(store, user.id)
    return user


def delete_user(user_id: str, store: DocumentStore) -> User:
    """Delete a user that owns no albums.

    The directory is removed before the list is rewritten; the two steps are
    not atomic.
    """
    path = users_file(store.root)
    with store.guard(path):
        users = store.read(path, UserList)
        idx = next((i for i, u in enumerate(users) if u.id == user_id), None)
        if idx is None:
            raise NotFound("User not found")

        if count_albums(user_id, store) > 0:
            raise Conflict("User has albums")

        remove_tree(user_dir(store.root, user_id))
        removed = users.pop(idx)
        store.write(path, users, UserList)
    return removed
