"""Storage utilities: on-disk layout, lazy directory creation, disk usage.

Layout under the uploads root::

    users.json
    {user_id}/albums.json
    {user_id}/{album_id}/metadata.json
    {user_id}/{album_id}/{filename}
"""

import logging
import shutil
from pathlib import Path

from familyphotos.database import DocumentStore

logger = logging.getLogger(__name__)


def users_file(root: Path) -> Path:
    return root / "users.json"


def user_dir(root: Path, user_id: str) -> Path:
    return root / user_id


def albums_file(root: Path, user_id: str) -> Path:
    return user_dir(root, user_id) / "albums.json"


def album_dir(root: Path, user_id: str, album_id: str) -> Path:
    return user_dir(root, user_id) / album_id


def metadata_file(root: Path, user_id: str, album_id: str) -> Path:
    return album_dir(root, user_id, album_id) / "metadata.json"


def ensure_user(store: DocumentStore, user_id: str) -> Path:
    """Create the user's directory and empty album list if missing."""
    path = albums_file(store.root, user_id)
    store.ensure(path)
    return path


def ensure_album(store: DocumentStore, user_id: str, album_id: str) -> Path:
    """Create the album's directory and empty metadata document if missing."""
    path = metadata_file(store.root, user_id, album_id)
    store.ensure(path)
    return path


def remove_tree(path: Path) -> None:
    """Best-effort recursive delete; failures are logged, never raised."""
    try:
        shutil.rmtree(path)
    except FileNotFoundError:
        pass
    except OSError as e:
        logger.warning("Failed to remove %s: %s", path, e)


def unlink_quietly(path: Path) -> None:
    """Best-effort file delete."""
    try:
        path.unlink()
    except OSError:
        pass


def format_bytes(size: int) -> str:
    """Human-readable size: 0 B, 1.50 KB, 2.00 GB..."""
    if size <= 0:
        return "0 B"
    units = ["B", "KB", "MB", "GB", "TB"]
    value = float(size)
    i = 0
    while value >= 1024 and i < len(units) - 1:
        value /= 1024
        i += 1
    return f"{value:.2f} {units[i]}"


def get_storage_info(root: Path) -> dict:
    """Get disk usage statistics for the uploads directory."""
    usage = shutil.disk_usage(root)
    return {
        "total_bytes": usage.total,
        "used_bytes": usage.used,
        "free_bytes": usage.free,
        "usage_percent": round(usage.used / usage.total * 100, 1),
    }
