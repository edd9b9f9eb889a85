"""Photo upload pipeline: stage, check, sniff, normalize, register.

A batch is all-or-nothing for metadata: records are written once, after
every file has passed. Files are not cleaned up the same way. When file N
fails, the other staged files of the batch stay in the album directory with
no record pointing at them.
"""

import logging
import re
import shutil
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Sequence

from familyphotos.config import settings
from familyphotos.database import DocumentStore
from familyphotos.errors import ValidationError
from familyphotos.models import PhotoRecord, PhotoRecordList
from familyphotos.services.album_service import get_album
from familyphotos.utils.image import (
    ALLOWED_IMAGE_EXTS,
    SniffedType,
    same_image_family,
    sniff_image_type,
)
from familyphotos.utils.storage import (
    album_dir,
    ensure_album,
    format_bytes,
    unlink_quietly,
)

logger = logging.getLogger(__name__)

# Declared content types accepted at staging (client-supplied, spoofable)
DECLARED_IMAGE_TYPE = re.compile(r"image/(jpeg|png|webp|gif|heic|heif)", re.IGNORECASE)
DEFAULT_EXT = ".jpg"


@dataclass
class IncomingFile:
    filename: str
    content_type: str
    stream: BinaryIO
    size: int


@dataclass
class StagedFile:
    original_name: str
    path: Path
    size: int


def check_batch_limits(files: Sequence[IncomingFile]) -> None:
    """Reject the request before anything touches disk."""
    if not files:
        raise ValidationError("No files uploaded")
    if len(files) > settings.max_files:
        raise ValidationError(f"Too many files (max {settings.max_files})")
    for f in files:
        if f.size > settings.max_file_size:
            raise ValidationError(
                f"File too large: {f.filename} (max {format_bytes(settings.max_file_size)})"
            )


def stage_file(incoming: IncomingFile, directory: Path) -> StagedFile:
    """Write an upload to the album directory under a generated name.

    The name keeps the client's extension (or .jpg) until the real type is
    known.
    """
    if not DECLARED_IMAGE_TYPE.search(incoming.content_type or ""):
        raise ValidationError(
            "Only image files are allowed (jpeg/png/webp/gif/heic). "
            f"Rejected: {incoming.filename}"
        )

    ext = Path(incoming.filename or "").suffix or DEFAULT_EXT
    path = directory / f"{uuid.uuid4()}{ext}"
    with open(path, "wb") as out:
        shutil.copyfileobj(incoming.stream, out)
        size = out.tell()
    return StagedFile(original_name=incoming.filename, path=path, size=size)


def verify_staged(staged: StagedFile, client_ip: str, album_id: str) -> tuple[Path, SniffedType]:
    """Sniff the staged file and give it the extension of its real type.

    Rejected files are deleted before the error is raised.
    """
    sniffed = sniff_image_type(staged.path)
    if sniffed is None or not sniffed.is_image:
        unlink_quietly(staged.path)
        logger.warning(
            "Upload rejected: ip=%s album=%s file=%r reason=not_image",
            client_ip, album_id, staged.original_name,
        )
        raise ValidationError(f"Only image files are allowed. Rejected: {staged.original_name}")

    if sniffed.ext not in ALLOWED_IMAGE_EXTS:
        unlink_quietly(staged.path)
        logger.warning(
            "Upload rejected: ip=%s album=%s file=%r mime=%s reason=unsupported_type",
            client_ip, album_id, staged.original_name, sniffed.mime,
        )
        raise ValidationError(
            f"Unsupported image type ({sniffed.mime}) for {staged.original_name}. "
            f"Allowed: {', '.join(ALLOWED_IMAGE_EXTS)}"
        )

    current_ext = staged.path.suffix[1:]
    if same_image_family(current_ext, sniffed.ext):
        return staged.path, sniffed

    final_path = staged.path.with_name(f"{uuid.uuid4()}.{sniffed.ext}")
    staged.path.rename(final_path)
    return final_path, sniffed


def upload_photos(
    user_id: str,
    album_id: str,
    files: Sequence[IncomingFile],
    caption: str,
    store: DocumentStore,
    client_ip: str = "-",
) -> list[PhotoRecord]:
    """Validate and store a batch of uploads into one album.

    1. Check album, file count and sizes
    2. Stage every file under a generated name
    3. Sniff each staged file, reject non-images, fix extensions
    4. Register all records with one metadata rewrite
    """
    get_album(user_id, album_id, store)
    check_batch_limits(files)

    meta_path = ensure_album(store, user_id, album_id)
    directory = album_dir(store.root, user_id, album_id)
    total = sum(f.size for f in files)
    logger.info(
        "Upload start: ip=%s album=%s files=%d size=%s",
        client_ip, album_id, len(files), format_bytes(total),
    )

    caption = str(caption or "")[: settings.caption_max_length]
    staged = [stage_file(f, directory) for f in files]

    records: list[PhotoRecord] = []
    for item in staged:
        final_path, sniffed = verify_staged(item, client_ip, album_id)
        records.append(PhotoRecord(filename=final_path.name, caption=caption))
        logger.info(
            "Upload file: ip=%s album=%s saved=%s size=%s mime=%s",
            client_ip, album_id, final_path.name, format_bytes(item.size), sniffed.mime,
        )

    store.append_guarded(meta_path, records, PhotoRecordList)
    logger.info(
        "Upload done: ip=%s album=%s created=%d total_size=%s",
        client_ip, album_id, len(records), format_bytes(sum(s.size for s in staged)),
    )
    return records
