"""Content-based image type detection."""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from PIL import Image, UnidentifiedImageError
from pillow_heif import register_heif_opener

# Register HEIF/HEIC support
register_heif_opener()

# Only headers are read here; pixel data is never decoded.
Image.MAX_IMAGE_PIXELS = None

# Pillow format name -> canonical file extension
FORMAT_EXTENSIONS = {
    "JPEG": "jpg",
    "MPO": "jpg",  # multi-picture JPEG from phone cameras
    "PNG": "png",
    "WEBP": "webp",
    "GIF": "gif",
    "HEIF": "heic",
    "AVIF": "avif",
    "BMP": "bmp",
    "TIFF": "tif",
    "ICO": "ico",
}

ALLOWED_IMAGE_EXTS = ("jpg", "jpeg", "png", "webp", "gif", "heic", "heif")


@dataclass
class SniffedType:
    mime: str
    ext: str

    @property
    def is_image(self) -> bool:
        return self.mime.startswith("image/")


def sniff_image_type(path: Path) -> Optional[SniffedType]:
    """Detect the real type of a file from its header bytes.

    Only the header is parsed; pixel data is never decoded. Returns None when
    the content is not a recognizable image.
    """
    try:
        with Image.open(path) as img:
            fmt = img.format or ""
            mime = img.get_format_mimetype() or Image.MIME.get(fmt, "")
    except (UnidentifiedImageError, OSError, ValueError):
        return None

    if not mime:
        return None
    ext = FORMAT_EXTENSIONS.get(fmt, fmt.lower())
    return SniffedType(mime=mime, ext=ext)


def same_image_family(a: str, b: str) -> bool:
    """Whether two extensions name the same container (heic/heif)."""
    a, b = a.lower(), b.lower()
    if a == b:
        return True
    return {a, b} <= {"heic", "heif"}
