"""Domain errors raised by the metadata store and upload pipeline.

Each error carries the HTTP status it is reported with; the application
exception handler renders them as ``{"error": message}``.
"""


class AlbumError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(AlbumError):
    """Bad or missing input: empty name, no files, non-image content."""

    status_code = 400


class NotFound(AlbumError):
    status_code = 404


class Conflict(AlbumError):
    """Delete blocked by non-empty children."""

    # The REST surface reports blocked deletes as a plain client error.
    status_code = 400


class InternalError(AlbumError):
    status_code = 500
