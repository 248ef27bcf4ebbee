from pathlib import Path
from typing import Optional

from fastapi import UploadFile

from smartpdf.core.errors import MissingFileError, UnsupportedFileError

PDF_MEDIA_TYPE = "application/pdf"


def upload_size(upload: UploadFile) -> int:
    """Size of the uploaded file in bytes, measured from the spooled file if unknown."""
    if upload.size is not None:
        return upload.size
    stream = upload.file
    position = stream.tell()
    stream.seek(0, 2)
    size = stream.tell()
    stream.seek(position)
    return size


def ensure_pdf(upload: Optional[UploadFile], max_bytes: int) -> int:
    """Check that the upload is a PDF within the size limit and return its size."""
    if upload is None or not upload.filename:
        raise MissingFileError("Request did not include a 'pdf' file field")

    content_type = (upload.content_type or "").lower()
    if content_type != PDF_MEDIA_TYPE:
        raise UnsupportedFileError(f"Rejected media type {content_type!r} for {upload.filename!r}")

    size = upload_size(upload)
    if size > max_bytes:
        raise UnsupportedFileError(f"Rejected {upload.filename!r}: {size} bytes exceeds {max_bytes}")
    return size


def file_size(path: Optional[Path]) -> int:
    return path.stat().st_size if path and path.exists() else 0
