"""Size-limited reading of uploaded documents."""
from __future__ import annotations

import logging

from fastapi import HTTPException, UploadFile

from resumatch.core.config import settings
from resumatch.core.errors import DocumentReadError

logger = logging.getLogger(__name__)

CHUNK_SIZE = 8192


def _too_large() -> HTTPException:
    return HTTPException(
        status_code=413,
        detail=f"File too large. Maximum size: {settings.app.max_upload_size_mb}MB",
    )


async def read_upload_file_limited(file: UploadFile) -> bytes:
    """Read an uploaded file in chunks enforcing the max size limit.

    This is the only I/O-bound step of a parse request; everything after it
    runs synchronously on the returned bytes.

    Args:
        file: FastAPI upload file instance.

    Returns:
        File content as bytes if within the allowed size limit.

    Raises:
        HTTPException: If the file exceeds the configured size limit.
        DocumentReadError: If the upload stream cannot be read.
    """
    max_bytes = settings.app.max_upload_size_mb * 1024 * 1024

    file_size = getattr(file, "size", None)
    if file_size is not None and file_size > max_bytes:
        logger.warning(
            "file_validation.rejected_by_header",
            extra={"file_size": file_size, "max_bytes": max_bytes},
        )
        raise _too_large()

    size = 0
    chunks: list[bytes] = []

    try:
        while True:
            chunk = await file.read(CHUNK_SIZE)
            if not chunk:
                break

            size += len(chunk)
            if size > max_bytes:
                logger.warning(
                    "file_validation.rejected_by_chunked_read",
                    extra={"size": size, "max_bytes": max_bytes},
                )
                raise _too_large()
            chunks.append(chunk)
    except OSError as exc:
        logger.warning("file_validation.read_failed", extra={"error": str(exc), "size": size})
        raise DocumentReadError(
            code="document_unreadable",
            message="The uploaded document could not be read. Please retry or enter your details manually.",
            details={"size_bytes": size},
        ) from exc

    return b"".join(chunks)
