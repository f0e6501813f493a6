"""Media type resolution for uploaded documents.

The declared MIME type wins when it is one we recognize; otherwise the file
extension is consulted, and finally the magic number at the start of the
bytes. Binary types we cannot read resolve to ``unsupported``; anything still
unresolved is treated as plain text.
"""

from __future__ import annotations

import logging
import zipfile
from io import BytesIO
from typing import Literal, Optional, cast

logger = logging.getLogger(__name__)

FileType = Literal["pdf", "docx", "doc", "text", "unsupported"]

MIME_TYPE_MAP: dict[str, FileType] = {
    "application/pdf": "pdf",
    "application/x-pdf": "pdf",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document": "docx",
    "application/vnd.ms-word.document.macroEnabled.12": "docx",
    "application/msword": "doc",
    "text/plain": "text",
    "text/markdown": "text",
    "text/rtf": "unsupported",
}

# Declared types that say nothing about the content
GENERIC_MIME_TYPES = frozenset(
    {"application/octet-stream", "binary/octet-stream", "application/zip", "application/x-zip-compressed"}
)

EXTENSION_MAP: dict[str, FileType] = {
    ".pdf": "pdf",
    ".docx": "docx",
    ".doc": "doc",
    ".txt": "text",
    ".md": "text",
    ".rtf": "unsupported",
    ".odt": "unsupported",
    ".pages": "unsupported",
    ".png": "unsupported",
    ".jpg": "unsupported",
    ".jpeg": "unsupported",
    ".gif": "unsupported",
}

# Magic number signatures; DOCX is a ZIP container, DOC an OLE2 compound file
SIGNATURES: tuple[tuple[bytes, FileType], ...] = (
    (b"%PDF-", "pdf"),
    (b"PK\x03\x04", "docx"),
    (b"\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1", "doc"),
    (b"\x89PNG\r\n\x1a\n", "unsupported"),
    (b"\xff\xd8\xff", "unsupported"),
    (b"GIF8", "unsupported"),
    (b"{\\rtf", "unsupported"),
)


def get_file_type_from_mime(mime_type: str | None) -> Optional[FileType]:
    """Map a MIME type (parameters ignored) to an internal file type.

    Unknown ``text/*`` types and generic binary types give None so the
    extension and signature can decide; any other unknown type is unsupported.
    """
    if not mime_type:
        return None
    base = mime_type.split(";", 1)[0].strip().lower()
    if base in MIME_TYPE_MAP:
        return MIME_TYPE_MAP[base]
    if not base or base in GENERIC_MIME_TYPES or base.startswith("text/"):
        return None
    return "unsupported"


def get_file_type_from_name(file_name: str | None) -> Optional[FileType]:
    """Map a file name extension to an internal file type."""
    if not file_name or "." not in file_name:
        return None
    ext = "." + file_name.rsplit(".", 1)[-1].lower()
    return EXTENSION_MAP.get(ext)


def sniff_file_type(data: bytes) -> Optional[FileType]:
    """Detect the file type from its magic number, if it has one we know."""
    for signature, file_type in SIGNATURES:
        if data.startswith(signature):
            return file_type
    return None


def validate_file_signature(data: bytes, expected_type: FileType) -> bool:
    """Check that binary formats start with the signature of their declared type.

    Plain text has no signature and always passes.
    """
    if expected_type == "text":
        return True

    if sniff_file_type(data) == expected_type:
        return True

    logger.warning(
        "file_signature.invalid",
        extra={
            "expected_type": expected_type,
            "actual_prefix": data[:8] if data else "EMPTY",
        },
    )
    return False


def resolve_file_type(
    data: bytes,
    mime_type: str | None = None,
    file_name: str | None = None,
) -> FileType:
    """Resolve the effective file type of an upload.

    Args:
        data: Raw file bytes.
        mime_type: Declared MIME type, if any.
        file_name: Original file name, if any.

    Returns:
        FileType: 'pdf', 'docx', 'doc', 'text' or 'unsupported'.
    """
    declared = get_file_type_from_mime(mime_type) or get_file_type_from_name(file_name)
    sniffed = sniff_file_type(data)

    if declared is None or (declared == "text" and sniffed is not None):
        resolved = sniffed or "text"
    else:
        resolved = declared

    logger.debug(
        "file_type.resolved",
        extra={
            "mime_type": mime_type,
            "declared_type": declared,
            "sniffed_type": sniffed,
            "file_type": resolved,
        },
    )
    return cast(FileType, resolved)


def validate_zip_safety(
    data: bytes,
    max_ratio: float = 100.0,
    max_uncompressed_mb: int = 50,
) -> None:
    """Reject ZIP-based documents (DOCX) that look like zip bombs.

    Args:
        data: File content as bytes.
        max_ratio: Maximum allowed uncompressed/compressed ratio.
        max_uncompressed_mb: Maximum total uncompressed size in MB.

    Raises:
        ValueError: If the archive is malformed, too compressed or too large.
    """
    try:
        with zipfile.ZipFile(BytesIO(data)) as zf:
            compressed_size = sum(info.compress_size for info in zf.filelist)
            uncompressed_size = sum(info.file_size for info in zf.filelist)
    except zipfile.BadZipFile as exc:
        logger.warning("zip_safety.bad_zip", extra={"error": str(exc)})
        raise ValueError("Invalid ZIP file structure") from exc

    if compressed_size == 0:
        raise ValueError("Invalid ZIP file: compressed size is zero")

    ratio = uncompressed_size / compressed_size
    if ratio > max_ratio:
        logger.warning(
            "zip_safety.suspicious_ratio",
            extra={"ratio": ratio, "max_ratio": max_ratio},
        )
        raise ValueError(
            f"Suspicious compression ratio: {ratio:.1f}x. Maximum allowed: {max_ratio}x"
        )

    if uncompressed_size > max_uncompressed_mb * 1024 * 1024:
        logger.warning(
            "zip_safety.excessive_size",
            extra={"uncompressed_mb": uncompressed_size / (1024 * 1024)},
        )
        raise ValueError(
            f"Uncompressed size ({uncompressed_size / (1024 * 1024):.1f}MB) "
            f"exceeds limit ({max_uncompressed_mb}MB)"
        )
