"""Tests for file type resolution and validation utilities.

Tests cover:
- Magic number validation and sniffing for PDF, DOCX and DOC files
- MIME type and file extension mapping
- Effective file type resolution for uploads
- ZIP file safety checks against zip bombs
"""

import io
import zipfile

import pytest

from resumatch.utils.file_validators import (
    get_file_type_from_mime,
    get_file_type_from_name,
    resolve_file_type,
    sniff_file_type,
    validate_file_signature,
    validate_zip_safety,
)

OLE_HEADER = b"\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1"


@pytest.fixture
def sample_pdf_bytes() -> bytes:
    """Return valid PDF file bytes."""
    return b"%PDF-1.4\n1 0 obj\n<< /Type /Catalog /Pages 2 0 R >>\nendobj"


@pytest.fixture
def sample_docx_bytes() -> bytes:
    """Return valid DOCX (ZIP) file bytes."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as zf:
        zf.writestr("document.xml", "<document>Test</document>")
    return buffer.getvalue()


@pytest.fixture
def corrupted_zip_bytes() -> bytes:
    """Return ZIP-like bytes that are malformed."""
    return b"PK\x03\x04" + b"\x00" * 100


class TestValidateFileSignature:
    """Test magic number validation."""

    def test_validate_pdf_signature_valid(self, sample_pdf_bytes: bytes) -> None:
        """Valid PDF file passes signature validation."""
        assert validate_file_signature(sample_pdf_bytes, "pdf") is True

    def test_validate_pdf_signature_invalid(self) -> None:
        """Non-PDF file fails PDF validation."""
        fake_pdf = b"This is not a PDF but claims to be"
        assert validate_file_signature(fake_pdf, "pdf") is False

    def test_validate_docx_signature_valid(self, sample_docx_bytes: bytes) -> None:
        """Valid DOCX file passes signature validation."""
        assert validate_file_signature(sample_docx_bytes, "docx") is True

    def test_validate_docx_signature_invalid(self) -> None:
        """Non-DOCX file fails DOCX validation."""
        assert validate_file_signature(b"This is not a DOCX", "docx") is False

    def test_validate_empty_file(self) -> None:
        """Empty file fails validation."""
        assert validate_file_signature(b"", "pdf") is False
        assert validate_file_signature(b"", "docx") is False

    def test_validate_executable_as_pdf_fails(self) -> None:
        """Executable file spoofed as PDF fails validation."""
        assert validate_file_signature(b"MZ\x90\x00", "pdf") is False

    def test_text_always_passes(self) -> None:
        """Plain text has no signature to check."""
        assert validate_file_signature(b"Jane Doe", "text") is True


class TestTypeMapping:
    """Test MIME type, extension and signature mapping."""

    @pytest.mark.parametrize(
        ("mime_type", "file_type"),
        [
            ("application/pdf", "pdf"),
            ("application/vnd.openxmlformats-officedocument.wordprocessingml.document", "docx"),
            ("application/vnd.ms-word.document.macroEnabled.12", "docx"),
            ("application/msword", "doc"),
            ("text/plain; charset=utf-8", "text"),
        ],
    )
    def test_mime(self, mime_type: str, file_type: str) -> None:
        assert get_file_type_from_mime(mime_type) == file_type

    @pytest.mark.parametrize(
        "mime_type", ["image/png", "application/rtf", "application/vnd.oasis.opendocument.text"]
    )
    def test_mime_binary_unsupported(self, mime_type: str) -> None:
        """Declared binary types without an extractor are unsupported."""
        assert get_file_type_from_mime(mime_type) == "unsupported"

    def test_mime_other_text_types_defer(self) -> None:
        assert get_file_type_from_mime("text/csv") is None

    def test_mime_unknown(self) -> None:
        """Unknown MIME type returns None."""
        assert get_file_type_from_mime("application/octet-stream") is None
        assert get_file_type_from_mime("") is None
        assert get_file_type_from_mime(None) is None

    @pytest.mark.parametrize(
        ("file_name", "file_type"),
        [("cv.PDF", "pdf"), ("cv.docx", "docx"), ("old.doc", "doc"), ("notes.txt", "text")],
    )
    def test_extension(self, file_name: str, file_type: str) -> None:
        assert get_file_type_from_name(file_name) == file_type

    def test_extension_unknown(self) -> None:
        assert get_file_type_from_name("archive.tar.gz") is None
        assert get_file_type_from_name("README") is None

    def test_sniff(self, sample_pdf_bytes: bytes, sample_docx_bytes: bytes) -> None:
        assert sniff_file_type(sample_pdf_bytes) == "pdf"
        assert sniff_file_type(sample_docx_bytes) == "docx"
        assert sniff_file_type(OLE_HEADER) == "doc"
        assert sniff_file_type(b"\x89PNG\r\n\x1a\n") == "unsupported"
        assert sniff_file_type(b"{\\rtf1\\ansi") == "unsupported"
        assert sniff_file_type(b"Jane Doe") is None


class TestResolveFileType:
    """Test effective file type resolution."""

    def test_declared_mime_wins(self) -> None:
        """A recognized MIME type is trusted; signature checks happen later."""
        assert resolve_file_type(b"not a pdf", mime_type="application/pdf") == "pdf"

    def test_extension_used_without_mime(self) -> None:
        assert resolve_file_type(OLE_HEADER, file_name="resume.doc") == "doc"

    def test_signature_used_without_declaration(self, sample_pdf_bytes: bytes) -> None:
        assert resolve_file_type(sample_pdf_bytes, mime_type="application/octet-stream") == "pdf"

    def test_binary_declared_as_text_uses_signature(self, sample_pdf_bytes: bytes) -> None:
        assert resolve_file_type(sample_pdf_bytes, mime_type="text/plain") == "pdf"

    def test_unsupported_extension(self) -> None:
        assert resolve_file_type(b"\x00\x01", file_name="scan.PNG") == "unsupported"

    def test_image_declared_as_text_uses_signature(self) -> None:
        assert resolve_file_type(b"\xff\xd8\xff\xe0", mime_type="text/plain") == "unsupported"

    def test_unknown_defaults_to_text(self) -> None:
        assert resolve_file_type(b"Jane Doe") == "text"


class TestValidateZipSafety:
    """Test ZIP bomb protection."""

    def test_validate_normal_zip(self, sample_docx_bytes: bytes) -> None:
        """Normal DOCX file passes ZIP safety validation."""
        validate_zip_safety(sample_docx_bytes)

    def test_validate_excessive_compression_ratio(self) -> None:
        """ZIP with extremely high compression ratio raises ValueError."""
        buffer = io.BytesIO()
        with zipfile.ZipFile(buffer, "w", zipfile.ZIP_DEFLATED) as zf:
            zf.writestr("zeros.bin", b"\x00" * (10 * 1024 * 1024))  # 10MB of zeros
        data = buffer.getvalue()

        with pytest.raises(ValueError, match="Suspicious compression ratio"):
            validate_zip_safety(data, max_ratio=50.0)

    def test_validate_with_custom_limits(self, sample_docx_bytes: bytes) -> None:
        """ZIP validation respects custom limits."""
        validate_zip_safety(sample_docx_bytes, max_ratio=50.0, max_uncompressed_mb=100)

    def test_validate_corrupted_zip(self, corrupted_zip_bytes: bytes) -> None:
        """Corrupted ZIP file raises ValueError."""
        with pytest.raises(ValueError, match="Invalid ZIP file"):
            validate_zip_safety(corrupted_zip_bytes)
