"""Pytest configuration and fixtures shared across all test modules.

This file is automatically loaded by pytest before running any tests.
It selects the testing environment before any settings are imported and
provides document factories for building real PDF and DOCX uploads.
"""

import io
import os
from typing import Callable, Sequence

# CRITICAL: Set this before any imports that might load settings
os.environ["APP_ENV"] = "testing"
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest
from docx import Document


SAMPLE_RESUME_TEXT = """Jane Doe
jane.doe@example.com
+1 (555) 123-4567
Austin, TX

Professional Summary
Backend engineer with eight years of experience building data platforms and APIs.

Experience
Senior Engineer at Acme Corp 2019 - 2023
• Designed event pipelines in Python and Kafka • Led a team of five engineers
Software Engineer, Initech Jan 2015 - Dec 2018
- Built REST APIs with Django

Skills
Python, Django, Kafka
• Docker • Kubernetes
PostgreSQL; Redis

Education
University of Texas, B.S. Computer Science 2014
"""

# (x, y, text) triples placed with Td, one list per page
PageSpec = Sequence[tuple[float, float, str]]


def _pdf_object(number: int, body: bytes) -> bytes:
    return f"{number} 0 obj\n".encode() + body + b"\nendobj\n"


def build_text_pdf(pages: Sequence[PageSpec]) -> bytes:
    """Build a minimal PDF whose pages show text at fixed positions.

    Object layout: 1 catalog, 2 page tree, 3 font, then a page object and
    its content stream per page. The xref table carries real offsets.
    """
    page_numbers = [4 + 2 * i for i in range(len(pages))]
    kids = " ".join(f"{n} 0 R" for n in page_numbers)

    objects: list[bytes] = [
        b"<< /Type /Catalog /Pages 2 0 R >>",
        f"<< /Type /Pages /Kids [{kids}] /Count {len(pages)} >>".encode(),
        b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>",
    ]
    for page_number, fragments in zip(page_numbers, pages):
        stream = "".join(
            f"BT /F1 12 Tf {x} {y} Td ({text}) Tj ET\n" for x, y, text in fragments
        ).encode("latin-1")
        objects.append(
            (
                "<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] "
                f"/Contents {page_number + 1} 0 R /Resources << /Font << /F1 3 0 R >> >> >>"
            ).encode()
        )
        objects.append(
            f"<< /Length {len(stream)} >>\nstream\n".encode() + stream + b"\nendstream"
        )

    buffer = io.BytesIO()
    buffer.write(b"%PDF-1.4\n")
    offsets: list[int] = []
    for number, body in enumerate(objects, start=1):
        offsets.append(buffer.tell())
        buffer.write(_pdf_object(number, body))

    xref_offset = buffer.tell()
    buffer.write(f"xref\n0 {len(objects) + 1}\n".encode())
    buffer.write(b"0000000000 65535 f \n")
    for offset in offsets:
        buffer.write(f"{offset:010d} 00000 n \n".encode())
    buffer.write(
        (
            f"trailer\n<< /Size {len(objects) + 1} /Root 1 0 R >>\n"
            f"startxref\n{xref_offset}\n%%EOF\n"
        ).encode()
    )
    return buffer.getvalue()


def build_docx(paragraphs: Sequence[str], table_cells: Sequence[str] = ()) -> bytes:
    """Build a DOCX with the given body paragraphs and an optional one-row table."""
    doc = Document()
    for text in paragraphs:
        doc.add_paragraph(text)
    if table_cells:
        table = doc.add_table(rows=1, cols=len(table_cells))
        for cell, text in zip(table.rows[0].cells, table_cells):
            cell.text = text

    buffer = io.BytesIO()
    doc.save(buffer)
    return buffer.getvalue()


@pytest.fixture
def sample_resume_text() -> str:
    """Plain-text resume with all four core sections and contact details."""
    return SAMPLE_RESUME_TEXT


@pytest.fixture
def make_pdf() -> Callable[[Sequence[PageSpec]], bytes]:
    """Factory fixture building text PDFs from positioned fragments."""
    return build_text_pdf


@pytest.fixture
def make_docx() -> Callable[..., bytes]:
    """Factory fixture building DOCX documents with python-docx."""
    return build_docx
