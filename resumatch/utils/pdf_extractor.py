from __future__ import annotations

from dataclasses import dataclass
from io import BytesIO
from typing import Any

from pypdf import PdfReader

from resumatch.core.config import settings
from resumatch.utils.text_normalizer import collapse_blank_runs

# Fragments whose baselines differ by no more than this belong to one line
LINE_TOLERANCE = 4.0


@dataclass(frozen=True)
class TextFragment:
    """A run of text positioned on the page (PDF user space, origin bottom-left)."""

    x: float
    y: float
    text: str


def _fragment_position(cm: list[float], tm: list[float]) -> tuple[float, float]:
    # Text-space origin mapped through the current transformation matrix
    x = tm[4] * cm[0] + tm[5] * cm[2] + cm[4]
    y = tm[4] * cm[1] + tm[5] * cm[3] + cm[5]
    return x, y


def group_fragments_into_lines(
    fragments: list[TextFragment],
    tolerance: float = LINE_TOLERANCE,
) -> list[str]:
    """Rebuild reading-order lines from positioned fragments.

    Fragments are clustered by vertical proximity, each cluster is read
    left to right and clusters are ordered top to bottom.

    Args:
        fragments: Positioned fragments of one page.
        tolerance: Maximum baseline distance within one line.

    Returns:
        list[str]: Page lines, top first.
    """
    lines: list[list[TextFragment]] = []
    anchor_y: float | None = None

    for fragment in sorted(fragments, key=lambda f: -f.y):
        if anchor_y is None or abs(anchor_y - fragment.y) > tolerance:
            lines.append([])
            anchor_y = fragment.y
        lines[-1].append(fragment)

    rendered: list[str] = []
    for line in lines:
        parts = [f.text.strip() for f in sorted(line, key=lambda f: f.x)]
        rendered.append(" ".join(p for p in parts if p))
    return rendered


def _page_fragments(page: Any) -> tuple[list[TextFragment], str]:
    fragments: list[TextFragment] = []

    def visitor(text: str, cm: list[float], tm: list[float], font_dict: Any, font_size: Any) -> None:
        for piece in text.splitlines():
            if piece.strip():
                x, y = _fragment_position(cm, tm)
                fragments.append(TextFragment(x=x, y=y, text=piece))

    plain = page.extract_text(visitor_text=visitor) or ""
    return fragments, plain


def extract_text_from_pdf_bytes(data: bytes) -> tuple[str, dict]:
    """Extract reading-order text from PDF file bytes.

    Each page's text fragments are regrouped into lines by their vertical
    position. Pages are separated by a blank line.

    Args:
        data: Raw bytes of the PDF file.

    Returns:
        tuple: A tuple containing:
            - str: Extracted text from all pages.
            - dict: Metadata with page count.

    Raises:
        ValueError: If PDF has too many pages.
    """
    reader = PdfReader(BytesIO(data))

    page_count = len(reader.pages)
    max_pages = settings.app.max_pdf_pages

    if page_count > max_pages:
        raise ValueError(
            f"PDF has too many pages: {page_count} (max allowed: {max_pages})"
        )

    pages: list[str] = []
    for page in reader.pages:
        fragments, plain = _page_fragments(page)
        if fragments:
            pages.append("\n".join(group_fragments_into_lines(fragments)))
        else:
            pages.append(plain)

    full_text = collapse_blank_runs("\n\n".join(pages)).strip()
    meta = {"pages": page_count}
    return full_text, meta
