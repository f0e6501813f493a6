from io import BytesIO

from docx import Document

from resumatch.core.config import settings


def extract_text_from_docx_bytes(data: bytes) -> tuple[str, dict]:
    """Extract text content from DOCX file bytes.

    Body paragraphs come first, in document order, followed by the
    paragraphs of any table cells (two-column resume layouts are often
    tables).

    Args:
        data: Raw bytes of the DOCX file.

    Returns:
        tuple: A tuple containing:
            - str: Extracted text, one paragraph per line.
            - dict: Metadata with paragraph and table counts.

    Raises:
        ValueError: If DOCX has too many paragraphs.
    """
    doc = Document(BytesIO(data))

    para_count = len(doc.paragraphs)
    max_paras = settings.app.max_docx_paragraphs

    if para_count > max_paras:
        raise ValueError(
            f"DOCX has too many paragraphs: {para_count} (max allowed: {max_paras})"
        )

    paragraphs = [p.text for p in doc.paragraphs if p.text.strip()]

    for table in doc.tables:
        for row in table.rows:
            for cell in row.cells:
                paragraphs.extend(p.text for p in cell.paragraphs if p.text.strip())

    full_text = "\n".join(paragraphs).strip()
    meta = {"paragraphs": len(paragraphs), "tables": len(doc.tables)}
    return full_text, meta
