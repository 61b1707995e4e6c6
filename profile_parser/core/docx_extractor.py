from io import BytesIO
from typing import Iterator

from docx import Document


def _iter_block_text(doc) -> Iterator[str]:
    for paragraph in doc.paragraphs:
        yield paragraph.text or ""
    # Two-column templates put whole sections inside tables
    for table in doc.tables:
        for row in table.rows:
            seen = set()
            for cell in row.cells:
                # Merged cells repeat the same object across the row
                if id(cell._tc) in seen:
                    continue
                seen.add(id(cell._tc))
                for paragraph in cell.paragraphs:
                    yield paragraph.text or ""


def extract_docx_text(docx_bytes: bytes) -> str:
    """
    Plain text of a DOCX: body paragraphs in order, then table cell paragraphs.
    Empty paragraphs are dropped; one paragraph per line.
    """
    doc = Document(BytesIO(docx_bytes))
    return "\n".join(t.strip() for t in _iter_block_text(doc) if t and t.strip())
