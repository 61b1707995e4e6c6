"""Tests for DOCX and PDF text extraction helpers."""

from io import BytesIO

from docx import Document

from profile_parser.core.docx_extractor import extract_docx_text
from profile_parser.core.pdf_extractor import best_page_text, damage_score, page_text


class FakePage:
    """Stands in for a pdfplumber page: only extract_words is used."""

    def __init__(self, words_for_tolerance):
        self.words_for_tolerance = words_for_tolerance

    def extract_words(self, x_tolerance=3, **kwargs):
        return self.words_for_tolerance(x_tolerance)


def word(text, x0, top):
    return {"text": text, "x0": x0, "top": top}


def docx_bytes(doc) -> bytes:
    buf = BytesIO()
    doc.save(buf)
    return buf.getvalue()


def test_docx_paragraphs_then_tables():
    doc = Document()
    doc.add_paragraph("Jane Doe")
    doc.add_paragraph("")
    doc.add_paragraph("jane.doe@example.com")
    table = doc.add_table(rows=1, cols=2)
    table.rows[0].cells[0].text = "SKILLS"
    table.rows[0].cells[1].text = "Python, SQL"

    text = extract_docx_text(docx_bytes(doc))
    assert text.split("\n") == ["Jane Doe", "jane.doe@example.com", "SKILLS", "Python, SQL"]


def test_docx_merged_cells_read_once():
    doc = Document()
    table = doc.add_table(rows=1, cols=2)
    a, b = table.rows[0].cells
    a.text = "Austin, TX"
    a.merge(b)

    text = extract_docx_text(docx_bytes(doc))
    assert text.count("Austin, TX") == 1


def test_page_text_groups_words_into_lines():
    words = [word("Engineer", 60, 100.2), word("Senior", 10, 100.0), word("Acme", 10, 115.0)]
    page = FakePage(lambda xt: words)
    assert page_text(page) == "Senior Engineer\nAcme"


def test_page_text_empty_page():
    assert page_text(FakePage(lambda xt: [])) == ""


def test_damage_score():
    assert damage_score("Senior Engineer at Acme") == 0
    assert damage_score("Seniorsoftwareengineeratacme") == 10
    assert damage_score("") == 1e9


def test_best_page_text_prefers_undamaged_tolerance():
    def words_for(xt):
        if xt >= 2.5:
            return [word("Seniorsoftwareengineeratacme", 10, 100)]
        return [word("Senior", 10, 100), word("Engineer", 60, 100)]

    text, tolerance = best_page_text(FakePage(words_for), tolerances=[3, 1.5])
    assert text == "Senior Engineer"
    assert tolerance == 1.5
