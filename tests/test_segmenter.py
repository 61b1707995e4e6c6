"""Tests for section header detection and document segmentation."""

from profile_parser.core.segmenter import (
    UNTITLED_SECTION,
    employment_lines,
    match_section_header,
    section_lines,
    segment_document,
)
from profile_parser.core.text_normalization import to_raw_document


def test_exact_keyword_header():
    assert match_section_header("EMPLOYMENT HISTORY") == "Employment"
    assert match_section_header("Education:") == "Education"
    assert match_section_header("Key Skills") == "Skills"


def test_longest_keyword_wins():
    """'Personal Interests' is an Interests header, not a Personal one."""
    assert match_section_header("PERSONAL INTERESTS") == "Interests"
    assert match_section_header("My Personal Interests") == "Interests"


def test_job_title_containing_keyword_is_not_a_header():
    assert match_section_header("Director of Education Programs") is None


def test_content_lines_are_not_headers():
    assert match_section_header("Senior Engineer at Acme Corp") is None
    assert match_section_header("Belfast, UK") is None
    assert match_section_header("Jan 2021 to Present") is None
    assert match_section_header("Built distributed systems.") is None
    assert match_section_header("") is None
    assert match_section_header(None) is None


def test_sections_tile_the_document():
    document = to_raw_document(
        "Jane Doe\n"
        "jane@example.com\n"
        "EXPERIENCE\n"
        "Engineer at Acme\n"
        "EDUCATION\n"
        "BSc Computing, Ulster University\n"
    )
    sections = segment_document(document)

    assert [s.name for s in sections] == [UNTITLED_SECTION, "Employment", "Education"]
    assert sections[0].start_line == 0
    assert sections[-1].end_line == len(document)
    for prev, nxt in zip(sections, sections[1:]):
        assert prev.end_line == nxt.start_line, "Sections must not overlap or leave gaps"

    assert sections[0].title == ""
    assert sections[1].title == "EXPERIENCE"
    assert section_lines(document, sections, "Employment") == ["Engineer at Acme"]


def test_no_untitled_block_when_document_starts_with_header():
    document = to_raw_document("SKILLS\nPython, SQL")
    sections = segment_document(document)
    assert len(sections) == 1
    assert sections[0].name == "Skills"
    assert (sections[0].start_line, sections[0].end_line) == (0, 2)


def test_document_without_headers_is_one_untitled_section():
    document = to_raw_document("Engineer at Acme\n2019 - 2021")
    sections = segment_document(document)
    assert len(sections) == 1
    assert sections[0].name == UNTITLED_SECTION
    assert employment_lines(document, sections) == ["Engineer at Acme", "2019 - 2021"]


def test_empty_document_has_no_sections():
    assert segment_document(()) == []
