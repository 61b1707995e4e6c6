"""Tests for education extraction."""

from profile_parser.core.education_parser import extract_education, scan_for_education, split_degree_field


def test_date_line_before_degree_line():
    entries, warnings = extract_education([
        "2012 - 2016",
        "BSc Computer Science, Queen's University Belfast, Belfast, UK",
    ])
    assert warnings == []
    assert len(entries) == 1, f"Expected 1 education entry, got {len(entries)}"

    entry = entries[0]
    assert entry.degree == "BSc"
    assert entry.field == "Computer Science"
    assert entry.institution == "Queen's University Belfast"
    assert entry.location == "Belfast, UK"
    assert (entry.date_range.start_date, entry.date_range.end_date) == ("2012-01", "2016-12")


def test_degree_line_before_date_line():
    entries, _ = extract_education([
        "Bachelor of Science in Business, University of Ulster",
        "Sept 2010 - June 2014",
    ])
    assert len(entries) == 1
    entry = entries[0]
    assert entry.degree == "Bachelor of Science"
    assert entry.field == "Business"
    assert entry.institution == "University of Ulster"
    assert (entry.date_range.start_date, entry.date_range.end_date) == ("2010-09", "2014-06")


def test_inline_date_and_grade_line():
    entries, _ = extract_education([
        "2002 – 2005: BSc (Hons) Geography, University of Ulster, Coleraine",
        "Grade: 2:1",
    ])
    assert len(entries) == 1
    entry = entries[0]
    assert entry.degree == "BSc (Hons)"
    assert entry.field == "Geography"
    assert entry.institution == "University of Ulster"
    assert entry.location == "Coleraine"
    assert entry.gpa == "2:1"
    assert entry.date_range.start_date == "2002-01"


def test_institution_colon_degree():
    entries, _ = extract_education(["QUEEN'S UNIVERSITY BELFAST: MSc Software Development"])
    assert len(entries) == 1
    assert entries[0].institution == "QUEEN'S UNIVERSITY BELFAST"
    assert entries[0].degree == "MSc"
    assert entries[0].field == "Software Development"


def test_junk_detail_removed_with_warning():
    entries, warnings = extract_education([
        "BSc Computing, Ulster University",
        "References available upon request",
    ])
    assert entries[0].achievements == []
    assert warnings == ["Removed junk detail from education entry: References available upon request"]


def test_bullets_become_achievements():
    entries, _ = extract_education([
        "MSc Data Science, University of Edinburgh",
        "• Dissertation on graph neural networks",
    ])
    assert entries[0].achievements == ["Dissertation on graph neural networks"]


def test_scan_without_education_header():
    entries, _ = scan_for_education([
        "Jane Doe",
        "MSc Data Science, University of Edinburgh",
        "2018 - 2019",
        "Engineer at Acme",
    ])
    assert len(entries) == 1
    assert entries[0].institution == "University of Edinburgh"
    assert (entries[0].date_range.start_date, entries[0].date_range.end_date) == ("2018-01", "2019-12")


def test_scan_ignores_two_letter_abbreviations():
    """'MA' on its own is too weak to claim a line as education."""
    assert scan_for_education(["Worked with the MA team on pricing"]) == ([], [])


def test_split_degree_field():
    assert split_degree_field("Bachelor of Science in Business") == ("Bachelor of Science", "Business")
    assert split_degree_field("BSc (Hons) Geography") == ("BSc (Hons)", "Geography")
    assert split_degree_field("M.S. in Engineering") == ("M.S.", "Engineering")
    assert split_degree_field("Computer Science BSc") == ("BSc", "Computer Science")
    assert split_degree_field("PhD") == ("PhD", "")
    assert split_degree_field("Senior Engineer") == ("", "")
