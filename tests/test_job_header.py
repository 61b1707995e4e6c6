"""Tests for splitting a job-header line into position, company and location."""

from profile_parser.core.job_header import JobHeaderParts, split_job_header


def test_title_at_company():
    parts = split_job_header("Senior Engineer at Acme Corp")
    assert parts.position == "Senior Engineer"
    assert parts.company == "Acme Corp"
    assert parts.location == ""


def test_company_first_is_swapped():
    """'Company - Title' puts the role in position, not company."""
    parts = split_job_header("Acme Corp - Senior Engineer")
    assert parts.position == "Senior Engineer"
    assert parts.company == "Acme Corp"


def test_combined_titles_stay_together():
    parts = split_job_header("Site Lead | Director of Engineering: ESO, Belfast")
    assert parts.position == "Site Lead | Director of Engineering"
    assert parts.company == "ESO"
    assert parts.location == "Belfast"


def test_colon_form_with_location():
    parts = split_job_header("Acme Corp: Product Owner: London")
    assert (parts.position, parts.company, parts.location) == ("Product Owner", "Acme Corp", "London")


def test_comma_form_keeps_location_out_of_company():
    parts = split_job_header("Data Analyst, Globex Ltd, Dublin, Ireland")
    assert parts.position == "Data Analyst"
    assert parts.company == "Globex Ltd"
    assert parts.location == "Dublin, Ireland"


def test_inline_date_is_split_off():
    parts = split_job_header("Engineer | Acme 2019 - 2021")
    assert parts.position == "Engineer"
    assert parts.company == "Acme"
    assert parts.date_text == "2019 - 2021"


def test_empty_line_gives_empty_parts():
    assert split_job_header("") == JobHeaderParts()
    assert split_job_header(None) == JobHeaderParts()
