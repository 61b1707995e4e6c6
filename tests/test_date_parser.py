"""Tests for free-text date range parsing."""

from profile_parser.core.date_parser import find_date_span, parse_date_range, split_off_date


def test_month_year_to_present():
    """'Present' marks the range current and leaves the end empty."""
    r = parse_date_range("Jan 2024 to Present")
    assert r.start_date == "2024-01"
    assert r.end_date == ""
    assert r.is_current is True


def test_year_range_defaults_months():
    """A bare year starts in January and ends in December."""
    r = parse_date_range("2020-2022")
    assert (r.start_date, r.end_date, r.is_current) == ("2020-01", "2022-12", False)


def test_full_month_names_with_en_dash():
    r = parse_date_range("March 2019 – June 2021")
    assert (r.start_date, r.end_date) == ("2019-03", "2021-06")


def test_numeric_months():
    r = parse_date_range("03/2020 - 11/2022")
    assert (r.start_date, r.end_date) == ("2020-03", "2022-11")


def test_iso_year_month_halves():
    r = parse_date_range("2021-03 - 2022-05")
    assert (r.start_date, r.end_date) == ("2021-03", "2022-05")
    assert parse_date_range("2020-11 to Present").start_date == "2020-11"
    # Still a plain year range, not a month
    assert parse_date_range("2020-2022").end_date == "2022-12"


def test_start_month_borrows_end_year():
    r = parse_date_range("Jan - Mar 2021")
    assert (r.start_date, r.end_date) == ("2021-01", "2021-03")


def test_abbreviated_month_with_period():
    r = parse_date_range("Sept 2010 - June 2014")
    assert (r.start_date, r.end_date) == ("2010-09", "2014-06")


def test_single_year_gives_start_only():
    r = parse_date_range("2019")
    assert r.start_date == "2019-01"
    assert r.end_date == ""
    assert r.is_current is False


def test_reversed_range_is_swapped():
    """A range written backwards never produces start > end."""
    r = parse_date_range("2022 - 2019")
    assert (r.start_date, r.end_date) == ("2019-01", "2022-12")


def test_no_year_gives_empty_range():
    assert parse_date_range("").is_empty
    assert parse_date_range("Present").is_empty
    assert parse_date_range("no dates here").is_empty


def test_find_date_span_inside_header():
    line = "Senior Engineer | Acme Corp 2019 - 2021"
    span = find_date_span(line)
    assert span is not None
    assert line[span[0]:span[1]] == "2019 - 2021"


def test_find_date_span_ignores_month_word_without_year():
    """'May' in a title is not a date unless a year comes with it."""
    assert find_date_span("May Day Project Lead") is None


def test_split_off_date():
    rest, date_text = split_off_date("2002 – 2005: BSc (Hons) Geography")
    assert date_text == "2002 – 2005"
    assert rest == "BSc (Hons) Geography"


def test_split_off_date_without_date():
    assert split_off_date("Senior Engineer at Acme Corp") == ("Senior Engineer at Acme Corp", "")


def test_split_off_iso_date():
    assert split_off_date("Senior Engineer, Acme Corp 2021-03 - 2022-05") == ("Senior Engineer, Acme Corp", "2021-03 - 2022-05")
