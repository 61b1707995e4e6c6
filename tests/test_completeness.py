"""Tests for completeness scoring and parse quality."""

import datetime

from profile_parser.core.completeness import (
    analyze_experience,
    analyze_skills,
    calculate_completeness,
    calculate_parse_quality,
    contact_warnings,
)
from profile_parser.core.profile_parser import parse_resume_text
from profile_parser.core.schemas import DateRange, EmploymentEntry, PersonalInfo, SkillEntry, StructuredProfile

TODAY = datetime.date(2025, 1, 1)


def test_parse_quality_thresholds():
    assert calculate_parse_quality(PersonalInfo(first_name="Jane", email="j@x.com", phone="555 123 4567")) == "high"
    assert calculate_parse_quality(PersonalInfo(first_name="Jane", email="j@x.com")) == "medium"
    assert calculate_parse_quality(PersonalInfo(email="j@x.com")) == "low"
    assert calculate_parse_quality(PersonalInfo()) == "low"


def test_contact_warnings():
    assert contact_warnings(PersonalInfo()) == [
        "Could not extract email. User clarification needed.",
        "Could not extract candidate name. User clarification needed.",
    ]
    assert contact_warnings(PersonalInfo(first_name="Jane", email="j@x.com")) == []


def test_empty_profile_is_incomplete():
    result = calculate_completeness(StructuredProfile(), today=TODAY)
    assert result.percentage == 0
    assert result.status == "incomplete"
    assert result.parse_quality == "low"
    assert [s.status for s in result.sections] == ["missing"] * 5
    assert len(result.next_steps) == 3
    assert result.next_steps[0] == "Fix Personal Information: Missing First name"


def test_old_undescribed_experience():
    entry = EmploymentEntry(
        position="Engineer",
        company="Acme",
        date_range=DateRange(start_date="2010-01", end_date="2015-06"),
    )
    section = analyze_experience([entry], TODAY)
    assert section.score == 50
    assert section.status == "partial"
    assert "No recent work experience (last 5 years)" in section.issues


def test_current_role_counts_as_recent():
    entry = EmploymentEntry(
        position="Engineer",
        company="Acme",
        date_range=DateRange(start_date="2010-01", is_current=True),
        achievements=["Shipped v2"],
    )
    assert analyze_experience([entry], TODAY).score == 100


def test_skill_count_and_variety():
    few = [SkillEntry(name="Python", category="technical"), SkillEntry(name="Leadership", category="soft")]
    section = analyze_skills(few)
    assert section.score == 70
    assert section.status == "partial"

    many = [SkillEntry(name=f"Skill {i}", category="technical") for i in range(10)]
    assert analyze_skills(many).score == 70


def test_parsed_resume_completeness():
    text = (
        "JANE DOE\n"
        "jane.doe@example.com | (555) 123-4567 | Austin, TX\n"
        "EXPERIENCE\n"
        "Senior Product Manager at Globex Corporation\n"
        "2019 - Present\n"
        "Leading the payments roadmap across three product teams.\n"
        "EDUCATION\n"
        "BSc Computer Science, University of Texas\n"
        "2012 - 2016\n"
        "SKILLS\n"
        "Python, SQL, Leadership\n"
        "INTERESTS\n"
        "Running, Golf, Photography\n"
    )
    result = calculate_completeness(parse_resume_text(text).profile, today=TODAY)

    scores = {s.id: s.score for s in result.sections}
    assert scores == {"personal": 80, "experience": 100, "education": 100, "skills": 70, "interests": 70}
    assert result.percentage == 84
    assert result.status == "good"
    assert result.parse_quality == "high"
    assert result.next_steps == [
        "Fix Skills: Need more skills (minimum 5 recommended)",
        "Polish your profile with remaining suggestions",
    ]
