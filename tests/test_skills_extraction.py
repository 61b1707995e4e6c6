"""Tests for skills extraction."""

from profile_parser.core.skills_parser import extract_skills, find_inline_skill_lines


def names(skills):
    return [s.name for s in skills]


def test_comma_list_with_categories():
    skills = extract_skills(["Python, SQL, Leadership"])
    assert [(s.name, s.category) for s in skills] == [
        ("Python", "technical"),
        ("SQL", "technical"),
        ("Leadership", "soft"),
    ]
    assert all(s.level == "intermediate" for s in skills)


def test_subheading_and_levels():
    skills = extract_skills(["Languages: English (Native), French - Fluent"])
    assert [(s.name, s.category, s.level) for s in skills] == [
        ("English", "language", "expert"),
        ("French", "language", "expert"),
    ]


def test_duplicates_removed_case_insensitively():
    assert names(extract_skills(["Python, python", "• PYTHON"])) == ["Python"]


def test_bulleted_lines():
    assert names(extract_skills(["• Docker", "• Kubernetes"])) == ["Docker", "Kubernetes"]


def test_prose_token_yields_vocabulary_hits():
    skills = extract_skills(["Experienced in Python and Kubernetes across cloud platforms"])
    assert "Python" in names(skills)
    assert "Kubernetes" in names(skills)
    assert "Experienced in Python and Kubernetes across cloud platforms" not in names(skills)


def test_free_form_skill_kept_with_hint_category():
    skills = extract_skills(["Data Pipelines"])
    assert names(skills) == ["Data Pipelines"]
    assert skills[0].category == "technical"


def test_find_inline_skill_lines():
    lines = ["Skills: Python, Docker", "Built distributed systems.", "• Key Skills - SQL"]
    assert find_inline_skill_lines(lines) == ["Skills: Python, Docker", "• Key Skills - SQL"]


def test_inline_skill_line_is_parsed():
    assert names(extract_skills(["Skills: Python, Docker"])) == ["Python", "Docker"]
