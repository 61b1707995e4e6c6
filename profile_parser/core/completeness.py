"""
Profile completeness and parse quality.

Each section is scored out of 100; the overall percentage is the mean. The
API uses the result to flag "parsed but low confidence" profiles so the
candidate is prompted to review them.
"""

import datetime
from typing import List, Optional

from profile_parser.core.schemas import (
    CompletenessSection,
    EducationEntry,
    EmploymentEntry,
    InterestEntry,
    PersonalInfo,
    ProfileCompleteness,
    SkillEntry,
    StructuredProfile,
)

# (attribute, label, points)
REQUIRED_PERSONAL_FIELDS = [
    ("first_name", "First name", 15),
    ("last_name", "Last name", 15),
    ("email", "Email address", 20),
    ("phone", "Phone number", 20),
]
OPTIONAL_PERSONAL_FIELDS = [
    ("location", "Location", 10),
    ("linkedin", "LinkedIn profile", 10),
    ("website", "Portfolio/website", 10),
]

RECENT_YEARS = 5
MIN_SKILLS = 5
HIGH_PRIORITY_SECTIONS = {"personal", "experience", "skills"}
MAX_NEXT_STEPS = 3


def _status(score: int, complete_at: int, partial_at: int) -> str:
    if score >= complete_at:
        return "complete"
    if score >= partial_at:
        return "partial"
    return "missing"


def analyze_personal_info(info: PersonalInfo) -> CompletenessSection:
    score = 0
    issues: List[str] = []
    suggestions: List[str] = []
    for attr, label, points in REQUIRED_PERSONAL_FIELDS:
        if getattr(info, attr).strip():
            score += points
        else:
            issues.append(f"Missing {label}")
            suggestions.append(f"Add your {label}")
    for attr, label, points in OPTIONAL_PERSONAL_FIELDS:
        if getattr(info, attr).strip():
            score += points
        else:
            suggestions.append(f"Consider adding your {label}")
    return CompletenessSection(
        id="personal", name="Personal Information", status=_status(score, 70, 35),
        score=score, issues=issues, suggestions=suggestions,
    )


def analyze_experience(entries: List[EmploymentEntry], today: datetime.date) -> CompletenessSection:
    if not entries:
        return CompletenessSection(
            id="experience", name="Work Experience", status="missing", score=0,
            issues=["No work experience added"], suggestions=["Add at least one work experience"],
        )

    score = 30
    issues: List[str] = []
    suggestions: List[str] = []

    def is_recent(entry: EmploymentEntry) -> bool:
        if entry.date_range.is_current:
            return True
        end = entry.date_range.end_date or entry.date_range.start_date
        return bool(end) and int(end[:4]) >= today.year - RECENT_YEARS

    if any(is_recent(e) for e in entries):
        score += 20
    else:
        issues.append(f"No recent work experience (last {RECENT_YEARS} years)")
        suggestions.append("Add more recent work experience")

    well_described = [e for e in entries if len(e.description) > 50 or e.achievements]
    if len(well_described) >= len(entries) / 2:
        score += 30
    else:
        issues.append("Work experience needs more detail")
        suggestions.append("Add detailed descriptions and achievements to your roles")

    if all(e.position.strip() and e.company.strip() for e in entries):
        score += 20
    else:
        issues.append("Some experience entries are missing job titles or companies")
        suggestions.append("Complete all job titles and company names")

    return CompletenessSection(
        id="experience", name="Work Experience", status=_status(score, 80, 30),
        score=score, issues=issues, suggestions=suggestions,
    )


def analyze_education(entries: List[EducationEntry]) -> CompletenessSection:
    if not entries:
        return CompletenessSection(
            id="education", name="Education", status="missing", score=0,
            issues=["No education added"], suggestions=["Add at least your highest degree or certification"],
        )

    score = 40
    issues: List[str] = []
    suggestions: List[str] = []
    if all(e.institution.strip() and e.degree.strip() for e in entries):
        score += 40
    else:
        issues.append("Some education entries are incomplete")
        suggestions.append("Complete institution and degree information")
    if all(e.date_range.end_date or e.date_range.start_date for e in entries):
        score += 20
    else:
        suggestions.append("Add graduation dates to education entries")

    return CompletenessSection(
        id="education", name="Education", status=_status(score, 80, 40),
        score=score, issues=issues, suggestions=suggestions,
    )


def analyze_skills(entries: List[SkillEntry]) -> CompletenessSection:
    if not entries:
        return CompletenessSection(
            id="skills", name="Skills", status="missing", score=0,
            issues=["No skills added"], suggestions=["Add at least 5-10 relevant skills"],
        )

    issues: List[str] = []
    suggestions: List[str] = []
    if len(entries) >= 10:
        score = 40
    elif len(entries) >= MIN_SKILLS:
        score = 25
    else:
        score = 10
        issues.append(f"Need more skills (minimum {MIN_SKILLS} recommended)")
        suggestions.append("Add more relevant technical and soft skills")

    if len({e.category for e in entries}) >= 2:
        score += 30
    else:
        suggestions.append("Add skills from different categories (technical, soft skills, etc.)")

    # Every SkillEntry carries a level; parsed ones default to intermediate
    score += 30

    return CompletenessSection(
        id="skills", name="Skills", status=_status(score, 80, 25),
        score=score, issues=issues, suggestions=suggestions,
    )


def analyze_interests(entries: List[InterestEntry]) -> CompletenessSection:
    if not entries:
        return CompletenessSection(
            id="interests", name="Interests", status="missing", score=0,
            suggestions=["Add 3-5 professional interests or hobbies"],
        )

    suggestions: List[str] = []
    score = 70 if len(entries) >= 3 else 40
    if any(e.description.strip() for e in entries):
        score += 30
    else:
        suggestions.append("Add brief descriptions to your interests")

    return CompletenessSection(
        id="interests", name="Interests", status=_status(score, 70, 40),
        score=score, suggestions=suggestions,
    )


def calculate_parse_quality(info: PersonalInfo) -> str:
    """
    'high' when name, email and phone were all found, 'medium' with two of
    them, 'low' otherwise.
    """
    found = [bool(info.first_name or info.last_name), bool(info.email), bool(info.phone)]
    share = sum(found) / len(found)
    if share >= 0.85:
        return "high"
    if share >= 0.65:
        return "medium"
    return "low"


def contact_warnings(info: PersonalInfo) -> List[str]:
    warnings = []
    if not info.email:
        warnings.append("Could not extract email. User clarification needed.")
    if not (info.first_name or info.last_name):
        warnings.append("Could not extract candidate name. User clarification needed.")
    return warnings


def _next_steps(sections: List[CompletenessSection], percentage: int) -> List[str]:
    steps = []
    urgent = sorted(
        (s for s in sections if s.id in HIGH_PRIORITY_SECTIONS and s.issues),
        key=lambda s: s.score,
    )
    for section in urgent:
        steps.append(f"Fix {section.name}: {section.issues[0]}")

    if percentage < 50:
        steps.append("Focus on completing required sections first")
    elif percentage < 75:
        steps.append("Add more detail to existing sections")
    elif percentage < 90:
        steps.append("Polish your profile with remaining suggestions")
    return steps[:MAX_NEXT_STEPS]


def calculate_completeness(profile: StructuredProfile, today: Optional[datetime.date] = None) -> ProfileCompleteness:
    """
    Score how complete a parsed profile is.

    Args:
        profile: Validated profile
        today: Reference date for the "recent experience" check (defaults to today)

    Returns:
        ProfileCompleteness with per-section scores, overall percentage,
        status (excellent >= 90, good >= 75, needs-work >= 50, else
        incomplete), parse quality and up to three next steps
    """
    today = today or datetime.date.today()
    sections = [
        analyze_personal_info(profile.personal_info),
        analyze_experience(profile.employment, today),
        analyze_education(profile.education),
        analyze_skills(profile.skills),
        analyze_interests(profile.interests),
    ]
    total = sum(s.score for s in sections)
    max_total = sum(s.max_score for s in sections)
    percentage = round(total / max_total * 100)

    if percentage >= 90:
        status = "excellent"
    elif percentage >= 75:
        status = "good"
    elif percentage >= 50:
        status = "needs-work"
    else:
        status = "incomplete"

    return ProfileCompleteness(
        percentage=percentage,
        status=status,
        parse_quality=calculate_parse_quality(profile.personal_info),
        sections=sections,
        next_steps=_next_steps(sections, percentage),
    )
