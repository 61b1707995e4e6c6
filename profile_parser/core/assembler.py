"""
Profile Assembler: merge the winning employment list with the other
extractors' output into one StructuredProfile.
"""

import logging
from typing import List, Optional

from profile_parser.core.schemas import (
    EducationEntry,
    EmploymentEntry,
    InterestEntry,
    PersonalInfo,
    SkillEntry,
    StructuredProfile,
)
from profile_parser.core.trace import NullTraceSink, TraceEvent, TraceSink

logger = logging.getLogger(__name__)


def _dedupe_by_name(items):
    seen = set()
    kept = []
    for item in items:
        key = item.name.strip().lower()
        if key in seen:
            continue
        seen.add(key)
        kept.append(item)
    return kept


def assemble_profile(
    personal: PersonalInfo,
    employment: List[EmploymentEntry],
    education: List[EducationEntry],
    skills: List[SkillEntry],
    interests: List[InterestEntry],
    trace: Optional[TraceSink] = None,
) -> StructuredProfile:
    """
    Build the final profile. Skills and interests gathered from several places
    (section plus inline lines) are deduplicated case-insensitively, first
    occurrence wins.
    """
    trace = trace or NullTraceSink()
    profile = StructuredProfile(
        personal_info=personal,
        employment=list(employment),
        education=list(education),
        skills=_dedupe_by_name(skills),
        interests=_dedupe_by_name(interests),
    )
    counts = {
        "employment": len(profile.employment),
        "education": len(profile.education),
        "skills": len(profile.skills),
        "interests": len(profile.interests),
    }
    logger.debug(f"Assembled profile: {counts}")
    trace.record(TraceEvent(name="profile.assembled", data=counts))
    return profile
