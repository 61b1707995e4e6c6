"""
Shared field-validation pass.

Both the AI path and the heuristic path end here, so callers always receive
the same contract: every array present, every entry with an id, dates in
YYYY-MM form, categories and levels from their fixed sets.

The AI delegate answers in loosely-followed JSON ("experience" instead of
"employment", flat startDate/endDate/current keys, "Technical Skills" as a
category), so the pass is lenient about shape and strict about output.
"""

import logging
import re
from typing import Any, Dict, List, Optional, Tuple

from pydantic import ValidationError

from profile_parser.core.date_parser import parse_date_range
from profile_parser.core.errors import ProfileSchemaError
from profile_parser.core.schemas import StructuredProfile, new_entry_id
from profile_parser.core.vocabulary import DEFAULT_VOCABULARY, HeuristicVocabulary

logger = logging.getLogger(__name__)

ISO_DATE_RE = re.compile(r"^((?:19|20)\d{2})-(0[1-9]|1[0-2])(?:-\d{2})?$")
YEAR_ONLY_RE = re.compile(r"^((?:19|20)\d{2})$")

# Payload keys accepted for each list, first match wins
LIST_KEYS = {
    "employment": ["employment", "experience", "workExperience", "work_experience"],
    "education": ["education"],
    "skills": ["skills"],
    "interests": ["interests", "hobbies"],
}
ID_PREFIXES = {"employment": "exp", "education": "edu", "skills": "skill", "interests": "interest"}

SKILL_CATEGORIES = {"technical", "soft", "language", "other"}
SKILL_LEVELS = {"beginner", "intermediate", "advanced", "expert"}
INTEREST_CATEGORIES = {"hobby", "volunteer", "interest", "other"}
INTEREST_CATEGORY_SYNONYMS = {
    "hobbies": "hobby",
    "interests": "interest",
    "volunteering": "volunteer",
    "volunteer work": "volunteer",
    "community": "volunteer",
}


def _clean_str(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, (list, tuple)):
        return " ".join(_clean_str(v) for v in value if v is not None).strip()
    return str(value).strip()


def _clean_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value.strip()] if value.strip() else []
    if isinstance(value, (list, tuple)):
        return [_clean_str(v) for v in value if _clean_str(v)]
    return [_clean_str(value)]


def _pick(item: Dict[str, Any], *keys: str) -> Any:
    for key in keys:
        if item.get(key) not in (None, ""):
            return item[key]
    return None


# ===== DATES =====

def normalize_date(value: Any, vocab: HeuristicVocabulary = DEFAULT_VOCABULARY) -> Tuple[str, bool]:
    """
    Normalize one date value to (YYYY-MM or "", is_present).

    Examples:
        "2021-03-15" -> ("2021-03", False)
        "2021" -> ("2021-01", False)
        "March 2021" -> ("2021-03", False)
        "Present" -> ("", True)
    """
    text = _clean_str(value)
    if not text:
        return "", False
    m = ISO_DATE_RE.match(text)
    if m:
        return f"{m.group(1)}-{m.group(2)}", False
    m = YEAR_ONLY_RE.match(text)
    if m:
        return f"{m.group(1)}-01", False
    if vocab.present_pattern().fullmatch(text.strip(" .")):
        return "", True
    parsed = parse_date_range(text, vocab)
    return parsed.start_date, parsed.is_current


def _normalize_date_range(item: Dict[str, Any], vocab: HeuristicVocabulary) -> Dict[str, Any]:
    nested = item.get("dateRange") or item.get("date_range")
    if nested is not None and not isinstance(nested, dict):
        raise ProfileSchemaError(f"dateRange must be an object, got {type(nested).__name__}")
    source = nested or item

    start, start_present = normalize_date(_pick(source, "startDate", "start_date", "start"), vocab)
    end, end_present = normalize_date(_pick(source, "endDate", "end_date", "end"), vocab)
    current_flag = _pick(source, "isCurrent", "is_current", "current")
    if isinstance(current_flag, str):
        current_flag = current_flag.strip().lower() in ("true", "yes", "1")
    is_current = bool(current_flag) or end_present or start_present
    return {"startDate": start, "endDate": "" if is_current else end, "isCurrent": is_current}


# ===== CATEGORIES =====

def normalize_skill_category(value: Any) -> str:
    """'Technical Skills' -> technical, 'Soft Skills' -> soft, 'Languages' -> language, else other."""
    text = _clean_str(value).lower()
    if text in SKILL_CATEGORIES:
        return text
    if "soft" in text or "interpersonal" in text:
        return "soft"
    if "tech" in text or "programming" in text or "tool" in text:
        return "technical"
    if "language" in text:
        return "language"
    return "other"


def normalize_skill_level(value: Any, vocab: HeuristicVocabulary = DEFAULT_VOCABULARY) -> str:
    text = _clean_str(value).lower()
    if text in SKILL_LEVELS:
        return text
    for level, hints in vocab.skill_level_hints.items():
        if text and any(re.search(rf"\b{re.escape(h)}\b", text) for h in hints):
            return level
    return "intermediate"


def normalize_interest_category(value: Any) -> str:
    text = _clean_str(value).lower()
    if text in INTEREST_CATEGORIES:
        return text
    if text in INTEREST_CATEGORY_SYNONYMS:
        return INTEREST_CATEGORY_SYNONYMS[text]
    return "other" if text else "hobby"


# ===== ENTRIES =====

def _employment_item(item: Dict[str, Any], vocab: HeuristicVocabulary) -> Dict[str, Any]:
    return {
        "id": _clean_str(item.get("id")),
        "position": _clean_str(_pick(item, "position", "jobTitle", "job_title", "title", "role")),
        "company": _clean_str(_pick(item, "company", "employer", "organization")),
        "location": _clean_str(item.get("location")),
        "dateRange": _normalize_date_range(item, vocab),
        "description": _clean_str(item.get("description")),
        "achievements": _clean_list(item.get("achievements")),
    }


def _education_item(item: Dict[str, Any], vocab: HeuristicVocabulary) -> Dict[str, Any]:
    return {
        "id": _clean_str(item.get("id")),
        "institution": _clean_str(_pick(item, "institution", "school", "university")),
        "degree": _clean_str(item.get("degree")),
        "field": _clean_str(_pick(item, "field", "fieldOfStudy", "field_of_study", "major")),
        "location": _clean_str(item.get("location")),
        "dateRange": _normalize_date_range(item, vocab),
        "gpa": _clean_str(item.get("gpa")),
        "achievements": _clean_list(item.get("achievements")),
    }


def _skill_item(item: Dict[str, Any], vocab: HeuristicVocabulary) -> Optional[Dict[str, Any]]:
    name = _clean_str(item.get("name"))
    if not name:
        return None
    return {
        "id": _clean_str(item.get("id")),
        "name": name,
        "category": normalize_skill_category(item.get("category")),
        "level": normalize_skill_level(item.get("level"), vocab),
    }


def _interest_item(item: Dict[str, Any], vocab: HeuristicVocabulary) -> Optional[Dict[str, Any]]:
    name = _clean_str(item.get("name"))
    if not name:
        return None
    return {
        "id": _clean_str(item.get("id")),
        "name": name,
        "category": normalize_interest_category(item.get("category")),
        "description": _clean_str(item.get("description")),
    }


ITEM_NORMALIZERS = {
    "employment": _employment_item,
    "education": _education_item,
    "skills": _skill_item,
    "interests": _interest_item,
}


def _list_payload(payload: Dict[str, Any], field: str) -> List[Any]:
    for key in LIST_KEYS[field]:
        if key in payload and payload[key] is not None:
            value = payload[key]
            if not isinstance(value, list):
                raise ProfileSchemaError(f"'{key}' must be a list, got {type(value).__name__}")
            return value
    return []


def _personal_payload(payload: Dict[str, Any]) -> Dict[str, Any]:
    personal = payload.get("personalInfo") or payload.get("personal_info") or {}
    if not isinstance(personal, dict):
        raise ProfileSchemaError(f"personalInfo must be an object, got {type(personal).__name__}")

    first = _clean_str(_pick(personal, "firstName", "first_name"))
    last = _clean_str(_pick(personal, "lastName", "last_name"))
    full = _clean_str(_pick(personal, "fullName", "full_name", "name"))
    if full and not (first or last):
        parts = full.split()
        first, last = parts[0], " ".join(parts[1:])

    return {
        "firstName": first,
        "lastName": last,
        "email": _clean_str(personal.get("email")),
        "phone": _clean_str(personal.get("phone")),
        "location": _clean_str(personal.get("location")),
        "website": _clean_str(personal.get("website")),
        "linkedin": _clean_str(personal.get("linkedin")),
        "github": _clean_str(personal.get("github")),
        "professionalOverview": _clean_str(
            _pick(personal, "professionalOverview", "professional_overview", "summary")
            or _pick(payload, "professionalOverview", "summary")
        ),
    }


def validate_profile_payload(
    payload: Any,
    vocab: HeuristicVocabulary = DEFAULT_VOCABULARY,
) -> StructuredProfile:
    """
    Coerce a profile payload into a validated StructuredProfile.

    Args:
        payload: dict (camelCase or snake_case keys) or a StructuredProfile
        vocab: Present tokens and level hints used while normalizing

    Returns:
        StructuredProfile with every array present and every id filled

    Raises:
        ProfileSchemaError: payload is not an object, a list field is not a
            list, a list item is not an object, or field validation fails
    """
    if isinstance(payload, StructuredProfile):
        payload = payload.model_dump(by_alias=True)
    if not isinstance(payload, dict):
        raise ProfileSchemaError(f"Profile payload must be an object, got {type(payload).__name__}")

    cleaned: Dict[str, Any] = {"personalInfo": _personal_payload(payload)}
    for field, normalizer in ITEM_NORMALIZERS.items():
        items = []
        for index, item in enumerate(_list_payload(payload, field)):
            if isinstance(item, str) and field in ("skills", "interests"):
                item = {"name": item}
            if not isinstance(item, dict):
                raise ProfileSchemaError(f"{field}[{index}] must be an object, got {type(item).__name__}")
            normalized = normalizer(item, vocab)
            if normalized is None:
                logger.debug(f"Dropped nameless {field}[{index}]")
                continue
            if not normalized["id"]:
                normalized["id"] = new_entry_id(ID_PREFIXES[field])
            items.append(normalized)
        cleaned[field] = items

    try:
        profile = StructuredProfile.model_validate(cleaned)
    except ValidationError as e:
        raise ProfileSchemaError(f"Profile failed validation: {e}") from e

    logger.debug(
        f"Validated profile: {len(profile.employment)} employment, {len(profile.education)} education, "
        f"{len(profile.skills)} skills, {len(profile.interests)} interests"
    )
    return profile
