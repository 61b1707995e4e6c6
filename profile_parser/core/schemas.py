import uuid
from typing import Any, Dict, List, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


SectionName = Literal["Summary", "Employment", "Education", "Skills", "Interests", "Personal", "Other"]
SkillCategory = Literal["technical", "soft", "language", "other"]
SkillLevel = Literal["beginner", "intermediate", "advanced", "expert"]
InterestCategory = Literal["hobby", "volunteer", "interest", "other"]
ParseQuality = Literal["high", "medium", "low"]
ParsePath = Literal["ai", "heuristic"]

# Lines of the source document after normalization. Immutable once built.
RawDocument = Tuple[str, ...]


def new_entry_id(prefix: str) -> str:
    """Opaque unique id, e.g. ``exp_3f9c0a1b2d4e``."""
    return f"{prefix}_{uuid.uuid4().hex[:12]}"


class ProfileModel(BaseModel):
    """Base model: snake_case attributes, camelCase on the wire."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Section(ProfileModel):
    """
    Half-open line range [start_line, end_line) over a RawDocument.

    start_line points at the header line when the section has one, so the
    sections returned by the segmenter tile the whole document.
    """
    name: SectionName
    title: str = Field(default="", description="Header text as written; empty for the untitled leading block")
    start_line: int
    end_line: int

    @property
    def content_start(self) -> int:
        return self.start_line + 1 if self.title else self.start_line

    def content(self, document: RawDocument) -> List[str]:
        return list(document[self.content_start:self.end_line])


class DateRange(ProfileModel):
    start_date: str = Field(default="", description="YYYY-MM or empty")
    end_date: str = Field(default="", description="YYYY-MM or empty")
    is_current: bool = False

    @model_validator(mode="after")
    def _enforce_invariants(self) -> "DateRange":
        if self.is_current:
            self.end_date = ""
        # Both sides are zero-padded YYYY-MM, so string order is date order
        if self.start_date and self.end_date and self.start_date > self.end_date:
            self.start_date, self.end_date = self.end_date, self.start_date
        return self

    @property
    def is_empty(self) -> bool:
        return not (self.start_date or self.end_date or self.is_current)


class EmploymentEntry(ProfileModel):
    id: str = Field(default_factory=lambda: new_entry_id("exp"))
    position: str = ""
    company: str = ""
    location: str = ""
    date_range: DateRange = Field(default_factory=DateRange)
    description: str = ""
    achievements: List[str] = Field(default_factory=list)


class EducationEntry(ProfileModel):
    id: str = Field(default_factory=lambda: new_entry_id("edu"))
    institution: str = ""  # University, School, Institute name
    degree: str = ""  # Bachelor of Science, BSc (Hons), M.S., etc.
    field: str = ""  # Computer Science, Geography, etc.
    location: str = ""
    date_range: DateRange = Field(default_factory=DateRange)
    gpa: str = ""
    achievements: List[str] = Field(default_factory=list)  # Honors, coursework, etc.


class SkillEntry(ProfileModel):
    id: str = Field(default_factory=lambda: new_entry_id("skill"))
    name: str
    category: SkillCategory = "other"
    level: SkillLevel = "intermediate"


class InterestEntry(ProfileModel):
    id: str = Field(default_factory=lambda: new_entry_id("interest"))
    name: str
    category: InterestCategory = "hobby"
    description: str = ""


class PersonalInfo(ProfileModel):
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    phone: str = ""
    location: str = ""
    website: str = ""
    linkedin: str = ""
    github: str = ""
    professional_overview: str = ""


class StructuredProfile(ProfileModel):
    personal_info: PersonalInfo = Field(default_factory=PersonalInfo)
    employment: List[EmploymentEntry] = Field(default_factory=list)
    education: List[EducationEntry] = Field(default_factory=list)
    skills: List[SkillEntry] = Field(default_factory=list)
    interests: List[InterestEntry] = Field(default_factory=list)


class StrategyResult(ProfileModel):
    """Output of one employment strategy for one parse invocation."""
    strategy: str
    entries: List[EmploymentEntry] = Field(default_factory=list)
    score: int = 0


class ParseDiagnostics(ProfileModel):
    """Which path produced the employment list. Observability only."""
    path: ParsePath
    employment_strategy: Optional[str] = None
    strategy_scores: Dict[str, int] = Field(default_factory=dict)
    ai_failure_reason: Optional[str] = None
    sections: List[str] = Field(default_factory=list)


class ParseOutcome(ProfileModel):
    profile: StructuredProfile
    diagnostics: ParseDiagnostics
    warnings: List[str] = Field(default_factory=list)


class CompletenessSection(ProfileModel):
    id: str
    name: str
    status: Literal["complete", "partial", "missing"]
    score: int
    max_score: int = 100
    issues: List[str] = Field(default_factory=list)
    suggestions: List[str] = Field(default_factory=list)


class ProfileCompleteness(ProfileModel):
    percentage: int = Field(..., ge=0, le=100)
    status: Literal["excellent", "good", "needs-work", "incomplete"]
    parse_quality: ParseQuality
    sections: List[CompletenessSection] = Field(default_factory=list)
    next_steps: List[str] = Field(default_factory=list)


class ParseResponse(ProfileModel):
    profile: StructuredProfile
    diagnostics: ParseDiagnostics
    completeness: ProfileCompleteness
    parse_quality: ParseQuality
    warnings: List[str] = Field(default_factory=list)
    trace: List[Dict[str, Any]] = Field(default_factory=list)


class ParseTextRequest(ProfileModel):
    text: str = Field(..., description="Resume text already extracted from the source file")
    debug: bool = Field(default=False, description="Include the diagnostic trace in the response")
