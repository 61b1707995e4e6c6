"""
Static keyword tables behind every heuristic in the parser.

The classifiers and extractors never hard-code words: they read them from a
HeuristicVocabulary (DEFAULT_VOCABULARY unless the caller injects another one),
so the tables can be tuned or swapped per corpus without touching control flow.
"""

import re
from typing import Callable, Dict, List, Pattern

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr


# ===== SECTION HEADERS =====

SECTION_KEYWORDS: Dict[str, List[str]] = {
    "Summary": [
        "PROFILE", "SUMMARY", "OBJECTIVE", "ABOUT ME", "PROFESSIONAL SUMMARY",
        "CAREER SUMMARY", "PERSONAL STATEMENT", "PROFESSIONAL PROFILE",
    ],
    "Employment": [
        "EMPLOYMENT", "EXPERIENCE", "WORK HISTORY", "CAREER HISTORY", "PROFESSIONAL EXPERIENCE",
        "EMPLOYMENT HISTORY", "WORK EXPERIENCE", "CAREER EXPERIENCE", "RELEVANT EXPERIENCE",
        "PROFESSIONAL BACKGROUND",
    ],
    "Education": [
        "EDUCATION", "ACADEMIC BACKGROUND", "QUALIFICATIONS", "EDUCATION & TRAINING",
        "EDUCATION AND TRAINING", "ACADEMIC QUALIFICATIONS",
    ],
    "Skills": [
        "SKILLS", "KEY SKILLS", "TECHNICAL SKILLS", "CORE SKILLS", "CORE COMPETENCIES",
        "COMPETENCIES", "TECHNOLOGIES", "LANGUAGES", "AREAS OF EXPERTISE",
    ],
    "Interests": [
        "INTERESTS", "HOBBIES", "ACTIVITIES", "PERSONAL INTERESTS", "HOBBIES & INTERESTS",
        "VOLUNTEERING", "VOLUNTEER EXPERIENCE",
    ],
    "Personal": [
        "PERSONAL", "PERSONAL DETAILS", "CONTACT", "CONTACT INFORMATION", "DETAILS",
    ],
    "Other": [
        "PROJECTS", "PORTFOLIO", "CERTIFICATIONS", "LICENSES", "AWARDS", "PUBLICATIONS",
        "REFERENCES",
    ],
}

# ===== DATES =====

MONTHS: Dict[str, str] = {
    "january": "01", "jan": "01",
    "february": "02", "feb": "02",
    "march": "03", "mar": "03",
    "april": "04", "apr": "04",
    "may": "05",
    "june": "06", "jun": "06",
    "july": "07", "jul": "07",
    "august": "08", "aug": "08",
    "september": "09", "sept": "09", "sep": "09",
    "october": "10", "oct": "10",
    "november": "11", "nov": "11",
    "december": "12", "dec": "12",
}

PRESENT_TOKENS = ["present", "current", "now"]

# Words that disqualify a line from being a date even if it holds 4 digits
NON_DATE_MARKERS = ["gpa", "grade", "id", "score", "ref", "no.", "#"]

# ===== JOB HEADERS =====

JOB_TITLE_WORDS = [
    "engineer", "manager", "director", "analyst", "consultant", "developer", "designer",
    "lead", "senior", "principal", "architect", "specialist", "owner", "head", "chief",
    "officer", "president", "vp", "administrator", "coordinator", "assistant", "associate",
    "intern", "scientist", "technician", "accountant", "executive", "supervisor",
    "representative", "programmer", "founder", "advisor", "adviser", "teacher", "nurse",
    "cto", "ceo", "cfo", "coo", "ba", "tester", "researcher", "officer",
]

JOB_TITLE_PREFIXES = [
    "senior", "sr", "lead", "principal", "director", "manager", "engineer", "head", "chief",
    "junior", "jr", "staff", "associate", "assistant", "vp", "vice", "executive", "intern",
    "consultant", "analyst", "developer", "architect", "specialist", "founder", "co-founder",
]

COMPANY_SUFFIXES = [
    "inc", "llc", "ltd", "limited", "corp", "corporation", "company", "co", "group", "plc",
    "gmbh", "llp", "holdings", "technologies", "solutions", "partners", "consulting", "labs",
]

# Order matters: the first separator found in a line wins
JOB_SEPARATORS = [" at ", " @ ", " | ", " — ", " – ", " - ", " with ", " for "]

# Separators made of ordinary words; these need extra evidence before they split a line
WORD_SEPARATORS = [" at ", " with ", " for "]

BULLET_GLYPHS = ["•", "●", "◦", "▪", "■", "‣", "-", "*", "–", "✓", "➢", "➤", ">", "○", "·"]

# Lower-case words allowed inside a Title Case name, place or title
TITLE_CONNECTORS = ["of", "and", "the", "&", "for", "in", "on", "upon", "de", "la", "le", "du", "von", "van", "del", "da"]

# ===== SKILLS =====

SKILL_VOCABULARY: Dict[str, str] = {
    # technical
    "Python": "technical", "SQL": "technical", "Java": "technical", "JavaScript": "technical",
    "TypeScript": "technical", "C": "technical", "C++": "technical", "C#": "technical",
    "Go": "technical", "Rust": "technical", "Ruby": "technical", "PHP": "technical",
    "Swift": "technical", "Kotlin": "technical", "Scala": "technical", "R": "technical",
    "HTML": "technical", "CSS": "technical", "React": "technical", "Angular": "technical",
    "Vue": "technical", "Node.js": "technical", "Django": "technical", "Flask": "technical",
    "FastAPI": "technical", "Spring": "technical", ".NET": "technical",
    "AWS": "technical", "Azure": "technical", "GCP": "technical", "Cloud": "technical",
    "Docker": "technical", "Kubernetes": "technical", "Terraform": "technical",
    "Linux": "technical", "Git": "technical", "REST": "technical", "API": "technical",
    "GraphQL": "technical", "Microservices": "technical", "CI/CD": "technical",
    "CICD": "technical", "DevOps": "technical", "PostgreSQL": "technical", "MySQL": "technical",
    "MongoDB": "technical", "Redis": "technical", "Kafka": "technical", "Spark": "technical",
    "Snowflake": "technical", "Pandas": "technical", "NumPy": "technical",
    "Machine Learning": "technical", "Artificial Intelligence": "technical", "AI": "technical",
    "Data Analysis": "technical", "Excel": "technical", "Tableau": "technical",
    "Power BI": "technical", "Jira": "technical", "Agile": "technical", "Scrum": "technical",
    "Kanban": "technical", "SAFe": "technical", "ITIL": "technical", "Waterfall": "technical",
    "QA": "technical", "Quality Assurance": "technical", "Test Automation": "technical",
    "Selenium": "technical",
    # soft
    "Leadership": "soft", "Communication": "soft", "Teamwork": "soft",
    "Team Management": "soft", "Team Building": "soft", "Mentoring": "soft",
    "Coaching": "soft", "Hiring": "soft", "Forecasting": "soft", "Budgeting": "soft",
    "Collaboration": "soft", "Problem Solving": "soft", "Negotiation": "soft",
    "Public Speaking": "soft", "Presentation": "soft", "Time Management": "soft",
    "Stakeholder Management": "soft", "Performance Management": "soft",
    "Critical Thinking": "soft", "Adaptability": "soft",
    # other (business / domain)
    "Product Management": "other", "Program Management": "other",
    "Project Management": "other", "Business Analysis": "other", "Strategy": "other",
    "Risk Management": "other", "Compliance": "other", "Process Improvement": "other",
    "Requirements Gathering": "other", "Budget Management": "other", "Fintech": "other",
    "Insurance": "other", "Go-to-Market": "other", "Product Design": "other",
    "OKRs": "other", "KPIs": "other",
}

SPOKEN_LANGUAGES = [
    "English", "Spanish", "French", "German", "Italian", "Portuguese", "Dutch", "Irish",
    "Polish", "Russian", "Arabic", "Hindi", "Mandarin", "Cantonese", "Chinese", "Japanese",
    "Korean", "Turkish", "Swedish", "Norwegian", "Danish", "Greek", "Romanian", "Czech",
]

# Substring hints for free-form tokens that are not in SKILL_VOCABULARY
SKILL_CATEGORY_HINTS: Dict[str, List[str]] = {
    "technical": [
        "javascript", "python", "java", "react", "node", "sql", "html", "css", "aws",
        "docker", "kubernetes", "cloud", "software", "programming", "database", "linux",
        "api", "devops", "automation", "analytics", "data",
    ],
    "soft": [
        "leadership", "communication", "teamwork", "collaboration", "interpersonal",
        "mentoring", "negotiation", "problem solving", "management",
    ],
}

SKILL_LEVEL_HINTS: Dict[str, List[str]] = {
    "expert": ["expert", "native", "fluent", "mother tongue", "bilingual"],
    "advanced": ["advanced", "proficient", "strong"],
    "intermediate": ["intermediate", "working knowledge", "conversational", "good"],
    "beginner": ["beginner", "basic", "elementary", "novice", "familiar"],
}

# ===== INTERESTS =====

INTEREST_VOCABULARY: Dict[str, str] = {
    "Running": "hobby", "Golf": "hobby", "Football": "hobby", "Soccer": "hobby",
    "Rugby": "hobby", "Cycling": "hobby", "Swimming": "hobby", "Tennis": "hobby",
    "Basketball": "hobby", "Volleyball": "hobby", "Hiking": "hobby", "Climbing": "hobby",
    "Fitness": "hobby", "Yoga": "hobby", "Meditation": "hobby", "Cooking": "hobby",
    "Baking": "hobby", "Music": "hobby", "Photography": "hobby", "Travel": "hobby",
    "Gaming": "hobby", "Movies": "hobby", "Theatre": "hobby", "Theater": "hobby",
    "Art": "hobby", "Painting": "hobby", "Gardening": "hobby", "Chess": "hobby",
    "Reading": "interest", "Writing": "interest", "Technology": "interest",
    "History": "interest", "Science": "interest", "Economics": "interest",
    "Volunteering": "volunteer", "Charity Work": "volunteer", "Fundraising": "volunteer",
    "Community Service": "volunteer",
}

VOLUNTEER_HINTS = ["volunteer", "charity", "fundraising", "community", "meetup", "meet up", "meet ups", "mentor", "not-for-profit", "nonprofit"]

# ===== EDUCATION =====

DEGREE_KEYWORDS = [
    "bachelor of", "bachelor's", "bachelor", "master of", "master's", "master",
    "associate of", "associate's", "b.s.", "b.a.", "m.s.", "m.a.", "m.b.a.", "ph.d.", "phd",
    "doctorate", "doctoral", "doctor of", "postgraduate", "graduate degree", "diploma",
    "certificate", "bsc", "msc", "mba", "beng", "meng", "llb", "llm", "pgce",
    "pgdip", "hnd", "hnc", "a-levels", "a levels", "gcse", "gcses", "hons", "degree",
]

INSTITUTION_KEYWORDS = [
    "university", "college", "institute", "school", "academy", "polytechnic",
    "conservatory", "seminary",
]

GRADE_LABELS = ["gpa", "grade", "classification", "result", "cgpa"]

# Lines that are section headers, never a person's name (beyond the keywords above)
NAME_BLACKLIST = [
    "resume", "curriculum vitae", "cv", "references available on request",
]


class HeuristicVocabulary(BaseModel):
    """All keyword tables used by classifiers and extractors."""
    model_config = ConfigDict(frozen=True)

    section_keywords: Dict[str, List[str]] = Field(default_factory=lambda: {k: list(v) for k, v in SECTION_KEYWORDS.items()})
    months: Dict[str, str] = Field(default_factory=lambda: dict(MONTHS))
    present_tokens: List[str] = Field(default_factory=lambda: list(PRESENT_TOKENS))
    non_date_markers: List[str] = Field(default_factory=lambda: list(NON_DATE_MARKERS))
    job_title_words: List[str] = Field(default_factory=lambda: list(JOB_TITLE_WORDS))
    job_title_prefixes: List[str] = Field(default_factory=lambda: list(JOB_TITLE_PREFIXES))
    company_suffixes: List[str] = Field(default_factory=lambda: list(COMPANY_SUFFIXES))
    job_separators: List[str] = Field(default_factory=lambda: list(JOB_SEPARATORS))
    word_separators: List[str] = Field(default_factory=lambda: list(WORD_SEPARATORS))
    bullet_glyphs: List[str] = Field(default_factory=lambda: list(BULLET_GLYPHS))
    title_connectors: List[str] = Field(default_factory=lambda: list(TITLE_CONNECTORS))
    skill_vocabulary: Dict[str, str] = Field(default_factory=lambda: dict(SKILL_VOCABULARY))
    spoken_languages: List[str] = Field(default_factory=lambda: list(SPOKEN_LANGUAGES))
    skill_category_hints: Dict[str, List[str]] = Field(default_factory=lambda: {k: list(v) for k, v in SKILL_CATEGORY_HINTS.items()})
    skill_level_hints: Dict[str, List[str]] = Field(default_factory=lambda: {k: list(v) for k, v in SKILL_LEVEL_HINTS.items()})
    interest_vocabulary: Dict[str, str] = Field(default_factory=lambda: dict(INTEREST_VOCABULARY))
    volunteer_hints: List[str] = Field(default_factory=lambda: list(VOLUNTEER_HINTS))
    degree_keywords: List[str] = Field(default_factory=lambda: list(DEGREE_KEYWORDS))
    institution_keywords: List[str] = Field(default_factory=lambda: list(INSTITUTION_KEYWORDS))
    grade_labels: List[str] = Field(default_factory=lambda: list(GRADE_LABELS))
    name_blacklist: List[str] = Field(default_factory=lambda: list(NAME_BLACKLIST))

    _patterns: Dict[str, Pattern[str]] = PrivateAttr(default_factory=dict)

    def compiled(self, key: str, build: Callable[[], str]) -> Pattern[str]:
        """Compile (once per vocabulary instance) a case-insensitive pattern built from the tables."""
        if key not in self._patterns:
            self._patterns[key] = re.compile(build(), re.IGNORECASE)
        return self._patterns[key]

    def words_pattern(self, table: str) -> Pattern[str]:
        """
        Case-insensitive whole-word alternation over one of the list tables,
        longest alternatives first (e.g. "master of" before "master").
        """
        def build() -> str:
            words = sorted(set(getattr(self, table)), key=len, reverse=True)
            alternation = "|".join(re.escape(w) for w in words)
            return rf"(?<![A-Za-z0-9])(?:{alternation})(?![A-Za-z0-9])"
        return self.compiled(f"words:{table}", build)

    def month_pattern(self) -> Pattern[str]:
        def build() -> str:
            names = sorted(self.months, key=len, reverse=True)
            return r"\b(" + "|".join(names) + r")\b\.?"
        return self.compiled("months", build)

    def present_pattern(self) -> Pattern[str]:
        return self.compiled("present", lambda: r"\b(?:" + "|".join(self.present_tokens) + r")\b")

    def all_section_keywords(self) -> Dict[str, str]:
        """Flattened keyword -> section name map."""
        return {kw: name for name, kws in self.section_keywords.items() for kw in kws}


DEFAULT_VOCABULARY = HeuristicVocabulary()
