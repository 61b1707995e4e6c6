"""
OpenAI-backed structured-extraction delegate.

Returns the model's raw JSON text; validation and fallback belong to
ai_delegate.attempt_delegate.
"""

import logging
from functools import lru_cache
from typing import Optional

from openai import APIConnectionError, APIError, APITimeoutError, OpenAI, RateLimitError

from profile_parser.core.ai_delegate import TransientDelegateError

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gpt-4o-mini"
MAX_TEXT_LENGTH = 15000

SYSTEM_PROMPT = (
    "You are an expert resume parser. Extract structured data from resumes with high accuracy. "
    "Always return valid JSON that matches the exact schema provided. "
    "Be precise with dates, job titles, and company names."
)

PROFILE_SCHEMA = """{
  "personalInfo": {
    "firstName": "string", "lastName": "string", "email": "string", "phone": "string",
    "location": "string", "website": "string", "linkedin": "string", "github": "string",
    "professionalOverview": "string"
  },
  "employment": [
    {
      "position": "job title", "company": "company name", "location": "city, country",
      "dateRange": {"startDate": "YYYY-MM", "endDate": "YYYY-MM or empty if current", "isCurrent": false},
      "description": "job description", "achievements": ["achievement"]
    }
  ],
  "education": [
    {
      "institution": "school or university", "degree": "degree type", "field": "field of study",
      "location": "city, country",
      "dateRange": {"startDate": "YYYY-MM", "endDate": "YYYY-MM", "isCurrent": false},
      "gpa": "string", "achievements": ["honour or coursework"]
    }
  ],
  "skills": [{"name": "skill", "category": "technical|soft|language|other", "level": "beginner|intermediate|advanced|expert"}],
  "interests": [{"name": "interest", "category": "hobby|volunteer|interest|other", "description": "string"}]
}"""

PARSING_RULES = """Rules:
1. Convert dates to YYYY-MM format (January 2024 -> 2024-01).
2. For "Present" or "Current" roles set isCurrent to true and endDate to "".
3. Extract ALL job experiences in the order they appear.
4. Keep locations out of company names.
5. Keep combined titles together (e.g. "Site Lead | Director" is one position).
6. Use "" for missing strings and [] for missing lists.
7. Return ONLY the JSON object, no additional text."""


def build_user_prompt(resume_text: str) -> str:
    if len(resume_text) > MAX_TEXT_LENGTH:
        logger.warning(f"Resume text length ({len(resume_text)}) exceeds limit ({MAX_TEXT_LENGTH}). Truncating.")
        resume_text = resume_text[:MAX_TEXT_LENGTH]
    return (
        "Extract the following information from this resume and return ONLY a valid JSON object:\n\n"
        f"{PROFILE_SCHEMA}\n\n{PARSING_RULES}\n\n"
        f"Resume text:\n--- START RESUME TEXT ---\n{resume_text}\n--- END RESUME TEXT ---"
    )


class OpenAIDelegate:
    """
    Callable delegate: ``OpenAIDelegate(api_key=...)(text) -> JSON string``.

    Connection problems, upstream timeouts, rate limits and 5xx responses are
    raised as TransientDelegateError so the attempt can retry once; anything
    else propagates and ends the AI path.
    """

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_MODEL,
        client: Optional[OpenAI] = None,
        request_timeout: float = 30.0,
        temperature: float = 0.1,
    ):
        self.model = model
        self.temperature = temperature
        # SDK retries are disabled; attempt_delegate owns the retry budget
        self.client = client or OpenAI(api_key=api_key, timeout=request_timeout, max_retries=0)

    def __call__(self, text: str) -> str:
        logger.info(f"Requesting structured profile from model: {self.model}")
        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": build_user_prompt(text)},
                ],
                temperature=self.temperature,
                response_format={"type": "json_object"},
            )
        except (APIConnectionError, APITimeoutError, RateLimitError) as e:
            raise TransientDelegateError(str(e)) from e
        except APIError as e:
            status = getattr(e, "status_code", None)
            if status is not None and status >= 500:
                raise TransientDelegateError(f"OpenAI server error {status}") from e
            raise

        content = response.choices[0].message.content if response.choices else None
        logger.debug(f"Model answered with {len(content or '')} characters")
        return content or ""


@lru_cache(maxsize=4)
def _delegate_for(api_key: str, model: str, request_timeout: float) -> OpenAIDelegate:
    return OpenAIDelegate(api_key=api_key, model=model, request_timeout=request_timeout)


def build_default_delegate(settings) -> Optional[OpenAIDelegate]:
    """OpenAIDelegate from settings (one client per key/model), or None when no API key is configured."""
    if not settings.openai_api_key:
        logger.debug("OPENAI_API_KEY not set; AI delegate disabled, heuristic parsing only")
        return None
    return _delegate_for(settings.openai_api_key, settings.openai_model, settings.ai_timeout_seconds)
