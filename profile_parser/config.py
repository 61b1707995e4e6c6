from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from profile_parser.core.arbitrator import ScoringWeights


class Settings(BaseSettings):
    app_name: str = "Profile Parser (Resume Extraction Service)"
    log_level: str = "INFO"

    # AI delegate - disabled while the key is empty
    openai_api_key: str = ""
    openai_model: str = "gpt-4o-mini"
    ai_timeout_seconds: float = 20.0
    ai_max_retries: int = 1

    # Employment strategy scoring, e.g. SCORING__POSITION=25
    scoring: ScoringWeights = Field(default_factory=ScoringWeights)

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
        case_sensitive=False,
        env_nested_delimiter="__",
    )

    @field_validator("ai_max_retries")
    @classmethod
    def _cap_retries(cls, v: int) -> int:
        # At most one retry on a transient failure
        return max(0, min(v, 1))


@lru_cache()
def get_settings() -> Settings:
    return Settings()
