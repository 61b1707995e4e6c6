from fastapi import FastAPI

from profile_parser.api.routes.parse import router as parse_router
from profile_parser.config import get_settings
from profile_parser.logging_config import setup_logging

settings = get_settings()
setup_logging(settings.log_level)

app = FastAPI(
    title=settings.app_name,
    description="Adaptive resume parsing service: AI-assisted extraction with a multi-strategy heuristic fallback",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
)

app.include_router(parse_router)


@app.get("/", tags=["health"])
def root():
    return {"service": "profile-parser", "status": "running"}


@app.get("/health", tags=["health"])
def health():
    return {"status": "ok"}
