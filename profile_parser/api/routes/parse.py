import logging

from fastapi import APIRouter, Depends, File, HTTPException, Query, UploadFile
from fastapi.concurrency import run_in_threadpool

from profile_parser.config import Settings, get_settings
from profile_parser.core.completeness import calculate_completeness, contact_warnings
from profile_parser.core.docx_extractor import extract_docx_text
from profile_parser.core.errors import EmptyInputError
from profile_parser.core.openai_delegate import build_default_delegate
from profile_parser.core.pdf_extractor import extract_pdf_text
from profile_parser.core.profile_parser import ResumeProfileParser
from profile_parser.core.schemas import ParseResponse, ParseTextRequest
from profile_parser.core.trace import LoggingTraceSink, RecordingTraceSink

logger = logging.getLogger(__name__)

router = APIRouter(tags=["parse"])

DOCX_CONTENT_TYPES = {"application/vnd.openxmlformats-officedocument.wordprocessingml.document"}
TEXT_CONTENT_TYPES = {"text/plain", "text/markdown"}


def parse_to_response(text: str, settings: Settings, debug: bool = False) -> ParseResponse:
    """Run the parser with settings-driven configuration and wrap the outcome for the API."""
    recorder = RecordingTraceSink() if debug else None
    parser = ResumeProfileParser(
        weights=settings.scoring,
        delegate=build_default_delegate(settings),
        ai_timeout=settings.ai_timeout_seconds,
        ai_max_retries=settings.ai_max_retries,
        trace=recorder or LoggingTraceSink(),
    )
    try:
        outcome = parser.parse(text)
    except EmptyInputError as e:
        raise HTTPException(status_code=422, detail=str(e))

    completeness = calculate_completeness(outcome.profile)
    warnings = list(outcome.warnings) + contact_warnings(outcome.profile.personal_info)
    if completeness.parse_quality == "low":
        warnings.append("Parsed with low confidence. Please review and edit the profile.")

    return ParseResponse(
        profile=outcome.profile,
        diagnostics=outcome.diagnostics,
        completeness=completeness,
        parse_quality=completeness.parse_quality,
        warnings=warnings,
        trace=recorder.as_dicts() if recorder else [],
    )


def extract_upload_text(raw: bytes, filename: str, content_type: str) -> str:
    """Convert an uploaded file to plain text; raises HTTPException for unusable files."""
    filename = (filename or "").lower()
    content_type = (content_type or "").lower()

    # DOCX
    if filename.endswith(".docx") or content_type in DOCX_CONTENT_TYPES:
        try:
            return extract_docx_text(raw)
        except Exception as e:
            logger.warning(f"DOCX extraction failed: {e!r}")
            raise HTTPException(status_code=422, detail="File could not be read as DOCX.")
    # PDF
    if filename.endswith(".pdf") or content_type == "application/pdf":
        try:
            text = extract_pdf_text(raw)
        except Exception as e:
            logger.warning(f"PDF extraction failed: {e!r}")
            raise HTTPException(status_code=422, detail="File could not be read as PDF.")
        if not text.strip():
            raise HTTPException(
                status_code=422,
                detail="PDF appears to have no extractable text. OCR is not supported.",
            )
        return text
    # Text
    if content_type in TEXT_CONTENT_TYPES or filename.endswith((".txt", ".md")):
        return raw.decode("utf-8", errors="replace")

    raise HTTPException(status_code=415, detail=f"Unsupported content type: {content_type or filename}")


@router.post(
    "/parse",
    response_model=ParseResponse,
    summary="Parse Resume File",
    description="Extract a structured career profile from a resume file (DOCX, PDF, or TXT).",
    responses={
        400: {"description": "Empty file uploaded"},
        415: {"description": "Unsupported file format"},
        422: {"description": "File has no extractable text"},
    },
)
async def parse_resume(
    file: UploadFile = File(..., description="Resume file (DOCX, PDF, or TXT format)"),
    debug: bool = Query(False, description="Include the diagnostic trace"),
    settings: Settings = Depends(get_settings),
):
    """
    Parse a resume file.

    **Supported formats:**
    - DOCX (.docx)
    - PDF (.pdf) - text layer only, OCR not supported
    - TXT / Markdown (.txt, .md)

    **Returns:** profile, diagnostics (AI or heuristic path, winning employment
    strategy), completeness, parse quality, warnings and, with debug=true, the trace.
    """
    raw = await file.read()
    if not raw:
        raise HTTPException(status_code=400, detail="Empty file uploaded.")

    text = await run_in_threadpool(extract_upload_text, raw, file.filename, file.content_type)
    return await run_in_threadpool(parse_to_response, text, settings, debug)


@router.post(
    "/parse-text",
    response_model=ParseResponse,
    summary="Parse Resume Text",
    description="Extract a structured career profile from resume text that was already extracted from its file.",
    responses={422: {"description": "Empty or whitespace-only text"}},
)
def parse_resume_text_endpoint(request: ParseTextRequest, settings: Settings = Depends(get_settings)):
    return parse_to_response(request.text, settings, request.debug)
