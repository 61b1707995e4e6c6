"""
AI delegate attempt: tagged result instead of exception-driven fallback.

A delegate is any callable ``(text) -> StructuredProfile | dict | str``. The
attempt runs it on a worker thread under one overall deadline, retries once on
a transient network failure, validates whatever came back and returns either
DelegateSuccess(profile) or DelegateFailure(reason). The orchestrator decides
what to do with a failure; nothing here raises.
"""

import json
import logging
import re
import time
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from typing import Any, Callable, Optional, Union

from pydantic import BaseModel

from profile_parser.core.errors import ProfileSchemaError
from profile_parser.core.schemas import StructuredProfile
from profile_parser.core.trace import NullTraceSink, TraceEvent, TraceSink
from profile_parser.core.validation import validate_profile_payload
from profile_parser.core.vocabulary import DEFAULT_VOCABULARY, HeuristicVocabulary

logger = logging.getLogger(__name__)

DelegateOutput = Union[StructuredProfile, dict, str, None]
Delegate = Callable[[str], DelegateOutput]

DEFAULT_TIMEOUT_SECONDS = 20.0
MAX_RETRIES = 1

CODE_FENCE_RE = re.compile(r"^```(?:json)?\s*|\s*```$", re.IGNORECASE)


class TransientDelegateError(Exception):
    """Retryable delegate failure (connection reset, rate limit, upstream timeout)."""


class DelegateSuccess(BaseModel):
    profile: StructuredProfile
    attempts: int = 1


class DelegateFailure(BaseModel):
    reason: str
    attempts: int = 0

    @property
    def kind(self) -> str:
        """'schema_violation: personalInfo must be ...' -> 'schema_violation'."""
        return self.reason.split(":", 1)[0]


DelegateResult = Union[DelegateSuccess, DelegateFailure]


def strip_code_fences(raw: str) -> str:
    """Remove a Markdown ```json fence wrapped around a JSON answer."""
    return CODE_FENCE_RE.sub("", raw.strip()).strip()


def coerce_delegate_output(output: DelegateOutput, vocab: HeuristicVocabulary = DEFAULT_VOCABULARY) -> DelegateResult:
    """Validate one delegate answer. Never raises."""
    if output is None or (isinstance(output, str) and not output.strip()):
        return DelegateFailure(reason="empty_response")

    payload: Any = output
    if isinstance(output, str):
        try:
            payload = json.loads(strip_code_fences(output))
        except json.JSONDecodeError as e:
            logger.debug(f"Delegate returned malformed JSON: {e}")
            return DelegateFailure(reason=f"malformed_json: {e.msg}")

    try:
        profile = validate_profile_payload(payload, vocab)
    except ProfileSchemaError as e:
        return DelegateFailure(reason=f"schema_violation: {e}")
    return DelegateSuccess(profile=profile)


def _retryable(error: BaseException) -> bool:
    return isinstance(error, (TransientDelegateError, ConnectionError))


def attempt_delegate(
    text: str,
    delegate: Optional[Delegate],
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
    max_retries: int = MAX_RETRIES,
    trace: Optional[TraceSink] = None,
    vocab: HeuristicVocabulary = DEFAULT_VOCABULARY,
) -> DelegateResult:
    """
    Offer the text to the delegate, bounded by one overall deadline.

    Args:
        text: Raw resume text
        delegate: The structured-extraction callable, or None when unavailable
        timeout: Seconds for all attempts together; on expiry the caller
            proceeds immediately and the worker thread is abandoned
        max_retries: Extra attempts after a transient failure (capped at 1)
        trace: Diagnostic sink
        vocab: Passed to the validation pass

    Returns:
        DelegateSuccess with a validated profile, or DelegateFailure whose
        reason starts with one of: unavailable, timeout, transient_error,
        error, empty_response, malformed_json, schema_violation
    """
    trace = trace or NullTraceSink()
    if delegate is None:
        return DelegateFailure(reason="unavailable")

    retries = max(0, min(max_retries, MAX_RETRIES))
    deadline = time.monotonic() + timeout
    attempts = 0
    failure = DelegateFailure(reason="unavailable")

    executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="ai-delegate")
    try:
        while attempts <= retries:
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                failure = DelegateFailure(reason="timeout", attempts=attempts)
                break

            attempts += 1
            trace.record(TraceEvent(name="ai.attempt", data={"attempt": attempts, "budget_seconds": round(remaining, 3)}))
            future = executor.submit(delegate, text)
            try:
                output = future.result(timeout=remaining)
            except FutureTimeoutError:
                logger.warning(f"AI delegate exceeded {timeout}s; falling back")
                future.cancel()
                failure = DelegateFailure(reason="timeout", attempts=attempts)
                break
            except Exception as e:
                if _retryable(e):
                    logger.warning(f"AI delegate transient failure (attempt {attempts}): {e}")
                    failure = DelegateFailure(reason=f"transient_error: {e}", attempts=attempts)
                    continue
                logger.warning(f"AI delegate failed: {e!r}")
                failure = DelegateFailure(reason=f"error: {type(e).__name__}", attempts=attempts)
                break

            result = coerce_delegate_output(output, vocab)
            result.attempts = attempts
            if isinstance(result, DelegateSuccess):
                trace.record(TraceEvent(name="ai.success", data={"attempts": attempts}))
                return result
            failure = result
            break
    finally:
        # Never block on a slow call that already lost the race
        executor.shutdown(wait=False, cancel_futures=True)

    trace.record(TraceEvent(name="ai.failure", data={"reason": failure.reason, "attempts": failure.attempts}))
    return failure
