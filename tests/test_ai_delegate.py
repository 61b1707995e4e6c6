"""Tests for the bounded AI delegate attempt and its fallback reasons."""

import json
import time

from profile_parser.core.ai_delegate import (
    DelegateFailure,
    DelegateSuccess,
    TransientDelegateError,
    attempt_delegate,
    coerce_delegate_output,
    strip_code_fences,
)
from profile_parser.core.trace import RecordingTraceSink

VALID_JSON = json.dumps({
    "personalInfo": {"firstName": "Jane", "lastName": "Doe"},
    "employment": [{"position": "Engineer", "company": "Acme"}],
})


def test_no_delegate_is_unavailable():
    sink = RecordingTraceSink()
    result = attempt_delegate("resume text", None, trace=sink)
    assert isinstance(result, DelegateFailure)
    assert result.reason == "unavailable"
    assert sink.events == []


def test_success_returns_validated_profile():
    sink = RecordingTraceSink()
    result = attempt_delegate("resume text", lambda text: VALID_JSON, trace=sink)
    assert isinstance(result, DelegateSuccess)
    assert result.profile.personal_info.first_name == "Jane"
    assert result.profile.employment[0].id.startswith("exp_")
    assert result.attempts == 1
    assert sink.names() == ["ai.attempt", "ai.success"]


def test_slow_delegate_times_out_without_blocking():
    """The caller gets control back at the deadline, not when the call ends."""
    def slow(text):
        time.sleep(1.5)
        return VALID_JSON

    started = time.monotonic()
    result = attempt_delegate("resume text", slow, timeout=0.1)
    elapsed = time.monotonic() - started

    assert isinstance(result, DelegateFailure)
    assert result.reason == "timeout"
    assert elapsed < 1.0, f"attempt_delegate blocked for {elapsed:.2f}s"


def test_transient_failure_is_retried_once():
    calls = []

    def flaky(text):
        calls.append(text)
        if len(calls) == 1:
            raise TransientDelegateError("connection reset")
        return VALID_JSON

    result = attempt_delegate("resume text", flaky)
    assert isinstance(result, DelegateSuccess)
    assert result.attempts == 2
    assert len(calls) == 2


def test_retry_budget_is_capped_at_one():
    calls = []

    def always_down(text):
        calls.append(text)
        raise TransientDelegateError("503")

    result = attempt_delegate("resume text", always_down, max_retries=5)
    assert isinstance(result, DelegateFailure)
    assert result.kind == "transient_error"
    assert len(calls) == 2


def test_retries_can_be_disabled():
    calls = []

    def always_down(text):
        calls.append(text)
        raise ConnectionError("refused")

    result = attempt_delegate("resume text", always_down, max_retries=0)
    assert result.kind == "transient_error"
    assert len(calls) == 1


def test_other_errors_are_not_retried():
    calls = []

    def broken(text):
        calls.append(text)
        raise ValueError("bad request")

    sink = RecordingTraceSink()
    result = attempt_delegate("resume text", broken, trace=sink)
    assert result.reason == "error: ValueError"
    assert len(calls) == 1
    assert sink.names() == ["ai.attempt", "ai.failure"]


def test_malformed_json():
    result = coerce_delegate_output("this is not json")
    assert isinstance(result, DelegateFailure)
    assert result.kind == "malformed_json"


def test_schema_violation():
    result = coerce_delegate_output('{"employment": "Engineer at Acme"}')
    assert isinstance(result, DelegateFailure)
    assert result.kind == "schema_violation"


def test_empty_response():
    assert coerce_delegate_output("").reason == "empty_response"
    assert coerce_delegate_output(None).reason == "empty_response"


def test_code_fenced_json_is_accepted():
    fenced = f"```json\n{VALID_JSON}\n```"
    assert strip_code_fences(fenced) == VALID_JSON
    assert isinstance(coerce_delegate_output(fenced), DelegateSuccess)


def test_dict_output_is_accepted():
    result = coerce_delegate_output({"personalInfo": {"email": "jane@example.com"}})
    assert isinstance(result, DelegateSuccess)
    assert result.profile.personal_info.email == "jane@example.com"
