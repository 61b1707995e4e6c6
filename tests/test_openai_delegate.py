"""Tests for the OpenAI delegate, using a stand-in client instead of the network."""

from types import SimpleNamespace

import httpx
import pytest
from openai import APIConnectionError

from profile_parser.config import Settings
from profile_parser.core.ai_delegate import TransientDelegateError
from profile_parser.core.openai_delegate import (
    MAX_TEXT_LENGTH,
    OpenAIDelegate,
    build_default_delegate,
    build_user_prompt,
)


class FakeCompletions:
    def __init__(self, content=None, error=None):
        self.content = content
        self.error = error
        self.kwargs = None

    def create(self, **kwargs):
        self.kwargs = kwargs
        if self.error is not None:
            raise self.error
        message = SimpleNamespace(content=self.content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def fake_client(completions):
    return SimpleNamespace(chat=SimpleNamespace(completions=completions))


def test_returns_model_content_and_requests_json():
    completions = FakeCompletions(content='{"personalInfo": {"firstName": "Jane"}}')
    delegate = OpenAIDelegate(api_key="test-key", client=fake_client(completions))

    assert delegate("Jane Doe\nEngineer at Acme") == '{"personalInfo": {"firstName": "Jane"}}'
    assert completions.kwargs["model"] == "gpt-4o-mini"
    assert completions.kwargs["response_format"] == {"type": "json_object"}
    assert completions.kwargs["temperature"] == 0.1
    assert "Engineer at Acme" in completions.kwargs["messages"][1]["content"]


def test_empty_content_becomes_empty_string():
    delegate = OpenAIDelegate(api_key="test-key", client=fake_client(FakeCompletions(content=None)))
    assert delegate("resume") == ""


def test_connection_error_is_transient():
    request = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")
    completions = FakeCompletions(error=APIConnectionError(request=request))
    delegate = OpenAIDelegate(api_key="test-key", client=fake_client(completions))

    with pytest.raises(TransientDelegateError):
        delegate("resume")


def test_prompt_truncates_long_text():
    prompt = build_user_prompt("a" * (MAX_TEXT_LENGTH + 500))
    assert "a" * MAX_TEXT_LENGTH in prompt
    assert "a" * (MAX_TEXT_LENGTH + 1) not in prompt


def test_no_api_key_means_no_delegate():
    assert build_default_delegate(Settings(openai_api_key="")) is None


def test_api_key_builds_delegate():
    delegate = build_default_delegate(Settings(openai_api_key="sk-test", openai_model="gpt-4o"))
    assert isinstance(delegate, OpenAIDelegate)
    assert delegate.model == "gpt-4o"
