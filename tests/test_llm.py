"""
Unit tests for the LLM clients. No network access: the SDK client objects
are replaced with stand-ins after construction.

Run with:
    pytest tests/test_llm.py -v
"""

from types import SimpleNamespace

import pytest

from anc.config import Config
from anc.llm import ClaudeClient, LLMClient, LLMError, OpenAIClient, build_user_message, get_client


class CannedClient(LLMClient):
    """Returns a fixed reply and records what it was asked."""

    def __init__(self, reply, **kwargs):
        super().__init__(api_key="sk-test", **kwargs)
        self.reply = reply
        self.calls = []

    @property
    def name(self) -> str:
        return "Canned"

    def _request(self, system_prompt, user_text):
        self.calls.append((system_prompt, user_text))
        return self.reply


def _recorder(response):
    """A create() stand-in that stores its kwargs."""
    calls = []

    def create(**kwargs):
        calls.append(kwargs)
        return response

    return create, calls


class TestBuildUserMessage:

    def test_context_prefix(self):
        assert build_user_message("D", "X") == "Context: X\n\nDiff:\nD"

    def test_empty_context_is_raw_diff(self):
        assert build_user_message("D", "") == "D"
        assert build_user_message("D") == "D"


class TestComplete:

    def test_returns_reply_verbatim(self):
        client = CannedClient("  feat: add thing\n\nbody  ")
        assert client.complete("SYS", "diff") == "  feat: add thing\n\nbody  "
        assert client.calls == [("SYS", "diff")]

    def test_empty_diff_rejected_without_request(self):
        client = CannedClient("x")
        with pytest.raises(LLMError, match="empty diff provided"):
            client.complete("SYS", "")
        assert client.calls == []

    def test_no_choice_is_an_error(self):
        with pytest.raises(LLMError, match="no response from Canned"):
            CannedClient(None).complete("SYS", "diff")

    def test_empty_content_is_allowed(self):
        assert CannedClient("").complete("SYS", "diff") == ""

    def test_model_defaults(self):
        assert CannedClient("x", model=None).model == ""
        assert CannedClient("x", model="m1").model == "m1"


class TestOpenAIClient:

    def test_requires_key(self):
        with pytest.raises(LLMError, match="No API key found"):
            OpenAIClient(api_key="")

    def test_default_model(self):
        assert OpenAIClient(api_key="sk-test").model == "o4-mini"

    def test_request_shape(self):
        client = OpenAIClient(api_key="sk-test", model="gpt-test", temperature=0.5)
        message = SimpleNamespace(content="fix: typo")
        create, calls = _recorder(SimpleNamespace(choices=[SimpleNamespace(message=message)]))
        client._client = SimpleNamespace(chat=SimpleNamespace(completions=SimpleNamespace(create=create)))

        assert client.complete("SYS", "D") == "fix: typo"
        assert calls == [{
            "model": "gpt-test",
            "temperature": 0.5,
            "messages": [
                {"role": "system", "content": "SYS"},
                {"role": "user", "content": "D"},
            ],
        }]

    def test_no_choices(self):
        client = OpenAIClient(api_key="sk-test")
        create, _ = _recorder(SimpleNamespace(choices=[]))
        client._client = SimpleNamespace(chat=SimpleNamespace(completions=SimpleNamespace(create=create)))

        with pytest.raises(LLMError, match="no response from OpenAI"):
            client.complete("SYS", "D")

    def test_sdk_error_becomes_llm_error(self):
        from openai import OpenAIError

        def create(**kwargs):
            raise OpenAIError("rate limited")

        client = OpenAIClient(api_key="sk-test")
        client._client = SimpleNamespace(chat=SimpleNamespace(completions=SimpleNamespace(create=create)))

        with pytest.raises(LLMError, match="failed to generate commit message: rate limited"):
            client.complete("SYS", "D")


class TestClaudeClient:

    def test_requires_key(self):
        with pytest.raises(LLMError, match="No API key found"):
            ClaudeClient(api_key="")

    def test_first_text_block_and_clamped_temperature(self):
        client = ClaudeClient(api_key="sk-ant-test", temperature=1.7)
        blocks = [SimpleNamespace(type="thinking"), SimpleNamespace(type="text", text="docs: readme")]
        create, calls = _recorder(SimpleNamespace(content=blocks))
        client._client = SimpleNamespace(messages=SimpleNamespace(create=create))

        assert client.complete("SYS", "D") == "docs: readme"
        assert calls[0]["temperature"] == 1.0
        assert calls[0]["system"] == "SYS"
        assert calls[0]["messages"] == [{"role": "user", "content": "D"}]

    def test_no_text_block(self):
        client = ClaudeClient(api_key="sk-ant-test")
        create, _ = _recorder(SimpleNamespace(content=[]))
        client._client = SimpleNamespace(messages=SimpleNamespace(create=create))

        with pytest.raises(LLMError, match="no response from Claude"):
            client.complete("SYS", "D")


class TestGetClient:

    def test_unknown_provider(self):
        with pytest.raises(LLMError, match="Unknown provider"):
            get_client(Config(api_key="sk-test", provider="nope"))

    def test_openai_from_config(self):
        client = get_client(Config(api_key="sk-test", model="gpt-x", temperature=0.2))
        assert isinstance(client, OpenAIClient)
        assert client.model == "gpt-x"
        assert client.temperature == 0.2

    def test_claude_from_config(self):
        client = get_client(Config(api_key="sk-ant-test", provider="claude", model=""))
        assert isinstance(client, ClaudeClient)
        assert client.model == ClaudeClient.DEFAULT_MODEL

    def test_missing_key(self):
        with pytest.raises(LLMError):
            get_client(Config())
