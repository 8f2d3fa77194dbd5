"""Tests for summarizer providers.

Shared behaviour (prompt construction, skip rules, failure handling) lives in
BaseSummarizer and is tested once via a lightweight stub. Provider-specific
tests cover only the SDK client setup and _call_api.
"""

import asyncio
from datetime import datetime, timezone
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from commitlens_core.models import Commit, PullRequestInfo
from commitlens_core.providers.anthropic import AnthropicSummarizer
from commitlens_core.providers.base import BaseSummarizer, build_activity_digest
from commitlens_core.providers.openai import OpenAISummarizer

DATE = datetime(2025, 10, 1, tzinfo=timezone.utc)


def make_commit(message, pr=None):
    return Commit(
        sha="c" * 40,
        message=message,
        author="Ada",
        email="ada@example.com",
        date=DATE,
        url="https://github.com/octo/repo/commit/" + "c" * 40,
        relative_time="2 days ago",
        pr=pr,
    )


class _StubSummarizer(BaseSummarizer):
    def __init__(self, response="  A short summary.  "):
        self.response = response
        self.calls = []

    async def _call_api(self, system_prompt, user_prompt, max_tokens, temperature):
        self.calls.append(
            {"system": system_prompt, "user": user_prompt, "max_tokens": max_tokens, "temperature": temperature}
        )
        if isinstance(self.response, Exception):
            raise self.response
        return self.response


# ---------------------------------------------------------------------------
# Shared behaviour — tested once through the stub, not per provider
# ---------------------------------------------------------------------------


class TestActivityDigest:
    def test_numbers_commits_with_pr_suffix(self):
        pr = PullRequestInfo(number=7, title="Add parser", url="u", state="merged")
        digest = build_activity_digest([make_commit("Add parser", pr), make_commit("Bump deps")])
        assert digest == "1. Add parser (PR #7: Add parser)\n2. Bump deps"

    def test_empty_list(self):
        assert build_activity_digest([]) == ""


class TestSummarizePr:
    def test_returns_stripped_summary(self):
        stub = _StubSummarizer()
        assert asyncio.run(stub.summarize_pr("Fixes the parser.", "Parser fix")) == "A short summary."

    def test_prompt_contains_title_and_overview(self):
        stub = _StubSummarizer()
        asyncio.run(stub.summarize_pr("Fixes the parser.", "Parser fix"))
        user = stub.calls[0]["user"]
        assert "Parser fix" in user
        assert "Fixes the parser." in user

    def test_uses_per_item_limits(self):
        stub = _StubSummarizer()
        asyncio.run(stub.summarize_pr("overview", "title"))
        assert stub.calls[0]["max_tokens"] == 100
        assert stub.calls[0]["temperature"] == 0.3

    def test_missing_overview_skips_model(self):
        stub = _StubSummarizer()
        assert asyncio.run(stub.summarize_pr(None, "title")) is None
        assert asyncio.run(stub.summarize_pr("   ", "title")) is None
        assert stub.calls == []

    def test_api_failure_becomes_none(self):
        stub = _StubSummarizer(response=RuntimeError("503 Service Unavailable"))
        assert asyncio.run(stub.summarize_pr("overview", "title")) is None
        assert len(stub.calls) == 1  # never retried

    def test_blank_response_becomes_none(self):
        stub = _StubSummarizer(response="   ")
        assert asyncio.run(stub.summarize_pr("overview", "title")) is None


class TestSummarizeActivity:
    def test_prompt_contains_digest(self):
        stub = _StubSummarizer()
        pr = PullRequestInfo(number=7, title="Add parser", url="u", state="merged")
        asyncio.run(stub.summarize_activity([make_commit("Add parser", pr), make_commit("Bump deps")]))
        user = stub.calls[0]["user"]
        assert "1. Add parser (PR #7: Add parser)" in user
        assert "2. Bump deps" in user

    def test_uses_batch_limits(self):
        stub = _StubSummarizer()
        asyncio.run(stub.summarize_activity([make_commit("x")]))
        assert stub.calls[0]["max_tokens"] == 150
        assert stub.calls[0]["temperature"] == 0.4

    def test_empty_batch_skips_model(self):
        stub = _StubSummarizer()
        assert asyncio.run(stub.summarize_activity([])) is None
        assert stub.calls == []

    def test_api_failure_becomes_none(self):
        stub = _StubSummarizer(response=RuntimeError("timeout"))
        assert asyncio.run(stub.summarize_activity([make_commit("x")])) is None


# ---------------------------------------------------------------------------
# Provider-specific — only what differs between OpenAI and Anthropic
# ---------------------------------------------------------------------------


class TestOpenAISummarizer:
    def test_raises_import_error_without_sdk(self):
        import commitlens_core.providers.openai as openai_mod

        real_openai = openai_mod._AsyncOpenAI
        openai_mod._AsyncOpenAI = None
        try:
            with pytest.raises(ImportError):
                OpenAISummarizer(api_key="key")
        finally:
            openai_mod._AsyncOpenAI = real_openai

    def test_model_is_gpt(self):
        assert "gpt" in OpenAISummarizer.MODEL

    def test_call_api_sends_system_and_user_messages(self):
        summarizer = OpenAISummarizer(api_key="key")
        response = SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content="Done."))])
        summarizer.client = MagicMock()
        summarizer.client.chat.completions.create = AsyncMock(return_value=response)

        text = asyncio.run(summarizer._call_api("sys", "user", 100, 0.3))

        assert text == "Done."
        kwargs = summarizer.client.chat.completions.create.call_args.kwargs
        assert kwargs["messages"] == [{"role": "system", "content": "sys"}, {"role": "user", "content": "user"}]
        assert kwargs["max_tokens"] == 100
        assert kwargs["temperature"] == 0.3


class TestAnthropicSummarizer:
    def test_raises_import_error_without_sdk(self):
        with patch.dict("sys.modules", {"anthropic": None}):
            with pytest.raises(ImportError):
                AnthropicSummarizer(api_key="key")

    def test_model_is_claude(self):
        assert "claude" in AnthropicSummarizer.MODEL

    def test_call_api_joins_text_blocks(self):
        from anthropic.types import TextBlock

        summarizer = AnthropicSummarizer(api_key="key")
        response = SimpleNamespace(
            content=[TextBlock(type="text", text="Adds "), TextBlock(type="text", text="a parser. ")]
        )
        summarizer.client = MagicMock()
        summarizer.client.messages.create = AsyncMock(return_value=response)

        text = asyncio.run(summarizer._call_api("sys", "user", 150, 0.4))

        assert text == "Adds a parser."
        kwargs = summarizer.client.messages.create.call_args.kwargs
        assert kwargs["system"] == "sys"
        assert kwargs["max_tokens"] == 150
        assert kwargs["temperature"] == 0.4
