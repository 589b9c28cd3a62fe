"""
Tests for the Gemini client wrapper (google.genai client mocked)
"""
import dataclasses
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest
from google.genai import types as genai_types

from appscout.core.gemini_client import GeminiClient
from appscout.models.app_schema import ChatMessage
from config.settings import Settings


def _genai_client(resp):
    client = MagicMock()
    client.aio.models.generate_content = AsyncMock(return_value=resp)
    return client


def _response(text="hello", uris=()):
    chunks = [SimpleNamespace(web=SimpleNamespace(uri=u)) for u in uris]
    chunks.append(SimpleNamespace(web=None))
    candidate = SimpleNamespace(
        content=SimpleNamespace(parts=[SimpleNamespace(text="part one "), SimpleNamespace(text="part two")]),
        grounding_metadata=SimpleNamespace(grounding_chunks=chunks),
    )
    return SimpleNamespace(text=text, candidates=[candidate])


class TestGeminiClient:

    def test_missing_api_key(self, monkeypatch):
        monkeypatch.setattr(Settings, "GEMINI_API_KEY", "")
        with pytest.raises(ValueError, match="GEMINI_API_KEY"):
            GeminiClient()

    @pytest.mark.asyncio
    async def test_prompt_with_search(self):
        genai_client = _genai_client(_response(uris=["https://a.example", "https://b.example"]))
        client = GeminiClient(model="gemini-test", temperature=0.1, client=genai_client)

        result = await client.generate("find apps", use_search=True)

        assert result.text == "hello"
        assert result.grounding_urls == ["https://a.example", "https://b.example"]
        assert [f.name for f in dataclasses.fields(result)] == ["text", "grounding_urls"]

        kwargs = genai_client.aio.models.generate_content.call_args.kwargs
        assert kwargs["model"] == "gemini-test"
        assert kwargs["contents"] == "find apps"
        config = kwargs["config"]
        assert config.temperature == 0.1
        assert config.tools[0].google_search is not None

    @pytest.mark.asyncio
    async def test_chat_contents_and_config(self):
        genai_client = _genai_client(_response())
        client = GeminiClient(client=genai_client)

        await client.generate(
            [ChatMessage(role="user", content="hi"), ChatMessage(role="model", content="hello")],
            system_instruction="be brief",
            response_mime_type="text/plain",
        )

        kwargs = genai_client.aio.models.generate_content.call_args.kwargs
        contents = kwargs["contents"]
        assert all(isinstance(c, genai_types.Content) for c in contents)
        assert [c.role for c in contents] == ["user", "model"]
        assert contents[1].parts[0].text == "hello"
        assert kwargs["config"].system_instruction == "be brief"
        assert kwargs["config"].response_mime_type == "text/plain"
        assert not kwargs["config"].tools

    @pytest.mark.asyncio
    async def test_text_falls_back_to_parts(self):
        client = GeminiClient(client=_genai_client(_response(text=None)))
        result = await client.generate("x")
        assert result.text == "part one part two"

    @pytest.mark.asyncio
    async def test_no_candidates(self):
        client = GeminiClient(client=_genai_client(SimpleNamespace(text=None, candidates=None)))
        result = await client.generate("x")
        assert result.text == ""
        assert result.grounding_urls == []

    @pytest.mark.asyncio
    async def test_sdk_error_propagates(self):
        genai_client = MagicMock()
        genai_client.aio.models.generate_content = AsyncMock(side_effect=RuntimeError("boom"))
        client = GeminiClient(client=genai_client)
        with pytest.raises(RuntimeError, match="boom"):
            await client.generate("x")
