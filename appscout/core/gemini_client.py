"""Gemini API client (async) with Google Search grounding."""

import logging
from dataclasses import dataclass, field
from typing import Any, List, Optional, Sequence, Union

from google import genai
from google.genai import types as genai_types

from appscout.models.app_schema import ChatMessage
from config.settings import settings

logger = logging.getLogger(__name__)

Contents = Union[str, Sequence[ChatMessage]]


@dataclass
class GenerationResponse:
    """Text and citation URLs from a single generate call."""
    text: str
    grounding_urls: List[str] = field(default_factory=list)


def _response_text(resp: Any) -> str:
    try:
        text = resp.text
    except (AttributeError, ValueError):
        text = None

    if text:
        return text

    # Fall back to concatenating the first candidate's text parts
    candidates = getattr(resp, "candidates", None) or []
    if not candidates:
        return ""
    content = getattr(candidates[0], "content", None)
    parts = getattr(content, "parts", None) or []
    return "".join(getattr(p, "text", None) or "" for p in parts)


def _grounding_urls(resp: Any) -> List[str]:
    candidates = getattr(resp, "candidates", None) or []
    if not candidates:
        return []
    metadata = getattr(candidates[0], "grounding_metadata", None)
    chunks = getattr(metadata, "grounding_chunks", None) or []

    urls = []
    for chunk in chunks:
        web = getattr(chunk, "web", None)
        uri = getattr(web, "uri", None)
        if uri:
            urls.append(uri)
    return urls


def _to_contents(contents: Contents) -> Union[str, List[genai_types.Content]]:
    if isinstance(contents, str):
        return contents
    return [
        genai_types.Content(role=msg.role, parts=[genai_types.Part(text=msg.content)])
        for msg in contents
    ]


class GeminiClient:
    """Thin async wrapper around google.genai for the app scout services."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        temperature: Optional[float] = None,
        client: Optional[genai.Client] = None,
    ):
        """
        Initialize Gemini client.

        Args:
            api_key: Gemini API key (defaults to GEMINI_API_KEY)
            model: Model name (defaults to settings.GEMINI_MODEL)
            temperature: Sampling temperature (defaults to settings.DEFAULT_TEMPERATURE)
            client: Preconfigured google.genai client
        """
        self.model = model or settings.GEMINI_MODEL
        self.temperature = settings.DEFAULT_TEMPERATURE if temperature is None else temperature

        if client is None:
            api_key = api_key or settings.GEMINI_API_KEY
            if not api_key:
                raise ValueError("Missing GEMINI_API_KEY")
            client = genai.Client(api_key=api_key)
        self.client = client

        logger.debug(f"[Gemini] Initialized {self.model}")

    async def generate(
        self,
        contents: Contents,
        *,
        system_instruction: Optional[str] = None,
        use_search: bool = False,
        response_mime_type: Optional[str] = None,
    ) -> GenerationResponse:
        """
        Generate a response from Gemini.

        Args:
            contents: Prompt text, or conversation turns (last one is the new user message)
            system_instruction: Optional system instruction
            use_search: Enable the Google Search tool (needed for grounding URLs)
            response_mime_type: e.g. "text/plain"

        Returns:
            GenerationResponse with text and any grounding URLs

        Raises:
            Whatever the SDK raises; errors are not wrapped or retried
        """
        config = genai_types.GenerateContentConfig(
            temperature=self.temperature,
            system_instruction=system_instruction,
            response_mime_type=response_mime_type,
            tools=[genai_types.Tool(google_search=genai_types.GoogleSearch())] if use_search else None,
        )

        resp = await self.client.aio.models.generate_content(
            model=self.model,
            contents=_to_contents(contents),
            config=config,
        )

        text = _response_text(resp)
        logger.debug(f"[Gemini] {self.model} returned {len(text)} chars")

        return GenerationResponse(text=text, grounding_urls=_grounding_urls(resp))

    def __repr__(self) -> str:
        return f"GeminiClient(model='{self.model}', temp={self.temperature})"
