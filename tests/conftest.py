"""
Pytest configuration
Provides a fake generation client so no test talks to Gemini
"""
import pytest

from appscout.core.gemini_client import GenerationResponse
from appscout.models.app_schema import AppAnalysis, SearchResult


class FakeGenerationClient:
    """Records every generate() call and replays a canned response."""

    def __init__(self, text="", grounding_urls=None, error=None):
        self.text = text
        self.grounding_urls = grounding_urls or []
        self.error = error
        self.calls = []

    async def generate(self, contents, **kwargs):
        self.calls.append((contents, kwargs))
        if self.error is not None:
            raise self.error
        return GenerationResponse(text=self.text, grounding_urls=list(self.grounding_urls))


@pytest.fixture
def make_client():
    """Factory for fake clients: make_client(text, grounding_urls=None, error=None)"""
    return FakeGenerationClient


@pytest.fixture
def sample_app():
    return SearchResult(
        name="Signal Private Messenger",
        developer="Signal Foundation",
        description="Private messaging",
        rating="4.5",
    )


@pytest.fixture
def sample_analysis():
    return AppAnalysis(
        review_summary="Users praise privacy and reliability.",
        authenticity="Official app from the Signal Foundation.",
        background="Non-profit behind the Signal protocol.",
        rating="4.5",
        downloads="100M+",
        last_updated="March 3, 2024",
        grounding_urls=["https://play.google.com/store/apps/details?id=org.thoughtcrime.securesms"],
    )
