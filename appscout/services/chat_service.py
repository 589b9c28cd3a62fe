"""Chat service - follow-up questions about an analyzed app."""

import logging
from typing import Optional, Sequence

from appscout.core.gemini_client import GeminiClient
from appscout.models.app_schema import AppAnalysis, ChatMessage, SearchResult
from appscout.services.templates import CHAT_SYSTEM_TEMPLATE, NO_RESPONSE_PLACEHOLDER
from appscout.utils.context_window import MAX_CONTEXT_CHARS, fit_context_window

logger = logging.getLogger(__name__)


def build_system_instruction(app: SearchResult, analysis: AppAnalysis) -> str:
    return CHAT_SYSTEM_TEMPLATE.format(
        name=app.name,
        developer=app.developer,
        rating=analysis.rating,
        downloads=analysis.downloads,
        review_summary=analysis.review_summary,
        authenticity=analysis.authenticity,
    )


class ChatService:
    """Conversation grounded in an app's analysis."""

    def __init__(self, client: GeminiClient, max_context_chars: Optional[int] = None):
        self.client = client
        self.max_context_chars = max_context_chars or MAX_CONTEXT_CHARS

    async def chat_with_app(
        self,
        history: Sequence[ChatMessage],
        new_message: str,
        app: SearchResult,
        analysis: AppAnalysis,
    ) -> str:
        """
        Answer a user message in the context of an app and its analysis.

        Args:
            history: Prior turns, oldest first (not modified)
            new_message: The user's new message
            app: The app being discussed
            analysis: Its analysis

        Returns:
            The model's reply text, or a placeholder if it returned none
        """
        system_instruction = build_system_instruction(app, analysis)

        kept = fit_context_window(
            history,
            system_instruction + new_message,
            budget=self.max_context_chars,
        )
        if len(kept) < len(history):
            logger.debug(f"Chat history trimmed from {len(history)} to {len(kept)} message(s)")

        contents = kept + [ChatMessage(role="user", content=new_message)]

        try:
            response = await self.client.generate(
                contents,
                system_instruction=system_instruction,
                response_mime_type="text/plain",
            )
        except Exception as e:
            logger.error(f"Chat error for '{app.name}': {e}")
            raise

        if not response.text or not response.text.strip():
            return NO_RESPONSE_PLACEHOLDER
        return response.text
