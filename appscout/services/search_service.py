"""Search service - find real Play Store apps for a free-text query."""

import logging
from typing import Any, List, Optional

from pydantic import ValidationError

from appscout.core.gemini_client import GeminiClient
from appscout.models.app_schema import SearchResult
from appscout.services.templates import SEARCH_QUERY_TEMPLATE, SEARCH_TEMPLATE
from appscout.utils.normalizers import normalize_search_rating
from appscout.utils.text_processor import extract_json
from config.settings import settings

logger = logging.getLogger(__name__)


def _candidate_list(parsed: Any) -> List[Any]:
    """Accept a bare array, or an object wrapping one (e.g. {"apps": [...]})."""
    if isinstance(parsed, list):
        return parsed
    if isinstance(parsed, dict):
        for value in parsed.values():
            if isinstance(value, list):
                return value
    return []


class SearchService:
    """Find apps matching a query using Gemini with Google Search."""

    def __init__(self, client: GeminiClient, max_results: Optional[int] = None):
        self.client = client
        # Never more than MAX_SEARCH_RESULTS; a smaller cap may be requested
        self.max_results = min(max_results or settings.MAX_SEARCH_RESULTS, settings.MAX_SEARCH_RESULTS)

    async def search_apps(self, query: str) -> List[SearchResult]:
        """
        Search for apps.

        Args:
            query: Free-text description of the app

        Returns:
            Up to max_results apps; empty if the model output had no usable JSON
        """
        prompt = SEARCH_TEMPLATE.format(search_query=SEARCH_QUERY_TEMPLATE.format(query=query))

        try:
            response = await self.client.generate(prompt, use_search=True)
        except Exception as e:
            logger.error(f"Error searching apps for '{query}': {e}")
            raise

        candidates = _candidate_list(extract_json(response.text or "[]"))

        results = []
        for item in candidates:
            if len(results) >= self.max_results:
                break
            if not isinstance(item, dict):
                logger.debug(f"Skipping non-object search result: {item!r}")
                continue
            try:
                result = SearchResult(
                    name=item.get("name"),
                    developer=item.get("developer"),
                    description=item.get("description"),
                    rating=normalize_search_rating(str(item.get("rating") or "")),
                )
            except ValidationError as e:
                logger.debug(f"Skipping invalid search result: {e}")
                continue
            if not result.name:
                logger.debug("Skipping search result without a name")
                continue
            results.append(result)

        logger.info(f"Search '{query}': {len(results)} app(s)")
        return results
