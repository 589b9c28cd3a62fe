"""Analysis service - structured trust and quality report for one app."""

import logging

from appscout.core.gemini_client import GeminiClient
from appscout.models.app_schema import AppAnalysis, SearchResult
from appscout.services.templates import ANALYSIS_TEMPLATE
from appscout.utils.normalizers import clean_data
from appscout.utils.text_processor import extract_json

logger = logging.getLogger(__name__)


class AnalysisParseError(ValueError):
    """The model's analysis could not be read as a JSON object."""

    def __init__(self, message: str = "Could not parse analysis"):
        super().__init__(message)


class AnalysisService:
    """Analyze a single app using Gemini with Google Search."""

    def __init__(self, client: GeminiClient):
        self.client = client

    async def analyze_app(self, app: SearchResult) -> AppAnalysis:
        """
        Analyze an app found by the search service.

        Args:
            app: The selected search result; its rating is the fallback
                 when the analysis has no usable rating

        Returns:
            Cleaned analysis with deduplicated grounding URLs

        Raises:
            AnalysisParseError: If the response holds no JSON object
        """
        prompt = ANALYSIS_TEMPLATE.format(name=app.name, developer=app.developer)

        try:
            response = await self.client.generate(prompt, use_search=True)
        except Exception as e:
            logger.error(f"Error analyzing app '{app.name}': {e}")
            raise

        raw = extract_json(response.text, expected_type=dict)
        if raw is None:
            logger.error(f"Error analyzing app '{app.name}': could not parse analysis")
            raise AnalysisParseError()

        analysis = clean_data(AppAnalysis.from_raw(raw), app.rating)
        analysis = analysis.model_copy(
            update={"grounding_urls": list(dict.fromkeys(response.grounding_urls))}
        )

        logger.info(f"Analyzed '{app.name}': rating {analysis.rating}, "
                    f"downloads {analysis.downloads}, {len(analysis.grounding_urls)} source(s)")
        return analysis
