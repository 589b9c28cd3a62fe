"""
Centralized prompt templates for the app scout services.
Edit these templates to customize model behavior without touching code.
"""

# ============================================================================
# SEARCH - Finds real Play Store apps for a free-text query
# ============================================================================

SEARCH_QUERY_TEMPLATE = "site:play.google.com/store/apps/details {query}"

SEARCH_TEMPLATE = """Perform a Google Search for: "{search_query}".

Task: Find REAL Android apps listed on the Google Play Store (play.google.com).

Output strictly a JSON Array.
Format:
[
  {{
    "name": "App Name",
    "developer": "Developer Name",
    "description": "Short description",
    "rating": "4.5"
  }}
]"""


# ============================================================================
# ANALYSIS - Trust and quality report for one app
# ============================================================================

ANALYSIS_TEMPLATE = """Analyze the Android app "{name}" by "{developer}".
Use Google Search to find its Play Store page.

Extract:
1. Rating (e.g. 4.5)
2. Downloads (e.g. 100M+)
3. Last Updated Date
4. Review Summary (User sentiment)
5. Authenticity (Is it official?)
6. Developer Background

Return strictly valid JSON:
{{
  "reviewSummary": "string",
  "authenticity": "string",
  "background": "string",
  "rating": "string",
  "downloads": "string",
  "lastUpdated": "string"
}}"""


# ============================================================================
# CHAT - System instruction for follow-up questions
# ============================================================================

CHAT_SYSTEM_TEMPLATE = """You are an app safety assistant.
App: "{name}" by "{developer}".
Stats: Rating {rating}, Downloads {downloads}.
Reviews: {review_summary}
Safety: {authenticity}

Keep answers concise and helpful."""

NO_RESPONSE_PLACEHOLDER = "No response generated."
