"""App Scout - Gemini-backed app search, trust analysis and chat."""

__version__ = "1.0.0"
