"""
Services module.

External collaborators: theme analysis and movie recommendation providers.
"""

from cinediscover.services.base import (
    ThemeAnalysisProvider,
    RecommendationProvider,
    ThemeAnalysisError,
    RecommendationError,
)
from cinediscover.services.ai_client import (
    AIClientError,
    GroqClient,
    GroqThemeAnalyzer,
    GroqMovieRecommender,
    parse_json_response,
    get_theme_analyzer,
    get_movie_recommender,
)

__all__ = [
    "ThemeAnalysisProvider",
    "RecommendationProvider",
    "ThemeAnalysisError",
    "RecommendationError",
    "AIClientError",
    "GroqClient",
    "GroqThemeAnalyzer",
    "GroqMovieRecommender",
    "parse_json_response",
    "get_theme_analyzer",
    "get_movie_recommender",
]
