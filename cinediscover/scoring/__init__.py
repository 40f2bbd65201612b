"""
Scoring module.

Scores candidate movies against a theme analysis, derives the theme journey,
and generates insights.
"""

from cinediscover.scoring.journeys import (
    THEME_PROGRESSIONS,
    DEFAULT_PROGRESSION,
    COMPLEMENTARY_THEMES,
    ALTERNATIVE_EXPLORATIONS,
    get_progression,
    get_complements,
)

from cinediscover.scoring.scorer import (
    compute_theme_alignment,
    extract_matched_themes,
    compute_psychological_relevance,
    compute_therapeutic_value,
    score_candidate,
    score_candidates,
    determine_current_phase,
    suggest_progression,
    suggest_alternatives,
    find_complementary_themes,
    create_theme_journey,
)

from cinediscover.scoring.insights import generate_theme_insights

__all__ = [
    # Journey configuration
    "THEME_PROGRESSIONS",
    "DEFAULT_PROGRESSION",
    "COMPLEMENTARY_THEMES",
    "ALTERNATIVE_EXPLORATIONS",
    "get_progression",
    "get_complements",
    # Scoring functions
    "compute_theme_alignment",
    "extract_matched_themes",
    "compute_psychological_relevance",
    "compute_therapeutic_value",
    "score_candidate",
    "score_candidates",
    # Journey functions
    "determine_current_phase",
    "suggest_progression",
    "suggest_alternatives",
    "find_complementary_themes",
    "create_theme_journey",
    # Insights
    "generate_theme_insights",
]
