"""
Data models module.

Defines theme analysis snapshots, candidate movies, and derived recommendation outputs.
"""

from cinediscover.models.theme_analysis import (
    IdentifiedTheme,
    PsychologicalNeed,
    ArchetypalPattern,
    LifeStageAlignment,
    CulturalContext,
    ThemeAnalysisResult,
    THEMATIC_COMPLEXITIES,
)
from cinediscover.models.recommendation import (
    CandidateMovie,
    ThemeAnalysisQuery,
    ThemeBasedRecommendation,
    ThemeJourney,
    ThemeInsight,
    ThemeRecommendationResult,
    DEFAULT_EXPLANATION,
    INSIGHT_TYPES,
)

__all__ = [
    "IdentifiedTheme",
    "PsychologicalNeed",
    "ArchetypalPattern",
    "LifeStageAlignment",
    "CulturalContext",
    "ThemeAnalysisResult",
    "THEMATIC_COMPLEXITIES",
    "CandidateMovie",
    "ThemeAnalysisQuery",
    "ThemeBasedRecommendation",
    "ThemeJourney",
    "ThemeInsight",
    "ThemeRecommendationResult",
    "DEFAULT_EXPLANATION",
    "INSIGHT_TYPES",
]
