"""
Pytest Configuration and Fixtures

This module provides:
- A controllable clock for cache expiry tests
- Sample theme analyses and candidate movies
- Mock providers for orchestration tests
- Test category markers
"""

import pytest
import sys
from pathlib import Path
from unittest.mock import Mock

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from cinediscover.models import (
    ArchetypalPattern,
    CandidateMovie,
    CulturalContext,
    IdentifiedTheme,
    LifeStageAlignment,
    PsychologicalNeed,
    ThemeAnalysisResult,
)
from cinediscover.services.base import RecommendationProvider, ThemeAnalysisProvider


# =============================================================================
# CLOCK
# =============================================================================

class FakeClock:
    """Manually advanced clock (seconds)."""

    def __init__(self, start: float = 1_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    """Provide a fake clock starting at t=1000s."""
    return FakeClock()


# =============================================================================
# SHARED FIXTURES
# =============================================================================

@pytest.fixture
def identity_analysis():
    """An analysis centred on identity, with two needs and one archetype."""
    return ThemeAnalysisResult(
        primary_themes=[
            IdentifiedTheme(theme="identity", category="identity", confidence=0.9,
                            explanation="Searching for an authentic self"),
            IdentifiedTheme(theme="love", category="relationships", confidence=0.6,
                            explanation="Longing for connection"),
        ],
        secondary_themes=[
            IdentifiedTheme(theme="mortality", category="existential", confidence=0.4),
        ],
        archetypal_patterns=[
            ArchetypalPattern(pattern="Identity Quest", relevance=0.89, stage="exploration",
                              description="Questioning one's true nature"),
        ],
        psychological_needs=[
            PsychologicalNeed(need="belonging", category="belonging", intensity=0.8,
                              therapeutic_value=0.7),
            PsychologicalNeed(need="purpose", category="purpose", intensity=0.6,
                              therapeutic_value=0.6),
        ],
        life_stage_alignment=LifeStageAlignment(primary_stage="young_adult"),
        cultural_context=CulturalContext(cross_cultural_relevance=0.82),
        confidence_score=0.87,
        thematic_complexity="complex",
    )


@pytest.fixture
def empty_analysis():
    """An analysis where nothing was identified."""
    return ThemeAnalysisResult()


@pytest.fixture
def candidate_movies():
    """Candidates with different tag coverage."""
    return [
        CandidateMovie(
            title="Lady Bird",
            themes=("identity", "love", "mortality"),
            psychological_elements=("belonging",),
            therapeutic_elements=("belonging", "purpose"),
            theme_explanation="A coming-of-age search for self",
        ),
        CandidateMovie(
            title="Paddington 2",
            themes=(),
            psychological_elements=(),
            therapeutic_elements=(),
        ),
    ]


@pytest.fixture
def mock_theme_provider(identity_analysis):
    """Provide a mock theme analysis provider."""
    provider = Mock(spec=ThemeAnalysisProvider)
    provider.name = "mock_analyzer"
    provider.analyze_themes.return_value = identity_analysis
    return provider


@pytest.fixture
def mock_recommendation_provider(candidate_movies):
    """Provide a mock recommendation provider."""
    provider = Mock(spec=RecommendationProvider)
    provider.name = "mock_recommender"
    provider.recommend.return_value = candidate_movies
    provider.recommend_for_mood.return_value = candidate_movies[:1]
    provider.recommend_similar.return_value = candidate_movies[1:]
    return provider


# =============================================================================
# MARKERS FOR TEST CATEGORIES
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "cache_behavior: TTL cache expiry and eviction tests"
    )
    config.addinivalue_line(
        "markers", "orchestration: Theme analysis service flow tests"
    )
    config.addinivalue_line(
        "markers", "config_validation: Configuration validation tests"
    )
