"""
Thematic scoring logic for CineDiscover.

Provides pure, side-effect-free functions to:
1. Score a candidate movie against a theme analysis
2. Derive the user's theme journey from the analysis

All functions are deterministic and do not mutate input data.
"""

import re
from typing import List, Mapping, Optional, Sequence

from cinediscover.models import (
    CandidateMovie,
    ThemeAnalysisResult,
    ThemeBasedRecommendation,
    ThemeJourney,
    DEFAULT_EXPLANATION,
)
from cinediscover.scoring.journeys import (
    THEME_PROGRESSIONS,
    DEFAULT_PROGRESSION,
    COMPLEMENTARY_THEMES,
    ALTERNATIVE_EXPLORATIONS,
    FALLBACK_CATEGORY,
    FALLBACK_PHASE_THEME,
)


# =============================================================================
# Scoring Configuration
# =============================================================================

# Neutral prior when the analysis has nothing to compare against
NEUTRAL_SCORE: float = 0.5

# Upper bound for the saturating therapeutic accumulation
MAX_THERAPEUTIC_VALUE: float = 1.0


def _clamp(value: float, upper: float = 1.0) -> float:
    return max(0.0, min(value, upper))


# =============================================================================
# Component Scores
# =============================================================================

def compute_theme_alignment(movie: CandidateMovie, analysis: ThemeAnalysisResult) -> float:
    """
    Compute how strongly a movie matches the analysis's primary themes.

    Formula:
    - Sum the confidence of each primary theme found in the movie's theme tags
    - Divide by the number of primary themes
    - NEUTRAL_SCORE (0.5) when the analysis has no primary themes

    Args:
        movie: Candidate movie.
        analysis: Theme analysis for the query.

    Returns:
        Theme alignment (0.0 to 1.0).
    """
    primary = analysis.primary_themes
    if not primary:
        return NEUTRAL_SCORE

    alignment = sum(t.confidence for t in primary if t.theme in movie.themes)
    return _clamp(alignment / len(primary))


def extract_matched_themes(movie: CandidateMovie, analysis: ThemeAnalysisResult) -> List[str]:
    """
    List the analysis themes a movie carries.

    Primary themes come first, then secondary themes, each in analysis order.
    A name listed more than once is reported once, at its first position.

    Args:
        movie: Candidate movie.
        analysis: Theme analysis for the query.

    Returns:
        Matched theme names (may be empty).
    """
    matched: dict[str, None] = {}
    for theme in [*analysis.primary_themes, *analysis.secondary_themes]:
        if theme.theme in movie.themes:
            matched.setdefault(theme.theme, None)
    return list(matched)


def compute_psychological_relevance(movie: CandidateMovie, analysis: ThemeAnalysisResult) -> float:
    """
    Compute how well a movie addresses the identified psychological needs.

    Formula:
    - Sum the intensity of each need named in the movie's psychological elements
    - Divide by the number of needs
    - NEUTRAL_SCORE (0.5) when no needs were identified

    Returns:
        Psychological relevance (0.0 to 1.0).
    """
    needs = analysis.psychological_needs
    if not needs:
        return NEUTRAL_SCORE

    relevance = sum(n.intensity for n in needs if n.need in movie.psychological_elements)
    return _clamp(relevance / len(needs))


def compute_therapeutic_value(movie: CandidateMovie, analysis: ThemeAnalysisResult) -> float:
    """
    Compute the healing potential of a movie.

    Adds the therapeutic_value of every need whose CATEGORY appears in the
    movie's therapeutic elements. The sum saturates at MAX_THERAPEUTIC_VALUE,
    so several matching needs can never push it above 1.0.

    Returns:
        Therapeutic value (0.0 to 1.0).
    """
    total = sum(
        n.therapeutic_value
        for n in analysis.psychological_needs
        if n.therapeutic_value and n.category in movie.therapeutic_elements
    )
    return _clamp(total, MAX_THERAPEUTIC_VALUE)


def score_candidate(movie: CandidateMovie, analysis: ThemeAnalysisResult) -> ThemeBasedRecommendation:
    """
    Score one candidate movie against a theme analysis.

    This is a pure function - it does not modify the movie or analysis.

    Args:
        movie: Candidate movie from the recommendation provider.
        analysis: Theme analysis for the query.

    Returns:
        New ThemeBasedRecommendation.
    """
    return ThemeBasedRecommendation(
        movie=movie,
        theme_alignment=compute_theme_alignment(movie, analysis),
        matched_themes=extract_matched_themes(movie, analysis),
        psychological_relevance=compute_psychological_relevance(movie, analysis),
        therapeutic_value=compute_therapeutic_value(movie, analysis),
        explanation=movie.theme_explanation or DEFAULT_EXPLANATION,
    )


def score_candidates(
    movies: Sequence[CandidateMovie],
    analysis: ThemeAnalysisResult,
) -> List[ThemeBasedRecommendation]:
    """Score every candidate, keeping the provider's order."""
    return [score_candidate(movie, analysis) for movie in movies]


# =============================================================================
# Theme Journey
# =============================================================================

def determine_current_phase(analysis: ThemeAnalysisResult) -> str:
    """
    Describe where the user sits in their thematic exploration.

    Format: ``{thematic_complexity}_{primary theme}`` with the theme
    lower-cased and whitespace runs replaced by underscores.

    Example:
        >>> determine_current_phase(analysis)  # complex, "Identity and Self-Discovery"
        'complex_identity_and_self-discovery'
    """
    primary = analysis.primary_theme
    theme = primary.theme if primary and primary.theme else FALLBACK_PHASE_THEME
    slug = re.sub(r"\s+", "_", theme).lower()
    return f"{analysis.thematic_complexity}_{slug}"


def suggest_progression(
    analysis: ThemeAnalysisResult,
    progressions: Optional[Mapping[str, List[str]]] = None,
) -> List[str]:
    """
    Suggest the next themes to explore, based on the primary theme's category.

    Args:
        analysis: Theme analysis for the query.
        progressions: Category -> progression table (default: THEME_PROGRESSIONS).

    Returns:
        Ordered progression (DEFAULT_PROGRESSION for unknown categories).
    """
    table = THEME_PROGRESSIONS if progressions is None else progressions
    primary = analysis.primary_theme
    category = primary.category if primary and primary.category else FALLBACK_CATEGORY
    return list(table.get(category, DEFAULT_PROGRESSION))


def suggest_alternatives(analysis: ThemeAnalysisResult) -> List[str]:
    """Alternative ways to explore the same themes (identical for every analysis)."""
    return list(ALTERNATIVE_EXPLORATIONS)


def find_complementary_themes(
    themes: Sequence[str],
    complements: Optional[Mapping[str, List[str]]] = None,
) -> List[str]:
    """
    Collect themes that complement the current ones.

    Deduplicated, in order of first appearance.

    Args:
        themes: Current theme names.
        complements: Theme -> complements table (default: COMPLEMENTARY_THEMES).

    Returns:
        Complementary theme names.
    """
    table = COMPLEMENTARY_THEMES if complements is None else complements
    found: dict[str, None] = {}
    for theme in themes:
        for complement in table.get(theme, []):
            found.setdefault(complement, None)
    return list(found)


def create_theme_journey(
    analysis: ThemeAnalysisResult,
    progressions: Optional[Mapping[str, List[str]]] = None,
    complements: Optional[Mapping[str, List[str]]] = None,
) -> ThemeJourney:
    """
    Build the theme journey for an analysis.

    Complementary themes are derived from the primary theme names.

    Args:
        analysis: Theme analysis for the query.
        progressions: Optional replacement for THEME_PROGRESSIONS.
        complements: Optional replacement for COMPLEMENTARY_THEMES.

    Returns:
        New ThemeJourney.
    """
    current_themes = [t.theme for t in analysis.primary_themes]

    return ThemeJourney(
        current_phase=determine_current_phase(analysis),
        suggested_progression=suggest_progression(analysis, progressions),
        alternative_explorations=suggest_alternatives(analysis),
        complementary_themes=find_complementary_themes(current_themes, complements),
    )
