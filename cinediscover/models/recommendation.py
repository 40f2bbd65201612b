"""
Recommendation data models for CineDiscover.

Defines the candidate movie record returned by the recommendation provider,
the query that drives an analysis, and the derived outputs of one
orchestration call (scored recommendations, theme journey, insights).
"""

from dataclasses import dataclass, field, asdict
from typing import Any, List, Optional, Tuple

from cinediscover.models.theme_analysis import ThemeAnalysisResult


DEFAULT_EXPLANATION = "Thematically aligned with your exploration"

INSIGHT_TYPES = ("psychological", "cultural", "archetypal", "therapeutic")


def _tags(value: Any) -> Tuple[str, ...]:
    """Normalise a provider tag field to a tuple of strings."""
    if value is None:
        return ()
    if isinstance(value, str):
        return (value,)
    return tuple(str(v) for v in value if v is not None)


@dataclass(frozen=True)
class CandidateMovie:
    """
    A raw movie candidate produced by the recommendation provider.

    The provider may annotate each movie with three independent tag sets.
    Any set can be empty. Fields the scoring engine does not use (year,
    genres, overview, ids) are preserved untouched in ``data``.

    Attributes:
        title: Movie title.
        themes: Theme names the movie explores.
        psychological_elements: Psychological needs the movie speaks to.
        therapeutic_elements: Need categories with healing potential.
        theme_explanation: Provider's explanation of the thematic fit.
        data: Remaining provider fields.
    """
    title: str
    themes: Tuple[str, ...] = ()
    psychological_elements: Tuple[str, ...] = ()
    therapeutic_elements: Tuple[str, ...] = ()
    theme_explanation: Optional[str] = None
    data: dict = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict) -> "CandidateMovie":
        """
        Create a CandidateMovie from provider JSON.

        Handles both camelCase and snake_case tag keys.

        Args:
            data: Dictionary describing one movie.

        Returns:
            New CandidateMovie instance.
        """
        data = data.copy()
        title = data.pop("title", None) or data.pop("name", None) or "Untitled"
        themes = data.pop("themes", None)
        psychological = data.pop("psychologicalElements", None)
        if psychological is None:
            psychological = data.pop("psychological_elements", None)
        therapeutic = data.pop("therapeuticElements", None)
        if therapeutic is None:
            therapeutic = data.pop("therapeutic_elements", None)
        explanation = data.pop("themeExplanation", None)
        if explanation is None:
            explanation = data.pop("theme_explanation", None)

        return cls(
            title=str(title),
            themes=_tags(themes),
            psychological_elements=_tags(psychological),
            therapeutic_elements=_tags(therapeutic),
            theme_explanation=explanation,
            data=data,
        )

    def to_dict(self) -> dict:
        """Convert to a flat dictionary (provider fields plus tags)."""
        result = dict(self.data)
        result.update({
            "title": self.title,
            "themes": list(self.themes),
            "psychological_elements": list(self.psychological_elements),
            "therapeutic_elements": list(self.therapeutic_elements),
            "theme_explanation": self.theme_explanation,
        })
        return result


@dataclass(frozen=True)
class ThemeAnalysisQuery:
    """User request for a thematic analysis."""
    raw_query: str
    emotional_context: Optional[str] = None
    life_stage: Optional[str] = None
    specific_needs: Optional[List[str]] = None
    cultural_background: Optional[str] = None

    def context(self) -> dict:
        """Optional context forwarded to the theme-analysis provider."""
        return {
            "emotional_context": self.emotional_context,
            "life_stage": self.life_stage,
            "specific_needs": self.specific_needs,
            "cultural_background": self.cultural_background,
        }

    def cache_key(self) -> str:
        """Stable text identifying this query and its context."""
        parts = [
            self.raw_query,
            self.emotional_context or "",
            self.life_stage or "",
            ",".join(str(need) for need in self.specific_needs or []),
            self.cultural_background or "",
        ]
        return "|".join(parts)


@dataclass(frozen=True)
class ThemeBasedRecommendation:
    """
    A candidate movie scored against a theme analysis.

    Attributes:
        movie: The scored candidate.
        theme_alignment: Match against primary themes (0.0 to 1.0).
        matched_themes: Primary then secondary theme names the movie carries.
        psychological_relevance: Match against psychological needs (0.0 to 1.0).
        therapeutic_value: Saturating healing score, capped at 1.0.
        explanation: Why the movie was recommended.
    """
    movie: CandidateMovie
    theme_alignment: float
    matched_themes: List[str]
    psychological_relevance: float
    therapeutic_value: float
    explanation: str = DEFAULT_EXPLANATION

    def to_dict(self) -> dict:
        return {
            "movie": self.movie.to_dict(),
            "theme_alignment": self.theme_alignment,
            "matched_themes": list(self.matched_themes),
            "psychological_relevance": self.psychological_relevance,
            "therapeutic_value": self.therapeutic_value,
            "explanation": self.explanation,
        }


@dataclass(frozen=True)
class ThemeJourney:
    """Where the user's thematic exploration sits and where it could go next."""
    current_phase: str
    suggested_progression: List[str]
    alternative_explorations: List[str]
    complementary_themes: List[str]


@dataclass(frozen=True)
class ThemeInsight:
    """A short, categorised explanatory statement about the analysis."""
    type: str
    insight: str
    relevance: float
    actionable: bool = True

    def __post_init__(self) -> None:
        if self.type not in INSIGHT_TYPES:
            raise ValueError(
                f"insight type must be one of {INSIGHT_TYPES}, got {self.type!r}"
            )


@dataclass
class ThemeRecommendationResult:
    """Everything one orchestration call returns."""
    theme_analysis: ThemeAnalysisResult
    recommended_movies: List[ThemeBasedRecommendation] = field(default_factory=list)
    theme_journey: Optional[ThemeJourney] = None
    insights: List[ThemeInsight] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Convert to a plain dictionary for JSON responses."""
        return {
            "theme_analysis": self.theme_analysis.to_dict(),
            "recommended_movies": [r.to_dict() for r in self.recommended_movies],
            "theme_journey": asdict(self.theme_journey) if self.theme_journey else None,
            "insights": [asdict(i) for i in self.insights],
        }
