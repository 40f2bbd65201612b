"""
Theme analysis data model for CineDiscover.

Defines the snapshot produced by the theme-analysis provider for a single
query: identified themes, psychological needs, archetypal patterns,
life-stage alignment and cultural context.

Provider output is loosely typed JSON, so every model exposes a
``from_dict`` that tolerates missing keys and fills in neutral defaults.
"""

from dataclasses import dataclass, field, asdict
from typing import Any, List, Optional


THEMATIC_COMPLEXITIES = ("simple", "moderate", "complex", "layered")

DEFAULT_COMPLEXITY = "moderate"
DEFAULT_CONFIDENCE_SCORE = 0.5
DEFAULT_CROSS_CULTURAL_RELEVANCE = 0.5
DEFAULT_LIFE_STAGE = "universal"


def _pick(data: dict, *keys: str, default: Any = None) -> Any:
    """Return the first key present in data (snake_case or camelCase)."""
    for key in keys:
        if key in data and data[key] is not None:
            return data[key]
    return default


def _as_float(value: Any, default: float = 0.0) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def _unit(value: Any, default: float = 0.0) -> float:
    """Coerce a provider score to a float clamped to [0, 1]."""
    number = _as_float(value, default)
    if number != number:  # NaN
        return default
    return max(0.0, min(1.0, number))


@dataclass(frozen=True)
class IdentifiedTheme:
    """
    A theme recognised in the user's query.

    Attributes:
        theme: Theme name (e.g. "identity").
        category: Theme category used for journey progression lookups.
        confidence: How sure the analysis is about this theme (0.0 to 1.0).
        explanation: Why the theme was identified.
        universality: How universal the theme is across cultures.
        psychological_depth: Depth of psychological insight.
    """
    theme: str
    category: str = ""
    confidence: float = 0.0
    explanation: str = ""
    universality: float = 0.0
    psychological_depth: float = 0.0

    @classmethod
    def from_dict(cls, data: dict) -> "IdentifiedTheme":
        return cls(
            theme=str(_pick(data, "theme", default="")),
            category=str(_pick(data, "category", default="")),
            confidence=_unit(_pick(data, "confidence")),
            explanation=str(_pick(data, "explanation", default="")),
            universality=_unit(_pick(data, "universality")),
            psychological_depth=_unit(
                _pick(data, "psychological_depth", "psychologicalDepth")
            ),
        )


@dataclass(frozen=True)
class PsychologicalNeed:
    """A psychological need a movie could address."""
    need: str
    category: str = ""
    intensity: float = 0.0
    therapeutic_value: float = 0.0

    @classmethod
    def from_dict(cls, data: dict) -> "PsychologicalNeed":
        return cls(
            need=str(_pick(data, "need", default="")),
            category=str(_pick(data, "category", default="")),
            intensity=_unit(_pick(data, "intensity")),
            therapeutic_value=_unit(
                _pick(data, "therapeutic_value", "therapeuticValue")
            ),
        )


@dataclass(frozen=True)
class ArchetypalPattern:
    """A universal story pattern detected in the query."""
    pattern: str
    relevance: float = 0.0
    stage: str = ""
    description: str = ""
    movies: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> "ArchetypalPattern":
        return cls(
            pattern=str(_pick(data, "pattern", default="")),
            relevance=_unit(_pick(data, "relevance")),
            stage=str(_pick(data, "stage", default="")),
            description=str(_pick(data, "description", default="")),
            movies=list(_pick(data, "movies", default=[])),
        )


@dataclass(frozen=True)
class LifeStageAlignment:
    """Which life stages the query resonates with."""
    primary_stage: str = DEFAULT_LIFE_STAGE
    relevant_stages: List[str] = field(default_factory=lambda: [DEFAULT_LIFE_STAGE])
    developmental_tasks: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> "LifeStageAlignment":
        if not data:
            return cls()
        return cls(
            primary_stage=str(
                _pick(data, "primary_stage", "primaryStage", default=DEFAULT_LIFE_STAGE)
            ),
            relevant_stages=list(
                _pick(data, "relevant_stages", "relevantStages", default=[DEFAULT_LIFE_STAGE])
            ),
            developmental_tasks=list(
                _pick(data, "developmental_tasks", "developmentalTasks", default=[])
            ),
        )


@dataclass(frozen=True)
class CulturalContext:
    """Universal versus culture-specific dimensions of the query."""
    universal_themes: List[str] = field(default_factory=list)
    cultural_specific: List[str] = field(default_factory=list)
    cross_cultural_relevance: float = DEFAULT_CROSS_CULTURAL_RELEVANCE

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> "CulturalContext":
        if not data:
            return cls()
        return cls(
            universal_themes=list(_pick(data, "universal_themes", "universalThemes", default=[])),
            cultural_specific=list(
                _pick(data, "cultural_specific", "culturalSpecific", default=[])
            ),
            cross_cultural_relevance=_unit(
                _pick(data, "cross_cultural_relevance", "crossCulturalRelevance"),
                DEFAULT_CROSS_CULTURAL_RELEVANCE,
            ),
        )


@dataclass(frozen=True)
class ThemeAnalysisResult:
    """
    Complete theme analysis for one query.

    Treated as an immutable input snapshot by the scoring engine and
    insight generator.
    """
    primary_themes: List[IdentifiedTheme] = field(default_factory=list)
    secondary_themes: List[IdentifiedTheme] = field(default_factory=list)
    archetypal_patterns: List[ArchetypalPattern] = field(default_factory=list)
    psychological_needs: List[PsychologicalNeed] = field(default_factory=list)
    life_stage_alignment: LifeStageAlignment = field(default_factory=LifeStageAlignment)
    cultural_context: CulturalContext = field(default_factory=CulturalContext)
    confidence_score: float = DEFAULT_CONFIDENCE_SCORE
    thematic_complexity: str = DEFAULT_COMPLEXITY

    @classmethod
    def from_dict(cls, data: dict) -> "ThemeAnalysisResult":
        """
        Build an analysis from provider JSON.

        Accepts snake_case (as requested from the model) or camelCase keys.
        Missing sections fall back to empty lists, a universal life stage,
        a neutral cultural context and "moderate" complexity. Scores are
        clamped to [0, 1].

        Args:
            data: Parsed JSON object.

        Returns:
            New ThemeAnalysisResult instance.
        """
        def items(*keys: str) -> list:
            value = _pick(data, *keys, default=[])
            return [v for v in value if isinstance(v, dict)] if isinstance(value, list) else []

        complexity = str(
            _pick(data, "thematic_complexity", "thematicComplexity", default=DEFAULT_COMPLEXITY)
        ).lower()
        if complexity not in THEMATIC_COMPLEXITIES:
            complexity = DEFAULT_COMPLEXITY

        return cls(
            primary_themes=[
                IdentifiedTheme.from_dict(t) for t in items("primary_themes", "primaryThemes")
            ],
            secondary_themes=[
                IdentifiedTheme.from_dict(t) for t in items("secondary_themes", "secondaryThemes")
            ],
            archetypal_patterns=[
                ArchetypalPattern.from_dict(p)
                for p in items("archetypal_patterns", "archetypalPatterns")
            ],
            psychological_needs=[
                PsychologicalNeed.from_dict(n)
                for n in items("psychological_needs", "psychologicalNeeds")
            ],
            life_stage_alignment=LifeStageAlignment.from_dict(
                _pick(data, "life_stage_alignment", "lifeStageAlignment")
            ),
            cultural_context=CulturalContext.from_dict(
                _pick(data, "cultural_context", "culturalContext")
            ),
            confidence_score=_unit(
                _pick(data, "confidence_score", "confidenceScore"), DEFAULT_CONFIDENCE_SCORE
            ) or DEFAULT_CONFIDENCE_SCORE,
            thematic_complexity=complexity,
        )

    def to_dict(self) -> dict:
        """Convert to a plain dictionary for JSON responses."""
        return asdict(self)

    @property
    def primary_theme(self) -> Optional[IdentifiedTheme]:
        """The highest-ranked primary theme, if any."""
        return self.primary_themes[0] if self.primary_themes else None
