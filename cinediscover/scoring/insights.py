"""
Insight generation for CineDiscover.

Turns a theme analysis into a short list of human-readable insights, at most
one per category, in the order psychological, archetypal, cultural.
"""

from typing import List

from cinediscover.models import ThemeAnalysisResult, ThemeInsight


# Cross-cultural relevance must exceed this for a cultural insight
CULTURAL_RELEVANCE_THRESHOLD: float = 0.7


def generate_theme_insights(analysis: ThemeAnalysisResult) -> List[ThemeInsight]:
    """
    Generate insights from a theme analysis.

    Rules:
    - psychological: emitted when any need was identified; uses the first need
    - archetypal: emitted when any pattern was detected; uses the first pattern
    - cultural: emitted when cross-cultural relevance > CULTURAL_RELEVANCE_THRESHOLD

    Each insight carries its source signal's intensity/relevance and is
    actionable. No therapeutic insight is produced here.

    Args:
        analysis: Theme analysis for the query.

    Returns:
        Insights in priority order (may be empty).
    """
    insights: List[ThemeInsight] = []

    if analysis.psychological_needs:
        need = analysis.psychological_needs[0]
        stage = analysis.life_stage_alignment.primary_stage
        insights.append(ThemeInsight(
            type="psychological",
            insight=(
                f"Your query suggests a focus on {need.category} needs, particularly "
                f"around {need.need}. This is common during {stage} life stages."
            ),
            relevance=need.intensity,
            actionable=True,
        ))

    if analysis.archetypal_patterns:
        pattern = analysis.archetypal_patterns[0]
        insights.append(ThemeInsight(
            type="archetypal",
            insight=(
                f"The {pattern.pattern} pattern in your request connects to universal "
                f"human experiences of transformation and growth."
            ),
            relevance=pattern.relevance,
            actionable=True,
        ))

    relevance = analysis.cultural_context.cross_cultural_relevance
    if relevance > CULTURAL_RELEVANCE_THRESHOLD:
        insights.append(ThemeInsight(
            type="cultural",
            insight=(
                "Your themes have strong cross-cultural relevance, opening opportunities "
                "to explore diverse storytelling traditions."
            ),
            relevance=relevance,
            actionable=True,
        ))

    return insights
