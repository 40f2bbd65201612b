"""
Theme journey configuration for CineDiscover.

This file is the catalog of heuristics used to describe a user's thematic
journey. The scoring engine reads these mappings; it never hard-codes them.

CUSTOMIZATION:

To add a progression for a new theme category:
    1. Add a key to THEME_PROGRESSIONS with the category name
    2. List the themes in the order they should be explored

To add complements for a theme:
    1. Add the theme name (exact, as produced by the analysis) to COMPLEMENTARY_THEMES
    2. List the themes that pair well with it
"""

# =============================================================================
# Progressions (keyed by primary theme CATEGORY)
# =============================================================================

THEME_PROGRESSIONS: dict[str, list[str]] = {
    "identity": ["self_discovery", "authenticity", "belonging", "purpose"],
    "relationships": ["connection", "intimacy", "loyalty", "love"],
    "growth": ["challenge", "resilience", "wisdom", "transformation"],
    "healing": ["recognition", "processing", "integration", "renewal"],
}

# Used when the primary theme's category has no progression
DEFAULT_PROGRESSION: list[str] = ["exploration", "discovery", "integration"]

# Category assumed when the analysis found no primary theme at all
FALLBACK_CATEGORY: str = "growth"

# Theme name used in the current phase when there is no primary theme
FALLBACK_PHASE_THEME: str = "exploration"


# =============================================================================
# Complements (keyed by theme NAME)
# =============================================================================

COMPLEMENTARY_THEMES: dict[str, list[str]] = {
    "identity": ["belonging", "authenticity", "purpose"],
    "love": ["loss", "growth", "sacrifice"],
    "power": ["responsibility", "justice", "corruption"],
    "mortality": ["legacy", "meaning", "acceptance"],
}


# =============================================================================
# Alternative Explorations (same for every analysis)
# =============================================================================

ALTERNATIVE_EXPLORATIONS: list[str] = [
    "Perspective shift: Same theme, different cultural context",
    "Intensity variation: Lighter or deeper exploration",
    "Time period variation: Historical or futuristic setting",
    "Genre variation: Different storytelling approaches",
]


def get_progression(category: str) -> list[str]:
    """
    Get the suggested progression for a theme category.

    Args:
        category: Primary theme category.

    Returns:
        Copy of the progression (DEFAULT_PROGRESSION if the category is unknown).
    """
    return list(THEME_PROGRESSIONS.get(category, DEFAULT_PROGRESSION))


def get_complements(theme: str) -> list[str]:
    """Get complementary themes for a theme name (empty if none)."""
    return list(COMPLEMENTARY_THEMES.get(theme, []))
