#!/usr/bin/env python3
"""
CineDiscover - Thematic movie discovery.

Command-line entry point for a single thematic recommendation:
  - Analyze the request for themes, psychological needs and archetypes
  - Fetch candidate movies from the language model
  - Score them for theme alignment, psychological relevance and therapeutic value
  - Print the theme journey and insights

Usage:
    python main.py "movies about finding where you belong"
    python main.py "..." --emotional-context lonely --life-stage young_adult
    python main.py "..." --json          # Machine-readable output
    python main.py --show-config         # Show configuration and exit
"""

import argparse
import json
import sys

from cinediscover.pipeline import ServiceConfig, ThemeAnalysisService
from cinediscover.models import ThemeAnalysisQuery, ThemeRecommendationResult
from cinediscover.services import ThemeAnalysisError
from cinediscover.config import (
    CACHE_ENABLED,
    print_config_summary,
    validate_config,
)


def create_parser() -> argparse.ArgumentParser:
    """Create the command-line argument parser."""
    parser = argparse.ArgumentParser(
        prog="cinediscover",
        description="Analyze a movie request for themes and recommend thematically aligned films.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s "stories about second chances"
  %(prog)s "films for a quarter-life crisis" --life-stage young_adult
  %(prog)s "healing after loss" --needs healing acceptance --json
        """,
    )

    parser.add_argument(
        "query",
        nargs="?",
        help="Free-text description of what you want to watch",
    )

    # Context options
    parser.add_argument(
        "--emotional-context", "-e",
        metavar="TEXT",
        help="How you are feeling right now",
    )

    parser.add_argument(
        "--life-stage",
        choices=["childhood", "adolescence", "young_adult", "early_adulthood",
                 "midlife", "later_life", "universal"],
        help="Life stage to align recommendations with",
    )

    parser.add_argument(
        "--needs",
        nargs="+",
        metavar="NEED",
        help="Specific needs (e.g. belonging purpose healing)",
    )

    parser.add_argument(
        "--cultural-background",
        metavar="TEXT",
        help="Cultural background to take into account",
    )

    # Output options
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the full result as JSON",
    )

    parser.add_argument(
        "--no-cache",
        action="store_true",
        help="Bypass the result cache",
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Show detailed progress and debug info",
    )

    # Info options
    parser.add_argument(
        "--show-config",
        action="store_true",
        help="Show current configuration and exit",
    )

    parser.add_argument(
        "--version",
        action="version",
        version="%(prog)s 1.0.0",
    )

    return parser


def show_config() -> None:
    """Display current configuration."""
    print("=" * 60)
    print("CineDiscover Configuration")
    print("=" * 60)
    print_config_summary()

    errors = validate_config()
    if errors:
        print("\nConfiguration warnings:")
        for error in errors:
            print(f"  ⚠️  {error}")
    else:
        print("\n✓ Configuration valid")
    print("=" * 60)


def format_summary(result: ThemeRecommendationResult) -> str:
    """Generate a human-readable summary of a recommendation result."""
    analysis = result.theme_analysis
    lines = [
        "=" * 60,
        "THEME ANALYSIS",
        "=" * 60,
        f"Complexity: {analysis.thematic_complexity}",
        f"Life stage: {analysis.life_stage_alignment.primary_stage}",
        "",
        "Primary themes:",
    ]

    for theme in analysis.primary_themes:
        lines.append(f"  - {theme.theme} ({theme.category}, {theme.confidence:.2f})")
    if not analysis.primary_themes:
        lines.append("  (none)")

    lines.extend(["", f"Recommended movies ({len(result.recommended_movies)}):"])
    for rec in result.recommended_movies:
        lines.append(
            f"  • {rec.movie.title}  "
            f"align={rec.theme_alignment:.2f} "
            f"psych={rec.psychological_relevance:.2f} "
            f"therapy={rec.therapeutic_value:.2f}"
        )
        if rec.matched_themes:
            lines.append(f"      themes: {', '.join(rec.matched_themes)}")
        lines.append(f"      {rec.explanation}")

    journey = result.theme_journey
    if journey:
        lines.extend([
            "",
            "Theme journey:",
            f"  Current phase: {journey.current_phase}",
            f"  Next: {' → '.join(journey.suggested_progression)}",
            f"  Complementary: {', '.join(journey.complementary_themes) or '(none)'}",
        ])

    if result.insights:
        lines.extend(["", "Insights:"])
        for insight in result.insights:
            lines.append(f"  [{insight.type}] {insight.insight}")

    lines.append("=" * 60)
    return "\n".join(lines)


def main(argv: list = None) -> int:
    """
    Main entry point.

    Args:
        argv: Command-line arguments (default: sys.argv[1:]).

    Returns:
        Exit code (0 = success, 1 = error, 2 = usage error).
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.show_config:
        show_config()
        return 0

    if not args.query:
        parser.print_usage()
        print("error: a query is required (or use --show-config)")
        return 2

    query = ThemeAnalysisQuery(
        raw_query=args.query,
        emotional_context=args.emotional_context,
        life_stage=args.life_stage,
        specific_needs=args.needs,
        cultural_background=args.cultural_background,
    )
    config = ServiceConfig(
        use_cache=CACHE_ENABLED and not args.no_cache,
        verbose=args.verbose,
    )

    try:
        service = ThemeAnalysisService.create(config)
        result = service.analyze_and_recommend(query)
    except ThemeAnalysisError as e:
        print(f"\n❌ {e}")
        return 1
    except KeyboardInterrupt:
        print("\n\nInterrupted by user")
        return 130

    if args.json:
        print(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
    else:
        print(format_summary(result))

    return 0


if __name__ == "__main__":
    sys.exit(main())
