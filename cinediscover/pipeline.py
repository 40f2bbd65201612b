"""
CineDiscover theme pipeline - Core orchestration logic.

This module sequences one thematic recommendation request:

    Cache → Theme Analysis → Recommendations → Scoring → Journey → Insights

Steps:
1. Return a cached result for the same query and context, if any
2. Analyze the query for themes (failure here is fatal)
3. Ask the recommendation provider for candidate movies (failure degrades
   to an empty list)
4. Score every candidate against the analysis
5. Build the theme journey and insights
6. Cache and return the result

Mood and similar-movie lookups are read-through wrappers over the same
cache, with longer TTLs.
"""

import copy
import traceback
from dataclasses import dataclass
from typing import Any, List, Optional

from cinediscover.cache import CacheManager
from cinediscover.config import CACHE_ENABLED
from cinediscover.models import (
    CandidateMovie,
    ThemeAnalysisQuery,
    ThemeAnalysisResult,
    ThemeRecommendationResult,
)
from cinediscover.scoring import (
    create_theme_journey,
    generate_theme_insights,
    score_candidates,
)
from cinediscover.services import (
    RecommendationError,
    RecommendationProvider,
    ThemeAnalysisError,
    ThemeAnalysisProvider,
    get_movie_recommender,
    get_theme_analyzer,
)


# =============================================================================
# Prompt Construction
# =============================================================================

def build_theme_movie_prompt(analysis: ThemeAnalysisResult, query: ThemeAnalysisQuery) -> str:
    """
    Build the recommendation prompt for an analyzed query.

    Args:
        analysis: Theme analysis for the query.
        query: The original request.

    Returns:
        Prompt text for the recommendation provider.
    """
    primary_themes = ", ".join(t.theme for t in analysis.primary_themes)
    needs = ", ".join(n.need for n in analysis.psychological_needs)
    patterns = ", ".join(p.pattern for p in analysis.archetypal_patterns)

    return f"""ADVANCED THEMATIC MOVIE RECOMMENDATION

ORIGINAL QUERY: "{query.raw_query}"

IDENTIFIED THEMES:
Primary Themes: {primary_themes}
Archetypal Patterns: {patterns}
Psychological Needs: {needs}
Life Stage Alignment: {analysis.life_stage_alignment.primary_stage}
Thematic Complexity: {analysis.thematic_complexity}

THEME-BASED RECOMMENDATION CRITERIA:
1. Deep thematic resonance (not just genre matching)
2. Psychological and emotional alignment with identified needs
3. Archetypal pattern matching for universal appeal
4. Life stage appropriateness and relevance
5. Therapeutic or growth potential

Tag each movie's themes with the exact primary theme names above where they apply,
its psychologicalElements with the exact need names, and its therapeuticElements
with the need categories it can help with.

Prioritize quality and thematic authenticity over popularity."""


# =============================================================================
# Service Configuration
# =============================================================================

@dataclass
class ServiceConfig:
    """
    Configuration for the theme analysis service.
    """
    use_cache: bool = CACHE_ENABLED
    verbose: bool = False


# =============================================================================
# Service Class
# =============================================================================

class ThemeAnalysisService:
    """
    Orchestrates theme analysis, recommendation and scoring.

    Usage:
        service = ThemeAnalysisService.create()
        result = service.analyze_and_recommend(ThemeAnalysisQuery("films about finding yourself"))
        for rec in result.recommended_movies:
            print(rec.movie.title, rec.theme_alignment)

    Tests inject stub providers and a cache with a fake clock:
        service = ThemeAnalysisService(analyzer, recommender, cache=CacheManager(clock=clock))
    """

    def __init__(
        self,
        theme_provider: ThemeAnalysisProvider,
        recommendation_provider: RecommendationProvider,
        cache: Optional[CacheManager] = None,
        config: Optional[ServiceConfig] = None,
    ):
        """
        Initialize the service.

        Args:
            theme_provider: Backend that analyzes queries for themes.
            recommendation_provider: Backend that proposes candidate movies.
            cache: Result cache. None disables caching.
            config: Service configuration. Defaults to ServiceConfig().
        """
        self.theme_provider = theme_provider
        self.recommendation_provider = recommendation_provider
        self.cache = cache
        self.config = config or ServiceConfig()

    @classmethod
    def create(cls, config: Optional[ServiceConfig] = None) -> "ThemeAnalysisService":
        """Create a service wired to the Groq providers and a fresh cache."""
        config = config or ServiceConfig()
        return cls(
            theme_provider=get_theme_analyzer(),
            recommendation_provider=get_movie_recommender(),
            cache=CacheManager() if config.use_cache else None,
            config=config,
        )

    def _log(self, message: str) -> None:
        if self.config.verbose:
            print(f"[theme-analysis] {message}")

    # -------------------------------------------------------------------------
    # Theme analysis
    # -------------------------------------------------------------------------

    def analyze_and_recommend(
        self,
        query: ThemeAnalysisQuery,
        use_cache: bool = True,
    ) -> ThemeRecommendationResult:
        """
        Run the full thematic recommendation flow for a query.

        Args:
            query: The user's request and optional context.
            use_cache: If False, skip the cache read (the result is still stored).

        Returns:
            ThemeRecommendationResult with analysis, scored movies, journey and insights.

        Raises:
            ThemeAnalysisError: If the theme analysis provider fails.
        """
        cache_key = query.cache_key()

        # Cached results go in and out as copies so callers cannot mutate them
        if self.cache is not None and use_cache:
            cached = self.cache.get_cached_recommendations(cache_key)
            if cached is not None:
                self._log(f"Using cached result for: {query.raw_query[:60]}")
                return copy.deepcopy(cached)

        # Step 1: Analyze themes (fatal on failure)
        try:
            analysis = self.theme_provider.analyze_themes(query.raw_query, query.context())
        except Exception as e:
            print(f"[theme-analysis] Analysis failed via {self.theme_provider.name}: "
                  f"{type(e).__name__}: {e}")
            if self.config.verbose:
                traceback.print_exc()
            raise ThemeAnalysisError("Failed to perform theme analysis") from e

        self._log(
            f"Identified {len(analysis.primary_themes)} primary themes "
            f"({analysis.thematic_complexity})"
        )

        # Step 2: Candidate movies (degrades to empty on failure)
        candidates, recommendations_ok = self._fetch_candidates(analysis, query)

        # Step 3-5: Score, journey, insights
        result = ThemeRecommendationResult(
            theme_analysis=analysis,
            recommended_movies=score_candidates(candidates, analysis),
            theme_journey=create_theme_journey(analysis),
            insights=generate_theme_insights(analysis),
        )

        # Degraded results are not cached so the next request retries
        if self.cache is not None and recommendations_ok:
            self.cache.cache_movie_recommendations(cache_key, copy.deepcopy(result))

        return result

    def _fetch_candidates(
        self,
        analysis: ThemeAnalysisResult,
        query: ThemeAnalysisQuery,
    ) -> tuple[List[CandidateMovie], bool]:
        """
        Ask the recommendation provider for candidates with error isolation.

        Returns:
            Tuple of (candidates, success flag).
        """
        prompt = build_theme_movie_prompt(analysis, query)
        try:
            candidates = self.recommendation_provider.recommend(
                prompt,
                mood=query.emotional_context,
                style=analysis.thematic_complexity,
            )
        except Exception as e:
            print(f"[theme-analysis] Theme-based movie recommendation failed via "
                  f"{self.recommendation_provider.name}: {type(e).__name__}: {e}")
            return [], False

        self._log(f"Received {len(candidates)} candidate movies")
        return list(candidates), True

    # -------------------------------------------------------------------------
    # Mood and similar movies
    # -------------------------------------------------------------------------

    def get_mood_recommendations(self, mood: str, language: str = "en") -> List[CandidateMovie]:
        """
        Movies for a mood, read through the cache.

        Raises:
            RecommendationError: If the provider fails and nothing is cached.
        """
        if self.cache is not None:
            cached = self.cache.get_cached_mood_recommendations(mood, language)
            if cached is not None:
                self._log(f"Using cached mood results for: {mood} ({language})")
                return copy.deepcopy(cached)

        movies = self._call_provider(
            lambda: self.recommendation_provider.recommend_for_mood(mood, language)
        )

        if self.cache is not None:
            self.cache.cache_mood_recommendations(mood, language, copy.deepcopy(movies))
        return movies

    def get_similar_movies(self, movie_id: Any, title: Optional[str] = None) -> List[CandidateMovie]:
        """
        Movies similar to a given movie, read through the cache.

        Raises:
            RecommendationError: If the provider fails and nothing is cached.
        """
        if self.cache is not None:
            cached = self.cache.get_cached_similar_movies(movie_id)
            if cached is not None:
                self._log(f"Using cached similar movies for: {movie_id}")
                return copy.deepcopy(cached)

        movies = self._call_provider(
            lambda: self.recommendation_provider.recommend_similar(movie_id, title)
        )

        if self.cache is not None:
            self.cache.cache_similar_movies(movie_id, copy.deepcopy(movies))
        return movies

    def _call_provider(self, call) -> List[CandidateMovie]:
        try:
            return list(call())
        except RecommendationError:
            raise
        except Exception as e:
            raise RecommendationError(f"{type(e).__name__}: {e}") from e


# =============================================================================
# Convenience Functions
# =============================================================================

def analyze_and_recommend(
    raw_query: str,
    emotional_context: Optional[str] = None,
    life_stage: Optional[str] = None,
    specific_needs: Optional[List[str]] = None,
    cultural_background: Optional[str] = None,
    use_cache: bool = True,
    verbose: bool = False,
) -> ThemeRecommendationResult:
    """
    Run a thematic recommendation with the default Groq-backed service.

    Convenience function for programmatic use. A new service (and cache)
    is created per call; long-lived hosts should keep a service instance.

    Raises:
        ThemeAnalysisError: If the theme analysis fails.
    """
    query = ThemeAnalysisQuery(
        raw_query=raw_query,
        emotional_context=emotional_context,
        life_stage=life_stage,
        specific_needs=specific_needs,
        cultural_background=cultural_background,
    )
    service = ThemeAnalysisService.create(ServiceConfig(use_cache=use_cache, verbose=verbose))
    return service.analyze_and_recommend(query)
