"""
Tests for the pipeline module.

Tests the orchestration order, error isolation between analysis and
recommendation, cache reuse and the mood/similar read-through lookups.
"""

import pytest
from unittest.mock import Mock, patch

from cinediscover.cache import CacheManager
from cinediscover.models import ThemeAnalysisQuery
from cinediscover.pipeline import (
    ServiceConfig,
    ThemeAnalysisService,
    analyze_and_recommend,
    build_theme_movie_prompt,
)
from cinediscover.services import RecommendationError, ThemeAnalysisError


pytestmark = pytest.mark.orchestration


# =============================================================================
# Test Fixtures
# =============================================================================

@pytest.fixture
def cache(clock):
    """Cache with a fake clock and a 60s default TTL."""
    return CacheManager(max_size=50, default_ttl=60, clock=clock)


@pytest.fixture
def service(mock_theme_provider, mock_recommendation_provider, cache):
    """Service wired to mock providers."""
    return ThemeAnalysisService(
        mock_theme_provider,
        mock_recommendation_provider,
        cache=cache,
        config=ServiceConfig(use_cache=True, verbose=False),
    )


@pytest.fixture
def query():
    return ThemeAnalysisQuery(
        raw_query="movies about finding where you belong",
        emotional_context="lonely",
        life_stage="young_adult",
    )


# =============================================================================
# Test Prompt Construction
# =============================================================================

class TestBuildPrompt:
    """Tests for build_theme_movie_prompt."""

    def test_prompt_lists_analysis(self, identity_analysis, query):
        prompt = build_theme_movie_prompt(identity_analysis, query)

        assert '"movies about finding where you belong"' in prompt
        assert "Primary Themes: identity, love" in prompt
        assert "Psychological Needs: belonging, purpose" in prompt
        assert "Archetypal Patterns: Identity Quest" in prompt
        assert "Thematic Complexity: complex" in prompt


# =============================================================================
# Test Analyze and Recommend
# =============================================================================

class TestAnalyzeAndRecommend:
    """Tests for the main orchestration flow."""

    def test_full_result(self, service, query):
        result = service.analyze_and_recommend(query)

        assert [r.movie.title for r in result.recommended_movies] == ["Lady Bird", "Paddington 2"]
        assert result.recommended_movies[0].matched_themes == ["identity", "love", "mortality"]
        assert result.theme_journey.current_phase == "complex_identity"
        assert [i.type for i in result.insights] == ["psychological", "archetypal", "cultural"]

    def test_provider_calls(self, service, query, mock_theme_provider, mock_recommendation_provider):
        service.analyze_and_recommend(query)

        mock_theme_provider.analyze_themes.assert_called_once_with(
            query.raw_query, query.context()
        )
        args, kwargs = mock_recommendation_provider.recommend.call_args
        assert "Primary Themes: identity, love" in args[0]
        assert kwargs == {"mood": "lonely", "style": "complex"}

    def test_unmatched_candidate_gets_default_explanation(self, service, query):
        paddington = service.analyze_and_recommend(query).recommended_movies[1]

        assert paddington.theme_alignment == 0.0
        assert paddington.matched_themes == []
        assert paddington.therapeutic_value == 0.0
        assert paddington.explanation == "Thematically aligned with your exploration"

    def test_analysis_failure_is_fatal(self, service, query, mock_theme_provider,
                                       mock_recommendation_provider):
        mock_theme_provider.analyze_themes.side_effect = RuntimeError("model offline")

        with pytest.raises(ThemeAnalysisError) as exc_info:
            service.analyze_and_recommend(query)

        assert str(exc_info.value) == "Failed to perform theme analysis"
        assert isinstance(exc_info.value.__cause__, RuntimeError)
        mock_recommendation_provider.recommend.assert_not_called()

    def test_analysis_failure_is_not_cached(self, service, query, cache, mock_theme_provider):
        mock_theme_provider.analyze_themes.side_effect = RuntimeError("boom")

        with pytest.raises(ThemeAnalysisError):
            service.analyze_and_recommend(query)

        assert len(cache) == 0

    def test_recommendation_failure_degrades(self, service, query, mock_recommendation_provider):
        mock_recommendation_provider.recommend.side_effect = RecommendationError("rate limited")

        result = service.analyze_and_recommend(query)

        assert result.recommended_movies == []
        assert result.theme_journey is not None
        assert len(result.insights) == 3

    def test_degraded_result_not_cached(self, service, query, cache,
                                        mock_recommendation_provider, candidate_movies):
        mock_recommendation_provider.recommend.side_effect = RuntimeError("timeout")
        service.analyze_and_recommend(query)
        assert len(cache) == 0

        mock_recommendation_provider.recommend.side_effect = None
        mock_recommendation_provider.recommend.return_value = candidate_movies
        result = service.analyze_and_recommend(query)

        assert len(result.recommended_movies) == 2

    def test_failure_is_logged(self, service, query, mock_recommendation_provider, capsys):
        mock_recommendation_provider.recommend.side_effect = RuntimeError("timeout")

        service.analyze_and_recommend(query)

        out = capsys.readouterr().out
        assert "Theme-based movie recommendation failed" in out
        assert "mock_recommender" in out


# =============================================================================
# Test Caching
# =============================================================================

class TestResultCaching:
    """Tests for cache reuse in analyze_and_recommend."""

    def test_second_call_uses_cache(self, service, query, mock_theme_provider):
        first = service.analyze_and_recommend(query)
        second = service.analyze_and_recommend(query)

        assert second == first
        assert mock_theme_provider.analyze_themes.call_count == 1

    def test_mutating_a_result_does_not_touch_the_cache(self, service, query):
        first = service.analyze_and_recommend(query)
        first.recommended_movies.clear()
        first.insights.append("junk")

        second = service.analyze_and_recommend(query)
        second.theme_analysis.primary_themes.clear()
        third = service.analyze_and_recommend(query)

        assert [r.movie.title for r in second.recommended_movies] == ["Lady Bird", "Paddington 2"]
        assert len(second.insights) == 3
        assert len(third.theme_analysis.primary_themes) == 2

    def test_mutating_mood_results_does_not_touch_the_cache(self, service):
        movies = service.get_mood_recommendations("nostalgic")
        movies.clear()

        assert [m.title for m in service.get_mood_recommendations("nostalgic")] == ["Lady Bird"]

    def test_context_is_part_of_key(self, service, query, mock_theme_provider):
        service.analyze_and_recommend(query)
        service.analyze_and_recommend(ThemeAnalysisQuery(raw_query=query.raw_query))

        assert mock_theme_provider.analyze_themes.call_count == 2

    def test_expired_result_is_recomputed(self, service, query, clock, mock_theme_provider):
        service.analyze_and_recommend(query)
        clock.advance(61)
        service.analyze_and_recommend(query)

        assert mock_theme_provider.analyze_themes.call_count == 2

    def test_use_cache_false_skips_read(self, service, query, mock_theme_provider):
        service.analyze_and_recommend(query)
        service.analyze_and_recommend(query, use_cache=False)

        assert mock_theme_provider.analyze_themes.call_count == 2

    def test_without_cache(self, mock_theme_provider, mock_recommendation_provider, query):
        service = ThemeAnalysisService(mock_theme_provider, mock_recommendation_provider)

        service.analyze_and_recommend(query)
        service.analyze_and_recommend(query)

        assert service.cache is None
        assert mock_theme_provider.analyze_themes.call_count == 2


# =============================================================================
# Test Mood and Similar Lookups
# =============================================================================

class TestMoodAndSimilar:
    """Tests for the read-through mood and similar-movie lookups."""

    def test_mood_read_through(self, service, mock_recommendation_provider):
        first = service.get_mood_recommendations("nostalgic", "en")
        second = service.get_mood_recommendations("nostalgic", "en")

        assert [m.title for m in first] == ["Lady Bird"]
        assert second == first
        mock_recommendation_provider.recommend_for_mood.assert_called_once_with("nostalgic", "en")

    def test_mood_ttl_is_longer(self, service, clock, mock_recommendation_provider):
        service.get_mood_recommendations("nostalgic")
        clock.advance(100)  # past the 60s default, within 2x
        service.get_mood_recommendations("nostalgic")
        assert mock_recommendation_provider.recommend_for_mood.call_count == 1

        clock.advance(21)
        service.get_mood_recommendations("nostalgic")
        assert mock_recommendation_provider.recommend_for_mood.call_count == 2

    def test_similar_read_through(self, service, clock, mock_recommendation_provider):
        movies = service.get_similar_movies(550, "Fight Club")
        clock.advance(170)  # within 3x the default TTL
        service.get_similar_movies(550)

        assert [m.title for m in movies] == ["Paddington 2"]
        mock_recommendation_provider.recommend_similar.assert_called_once_with(550, "Fight Club")

    def test_provider_error_is_wrapped(self, service, mock_recommendation_provider, cache):
        mock_recommendation_provider.recommend_for_mood.side_effect = ValueError("bad json")

        with pytest.raises(RecommendationError):
            service.get_mood_recommendations("sad")
        assert len(cache) == 0

    def test_recommendation_error_passes_through(self, service, mock_recommendation_provider):
        error = RecommendationError("quota")
        mock_recommendation_provider.recommend_similar.side_effect = error

        with pytest.raises(RecommendationError) as exc_info:
            service.get_similar_movies(1)
        assert exc_info.value is error


# =============================================================================
# Test Service Construction and Logging
# =============================================================================

class TestServiceSetup:
    """Tests for create(), verbose logging and the convenience function."""

    def test_verbose_logs_progress(self, mock_theme_provider, mock_recommendation_provider,
                                   query, capsys):
        service = ThemeAnalysisService(
            mock_theme_provider, mock_recommendation_provider,
            config=ServiceConfig(use_cache=False, verbose=True),
        )
        service.analyze_and_recommend(query)

        out = capsys.readouterr().out
        assert "[theme-analysis] Identified 2 primary themes (complex)" in out
        assert "Received 2 candidate movies" in out

    def test_quiet_by_default(self, service, query, capsys):
        service.analyze_and_recommend(query)
        assert capsys.readouterr().out == ""

    @patch("cinediscover.pipeline.get_movie_recommender")
    @patch("cinediscover.pipeline.get_theme_analyzer")
    def test_create_wires_providers(self, mock_analyzer, mock_recommender):
        service = ThemeAnalysisService.create(ServiceConfig(use_cache=True))

        assert service.theme_provider is mock_analyzer.return_value
        assert service.recommendation_provider is mock_recommender.return_value
        assert isinstance(service.cache, CacheManager)

    @patch("cinediscover.pipeline.get_movie_recommender")
    @patch("cinediscover.pipeline.get_theme_analyzer")
    def test_create_without_cache(self, mock_analyzer, mock_recommender):
        service = ThemeAnalysisService.create(ServiceConfig(use_cache=False))
        assert service.cache is None

    @patch("cinediscover.pipeline.ThemeAnalysisService.create")
    def test_convenience_function(self, mock_create):
        mock_service = Mock()
        mock_create.return_value = mock_service

        analyze_and_recommend("films about grief", life_stage="midlife", use_cache=False)

        config = mock_create.call_args[0][0]
        assert config.use_cache is False
        query = mock_service.analyze_and_recommend.call_args[0][0]
        assert query.raw_query == "films about grief"
        assert query.life_stage == "midlife"
