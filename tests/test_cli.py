"""
CLI Behavior Tests

Verifies that the command-line interface parses arguments correctly,
builds the right query, and returns the expected exit codes.
"""

import json

import pytest
from unittest.mock import patch

from main import create_parser, format_summary, main
from cinediscover.models import ThemeRecommendationResult
from cinediscover.scoring import create_theme_journey, generate_theme_insights, score_candidates
from cinediscover.services import ThemeAnalysisError


@pytest.fixture
def sample_result(identity_analysis, candidate_movies):
    return ThemeRecommendationResult(
        theme_analysis=identity_analysis,
        recommended_movies=score_candidates(candidate_movies, identity_analysis),
        theme_journey=create_theme_journey(identity_analysis),
        insights=generate_theme_insights(identity_analysis),
    )


@pytest.fixture
def mock_create(sample_result):
    """Patch service creation so no provider is called."""
    with patch("main.ThemeAnalysisService.create") as create:
        create.return_value.analyze_and_recommend.return_value = sample_result
        yield create


class TestArgumentParsing:
    """Tests for correct argument parsing."""

    def test_query_and_context(self):
        args = create_parser().parse_args([
            "films about home", "-e", "homesick", "--life-stage", "midlife",
            "--needs", "belonging", "healing",
        ])

        assert args.query == "films about home"
        assert args.emotional_context == "homesick"
        assert args.life_stage == "midlife"
        assert args.needs == ["belonging", "healing"]

    def test_defaults(self):
        args = create_parser().parse_args(["q"])

        assert args.json is False
        assert args.no_cache is False
        assert args.verbose is False
        assert args.needs is None

    def test_invalid_life_stage_rejected(self):
        with pytest.raises(SystemExit):
            create_parser().parse_args(["q", "--life-stage", "toddler"])


class TestMain:
    """Tests for main() exit codes and output."""

    def test_missing_query_is_usage_error(self, capsys):
        assert main([]) == 2
        assert "a query is required" in capsys.readouterr().out

    def test_show_config(self, capsys):
        assert main(["--show-config"]) == 0
        assert "CineDiscover Configuration" in capsys.readouterr().out

    def test_success_prints_summary(self, mock_create, capsys):
        assert main(["films about belonging", "--life-stage", "young_adult"]) == 0

        query = mock_create.return_value.analyze_and_recommend.call_args[0][0]
        assert query.raw_query == "films about belonging"
        assert query.life_stage == "young_adult"

        out = capsys.readouterr().out
        assert "Lady Bird" in out
        assert "Current phase: complex_identity" in out

    def test_json_output(self, mock_create, capsys):
        assert main(["films about belonging", "--json"]) == 0

        data = json.loads(capsys.readouterr().out)
        assert data["recommended_movies"][0]["movie"]["title"] == "Lady Bird"

    def test_no_cache_flag(self, mock_create):
        main(["q", "--no-cache", "-v"])

        config = mock_create.call_args[0][0]
        assert config.use_cache is False
        assert config.verbose is True

    def test_analysis_failure_exit_code(self, mock_create, capsys):
        mock_create.return_value.analyze_and_recommend.side_effect = ThemeAnalysisError(
            "Failed to perform theme analysis"
        )

        assert main(["q"]) == 1
        assert "Failed to perform theme analysis" in capsys.readouterr().out


class TestFormatSummary:
    """Tests for the human-readable summary."""

    def test_lists_scores_and_insights(self, sample_result):
        text = format_summary(sample_result)

        assert "identity (identity, 0.90)" in text
        assert "align=0.75" in text
        assert "therapy=1.00" in text
        assert "[cultural]" in text

    def test_empty_analysis(self, empty_analysis):
        text = format_summary(ThemeRecommendationResult(theme_analysis=empty_analysis))

        assert "(none)" in text
        assert "Recommended movies (0)" in text
