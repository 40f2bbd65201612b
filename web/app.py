"""
CineDiscover - Web API

A small Flask JSON API in front of the theme analysis service.

Run with: python -m web.app
Or: cd web && python app.py
"""

import sys
import time
from pathlib import Path
from typing import Optional

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from flask import Flask, request, jsonify
from cinediscover.pipeline import ThemeAnalysisService
from cinediscover.models import ThemeAnalysisQuery
from cinediscover.services import RecommendationError, ThemeAnalysisError

app = Flask(__name__)


# =============================================================================
# Service Wiring
# =============================================================================

# One service (and therefore one cache) per process
_service: Optional[ThemeAnalysisService] = None


def get_service() -> ThemeAnalysisService:
    """Get the process-wide theme analysis service."""
    global _service
    if _service is None:
        _service = ThemeAnalysisService.create()
    return _service


def _timestamp_ms() -> int:
    return int(time.time() * 1000)


def _preview(text: str, limit: int = 100) -> str:
    return text[:limit] + ("..." if len(text) > limit else "")


# =============================================================================
# Theme Analysis
# =============================================================================

@app.route("/api/theme-analysis", methods=["POST"])
def api_theme_analysis():
    """Analyze a query for themes and return scored recommendations."""
    data = request.get_json(silent=True) or {}

    raw_query = data.get("query")
    if not raw_query:
        return jsonify({"error": "Query is required"}), 400
    raw_query = str(raw_query)

    specific_needs = data.get("specificNeeds")
    if isinstance(specific_needs, str):
        specific_needs = [specific_needs]
    elif specific_needs is not None:
        try:
            specific_needs = [str(need) for need in specific_needs]
        except TypeError:
            specific_needs = None
    print(f"[web] Theme analysis request: {_preview(raw_query)!r} "
          f"(needs: {len(specific_needs or [])})")

    query = ThemeAnalysisQuery(
        raw_query=raw_query,
        emotional_context=data.get("emotionalContext"),
        life_stage=data.get("lifeStage"),
        specific_needs=specific_needs,
        cultural_background=data.get("culturalBackground"),
    )

    try:
        result = get_service().analyze_and_recommend(query)
    except ThemeAnalysisError as e:
        return jsonify({
            "error": "Failed to analyze themes",
            "details": str(e),
        }), 500
    except Exception as e:
        print(f"[web] Theme analysis error: {type(e).__name__}: {e}")
        return jsonify({
            "error": "Failed to analyze themes",
            "details": str(e),
        }), 500

    return jsonify({
        "success": True,
        "data": result.to_dict(),
        "timestamp": _timestamp_ms(),
    })


@app.route("/api/theme-analysis", methods=["GET"])
def api_theme_analysis_info():
    """Describe the theme analysis endpoint."""
    return jsonify({
        "message": "Advanced Theme Analysis API",
        "status": "operational",
        "description": "Theme recognition and psychological analysis for movie recommendations",
        "features": [
            "Universal archetypal pattern recognition",
            "Psychological need identification",
            "Life stage alignment analysis",
            "Cultural context assessment",
            "Therapeutic recommendation matching",
            "Thematic journey mapping",
        ],
    })


# =============================================================================
# Mood and Similar Movies
# =============================================================================

@app.route("/api/mood", methods=["POST"])
def api_mood():
    """Mood-based recommendations."""
    data = request.get_json(silent=True) or {}

    mood = data.get("mood")
    if not mood:
        return jsonify({"error": "Mood parameter is required"}), 400

    language = data.get("language", "en")

    try:
        movies = get_service().get_mood_recommendations(mood, language)
    except RecommendationError as e:
        return jsonify({
            "error": "Failed to get mood-based recommendations",
            "details": str(e),
        }), 500

    return jsonify({
        "success": True,
        "data": {
            "movies": [m.to_dict() for m in movies],
            "mood": mood,
            "language": language,
            "generatedAt": _timestamp_ms(),
        },
    })


@app.route("/api/similar", methods=["POST"])
def api_similar():
    """Movies similar to a given movie."""
    data = request.get_json(silent=True) or {}

    movie_id = data.get("movieId")
    if movie_id is None:
        return jsonify({"error": "movieId is required"}), 400

    try:
        movies = get_service().get_similar_movies(movie_id, data.get("title"))
    except RecommendationError as e:
        return jsonify({
            "error": "Failed to get similar movies",
            "details": str(e),
        }), 500

    return jsonify({
        "success": True,
        "data": {
            "movies": [m.to_dict() for m in movies],
            "movieId": movie_id,
            "generatedAt": _timestamp_ms(),
        },
    })


# =============================================================================
# Cache Administration
# =============================================================================

@app.route("/api/cache/stats")
def api_cache_stats():
    """Cache size and per-entry age/ttl."""
    cache = get_service().cache
    if cache is None:
        return jsonify({"enabled": False})

    stats = cache.get_stats()
    stats["enabled"] = True
    return jsonify(stats)


@app.route("/api/cache/clear", methods=["POST"])
def api_cache_clear():
    """Drop every cached result."""
    cache = get_service().cache
    if cache is not None:
        cache.clear()
    return jsonify({"success": True})


if __name__ == "__main__":
    print("=" * 50)
    print("🎬 CineDiscover API")
    print("=" * 50)
    print("Listening on http://localhost:5001")
    print("Press Ctrl+C to stop")
    print("=" * 50)
    app.run(debug=True, port=5001)
