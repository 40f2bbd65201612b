"""
Language model services using Groq.

Provides the hosted-LLM implementations of the theme-analysis and
recommendation providers. Uses Groq's OpenAI-compatible chat completions API.
"""

import json
import re
import requests
from typing import Any, List, Optional

from cinediscover.config import GROQ_API_KEY, GROQ_MODEL, REQUEST_TIMEOUT
from cinediscover.models import CandidateMovie, ThemeAnalysisResult
from cinediscover.services.base import (
    RecommendationError,
    RecommendationProvider,
    ThemeAnalysisProvider,
)


class AIClientError(Exception):
    """The language model call failed or returned unusable output."""


_FENCE_PATTERN = re.compile(r"```(?:json)?\s*(.*?)```", re.DOTALL)


def parse_json_response(text: str) -> dict:
    """
    Extract a JSON object from model output.

    Models often wrap JSON in Markdown fences or add a sentence around it,
    so this takes the fenced block if present, then the outermost braces.

    Args:
        text: Raw completion text.

    Returns:
        Parsed JSON object.

    Raises:
        AIClientError: If no JSON object can be parsed.
    """
    fenced = _FENCE_PATTERN.search(text)
    if fenced:
        text = fenced.group(1)

    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end < start:
        raise AIClientError("No JSON object in model response")

    try:
        data = json.loads(text[start:end + 1])
    except json.JSONDecodeError as e:
        raise AIClientError(f"Invalid JSON in model response: {e}") from e

    if not isinstance(data, dict):
        raise AIClientError("Model response JSON is not an object")
    return data


class GroqClient:
    """Thin chat-completions client for the Groq API."""

    API_URL = "https://api.groq.com/openai/v1/chat/completions"

    def __init__(self, api_key: Optional[str] = None, model: Optional[str] = None,
                 timeout: Optional[int] = None):
        self.api_key = api_key or GROQ_API_KEY
        self.model = model or GROQ_MODEL
        self.timeout = timeout or REQUEST_TIMEOUT

    def is_available(self) -> bool:
        """Check if the client is usable (API key configured)."""
        return bool(self.api_key)

    def complete(self, prompt: str, system: str, max_tokens: int = 1500,
                 temperature: float = 0.4) -> str:
        """
        Send a single-turn chat completion.

        Args:
            prompt: User message.
            system: System message.
            max_tokens: Completion token limit.
            temperature: Sampling temperature.

        Returns:
            The completion text.

        Raises:
            AIClientError: If the key is missing, the request fails, or the
                API returns a non-200 status.
        """
        if not self.is_available():
            raise AIClientError("Language model not configured. Add GROQ_API_KEY to .env")

        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

        payload = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": system},
                {"role": "user", "content": prompt},
            ],
            "max_tokens": max_tokens,
            "temperature": temperature,
        }

        try:
            response = requests.post(
                self.API_URL,
                headers=headers,
                json=payload,
                timeout=self.timeout
            )
        except requests.RequestException as e:
            raise AIClientError(f"Request failed: {e}") from e

        if response.status_code != 200:
            try:
                error_msg = response.json().get("error", {}).get("message", response.text)
            except ValueError:
                error_msg = response.text
            raise AIClientError(f"API error ({response.status_code}): {error_msg}")

        data = response.json()
        try:
            return data["choices"][0]["message"]["content"].strip()
        except (KeyError, IndexError, TypeError) as e:
            raise AIClientError("Malformed completion response") from e


# =============================================================================
# Theme Analysis
# =============================================================================

THEME_ANALYST_SYSTEM = (
    "You are a master narrative analyst and depth psychologist. "
    "Respond with a single JSON object and nothing else."
)


def build_theme_analysis_prompt(query: str, context: Optional[dict] = None) -> str:
    """Build the theme recognition prompt for a user query."""
    context = context or {}
    context_lines = []
    if context.get("emotional_context"):
        context_lines.append(f"Emotional context: {context['emotional_context']}")
    if context.get("life_stage"):
        context_lines.append(f"Life stage: {context['life_stage']}")
    if context.get("specific_needs"):
        context_lines.append(f"Specific needs: {', '.join(context['specific_needs'])}")
    if context.get("cultural_background"):
        context_lines.append(f"Cultural background: {context['cultural_background']}")
    context_block = "\n".join(context_lines) or "(none provided)"

    return f"""Analyze the following movie request for deep universal themes and psychological patterns.

USER QUERY: "{query}"

USER CONTEXT:
{context_block}

ANALYSIS FRAMEWORK:
1. Archetypal patterns: Hero's Journey, Redemption Arc, Identity Quest, Sacrifice & Nobility, Coming of Age
2. Psychological themes: identity, relationships, power, existential, growth
3. Life stage resonance: childhood, adolescence, young_adult, early_adulthood, midlife, later_life, universal
4. Cultural dimensions: universal experiences vs culture-specific themes
5. Psychological needs: belonging, identity, purpose, growth, healing, understanding

Return JSON with exactly these keys:
{{
  "primary_themes": [{{"theme": str, "category": str, "confidence": 0-1, "explanation": str, "universality": 0-1, "psychological_depth": 0-1}}],
  "secondary_themes": [same shape as primary_themes],
  "archetypal_patterns": [{{"pattern": str, "stage": str, "description": str, "movies": [str], "relevance": 0-1}}],
  "psychological_needs": [{{"need": str, "category": str, "intensity": 0-1, "therapeutic_value": 0-1}}],
  "life_stage_alignment": {{"primary_stage": str, "relevant_stages": [str], "developmental_tasks": [str]}},
  "cultural_context": {{"universal_themes": [str], "cultural_specific": [str], "cross_cultural_relevance": 0-1}},
  "confidence_score": 0-1,
  "thematic_complexity": "simple" | "moderate" | "complex" | "layered"
}}

List 3-5 primary themes, strongest first. Use lowercase theme names."""


class GroqThemeAnalyzer(ThemeAnalysisProvider):
    """Theme analysis backed by a Groq-hosted model."""

    def __init__(self, client: Optional[GroqClient] = None):
        self.client = client or GroqClient()

    @property
    def name(self) -> str:
        return "groq-theme-analyzer"

    def analyze_themes(self, query: str, context: Optional[dict] = None) -> ThemeAnalysisResult:
        """
        Analyze a query with the language model.

        Raises:
            AIClientError: If the model call fails or returns unparseable output.
        """
        prompt = build_theme_analysis_prompt(query, context)
        text = self.client.complete(prompt, THEME_ANALYST_SYSTEM, temperature=0.3)
        return ThemeAnalysisResult.from_dict(parse_json_response(text))


# =============================================================================
# Movie Recommendations
# =============================================================================

RECOMMENDER_SYSTEM = (
    "You are a film expert who recommends movies for their thematic depth. "
    "Respond with a single JSON object and nothing else."
)

MOVIES_FORMAT = """
Return JSON in this format:
{"movies": [{"title": str, "year": int, "overview": str, "themes": [str], "psychologicalElements": [str], "therapeuticElements": [str], "themeExplanation": str}]}

Use lowercase names in themes, psychologicalElements and therapeuticElements.
Recommend 6-10 movies."""


def _parse_movies(text: str) -> List[CandidateMovie]:
    data = parse_json_response(text)
    movies = data.get("movies") or []
    if not isinstance(movies, list):
        raise AIClientError("'movies' is not a list")
    return [CandidateMovie.from_dict(m) for m in movies if isinstance(m, dict)]


class GroqMovieRecommender(RecommendationProvider):
    """Movie recommendations backed by a Groq-hosted model."""

    def __init__(self, client: Optional[GroqClient] = None):
        self.client = client or GroqClient()

    @property
    def name(self) -> str:
        return "groq-recommender"

    def recommend(self, prompt: str, mood: Optional[str] = None,
                  style: Optional[str] = None) -> List[CandidateMovie]:
        """
        Recommend movies for a thematic prompt.

        Raises:
            RecommendationError: If the model call fails or returns unusable output.
        """
        extras = []
        if mood:
            extras.append(f"Current mood: {mood}")
        if style:
            extras.append(f"Preferred thematic complexity: {style}")
        full_prompt = "\n".join([prompt.strip(), *extras, MOVIES_FORMAT])
        return self._request(full_prompt)

    def recommend_for_mood(self, mood: str, language: str = "en") -> List[CandidateMovie]:
        prompt = (
            f"Recommend movies for someone who is feeling {mood}. "
            f"Mix well-known and lesser-known films that suit this mood. "
            f"Write overviews and explanations in language code '{language}'."
        )
        return self._request("\n".join([prompt, MOVIES_FORMAT]))

    def recommend_similar(self, movie_id: Any, title: Optional[str] = None) -> List[CandidateMovie]:
        reference = f'"{title}" (TMDB id {movie_id})' if title else f"the movie with TMDB id {movie_id}"
        prompt = (
            f"Recommend movies similar to {reference}, matching its themes, tone "
            f"and storytelling rather than just its genre. Do not include the movie itself."
        )
        return self._request("\n".join([prompt, MOVIES_FORMAT]))

    def _request(self, prompt: str) -> List[CandidateMovie]:
        try:
            text = self.client.complete(prompt, RECOMMENDER_SYSTEM, max_tokens=2500)
            return _parse_movies(text)
        except AIClientError as e:
            raise RecommendationError(str(e)) from e


# Singleton instances
_theme_analyzer: Optional[GroqThemeAnalyzer] = None
_movie_recommender: Optional[GroqMovieRecommender] = None


def get_theme_analyzer() -> GroqThemeAnalyzer:
    """Get the singleton theme analyzer instance."""
    global _theme_analyzer
    if _theme_analyzer is None:
        _theme_analyzer = GroqThemeAnalyzer()
    return _theme_analyzer


def get_movie_recommender() -> GroqMovieRecommender:
    """Get the singleton movie recommender instance."""
    global _movie_recommender
    if _movie_recommender is None:
        _movie_recommender = GroqMovieRecommender()
    return _movie_recommender
