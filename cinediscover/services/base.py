"""
Provider abstractions for CineDiscover.

Defines the interfaces of the external collaborators the orchestration
service depends on. This allows swapping the hosted language model for a
different backend, or for a stub in tests.
"""

from abc import ABC, abstractmethod
from typing import Any, List, Optional

from cinediscover.models import CandidateMovie, ThemeAnalysisResult


class ThemeAnalysisError(Exception):
    """Theme analysis failed; no recommendations can be produced."""


class RecommendationError(Exception):
    """The recommendation provider could not produce candidates."""


class ThemeAnalysisProvider(ABC):
    """
    Abstract base class for theme-analysis backends.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider name, used in log lines."""
        pass

    @abstractmethod
    def analyze_themes(self, query: str, context: Optional[dict] = None) -> ThemeAnalysisResult:
        """
        Analyze a free-text query for themes and psychological patterns.

        Args:
            query: The user's request.
            context: Optional emotional_context, life_stage, specific_needs
                and cultural_background.

        Returns:
            ThemeAnalysisResult for the query.

        Raises:
            Exception: Any failure; the orchestration treats it as fatal.
        """
        pass


class RecommendationProvider(ABC):
    """
    Abstract base class for movie recommendation backends.

    Implementations return candidate movies, optionally tagged with themes,
    psychological elements and therapeutic elements.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        pass

    @abstractmethod
    def recommend(
        self,
        prompt: str,
        mood: Optional[str] = None,
        style: Optional[str] = None,
    ) -> List[CandidateMovie]:
        """Recommend movies for a thematic prompt."""
        pass

    @abstractmethod
    def recommend_for_mood(self, mood: str, language: str = "en") -> List[CandidateMovie]:
        """Recommend movies for a mood, answering in the given language."""
        pass

    @abstractmethod
    def recommend_similar(self, movie_id: Any, title: Optional[str] = None) -> List[CandidateMovie]:
        """Recommend movies similar to a given movie."""
        pass
