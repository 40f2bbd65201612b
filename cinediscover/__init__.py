"""
CineDiscover theme engine.

Theme analysis, thematic scoring, and result caching for movie discovery.
"""

__version__ = "1.0.0"
