"""
Módulo musical: traducción de ánimo a búsqueda y cliente de YouTube.
"""

from .queries import mood_to_query, MOOD_QUERIES, DEFAULT_QUERY
from .youtube import YouTubeMusicFetcher, MusicFetchError

__all__ = ['mood_to_query', 'MOOD_QUERIES', 'DEFAULT_QUERY', 'YouTubeMusicFetcher', 'MusicFetchError']
