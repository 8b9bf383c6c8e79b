"""
Mapeo de estados de ánimo a frases de búsqueda musical.

Cada etiqueta de ánimo se traduce a una frase descriptiva que se envía tal
cual al buscador de vídeos.
"""

from typing import Dict, Optional

MOOD_QUERIES: Dict[str, str] = {
    'happy': 'happy upbeat music',
    'sad': 'soothing sad songs',
    'angry': 'calm instrumental music',
    'surprised': 'exciting pop songs',
    'fearful': 'relaxing ambient sounds',
    'disgusted': 'mellow lo-fi tracks',
    'neutral': 'chill background music',
}

# Frase para etiquetas fuera de la tabla
DEFAULT_QUERY = 'relaxing music'


def mood_to_query(mood: Optional[str]) -> str:
    """
    Devuelve la frase de búsqueda asociada a un ánimo.
    
    Examples:
        >>> mood_to_query('sad')
        'soothing sad songs'
        
        >>> mood_to_query('bored')
        'relaxing music'
    """
    return MOOD_QUERIES.get(mood, DEFAULT_QUERY)
