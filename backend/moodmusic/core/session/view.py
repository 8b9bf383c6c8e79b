"""
Predicados de visibilidad de la página.

La vista es puramente derivada: cada elemento se muestra o se oculta según
un predicado independiente sobre la instantánea de la sesión.
"""

from typing import Dict, Mapping

ERROR_TEXTS: Dict[str, str] = {
    'camera': 'Could not access the camera.',
    'model_load': 'The detection models are not available.',
    'no_face': 'No face detected. Look at the camera and try again.',
    'detection': 'Mood detection failed.',
    'timeout': 'The operation took too long. Please try again.',
    'configuration': 'Music search is not configured.',
    'network': 'Could not reach the music service.',
    'api': 'The music service returned an error.',
    'malformed': 'The music service returned an unexpected response.',
    'empty_results': 'No music found for this mood.',
}

BUSY_STATES = ('detecting', 'mood_detected', 'fetching_music')


def build_view_model(snapshot: Mapping[str, object]) -> Dict[str, object]:
    """
    Calcula qué elementos de la página son visibles.
    
    Args:
        snapshot: Resultado de MoodSession.snapshot()
    
    Returns:
        dict: Predicados show_* más los datos a pintar
    
    Example:
        >>> vm = build_view_model(session.snapshot())
        >>> vm['show_camera_button'], vm['show_detect_button']
        (True, False)
    """
    camera_ready = bool(snapshot.get('camera_ready'))
    mood = snapshot.get('mood')
    music_urls = list(snapshot.get('music_urls') or [])
    error = snapshot.get('error') or None
    
    return {
        'show_camera_button': not camera_ready,
        'show_detect_button': camera_ready,
        'show_video': camera_ready,
        'show_mood': mood is not None,
        'show_video_grid': len(music_urls) > 0,
        'show_error': snapshot.get('state') == 'error' and error is not None,
        'busy': snapshot.get('state') in BUSY_STATES,
        'mood': mood,
        'music_urls': music_urls,
        'error_text': ERROR_TEXTS.get(error['kind'], 'Something went wrong.') if error else None,
    }
