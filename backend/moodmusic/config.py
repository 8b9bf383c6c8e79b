"""
Configuración de la aplicación.

Los valores por defecto se definen aquí; el entorno (y un fichero .env,
si existe) puede sobrescribirlos. La clave de la API de YouTube solo se
lee en este módulo y se entrega al cliente de búsqueda al construirlo.
"""

import os
from typing import Any, Dict

from dotenv import load_dotenv

DEFAULT_CONFIG: Dict[str, Any] = {
    'DEBUG': False,
    'HOST': '0.0.0.0',
    'PORT': 5000,
    
    # Cámara
    'CAMERA_INDEX': 0,
    'CAMERA_WIDTH': 640,
    'CAMERA_HEIGHT': 480,
    'CAMERA_TIMEOUT': 10.0,
    'JPEG_QUALITY': 80,
    
    # Modelos y detección
    'LOAD_MODELS_ON_STARTUP': True,
    'DETECTOR_BACKEND': 'opencv',
    'EMOTION_MODEL': 'Emotion',
    'MIN_FACE_CONFIDENCE': 0.0,
    'MODEL_LOAD_TIMEOUT': 60.0,
    'DETECTION_TIMEOUT': 15.0,
    
    # Búsqueda musical
    'YOUTUBE_API_KEY': None,
    'YOUTUBE_SEARCH_URL': 'https://www.googleapis.com/youtube/v3/search',
    'YOUTUBE_EMBED_TEMPLATE': 'https://www.youtube.com/embed/{video_id}?autoplay=0',
    'YOUTUBE_MAX_RESULTS': 10,
    'YOUTUBE_TIMEOUT': 10.0,
    
    'INCLUDE_METRICS': False,
}


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


# Variable de entorno -> (clave de configuración, conversor)
_ENV_VARS = {
    'YOUTUBE_API_KEY': ('YOUTUBE_API_KEY', str),
    'MOODMUSIC_CAMERA_INDEX': ('CAMERA_INDEX', int),
    'MOODMUSIC_DETECTOR_BACKEND': ('DETECTOR_BACKEND', str),
    'MOODMUSIC_HOST': ('HOST', str),
    'MOODMUSIC_PORT': ('PORT', int),
    'MOODMUSIC_DEBUG': ('DEBUG', _parse_bool),
    'MOODMUSIC_LOAD_MODELS': ('LOAD_MODELS_ON_STARTUP', _parse_bool),
    'MOODMUSIC_INCLUDE_METRICS': ('INCLUDE_METRICS', _parse_bool),
}


def load_config_from_env(environ=None, dotenv: bool = True) -> Dict[str, Any]:
    """
    Lee la configuración desde variables de entorno.
    
    Args:
        environ (Mapping, optional): Entorno a usar (default: os.environ)
        dotenv (bool): Si es True, carga antes el fichero .env del directorio actual
    
    Returns:
        dict: Solo las claves presentes en el entorno
    
    Raises:
        ValueError: Si una variable numérica no tiene un valor válido
    
    Example:
        >>> load_config_from_env({'MOODMUSIC_PORT': '8080'}, dotenv=False)
        {'PORT': 8080}
    """
    if dotenv:
        load_dotenv()
    if environ is None:
        environ = os.environ
    
    config = {}
    for env_name, (key, convert) in _ENV_VARS.items():
        raw = environ.get(env_name)
        if raw is None or raw == '':
            continue
        try:
            config[key] = convert(raw)
        except ValueError as e:
            raise ValueError(f"Valor inválido para {env_name}: {raw!r}") from e
    return config
