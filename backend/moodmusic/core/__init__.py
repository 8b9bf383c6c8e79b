"""
Core - Módulo principal del sistema de detección de ánimo y recomendación musical.

Este paquete contiene todos los componentes fundamentales del sistema:
- camera: Captura de video desde webcam
- emotion: Carga de modelos, detección de ánimo y normalización de etiquetas
- music: Mapeo ánimo -> búsqueda y cliente de YouTube
- session: Máquina de estados de la sesión y predicados de la vista
- pipeline: Orquestación del flujo completo
- utils: Utilidades numéricas, tareas con timeout y métricas
"""

from . import camera
from . import emotion
from . import music
from . import session
from . import pipeline
from . import utils

# Exponer componentes principales para facilitar imports
from .camera import WebcamCapture
from .emotion import DeepFaceMoodDetector, ModelLoader, select_top_mood
from .music import mood_to_query, YouTubeMusicFetcher
from .session import MoodSession, build_view_model
from .pipeline import MoodMusicPipeline

__all__ = [
    'camera',
    'emotion',
    'music',
    'session',
    'pipeline',
    'utils',
    'WebcamCapture',
    'DeepFaceMoodDetector',
    'ModelLoader',
    'select_top_mood',
    'mood_to_query',
    'YouTubeMusicFetcher',
    'MoodSession',
    'build_view_model',
    'MoodMusicPipeline',
]
