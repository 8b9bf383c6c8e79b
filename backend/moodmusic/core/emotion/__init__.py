"""
Módulo de reconocimiento de ánimo facial.

Este paquete contiene la carga de modelos preentrenados, el detector de
ánimo basado en DeepFace y el esquema de etiquetas de ánimo.
"""

from .deepface_detector import DeepFaceMoodDetector, select_top_mood
from .model_loader import ModelLoader, ModelLoadError
from .schema import normalize_mood, normalize_scores, is_valid_mood, get_all_moods, MOOD_LABELS

__all__ = [
    'DeepFaceMoodDetector',
    'select_top_mood',
    'ModelLoader',
    'ModelLoadError',
    'normalize_mood',
    'normalize_scores',
    'is_valid_mood',
    'get_all_moods',
    'MOOD_LABELS'
]
