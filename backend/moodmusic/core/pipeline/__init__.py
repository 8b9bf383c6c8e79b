"""
Módulo de pipeline: orquesta cámara, detección de ánimo y búsqueda musical.
"""

from .mood_pipeline import MoodMusicPipeline

__all__ = ['MoodMusicPipeline']
