"""
Mood Music: detección de ánimo por webcam y recomendación de vídeos musicales.
"""

__version__ = "1.0.0"
