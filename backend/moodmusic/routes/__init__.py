"""
Módulo de rutas de la API Flask.

Este paquete contiene los blueprints que definen la página principal y
los endpoints de la API de detección de ánimo y recomendación musical.
"""

from .health import health_bp
from .camera import camera_bp
from .mood import mood_bp
from .view import view_bp

__all__ = ['health_bp', 'camera_bp', 'mood_bp', 'view_bp']
