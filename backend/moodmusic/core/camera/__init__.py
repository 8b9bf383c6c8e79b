"""
Módulo de captura de cámara.
Proporciona acceso a la webcam y utilidades de codificación de frames.
"""

from .webcam import WebcamCapture, encode_jpeg, decode_image

__all__ = ['WebcamCapture', 'encode_jpeg', 'decode_image']
