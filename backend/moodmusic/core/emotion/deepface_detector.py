"""
Módulo de detección de ánimo usando DeepFace.

Este módulo analiza un frame, localiza un único rostro con un detector
ligero y clasifica su expresión facial en una de las siete etiquetas de
ánimo del sistema.
"""

import logging
import numpy as np
from typing import Dict, Mapping, Optional
from deepface import DeepFace
from .schema import normalize_scores

logger = logging.getLogger(__name__)


def select_top_mood(scores: Mapping[str, float]) -> Optional[str]:
    """
    Devuelve la etiqueta con el score máximo.
    
    Recorrido lineal con comparación estricta: ante un empate gana la
    primera etiqueta en el orden de iteración del diccionario.
    
    Args:
        scores: Diccionario etiqueta -> score
    
    Returns:
        str | None: Etiqueta dominante, o None si no hay scores
    
    Examples:
        >>> select_top_mood({'sad': 0.1, 'happy': 0.7, 'neutral': 0.2})
        'happy'
        
        >>> select_top_mood({'angry': 0.5, 'sad': 0.5})
        'angry'
        
        >>> select_top_mood({}) is None
        True
    """
    best_label = None
    best_score = None
    for label, score in scores.items():
        if best_score is None or score > best_score:
            best_label = label
            best_score = score
    return best_label


class DeepFaceMoodDetector:
    """
    Detector de ánimo facial usando DeepFace.
    
    Equivale a "detectar un solo rostro con el perfil ligero y clasificar
    sus expresiones": si DeepFace devuelve varios rostros se toma el de
    mayor confianza.
    
    Attributes:
        detector_backend (str): Backend de detección facial ('opencv' es el más ligero)
        min_face_confidence (float): Confianza mínima para aceptar un rostro
    """
    
    def __init__(self, detector_backend: str = 'opencv', min_face_confidence: float = 0.0):
        self.detector_backend = detector_backend
        self.min_face_confidence = min_face_confidence
    
    def detect(self, frame: np.ndarray) -> Optional[Dict[str, object]]:
        """
        Detecta el ánimo dominante en un frame.
        
        Args:
            frame (np.ndarray): Frame de imagen en formato BGR (OpenCV)
        
        Returns:
            dict | None: None si no hay rostro o no hay scores de expresión.
                En otro caso, un diccionario con:
                - 'mood' (str): Etiqueta de ánimo dominante
                - 'scores' (dict): Score en [0, 1] por etiqueta
                - 'face_confidence' (float): Confianza del detector facial
                - 'region' (dict): Caja del rostro (x, y, w, h)
        
        Raises:
            Exception: Errores inesperados de DeepFace se propagan; el pipeline
                los convierte en un error de detección.
        
        Example:
            >>> detector = DeepFaceMoodDetector()
            >>> detector.detect(frame)
            {'mood': 'happy', 'scores': {'angry': 0.01, ..., 'happy': 0.91, ...},
             'face_confidence': 0.93, 'region': {'x': 120, 'y': 80, 'w': 200, 'h': 200}}
        """
        try:
            # enforce_detection=True: DeepFace lanza ValueError si no hay rostro
            faces = DeepFace.analyze(
                img_path=frame,
                actions=['emotion'],
                detector_backend=self.detector_backend,
                enforce_detection=True,
                silent=True
            )
        except ValueError as e:
            logger.debug(f"Sin rostro en el frame: {e}")
            return None
        
        if isinstance(faces, dict):
            faces = [faces]
        if not faces:
            return None
        
        face = max(faces, key=lambda f: float(f.get('face_confidence') or 0.0))
        face_confidence = float(face.get('face_confidence') or 0.0)
        
        if face_confidence < self.min_face_confidence:
            logger.debug(f"Rostro descartado (confianza {face_confidence:.2f})")
            return None
        
        scores = normalize_scores(face.get('emotion'))
        mood = select_top_mood(scores)
        
        if mood is None:
            return None
        
        return {
            'mood': mood,
            'scores': scores,
            'face_confidence': face_confidence,
            'region': {k: int(v) for k, v in (face.get('region') or {}).items()
                       if k in ('x', 'y', 'w', 'h')},
        }
