"""
Módulo de normalización de estados de ánimo.

Este módulo define el conjunto cerrado de etiquetas de ánimo que usa el
sistema y convierte las salidas del detector (DeepFace) a ese conjunto.

Las siete etiquetas corresponden a las emociones básicas de Ekman más el
estado neutral, expresadas como adjetivos ("surprised", "fearful", ...).
"""

from typing import Dict, List, Mapping, Optional

from ..utils.math import percent_to_unit

# Conjunto fijo de etiquetas de ánimo del sistema
MOOD_LABELS: List[str] = [
    "happy",
    "sad",
    "angry",
    "surprised",
    "fearful",
    "disgusted",
    "neutral",
]

# Mapeo de etiquetas de DeepFace (y sinónimos) a etiquetas de ánimo
DEEPFACE_TO_MOOD: Dict[str, str] = {
    # DeepFace usa sustantivos para tres de las emociones
    "surprise": "surprised",
    "fear": "fearful",
    "disgust": "disgusted",
    
    # Variaciones posibles
    "happiness": "happy",
    "sadness": "sad",
    "anger": "angry",
    "scared": "fearful",
}


def normalize_mood(label: Optional[str]) -> Optional[str]:
    """
    Normaliza una etiqueta de emoción al conjunto MOOD_LABELS.
    
    A diferencia de un valor por defecto, una etiqueta no reconocida
    devuelve None: el detector descarta scores que no sabe interpretar.
    
    Args:
        label (str): Etiqueta de emoción (puede venir de DeepFace)
    
    Returns:
        str | None: Etiqueta normalizada o None si no se reconoce
    
    Examples:
        >>> normalize_mood("surprise")
        'surprised'
        
        >>> normalize_mood("Happy ")
        'happy'
        
        >>> normalize_mood("confused") is None
        True
    """
    if not label or not isinstance(label, str):
        return None
    
    label_lower = label.lower().strip()
    
    if label_lower in MOOD_LABELS:
        return label_lower
    
    return DEEPFACE_TO_MOOD.get(label_lower)


def is_valid_mood(label: str) -> bool:
    """
    Verifica si una etiqueta pertenece al conjunto cerrado de ánimos.
    
    Examples:
        >>> is_valid_mood("fearful")
        True
        
        >>> is_valid_mood("fear")
        False
    """
    return label in MOOD_LABELS


def normalize_scores(raw_scores: Optional[Mapping[str, float]]) -> Dict[str, float]:
    """
    Convierte los porcentajes de DeepFace a scores en [0, 1] por etiqueta.
    
    Conserva el orden de iteración de la fuente, que es el que decide los
    empates al elegir el ánimo dominante. Las etiquetas desconocidas se
    descartan.
    
    Args:
        raw_scores: Diccionario etiqueta -> porcentaje (0-100)
    
    Returns:
        Dict[str, float]: Diccionario etiqueta normalizada -> score en [0, 1]
    
    Example:
        >>> normalize_scores({'surprise': 80.0, 'happy': 20.0})
        {'surprised': 0.8, 'happy': 0.2}
    """
    scores: Dict[str, float] = {}
    if not raw_scores:
        return scores
    
    for label, value in raw_scores.items():
        mood = normalize_mood(label)
        if mood is None or mood in scores:
            continue
        scores[mood] = percent_to_unit(value)
    
    return scores


def get_all_moods() -> List[str]:
    """
    Obtiene la lista completa de etiquetas de ánimo del sistema.
    
    Returns:
        List[str]: Copia de MOOD_LABELS
    """
    return MOOD_LABELS.copy()
