"""
Utilidades matemáticas comunes del sistema.

Este módulo centraliza funciones numéricas reutilizables (normalización
de scores de confianza del detector, etc.).
"""


def clamp(x: float, lo: float, hi: float) -> float:
    """
    Restringe un valor al rango [lo, hi].
    
    Args:
        x (float): Valor a restringir
        lo (float): Límite inferior
        hi (float): Límite superior
    
    Returns:
        float: Valor restringido al rango [lo, hi]
    
    Examples:
        >>> clamp(5.0, 0.0, 10.0)
        5.0
        >>> clamp(15.0, 0.0, 10.0)
        10.0
        >>> clamp(-5.0, 0.0, 10.0)
        0.0
    """
    return max(lo, min(hi, x))


def percent_to_unit(value: float) -> float:
    """
    Convierte un porcentaje [0, 100] a una probabilidad en [0, 1].
    
    DeepFace entrega las probabilidades de emoción como porcentajes;
    el resto del sistema trabaja con scores en [0, 1].
    
    Examples:
        >>> percent_to_unit(50.0)
        0.5
        >>> percent_to_unit(120.0)
        1.0
    """
    return clamp(float(value) / 100.0, 0.0, 1.0)
