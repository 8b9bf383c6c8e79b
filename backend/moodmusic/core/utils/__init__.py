"""
Módulo de utilidades comunes del sistema.

Este paquete contiene funciones reutilizables que se usan en diferentes
partes del sistema (normalización numérica, tareas con timeout, métricas).
"""

from .math import clamp, percent_to_unit
from .tasks import run_with_timeout, TaskTimeoutError
from .metrics import PerformanceMetrics, get_metrics, reset_metrics

__all__ = [
    'clamp',
    'percent_to_unit',
    'run_with_timeout',
    'TaskTimeoutError',
    'PerformanceMetrics',
    'get_metrics',
    'reset_metrics',
]
