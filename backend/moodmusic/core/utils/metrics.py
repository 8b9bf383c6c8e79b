"""
Módulo de instrumentación y medición de rendimiento.

Proporciona herramientas para medir latencias del flujo cámara ->
detección de ánimo -> búsqueda musical, de forma que /metrics y las
respuestas de la API puedan informar cuánto tarda cada etapa.
"""

import time
import threading
from typing import Deque, Dict, Optional
from contextlib import contextmanager
from collections import defaultdict, deque
import statistics

# Mediciones conservadas por etapa
DEFAULT_HISTORY_SIZE = 1000


class PerformanceMetrics:
    """
    Gestor de métricas de rendimiento del sistema.
    
    Permite medir tiempos de ejecución de diferentes etapas del pipeline
    y consultar estadísticas agregadas por etapa. Solo se conservan las
    últimas ``history_size`` mediciones de cada etapa.
    """
    
    def __init__(self, history_size: int = DEFAULT_HISTORY_SIZE):
        self.measurements: Dict[str, Deque[float]] = defaultdict(lambda: deque(maxlen=history_size))
        self._lock = threading.Lock()
        
    @contextmanager
    def measure(self, stage_name: str):
        """
        Context manager para medir el tiempo de ejecución de una etapa.
        
        Args:
            stage_name: Nombre de la etapa a medir
            
        Yields:
            Diccionario donde se guardará el tiempo medido
            
        Example:
            with metrics.measure('mood_detection') as timing:
                result = detector.detect(frame)
            print(f"Tardó {timing['duration']} segundos")
        """
        start_time = time.perf_counter()
        timing_info = {'stage': stage_name}
        
        try:
            yield timing_info
        finally:
            duration = time.perf_counter() - start_time
            
            timing_info['duration'] = duration
            
            with self._lock:
                self.measurements[stage_name].append(duration)
    
    def last_duration(self, stage_name: str) -> Optional[float]:
        """Devuelve la última duración medida para una etapa (o None)."""
        with self._lock:
            times = self.measurements.get(stage_name)
            return times[-1] if times else None
    
    def get_statistics(self, stage_name: Optional[str] = None) -> Dict:
        """
        Calcula estadísticas sobre las mediciones realizadas.
        
        Args:
            stage_name: Etapa específica (None para todas)
            
        Returns:
            Diccionario con estadísticas por etapa
        """
        with self._lock:
            if stage_name:
                stages = {stage_name: list(self.measurements.get(stage_name, []))}
            else:
                stages = {name: list(times) for name, times in self.measurements.items()}
            
        stats = {}
        for name, times in stages.items():
            if not times:
                continue
                
            stats[name] = {
                'count': len(times),
                'mean': statistics.mean(times),
                'median': statistics.median(times),
                'stdev': statistics.stdev(times) if len(times) > 1 else 0.0,
                'min': min(times),
                'max': max(times),
                'total': sum(times)
            }
            
        return stats
    
    def clear(self):
        """Limpia todas las mediciones almacenadas."""
        with self._lock:
            self.measurements.clear()


# Instancia global para uso en la aplicación
_global_metrics = None


def get_metrics() -> PerformanceMetrics:
    """
    Obtiene la instancia global de métricas.
        
    Returns:
        Instancia de PerformanceMetrics
    """
    global _global_metrics
    if _global_metrics is None:
        _global_metrics = PerformanceMetrics()
    return _global_metrics


def reset_metrics():
    """Reinicia la instancia global de métricas."""
    global _global_metrics
    _global_metrics = None
