"""
Dobles de prueba compartidos.

Los dobles sustituyen a la cámara, a la carga de modelos, al detector y al
cliente de YouTube, de modo que los tests no necesitan hardware, modelos
descargados ni red.
"""

import numpy as np

from moodmusic.core.emotion.model_loader import ModelLoadError


class FakeCamera:
    def __init__(self, fail_start=False, frames_ok=True):
        self.fail_start = fail_start
        self.frames_ok = frames_ok
        self.is_opened = False
        self.start_calls = 0
        self.released = False
    
    def start(self):
        self.start_calls += 1
        if self.fail_start:
            raise RuntimeError("Permiso denegado")
        self.is_opened = True
        return True
    
    def read(self):
        if not self.is_opened:
            raise RuntimeError("La cámara no está abierta")
        if not self.frames_ok:
            return False, None
        return True, np.zeros((48, 64, 3), dtype=np.uint8)
    
    def release(self):
        self.is_opened = False
        self.released = True
    
    def get_properties(self):
        return {'width': 64, 'height': 48, 'fps': 30}


class FakeLoader:
    def __init__(self, fail=False):
        self.fail = fail
        self.status = 'pending'
        self.start_calls = 0
    
    def start(self):
        self.start_calls += 1
        if self.status == 'pending':
            self.status = 'failed' if self.fail else 'ready'
    
    def wait(self, timeout=None):
        if self.status == 'pending':
            raise ModelLoadError("La carga de modelos no se ha iniciado")
        if self.status == 'failed':
            raise ModelLoadError("No se pudieron cargar los modelos")


class FakeDetector:
    """Devuelve los resultados de ``results`` en orden (None = sin rostro)."""
    
    def __init__(self, *results):
        self.results = list(results) or [{'mood': 'happy', 'scores': {'happy': 0.9}}]
        self.frames = []
    
    def detect(self, frame):
        self.frames.append(frame)
        if len(self.results) > 1:
            return self.results.pop(0)
        return self.results[0]


class FakeFetcher:
    """Devuelve URLs por consulta o lanza el error configurado."""
    
    def __init__(self, urls=None, error=None):
        self.urls = urls
        self.error = error
        self.queries = []
    
    def fetch(self, query):
        self.queries.append(query)
        if self.error is not None:
            raise self.error
        if self.urls is not None:
            return list(self.urls)
        return [f'https://www.youtube.com/embed/{query.replace(" ", "-")}-{i}?autoplay=0'
                for i in range(10)]


def mood_result(mood, score=0.9):
    return {'mood': mood, 'scores': {mood: score}, 'face_confidence': 0.95, 'region': {}}
