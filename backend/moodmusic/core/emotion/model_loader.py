"""
Carga de los modelos preentrenados de DeepFace.

Se construyen dos artefactos: el backend de detección facial y el
clasificador de expresiones faciales. DeepFace los mantiene en su propia
caché interna, de modo que las llamadas posteriores a DeepFace.analyze()
los reutilizan sin volver a cargarlos.

La carga se lanza una única vez por proceso, en segundo plano, al
arrancar la aplicación. Si falla, el detector queda inutilizable durante
toda la sesión: no hay reintento ni invalidación de caché.
"""

import logging
import threading
from typing import Optional

from deepface import DeepFace

logger = logging.getLogger(__name__)

STATUS_PENDING = 'pending'
STATUS_LOADING = 'loading'
STATUS_READY = 'ready'
STATUS_FAILED = 'failed'


class ModelLoadError(RuntimeError):
    """Los modelos no se pudieron cargar (o no terminaron a tiempo)."""


class ModelLoader:
    """
    Carga única, en segundo plano, de los modelos de detección.
    
    Attributes:
        detector_backend (str): Backend de detección facial de DeepFace
        emotion_model (str): Nombre del clasificador de expresiones
        status (str): pending | loading | ready | failed
        error (Exception | None): Causa del fallo de carga, si lo hubo
    
    Example:
        >>> loader = ModelLoader(detector_backend='opencv')
        >>> loader.start()
        >>> loader.wait(timeout=60)
    """
    
    def __init__(self, detector_backend: str = 'opencv', emotion_model: str = 'Emotion'):
        self.detector_backend = detector_backend
        self.emotion_model = emotion_model
        self.status = STATUS_PENDING
        self.error: Optional[BaseException] = None
        self._lock = threading.Lock()
        self._done = threading.Event()
        self._thread: Optional[threading.Thread] = None
    
    def start(self) -> None:
        """Lanza la carga en un hilo de fondo. Las llamadas repetidas no hacen nada."""
        with self._lock:
            if self.status != STATUS_PENDING:
                return
            self.status = STATUS_LOADING
            self._thread = threading.Thread(
                target=self._load, name='moodmusic-model-loader', daemon=True
            )
            self._thread.start()
    
    def _load(self) -> None:
        try:
            logger.info(f"Cargando detector facial '{self.detector_backend}'...")
            DeepFace.build_model(model_name=self.detector_backend, task='face_detector')
            logger.info(f"Cargando clasificador de expresiones '{self.emotion_model}'...")
            DeepFace.build_model(model_name=self.emotion_model, task='facial_attribute')
        except Exception as e:
            logger.error(f"Error al cargar los modelos: {e}", exc_info=True)
            with self._lock:
                self.error = e
                self.status = STATUS_FAILED
        else:
            logger.info("Modelos cargados correctamente")
            with self._lock:
                self.status = STATUS_READY
        finally:
            self._done.set()
    
    @property
    def is_ready(self) -> bool:
        return self.status == STATUS_READY
    
    def wait(self, timeout: Optional[float] = None) -> None:
        """
        Espera a que los modelos estén cargados.
        
        Args:
            timeout (float, optional): Segundos máximos de espera
        
        Raises:
            ModelLoadError: Si la carga no se inició, falló o no terminó a tiempo
        """
        if self.status == STATUS_PENDING:
            raise ModelLoadError("La carga de modelos no se ha iniciado")
        
        if not self._done.wait(timeout):
            raise ModelLoadError(f"Los modelos no terminaron de cargar en {timeout} segundos")
        
        if self.status == STATUS_FAILED:
            raise ModelLoadError(f"No se pudieron cargar los modelos: {self.error}")
