"""
Pipeline de detección de ánimo y recomendación musical.

Este módulo conecta los componentes del sistema en el flujo completo:

1. Cámara (WebcamCapture) -> frame actual
2. Modelos preentrenados (ModelLoader) -> esperar a que estén cargados
3. Detector (DeepFaceMoodDetector) -> ánimo dominante
4. Mapeo ánimo -> frase de búsqueda (mood_to_query)
5. Búsqueda musical (YouTubeMusicFetcher) -> URLs embebidas
6. Sesión (MoodSession) -> estado que consume la vista

Cada llamada externa tiene un plazo máximo y cada fallo se convierte en un
error explícito de la sesión en lugar de perderse en silencio.
"""

import logging
import threading
from typing import Dict, Iterator, Optional

import numpy as np

from ..camera.webcam import encode_jpeg
from ..emotion.model_loader import ModelLoadError
from ..music.queries import mood_to_query
from ..music.youtube import MusicFetchError
from ..session.state import MoodSession, ErrorKind
from ..utils.metrics import get_metrics
from ..utils.tasks import run_with_timeout, TaskTimeoutError

logger = logging.getLogger(__name__)


class MoodMusicPipeline:
    """
    Orquestador del flujo cámara -> ánimo -> música.
    
    Todos los colaboradores se inyectan en el constructor, lo que permite
    sustituirlos por dobles de prueba.
    
    Attributes:
        camera: Instancia de WebcamCapture (start/read/release)
        loader: Instancia de ModelLoader (start/wait/status)
        detector: Instancia de DeepFaceMoodDetector (detect)
        fetcher: Instancia de YouTubeMusicFetcher (fetch)
        session (MoodSession): Estado de la sesión
        detection_timeout (float): Plazo de la inferencia, en segundos
        model_load_timeout (float): Espera máxima a que carguen los modelos
        camera_timeout (float): Plazo para abrir la cámara
    
    Example:
        >>> pipeline = MoodMusicPipeline(camera, loader, detector, fetcher)
        >>> pipeline.load_models()
        >>> pipeline.turn_on_camera()
        >>> pipeline.detect_mood()
        {'state': 'results_ready', 'camera_ready': True, 'mood': 'happy',
         'music_urls': [...], 'error': None, 'sequence': 1}
    """
    
    def __init__(
        self,
        camera,
        loader,
        detector,
        fetcher,
        session: Optional[MoodSession] = None,
        detection_timeout: float = 15.0,
        model_load_timeout: float = 60.0,
        camera_timeout: float = 10.0,
        jpeg_quality: int = 80,
        metrics=None
    ):
        self.camera = camera
        self.loader = loader
        self.detector = detector
        self.fetcher = fetcher
        self.session = session or MoodSession()
        self.detection_timeout = detection_timeout
        self.model_load_timeout = model_load_timeout
        self.camera_timeout = camera_timeout
        self.jpeg_quality = jpeg_quality
        self.metrics = metrics or get_metrics()
        
        # OpenCV no admite lecturas concurrentes del mismo dispositivo
        self._camera_lock = threading.Lock()
    
    def load_models(self) -> None:
        """Lanza la carga única de modelos en segundo plano."""
        self.loader.start()
    
    @property
    def models_status(self) -> str:
        return self.loader.status
    
    def turn_on_camera(self) -> Dict[str, object]:
        """
        Abre la cámara y la marca como enlazada en la sesión.
        
        Si la cámara ya está activa no hace nada. Un fallo (sin dispositivo,
        permiso denegado, timeout) se registra como error de cámara.
        
        Returns:
            dict: Instantánea de la sesión
        """
        if self.session.camera_ready:
            return self.session.snapshot()
        
        try:
            with self._camera_lock:
                run_with_timeout(self.camera.start, timeout=self.camera_timeout)
        except (RuntimeError, TaskTimeoutError) as e:
            logger.error(f"Error de cámara: {e}")
            self.session.camera_failed(str(e))
        else:
            self.session.camera_granted()
        
        return self.session.snapshot()
    
    def detect_mood(self, frame: Optional[np.ndarray] = None) -> Dict[str, object]:
        """
        Ejecuta una detección completa y la búsqueda musical asociada.
        
        Args:
            frame (np.ndarray, optional): Frame BGR enviado por el cliente.
                Si es None se lee de la cámara, que debe estar activa.
        
        Returns:
            dict: Instantánea de la sesión tras la detección
        
        Raises:
            InvalidTransitionError: Si no hay frame y la cámara no está activa
        """
        seq = self.session.begin_detection(require_camera=frame is None)
        
        try:
            with self.metrics.measure('mood_pipeline'):
                self._run(seq, frame)
        except Exception as e:
            logger.error(f"Error inesperado en la detección #{seq}: {e}", exc_info=True)
            self.session.fail(seq, ErrorKind.DETECTION, str(e))
        
        return self.session.snapshot()
    
    def _run(self, seq: int, frame: Optional[np.ndarray]) -> None:
        # 1. Modelos
        try:
            with self.metrics.measure('model_wait'):
                self.loader.wait(timeout=self.model_load_timeout)
        except ModelLoadError as e:
            self.session.fail(seq, ErrorKind.MODEL_LOAD, str(e))
            return
        
        # 2. Frame
        if frame is None:
            frame = self._read_frame()
            if frame is None:
                self.session.fail(seq, ErrorKind.CAMERA, 'No se pudo leer un frame de la cámara')
                return
        
        # 3. Detección
        try:
            with self.metrics.measure('mood_detection'):
                result = run_with_timeout(self.detector.detect, frame, timeout=self.detection_timeout)
        except TaskTimeoutError as e:
            self.session.fail(seq, ErrorKind.TIMEOUT, str(e))
            return
        
        if not result:
            logger.info(f"Detección #{seq}: no se encontró ningún rostro")
            self.session.fail(seq, ErrorKind.NO_FACE, 'No se detectó ningún rostro')
            return
        
        mood = result['mood']
        logger.info(f"Detección #{seq}: ánimo '{mood}'")
        if not self.session.mood_detected(seq, mood):
            return
        
        # 4-5. Búsqueda musical
        query = mood_to_query(mood)
        try:
            with self.metrics.measure('music_fetch'):
                urls = self.fetcher.fetch(query)
        except MusicFetchError as e:
            self.session.fail(seq, ErrorKind(e.kind), e.message)
            return
        
        self.session.results_ready(seq, urls)
    
    def _read_frame(self) -> Optional[np.ndarray]:
        try:
            with self._camera_lock:
                success, frame = self.camera.read()
        except RuntimeError as e:
            logger.error(f"Error al leer la cámara: {e}")
            return None
        return frame if success else None
    
    def frames(self) -> Iterator[bytes]:
        """
        Genera frames JPEG de la cámara para el feed MJPEG.
        
        Termina cuando la cámara deja de entregar frames o se libera.
        """
        while self.session.camera_ready:
            frame = self._read_frame()
            if frame is None:
                break
            jpeg = encode_jpeg(frame, quality=self.jpeg_quality)
            if jpeg is not None:
                yield jpeg
    
    def stop(self) -> None:
        """Libera la cámara y la marca como no disponible en la sesión."""
        with self._camera_lock:
            self.camera.release()
        self.session.camera_released()
