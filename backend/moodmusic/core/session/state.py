"""
Máquina de estados de la sesión de detección de ánimo.

Una única sesión por proceso guarda lo que la página muestra: si la cámara
está activa, el último ánimo detectado, la lista de vídeos recomendados y
el último error. Cada detección recibe un número de secuencia monótono;
los resultados de detecciones ya superadas por otra más reciente se
descartan, de modo que una respuesta lenta nunca sobrescribe a una nueva.

Transiciones:

    idle ──camera_granted──> camera_granted
    camera_granted ──camera_released──> idle
    camera_granted | results_ready | error ──begin_detection──> detecting
    detecting ──mood_detected──> mood_detected ──(fetch)──> fetching_music
    fetching_music ──results_ready──> results_ready
    cualquiera ──fail──> error
"""

import logging
import threading
from enum import Enum
from typing import Dict, List, Optional

logger = logging.getLogger(__name__)


class SessionState(str, Enum):
    IDLE = 'idle'
    CAMERA_GRANTED = 'camera_granted'
    DETECTING = 'detecting'
    MOOD_DETECTED = 'mood_detected'
    FETCHING_MUSIC = 'fetching_music'
    RESULTS_READY = 'results_ready'
    ERROR = 'error'


class ErrorKind(str, Enum):
    CAMERA = 'camera'
    MODEL_LOAD = 'model_load'
    NO_FACE = 'no_face'
    DETECTION = 'detection'
    TIMEOUT = 'timeout'
    CONFIGURATION = 'configuration'
    NETWORK = 'network'
    API = 'api'
    MALFORMED = 'malformed'
    EMPTY_RESULTS = 'empty_results'


class InvalidTransitionError(ValueError):
    """La acción pedida no es válida en el estado actual de la sesión."""


class MoodSession:
    """
    Estado compartido de la sesión, protegido por un único lock.
    
    Attributes:
        state (SessionState): Estado actual
        camera_ready (bool): True cuando el stream de cámara está enlazado
        mood (str | None): Ánimo mostrado (None hasta la primera detección)
        music_urls (List[str]): URLs embebidas mostradas
        error_kind (ErrorKind | None): Tipo del último error (solo en estado error)
        error_message (str | None): Descripción del último error
        sequence (int): Número de la detección más reciente
    """
    
    def __init__(self):
        self._lock = threading.Lock()
        self.state = SessionState.IDLE
        self.camera_ready = False
        self.mood: Optional[str] = None
        self.music_urls: List[str] = []
        self.error_kind: Optional[ErrorKind] = None
        self.error_message: Optional[str] = None
        self.sequence = 0
        # Ánimo mostrado antes de la detección en curso
        self._committed_mood: Optional[str] = None
    
    # ------------------------------------------------------------------
    # Cámara
    # ------------------------------------------------------------------
    
    def camera_granted(self) -> None:
        with self._lock:
            self.camera_ready = True
            if self.state in (SessionState.IDLE, SessionState.ERROR):
                self._set_state(SessionState.CAMERA_GRANTED)
                self._clear_error()
    
    def camera_failed(self, message: str) -> None:
        with self._lock:
            self._set_error(ErrorKind.CAMERA, message)
    
    def camera_released(self) -> None:
        """Marca la cámara como liberada; ánimo y vídeos se conservan."""
        with self._lock:
            self.camera_ready = False
            if self.state is SessionState.CAMERA_GRANTED:
                self._set_state(SessionState.IDLE)
    
    # ------------------------------------------------------------------
    # Detección
    # ------------------------------------------------------------------
    
    def begin_detection(self, require_camera: bool = True) -> int:
        """
        Inicia una detección y devuelve su número de secuencia.
        
        Una detección nueva invalida cualquier otra que siga en curso.
        
        Raises:
            InvalidTransitionError: Si se necesita la cámara y no está activa
        """
        with self._lock:
            if require_camera and not self.camera_ready:
                raise InvalidTransitionError('La cámara no está activa')
            
            if self.state not in (SessionState.DETECTING, SessionState.MOOD_DETECTED,
                                  SessionState.FETCHING_MUSIC):
                self._committed_mood = self.mood
            else:
                logger.info(f"Detección #{self.sequence} superada por una nueva")
            
            self.sequence += 1
            self._clear_error()
            self._set_state(SessionState.DETECTING)
            return self.sequence
    
    def mood_detected(self, seq: int, mood: str) -> bool:
        """Registra el ánimo detectado y pasa a buscar música."""
        with self._lock:
            if not self._is_current(seq):
                return False
            self.mood = mood
            self._set_state(SessionState.MOOD_DETECTED)
            self._set_state(SessionState.FETCHING_MUSIC)
            return True
    
    def results_ready(self, seq: int, urls: List[str]) -> bool:
        """Sustituye por completo la lista de vídeos."""
        with self._lock:
            if not self._is_current(seq):
                return False
            self.music_urls = list(urls)
            self._committed_mood = self.mood
            self._set_state(SessionState.RESULTS_READY)
            return True
    
    def fail(self, seq: int, kind: ErrorKind, message: str) -> bool:
        """
        Registra un fallo de la detección ``seq``.
        
        El ánimo y la lista de vídeos mostrados antes de la detección se
        conservan: un fallo nunca deja la página a medio actualizar.
        """
        with self._lock:
            if not self._is_current(seq):
                return False
            self.mood = self._committed_mood
            self._set_error(ErrorKind(kind), message)
            return True
    
    # ------------------------------------------------------------------
    # Consulta
    # ------------------------------------------------------------------
    
    def snapshot(self) -> Dict[str, object]:
        """Copia serializable a JSON del estado actual."""
        with self._lock:
            return {
                'state': self.state.value,
                'camera_ready': self.camera_ready,
                'mood': self.mood,
                'music_urls': list(self.music_urls),
                'error': {
                    'kind': self.error_kind.value,
                    'message': self.error_message,
                } if self.error_kind is not None else None,
                'sequence': self.sequence,
            }
    
    # ------------------------------------------------------------------
    # Internos (llamar con el lock adquirido)
    # ------------------------------------------------------------------
    
    def _is_current(self, seq: int) -> bool:
        if seq != self.sequence:
            logger.info(f"Resultado de la detección #{seq} descartado (actual: #{self.sequence})")
            return False
        return True
    
    def _set_state(self, state: SessionState) -> None:
        logger.debug(f"Sesión: {self.state.value} -> {state.value}")
        self.state = state
    
    def _set_error(self, kind: ErrorKind, message: str) -> None:
        self.error_kind = kind
        self.error_message = message
        self._set_state(SessionState.ERROR)
    
    def _clear_error(self) -> None:
        self.error_kind = None
        self.error_message = None
