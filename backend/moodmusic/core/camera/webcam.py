"""
Módulo de captura de webcam usando OpenCV.

Este módulo gestiona el acceso a la cámara local: es el equivalente en
servidor de la petición de permisos de vídeo del navegador. El stream
abierto se muestra en la página como feed MJPEG y es la fuente de los
frames que analiza el detector de ánimo.
"""

import logging
import cv2
import numpy as np
from typing import Tuple, Optional

logger = logging.getLogger(__name__)


class WebcamCapture:
    """
    Clase para gestionar la captura de video desde webcam.
    
    Encapsula la funcionalidad de OpenCV para abrir, leer y liberar la
    cámara de manera controlada.
    
    Attributes:
        camera_index (int): Índice de la cámara a utilizar (default: 0)
        width (int): Ancho de captura solicitado
        height (int): Alto de captura solicitado
        cap (cv2.VideoCapture): Objeto de captura de OpenCV
        is_opened (bool): Estado de la cámara
    """
    
    def __init__(self, camera_index: int = 0, width: int = 640, height: int = 480):
        self.camera_index = camera_index
        self.width = width
        self.height = height
        self.cap: Optional[cv2.VideoCapture] = None
        self.is_opened = False
    
    def start(self) -> bool:
        """
        Abre la conexión con la webcam.
        
        Returns:
            bool: True si la cámara se abrió correctamente
            
        Raises:
            RuntimeError: Si no hay dispositivo o el sistema deniega el acceso
        """
        if self.is_opened:
            return True
        
        try:
            self.cap = cv2.VideoCapture(self.camera_index)
            
            if not self.cap.isOpened():
                raise RuntimeError(
                    f"No se pudo abrir la cámara con índice {self.camera_index}. "
                    "Verifica que la cámara esté conectada y no esté siendo utilizada por otra aplicación."
                )
            
            self.cap.set(cv2.CAP_PROP_FRAME_WIDTH, self.width)
            self.cap.set(cv2.CAP_PROP_FRAME_HEIGHT, self.height)
            
            self.is_opened = True
            logger.info(f"Cámara {self.camera_index} abierta correctamente")
            return True
            
        except Exception as e:
            self.is_opened = False
            if self.cap is not None:
                self.cap.release()
                self.cap = None
            raise RuntimeError(f"Error al iniciar la cámara: {str(e)}") from e
    
    def read(self) -> Tuple[bool, Optional[np.ndarray]]:
        """
        Lee un frame de la webcam.
        
        Returns:
            Tuple[bool, Optional[np.ndarray]]: 
                - success (bool): True si se leyó correctamente el frame
                - frame (np.ndarray | None): Frame BGR capturado o None si hubo error
        
        Raises:
            RuntimeError: Si se intenta leer sin haber abierto la cámara
        """
        if not self.is_opened or self.cap is None:
            raise RuntimeError(
                "La cámara no está abierta. Llama a start() antes de leer frames."
            )
        
        success, frame = self.cap.read()
        
        if not success:
            logger.warning("No se pudo leer el frame de la cámara")
            return False, None
        
        return success, frame
    
    def release(self) -> None:
        """
        Libera los recursos de la cámara y cierra la conexión.
        """
        if self.cap is not None:
            self.cap.release()
            self.cap = None
            self.is_opened = False
            logger.info("Recursos de cámara liberados")
    
    def get_properties(self) -> dict:
        """
        Obtiene las propiedades actuales de la cámara.
        
        Returns:
            dict: Diccionario con propiedades de la cámara (ancho, alto, fps)
        """
        if not self.is_opened or self.cap is None:
            return {}
        
        return {
            'width': int(self.cap.get(cv2.CAP_PROP_FRAME_WIDTH)),
            'height': int(self.cap.get(cv2.CAP_PROP_FRAME_HEIGHT)),
            'fps': int(self.cap.get(cv2.CAP_PROP_FPS))
        }
    
    def __enter__(self):
        self.start()
        return self
    
    def __exit__(self, exc_type, exc_val, exc_tb):
        self.release()


def encode_jpeg(frame: np.ndarray, quality: int = 80) -> Optional[bytes]:
    """
    Codifica un frame BGR como JPEG para el feed MJPEG de la página.
    
    Returns:
        bytes | None: Imagen JPEG, o None si OpenCV no pudo codificarla
    """
    ok, buffer = cv2.imencode('.jpg', frame, [int(cv2.IMWRITE_JPEG_QUALITY), quality])
    if not ok:
        return None
    return buffer.tobytes()


def decode_image(data: bytes) -> Optional[np.ndarray]:
    """
    Decodifica bytes JPEG/PNG enviados por un cliente a un frame BGR.
    
    Returns:
        np.ndarray | None: Frame decodificado o None si el formato no es válido
    """
    if not data:
        return None
    nparr = np.frombuffer(data, np.uint8)
    return cv2.imdecode(nparr, cv2.IMREAD_COLOR)
