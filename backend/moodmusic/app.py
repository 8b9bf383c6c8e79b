"""
Aplicación principal del backend - Mood Music.

Este módulo implementa la aplicación Flask que detecta el estado de ánimo
del usuario a través de la webcam y le recomienda vídeos musicales de
YouTube acordes a ese ánimo.

La aplicación proporciona:
- Página principal con la cámara, el ánimo detectado y los reproductores
- Activación de la cámara y feed MJPEG
- Detección de ánimo (desde la cámara o desde una imagen enviada)
- Estado de la sesión, salud del servicio y métricas

Los modelos de DeepFace se cargan una sola vez, en segundo plano, al
crear la aplicación. La cámara solo se abre cuando el usuario la activa.
"""

import atexit
import logging
from flask import Flask
from flask_cors import CORS

from . import __version__
from .config import DEFAULT_CONFIG, load_config_from_env
from .core.camera.webcam import WebcamCapture
from .core.emotion.deepface_detector import DeepFaceMoodDetector
from .core.emotion.model_loader import ModelLoader
from .core.music.youtube import YouTubeMusicFetcher
from .core.pipeline.mood_pipeline import MoodMusicPipeline
from .routes import health_bp, camera_bp, mood_bp, view_bp

# Configurar logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def build_pipeline(config) -> MoodMusicPipeline:
    """
    Construye el pipeline completo a partir de la configuración de la app.
    
    La clave de YouTube se entrega aquí al cliente de búsqueda; ningún otro
    componente la lee.
    
    Args:
        config (Mapping): Configuración (normalmente ``app.config``)
    
    Returns:
        MoodMusicPipeline: Pipeline listo para cargar modelos
    """
    camera = WebcamCapture(
        camera_index=config['CAMERA_INDEX'],
        width=config['CAMERA_WIDTH'],
        height=config['CAMERA_HEIGHT']
    )
    loader = ModelLoader(
        detector_backend=config['DETECTOR_BACKEND'],
        emotion_model=config['EMOTION_MODEL']
    )
    detector = DeepFaceMoodDetector(
        detector_backend=config['DETECTOR_BACKEND'],
        min_face_confidence=config['MIN_FACE_CONFIDENCE']
    )
    fetcher = YouTubeMusicFetcher(
        api_key=config['YOUTUBE_API_KEY'],
        search_url=config['YOUTUBE_SEARCH_URL'],
        max_results=config['YOUTUBE_MAX_RESULTS'],
        timeout=config['YOUTUBE_TIMEOUT'],
        embed_template=config['YOUTUBE_EMBED_TEMPLATE']
    )
    return MoodMusicPipeline(
        camera=camera,
        loader=loader,
        detector=detector,
        fetcher=fetcher,
        detection_timeout=config['DETECTION_TIMEOUT'],
        model_load_timeout=config['MODEL_LOAD_TIMEOUT'],
        camera_timeout=config['CAMERA_TIMEOUT'],
        jpeg_quality=config['JPEG_QUALITY']
    )


def create_app(config=None):
    """
    Factory function para crear y configurar la aplicación Flask.
    
    La configuración se aplica por capas: valores por defecto, entorno
    (incluido .env) y, por último, el diccionario ``config``.
    
    Args:
        config (dict, optional): Configuración custom. Puede incluir
            'MOOD_PIPELINE' con un pipeline ya construido (útil para testing).
    
    Returns:
        Flask: Aplicación Flask configurada y lista para usar
    
    Example:
        >>> app = create_app({'YOUTUBE_API_KEY': '...'})
        >>> app.run(port=5000)
    """
    app = Flask(__name__)
    
    app.config.update(DEFAULT_CONFIG)
    app.config.update(load_config_from_env())
    if config:
        app.config.update(config)
    
    CORS(app)
    
    pipeline = app.config.get('MOOD_PIPELINE')
    if pipeline is None:
        if not app.config.get('YOUTUBE_API_KEY'):
            logger.warning("YOUTUBE_API_KEY no configurada: la búsqueda musical fallará")
        pipeline = build_pipeline(app.config)
        app.config['MOOD_PIPELINE'] = pipeline
        atexit.register(pipeline.stop)
    
    if app.config['LOAD_MODELS_ON_STARTUP']:
        pipeline.load_models()
        logger.info("Carga de modelos iniciada en segundo plano")
    
    app.register_blueprint(health_bp)
    app.register_blueprint(camera_bp)
    app.register_blueprint(mood_bp)
    app.register_blueprint(view_bp)
    
    logger.info("Blueprints registrados")
    
    return app


def main():
    """
    Función principal para ejecutar el servidor de desarrollo.
    
    Para producción, usar un servidor WSGI como Gunicorn con un solo
    worker (la cámara y la sesión son únicas por proceso).
    """
    app = create_app()
    
    print("=" * 70)
    print(f"Mood Music v{__version__}")
    print("=" * 70)
    print("\nEndpoints disponibles:")
    print("  GET  /              - Página principal")
    print("  GET  /health        - Verificación de estado")
    print("  GET  /metrics       - Estadísticas de latencia")
    print("  GET  /state         - Estado de la sesión")
    print("  POST /camera        - Activar la cámara")
    print("  GET  /video-feed    - Feed MJPEG de la cámara")
    print("  POST /detect-mood   - Detectar ánimo y buscar música")
    print("\n" + "=" * 70)
    print(f"Servidor iniciando en http://{app.config['HOST']}:{app.config['PORT']}")
    print("=" * 70 + "\n")
    
    app.run(
        host=app.config['HOST'],
        port=app.config['PORT'],
        debug=app.config['DEBUG'],
        threaded=True,
        use_reloader=False
    )


if __name__ == "__main__":
    main()
