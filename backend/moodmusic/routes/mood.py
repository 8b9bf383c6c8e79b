"""
Blueprint para endpoints relacionados con la detección de ánimo.

Proporciona el estado de la sesión y la detección de ánimo con su
búsqueda musical asociada.
"""

from flask import Blueprint, jsonify, current_app, request
from ..core.camera.webcam import decode_image
from ..core.pipeline.mood_pipeline import MoodMusicPipeline
from ..core.session.state import InvalidTransitionError

mood_bp = Blueprint('mood', __name__)


def get_pipeline() -> MoodMusicPipeline:
    """Pipeline único de la aplicación (creado en create_app)."""
    return current_app.config['MOOD_PIPELINE']


@mood_bp.route('/state', methods=['GET'])
def get_state():
    """
    Devuelve la instantánea de la sesión.
    
    Example:
        GET /state
        
        Response:
        {
            "state": "results_ready",
            "camera_ready": true,
            "mood": "happy",
            "music_urls": ["https://www.youtube.com/embed/abc?autoplay=0", ...],
            "error": null,
            "sequence": 3
        }
    """
    return jsonify(get_pipeline().session.snapshot()), 200


@mood_bp.route('/detect-mood', methods=['POST'])
def detect_mood():
    """
    Detecta el ánimo actual y busca música para él.
    
    Sin imagen, analiza el frame actual de la cámara del servidor (que debe
    estar activa). Con una imagen en el campo multipart "image", analiza
    esa imagen.
    
    Returns:
        JSON con la instantánea de la sesión. Los fallos de detección o de
        búsqueda se informan en el campo "error" con código 200.
    
    Error cases:
        - 400: Imagen vacía o con formato inválido
        - 409: Cámara no activa y no se envió imagen
        - 500: Error interno del servidor
    """
    try:
        frame = None
        
        if 'image' in request.files:
            file = request.files['image']
            file_bytes = file.read()
            
            if not file_bytes:
                return jsonify({
                    'error': 'Archivo vacío',
                    'message': 'El campo "image" no contiene datos'
                }), 400
            
            frame = decode_image(file_bytes)
            
            if frame is None:
                return jsonify({
                    'error': 'Formato de imagen inválido',
                    'message': 'No se pudo decodificar la imagen. Usa formato JPEG o PNG'
                }), 400
        
        pipeline = get_pipeline()
        
        try:
            response = pipeline.detect_mood(frame)
        except InvalidTransitionError as e:
            return jsonify({
                'error': 'Cámara no activa',
                'message': str(e)
            }), 409
        
        if current_app.config.get('INCLUDE_METRICS', False):
            duration = pipeline.metrics.last_duration('mood_pipeline')
            if duration is not None:
                response['processing_time_ms'] = round(duration * 1000, 2)
        
        return jsonify(response), 200
    
    except Exception as e:
        current_app.logger.error(f"Error en /detect-mood: {str(e)}", exc_info=True)
        
        error_message = str(e) if current_app.debug else 'Error interno del servidor'
        return jsonify({
            'error': 'Error al detectar el ánimo',
            'message': error_message
        }), 500
