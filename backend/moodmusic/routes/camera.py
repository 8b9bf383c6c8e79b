"""
Blueprint para la cámara: activación y feed MJPEG.
"""

from flask import Blueprint, Response, jsonify, stream_with_context
from .mood import get_pipeline

camera_bp = Blueprint('camera', __name__)


@camera_bp.route('/camera', methods=['POST'])
def turn_on_camera():
    """
    Activa la cámara del servidor ("Turn On Camera").
    
    Returns:
        JSON con la instantánea de la sesión; 503 si la cámara no está disponible
    
    Example:
        POST /camera
        
        Response:
        {"state": "camera_granted", "camera_ready": true, ...}
    """
    snapshot = get_pipeline().turn_on_camera()
    status = 200 if snapshot['camera_ready'] else 503
    return jsonify(snapshot), status


@camera_bp.route('/video-feed', methods=['GET'])
def video_feed():
    """
    Stream MJPEG de la cámara, usado como superficie de vídeo de la página.
    
    Error cases:
        - 409: La cámara no está activa
    """
    pipeline = get_pipeline()
    
    if not pipeline.session.camera_ready:
        return jsonify({
            'error': 'Cámara no activa',
            'message': 'Activa la cámara con POST /camera antes de pedir el feed'
        }), 409
    
    def generate():
        for jpeg in pipeline.frames():
            yield b'--frame\r\nContent-Type: image/jpeg\r\n\r\n' + jpeg + b'\r\n'
    
    return Response(
        stream_with_context(generate()),
        mimetype='multipart/x-mixed-replace; boundary=frame'
    )
