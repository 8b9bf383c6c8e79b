"""
Blueprint para endpoints de salud y monitoreo de la API.

Proporciona endpoints para verificar el estado del servicio y consultar
las latencias medidas.
"""

from flask import Blueprint, jsonify
from .mood import get_pipeline

health_bp = Blueprint('health', __name__)


@health_bp.route('/health', methods=['GET'])
def health_check():
    """
    Endpoint de verificación de estado del servicio.
    
    Returns:
        JSON con status "ok" y el estado de carga de los modelos
    
    Example:
        GET /health
        
        Response:
        {
            "status": "ok",
            "models": "ready"
        }
    """
    return jsonify({'status': 'ok', 'models': get_pipeline().models_status}), 200


@health_bp.route('/metrics', methods=['GET'])
def metrics():
    """Estadísticas de latencia (segundos) por etapa del pipeline."""
    return jsonify(get_pipeline().metrics.get_statistics()), 200
