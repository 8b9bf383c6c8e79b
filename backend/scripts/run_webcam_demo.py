#!/usr/bin/env python3
"""
Demo de terminal: detección de ánimo por webcam y recomendación musical.

Abre la cámara local, espera a que carguen los modelos de DeepFace y, cada
vez que se pulsa Enter, detecta el ánimo e imprime los vídeos recomendados.

Uso:
    python backend/scripts/run_webcam_demo.py
    python backend/scripts/run_webcam_demo.py --camera 1 --api-key <clave>

Controles:
    - Enter: detectar ánimo
    - q + Enter: salir
"""

import sys
import argparse
import logging

from moodmusic.app import build_pipeline
from moodmusic.config import DEFAULT_CONFIG, load_config_from_env

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s [%(levelname)s] %(message)s',
    datefmt='%H:%M:%S'
)
logger = logging.getLogger(__name__)


def parse_args():
    parser = argparse.ArgumentParser(
        description='Detecta el ánimo con la webcam y recomienda música de YouTube'
    )
    parser.add_argument('--camera', type=int, default=None,
                        help='Índice de la cámara (default: MOODMUSIC_CAMERA_INDEX o 0)')
    parser.add_argument('--api-key', default=None,
                        help='Clave de la YouTube Data API (default: YOUTUBE_API_KEY)')
    parser.add_argument('--detector-backend', default=None,
                        help='Backend de detección facial de DeepFace (default: opencv)')
    return parser.parse_args()


def print_snapshot(snapshot: dict):
    print(f"\n{'='*70}")
    if snapshot['error']:
        print(f"  Error ({snapshot['error']['kind']}): {snapshot['error']['message']}")
    print(f"  Ánimo: {snapshot['mood'] or '-'}")
    for i, url in enumerate(snapshot['music_urls'], 1):
        print(f"  {i:2d}. {url}")
    print(f"{'='*70}")


def main():
    args = parse_args()
    
    config = dict(DEFAULT_CONFIG)
    config.update(load_config_from_env())
    if args.camera is not None:
        config['CAMERA_INDEX'] = args.camera
    if args.api_key:
        config['YOUTUBE_API_KEY'] = args.api_key
    if args.detector_backend:
        config['DETECTOR_BACKEND'] = args.detector_backend
    
    print("=" * 70)
    print("Demo Webcam + Detección de ánimo - Mood Music")
    print("=" * 70)
    
    pipeline = build_pipeline(config)
    pipeline.load_models()
    
    try:
        snapshot = pipeline.turn_on_camera()
        if not snapshot['camera_ready']:
            logger.error(snapshot['error']['message'])
            print("\nSoluciones posibles:")
            print("  1. Verifica que la webcam esté conectada")
            print("  2. Asegúrate de que ninguna otra aplicación esté usando la cámara")
            print("  3. Verifica los permisos de acceso a la cámara")
            return 1
        
        props = pipeline.camera.get_properties()
        logger.info(f"Cámara: {props.get('width')}x{props.get('height')} @ {props.get('fps')} FPS")
        
        while True:
            command = input("\nEnter para detectar, 'q' para salir: ").strip().lower()
            if command == 'q':
                break
            print_snapshot(pipeline.detect_mood())
    
    except (KeyboardInterrupt, EOFError):
        print("\n\nInterrumpido por el usuario")
    
    finally:
        pipeline.stop()
    
    return 0


if __name__ == "__main__":
    sys.exit(main())
