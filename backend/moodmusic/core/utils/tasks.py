"""
Ejecución de llamadas externas con límite de tiempo.

Las llamadas a modelos preentrenados y a la cámara pueden bloquearse
indefinidamente. Este módulo ejecuta cada llamada en su propio hilo daemon
y abandona el resultado cuando vence el plazo, de modo que una tarea
colgada nunca retrasa a las siguientes.
"""

import logging
import threading
from typing import Any, Callable, Optional

logger = logging.getLogger(__name__)


class TaskTimeoutError(TimeoutError):
    """Se lanza cuando una tarea no termina dentro de su plazo."""


def run_with_timeout(func: Callable[..., Any], *args, timeout: Optional[float] = None, **kwargs) -> Any:
    """
    Ejecuta ``func(*args, **kwargs)`` y espera como máximo ``timeout`` segundos.

    Las excepciones lanzadas por ``func`` se propagan tal cual. Si el plazo
    vence se lanza TaskTimeoutError; el hilo de trabajo no puede
    interrumpirse, por lo que sigue en segundo plano y su resultado
    simplemente se descarta.

    Args:
        func: Función a ejecutar
        timeout (float, optional): Plazo en segundos. None = sin límite

    Returns:
        Any: Valor devuelto por ``func``

    Raises:
        TaskTimeoutError: Si la tarea no termina a tiempo

    Example:
        >>> run_with_timeout(sum, [1, 2, 3], timeout=1.0)
        6
    """
    name = getattr(func, '__name__', repr(func))
    outcome = {}

    def target():
        try:
            outcome['result'] = func(*args, **kwargs)
        except BaseException as e:
            outcome['error'] = e

    worker = threading.Thread(target=target, name=f'moodmusic-task-{name}', daemon=True)
    worker.start()
    worker.join(timeout)

    if worker.is_alive():
        logger.warning(f"Tarea '{name}' abandonada tras {timeout}s")
        raise TaskTimeoutError(f"'{name}' no terminó en {timeout} segundos")

    if 'error' in outcome:
        raise outcome['error']
    return outcome.get('result')
