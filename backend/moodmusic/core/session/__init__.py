"""
Módulo de sesión: máquina de estados y predicados de la vista.
"""

from .state import MoodSession, SessionState, ErrorKind, InvalidTransitionError
from .view import build_view_model

__all__ = ['MoodSession', 'SessionState', 'ErrorKind', 'InvalidTransitionError', 'build_view_model']
