"""
Blueprint de la página principal.

La página es una plantilla Jinja2 cuyos elementos se muestran según los
predicados de build_view_model(); los botones son formularios POST que
ejecutan la acción y vuelven a la página.
"""

from flask import Blueprint, redirect, render_template, url_for, current_app
from ..core.session.state import InvalidTransitionError
from ..core.session.view import build_view_model
from .mood import get_pipeline

view_bp = Blueprint('view', __name__)


@view_bp.route('/', methods=['GET'])
def index():
    view = build_view_model(get_pipeline().session.snapshot())
    return render_template('index.html', view=view)


@view_bp.route('/ui/camera', methods=['POST'])
def ui_turn_on_camera():
    get_pipeline().turn_on_camera()
    return redirect(url_for('view.index'))


@view_bp.route('/ui/detect', methods=['POST'])
def ui_detect_mood():
    try:
        get_pipeline().detect_mood()
    except InvalidTransitionError as e:
        current_app.logger.info(f"Detección ignorada: {e}")
    return redirect(url_for('view.index'))
