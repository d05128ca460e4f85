"""Provides routes for the post-login hooks."""

from http import HTTPStatus

from flask import Blueprint, jsonify, request, current_app
from werkzeug.exceptions import BadRequest

from ..authorization import scoped
from ..controllers import post_login
from ..services import onfido

blueprint = Blueprint('hooks', __name__, url_prefix='/actions')


def _payload() -> dict:
    payload = request.get_json(force=True, silent=True)    # Ignore Content-Type header.
    if payload is None:
        raise BadRequest('Request body must be a JSON login event')
    return payload


@blueprint.route('/status', methods=['GET'])
def ok() -> tuple:
    """Health check endpoint."""
    return jsonify({'status': 'ok',
                    'version': current_app.config.get('VERSION'),
                    'onfido': onfido.status()}), HTTPStatus.OK


@blueprint.route('/post-login', methods=['POST'])
@scoped('execute:post-login')
def execute() -> tuple:
    """Run the verification redirect hook for a login event."""
    data, status_code, headers = post_login.execute(_payload())
    return jsonify(data), status_code, headers


@blueprint.route('/post-login/continue', methods=['POST'])
@scoped('execute:post-login')
def resume() -> tuple:
    """Run the verification continuation hook for a returning user."""
    data, status_code, headers = post_login.resume(_payload())
    return jsonify(data), status_code, headers
