"""
Test-runner endpoints.

- POST /api/testing/reset   purge blogs + users in one call → 204
- POST /api/testing/prepare {username, password} → reset + provision → 201 {username}
"""
import logging

from flask import Blueprint, jsonify

from ..errors import ValidationError
from ..records import UserCredentials
from .common import get_fixture, get_tokens, json_body

logger = logging.getLogger(__name__)

testing_bp = Blueprint('testing', __name__, url_prefix='/api/testing')


@testing_bp.route('/reset', methods=['POST'])
def reset():
    get_fixture().reset_all()
    get_tokens().clear()
    return '', 204


@testing_bp.route('/prepare', methods=['POST'])
def prepare():
    data = json_body()
    username = data.get('username')
    password = data.get('password')
    if not isinstance(username, str) or not isinstance(password, str):
        raise ValidationError("username and password are required")

    get_tokens().clear()
    user = get_fixture().prepare(UserCredentials(username=username, password=password))
    return jsonify({'username': user.username}), 201
