"""
User provisioning and login.

- POST   /api/users             {username, password} → 201 {username}
- DELETE /api/users             purge all users → 204
- GET    /api/users/<username>  → 200 {username} | 404
- POST   /api/login             {username, password} → 200 {token, username} | 401
- POST   /api/logout            revoke the bearer token → 204
"""
import logging

from flask import Blueprint, jsonify

from ..errors import InvalidCredentials, ValidationError
from ..records import UserCredentials
from ..session import SessionManager
from .common import bearer_token, get_store, get_tokens, json_body

logger = logging.getLogger(__name__)

users_bp = Blueprint('users', __name__, url_prefix='/api')


@users_bp.route('/users', methods=['POST'])
def create_user():
    data = json_body()
    username = data.get('username')
    password = data.get('password')
    if not isinstance(username, str) or not isinstance(password, str):
        raise ValidationError("username and password are required")

    user = get_store().add_user(UserCredentials(username=username, password=password))
    return jsonify({'username': user.username}), 201


@users_bp.route('/users', methods=['DELETE'])
def delete_users():
    """Purge every user. Blogs keep their creator reference; tokens are revoked."""
    deleted = get_store().purge_users()
    get_tokens().clear()
    logger.info(f"Purged {deleted} users")
    return '', 204, {'X-Deleted-Count': str(deleted)}


@users_bp.route('/users/<username>', methods=['GET'])
def get_user(username):
    user = get_store().get_user(username)
    if user is None:
        return jsonify({'error': 'not_found', 'message': f"User {username} not found"}), 404
    return jsonify({'username': user.username})


@users_bp.route('/login', methods=['POST'])
def login():
    data = json_body()
    username = data.get('username')
    password = data.get('password')
    if not isinstance(username, str) or not isinstance(password, str):
        raise InvalidCredentials()

    # Request-scoped session: each login starts anonymous
    sessions = SessionManager(get_store(), actor='api')
    session = sessions.login(username, password)
    token = get_tokens().issue(session.identity)
    return jsonify({'token': token, 'username': session.identity})


@users_bp.route('/logout', methods=['POST'])
def logout():
    """Revoke the presented token. Unknown or missing tokens are a no-op."""
    token = bearer_token()
    if token:
        get_tokens().revoke(token)
    return '', 204
