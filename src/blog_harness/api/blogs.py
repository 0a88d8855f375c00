"""
Blog endpoints.

- GET    /api/blogs             → 200 [blog, ...] in insertion order
- DELETE /api/blogs             purge all blogs → 204
- POST   /api/blogs             (bearer) {title, author, url} → 201 blog | 401
- GET    /api/blogs/<id>        → 200 blog | 404
- POST   /api/blogs/<id>/like   → 200 {id, likes} | 404 (no auth required)
- DELETE /api/blogs/<id>        (bearer) → 204 | 403 | 404
"""
import logging

from flask import Blueprint, jsonify

from ..errors import ValidationError
from .common import current_session, get_lifecycle, get_store, json_body

logger = logging.getLogger(__name__)

blogs_bp = Blueprint('blogs', __name__, url_prefix='/api/blogs')


@blogs_bp.route('', methods=['GET'])
def list_blogs():
    return jsonify([blog.to_dict() for blog in get_lifecycle().list()])


@blogs_bp.route('', methods=['DELETE'])
def delete_blogs():
    deleted = get_store().purge_blogs()
    logger.info(f"Purged {deleted} blogs")
    return '', 204, {'X-Deleted-Count': str(deleted)}


@blogs_bp.route('', methods=['POST'])
def create_blog():
    data = json_body()
    title = data.get('title')
    author = data.get('author', '')
    url = data.get('url', '')
    if not all(isinstance(value, str) for value in (title, author, url)):
        raise ValidationError("title, author and url must be strings")

    blog = get_lifecycle().create(current_session(), title, author, url)
    return jsonify(blog.to_dict()), 201


@blogs_bp.route('/<int:blog_id>', methods=['GET'])
def get_blog(blog_id):
    return jsonify(get_lifecycle().get(blog_id).to_dict())


@blogs_bp.route('/<int:blog_id>/like', methods=['POST'])
def like_blog(blog_id):
    likes = get_lifecycle().like(blog_id)
    return jsonify({'id': blog_id, 'likes': likes})


@blogs_bp.route('/<int:blog_id>', methods=['DELETE'])
def delete_blog(blog_id):
    get_lifecycle().delete(current_session(), blog_id)
    return '', 204
