"""
Flask Application Factory for the reference blog API.

The reference API serves the blog contract over HTTP so the harness (and
its HTTP store) has a conformant collaborator to run against:
- SQL backing store (Flask-SQLAlchemy)
- Bearer tokens for authenticated calls
- Contract errors rendered as JSON with their status codes
"""
import argparse
import logging
import os
from typing import Optional

from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException
from werkzeug.middleware.proxy_fix import ProxyFix

from .api import blogs_bp, testing_bp, users_bp
from .api.common import STORE_EXTENSION, TOKENS_EXTENSION, TokenRegistry
from .config import HarnessSettings
from .database import init_db
from .errors import HarnessError
from .logging_setup import configure_logging
from .stores.sql import SQLAlchemyBlogStore

logger = logging.getLogger(__name__)


def create_app(database_uri: Optional[str] = None) -> Flask:
    """
    Create and configure the Flask application.

    Args:
        database_uri: SQLAlchemy URI (None → BLOG_HARNESS_DB_URI / default)

    Returns:
        Configured Flask application instance
    """
    app = Flask(__name__)

    # Trust proxy headers (for reverse proxy deployments)
    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1)

    app.config['MAX_CONTENT_LENGTH'] = int(os.environ.get('MAX_CONTENT_LENGTH', 1024 * 1024))

    # =========================================================================
    # Database / store
    # =========================================================================

    init_db(app, database_uri)
    app.extensions[STORE_EXTENSION] = SQLAlchemyBlogStore(app)
    app.extensions[TOKENS_EXTENSION] = TokenRegistry()

    # =========================================================================
    # Register Blueprints
    # =========================================================================

    app.register_blueprint(users_bp)
    app.register_blueprint(blogs_bp)
    app.register_blueprint(testing_bp)

    # =========================================================================
    # Error Handlers
    # =========================================================================

    @app.errorhandler(HarnessError)
    def contract_error(e):
        if e.expected:
            logger.info(f"{e.code}: {e.message}")
        else:
            logger.warning(f"{e.code}: {e.message}")
        return jsonify(e.to_dict()), e.status_code

    @app.errorhandler(404)
    def not_found(e):
        return jsonify({'error': 'not_found', 'message': 'Endpoint not found'}), 404

    @app.errorhandler(500)
    def internal_error(e):
        logger.exception("Internal server error")
        return jsonify({'error': 'internal', 'message': 'Internal server error'}), 500

    @app.errorhandler(HTTPException)
    def http_error(e):
        return jsonify({'error': e.name.lower().replace(' ', '_'), 'message': e.description}), e.code

    # =========================================================================
    # Health Check
    # =========================================================================

    @app.route('/health')
    def health():
        """Health check endpoint."""
        return jsonify({'status': 'ok'})

    logger.info("Flask application created successfully")

    return app


def main(argv=None):
    """Run the reference API (development server)."""
    settings = HarnessSettings.from_env()

    parser = argparse.ArgumentParser(description="Reference blog API for the contract harness")
    parser.add_argument('--host', default=os.environ.get('BLOG_API_HOST', '127.0.0.1'))
    parser.add_argument('--port', type=int, default=int(os.environ.get('BLOG_API_PORT', '3003')))
    parser.add_argument('--db', default=settings.database_uri,
                        help="SQLAlchemy database URI (default: %(default)s)")
    args = parser.parse_args(argv)

    configure_logging(settings.log_level, settings.log_file)
    app = create_app(args.db)
    logger.info(f"Serving reference blog API on http://{args.host}:{args.port}")
    app.run(host=args.host, port=args.port, threaded=True)


if __name__ == '__main__':
    main()
