"""
Database initialization for the SQL backing store.

This module provides:
- Database URI resolution (argument > environment > .env.defaults > memory)
- Table creation for the User/Blog schema
- A bare Flask app for using the store outside the reference API
"""
import logging
import os
from typing import Optional

from flask import Flask

from .config_defaults import get_default
from .models import Blog, User, db

logger = logging.getLogger(__name__)

__all__ = ['Blog', 'User', 'db', 'get_db_uri', 'init_db', 'create_store_app']


def get_db_uri() -> str:
    """
    Get database URI.
    Priority: environment variable > .env/.env.defaults > in-memory SQLite
    """
    db_uri = os.environ.get('BLOG_HARNESS_DB_URI')
    if db_uri:
        logger.info(f"Using database URI from environment: {db_uri}")
        return db_uri

    db_uri = get_default('BLOG_HARNESS_DB_URI', 'sqlite:///:memory:')
    logger.info(f"Using default database URI: {db_uri}")
    return db_uri


def _engine_options(db_uri: str) -> dict:
    # SQLite gets its pool from Flask-SQLAlchemy's driver defaults
    if db_uri.startswith('sqlite'):
        return {}
    return {
        'pool_size': 10,
        'pool_recycle': 3600,
        'pool_pre_ping': True,
    }


def init_db(app: Flask, database_uri: Optional[str] = None) -> None:
    """
    Initialize database with Flask app.

    Creates all tables. No rows are seeded: provisioning is the fixture's job.
    """
    db_uri = database_uri or get_db_uri()
    app.config['SQLALCHEMY_DATABASE_URI'] = db_uri
    app.config['SQLALCHEMY_TRACK_MODIFICATIONS'] = False
    app.config['SQLALCHEMY_ENGINE_OPTIONS'] = _engine_options(db_uri)

    db.init_app(app)

    with app.app_context():
        db.create_all()
        logger.info("Database tables created/verified")


def create_store_app(database_uri: Optional[str] = None) -> Flask:
    """Create a minimal Flask app that only hosts the database binding."""
    app = Flask('blog_harness.store')
    init_db(app, database_uri)
    return app
