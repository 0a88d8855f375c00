"""
API Blueprints for the reference blog backend.

Provides:
- users_bp: provisioning, user purge, login
- blogs_bp: blog CRUD and likes
- testing_bp: one-call fixture reset for test runners
"""
from .blogs import blogs_bp
from .testing import testing_bp
from .users import users_bp

__all__ = ['blogs_bp', 'testing_bp', 'users_bp']
