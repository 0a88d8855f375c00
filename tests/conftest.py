"""
Shared fixtures for the contract suite.

Every store fixture is a fresh in-memory database, so tests never see each
other's data and can run in parallel.
"""
import os
import sys

import httpx
import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))
os.environ.setdefault('BLOG_HARNESS_BCRYPT_ROUNDS', '4')

from blog_harness.app import create_app
from blog_harness.harness import BlogHarness
from blog_harness.records import UserCredentials
from blog_harness.stores.http import HttpBlogStore
from blog_harness.stores.sql import SQLAlchemyBlogStore

MEMORY_DB = 'sqlite:///:memory:'


@pytest.fixture
def alice():
    return UserCredentials(username='alice', password='pw1')


@pytest.fixture
def bob():
    return UserCredentials(username='bob', password='pw2')


@pytest.fixture
def store():
    """Isolated SQL store."""
    sql_store = SQLAlchemyBlogStore(database_uri=MEMORY_DB)
    yield sql_store
    sql_store.close()


@pytest.fixture
def api_app():
    """Reference API over its own in-memory database."""
    app = create_app(MEMORY_DB)
    app.config['TESTING'] = True
    return app


@pytest.fixture
def api_client(api_app):
    return api_app.test_client()


@pytest.fixture
def http_store(api_app):
    """HttpBlogStore wired to the reference API without a network."""
    client_store = HttpBlogStore(
        'http://testserver',
        transport=httpx.WSGITransport(app=api_app),
    )
    yield client_store
    client_store.close()


@pytest.fixture(params=['sql', 'http'])
def any_store(request):
    """Run the same contract test against both store implementations."""
    return request.getfixturevalue('store' if request.param == 'sql' else 'http_store')


@pytest.fixture
def harness(any_store, alice):
    """Alice's harness with the fixture already prepared (not logged in)."""
    h = BlogHarness(any_store, actor='alice', owns_store=False)
    h.prepare(alice)
    return h
