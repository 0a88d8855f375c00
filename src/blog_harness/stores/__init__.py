"""
Backing stores for the blog contract.

Provides:
- BlogStore: abstract interface every store implements
- SQLAlchemyBlogStore: in-process store (Flask-SQLAlchemy)
- HttpBlogStore: client for a running blog API (httpx)
- create_store: pick one from a URL
"""
from typing import Optional

from .base import BlogStore
from .http import HttpBlogStore
from .sql import SQLAlchemyBlogStore


def create_store(url: Optional[str] = None, timeout: Optional[float] = None) -> BlogStore:
    """
    Create a store from a URL.

    http(s):// URLs get an HttpBlogStore; anything else is treated as a
    SQLAlchemy database URI (None → configured default).
    """
    if url and url.startswith(('http://', 'https://')):
        if timeout is None:
            return HttpBlogStore(url)
        return HttpBlogStore(url, timeout=timeout)
    return SQLAlchemyBlogStore(database_uri=url)


__all__ = ['BlogStore', 'HttpBlogStore', 'SQLAlchemyBlogStore', 'create_store']
