"""
File: postrev/infrastructure/persistence/sqlalchemy/__init__.py
Path: postrev/infrastructure/persistence/sqlalchemy/__init__.py
SQLAlchemy-backed append-only revision store.
"""

from .base import Base, make_engine, make_session_factory
from .models import DocumentRevision
from .sql_ import SqlDocumentStorage

__all__ = [
    "Base",
    "make_engine",
    "make_session_factory",
    "DocumentRevision",
    "SqlDocumentStorage",
]
