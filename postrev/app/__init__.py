"""
File: postrev/app/__init__.py
Path: postrev/app/__init__.py
Component wiring driven by settings.
"""

from .factory import get_detector, get_document_store, get_revision_service

__all__ = ["get_detector", "get_document_store", "get_revision_service"]
