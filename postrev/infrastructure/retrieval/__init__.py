"""
File: postrev/infrastructure/retrieval/__init__.py
Path: postrev/infrastructure/retrieval/__init__.py
Candidate retrieval for near-duplicate detection.
"""

from .sparse_bm25 import SparseBM25Candidates

__all__ = ["SparseBM25Candidates"]
