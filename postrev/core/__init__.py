"""
File: postrev/core/__init__.py
Core module with the revision-store business logic.
"""

from .ports import CandidatePort, DocumentRepoPort, SimilarityPort
from .services.revisions import RevisionService

__all__ = ["CandidatePort", "DocumentRepoPort", "SimilarityPort", "RevisionService"]
