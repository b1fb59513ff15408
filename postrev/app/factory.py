# postrev/app/factory.py

"""
Builds the revision pipeline components from `settings`, or from an explicit
`Settings` instance when one is passed (the CLI passes its own copy).
Each call returns fresh instances; nothing is cached at module level.
"""

import logging
from typing import Optional

from postrev.core.services.dedup import DuplicateDetector
from postrev.core.services.revisions import RevisionService
from postrev.core.services.similarity import get_scorer
from postrev.infrastructure.persistence.memory import InMemoryDocumentStore
from postrev.infrastructure.persistence.sqlalchemy.base import make_session_factory
from postrev.infrastructure.persistence.sqlalchemy.sql_ import SqlDocumentStorage
from postrev.infrastructure.retrieval.sparse_bm25 import SparseBM25Candidates
from postrev.settings import Settings, settings

logger = logging.getLogger(__name__)


def get_document_store(config: Optional[Settings] = None):
    cfg = config or settings
    if cfg.store_backend == "memory":
        logger.info("Using InMemoryDocumentStore")
        return InMemoryDocumentStore()
    elif cfg.store_backend == "sql":
        logger.info(f"Using SqlDocumentStorage ({cfg.sqlite_url})")
        return SqlDocumentStorage(make_session_factory(cfg.sqlite_url))
    else:
        raise ValueError(f"Unsupported store_backend: {cfg.store_backend}")


def get_detector(config: Optional[Settings] = None):
    cfg = config or settings
    scorer = get_scorer(cfg.similarity_metric)

    if cfg.candidate_mode == "all":
        candidates = None
    elif cfg.candidate_mode == "bm25":
        candidates = SparseBM25Candidates
    else:
        raise ValueError(f"Unsupported candidate_mode: {cfg.candidate_mode}")

    logger.info(
        f"Using {type(scorer).__name__} (threshold={cfg.similarity_threshold}, "
        f"candidates={cfg.candidate_mode}, workers={cfg.max_workers})"
    )
    return DuplicateDetector(
        scorer,
        threshold=cfg.similarity_threshold,
        candidates=candidates,
        candidate_k=cfg.candidate_k,
        max_workers=cfg.max_workers,
    )


def get_revision_service(config: Optional[Settings] = None) -> RevisionService:
    cfg = config or settings
    return RevisionService(
        store=get_document_store(cfg),
        detector=get_detector(cfg),
        metric=cfg.similarity_metric,
        encoding=cfg.encoding,
    )
