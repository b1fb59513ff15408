# postrev/core/services/revisions.py
from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Union

from postrev.core.domain.entities import EquivalenceClass, Resolution
from postrev.core.ports import DocumentRepoPort
from postrev.core.services.dedup import DuplicateDetector
from postrev.core.services.ingest import IngestService
from postrev.core.services.report import build_report
from postrev.core.services.resolver import resolve
from postrev.models import ReportModel

logger = logging.getLogger(__name__)


class RevisionService:
    """Batch pipeline: ingest -> detect -> resolve -> report."""

    def __init__(
        self,
        store: DocumentRepoPort,
        detector: DuplicateDetector,
        metric: str = "edit",
        encoding: str = "utf-8",
    ):
        self.store = store
        self.detector = detector
        self.metric = metric
        self.ingest = IngestService(store, encoding=encoding)

    def classes(self) -> List[EquivalenceClass]:
        return self.detector.detect(self.store.get_all_documents())

    def resolutions(self) -> List[Resolution]:
        return [resolve(c) for c in self.classes()]

    def run(
        self, posts_dir: Union[str, Path], pattern: str = "*.md", include_diffs: bool = False
    ) -> ReportModel:
        statuses = self.ingest.ingest_directory(posts_dir, pattern)
        classes = self.classes()
        logger.info(
            f"{sum(len(c) for c in classes)} documents grouped into {len(classes)} equivalence classes."
        )
        return build_report(
            classes,
            statuses,
            scorer=self.detector.scorer,
            threshold=self.detector.threshold,
            metric=self.metric,
            include_diffs=include_diffs,
        )
