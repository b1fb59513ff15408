"""Report building: equivalence classes + resolutions -> ReportModel."""

from __future__ import annotations

import difflib
from typing import List, Sequence

from postrev.core.domain.entities import Document, EquivalenceClass, FileStatus
from postrev.core.ports import SimilarityPort
from postrev.core.services.resolver import resolve
from postrev.models import ClassReport, FileStatusModel, PairScore, ReportModel

__all__ = ["build_report", "class_report", "diff_revisions"]


def _label(doc: Document) -> str:
    return doc.path or f"{doc.slug}#{doc.seq}"


def diff_revisions(old: Document, new: Document) -> str:
    """Unified diff of two bodies (old -> new)."""
    return "".join(
        difflib.unified_diff(
            old.body.splitlines(keepends=True),
            new.body.splitlines(keepends=True),
            fromfile=_label(old),
            tofile=_label(new),
        )
    )


def class_report(
    members: EquivalenceClass, scorer: SimilarityPort, include_diffs: bool = False
) -> ClassReport:
    resolution = resolve(members)
    canonical = resolution.canonical
    slugs: List[str] = []
    for doc in members:
        if doc.slug not in slugs:
            slugs.append(doc.slug)

    report = ClassReport(
        canonical_slug=canonical.slug,
        canonical_path=canonical.path,
        superseded_paths=[d.path for d in resolution.superseded],
        slugs=slugs,
        front_matter={
            k: list(v) if isinstance(v, tuple) else v
            for k, v in canonical.front_matter.items()
        },
        scores=[
            PairScore(path=d.path, slug=d.slug, score=scorer.score(d, canonical))
            for d in resolution.superseded
        ],
    )
    if include_diffs:
        report.diffs = {
            _label(d): diff_revisions(d, canonical) for d in resolution.superseded
        }
    return report


def build_report(
    classes: Sequence[EquivalenceClass],
    statuses: Sequence[FileStatus],
    scorer: SimilarityPort,
    threshold: float,
    metric: str,
    include_diffs: bool = False,
) -> ReportModel:
    return ReportModel(
        threshold=threshold,
        metric=metric,
        documents=sum(len(c) for c in classes),
        classes=[class_report(c, scorer, include_diffs) for c in classes],
        files=[
            FileStatusModel(
                path=s.path,
                status=s.status,
                slug=s.slug,
                error=s.error,
                warnings=list(s.warnings),
            )
            for s in statuses
        ],
    )
