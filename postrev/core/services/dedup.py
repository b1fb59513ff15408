"""Duplicate / near-duplicate detection.

Documents are partitioned into equivalence classes (revisions of the same
logical article):

1. documents sharing a slug are always merged;
2. documents with different slugs are merged when their body similarity
   reaches ``threshold``.

All pairwise scores are collected first and merged afterwards with a
union-find, so the partition does not depend on the order in which scores
complete when ``max_workers > 1``.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from postrev.core.domain.entities import Document, EquivalenceClass
from postrev.core.ports import CandidatePort, SimilarityPort

__all__ = ["DuplicateDetector", "UnionFind"]

logger = logging.getLogger(__name__)

Pair = Tuple[int, int]
CandidateFactory = Callable[[Sequence[str]], CandidatePort]


class UnionFind:
    def __init__(self, size: int):
        self.parent = list(range(size))
        self.rank = [0] * size

    def find(self, x: int) -> int:
        root = x
        while self.parent[root] != root:
            root = self.parent[root]
        while self.parent[x] != root:
            self.parent[x], x = root, self.parent[x]
        return root

    def union(self, a: int, b: int) -> None:
        ra, rb = self.find(a), self.find(b)
        if ra == rb:
            return
        if self.rank[ra] < self.rank[rb]:
            ra, rb = rb, ra
        self.parent[rb] = ra
        if self.rank[ra] == self.rank[rb]:
            self.rank[ra] += 1


class DuplicateDetector:
    """Groups documents into equivalence classes.

    Parameters
    ----------
    scorer : SimilarityPort
        Body similarity in [0, 1].
    threshold : float, default 0.85
        Minimum score for two differently-slugged documents to be merged.
    candidates : callable, optional
        Factory building a ``CandidatePort`` from the list of bodies. When
        omitted every cross-slug pair is scored.
    candidate_k : int, default 10
        Candidates requested per document when ``candidates`` is set.
    max_workers : int, default 1
        Threads used to score pairs; 1 scores inline.
    """

    def __init__(
        self,
        scorer: SimilarityPort,
        threshold: float = 0.85,
        candidates: Optional[CandidateFactory] = None,
        candidate_k: int = 10,
        max_workers: int = 1,
    ):
        if not 0.0 <= threshold <= 1.0:
            raise ValueError("Parameter 'threshold' must be in [0, 1].")
        if max_workers < 1:
            raise ValueError("Parameter 'max_workers' must be >= 1.")
        self.scorer = scorer
        self.threshold = threshold
        self.candidates = candidates
        self.candidate_k = candidate_k
        self.max_workers = max_workers

    def candidate_pairs(self, documents: Sequence[Document]) -> List[Pair]:
        n = len(documents)
        if self.candidates is None:
            return [
                (i, j)
                for i in range(n)
                for j in range(i + 1, n)
                if documents[i].slug != documents[j].slug
            ]

        index = self.candidates([d.body for d in documents])
        pairs = set()
        for i in range(n):
            for j in index.candidates(i, self.candidate_k):
                if documents[i].slug != documents[j].slug:
                    pairs.add((min(i, j), max(i, j)))
        return sorted(pairs)

    def score_pairs(self, documents: Sequence[Document]) -> Dict[Pair, float]:
        pairs = self.candidate_pairs(documents)

        def _score(pair: Pair) -> float:
            i, j = pair
            return self.scorer.score(
                documents[i], documents[j], score_cutoff=self.threshold
            )

        if self.max_workers > 1 and len(pairs) > 1:
            with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
                scores = list(pool.map(_score, pairs))
        else:
            scores = [_score(p) for p in pairs]

        logger.debug(f"Scored {len(pairs)} cross-slug pairs.")
        return dict(zip(pairs, scores))

    def partition(
        self, documents: Sequence[Document], scores: Dict[Pair, float]
    ) -> List[EquivalenceClass]:
        uf = UnionFind(len(documents))

        first_by_slug: Dict[str, int] = {}
        for idx, doc in enumerate(documents):
            first = first_by_slug.setdefault(doc.slug, idx)
            uf.union(first, idx)

        for (i, j), score in scores.items():
            if score >= self.threshold:
                logger.info(
                    f"Near-duplicate: '{documents[i].slug}' ~ '{documents[j].slug}' (score={score:.3f})"
                )
                uf.union(i, j)

        groups: Dict[int, List[Document]] = {}
        for idx, doc in enumerate(documents):
            groups.setdefault(uf.find(idx), []).append(doc)

        classes = [
            tuple(sorted(members, key=lambda d: d.seq)) for members in groups.values()
        ]
        classes.sort(key=lambda c: c[0].seq)
        return classes

    def detect(self, documents: Sequence[Document]) -> List[EquivalenceClass]:
        documents = list(documents)
        if not documents:
            return []
        return self.partition(documents, self.score_pairs(documents))
