from __future__ import annotations

from typing import Protocol, Sequence, runtime_checkable

from postrev.core.domain.entities import Collection, Document


# -------- Ports --------
@runtime_checkable
class DocumentRepoPort(Protocol):
    def add(
        self,
        slug: str,
        raw_text: str,
        front_matter: dict,
        body: str,
        path: str | None = None,
    ) -> Document: ...
    def get_collection(self, slug: str) -> Collection: ...
    def slugs(self) -> Sequence[str]: ...
    def get_all_documents(self) -> Sequence[Document]: ...


@runtime_checkable
class SimilarityPort(Protocol):
    def score(
        self, a: Document, b: Document, score_cutoff: float | None = None
    ) -> float: ...


@runtime_checkable
class CandidatePort(Protocol):
    def candidates(self, doc_index: int, k: int) -> Sequence[int]: ...
