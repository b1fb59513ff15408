# postrev/infrastructure/persistence/memory.py
from __future__ import annotations

from typing import Dict, List, Sequence

from postrev.core.domain.entities import Collection, Document
from postrev.core.ports import DocumentRepoPort


class InMemoryDocumentStore(DocumentRepoPort):
    """Append-only store; `seq` is the position in ingestion order."""

    def __init__(self):
        self._documents: List[Document] = []
        self._collections: Dict[str, Collection] = {}

    def add(self, slug, raw_text, front_matter, body, path=None) -> Document:
        doc = Document(
            slug=slug,
            raw_text=raw_text,
            front_matter=front_matter,
            body=body,
            path=path,
            seq=len(self._documents),
        )
        self._documents.append(doc)
        existing = self._collections.get(slug)
        self._collections[slug] = (
            existing.append(doc) if existing else Collection((doc,))
        )
        return doc

    def get_collection(self, slug: str) -> Collection:
        try:
            return self._collections[slug]
        except KeyError:
            raise KeyError(f"No documents stored under slug '{slug}'") from None

    def slugs(self) -> Sequence[str]:
        return list(self._collections)

    def get_all_documents(self) -> Sequence[Document]:
        return list(self._documents)

    def __len__(self) -> int:
        return len(self._documents)
