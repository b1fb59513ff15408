# postrev/infrastructure/persistence/sqlalchemy/sql_.py

from typing import Sequence

from sqlalchemy.orm import sessionmaker

from postrev.core.domain.entities import Collection
from postrev.core.domain.entities import Document as DomainDocument
from postrev.core.ports import DocumentRepoPort
from postrev.infrastructure.persistence.sqlalchemy.crud import (
    add_revision,
    get_all_revisions,
    get_revisions_by_slug,
    get_slugs,
)
from postrev.infrastructure.persistence.sqlalchemy.models import DocumentRevision


def _to_domain(row: DocumentRevision) -> DomainDocument:
    return DomainDocument(
        slug=row.slug,
        raw_text=row.raw_text,
        front_matter=row.front_matter or {},
        body=row.body,
        path=row.path,
        seq=row.id,
    )


def _jsonable(front_matter) -> dict:
    return {k: list(v) if isinstance(v, tuple) else v for k, v in front_matter.items()}


class SqlDocumentStorage(DocumentRepoPort):
    """Append-only revision store; row id is the ingestion sequence."""

    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory

    def add(self, slug, raw_text, front_matter, body, path=None) -> DomainDocument:
        session = self._session_factory()
        try:
            row = add_revision(
                session, slug, raw_text, _jsonable(front_matter), body, path=path
            )
            return _to_domain(row)
        finally:
            session.close()

    def get_collection(self, slug: str) -> Collection:
        session = self._session_factory()
        try:
            rows = get_revisions_by_slug(session, slug)
            if not rows:
                raise KeyError(f"No documents stored under slug '{slug}'")
            return Collection(tuple(_to_domain(r) for r in rows))
        finally:
            session.close()

    def slugs(self) -> Sequence[str]:
        session = self._session_factory()
        try:
            return get_slugs(session)
        finally:
            session.close()

    def get_all_documents(self) -> Sequence[DomainDocument]:
        session = self._session_factory()
        try:
            return [_to_domain(r) for r in get_all_revisions(session)]
        finally:
            session.close()
