# postrev/infrastructure/persistence/sqlalchemy/crud.py
from sqlalchemy import func
from sqlalchemy.orm import Session

from postrev.infrastructure.persistence.sqlalchemy.models import DocumentRevision


# ------------------ Revisions ------------------ #
def add_revision(
    db: Session,
    slug: str,
    raw_text: str,
    front_matter: dict,
    body: str,
    path: str | None = None,
) -> DocumentRevision:
    row = DocumentRevision(
        slug=slug,
        raw_text=raw_text,
        front_matter=front_matter,
        body=body,
        path=path,
    )
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


def get_revisions_by_slug(db: Session, slug: str) -> list[DocumentRevision]:
    return (
        db.query(DocumentRevision)
        .filter(DocumentRevision.slug == slug)
        .order_by(DocumentRevision.id)
        .all()
    )


def get_all_revisions(db: Session) -> list[DocumentRevision]:
    return db.query(DocumentRevision).order_by(DocumentRevision.id).all()


def get_slugs(db: Session) -> list[str]:
    # first-seen order
    first_id = func.min(DocumentRevision.id)
    rows = (
        db.query(DocumentRevision.slug, first_id)
        .group_by(DocumentRevision.slug)
        .order_by(first_id)
        .all()
    )
    return [slug for slug, _ in rows]
