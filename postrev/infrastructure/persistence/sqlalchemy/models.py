# postrev/infrastructure/persistence/sqlalchemy/models.py

from sqlalchemy import Column, DateTime, Integer, String, Text, func
from sqlalchemy.types import JSON

from postrev.infrastructure.persistence.sqlalchemy.base import Base


# ------------------------------------------------------------------ #
# Append-only revision log: one row per ingested document
# ------------------------------------------------------------------ #
class DocumentRevision(Base):
    __tablename__ = "document_revisions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    slug = Column(String(255), nullable=False, index=True)
    path = Column(Text, nullable=True)
    raw_text = Column(Text, nullable=False)
    front_matter = Column(JSON, nullable=False, default=dict)
    body = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
