# postrev/models.py
from typing import Dict, List, Optional, Union

from pydantic import BaseModel, Field


class FileStatusModel(BaseModel):
    path: str
    status: str = Field(..., pattern="^(ok|malformed|io_error)$")
    slug: Optional[str] = None
    error: Optional[str] = None
    warnings: List[str] = []


class PairScore(BaseModel):
    """Similarity of a superseded revision against the canonical one."""

    path: Optional[str]
    slug: str
    score: float = Field(..., ge=0.0, le=1.0)


class ClassReport(BaseModel):
    canonical_slug: str
    canonical_path: Optional[str] = None
    superseded_paths: List[Optional[str]] = []
    slugs: List[str] = Field(..., description="Distinct slugs in the class")
    front_matter: Dict[str, Union[str, List[str]]] = {}
    scores: List[PairScore] = []
    diffs: Dict[str, str] = Field(
        default_factory=dict,
        description="Unified diff superseded -> canonical, keyed by superseded path",
    )


class ReportModel(BaseModel):
    threshold: float
    metric: str
    documents: int
    classes: List[ClassReport]
    files: List[FileStatusModel]
