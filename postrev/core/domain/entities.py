from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional, Tuple, Union

from postrev.utils import tokenize

FrontMatterValue = Union[str, Tuple[str, ...]]
FrontMatter = Mapping[str, FrontMatterValue]


def freeze_front_matter(data: Mapping[str, object]) -> FrontMatter:
    """Read-only copy of a parsed front-matter mapping (lists become tuples)."""
    frozen = {
        k: tuple(v) if isinstance(v, (list, tuple)) else v for k, v in data.items()
    }
    return MappingProxyType(frozen)


@dataclass(frozen=True)
class Document:
    slug: str
    raw_text: str
    front_matter: FrontMatter
    body: str
    path: Optional[str] = None
    seq: int = 0

    def __post_init__(self):
        if not isinstance(self.front_matter, MappingProxyType):
            object.__setattr__(
                self, "front_matter", freeze_front_matter(self.front_matter)
            )

    @property
    def is_empty(self) -> bool:
        # no tokens once markup and whitespace are stripped
        return not tokenize(self.body)

    @property
    def title(self) -> Optional[str]:
        value = self.front_matter.get("title")
        return value if isinstance(value, str) else None


@dataclass(frozen=True)
class Collection:
    """Successive edits of one slug, earliest first."""

    documents: Tuple[Document, ...]

    def __post_init__(self):
        if not self.documents:
            raise ValueError("Collection must contain at least one document.")
        slugs = {d.slug for d in self.documents}
        if len(slugs) != 1:
            raise ValueError(f"Collection mixes slugs: {sorted(slugs)}")

    @property
    def slug(self) -> str:
        return self.documents[0].slug

    @property
    def latest(self) -> Document:
        return self.documents[-1]

    def append(self, document: Document) -> "Collection":
        return Collection(self.documents + (document,))

    def __len__(self) -> int:
        return len(self.documents)

    def __iter__(self):
        return iter(self.documents)


EquivalenceClass = Tuple[Document, ...]


@dataclass(frozen=True)
class Resolution:
    canonical: Document
    superseded: Tuple[Document, ...]


@dataclass
class FileStatus:
    path: str
    status: str  # ok | malformed | io_error
    slug: Optional[str] = None
    error: Optional[str] = None
    warnings: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.status == "ok"
