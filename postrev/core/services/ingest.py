# postrev/core/services/ingest.py
from __future__ import annotations

import hashlib
import logging
import warnings
from pathlib import Path
from typing import Iterable, List, Optional, Union

from postrev.core.domain.entities import Document, FileStatus
from postrev.core.errors import EmptyBodyWarning, MalformedFrontMatterError
from postrev.core.ports import DocumentRepoPort
from postrev.core.services.front_matter import parse_front_matter
from postrev.utils import slug_from_path, slugify

logger = logging.getLogger(__name__)


class IngestService:
    """
    Ingestion of posts into the append-only store:
      1) read the file (line endings preserved)
      2) parse front matter
      3) derive the slug and append a new Document
    Failures are reported per file and never abort the batch.
    """

    def __init__(self, store: DocumentRepoPort, encoding: str = "utf-8"):
        self._store = store
        self._encoding = encoding

    @staticmethod
    def derive_slug(path: Optional[str], front_matter, raw_text: str) -> str:
        if path:
            slug = slug_from_path(path)
            if slug:
                return slug
        title = front_matter.get("title")
        if isinstance(title, str) and slugify(title):
            return slugify(title)
        digest = hashlib.sha1(raw_text.encode("utf-8")).hexdigest()[:12]
        return f"untitled-{digest}"

    def ingest_text(
        self, raw_text: str, path: Optional[str] = None, slug: Optional[str] = None
    ) -> Document:
        try:
            parsed = parse_front_matter(raw_text)
        except MalformedFrontMatterError as e:
            e.path = path
            raise
        slug = slug or self.derive_slug(path, parsed.front_matter, raw_text)
        return self._store.add(
            slug=slug,
            raw_text=raw_text,
            front_matter=parsed.front_matter,
            body=parsed.body,
            path=path,
        )

    def ingest_file(self, path: Path, display_path: Optional[str] = None) -> FileStatus:
        shown = display_path or str(path)
        try:
            with open(path, "r", encoding=self._encoding, newline="") as fh:
                raw_text = fh.read()
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Could not read {shown}: {e}")
            return FileStatus(path=shown, status="io_error", error=str(e))

        try:
            doc = self.ingest_text(raw_text, path=shown)
        except MalformedFrontMatterError as e:
            logger.warning(f"Skipping {shown}: {e}")
            return FileStatus(path=shown, status="malformed", error=str(e))

        status = FileStatus(path=shown, status="ok", slug=doc.slug)
        if doc.is_empty:
            msg = f"{EmptyBodyWarning.__name__}: {shown} has an empty body"
            logger.warning(msg)
            warnings.warn(msg, EmptyBodyWarning, stacklevel=2)
            status.warnings.append(msg)
        return status

    def ingest_paths(self, paths: Iterable[Union[str, Path]]) -> List[FileStatus]:
        return [self.ingest_file(Path(p)) for p in paths]

    def ingest_directory(
        self, root: Union[str, Path], pattern: str = "*.md"
    ) -> List[FileStatus]:
        root = Path(root)
        if not root.is_dir():
            raise FileNotFoundError(f"Posts directory not found: {root}")

        files = sorted(p for p in root.rglob(pattern) if p.is_file())
        logger.info(f"Found {len(files)} files matching '{pattern}' under {root}")
        statuses = [
            self.ingest_file(p, display_path=p.relative_to(root).as_posix())
            for p in files
        ]
        failed = sum(1 for s in statuses if not s.ok)
        logger.info(f"Ingested {len(statuses) - failed}/{len(statuses)} files.")
        return statuses
