"""
Utils: light text helpers shared by the scorers and the candidate index.
"""

import re
from typing import List

__all__ = ["preprocess_text", "tokenize", "slugify", "slug_from_path"]

_HTML_TAG_RE = re.compile(r"<[^>]+>")
_TOKEN_RE = re.compile(r"\w+")
_DATE_PREFIX_RE = re.compile(r"^\d{4}-\d{2}-\d{2}-")


def preprocess_text(text: str) -> str:
    """
    Normalize text:
    1. lowercase
    2. collapse whitespaces
    3. drop html tags
    """
    text = text.lower().strip()
    text = re.sub(r"\s+", " ", text)
    text = _HTML_TAG_RE.sub("", text)
    return text


def tokenize(text: str) -> List[str]:
    return _TOKEN_RE.findall(preprocess_text(text))


def slugify(title: str) -> str:
    s = title.lower()
    s = re.sub(r"[^a-z0-9\s-]", "", s)
    s = re.sub(r"[\s-]+", "-", s).strip("-")
    return s[:80]


def slug_from_path(path: str) -> str:
    """`_posts/2019-03-04-apache-spark-serialize.md` -> `apache-spark-serialize`."""
    name = re.split(r"[\\/]", path)[-1]
    stem = name.rsplit(".", 1)[0] if "." in name else name
    return slugify(_DATE_PREFIX_RE.sub("", stem))
