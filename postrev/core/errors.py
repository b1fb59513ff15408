"""
File: postrev/core/errors.py
Domain exceptions and warnings.
"""


class PostrevError(Exception):
    """Base class for every error raised by postrev."""


class MalformedFrontMatterError(PostrevError, ValueError):
    def __init__(self, message: str, path: str | None = None):
        self.path = path
        super().__init__(f"{path}: {message}" if path else message)


class EmptyBodyWarning(UserWarning):
    """Document has front matter but no body text. Non-fatal."""
