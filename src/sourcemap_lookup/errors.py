"""Construction-time error taxonomy.

Every failure raised while parsing a source map derives from
SourceMapError, so callers can catch one type. A lookup that finds no
correspondence is not an error: it returns a Lookup with found=False.

    SourceMapError : base (ValueError)
      MalformedDocument : JSON/structural violation
      UnsupportedVersion : version present and not 3
      MalformedMappings : bad VLQ/base64 content in "mappings"
      InvalidRoot : sourceRoot is not parseable as a URL
      InvalidOrigin : origin locator is not parseable as a URL
"""
from __future__ import annotations


class SourceMapError(ValueError):
    """Base class for all source map construction failures."""


class MalformedDocument(SourceMapError):
    """Raised when the document is not valid JSON or has the wrong shape."""


class UnsupportedVersion(SourceMapError):
    """Raised when a map declares a version other than 3."""

    def __init__(self, got: int) -> None:
        super().__init__(
            f"sourcemap: got version={got}, but only 3rd version is supported"
        )
        self.got = got


class MalformedMappings(SourceMapError):
    """Raised when the mappings stream cannot be decoded.

    ``offset`` is the character index in the mappings string where
    decoding stopped.
    """

    def __init__(self, message: str, offset: int) -> None:
        super().__init__(f"sourcemap: {message} at mappings offset {offset}")
        self.offset = offset


class InvalidRoot(SourceMapError):
    """Raised when sourceRoot cannot be parsed as a URL."""

    def __init__(self, root: str, reason: str) -> None:
        super().__init__(f"sourcemap: invalid sourceRoot {root!r}: {reason}")
        self.root = root


class InvalidOrigin(SourceMapError):
    """Raised when the origin locator cannot be parsed as a URL."""

    def __init__(self, origin: str, reason: str) -> None:
        super().__init__(f"sourcemap: invalid origin {origin!r}: {reason}")
        self.origin = origin
