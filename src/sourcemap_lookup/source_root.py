"""Source root resolution: turning "sources" entries into absolute names.

Resolution base, decided once per map at parse time:

1. a non-empty sourceRoot that is an absolute URL;
2. else, when sourceRoot is empty, the directory of an absolute origin URL;
3. else no URL base; a relative sourceRoot is path-joined as a string.

Joins use POSIX path semantics with lexical cleaning (``.``/``..``
collapsed, duplicate slashes removed), the same on every platform.
"""
from __future__ import annotations

import logging
import posixpath
import re
from dataclasses import dataclass
from urllib.parse import SplitResult, quote, unquote, urlsplit, urlunsplit

from sourcemap_lookup.errors import InvalidOrigin, InvalidRoot

log = logging.getLogger(__name__)

_CONTROL_RE = re.compile(r"[\x00-\x1f\x7f]")
_BAD_ESCAPE_RE = re.compile(r"%(?![0-9A-Fa-f]{2})")

# Characters left unescaped in a URL path, besides letters, digits and "_.-~".
_PATH_SAFE = "/$&+,:;=@"


def _split_url(text: str) -> SplitResult:
    """Parse ``text`` as a URL, raising ValueError with a reason on failure."""
    if _CONTROL_RE.search(text):
        raise ValueError("invalid control character in URL")
    if text.startswith(":"):
        raise ValueError("missing protocol scheme")
    if _BAD_ESCAPE_RE.search(text):
        raise ValueError("invalid URL escape")
    parts = urlsplit(text)
    _ = parts.port  # raises ValueError on a non-numeric port
    return parts


def _try_split_url(text: str) -> SplitResult | None:
    try:
        return _split_url(text)
    except ValueError:
        return None


def _has_authority(text: str, parts: SplitResult) -> bool:
    """Whether ``text`` spells an authority (``scheme://...``), even an empty one."""
    return text[len(parts.scheme) + 1:].startswith("//")


def _unsplit(parts: SplitResult, authority: bool) -> str:
    """Serialise a URL, keeping an empty ``//`` authority for any scheme.

    urlunsplit only writes ``//`` for schemes it knows to use a netloc,
    which turns ``webpack:///src`` into ``webpack:/src``.
    """
    if not authority:
        return urlunsplit(parts)
    path = parts.path
    if path and not path.startswith("/"):
        path = "/" + path
    url = f"{parts.scheme}://{parts.netloc}{path}"
    if parts.query:
        url += "?" + parts.query
    if parts.fragment:
        url += "#" + parts.fragment
    return url


def clean_path(path: str) -> str:
    """Lexically clean a slash-separated path; "" cleans to "."."""
    if not path:
        return "."
    cleaned = posixpath.normpath(path)
    if cleaned.startswith("//"):
        cleaned = "/" + cleaned.lstrip("/")
    return cleaned


def join_path(*elems: str) -> str:
    """Join path elements, ignoring empty ones, and clean the result."""
    parts = [e for e in elems if e]
    if not parts:
        return ""
    return clean_path("/".join(parts))


@dataclass(frozen=True, slots=True)
class SourceRoot:
    """Per-map resolution base.

    ``raw`` is the sourceRoot string as written; ``base`` is the URL that
    relative source names are joined onto, or None. ``authority`` records
    whether the base was written with ``//`` so it survives re-serialising.
    """

    raw: str = ""
    base: SplitResult | None = None
    authority: bool = False

    def abs_source(self, name: str) -> str:
        """Resolve one "sources" entry against this root.

        With a URL base the joined path is percent-encoded (``my file.js``
        becomes ``my%20file.js``); plain path joins are left as written.
        """
        if name.startswith("/"):
            return name
        parts = _try_split_url(name)
        if parts is not None and parts.scheme:
            return name
        if self.base is not None:
            path = quote(join_path(unquote(self.base.path), name), safe=_PATH_SAFE)
            return _unsplit(self.base._replace(path=path), self.authority)
        if self.raw:
            return join_path(self.raw, name)
        return name


def resolve_source_root(source_root: str, origin: str) -> SourceRoot:
    """Compute the SourceRoot for one map.

    Args:
        source_root: The map's sourceRoot field ("" when absent).
        origin: Locator the document was obtained from ("" when unknown).

    Raises:
        InvalidRoot: sourceRoot is not parseable as a URL.
        InvalidOrigin: origin is consulted and not parseable as a URL.
    """
    if source_root:
        try:
            parts = _split_url(source_root)
        except ValueError as exc:
            raise InvalidRoot(source_root, str(exc)) from exc
        if parts.scheme:
            log.debug("source root base from sourceRoot: %s", source_root)
            return SourceRoot(
                raw=source_root,
                base=parts,
                authority=_has_authority(source_root, parts),
            )
        return SourceRoot(raw=source_root)

    if origin:
        try:
            parts = _split_url(origin)
        except ValueError as exc:
            raise InvalidOrigin(origin, str(exc)) from exc
        if parts.scheme:
            base = parts._replace(path=clean_path(posixpath.dirname(parts.path)))
            authority = _has_authority(origin, parts)
            log.debug("source root base from origin: %s", _unsplit(base, authority))
            return SourceRoot(base=base, authority=authority)

    return SourceRoot()
