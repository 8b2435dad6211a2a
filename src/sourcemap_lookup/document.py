"""Structural parsing and validation of a Source Map v3 document.

Turns raw bytes into RawSection/RawMap values. A flat document becomes
a single implicit section at offset (0, 0), so downstream code only ever
handles the indexed shape.

Format (subset consumed here)::

    { version: int, file?: str, sourceRoot?: str,
      sources: [str], names: [str|number], mappings: str,
      sections?: [ { offset: {line, column}, map: <flat document> } ] }
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import orjson

from sourcemap_lookup.errors import MalformedDocument, UnsupportedVersion
from sourcemap_lookup.types import Name, NumericName, Offset, TextName

log = logging.getLogger(__name__)

SUPPORTED_VERSION = 3


@dataclass(frozen=True, slots=True)
class RawMap:
    """Field-checked but not yet decoded map.

    ``mappings`` is still the encoded stream; it is handed to the
    decoder exactly once and not kept on the built SubMap.
    """

    version: int
    file: str
    source_root: str
    sources: tuple[str, ...]
    names: tuple[Name, ...]
    mappings: str


@dataclass(frozen=True, slots=True)
class RawSection:
    offset: Offset
    map: RawMap


@dataclass(frozen=True, slots=True)
class RawDocument:
    """Top-level file name plus sections in ascending document order."""

    file: str
    sections: tuple[RawSection, ...]
    indexed: bool


def check_version(version: int) -> None:
    """Accept version 3 or unset (0); anything else is unsupported."""
    if version == SUPPORTED_VERSION or version == 0:
        return
    raise UnsupportedVersion(version)


# ---------------------------------------------------------------------------
# Field accessors
# ---------------------------------------------------------------------------

def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _get_int(obj: dict[str, Any], key: str, where: str) -> int:
    value = obj.get(key)
    if value is None:
        return 0
    if not _is_int(value):
        raise MalformedDocument(
            f"{where}.{key} must be an integer, got {type(value).__name__}"
        )
    return value


def _get_str(obj: dict[str, Any], key: str, where: str) -> str:
    value = obj.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise MalformedDocument(
            f"{where}.{key} must be a string, got {type(value).__name__}"
        )
    return value


def _get_list(obj: dict[str, Any], key: str, where: str) -> list[Any]:
    value = obj.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise MalformedDocument(
            f"{where}.{key} must be a list, got {type(value).__name__}"
        )
    return value


def _parse_sources(items: list[Any], where: str) -> tuple[str, ...]:
    sources: list[str] = []
    for i, item in enumerate(items):
        if item is None:
            # Producers emit null for sources they could not name.
            sources.append("")
        elif isinstance(item, str):
            sources.append(item)
        else:
            raise MalformedDocument(
                f"{where}.sources[{i}] must be a string, got {type(item).__name__}"
            )
    return tuple(sources)


def _parse_names(items: list[Any], where: str) -> tuple[Name, ...]:
    names: list[Name] = []
    for i, item in enumerate(items):
        if isinstance(item, str):
            names.append(TextName(item))
        elif isinstance(item, (int, float)) and not isinstance(item, bool):
            names.append(NumericName(item))
        else:
            raise MalformedDocument(
                f"{where}.names[{i}] must be a string or number, "
                f"got {type(item).__name__}"
            )
    return tuple(names)


def _parse_map(obj: dict[str, Any], where: str) -> RawMap:
    raw = RawMap(
        version=_get_int(obj, "version", where),
        file=_get_str(obj, "file", where),
        source_root=_get_str(obj, "sourceRoot", where),
        sources=_parse_sources(_get_list(obj, "sources", where), where),
        names=_parse_names(_get_list(obj, "names", where), where),
        mappings=_get_str(obj, "mappings", where),
    )
    check_version(raw.version)
    return raw


def _parse_offset(obj: Any, where: str) -> Offset:
    if not isinstance(obj, dict):
        raise MalformedDocument(f"{where}.offset must be an object")
    line = obj.get("line")
    column = obj.get("column")
    if not _is_int(line) or not _is_int(column):
        raise MalformedDocument(f"{where}.offset.line/column must be integers")
    if line < 0 or column < 0:
        raise MalformedDocument(
            f"{where}.offset must be non-negative, got ({line}, {column})"
        )
    return Offset(line, column)


def _parse_section(obj: Any, index: int) -> RawSection:
    where = f"sections[{index}]"
    if not isinstance(obj, dict):
        raise MalformedDocument(f"{where} must be an object")
    offset = _parse_offset(obj.get("offset"), where)
    nested = obj.get("map")
    if nested is None:
        if "url" in obj:
            raise MalformedDocument(
                f"{where}: sections referencing a url are not supported"
            )
        raise MalformedDocument(f"{where}.map is required")
    if not isinstance(nested, dict):
        raise MalformedDocument(f"{where}.map must be an object")
    if "sections" in nested:
        raise MalformedDocument(f"{where}.map must not contain sections")
    return RawSection(offset=offset, map=_parse_map(nested, f"{where}.map"))


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def load_document(data: bytes | bytearray | memoryview | str) -> RawDocument:
    """Parse raw document bytes into a RawDocument.

    Raises:
        MalformedDocument: invalid JSON or a field of the wrong shape.
        UnsupportedVersion: top-level or section version is not 3/unset.
    """
    try:
        obj = orjson.loads(data)
    except orjson.JSONDecodeError as exc:
        raise MalformedDocument(f"sourcemap: invalid JSON: {exc}") from exc
    if not isinstance(obj, dict):
        raise MalformedDocument("sourcemap: document must be a JSON object")

    check_version(_get_int(obj, "version", "document"))
    file = _get_str(obj, "file", "document")
    section_items = _get_list(obj, "sections", "document")

    if not section_items:
        flat = _parse_map(obj, "document")
        log.debug("flat source map: %d sources", len(flat.sources))
        return RawDocument(
            file=file,
            sections=(RawSection(offset=Offset(0, 0), map=flat),),
            indexed=False,
        )

    sections = tuple(_parse_section(s, i) for i, s in enumerate(section_items))
    log.debug("indexed source map: %d sections", len(sections))
    return RawDocument(file=file, sections=sections, indexed=True)
