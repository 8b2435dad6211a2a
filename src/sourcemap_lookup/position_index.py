"""Per-map position index and lookup.

A SubMap owns the decoded records of one (sub-)map together with the
source/name tables needed to render a result. Lookup is a binary search
over (gen_line, gen_column) keys with "nearest preceding" fallback.
"""
from __future__ import annotations

import logging
from bisect import bisect_left
from dataclasses import dataclass

from sourcemap_lookup.document import RawMap
from sourcemap_lookup.mappings import decode_mappings
from sourcemap_lookup.source_root import SourceRoot, resolve_source_root
from sourcemap_lookup.types import NOT_FOUND, Lookup, MappingRecord, Name

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SubMap:
    """One decoded map. Immutable once built.

    ``keys`` mirrors ``records`` as (gen_line, gen_column) tuples so the
    search can use bisect directly.
    """

    file: str
    sources: tuple[str, ...]
    names: tuple[Name, ...]
    source_root: SourceRoot
    records: tuple[MappingRecord, ...]
    keys: tuple[tuple[int, int], ...]

    def abs_source(self, name: str) -> str:
        return self.source_root.abs_source(name)

    def find(self, gen_line: int, gen_column: int) -> MappingRecord | None:
        """Return the record at, or nearest before, the query position.

        None when the query lies after the last record or before the first.
        """
        query = (gen_line, gen_column)
        i = bisect_left(self.keys, query)
        if i == len(self.keys):
            return None
        if self.keys[i] != query:
            # No exact match: the position belongs to the previous record.
            if i == 0:
                return None
            i -= 1
        return self.records[i]

    def lookup(self, gen_line: int, gen_column: int) -> Lookup:
        """Resolve a local generated position to its original location."""
        match = self.find(gen_line, gen_column)
        if match is None:
            return NOT_FOUND
        source = ""
        if match.source_index is not None:
            source = self.abs_source(self.sources[match.source_index])
        name = ""
        if match.name_index is not None:
            name = self.names[match.name_index].render()
        return Lookup(source, name, match.source_line, match.source_column, True)


def build_submap(raw: RawMap, origin: str) -> SubMap:
    """Resolve the root and decode the mappings of one RawMap.

    Raises:
        InvalidRoot / InvalidOrigin: from root resolution.
        MalformedMappings: from decoding.
    """
    source_root = resolve_source_root(raw.source_root, origin)
    records = decode_mappings(
        raw.mappings,
        source_count=len(raw.sources),
        name_count=len(raw.names),
    )
    log.debug("decoded %d mapping records for %r", len(records), raw.file)
    return SubMap(
        file=raw.file,
        sources=raw.sources,
        names=raw.names,
        source_root=source_root,
        records=records,
        keys=tuple(r.position for r in records),
    )
