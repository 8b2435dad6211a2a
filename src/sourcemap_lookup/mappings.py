"""Mapping stream decoder.

Converts the "mappings" string into an ordered tuple of MappingRecord.

Every field is a delta against the previous value of the same field:
the generated column resets to 0 on each new line (``;``), while source
index, source line, source column and name index carry over for the
whole stream. Generated and source lines start at 1, columns at 0.

Segment shapes:
    1 field : generated column only (no source)
    4 fields : + source index, source line, source column
    5 fields : + name index
"""
from __future__ import annotations

import logging
from operator import attrgetter

from sourcemap_lookup.errors import MalformedMappings
from sourcemap_lookup.types import MappingRecord
from sourcemap_lookup.vlq import decode_segment

log = logging.getLogger(__name__)

LINE_SEPARATOR = ";"
ENTRY_SEPARATOR = ","

_VALID_FIELD_COUNTS = frozenset({1, 4, 5})


def decode_mappings(
    mappings: str,
    *,
    source_count: int,
    name_count: int,
) -> tuple[MappingRecord, ...]:
    """Decode a mappings stream.

    Args:
        mappings: The encoded stream. Not retained.
        source_count: len(sources); source indexes must fall inside it.
        name_count: len(names); name indexes must fall inside it.

    Returns:
        Records sorted by (gen_line, gen_column). A stream whose columns
        go backwards within a line is re-sorted stably.

    Raises:
        MalformedMappings: bad characters, truncated values, a segment
            with 2, 3 or more than 5 fields, or an index/position that
            accumulates out of range.
    """
    records: list[MappingRecord] = []
    needs_sort = False

    source_index = 0
    source_line = 1
    source_column = 0
    name_index = 0

    pos = 0
    for gen_line, group in enumerate(mappings.split(LINE_SEPARATOR), start=1):
        gen_column = 0
        last_column = -1
        for segment in group.split(ENTRY_SEPARATOR):
            start = pos
            pos += len(segment) + 1
            if not segment:
                continue

            fields = decode_segment(segment, start)
            if len(fields) not in _VALID_FIELD_COUNTS:
                raise MalformedMappings(
                    f"invalid segment with {len(fields)} fields", start
                )

            gen_column += fields[0]
            if gen_column < 0:
                raise MalformedMappings(
                    f"negative generated column {gen_column}", start
                )
            if gen_column < last_column:
                needs_sort = True
            last_column = gen_column

            if len(fields) == 1:
                records.append(MappingRecord(gen_line, gen_column))
                continue

            source_index += fields[1]
            source_line += fields[2]
            source_column += fields[3]
            if not 0 <= source_index < source_count:
                raise MalformedMappings(
                    f"source index {source_index} out of range "
                    f"(sources has {source_count})",
                    start,
                )
            if source_line < 1 or source_column < 0:
                raise MalformedMappings(
                    f"invalid source position ({source_line}, {source_column})",
                    start,
                )

            record_name: int | None = None
            if len(fields) == 5:
                name_index += fields[4]
                if not 0 <= name_index < name_count:
                    raise MalformedMappings(
                        f"name index {name_index} out of range "
                        f"(names has {name_count})",
                        start,
                    )
                record_name = name_index

            records.append(
                MappingRecord(
                    gen_line,
                    gen_column,
                    source_index,
                    source_line,
                    source_column,
                    record_name,
                )
            )

    if needs_sort:
        log.debug("mappings out of order within a line; re-sorting %d records", len(records))
        records.sort(key=attrgetter("gen_line", "gen_column"))
    return tuple(records)
