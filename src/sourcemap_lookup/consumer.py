"""Public query surface: parse() and Consumer.

A flat map is stored as one section at offset (0, 0), so both document
variants go through the same section scan. Sections are kept in
descending offset order and the first one whose offset applies wins.

Usage::

    consumer = parse("https://cdn.example.com/app.min.js.map", raw_bytes)
    source, name, line, column, found = consumer.source(1, 4021)
"""
from __future__ import annotations

import logging
from dataclasses import dataclass

from sourcemap_lookup.document import load_document
from sourcemap_lookup.position_index import SubMap, build_submap
from sourcemap_lookup.types import NOT_FOUND, Lookup, Offset

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Section:
    offset: Offset
    map: SubMap

    def applies_to(self, gen_line: int, gen_column: int) -> bool:
        """Whether a query position falls in this section's range.

        The offset line is 0-based while query lines are 1-based, so the
        section takes effect on the line after offset.line in query terms.
        """
        return self.offset.line < gen_line or (
            self.offset.line + 1 == gen_line and self.offset.column <= gen_column
        )


@dataclass(frozen=True, slots=True)
class Consumer:
    """Fully parsed, read-only source map.

    ``sections`` is in descending offset order. Safe to share across
    threads: nothing mutates after parse().
    """

    output_file: str
    sections: tuple[Section, ...]

    def file(self) -> str:
        """Name of the generated file this map describes ("" if unset)."""
        return self.output_file

    def source(self, gen_line: int, gen_column: int) -> Lookup:
        """Map a generated position (1-based line, 0-based column) back.

        Returns a Lookup; ``found`` is False when no section or record
        covers the position.
        """
        for section in self.sections:
            if section.applies_to(gen_line, gen_column):
                return section.map.lookup(
                    gen_line - section.offset.line,
                    gen_column - section.offset.column,
                )
        return NOT_FOUND


def parse(origin: str, data: bytes | bytearray | memoryview | str) -> Consumer:
    """Parse a source map document into a Consumer.

    Args:
        origin: Locator the document came from, used to resolve relative
            sources when the map has no sourceRoot. "" if unknown.
        data: Raw JSON document.

    Raises:
        SourceMapError: any construction failure (see errors module).
            No partially built Consumer is ever returned.
    """
    document = load_document(data)
    sections = [
        Section(offset=s.offset, map=build_submap(s.map, origin))
        for s in document.sections
    ]
    sections.reverse()
    log.debug(
        "parsed %s source map %r with %d section(s)",
        "indexed" if document.indexed else "flat",
        document.file,
        len(sections),
    )
    return Consumer(output_file=document.file, sections=tuple(sections))
