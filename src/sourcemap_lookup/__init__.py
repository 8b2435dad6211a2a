"""Source Map v3 consumer: decode a map and look up original positions."""

from sourcemap_lookup.consumer import Consumer, Section, parse
from sourcemap_lookup.errors import (
    InvalidOrigin,
    InvalidRoot,
    MalformedDocument,
    MalformedMappings,
    SourceMapError,
    UnsupportedVersion,
)
from sourcemap_lookup.position_index import SubMap
from sourcemap_lookup.types import (
    Lookup,
    MappingRecord,
    NumericName,
    Offset,
    TextName,
)

__all__ = [
    "Consumer",
    "InvalidOrigin",
    "InvalidRoot",
    "Lookup",
    "MalformedDocument",
    "MalformedMappings",
    "MappingRecord",
    "NumericName",
    "Offset",
    "Section",
    "SourceMapError",
    "SubMap",
    "TextName",
    "UnsupportedVersion",
    "parse",
]
