"""Core value types shared by the decoder, index and composer.

All dataclasses are frozen with slots=True: a parsed map is read-only
and can be queried from any number of threads without locking.

Type hierarchy:
  Offset : section start in the generated artifact (0-based)
  MappingRecord : one decoded generated -> original correspondence
  TextName / NumericName : the two shapes a "names" entry can take
  Lookup : five-field query result
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import NamedTuple


# ---------------------------------------------------------------------------
# Offset : section origin
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Offset:
    """Generated line/column at which a section's coordinate space begins."""

    line: int
    column: int

    def __post_init__(self) -> None:
        if self.line < 0 or self.column < 0:
            raise ValueError(
                f"Offset must be non-negative, got ({self.line}, {self.column})"
            )


# ---------------------------------------------------------------------------
# MappingRecord : decoded correspondence
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class MappingRecord:
    """One generated position and, optionally, the original it came from.

    Generated and source lines are 1-based; columns are 0-based.
    source_index/name_index are None when the entry did not carry them.
    """

    gen_line: int
    gen_column: int
    source_index: int | None = None
    source_line: int = 0      # meaningful only when source_index is set
    source_column: int = 0
    name_index: int | None = None

    def __post_init__(self) -> None:
        if self.gen_line < 1:
            raise ValueError(f"gen_line must be >= 1, got {self.gen_line}")
        if self.gen_column < 0:
            raise ValueError(f"gen_column must be >= 0, got {self.gen_column}")

    @property
    def position(self) -> tuple[int, int]:
        return (self.gen_line, self.gen_column)


# ---------------------------------------------------------------------------
# Names : tagged string-or-number union
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class TextName:
    """A names entry given as a JSON string."""

    value: str

    def render(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class NumericName:
    """A names entry given as a bare JSON number.

    Some minifiers emit e.g. ``42`` instead of ``"42"``; render() gives
    back the shortest decimal text, never exponent notation or ``.0``.
    Integers go through a double first, so ones past 2**53 render the way
    a float64 decoder sees them (``12345678901234567890`` gives
    ``"12345678901234567000"``).
    """

    value: int | float

    def render(self) -> str:
        # repr() of the float is the shortest round-tripping form; Decimal
        # drops the exponent and normalize() drops trailing zeros.
        return format(Decimal(repr(float(self.value))).normalize(), "f")


type Name = TextName | NumericName


# ---------------------------------------------------------------------------
# Lookup : query result
# ---------------------------------------------------------------------------

class Lookup(NamedTuple):
    """Result of a position query.

    Unpacks as ``source, name, line, column, found``. When found is False
    the other fields are empty/zero and carry no meaning.
    """

    source: str
    name: str
    line: int
    column: int
    found: bool


NOT_FOUND = Lookup("", "", 0, 0, False)
