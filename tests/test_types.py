"""Tests for sourcemap_lookup.types module."""
import pytest

from sourcemap_lookup.types import (
    NOT_FOUND,
    Lookup,
    MappingRecord,
    NumericName,
    Offset,
    TextName,
)


class TestNames:
    def test_text_passthrough(self) -> None:
        assert TextName("render").render() == "render"

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (42, "42"),
            (42.0, "42"),
            (-3, "-3"),
            (0.5, "0.5"),
            (420.0, "420"),
            (1e21, "1000000000000000000000"),
            (1e-7, "0.0000001"),
            (0.1, "0.1"),
            (12345678901234567890, "12345678901234567000"),
            (2**53, "9007199254740992"),
        ],
    )
    def test_numeric_minimal_text(self, value: int | float, expected: str) -> None:
        assert NumericName(value).render() == expected


class TestRecords:
    def test_defaults_are_absent(self) -> None:
        record = MappingRecord(1, 0)
        assert record.source_index is None
        assert record.name_index is None

    def test_rejects_zero_line(self) -> None:
        with pytest.raises(ValueError, match="gen_line"):
            MappingRecord(0, 0)

    def test_rejects_negative_column(self) -> None:
        with pytest.raises(ValueError, match="gen_column"):
            MappingRecord(1, -1)

    def test_frozen(self) -> None:
        record = MappingRecord(1, 0)
        with pytest.raises(AttributeError):
            record.gen_line = 2  # type: ignore[misc]


class TestOffsetAndLookup:
    def test_negative_offset(self) -> None:
        with pytest.raises(ValueError):
            Offset(-1, 0)

    def test_lookup_unpacks(self) -> None:
        source, name, line, column, found = Lookup("a.js", "f", 3, 4, True)
        assert (source, name, line, column, found) == ("a.js", "f", 3, 4, True)

    def test_not_found(self) -> None:
        assert NOT_FOUND.found is False
        assert NOT_FOUND.source == ""
