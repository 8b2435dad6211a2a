"""Tests for sourcemap_lookup.position_index module."""
import pytest

from sourcemap_lookup.document import RawMap
from sourcemap_lookup.errors import InvalidRoot, MalformedMappings
from sourcemap_lookup.position_index import SubMap, build_submap
from sourcemap_lookup.types import Lookup, NumericName, TextName

MAPPINGS = "AAAA,EAAEA;ACCAC,GAACC,E;;KDEA"


def _raw(mappings: str = MAPPINGS, source_root: str = "") -> RawMap:
    return RawMap(
        version=3,
        file="app.min.js",
        source_root=source_root,
        sources=("a.js", "b.js"),
        names=(TextName("foo"), NumericName(42), TextName("bar")),
        mappings=mappings,
    )


@pytest.fixture
def submap() -> SubMap:
    return build_submap(_raw(), "")


class TestBuild:
    def test_records_and_keys_parallel(self, submap: SubMap) -> None:
        assert len(submap.records) == 6
        assert submap.keys == tuple(r.position for r in submap.records)

    def test_raw_mappings_not_kept(self, submap: SubMap) -> None:
        assert not hasattr(submap, "mappings")

    def test_errors_propagate(self) -> None:
        with pytest.raises(MalformedMappings):
            build_submap(_raw(mappings="AA"), "")
        with pytest.raises(InvalidRoot):
            build_submap(_raw(source_root="http://[::1"), "")


class TestExactLookup:
    def test_every_record_finds_itself(self, submap: SubMap) -> None:
        for record in submap.records:
            assert submap.find(record.gen_line, record.gen_column) is record

    def test_resolved_fields(self, submap: SubMap) -> None:
        assert submap.lookup(1, 0) == Lookup("a.js", "", 1, 0, True)
        assert submap.lookup(1, 2) == Lookup("a.js", "foo", 1, 2, True)
        assert submap.lookup(2, 0) == Lookup("b.js", "42", 2, 2, True)
        assert submap.lookup(2, 3) == Lookup("b.js", "bar", 2, 3, True)
        assert submap.lookup(4, 5) == Lookup("a.js", "", 4, 3, True)

    def test_sourceless_record_found_but_empty(self, submap: SubMap) -> None:
        assert submap.lookup(2, 5) == Lookup("", "", 0, 0, True)

    def test_source_root_applied(self) -> None:
        submap = build_submap(_raw(source_root="src"), "")
        assert submap.lookup(1, 0).source == "src/a.js"

    def test_origin_applied(self) -> None:
        submap = build_submap(_raw(), "https://example.com/static/app.min.js.map")
        assert submap.lookup(2, 0).source == "https://example.com/static/b.js"


class TestFuzzyLookup:
    def test_between_records_on_same_line(self, submap: SubMap) -> None:
        assert submap.lookup(1, 1) == Lookup("a.js", "", 1, 0, True)

    def test_end_of_line_uses_last_record(self, submap: SubMap) -> None:
        assert submap.lookup(1, 10) == Lookup("a.js", "foo", 1, 2, True)

    def test_empty_line_uses_previous_line(self, submap: SubMap) -> None:
        assert submap.lookup(3, 0) == Lookup("", "", 0, 0, True)
        assert submap.lookup(4, 4) == Lookup("", "", 0, 0, True)

    def test_before_first_record(self, submap: SubMap) -> None:
        assert submap.lookup(0, 7).found is False

    def test_after_last_record(self, submap: SubMap) -> None:
        assert submap.lookup(4, 6).found is False
        assert submap.lookup(9, 0).found is False

    def test_empty_map(self) -> None:
        submap = build_submap(_raw(mappings=""), "")
        assert submap.lookup(1, 0).found is False

    def test_never_forward_and_monotonic(self, submap: SubMap) -> None:
        previous = (0, 0)
        for line in range(0, 6):
            for column in range(0, 8):
                match = submap.find(line, column)
                if match is None:
                    continue
                assert match.position <= (line, column)
                assert match.position >= previous
                previous = match.position
