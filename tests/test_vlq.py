"""Tests for sourcemap_lookup.vlq module."""
import pytest

from sourcemap_lookup.errors import MalformedMappings
from sourcemap_lookup.vlq import BASE64_ALPHABET, decode_segment


class TestDecodeSegment:
    def test_single_digit_values(self) -> None:
        # A=0, C=1, D=-1, E=2, F=-2
        assert decode_segment("ACDEF") == [0, 1, -1, 2, -2]

    def test_multi_digit_value(self) -> None:
        # 16 -> 32 -> "g" (continuation, low bits 0) then "B" (1)
        assert decode_segment("gB") == [16]
        assert decode_segment("hB") == [-16]

    def test_large_value(self) -> None:
        # E=4 after four empty continuation digits: 4 << 20, halved by the sign bit
        assert decode_segment("ggggE") == [1 << 21]

    def test_empty_segment(self) -> None:
        assert decode_segment("") == []

    def test_alphabet_is_base64(self) -> None:
        assert len(BASE64_ALPHABET) == 64
        assert BASE64_ALPHABET[62:] == "+/"

    def test_invalid_character(self) -> None:
        with pytest.raises(MalformedMappings) as exc:
            decode_segment("AA!A", offset=10)
        assert exc.value.offset == 12

    def test_truncated_value(self) -> None:
        with pytest.raises(MalformedMappings) as exc:
            decode_segment("AAg")
        assert exc.value.offset == 3
        assert "truncated" in str(exc.value)
