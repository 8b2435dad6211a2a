"""Base64 variable-length quantity decoding.

Each base64 digit carries 5 value bits plus a continuation bit (0x20),
least-significant group first. The lowest bit of the assembled value
is the sign.
"""
from __future__ import annotations

from sourcemap_lookup.errors import MalformedMappings

BASE64_ALPHABET = (
    "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/"
)
VLQ_BASE_SHIFT = 5
VLQ_CONTINUATION_BIT = 1 << VLQ_BASE_SHIFT
VLQ_BASE_MASK = VLQ_CONTINUATION_BIT - 1

_DIGITS: dict[str, int] = {ch: i for i, ch in enumerate(BASE64_ALPHABET)}


def decode_segment(segment: str, offset: int = 0) -> list[int]:
    """Decode every VLQ value in one mappings segment.

    Args:
        segment: Text between two separators, e.g. ``"AAgBC"``.
        offset: Position of ``segment`` in the full mappings string,
            used only for error reporting.

    Returns:
        Signed integers in encounter order.

    Raises:
        MalformedMappings: a character outside the alphabet, or the
            segment ends while a value is still continuing.
    """
    values: list[int] = []
    value = 0
    shift = 0
    for i, ch in enumerate(segment):
        digit = _DIGITS.get(ch)
        if digit is None:
            raise MalformedMappings(f"invalid base64 character {ch!r}", offset + i)
        value += (digit & VLQ_BASE_MASK) << shift
        if digit & VLQ_CONTINUATION_BIT:
            shift += VLQ_BASE_SHIFT
            continue
        values.append(-(value >> 1) if value & 1 else value >> 1)
        value = 0
        shift = 0
    if shift:
        raise MalformedMappings("truncated VLQ value", offset + len(segment))
    return values
