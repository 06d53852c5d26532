from ..errors import IdentifierParseError
from ..internal.constants import MAX_UINT_64BITS


def format_decimal_id(id_):
    # type: (int) -> str
    """Format a trace/span id the way Datadog headers expect it."""
    return str(id_)


def format_hex_id(id_):
    # type: (int) -> str
    """Format a trace/span id as 16 lowercase hex digits, left padded with zeros."""
    return "{:016x}".format(id_)


def _parse_id(value, base):
    # type: (str, int) -> int
    if not value:
        raise IdentifierParseError("empty identifier")
    stripped = value.strip()
    # int() accepts signs, underscores and "0x" prefixes, none of which are valid here
    valid_chars = "0123456789abcdefABCDEF" if base == 16 else "0123456789"
    if not stripped or any(c not in valid_chars for c in stripped):
        raise IdentifierParseError("invalid identifier: %r" % (value,))
    id_ = int(stripped, base)
    if id_ > MAX_UINT_64BITS:
        raise IdentifierParseError("identifier does not fit in 64 bits: %r" % (value,))
    return id_


def parse_decimal_id(value):
    # type: (str) -> int
    """Parse a decimal trace/span id.

    Values up to ``2**64 - 1`` are accepted and returned unmasked.

    :raises IdentifierParseError: when the value is empty, not decimal, or does not fit in 64 bits.
    """
    return _parse_id(value, 10)


def parse_hex_id(value):
    # type: (str) -> int
    """Parse a hex trace/span id such as the ones found in B3 headers.

    Leading zeros are accepted, so the 32 hex digit form of a 64-bit trace id parses.

    :raises IdentifierParseError: when the value is empty, not hex, or does not fit in 64 bits.
    """
    return _parse_id(value, 16)
