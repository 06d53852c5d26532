import pytest

from datadog_tracking_http_client.errors import IdentifierParseError
from datadog_tracking_http_client.propagation._utils import format_decimal_id
from datadog_tracking_http_client.propagation._utils import format_hex_id
from datadog_tracking_http_client.propagation._utils import parse_decimal_id
from datadog_tracking_http_client.propagation._utils import parse_hex_id


def test_format_decimal_id():
    assert format_decimal_id(0) == "0"
    assert format_decimal_id(8164574510631665096) == "8164574510631665096"


def test_format_hex_id_is_zero_padded():
    assert format_hex_id(1) == "0000000000000001"
    assert format_hex_id(1234) == "00000000000004d2"
    assert format_hex_id(2 ** 64 - 1) == "ffffffffffffffff"


def test_parse_hex_id():
    assert parse_hex_id("714E65427868BDC8") == 8164574510631665096
    assert parse_hex_id("7386a57f63c48531") == 8324522927794193713
    # 128-bit form of a 64-bit trace id
    assert parse_hex_id("0000000000000000714E65427868BDC8") == 8164574510631665096


def test_parse_decimal_id():
    assert parse_decimal_id("1234") == 1234
    assert parse_decimal_id("18446744073709551615") == 2 ** 64 - 1


def test_parse_id_keeps_top_bit():
    value = 2 ** 63 + 5
    assert parse_decimal_id(str(value)) == value
    assert parse_hex_id(format_hex_id(value)) == value


@pytest.mark.parametrize(
    "value",
    ["", "abc", "-1", "+1", "1_000", "12.5", "18446744073709551616"],
)
def test_parse_decimal_id_invalid(value):
    with pytest.raises(IdentifierParseError):
        parse_decimal_id(value)


@pytest.mark.parametrize(
    "value",
    ["", "xyz", "0x10", "-a", "1ffffffffffffffff"],
)
def test_parse_hex_id_invalid(value):
    with pytest.raises(IdentifierParseError):
        parse_hex_id(value)


def test_identifier_parse_error_is_value_error():
    with pytest.raises(ValueError):
        parse_decimal_id("nope")
