import logging

import httpx
import pytest

from datadog_tracking_http_client.first_party_hosts import FirstPartyHosts
from datadog_tracking_http_client.internal.constants import TracingHeaderType


@pytest.mark.parametrize(
    "url,expected",
    [
        ("https://example.com/", True),
        ("https://example.com:8443/path?q=1", True),
        ("https://api.example.com/users", True),
        ("https://deep.api.example.com", True),
        ("https://API.Example.COM/", True),
        ("http://badexample.com/", False),
        ("https://example.com.evil.org/", False),
        ("https://example.org/", False),
        ("https://test_url/test", True),
        ("https://non_first_party/test", False),
        ("/relative/path", False),
    ],
)
def test_is_first_party(url, expected):
    hosts = FirstPartyHosts(["example.com", "test_url"])
    assert hosts.is_first_party(url) is expected


def test_is_first_party_accepts_httpx_url():
    hosts = FirstPartyHosts(["example.com"])
    assert hosts.is_first_party(httpx.URL("https://www.example.com/"))


def test_single_host_string():
    hosts = FirstPartyHosts("example.com")
    assert hosts.hosts == frozenset(["example.com"])


def test_hosts_are_normalized():
    hosts = FirstPartyHosts(["  Example.COM ", "example.com"])
    assert hosts.hosts == frozenset(["example.com"])


def test_empty():
    hosts = FirstPartyHosts()
    assert not hosts
    assert not hosts.is_first_party("https://example.com")
    assert hosts.header_types_for("https://example.com") == frozenset()


def test_invalid_hosts_are_skipped(caplog):
    with caplog.at_level(logging.WARNING):
        hosts = FirstPartyHosts(["https://example.com", "example.com/path", "has space.com", "", "valid.com"])
    assert hosts.hosts == frozenset(["valid.com"])
    assert "Invalid first party host" in caplog.text


def test_listed_hosts_have_no_header_types():
    hosts = FirstPartyHosts(["example.com"])
    assert hosts.is_first_party("https://example.com")
    assert hosts.header_types_for("https://example.com") == frozenset()
    assert hosts.items() == [("example.com", frozenset())]


def test_header_types_per_host():
    hosts = FirstPartyHosts(
        {
            "example.com": [TracingHeaderType.B3],
            "api.example.com": ["b3multi"],
            "datadoghq.com": [TracingHeaderType.DATADOG],
        }
    )
    assert hosts.header_types_for("https://example.com/") == frozenset([TracingHeaderType.B3])
    assert hosts.header_types_for("https://api.example.com/") == frozenset(
        [TracingHeaderType.B3, TracingHeaderType.B3MULTI]
    )
    assert hosts.header_types_for("https://app.datadoghq.com/") == frozenset([TracingHeaderType.DATADOG])
    assert hosts.header_types_for("https://example.org/") == frozenset()


def test_unknown_header_type_is_skipped(caplog):
    with caplog.at_level(logging.WARNING):
        hosts = FirstPartyHosts({"example.com": ["tracecontext", "b3"]})
    assert hosts.header_types_for("https://example.com") == frozenset([TracingHeaderType.B3])
    assert "Unknown tracing header type" in caplog.text


def test_items_sorted():
    hosts = FirstPartyHosts({"b.com": ["b3"], "a.com": ["datadog"]})
    assert hosts.items() == [
        ("a.com", frozenset([TracingHeaderType.DATADOG])),
        ("b.com", frozenset([TracingHeaderType.B3])),
    ]


def test_repr():
    assert repr(FirstPartyHosts(["b.com", "a.com"])) == "FirstPartyHosts(hosts=['a.com', 'b.com'])"
