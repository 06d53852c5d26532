"""
The httpx__ integration reports requests made with the ``httpx`` library to
first-party hosts as RUM resources, and injects distributed tracing headers
into them.

Usage
~~~~~

Build the clients from an initialized
:class:`~datadog_tracking_http_client.sdk.DatadogSdk`::

    from datadog_tracking_http_client.contrib.httpx import DatadogClient

    with DatadogClient(sdk) as client:
        client.get("https://api.example.com/users")

Or wrap an existing transport::

    transport = TrackingTransport(sdk, transport=httpx.HTTPTransport(retries=1))
    client = httpx.Client(transport=transport)

``AsyncDatadogClient`` and ``AsyncTrackingTransport`` are the
``httpx.AsyncClient`` counterparts.


Configuration
~~~~~~~~~~~~~

Requests are only tracked when the SDK was initialized with a RUM
configuration and the request host is one of the configured first-party
hosts (or a subdomain of one).

The tracing header formats injected are the ones mapped to the matching
first-party host. Hosts configured as a plain list have none of their own and
use the client's ``tracing_header_types``, or the
``DatadogConfiguration.tracing_header_types`` when the client sets none.

Headers already present on the request (``x-datadog-*``, ``b3`` or
``X-B3-*``) are honored: their trace is continued instead of a new one being
sampled.


.. __: https://www.python-httpx.org/
"""
from .client import AsyncDatadogClient
from .client import DatadogClient
from .transport import AsyncTrackingTransport
from .transport import TrackingTransport


__all__ = [
    "AsyncDatadogClient",
    "AsyncTrackingTransport",
    "DatadogClient",
    "TrackingTransport",
]
