import re
from typing import Dict
from typing import FrozenSet
from typing import Iterable
from typing import Mapping
from typing import Optional
from typing import Tuple
from typing import Union

import httpx

from .internal.constants import TracingHeaderType
from .internal.logger import get_logger


log = get_logger(__name__)

# Host names only: no scheme, port, path or whitespace
_HOST_REGEX = re.compile(r"^[a-z0-9_]([a-z0-9_\-]*[a-z0-9_])?(\.[a-z0-9_]([a-z0-9_\-]*[a-z0-9_])?)*$")

HostsType = Union[Iterable[str], Mapping[str, Iterable[TracingHeaderType]]]


def _header_types(host, types):
    # type: (str, Iterable[Union[str, TracingHeaderType]]) -> FrozenSet[TracingHeaderType]
    header_types = set()
    for header_type in types:
        try:
            header_types.add(TracingHeaderType(header_type))
        except ValueError:
            log.warning("Unknown tracing header type %r for first party host %r", header_type, host)
    return frozenset(header_types)


def _url_host(url):
    # type: (Union[str, httpx.URL]) -> str
    try:
        return httpx.URL(url).host.lower()
    except (TypeError, httpx.InvalidURL):
        log.debug("unable to parse host of url %r", url)
        return ""


class FirstPartyHosts(object):
    """Matches request URLs against the hosts the application owns.

    A URL is first party when its host is equal to a configured host or is a
    subdomain of it (``api.example.com`` matches ``example.com``, but
    ``badexample.com`` does not).

    Hosts may be given as a plain iterable, in which case no host has tracing
    header types of its own and callers fall back to their defaults, or as a
    mapping of host to the tracing header types to inject for that host::

        FirstPartyHosts({"example.com": [TracingHeaderType.B3], "datadoghq.com": [TracingHeaderType.DATADOG]})
    """

    def __init__(self, hosts=None):
        # type: (Optional[HostsType]) -> None
        self._hosts = {}  # type: Dict[str, FrozenSet[TracingHeaderType]]
        if not hosts:
            return

        if isinstance(hosts, str):
            hosts = [hosts]
        if isinstance(hosts, Mapping):
            items = [(host, _header_types(host, types)) for host, types in hosts.items()]
        else:
            items = [(host, frozenset()) for host in hosts]

        for host, header_types in items:
            normalized = host.strip().lower() if isinstance(host, str) else ""
            if not _HOST_REGEX.match(normalized):
                log.warning("Invalid first party host %r, it must be a host name without scheme, port or path", host)
                continue
            self._hosts[normalized] = self._hosts.get(normalized, frozenset()) | header_types

    def __bool__(self):
        # type: () -> bool
        return bool(self._hosts)

    def __repr__(self):
        return "{}(hosts={!r})".format(self.__class__.__name__, sorted(self._hosts))

    @property
    def hosts(self):
        # type: () -> FrozenSet[str]
        return frozenset(self._hosts)

    def items(self):
        # type: () -> Iterable[Tuple[str, FrozenSet[TracingHeaderType]]]
        return sorted(self._hosts.items())

    def _matching(self, url):
        # type: (Union[str, httpx.URL]) -> Iterable[str]
        host = _url_host(url)
        if not host:
            return []
        return [h for h in self._hosts if host == h or host.endswith("." + h)]

    def is_first_party(self, url):
        # type: (Union[str, httpx.URL]) -> bool
        return bool(self._matching(url))

    def header_types_for(self, url):
        # type: (Union[str, httpx.URL]) -> FrozenSet[TracingHeaderType]
        """Return the tracing header types mapped to ``url``.

        Empty when ``url`` is not first party or its hosts were given without types.
        """
        header_types = frozenset()  # type: FrozenSet[TracingHeaderType]
        for host in self._matching(url):
            header_types |= self._hosts[host]
        return header_types
