from enum import Enum


class TracingHeaderType(str, Enum):
    """Distributed tracing header formats that can be injected into first-party requests."""

    DATADOG = "datadog"
    B3 = "b3"
    B3MULTI = "b3multi"


PROPAGATION_STYLE_ALL = tuple(TracingHeaderType)
DEFAULT_TRACING_HEADER_TYPES = frozenset([TracingHeaderType.DATADOG])

MAX_UINT_64BITS = (1 << 64) - 1
