from .commands import decode_method_call
from .configuration import BatchSize
from .configuration import DatadogConfiguration
from .configuration import DatadogSite
from .configuration import RumConfiguration
from .configuration import TrackingConsent
from .configuration import UploadFrequency
from .configuration import Verbosity
from .context import TraceContext
from .contrib.httpx import AsyncDatadogClient
from .contrib.httpx import AsyncTrackingTransport
from .contrib.httpx import DatadogClient
from .contrib.httpx import TrackingTransport
from .first_party_hosts import FirstPartyHosts
from .internal.constants import TracingHeaderType
from .propagation.http import HTTPPropagator
from .rum import DdRum
from .rum import DdRumPlatform
from .sdk import DatadogSdk
from .sdk import DatadogSdkPlatform
from .traces import DdSpan
from .traces import DdTraces
from .traces import DdTracesPlatform


__version__ = "1.0.0"

__all__ = [
    "AsyncDatadogClient",
    "AsyncTrackingTransport",
    "BatchSize",
    "DatadogClient",
    "DatadogConfiguration",
    "DatadogSdk",
    "DatadogSdkPlatform",
    "DatadogSite",
    "DdRum",
    "DdRumPlatform",
    "DdSpan",
    "DdTraces",
    "DdTracesPlatform",
    "FirstPartyHosts",
    "HTTPPropagator",
    "RumConfiguration",
    "TraceContext",
    "TracingHeaderType",
    "TrackingConsent",
    "TrackingTransport",
    "UploadFrequency",
    "Verbosity",
    "decode_method_call",
]
