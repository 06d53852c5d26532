import typing

import httpx

from .transport import AsyncTrackingTransport
from .transport import TrackingTransport


if typing.TYPE_CHECKING:
    from ...internal.constants import TracingHeaderType
    from ...sdk import DatadogSdk


class DatadogClient(httpx.Client):
    """``httpx.Client`` sending every request through a :class:`TrackingTransport`."""

    def __init__(
        self,
        sdk,  # type: DatadogSdk
        tracing_header_types=None,  # type: typing.Optional[typing.Iterable[TracingHeaderType]]
        transport=None,  # type: typing.Optional[httpx.BaseTransport]
        **kwargs  # type: typing.Any
    ):
        # type: (...) -> None
        super(DatadogClient, self).__init__(
            transport=TrackingTransport(sdk, transport=transport, tracing_header_types=tracing_header_types),
            **kwargs
        )


class AsyncDatadogClient(httpx.AsyncClient):
    """``httpx.AsyncClient`` sending every request through an :class:`AsyncTrackingTransport`."""

    def __init__(
        self,
        sdk,  # type: DatadogSdk
        tracing_header_types=None,  # type: typing.Optional[typing.Iterable[TracingHeaderType]]
        transport=None,  # type: typing.Optional[httpx.AsyncBaseTransport]
        **kwargs  # type: typing.Any
    ):
        # type: (...) -> None
        super(AsyncDatadogClient, self).__init__(
            transport=AsyncTrackingTransport(sdk, transport=transport, tracing_header_types=tracing_header_types),
            **kwargs
        )
