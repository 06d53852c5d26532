import typing
import uuid

import httpx

from ...constants import RULE_PSR_KEY
from ...constants import SPAN_ID_KEY
from ...constants import TRACE_ID_KEY
from ...context import TraceContext
from ...internal.constants import TracingHeaderType
from ...internal.logger import get_logger
from ...internal.rand import rand63bits
from ...propagation.http import HTTPPropagator
from ...rum import RumHttpMethod
from ...rum import resource_type_from_content_type
from ...sampler import rule_psr


if typing.TYPE_CHECKING:
    from ...rum import DdRum
    from ...sdk import DatadogSdk


log = get_logger(__name__)


class _ResourceTracker(object):
    """Reports a single RUM resource for one request.

    The resource is stopped at most once, whichever of success, failure or
    close happens first.
    """

    def __init__(self, rum, key, attributes):
        # type: (DdRum, str, typing.Dict[str, typing.Any]) -> None
        self._rum = rum
        self._key = key
        self._attributes = attributes
        self._stopped = False

    @property
    def key(self):
        # type: () -> str
        return self._key

    def stop(self, response):
        # type: (httpx.Response) -> None
        if self._stopped:
            return
        self._stopped = True

        size = None
        content_length = response.headers.get("content-length")
        if content_length is not None:
            try:
                size = int(content_length)
            except ValueError:
                log.debug("received invalid content-length %r", content_length)

        try:
            self._rum.stop_resource_loading(
                self._key,
                response.status_code,
                resource_type_from_content_type(response.headers.get("content-type")),
                size,
                dict(self._attributes),
            )
        except Exception:
            log.debug("error stopping resource %s", self._key, exc_info=True)

    def stop_with_error(self, exc):
        # type: (BaseException) -> None
        if self._stopped:
            return
        self._stopped = True

        try:
            self._rum.stop_resource_loading_with_error_info(self._key, str(exc), type(exc).__name__, {})
        except Exception:
            log.debug("error stopping resource %s with error", self._key, exc_info=True)


def _start_tracking(sdk, request, client_header_types):
    # type: (DatadogSdk, httpx.Request, typing.FrozenSet[TracingHeaderType]) -> typing.Optional[_ResourceTracker]
    """Inject tracing headers into a first-party ``request`` and start its resource.

    Returns ``None`` when the request is not tracked.
    """
    rum = sdk.rum
    if rum is None or not sdk.is_first_party_host(request.url):
        return None

    header_types = sdk.header_types_for(request.url) or client_header_types or sdk.tracing_header_types

    context = HTTPPropagator.extract(request.headers)
    if context is not None:
        psr = rule_psr(rum)
    else:
        decision = sdk.trace_sampler.decide(rum)
        psr = decision.rule_psr
        if decision.traced:
            context = TraceContext(trace_id=rand63bits(), span_id=rand63bits(), sampled=decision.sampled)

    attributes = {RULE_PSR_KEY: psr}  # type: typing.Dict[str, typing.Any]
    if context is not None:
        HTTPPropagator.inject(context, request.headers, header_types)
        if context.has_ids:
            attributes[TRACE_ID_KEY] = str(context.trace_id)
            attributes[SPAN_ID_KEY] = str(context.span_id)

    tracker = _ResourceTracker(rum, str(uuid.uuid4()), attributes)
    try:
        rum.start_resource_loading(
            tracker.key, RumHttpMethod.from_method(request.method), str(request.url), dict(attributes)
        )
    except Exception:
        log.debug("error starting resource for %s", request.url, exc_info=True)
        return None
    return tracker


def _tracked_response(response, stream, request):
    # type: (httpx.Response, typing.Any, httpx.Request) -> httpx.Response
    return httpx.Response(
        status_code=response.status_code,
        headers=response.headers,
        stream=stream,
        extensions=response.extensions,
        request=request,
    )


class _TrackedByteStream(httpx.SyncByteStream):
    def __init__(self, stream, tracker, response):
        # type: (httpx.SyncByteStream, _ResourceTracker, httpx.Response) -> None
        self._stream = stream
        self._tracker = tracker
        self._response = response

    def __iter__(self):
        # type: () -> typing.Iterator[bytes]
        try:
            for chunk in self._stream:
                yield chunk
        except GeneratorExit:
            # closed before the end of the body, close() reports it
            raise
        except BaseException as e:
            self._tracker.stop_with_error(e)
            raise
        self._tracker.stop(self._response)

    def close(self):
        # type: () -> None
        try:
            self._stream.close()
        finally:
            self._tracker.stop(self._response)


class _AsyncTrackedByteStream(httpx.AsyncByteStream):
    def __init__(self, stream, tracker, response):
        # type: (httpx.AsyncByteStream, _ResourceTracker, httpx.Response) -> None
        self._stream = stream
        self._tracker = tracker
        self._response = response

    async def __aiter__(self):
        # type: () -> typing.AsyncIterator[bytes]
        try:
            async for chunk in self._stream:
                yield chunk
        except GeneratorExit:
            # closed before the end of the body, aclose() reports it
            raise
        except BaseException as e:
            self._tracker.stop_with_error(e)
            raise
        self._tracker.stop(self._response)

    async def aclose(self):
        # type: () -> None
        try:
            await self._stream.aclose()
        finally:
            self._tracker.stop(self._response)


class TrackingTransport(httpx.BaseTransport):
    """Transport reporting first-party requests as RUM resources.

    Requests to hosts that are not first party, or sent while RUM is
    disabled, are forwarded to the inner transport untouched.
    """

    def __init__(
        self,
        sdk,  # type: DatadogSdk
        transport=None,  # type: typing.Optional[httpx.BaseTransport]
        tracing_header_types=None,  # type: typing.Optional[typing.Iterable[TracingHeaderType]]
    ):
        # type: (...) -> None
        self._sdk = sdk
        self._transport = transport if transport is not None else httpx.HTTPTransport()
        self._tracing_header_types = frozenset(tracing_header_types or ())

    def handle_request(self, request):
        # type: (httpx.Request) -> httpx.Response
        tracker = _start_tracking(self._sdk, request, self._tracing_header_types)
        if tracker is None:
            return self._transport.handle_request(request)

        try:
            response = self._transport.handle_request(request)
        except BaseException as e:
            tracker.stop_with_error(e)
            raise
        return _tracked_response(response, _TrackedByteStream(response.stream, tracker, response), request)

    def close(self):
        # type: () -> None
        self._transport.close()


class AsyncTrackingTransport(httpx.AsyncBaseTransport):
    """Async flavor of :class:`TrackingTransport`."""

    def __init__(
        self,
        sdk,  # type: DatadogSdk
        transport=None,  # type: typing.Optional[httpx.AsyncBaseTransport]
        tracing_header_types=None,  # type: typing.Optional[typing.Iterable[TracingHeaderType]]
    ):
        # type: (...) -> None
        self._sdk = sdk
        self._transport = transport if transport is not None else httpx.AsyncHTTPTransport()
        self._tracing_header_types = frozenset(tracing_header_types or ())

    async def handle_async_request(self, request):
        # type: (httpx.Request) -> httpx.Response
        tracker = _start_tracking(self._sdk, request, self._tracing_header_types)
        if tracker is None:
            return await self._transport.handle_async_request(request)

        try:
            response = await self._transport.handle_async_request(request)
        except BaseException as e:
            tracker.stop_with_error(e)
            raise
        return _tracked_response(response, _AsyncTrackedByteStream(response.stream, tracker, response), request)

    async def aclose(self):
        # type: () -> None
        await self._transport.aclose()
