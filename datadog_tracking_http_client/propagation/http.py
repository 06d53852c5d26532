from typing import Dict
from typing import Iterable
from typing import MutableMapping
from typing import Optional

from ..context import TraceContext
from ..errors import IdentifierParseError
from ..internal.constants import PROPAGATION_STYLE_ALL
from ..internal.constants import TracingHeaderType
from ..internal.logger import get_logger
from ._utils import format_decimal_id
from ._utils import format_hex_id
from ._utils import parse_decimal_id
from ._utils import parse_hex_id


log = get_logger(__name__)


# HTTP headers one should set for distributed tracing.
# These are cross-language (eg: Python, Go and other implementations should honor these)
HTTP_HEADER_TRACE_ID = "x-datadog-trace-id"
HTTP_HEADER_PARENT_ID = "x-datadog-parent-id"
HTTP_HEADER_SAMPLING_PRIORITY = "x-datadog-sampling-priority"
HTTP_HEADER_B3_SINGLE = "b3"
HTTP_HEADER_B3_TRACE_ID = "X-B3-TraceId"
HTTP_HEADER_B3_SPAN_ID = "X-B3-SpanId"
HTTP_HEADER_B3_SAMPLED = "X-B3-Sampled"


def _extract_header_value(header, headers):
    # type: (str, Dict[str, str]) -> Optional[str]
    return headers.get(header.lower())


def _sampled_to_str(sampled):
    # type: (bool) -> str
    return "1" if sampled else "0"


class _DatadogMultiHeader:
    """Helper class for injecting/extract Datadog multi header format

    Headers:

      - ``x-datadog-trace-id`` the context trace id as a decimal integer
      - ``x-datadog-parent-id`` the id of the span representing this call as a decimal integer
      - ``x-datadog-sampling-priority`` ``1`` (keep) or ``0`` (reject)

    An explicitly unsampled context without ids only carries ``x-datadog-sampling-priority: 0``.
    """

    @staticmethod
    def _inject(span_context, headers):
        # type: (TraceContext, MutableMapping[str, str]) -> None
        if span_context.has_ids:
            headers[HTTP_HEADER_TRACE_ID] = format_decimal_id(span_context.trace_id)  # type: ignore[arg-type]
            headers[HTTP_HEADER_PARENT_ID] = format_decimal_id(span_context.span_id)  # type: ignore[arg-type]
        headers[HTTP_HEADER_SAMPLING_PRIORITY] = _sampled_to_str(span_context.sampled)

    @staticmethod
    def _extract(headers):
        # type: (Dict[str, str]) -> Optional[TraceContext]
        trace_id = _extract_header_value(HTTP_HEADER_TRACE_ID, headers)
        parent_span_id = _extract_header_value(HTTP_HEADER_PARENT_ID, headers)
        sampling_priority = _extract_header_value(HTTP_HEADER_SAMPLING_PRIORITY, headers)
        if trace_id is None or parent_span_id is None or sampling_priority is None:
            return None

        try:
            return TraceContext(
                trace_id=parse_decimal_id(trace_id),
                span_id=parse_decimal_id(parent_span_id),
                sampled=int(sampling_priority) > 0,
            )
        except (TypeError, ValueError):
            log.debug(
                "received invalid x-datadog-* headers, trace-id: %r, parent-id: %r, priority: %r",
                trace_id,
                parent_span_id,
                sampling_priority,
            )
        return None


class _B3MultiHeader:
    """Helper class to inject/extract B3 Multi-Headers

    https://github.com/openzipkin/b3-propagation/blob/3e54cda11620a773d53c7f64d2ebb10d3a01794c/README.md#multiple-headers

    Example::

        X-B3-TraceId: 714e65427868bdc8
        X-B3-SpanId: 7386a57f63c48531
        X-B3-Sampled: 1

    Implementation details:

      - Ids are encoded as 16 lowercase hex characters.
      - An unsampled context is encoded as ``X-B3-Sampled: 0`` alone.
      - Header names are matched case-insensitively on extraction.
      - ``X-B3-Sampled: 0`` decodes as unsampled without ids, even if id headers are present.
      - A missing ``X-B3-Sampled`` header (deferred decision) decodes as sampled.
    """

    @staticmethod
    def _inject(span_context, headers):
        # type: (TraceContext, MutableMapping[str, str]) -> None
        if span_context.sampled and span_context.has_ids:
            headers[HTTP_HEADER_B3_TRACE_ID] = format_hex_id(span_context.trace_id)  # type: ignore[arg-type]
            headers[HTTP_HEADER_B3_SPAN_ID] = format_hex_id(span_context.span_id)  # type: ignore[arg-type]
            headers[HTTP_HEADER_B3_SAMPLED] = "1"
        else:
            headers[HTTP_HEADER_B3_SAMPLED] = "0"

    @staticmethod
    def _extract(headers):
        # type: (Dict[str, str]) -> Optional[TraceContext]
        sampled = _extract_header_value(HTTP_HEADER_B3_SAMPLED, headers)
        if sampled == "0":
            return TraceContext(sampled=False)

        trace_id_val = _extract_header_value(HTTP_HEADER_B3_TRACE_ID, headers)
        span_id_val = _extract_header_value(HTTP_HEADER_B3_SPAN_ID, headers)
        if trace_id_val is None or span_id_val is None:
            return None

        try:
            return TraceContext(
                trace_id=parse_hex_id(trace_id_val),
                span_id=parse_hex_id(span_id_val),
                sampled=True,
            )
        except IdentifierParseError:
            log.debug(
                "received invalid x-b3-* headers, trace-id: %r, span-id: %r, sampled: %r",
                trace_id_val,
                span_id_val,
                sampled,
            )
        return None


class _B3SingleHeader:
    """Helper class to inject/extract B3 Single Header

    https://github.com/openzipkin/b3-propagation/blob/3e54cda11620a773d53c7f64d2ebb10d3a01794c/README.md#single-header

    Format::

        b3={TraceId}-{SpanId}-{SamplingState}-{ParentSpanId}

    Example::

        b3: 714e65427868bdc8-7386a57f63c48531-1

    Implementation details:

      - An unsampled context is encoded as the literal ``b3: 0``, never ``0-0-0``.
      - ``SamplingState`` of ``0`` decodes as unsampled, any other value (or none) as sampled.
      - ``ParentSpanId`` is ignored if sent.
    """

    @staticmethod
    def _inject(span_context, headers):
        # type: (TraceContext, MutableMapping[str, str]) -> None
        if span_context.sampled and span_context.has_ids:
            headers[HTTP_HEADER_B3_SINGLE] = "{}-{}-1".format(
                format_hex_id(span_context.trace_id),  # type: ignore[arg-type]
                format_hex_id(span_context.span_id),  # type: ignore[arg-type]
            )
        else:
            headers[HTTP_HEADER_B3_SINGLE] = "0"

    @staticmethod
    def _extract(headers):
        # type: (Dict[str, str]) -> Optional[TraceContext]
        single_header = _extract_header_value(HTTP_HEADER_B3_SINGLE, headers)
        if not single_header:
            return None

        single_header = single_header.strip()
        if single_header == "0":
            return TraceContext(sampled=False)

        parts = single_header.split("-")
        if len(parts) < 2:
            log.debug("received invalid b3 header, b3: %r", single_header)
            return None

        trace_id_val, span_id_val = parts[:2]
        sampled = True
        if len(parts) >= 3:
            sampled = parts[2] != "0"

        try:
            return TraceContext(
                trace_id=parse_hex_id(trace_id_val),
                span_id=parse_hex_id(span_id_val),
                sampled=sampled,
            )
        except IdentifierParseError:
            log.debug("received invalid b3 header, b3: %r", single_header)
        return None


_PROP_STYLES = {
    TracingHeaderType.DATADOG: _DatadogMultiHeader,
    TracingHeaderType.B3: _B3SingleHeader,
    TracingHeaderType.B3MULTI: _B3MultiHeader,
}


class HTTPPropagator(object):
    """A HTTP Propagator using HTTP headers as carrier."""

    @staticmethod
    def inject(span_context, headers, header_types):
        # type: (TraceContext, MutableMapping[str, str], Iterable[TracingHeaderType]) -> None
        """Inject the context into ``headers`` once for every requested header format.

        Formats are applied in a fixed order (datadog, b3, b3multi) and never
        overwrite a header name written by a format applied before them.

        :param TraceContext span_context: Trace context to propagate.
        :param headers: HTTP headers to extend with tracing attributes.
        :param header_types: The :class:`TracingHeaderType` formats to emit.
        """
        requested = frozenset(header_types)
        written = set()  # type: set
        for header_type in PROPAGATION_STYLE_ALL:
            if header_type not in requested:
                continue
            encoded = {}  # type: Dict[str, str]
            _PROP_STYLES[header_type]._inject(span_context, encoded)
            for name, value in encoded.items():
                if name.lower() in written:
                    continue
                headers[name] = value
                written.add(name.lower())

    @staticmethod
    def extract(headers, header_types=PROPAGATION_STYLE_ALL):
        # type: (Optional[MutableMapping[str, str]], Iterable[TracingHeaderType]) -> Optional[TraceContext]
        """Extract a :class:`TraceContext` from HTTP headers.

        Every format is tried independently, in order, and the first one that
        yields a context wins. Missing or malformed headers are not errors.

        :param headers: HTTP headers to extract tracing attributes from.
        :param header_types: The :class:`TracingHeaderType` formats to look for.
        :return: The extracted context, or ``None``.
        """
        if not headers:
            return None

        normalized_headers = {name.lower(): v for name, v in headers.items()}
        requested = frozenset(header_types)
        for header_type in PROPAGATION_STYLE_ALL:
            if header_type not in requested:
                continue
            context = _PROP_STYLES[header_type]._extract(normalized_headers)
            if context is not None:
                return context
        return None

