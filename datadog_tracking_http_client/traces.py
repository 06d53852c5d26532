import abc
import traceback
from typing import Any
from typing import Dict
from typing import Optional

from .internal.logger import get_logger


log = get_logger(__name__)


class DdTracesPlatform(abc.ABC):
    """Entry points of the native tracing SDK.

    Spans live in the native SDK and are referred to by an integer handle.
    ``start_span`` and ``start_root_span`` return ``None`` when no span could be created.
    """

    @abc.abstractmethod
    def start_span(self, operation_name, parent_span, resource_name, tags, start_time):
        # type: (str, Optional[DdSpan], Optional[str], Optional[Dict[str, Any]], Optional[float]) -> Optional[int]
        pass

    @abc.abstractmethod
    def start_root_span(self, operation_name, resource_name, tags, start_time):
        # type: (str, Optional[str], Optional[Dict[str, Any]], Optional[float]) -> Optional[int]
        pass

    @abc.abstractmethod
    def get_trace_propagation_headers(self, span):
        # type: (DdSpan) -> Dict[str, str]
        pass

    @abc.abstractmethod
    def span_set_active(self, span):
        # type: (DdSpan) -> None
        pass

    @abc.abstractmethod
    def span_set_baggage_item(self, span, key, value):
        # type: (DdSpan, str, str) -> None
        pass

    @abc.abstractmethod
    def span_set_tag(self, span, key, value):
        # type: (DdSpan, str, Any) -> None
        pass

    @abc.abstractmethod
    def span_set_error(self, span, kind, message, stack):
        # type: (DdSpan, str, str, str) -> None
        pass

    @abc.abstractmethod
    def span_log(self, span, fields):
        # type: (DdSpan, Dict[str, Any]) -> None
        pass

    @abc.abstractmethod
    def span_finish(self, span):
        # type: (DdSpan) -> None
        pass


class DdSpan(object):
    """A span owned by the native tracing SDK.

    Once finished the handle is invalidated and every further call logs a
    warning instead of reaching the platform.
    """

    def __init__(self, platform, handle):
        # type: (DdTracesPlatform, int) -> None
        self._platform = platform
        self._handle = handle

    def __repr__(self):
        return "{}(handle={!r})".format(self.__class__.__name__, self._handle)

    @property
    def handle(self):
        # type: () -> int
        return self._handle

    @property
    def closed(self):
        # type: () -> bool
        return self._handle <= 0

    def _check_open(self, method):
        # type: (str) -> bool
        if self.closed:
            log.warning("Attempting to call %s on a closed span.", method)
            return False
        return True

    def set_active(self):
        # type: () -> None
        if self._check_open("set_active"):
            self._platform.span_set_active(self)

    def set_baggage_item(self, key, value):
        # type: (str, str) -> None
        if self._check_open("set_baggage_item"):
            self._platform.span_set_baggage_item(self, key, value)

    def set_tag(self, key, value):
        # type: (str, Any) -> None
        if self._check_open("set_tag"):
            self._platform.span_set_tag(self, key, value)

    def set_error(self, error):
        # type: (BaseException) -> None
        stack = "".join(traceback.format_exception(type(error), error, error.__traceback__))
        self.set_error_info(type(error).__name__, str(error), stack)

    def set_error_info(self, kind, message, stack=None):
        # type: (str, str, Optional[str]) -> None
        if not self._check_open("set_error_info"):
            return
        if stack is None:
            stack = "".join(traceback.format_stack())
        self._platform.span_set_error(self, kind, message, stack)

    def log(self, fields):
        # type: (Dict[str, Any]) -> None
        if self._check_open("log"):
            self._platform.span_log(self, fields)

    def finish(self):
        # type: () -> None
        if not self._check_open("finish"):
            return
        self._platform.span_finish(self)
        self._handle = -1


class DdTraces(object):
    """Creates spans in the native tracing SDK.

    Failures of the platform never reach the caller: they are logged and a
    closed span (or empty headers) is returned instead.
    """

    def __init__(self, platform):
        # type: (DdTracesPlatform) -> None
        self._platform = platform

    def _span_from_handle(self, operation_name, handle):
        # type: (str, Optional[int]) -> DdSpan
        if handle is None:
            log.error("Error creating span named %s", operation_name)
            return DdSpan(self._platform, 0)
        return DdSpan(self._platform, handle)

    def start_span(self, operation_name, parent_span=None, resource_name=None, tags=None, start_time=None):
        # type: (str, Optional[DdSpan], Optional[str], Optional[Dict[str, Any]], Optional[float]) -> DdSpan
        try:
            handle = self._platform.start_span(operation_name, parent_span, resource_name, tags, start_time)
        except Exception:
            log.error("error calling traces.start_span", exc_info=True)
            handle = None
        return self._span_from_handle(operation_name, handle)

    def start_root_span(self, operation_name, resource_name=None, tags=None, start_time=None):
        # type: (str, Optional[str], Optional[Dict[str, Any]], Optional[float]) -> DdSpan
        try:
            handle = self._platform.start_root_span(operation_name, resource_name, tags, start_time)
        except Exception:
            log.error("error calling traces.start_root_span", exc_info=True)
            handle = None
        return self._span_from_handle(operation_name, handle)

    def get_trace_propagation_headers(self, span):
        # type: (DdSpan) -> Dict[str, str]
        try:
            return self._platform.get_trace_propagation_headers(span) or {}
        except Exception:
            log.error("error calling traces.get_trace_propagation_headers", exc_info=True)
            return {}
