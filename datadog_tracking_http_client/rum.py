import abc
from enum import Enum
from typing import Any
from typing import Dict
from typing import Optional

from .internal.logger import get_logger
from .internal.rand import random_percent


log = get_logger(__name__)


class RumHttpMethod(str, Enum):
    GET = "GET"
    POST = "POST"
    HEAD = "HEAD"
    PUT = "PUT"
    DELETE = "DELETE"
    PATCH = "PATCH"

    @classmethod
    def from_method(cls, method):
        # type: (Any) -> RumHttpMethod
        """Map an HTTP method (``str`` or ``bytes``) to a RUM method, defaulting to ``GET``."""
        if isinstance(method, bytes):
            method = method.decode("ascii", errors="replace")
        try:
            return cls(str(method).upper())
        except ValueError:
            log.debug("unsupported http method %r reported as GET", method)
            return cls.GET


class RumResourceType(str, Enum):
    DOCUMENT = "document"
    IMAGE = "image"
    XHR = "xhr"
    BEACON = "beacon"
    CSS = "css"
    FETCH = "fetch"
    FONT = "font"
    JS = "js"
    MEDIA = "media"
    OTHER = "other"
    NATIVE = "native"


_PRIMARY_TYPES = {
    "image": RumResourceType.IMAGE,
    "video": RumResourceType.MEDIA,
    "audio": RumResourceType.MEDIA,
    "font": RumResourceType.FONT,
}

_FULL_TYPES = {
    "text/css": RumResourceType.CSS,
    "text/javascript": RumResourceType.JS,
    "application/javascript": RumResourceType.JS,
    "text/html": RumResourceType.DOCUMENT,
}


def resource_type_from_content_type(content_type):
    # type: (Optional[str]) -> RumResourceType
    """Classify a resource from its ``Content-Type`` header value.

    >>> resource_type_from_content_type("image/png")
    <RumResourceType.IMAGE: 'image'>
    >>> resource_type_from_content_type("application/json; charset=utf-8")
    <RumResourceType.NATIVE: 'native'>
    """
    if not content_type:
        return RumResourceType.NATIVE

    mime_type = content_type.split(";", 1)[0].strip().lower()
    if mime_type in _FULL_TYPES:
        return _FULL_TYPES[mime_type]
    primary_type = mime_type.split("/", 1)[0]
    return _PRIMARY_TYPES.get(primary_type, RumResourceType.NATIVE)


class DdRumPlatform(abc.ABC):
    """Entry points of the native RUM SDK used to report resources."""

    @abc.abstractmethod
    def start_resource_loading(self, key, http_method, url, attributes):
        # type: (str, RumHttpMethod, str, Dict[str, Any]) -> None
        pass

    @abc.abstractmethod
    def stop_resource_loading(self, key, status_code, kind, size, attributes):
        # type: (str, Optional[int], RumResourceType, Optional[int], Dict[str, Any]) -> None
        pass

    @abc.abstractmethod
    def stop_resource_loading_with_error_info(self, key, message, type_, attributes):
        # type: (str, str, str, Dict[str, Any]) -> None
        pass


class DdRum(object):
    """RUM collector of a :class:`~datadog_tracking_http_client.sdk.DatadogSdk`.

    Resource events are forwarded to the native platform. Trace sampling is
    decided here, against the configured ``tracing_sampling_rate``.
    """

    def __init__(self, platform, configuration):
        # type: (DdRumPlatform, Any) -> None
        self._platform = platform
        self._configuration = configuration

    @property
    def tracing_sampling_rate(self):
        # type: () -> float
        """Percentage of RUM resources that are kept as sampled traces."""
        return self._configuration.tracing_sample_rate

    def should_sample_trace(self):
        # type: () -> bool
        return random_percent() < self.tracing_sampling_rate

    def start_resource_loading(self, key, http_method, url, attributes=None):
        # type: (str, RumHttpMethod, str, Optional[Dict[str, Any]]) -> None
        self._platform.start_resource_loading(key, http_method, url, attributes or {})

    def stop_resource_loading(self, key, status_code, kind, size=None, attributes=None):
        # type: (str, Optional[int], RumResourceType, Optional[int], Optional[Dict[str, Any]]) -> None
        self._platform.stop_resource_loading(key, status_code, kind, size, attributes or {})

    def stop_resource_loading_with_error_info(self, key, message, type_, attributes=None):
        # type: (str, str, str, Optional[Dict[str, Any]]) -> None
        self._platform.stop_resource_loading_with_error_info(key, message, type_, attributes or {})
