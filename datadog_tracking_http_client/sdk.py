import abc
import logging
from typing import Any
from typing import Callable
from typing import Dict
from typing import FrozenSet
from typing import Optional
from typing import Union

import httpx

from .commands import Initialize
from .commands import SetSdkVerbosity
from .commands import SetTrackingConsent
from .commands import SetUserInfo
from .commands import TelemetryDebug
from .commands import TelemetryError
from .configuration import DatadogConfiguration
from .configuration import TrackingConsent
from .configuration import Verbosity
from .first_party_hosts import FirstPartyHosts
from .internal.constants import DEFAULT_TRACING_HEADER_TYPES
from .internal.constants import TracingHeaderType
from .internal.logger import ROOT_LOGGER_NAME
from .internal.logger import get_logger
from .rum import DdRum
from .rum import DdRumPlatform
from .sampler import TraceSampler
from .traces import DdTraces
from .traces import DdTracesPlatform


log = get_logger(__name__)


_VERBOSITY_LEVELS = {
    Verbosity.DEBUG: logging.DEBUG,
    Verbosity.INFO: logging.INFO,
    Verbosity.WARN: logging.WARNING,
    Verbosity.ERROR: logging.ERROR,
    Verbosity.NONE: logging.CRITICAL + 1,
}


class DatadogSdkPlatform(abc.ABC):
    """Entry points of the native core SDK."""

    @abc.abstractmethod
    def initialize(self, configuration, log_callback):
        # type: (Dict[str, Any], Optional[Callable[[str], None]]) -> None
        pass

    @abc.abstractmethod
    def set_sdk_verbosity(self, verbosity):
        # type: (Verbosity) -> None
        pass

    @abc.abstractmethod
    def set_user_info(self, id, name, email, extra_info):
        # type: (Optional[str], Optional[str], Optional[str], Dict[str, Any]) -> None
        pass

    @abc.abstractmethod
    def set_tracking_consent(self, tracking_consent):
        # type: (TrackingConsent) -> None
        pass

    @abc.abstractmethod
    def telemetry_debug(self, message):
        # type: (str) -> None
        pass

    @abc.abstractmethod
    def telemetry_error(self, message, stack, kind):
        # type: (str, Optional[str], Optional[str]) -> None
        pass


class DatadogSdk(object):
    """Explicitly constructed SDK context.

    Holds the configuration, the first-party hosts and the RUM and tracing
    features once initialized. Instances are passed to the instrumented HTTP
    clients; there is no global SDK instance.

    Example::

        sdk = DatadogSdk(platform, rum_platform=rum_platform)
        sdk.initialize(DatadogConfiguration.from_env())
        with DatadogClient(sdk) as client:
            client.get("https://api.example.com/")
    """

    def __init__(self, platform, rum_platform=None, traces_platform=None):
        # type: (DatadogSdkPlatform, Optional[DdRumPlatform], Optional[DdTracesPlatform]) -> None
        self._platform = platform
        self._rum_platform = rum_platform
        self._traces_platform = traces_platform
        self._configuration = None  # type: Optional[DatadogConfiguration]
        self._first_party_hosts = FirstPartyHosts()
        self._rum = None  # type: Optional[DdRum]
        self._traces = None  # type: Optional[DdTraces]
        self._trace_sampler = TraceSampler()
        self._handlers = {
            Initialize: self._handle_initialize,
            SetSdkVerbosity: self._handle_set_sdk_verbosity,
            SetUserInfo: self._handle_set_user_info,
            SetTrackingConsent: self._handle_set_tracking_consent,
            TelemetryDebug: self._handle_telemetry_debug,
            TelemetryError: self._handle_telemetry_error,
        }  # type: Dict[type, Callable[[Any], None]]

    def __repr__(self):
        return "{}(initialized={!r}, first_party_hosts={!r})".format(
            self.__class__.__name__, self.initialized, self._first_party_hosts
        )

    @property
    def initialized(self):
        # type: () -> bool
        return self._configuration is not None

    @property
    def configuration(self):
        # type: () -> Optional[DatadogConfiguration]
        return self._configuration

    @property
    def rum(self):
        # type: () -> Optional[DdRum]
        return self._rum

    @property
    def traces(self):
        # type: () -> Optional[DdTraces]
        return self._traces

    @property
    def first_party_hosts(self):
        # type: () -> FirstPartyHosts
        return self._first_party_hosts

    @property
    def trace_sampler(self):
        # type: () -> TraceSampler
        return self._trace_sampler

    def initialize(self, configuration, log_callback=None):
        # type: (DatadogConfiguration, Optional[Callable[[str], None]]) -> None
        """Initialize the native SDK and the enabled features.

        Initializing twice is not supported: a second call with a different
        configuration logs a warning and is ignored.
        """
        if self._configuration is not None:
            if configuration != self._configuration:
                log.warning(
                    "Reinitializing the DatadogSdk with different options is not supported. "
                    "Restart your application to change the current configuration."
                )
            return

        self._platform.initialize(configuration.encode(), log_callback)
        self._configuration = configuration
        self._first_party_hosts = configuration.build_first_party_hosts()
        self._trace_sampler = TraceSampler(configuration.trace_sample_rate)

        if configuration.rum_configuration is not None:
            if self._rum_platform is None:
                log.warning("RUM is configured but no RUM platform was provided, RUM is disabled")
            else:
                self._rum = DdRum(self._rum_platform, configuration.rum_configuration)
        if self._traces_platform is not None:
            self._traces = DdTraces(self._traces_platform)
        log.debug("initialized %r", self)

    def is_first_party_host(self, url):
        # type: (Union[str, httpx.URL]) -> bool
        return self._first_party_hosts.is_first_party(url)

    def header_types_for(self, url):
        # type: (Union[str, httpx.URL]) -> FrozenSet[TracingHeaderType]
        return self._first_party_hosts.header_types_for(url)

    @property
    def tracing_header_types(self):
        # type: () -> FrozenSet[TracingHeaderType]
        """Header types for first-party hosts configured without types of their own."""
        if self._configuration is None:
            return DEFAULT_TRACING_HEADER_TYPES
        return self._configuration.tracing_header_types

    def set_sdk_verbosity(self, verbosity):
        # type: (Verbosity) -> None
        """Set the verbosity of both the native SDK and this package's loggers."""
        verbosity = Verbosity(verbosity)
        logging.getLogger(ROOT_LOGGER_NAME).setLevel(_VERBOSITY_LEVELS[verbosity])
        self._platform.set_sdk_verbosity(verbosity)

    def set_user_info(self, id=None, name=None, email=None, extra_info=None):
        # type: (Optional[str], Optional[str], Optional[str], Optional[Dict[str, Any]]) -> None
        self._platform.set_user_info(id, name, email, dict(extra_info or {}))

    def set_tracking_consent(self, tracking_consent):
        # type: (TrackingConsent) -> None
        self._platform.set_tracking_consent(TrackingConsent(tracking_consent))

    def handle(self, command):
        # type: (Any) -> None
        """Execute a command decoded by :func:`~datadog_tracking_http_client.commands.decode_method_call`."""
        handler = self._handlers.get(type(command))
        if handler is None:
            raise TypeError("unsupported command {!r}".format(command))
        handler(command)

    def _handle_initialize(self, command):
        # type: (Initialize) -> None
        configuration = DatadogConfiguration.decode(dict(command.configuration))
        if configuration is None:
            return
        log_callback = None
        if command.set_log_callback:
            native_log = get_logger(ROOT_LOGGER_NAME + ".native")
            log_callback = native_log.info
        self.initialize(configuration, log_callback=log_callback)

    def _handle_set_sdk_verbosity(self, command):
        # type: (SetSdkVerbosity) -> None
        self.set_sdk_verbosity(command.verbosity)

    def _handle_set_user_info(self, command):
        # type: (SetUserInfo) -> None
        self.set_user_info(command.id, command.name, command.email, command.extra_info)

    def _handle_set_tracking_consent(self, command):
        # type: (SetTrackingConsent) -> None
        self.set_tracking_consent(command.tracking_consent)

    def _handle_telemetry_debug(self, command):
        # type: (TelemetryDebug) -> None
        self._platform.telemetry_debug(command.message)

    def _handle_telemetry_error(self, command):
        # type: (TelemetryError) -> None
        self._platform.telemetry_error(command.message, command.stack, command.kind)
