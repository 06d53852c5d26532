from enum import Enum
from typing import Any
from typing import Dict
from typing import Optional

import attr

from .first_party_hosts import FirstPartyHosts
from .internal.constants import DEFAULT_TRACING_HEADER_TYPES
from .internal.constants import TracingHeaderType
from .internal.logger import get_logger
from .settings import SdkSettings


log = get_logger(__name__)


class TrackingConsent(str, Enum):
    GRANTED = "granted"
    NOT_GRANTED = "notGranted"
    PENDING = "pending"


class Verbosity(str, Enum):
    DEBUG = "debug"
    INFO = "info"
    WARN = "warn"
    ERROR = "error"
    NONE = "none"


class DatadogSite(str, Enum):
    US1 = "us1"
    US3 = "us3"
    US5 = "us5"
    EU1 = "eu1"
    US1_FED = "us1_fed"
    AP1 = "ap1"


class BatchSize(str, Enum):
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"


class UploadFrequency(str, Enum):
    FREQUENT = "frequent"
    AVERAGE = "average"
    RARE = "rare"


def _header_types(value):
    return frozenset(TracingHeaderType(t) for t in value)


def _percentage(instance, attribute, value):
    if not 0.0 <= value <= 100.0:
        raise ValueError("{} must be a percentage between 0 and 100, got {!r}".format(attribute.name, value))


@attr.s(frozen=True)
class RumConfiguration(object):
    application_id = attr.ib(type=str)
    session_sample_rate = attr.ib(default=100.0, type=float, converter=float, validator=_percentage)
    tracing_sample_rate = attr.ib(default=20.0, type=float, converter=float, validator=_percentage)

    def encode(self):
        # type: () -> Dict[str, Any]
        return {
            "applicationId": self.application_id,
            "sampleRate": self.session_sample_rate,
            "tracingSampleRate": self.tracing_sample_rate,
        }


@attr.s(frozen=True)
class DatadogConfiguration(object):
    """Configuration of a :class:`~datadog_tracking_http_client.sdk.DatadogSdk`.

    ``first_party_hosts`` is either a list of hosts, traced with the HTTP
    client's header types or else ``tracing_header_types``, or a mapping of
    host to the tracing header types to use for that host.
    """

    client_token = attr.ib(type=str)
    env = attr.ib(type=str)
    site = attr.ib(default=DatadogSite.US1, converter=DatadogSite)
    service_name = attr.ib(default=None, type=Optional[str])
    tracking_consent = attr.ib(default=TrackingConsent.PENDING, converter=TrackingConsent)
    native_crash_reporting_enabled = attr.ib(default=False, type=bool)
    batch_size = attr.ib(default=None, converter=attr.converters.optional(BatchSize))
    upload_frequency = attr.ib(default=None, converter=attr.converters.optional(UploadFrequency))
    custom_endpoint = attr.ib(default=None, type=Optional[str])
    first_party_hosts = attr.ib(factory=list)
    tracing_header_types = attr.ib(default=DEFAULT_TRACING_HEADER_TYPES, converter=_header_types)
    trace_sample_rate = attr.ib(default=100.0, type=float, converter=float, validator=_percentage)
    rum_configuration = attr.ib(default=None, type=Optional[RumConfiguration])
    additional_config = attr.ib(factory=dict, type=Dict[str, Any])

    @tracing_header_types.validator
    def _check_tracing_header_types(self, attribute, value):
        if not value:
            raise ValueError("at least one tracing header type is required")

    @classmethod
    def from_env(cls):
        # type: () -> DatadogConfiguration
        """Build a configuration from ``DD_*`` environment variables.

        :raises pydantic.ValidationError: when a variable holds an invalid value.
        """
        config = SdkSettings()
        rum_configuration = None
        if config.rum.application_id:
            rum_configuration = RumConfiguration(
                application_id=config.rum.application_id,
                session_sample_rate=config.rum.session_sample_rate,
                tracing_sample_rate=config.rum.tracing_sample_rate,
            )
        return cls(
            client_token=config.client_token,
            env=config.env,
            site=config.site,
            service_name=config.service,
            tracking_consent=config.tracking_consent,
            native_crash_reporting_enabled=config.native_crash_reporting_enabled,
            first_party_hosts=config.first_party_host_list,
            tracing_header_types=config.tracing_header_type_list or DEFAULT_TRACING_HEADER_TYPES,
            trace_sample_rate=config.trace_sample_rate,
            rum_configuration=rum_configuration,
        )

    def build_first_party_hosts(self):
        # type: () -> FirstPartyHosts
        return FirstPartyHosts(self.first_party_hosts)

    def encode(self):
        # type: () -> Dict[str, Any]
        """Encode the configuration into the payload sent to the native SDK."""
        hosts = self.build_first_party_hosts()
        return {
            "clientToken": self.client_token,
            "env": self.env,
            "site": self.site.value,
            "serviceName": self.service_name,
            "trackingConsent": self.tracking_consent.value,
            "nativeCrashReportEnabled": self.native_crash_reporting_enabled,
            "batchSize": self.batch_size.value if self.batch_size else None,
            "uploadFrequency": self.upload_frequency.value if self.upload_frequency else None,
            "customEndpoint": self.custom_endpoint,
            "firstPartyHosts": [host for host, header_types in hosts.items() if not header_types],
            "firstPartyHostsWithTracingHeaders": {
                host: sorted(t.value for t in header_types) for host, header_types in hosts.items() if header_types
            },
            "tracingHeaderTypes": sorted(t.value for t in self.tracing_header_types),
            "traceSampleRate": self.trace_sample_rate,
            "rumConfiguration": self.rum_configuration.encode() if self.rum_configuration else None,
            "additionalConfig": dict(self.additional_config),
        }

    @classmethod
    def decode(cls, encoded):
        # type: (Dict[str, Any]) -> Optional[DatadogConfiguration]
        """Rebuild a configuration from the payload produced by :meth:`encode`.

        Returns ``None`` when the payload is missing required values or holds invalid ones.
        """
        try:
            first_party_hosts = list(encoded.get("firstPartyHosts") or [])
            hosts_with_headers = encoded.get("firstPartyHostsWithTracingHeaders")
            if hosts_with_headers:
                # hosts without types of their own map to no types
                first_party_hosts = {host: [] for host in first_party_hosts}
                first_party_hosts.update(hosts_with_headers)
            rum_encoded = encoded.get("rumConfiguration")
            rum_configuration = None
            if rum_encoded:
                rum_configuration = RumConfiguration(
                    application_id=rum_encoded["applicationId"],
                    session_sample_rate=rum_encoded.get("sampleRate", 100.0),
                    tracing_sample_rate=rum_encoded.get("tracingSampleRate", 20.0),
                )
            return cls(
                client_token=encoded["clientToken"],
                env=encoded["env"],
                site=encoded.get("site") or DatadogSite.US1,
                service_name=encoded.get("serviceName"),
                tracking_consent=encoded.get("trackingConsent") or TrackingConsent.PENDING,
                native_crash_reporting_enabled=bool(encoded.get("nativeCrashReportEnabled", False)),
                batch_size=encoded.get("batchSize"),
                upload_frequency=encoded.get("uploadFrequency"),
                custom_endpoint=encoded.get("customEndpoint"),
                first_party_hosts=first_party_hosts,
                tracing_header_types=encoded.get("tracingHeaderTypes") or DEFAULT_TRACING_HEADER_TYPES,
                trace_sample_rate=encoded.get("traceSampleRate", 100.0),
                rum_configuration=rum_configuration,
                additional_config=encoded.get("additionalConfig") or {},
            )
        except (KeyError, TypeError, ValueError):
            log.warning("received invalid configuration payload %r", encoded, exc_info=True)
            return None
