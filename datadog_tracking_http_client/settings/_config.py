import typing as t

from pydantic import Field
from pydantic_settings import BaseSettings
from pydantic_settings import SettingsConfigDict

from ..internal.constants import PROPAGATION_STYLE_ALL
from ..internal.constants import TracingHeaderType
from ..internal.logger import get_logger


log = get_logger(__name__)

Site = t.Literal["us1", "us3", "us5", "eu1", "us1_fed", "ap1"]
TrackingConsentValue = t.Literal["granted", "notGranted", "pending"]


def _parse_list(value):
    # type: (t.Union[str, None]) -> t.List[str]
    if not isinstance(value, str):
        return []

    fragments = [s.strip() for s in value.split(",")]
    return [f for f in fragments if f != ""]


def _parse_tracing_header_types(value):
    # type: (t.Union[str, None]) -> t.List[TracingHeaderType]
    """Helper to parse tracing header types via env variables.

    The expected format is::

        <type>[,<type>...]

    The allowed values are ``"datadog"``, ``"b3"`` (single header) and ``"b3multi"``.
    Unknown values are logged and ignored.

    Examples::

        # Inject datadog and b3 single header into first-party requests
        DD_TRACING_HEADER_TYPES="datadog,b3"
    """
    header_types = []
    for style in _parse_list(value):
        style = style.lower()
        try:
            header_types.append(TracingHeaderType(style))
        except ValueError:
            log.warning(
                "Unknown DD_TRACING_HEADER_TYPES: %r, allowed values are %r",
                style,
                [s.value for s in PROPAGATION_STYLE_ALL],
            )
    return header_types


class RumSettings(BaseSettings):
    """``DD_RUM_*`` environment variables."""

    model_config = SettingsConfigDict(env_prefix="DD_RUM_", extra="ignore")

    application_id: t.Optional[str] = None
    session_sample_rate: float = Field(default=100.0, ge=0.0, le=100.0)
    # Percentage of traced RUM resources that are kept
    tracing_sample_rate: float = Field(default=20.0, ge=0.0, le=100.0)


class SdkSettings(BaseSettings):
    """``DD_*`` environment variables read by :meth:`DatadogConfiguration.from_env`.

    List values are comma separated strings, e.g.
    ``DD_FIRST_PARTY_HOSTS="example.com,api.example.org"``.
    """

    model_config = SettingsConfigDict(env_prefix="DD_", extra="ignore")

    client_token: str = ""
    env: str = "prod"
    service: t.Optional[str] = None
    site: Site = "us1"
    tracking_consent: TrackingConsentValue = "pending"
    # Hosts whose requests are traced and tracked as RUM resources
    first_party_hosts: str = ""
    # Tracing header formats injected into first-party requests
    tracing_header_types: str = TracingHeaderType.DATADOG.value
    # Percentage of first-party requests that get tracing headers
    trace_sample_rate: float = Field(default=100.0, ge=0.0, le=100.0)
    native_crash_reporting_enabled: bool = False

    rum: RumSettings = Field(default_factory=RumSettings)

    @property
    def first_party_host_list(self):
        # type: () -> t.List[str]
        return _parse_list(self.first_party_hosts)

    @property
    def tracing_header_type_list(self):
        # type: () -> t.List[TracingHeaderType]
        return _parse_tracing_header_types(self.tracing_header_types)
