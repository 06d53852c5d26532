import logging

import mock
import pytest

from datadog_tracking_http_client.commands import decode_method_call
from datadog_tracking_http_client.configuration import TrackingConsent
from datadog_tracking_http_client.configuration import Verbosity
from datadog_tracking_http_client.internal.constants import TracingHeaderType
from datadog_tracking_http_client.internal.logger import ROOT_LOGGER_NAME
from datadog_tracking_http_client.rum import DdRum
from datadog_tracking_http_client.sdk import DatadogSdk
from datadog_tracking_http_client.traces import DdTraces

from .utils import make_configuration


@pytest.fixture
def root_logger_level():
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    level = logger.level
    yield
    logger.setLevel(level)


def test_not_initialized(sdk_platform):
    sdk = DatadogSdk(sdk_platform)
    assert not sdk.initialized
    assert sdk.rum is None
    assert sdk.traces is None
    assert not sdk.is_first_party_host("https://example.com")
    assert sdk.trace_sampler.sample_rate == 100.0
    assert sdk.tracing_header_types == frozenset([TracingHeaderType.DATADOG])


def test_initialize(sdk_platform, rum_platform, traces_platform):
    configuration = make_configuration(trace_sample_rate=30)
    sdk = DatadogSdk(sdk_platform, rum_platform=rum_platform, traces_platform=traces_platform)
    sdk.initialize(configuration)

    sdk_platform.initialize.assert_called_once_with(configuration.encode(), None)
    assert sdk.initialized
    assert sdk.configuration is configuration
    assert isinstance(sdk.rum, DdRum)
    assert isinstance(sdk.traces, DdTraces)
    assert sdk.trace_sampler.sample_rate == 30.0
    assert sdk.is_first_party_host("https://api.example.com/")
    assert sdk.is_first_party_host("https://test_url/test")
    assert not sdk.is_first_party_host("https://non_first_party/test")
    assert sdk.header_types_for("https://example.com") == frozenset()
    assert sdk.tracing_header_types == frozenset([TracingHeaderType.DATADOG])


def test_tracing_header_types(sdk_platform):
    sdk = DatadogSdk(sdk_platform)
    sdk.initialize(
        make_configuration(
            first_party_hosts={"example.com": ["b3"], "test_url": []},
            tracing_header_types=[TracingHeaderType.B3MULTI],
        )
    )
    assert sdk.tracing_header_types == frozenset([TracingHeaderType.B3MULTI])
    assert sdk.header_types_for("https://api.example.com") == frozenset([TracingHeaderType.B3])
    assert sdk.header_types_for("https://test_url/test") == frozenset()

def test_initialize_without_rum(sdk_platform, rum_platform):
    sdk = DatadogSdk(sdk_platform, rum_platform=rum_platform)
    sdk.initialize(make_configuration(rum_configuration=None))
    assert sdk.rum is None
    assert sdk.traces is None


def test_initialize_without_rum_platform(sdk_platform, caplog):
    sdk = DatadogSdk(sdk_platform)
    with caplog.at_level(logging.WARNING):
        sdk.initialize(make_configuration())
    assert sdk.rum is None
    assert "no RUM platform was provided" in caplog.text


def test_initialize_twice(sdk, sdk_platform, caplog):
    configuration = sdk.configuration

    # Same configuration is silently ignored
    with caplog.at_level(logging.WARNING):
        sdk.initialize(make_configuration())
    assert caplog.text == ""

    with caplog.at_level(logging.WARNING):
        sdk.initialize(make_configuration(env="staging"))
    assert "Reinitializing the DatadogSdk with different options is not supported" in caplog.text

    assert sdk.configuration is configuration
    assert sdk_platform.initialize.call_count == 1


def test_set_sdk_verbosity(sdk, sdk_platform, root_logger_level):
    sdk.set_sdk_verbosity("debug")
    sdk_platform.set_sdk_verbosity.assert_called_once_with(Verbosity.DEBUG)
    assert logging.getLogger(ROOT_LOGGER_NAME).level == logging.DEBUG

    sdk.set_sdk_verbosity(Verbosity.NONE)
    assert logging.getLogger(ROOT_LOGGER_NAME).level > logging.CRITICAL


def test_set_user_info(sdk, sdk_platform):
    sdk.set_user_info(id="abc", extra_info={"plan": "pro"})
    sdk_platform.set_user_info.assert_called_once_with("abc", None, None, {"plan": "pro"})


def test_set_tracking_consent(sdk, sdk_platform):
    sdk.set_tracking_consent("granted")
    sdk_platform.set_tracking_consent.assert_called_once_with(TrackingConsent.GRANTED)


def test_handle_initialize(sdk_platform, rum_platform):
    configuration = make_configuration()
    sdk = DatadogSdk(sdk_platform, rum_platform=rum_platform)

    sdk.handle(decode_method_call("initialize", {"configuration": configuration.encode(), "setLogCallback": True}))

    assert sdk.initialized
    assert sdk.is_first_party_host("https://example.com")
    encoded, log_callback = sdk_platform.initialize.call_args[0]
    assert encoded == configuration.encode()
    assert callable(log_callback)


def test_handle_initialize_invalid_configuration(sdk_platform):
    sdk = DatadogSdk(sdk_platform)
    sdk.handle(decode_method_call("initialize", {"configuration": {"env": "prod"}}))
    assert not sdk.initialized
    sdk_platform.initialize.assert_not_called()


@pytest.mark.parametrize(
    "method,arguments,platform_method,expected",
    [
        ("setTrackingConsent", {"value": "pending"}, "set_tracking_consent", (TrackingConsent.PENDING,)),
        (
            "setUserInfo",
            {"id": "abc", "name": "Name", "email": "a@b.c", "extraInfo": {}},
            "set_user_info",
            ("abc", "Name", "a@b.c", {}),
        ),
        ("telemetryDebug", {"message": "hello"}, "telemetry_debug", ("hello",)),
        ("telemetryError", {"message": "boom", "stack": "trace"}, "telemetry_error", ("boom", "trace", None)),
    ],
)
def test_handle(sdk, sdk_platform, method, arguments, platform_method, expected):
    sdk.handle(decode_method_call(method, arguments))
    getattr(sdk_platform, platform_method).assert_called_once_with(*expected)


def test_handle_set_sdk_verbosity(sdk, sdk_platform, root_logger_level):
    sdk.handle(decode_method_call("setSdkVerbosity", {"value": "error"}))
    sdk_platform.set_sdk_verbosity.assert_called_once_with(Verbosity.ERROR)
    assert logging.getLogger(ROOT_LOGGER_NAME).level == logging.ERROR


def test_handle_unknown_command(sdk):
    with pytest.raises(TypeError):
        sdk.handle(mock.Mock())
