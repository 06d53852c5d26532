import mock
import pytest

from datadog_tracking_http_client.internal import logger as internal_logger
from datadog_tracking_http_client.rum import DdRumPlatform
from datadog_tracking_http_client.sdk import DatadogSdk
from datadog_tracking_http_client.sdk import DatadogSdkPlatform
from datadog_tracking_http_client.traces import DdTracesPlatform

from .utils import make_configuration


@pytest.fixture(autouse=True)
def reset_log_buckets():
    # Warnings logged from the same line in different tests must not be rate limited
    internal_logger._buckets.clear()
    yield
    internal_logger._buckets.clear()


@pytest.fixture
def sdk_platform():
    return mock.Mock(spec=DatadogSdkPlatform)


@pytest.fixture
def rum_platform():
    return mock.Mock(spec=DdRumPlatform)


@pytest.fixture
def traces_platform():
    return mock.Mock(spec=DdTracesPlatform)


@pytest.fixture
def make_sdk(sdk_platform, rum_platform, traces_platform):
    def _make_sdk(**kwargs):
        sdk = DatadogSdk(sdk_platform, rum_platform=rum_platform, traces_platform=traces_platform)
        sdk.initialize(make_configuration(**kwargs))
        return sdk

    return _make_sdk


@pytest.fixture
def sdk(make_sdk):
    return make_sdk()
