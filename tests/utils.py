import contextlib
import os

from datadog_tracking_http_client.configuration import DatadogConfiguration
from datadog_tracking_http_client.configuration import RumConfiguration


@contextlib.contextmanager
def override_env(env, replace_os_env=False):
    """
    Temporarily override ``os.environ`` with provided values::

        >>> with override_env(dict(DD_TRACE_SAMPLE_RATE="50")):
            # Your test
    """
    # Copy the full original environment
    original = dict(os.environ)

    # We allow callers to clear out the environment to prevent leaking variables into the test
    if replace_os_env:
        os.environ.clear()

    for k in list(os.environ.keys()):
        if k.startswith(("DD_RUM_", "DD_SITE", "DD_FIRST_PARTY_HOSTS", "DD_TRACING_HEADER_TYPES")):
            del os.environ[k]

    # Update based on the passed in arguments
    os.environ.update(env)
    try:
        yield
    finally:
        # Full clear the environment out and reset back to the original
        os.environ.clear()
        os.environ.update(original)


def make_configuration(**kwargs):
    """Return a RUM enabled configuration tracing ``example.com`` and ``test_url``."""
    values = dict(
        client_token="fake-client-token",
        env="prod",
        first_party_hosts=["example.com", "test_url"],
        rum_configuration=RumConfiguration(application_id="fake-application-id", tracing_sample_rate=100.0),
    )
    values.update(kwargs)
    return DatadogConfiguration(**values)
