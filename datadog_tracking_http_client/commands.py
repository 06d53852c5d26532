"""Typed commands sent from the application to the native SDK.

Bridge calls arrive as a method name and a mapping of arguments. They are
decoded once, at the boundary, into one of a closed set of frozen command
classes so that the rest of the SDK never dispatches on strings::

    command = decode_method_call("setTrackingConsent", {"value": "granted"})
    sdk.handle(command)
"""
from typing import Any
from typing import Dict
from typing import Mapping
from typing import Optional
from typing import Union

import attr

from .configuration import TrackingConsent
from .configuration import Verbosity
from .errors import InvalidOperationError
from .errors import MethodNotImplementedError
from .errors import MissingParameterError


@attr.s(frozen=True)
class Initialize(object):
    configuration = attr.ib(type=Dict[str, Any])
    set_log_callback = attr.ib(default=False, type=bool)


@attr.s(frozen=True)
class SetSdkVerbosity(object):
    verbosity = attr.ib(converter=Verbosity)


@attr.s(frozen=True)
class SetUserInfo(object):
    id = attr.ib(default=None, type=Optional[str])
    name = attr.ib(default=None, type=Optional[str])
    email = attr.ib(default=None, type=Optional[str])
    extra_info = attr.ib(factory=dict, type=Dict[str, Any])


@attr.s(frozen=True)
class SetTrackingConsent(object):
    tracking_consent = attr.ib(converter=TrackingConsent)


@attr.s(frozen=True)
class TelemetryDebug(object):
    message = attr.ib(type=str)


@attr.s(frozen=True)
class TelemetryError(object):
    message = attr.ib(type=str)
    stack = attr.ib(default=None, type=Optional[str])
    kind = attr.ib(default=None, type=Optional[str])


Command = Union[Initialize, SetSdkVerbosity, SetUserInfo, SetTrackingConsent, TelemetryDebug, TelemetryError]

COMMAND_TYPES = (Initialize, SetSdkVerbosity, SetUserInfo, SetTrackingConsent, TelemetryDebug, TelemetryError)


def _required(method, arguments, name, type_):
    # type: (str, Mapping[str, Any], str, type) -> Any
    value = arguments.get(name)
    if not isinstance(value, type_):
        raise MissingParameterError(method, name)
    return value


def _optional_str(arguments, name):
    # type: (Mapping[str, Any], str) -> Optional[str]
    value = arguments.get(name)
    return value if isinstance(value, str) else None


def _decode_initialize(method, arguments):
    return Initialize(
        configuration=_required(method, arguments, "configuration", Mapping),
        set_log_callback=arguments.get("setLogCallback") is True,
    )


def _decode_set_sdk_verbosity(method, arguments):
    value = _required(method, arguments, "value", str)
    try:
        return SetSdkVerbosity(value)
    except ValueError:
        raise MissingParameterError(method, "value")


def _decode_set_user_info(method, arguments):
    return SetUserInfo(
        id=_optional_str(arguments, "id"),
        name=_optional_str(arguments, "name"),
        email=_optional_str(arguments, "email"),
        extra_info=dict(_required(method, arguments, "extraInfo", Mapping)),
    )


def _decode_set_tracking_consent(method, arguments):
    value = _required(method, arguments, "value", str)
    try:
        return SetTrackingConsent(value)
    except ValueError:
        raise MissingParameterError(method, "value")


def _decode_telemetry_debug(method, arguments):
    return TelemetryDebug(message=_required(method, arguments, "message", str))


def _decode_telemetry_error(method, arguments):
    return TelemetryError(
        message=_required(method, arguments, "message", str),
        stack=_optional_str(arguments, "stack"),
        kind=_optional_str(arguments, "kind"),
    )


_DECODERS = {
    "initialize": _decode_initialize,
    "setSdkVerbosity": _decode_set_sdk_verbosity,
    "setUserInfo": _decode_set_user_info,
    "setTrackingConsent": _decode_set_tracking_consent,
    "telemetryDebug": _decode_telemetry_debug,
    "telemetryError": _decode_telemetry_error,
}


def decode_method_call(method, arguments):
    # type: (str, Any) -> Command
    """Decode a bridge method call into a typed command.

    :raises InvalidOperationError: when ``arguments`` is not a mapping.
    :raises MissingParameterError: when a required argument is missing or invalid.
    :raises MethodNotImplementedError: when ``method`` is unknown.
    """
    if not isinstance(arguments, Mapping):
        raise InvalidOperationError(method, "No arguments in call to %s" % method)

    decoder = _DECODERS.get(method)
    if decoder is None:
        raise MethodNotImplementedError(method)
    return decoder(method, arguments)
