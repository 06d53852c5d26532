class IdentifierParseError(ValueError):
    """Raised when a trace or span identifier cannot be parsed."""


class CommandError(Exception):
    """Base class for errors raised while decoding a bridge method call."""

    code = "DatadogSdk:Error"

    def __init__(self, method, message):
        # type: (str, str) -> None
        super(CommandError, self).__init__(message)
        self.method = method
        self.message = message


class InvalidOperationError(CommandError):
    code = "DatadogSdk:InvalidOperation"


class MissingParameterError(CommandError):
    code = "DatadogSdk:MissingParameter"

    def __init__(self, method, parameter):
        # type: (str, str) -> None
        super(MissingParameterError, self).__init__(
            method, "Missing parameter %r in call to %s" % (parameter, method)
        )
        self.parameter = parameter


class MethodNotImplementedError(CommandError):
    code = "DatadogSdk:NotImplemented"

    def __init__(self, method):
        # type: (str) -> None
        super(MethodNotImplementedError, self).__init__(method, "Method %s is not implemented" % method)
