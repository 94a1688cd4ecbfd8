"""Exception hierarchy for the score streams service."""


class StreamboardError(Exception):
    """Base class for all errors raised by this package."""


class MalformedRecordError(StreamboardError):
    """A decoded field list could not be turned into a Record."""


class SchemaError(StreamboardError):
    """Schema string or field list does not match the schema layout."""


class ConfigError(StreamboardError):
    """Required configuration is missing or invalid."""


class StreamsError(StreamboardError):
    """A call to the streams network failed."""


class StreamsRpcError(StreamsError):
    """JSON-RPC error returned by the chain node."""

    def __init__(self, message: str, code: int | None = None, data=None):
        super().__init__(message)
        self.code = code
        self.data = data


class SchemaAlreadyRegisteredError(StreamsError):
    """The schema being registered already exists on chain."""


class InvalidAddressError(SchemaError):
    """A caller-supplied value is not a 20-byte hex address."""
