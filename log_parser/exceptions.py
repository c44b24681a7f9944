"""
Exception classes for the access log parser.

All exceptions inherit from LogParserError and carry a machine readable
code, a message and optional details for diagnostics.
"""


class LogParserError(Exception):
    """Base exception for all parser job errors."""

    def __init__(self, code, message, details=None):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __repr__(self):
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"

    def to_dict(self):
        """Convert exception to dictionary for serialization."""
        return {
            "error_type": self.__class__.__name__,
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }


class ConfigurationError(LogParserError):
    """Raised when job arguments are missing or malformed."""

    pass


class ParseError(LogParserError):
    """Raised when input cannot be turned into a record."""

    pass


class MalformedLineError(ParseError):
    """Raised when a line does not split into exactly five fields."""

    def __init__(self, message, details=None):
        super().__init__("malformed_line", message, details)


class MalformedTimestampError(ParseError):
    """Raised when a date field does not match YYYY-MM-DD.HH:MM:SS."""

    def __init__(self, message, details=None):
        super().__init__("malformed_timestamp", message, details)


class UnsupportedDurationError(ParseError, ConfigurationError):
    """Raised for a window unit other than hourly or daily."""

    def __init__(self, message, details=None):
        super().__init__("unsupported_duration", message, details)


class StoreError(LogParserError):
    """Raised when the log store cannot be reset, written or queried."""

    pass


class PersistenceError(LogParserError):
    """Raised when a blocked entry cannot be written to the audit table."""

    pass


class PipelineError(LogParserError):
    """Raised when a pipeline run fails; names the phase that failed."""

    def __init__(self, phase, cause):
        self.phase = phase
        self.cause = cause
        details = {"phase": phase}
        if isinstance(cause, LogParserError):
            details["cause"] = cause.to_dict()
        else:
            details["cause"] = {"error_type": type(cause).__name__, "message": str(cause)}
        super().__init__(
            "pipeline_failed",
            f"{phase} failed: {cause}",
            details,
        )
