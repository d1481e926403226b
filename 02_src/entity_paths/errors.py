"""Error types raised on caller or upstream-data bugs."""


class PreconditionError(ValueError):
    """Base class for malformed input that aborts the current operation."""


class InvalidVertex(PreconditionError):
    pass


class InvalidDepth(PreconditionError):
    pass


class InvalidName(PreconditionError):
    pass


class CycleDetected(PreconditionError):
    pass


class InvalidPath(PreconditionError):
    pass


class InvalidDelimiter(PreconditionError):
    pass


class MalformedPair(PreconditionError):
    pass


class MalformedRow(PreconditionError):
    pass


class FanOutError(PreconditionError):
    pass


class InputError(PreconditionError):
    """An input file cannot be opened, decoded or parsed."""


class OutputError(PreconditionError):
    """A result or edge-list file cannot be written."""


class ConfigError(ValueError):
    """Configuration file is missing, unreadable or fails validation."""
