"""Exception hierarchy for logtally."""


class LogTallyError(Exception):
    """Base class for all logtally errors."""


class MalformedLineError(LogTallyError):
    """A log line does not match the ``<address>:<yyyy-MM-dd HH:mm:ss>`` grammar.

    Attributes:
        line: The offending raw line.
        reason: Short description of what was wrong.
    """

    def __init__(self, line: str, reason: str) -> None:
        super().__init__(f"{reason}: {line!r}")
        self.line = line
        self.reason = reason


class ConfigError(LogTallyError):
    """Run configuration is missing a value or holds an invalid one."""


class InputNotFoundError(ConfigError):
    """The input log path does not exist or is not a regular file."""
