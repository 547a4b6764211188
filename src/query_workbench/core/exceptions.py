"""Exception hierarchy for Query Workbench.

All exceptions carry an exit_code for CLI return value mapping.
Transport and response-shape failures are turned into a synthetic
error result by the execution controller; the rest propagate.
"""

from enum import IntEnum


class ExitCode(IntEnum):
    """Process exit status of the CLI, one per error family."""

    SUCCESS = 0
    GENERAL_ERROR = 1
    USAGE_ERROR = 2  # click's own status for bad options
    INPUT_ERROR = 3
    TRANSPORT_ERROR = 5
    TIMEOUT = 6
    CONFIG_ERROR = 7
    MALFORMED_RESPONSE = 8


class WorkbenchError(Exception):
    """Base exception for all Query Workbench errors."""

    exit_code: int = ExitCode.GENERAL_ERROR

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ValidationError(WorkbenchError):
    """Empty query text, no query source."""

    exit_code: int = ExitCode.INPUT_ERROR


class TransportError(WorkbenchError):
    """Request failed, service unreachable, non-success status."""

    exit_code: int = ExitCode.TRANSPORT_ERROR


class TimeoutError(TransportError):
    """Transport-level timeout talking to the query service."""

    exit_code: int = ExitCode.TIMEOUT


class MalformedResponse(WorkbenchError):
    """Response decoded but does not have a recognized shape."""

    exit_code: int = ExitCode.MALFORMED_RESPONSE


class ConfigError(WorkbenchError):
    """Malformed config, missing profile."""

    exit_code: int = ExitCode.CONFIG_ERROR
