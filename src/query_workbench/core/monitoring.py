"""Sentry integration for error tracking and performance monitoring.

Sentry is only initialized when a DSN is configured (SENTRY_DSN or
QUERY_WORKBENCH_SENTRY_DSN); otherwise the SDK stays a no-op.
"""

import atexit
import os

import sentry_sdk

from query_workbench.__about__ import __version__


def setup_sentry(environment: str = "local") -> bool:
    """Initialize Sentry when a DSN is available. Returns True if enabled."""
    dsn = os.environ.get("QUERY_WORKBENCH_SENTRY_DSN") or os.environ.get("SENTRY_DSN")
    if not dsn:
        return False
    sentry_sdk.init(
        dsn=dsn,
        traces_sample_rate=0.03,
        environment=environment,
        release=__version__,
        attach_stacktrace=True,
        send_default_pii=False,
    )
    return True


def start_command_transaction(command: str | None) -> None:
    """Open a Sentry transaction for one CLI invocation, closed at exit."""
    transaction = sentry_sdk.start_transaction(
        op="cli", name=command or "query-workbench"
    )
    transaction.__enter__()

    def finish() -> None:
        transaction.__exit__(None, None, None)
        sentry_sdk.flush(timeout=2)

    atexit.register(finish)
