"""Shared test fixtures for Query Workbench."""

import json
from pathlib import Path
from tempfile import TemporaryDirectory

import httpx
import pytest
from typer.testing import CliRunner

from query_workbench.cli.main import app
from query_workbench.core.client import QueryServiceClient
from query_workbench.core.config import ResolvedConfig


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch):
    """Keep user environment out of config resolution."""
    for var in (
        "QUERY_WORKBENCH_URL",
        "QUERY_WORKBENCH_TIMEOUT",
        "QUERY_WORKBENCH_PROFILE",
        "QUERY_WORKBENCH_SENTRY_DSN",
        "QUERY_WORKBENCH_LOG_LEVEL",
        "SENTRY_DSN",
    ):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def runner():
    """Typer CLI test runner."""
    return CliRunner()


@pytest.fixture
def cli_runner(runner):
    """Invoke the CLI app with the given arguments."""

    def invoke(*args: str, **kwargs):
        return runner.invoke(app, list(args), **kwargs)

    return invoke


@pytest.fixture
def temp_dir():
    """Temporary directory for test files."""
    with TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def config():
    return ResolvedConfig(progress_interval=0.01)


class FakeService:
    """In-process stand-in for the query service.

    Set ``result`` to the payload returned under "result", or
    ``response`` to a full httpx.Response. Sent queries are recorded in
    ``queries``.
    """

    def __init__(self):
        self.result = [["n"], [1]]
        self.response = None
        self.queries = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.queries.append(json.loads(request.content)["query"])
        if self.response is not None:
            return self.response
        return httpx.Response(200, json={"result": self.result})

    @property
    def transport(self):
        return httpx.MockTransport(self.handler)


@pytest.fixture
def service():
    return FakeService()


@pytest.fixture
def client(config, service):
    return QueryServiceClient(config, transport=service.transport)
