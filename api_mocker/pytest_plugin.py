from __future__ import annotations

from typing import Iterator

import pytest

from api_mocker.client import Client
from api_mocker.config import settings


def pytest_addoption(parser: pytest.Parser) -> None:
    group = parser.getgroup("api-mocker")
    group.addoption(
        "--api-mocker-url",
        default=None,
        help="Base URL of the mock server (defaults to API_MOCKER_URL)",
    )


@pytest.fixture(scope="session")
def api_mocker_url(request: pytest.FixtureRequest) -> str:
    return request.config.getoption("--api-mocker-url") or settings.url


@pytest.fixture
def api_mocker(api_mocker_url: str) -> Iterator[Client]:
    """
    Client bound to the mock server with clean state.
    Fails the test on teardown if expectations were not met or unexpected calls arrived.
    """
    client = Client(api_mocker_url)
    client.clear()
    yield client
    client.verify()
