"""Fixtures for module tests using WireMock testcontainers."""

from collections.abc import Generator

import docker
import pytest
from docker.errors import DockerException
from testcontainers.core import testcontainers_config
from wiremock.constants import Config
from wiremock.testing.testcontainer import WireMockContainer


@pytest.fixture(scope="session", autouse=True)
def _disable_ryuk() -> None:
    """Disable the extra cleanup instance, we use contexts to clean containers."""
    testcontainers_config.ryuk_disabled = True


@pytest.fixture(scope="session")
def _docker_available() -> None:
    """Skip module tests when no Docker daemon is reachable."""
    try:
        docker.from_env().ping()
    except DockerException as e:
        pytest.skip(f"Docker is not available: {e}")


@pytest.fixture(scope="session")
def wiremock_server(
    _docker_available: None,
) -> Generator[WireMockContainer, None, None]:
    """Start WireMock container using wiremock's testcontainer support."""
    with WireMockContainer(secure=False) as wm:
        Config.base_url = wm.get_url("__admin")
        yield wm
        print(wm.get_logs())


@pytest.fixture(scope="session")
def wiremock_url(wiremock_server: WireMockContainer) -> str:
    """Base URL of the WireMock server as seen from the host."""
    return wiremock_server.get_url("__admin").removesuffix("/__admin")
