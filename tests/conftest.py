import pytest
import respx
from httpx import Response

from acube_mcp.client import AcubeClient

COMMON = "https://common-sandbox.api.acubeapi.com"
API = "https://api-sandbox.acubeapi.com"


class FakeClock:
    def __init__(self, now: float = 1_700_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def client(clock):
    return AcubeClient(
        email="user@example.com", password="secret", environment="sandbox", clock=clock
    )


@pytest.fixture
def api():
    """respx router with a successful login already mocked."""
    with respx.mock(assert_all_called=False) as router:
        router.post(f"{COMMON}/login", name="login").mock(
            return_value=Response(200, json={"token": "jwt-token"})
        )
        yield router
