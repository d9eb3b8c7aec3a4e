import pytest
from fastapi.testclient import TestClient

from productcompare.api.deps import get_settings, get_vendor_client
from productcompare.core.config import Settings
from productcompare.core.errors import UpstreamFailure
from productcompare.main import create_app


class FakeVendorClient:
    """Stands in for ScrapingDogClient; answers from a dict keyed by ASIN."""

    def __init__(self, products=None, failures=None):
        self.products = products or {}
        self.failures = failures or {}
        self.calls = []

    async def fetch_product(self, asin):
        self.calls.append(asin)
        if asin in self.failures:
            raise self.failures[asin]
        if asin not in self.products:
            raise UpstreamFailure(details={"message": f"unknown asin {asin}"}, vendor_status=404)
        return self.products[asin]


@pytest.fixture
def test_settings():
    return Settings(SCRAPINGDOG_API_KEY="test-key", _env_file=None)


@pytest.fixture
def fake_vendor():
    return FakeVendorClient()


@pytest.fixture
def app(fake_vendor, test_settings):
    app = create_app()
    app.dependency_overrides[get_vendor_client] = lambda: fake_vendor
    app.dependency_overrides[get_settings] = lambda: test_settings
    return app


@pytest.fixture
def client(app):
    return TestClient(app)
