import asyncio

import httpx
import pytest

from productcompare.core.config import Settings
from productcompare.core.errors import ConfigurationError, UpstreamFailure
from productcompare.core.scrapingdog import ScrapingDogClient, _redact_key, get_scrapingdog_key


def make_client(handler):
    return ScrapingDogClient("test-key", transport=httpx.MockTransport(handler))


def fetch(client, asin="B07ZPKN6YR"):
    return asyncio.run(client.fetch_product(asin))


def test_sends_expected_query():
    seen = {}

    def handler(request):
        seen["url"] = request.url
        return httpx.Response(200, json={"title": "Echo Dot"})

    data = fetch(make_client(handler))

    assert data == {"title": "Echo Dot"}
    assert seen["url"].host == "api.scrapingdog.com"
    assert seen["url"].path == "/amazon/product"
    params = seen["url"].params
    assert params["api_key"] == "test-key"
    assert params["asin"] == "B07ZPKN6YR"
    assert params["domain"] == "com"
    assert params["country"] == "us"


def test_non_2xx_is_upstream_failure_with_vendor_body():
    body = {"success": False, "message": "Invalid API key"}
    client = make_client(lambda request: httpx.Response(401, json=body))

    with pytest.raises(UpstreamFailure) as exc:
        fetch(client)

    assert exc.value.details == body
    assert exc.value.vendor_status == 401
    assert exc.value.status_code == 500


def test_non_2xx_text_body_is_redacted():
    client = make_client(lambda request: httpx.Response(502, text="bad gateway for api_key=test-key"))

    with pytest.raises(UpstreamFailure) as exc:
        fetch(client)

    assert "test-key" not in exc.value.details


def test_malformed_body_is_upstream_failure():
    client = make_client(lambda request: httpx.Response(200, text="<html>captcha</html>"))
    with pytest.raises(UpstreamFailure):
        fetch(client)

    client = make_client(lambda request: httpx.Response(200, json=["not", "an", "object"]))
    with pytest.raises(UpstreamFailure):
        fetch(client)


def test_error_payload_is_upstream_failure():
    client = make_client(lambda request: httpx.Response(200, json={"error": "quota exceeded"}))
    with pytest.raises(UpstreamFailure) as exc:
        fetch(client)
    assert exc.value.details == {"error": "quota exceeded"}


def test_network_error_is_upstream_failure():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(UpstreamFailure) as exc:
        fetch(make_client(handler))

    assert "connection refused" in exc.value.details
    assert exc.value.vendor_status is None


def test_missing_title_is_passed_through():
    # deciding what "no title" means is the normalizer's job
    client = make_client(lambda request: httpx.Response(200, json={"price": "$5"}))
    assert fetch(client) == {"price": "$5"}


def test_empty_key_is_configuration_error():
    with pytest.raises(ConfigurationError):
        ScrapingDogClient("")


def test_key_from_settings_then_env(monkeypatch):
    monkeypatch.delenv("API_KEY", raising=False)
    assert get_scrapingdog_key(Settings(SCRAPINGDOG_API_KEY="from-settings", _env_file=None)) == "from-settings"

    empty = Settings(SCRAPINGDOG_API_KEY="", _env_file=None)
    with pytest.raises(ConfigurationError):
        get_scrapingdog_key(empty)

    monkeypatch.setenv("API_KEY", "from-env")
    assert get_scrapingdog_key(empty) == "from-env"


def test_api_key_name_from_dotenv(tmp_path, monkeypatch):
    monkeypatch.delenv("API_KEY", raising=False)
    monkeypatch.delenv("SCRAPINGDOG_API_KEY", raising=False)
    env_file = tmp_path / ".env"
    env_file.write_text("API_KEY=from-dotenv\n", encoding="utf-8")

    client = ScrapingDogClient.from_settings(Settings(_env_file=env_file))

    assert client.api_key == "from-dotenv"


def test_scrapingdog_key_name_from_dotenv(tmp_path, monkeypatch):
    monkeypatch.delenv("API_KEY", raising=False)
    monkeypatch.delenv("SCRAPINGDOG_API_KEY", raising=False)
    env_file = tmp_path / ".env"
    env_file.write_text("SCRAPINGDOG_API_KEY=primary\n", encoding="utf-8")

    assert get_scrapingdog_key(Settings(_env_file=env_file)) == "primary"


def test_from_settings_uses_configured_endpoint():
    cfg = Settings(
        SCRAPINGDOG_API_KEY="k",
        SCRAPINGDOG_DOMAIN="co.uk",
        SCRAPINGDOG_COUNTRY="gb",
        SCRAPINGDOG_TIMEOUT=5,
        _env_file=None,
    )
    client = ScrapingDogClient.from_settings(cfg)
    assert (client.api_key, client.domain, client.country, client.timeout) == ("k", "co.uk", "gb", 5)


def test_redact_key():
    assert _redact_key("https://x/y?api_key=secret&asin=1") == "https://x/y?api_key=REDACTED&asin=1"
