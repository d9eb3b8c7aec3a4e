import logging
import os
import re
from typing import Any, Dict, Optional

import httpx

from productcompare.core.config import Settings, settings as default_settings
from productcompare.core.errors import ConfigurationError, UpstreamFailure

logger = logging.getLogger(__name__)

SCRAPINGDOG_PRODUCT_URL = "https://api.scrapingdog.com/amazon/product"


def _redact_key(s: str) -> str:
    """
    Redact 'api_key=...' in URLs or text so we never leak API keys in logs/responses.
    """
    if not s:
        return s
    return re.sub(r"(api_key=)([^&\s]+)", r"\1REDACTED", s)


def get_scrapingdog_key(cfg: Optional[Settings] = None) -> str:
    # Prefer pydantic settings, fallback to the API_KEY env var of older deployments
    cfg = cfg or default_settings
    key = (getattr(cfg, "SCRAPINGDOG_API_KEY", "") or "").strip()
    if not key:
        key = (os.environ.get("API_KEY", "") or "").strip()
    if not key:
        raise ConfigurationError(
            "Server configuration error",
            details="SCRAPINGDOG_API_KEY is not set",
        )
    return key


def _error_details(resp: httpx.Response) -> Any:
    try:
        return resp.json()
    except ValueError:
        return _redact_key(resp.text)[:2000]


class ScrapingDogClient:
    """
    Thin async client for the ScrapingDog Amazon product endpoint.

    The API key is passed in explicitly; `from_settings` builds one from the
    process settings. `transport` lets tests swap in an httpx.MockTransport.
    """

    def __init__(
        self,
        api_key: str,
        *,
        base_url: str = SCRAPINGDOG_PRODUCT_URL,
        domain: str = "com",
        country: str = "us",
        timeout: float = 60.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        if not api_key:
            raise ConfigurationError("Server configuration error", details="SCRAPINGDOG_API_KEY is not set")
        self.api_key = api_key
        self.base_url = base_url
        self.domain = domain
        self.country = country
        self.timeout = timeout
        self.transport = transport

    @classmethod
    def from_settings(cls, cfg: Optional[Settings] = None) -> "ScrapingDogClient":
        cfg = cfg or default_settings
        return cls(
            get_scrapingdog_key(cfg),
            base_url=cfg.SCRAPINGDOG_BASE_URL,
            domain=cfg.SCRAPINGDOG_DOMAIN,
            country=cfg.SCRAPINGDOG_COUNTRY,
            timeout=cfg.SCRAPINGDOG_TIMEOUT,
        )

    async def fetch_product(self, asin: str) -> Dict[str, Any]:
        """
        Calls the product endpoint for one ASIN and returns the raw JSON object.

        Raises UpstreamFailure on transport errors, non-2xx answers, bodies that
        are not a JSON object, and error payloads.
        """
        params: Dict[str, Any] = {
            "api_key": self.api_key,
            "asin": asin,
            "domain": self.domain,
            "country": self.country,
        }

        logger.info("Fetching product data for ASIN: %s", asin)

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                r = await client.get(self.base_url, params=params)
                try:
                    r.raise_for_status()
                except httpx.HTTPStatusError:
                    details = _error_details(r)
                    logger.error(
                        "ScrapingDog API error for %s (status %s): %s",
                        asin,
                        r.status_code,
                        details,
                    )
                    raise UpstreamFailure(details=details, vendor_status=r.status_code)

                try:
                    data = r.json()
                except ValueError:
                    logger.error("ScrapingDog returned a non-JSON body for %s", asin)
                    raise UpstreamFailure(details="Vendor returned a malformed response body", vendor_status=r.status_code)
        except httpx.HTTPError as e:
            message = _redact_key(str(e)) or e.__class__.__name__
            logger.error("Error fetching product data for %s: %s", asin, message)
            raise UpstreamFailure(details=message)

        if not isinstance(data, dict):
            raise UpstreamFailure(details="Vendor returned a malformed response body")

        # An error payload on a 2xx answer is still a vendor failure
        if data.get("error") and not data.get("title"):
            logger.error("ScrapingDog error payload for %s: %s", asin, data.get("error"))
            raise UpstreamFailure(details=data)

        logger.info("API response received for %s", asin)
        return data
