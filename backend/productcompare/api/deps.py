from typing import Optional, Tuple

from fastapi import Depends

from productcompare.core.asin import extract_asin
from productcompare.core.config import Settings, settings
from productcompare.core.errors import InvalidProductUrl, MissingParameter
from productcompare.core.scrapingdog import ScrapingDogClient


def get_settings() -> Settings:
    return settings


def get_vendor_client(cfg: Settings = Depends(get_settings)) -> ScrapingDogClient:
    # Raises ConfigurationError when no API key is configured
    return ScrapingDogClient.from_settings(cfg)


def required_asin(asin: Optional[str] = None) -> str:
    if not asin or not asin.strip():
        raise MissingParameter("ASIN is required")
    return asin.strip()


def product_pair(product1: Optional[str] = None, product2: Optional[str] = None) -> Tuple[str, str]:
    """
    Both query values may be a bare ASIN or an Amazon product URL.
    """
    if not product1 or not product1.strip() or not product2 or not product2.strip():
        raise MissingParameter("Please enter both products")

    asin1 = extract_asin(product1)
    asin2 = extract_asin(product2)
    if asin1 == asin2:
        raise InvalidProductUrl("Please enter two different products", details=asin1)
    return asin1, asin2
