from typing import Optional

from productcompare.core.config import Settings, settings as default_settings
from productcompare.core.normalizer import normalize
from productcompare.core.scrapingdog import ScrapingDogClient
from productcompare.schemas.product import ProductRecord


async def fetch_product_record(
    client: ScrapingDogClient,
    asin: str,
    cfg: Optional[Settings] = None,
) -> ProductRecord:
    """
    One vendor fetch + normalization. Raises UpstreamFailure or InvalidProductData.
    """
    cfg = cfg or default_settings
    raw = await client.fetch_product(asin)
    return normalize(
        raw,
        positive_rating=cfg.POSITIVE_SENTIMENT_RATING,
        mixed_rating=cfg.MIXED_SENTIMENT_RATING,
    )
