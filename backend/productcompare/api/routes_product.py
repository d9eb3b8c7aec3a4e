import logging

from fastapi import APIRouter, Depends

from productcompare.api.deps import get_settings, get_vendor_client, required_asin
from productcompare.core.config import Settings
from productcompare.core.errors import ProductCompareError, UpstreamFailure
from productcompare.core.products import fetch_product_record
from productcompare.core.scrapingdog import ScrapingDogClient
from productcompare.schemas.product import ProductRecord

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["product"])


@router.get("/product", response_model=ProductRecord)
async def product(
    asin: str = Depends(required_asin),
    client: ScrapingDogClient = Depends(get_vendor_client),
    cfg: Settings = Depends(get_settings),
):
    """
    Fetches one ASIN from ScrapingDog and returns the normalized ProductRecord.
      400 -> asin missing
      404 -> vendor returned no usable title
      500 -> vendor / network / configuration failure
    """
    try:
        return await fetch_product_record(client, asin, cfg)
    except ProductCompareError:
        raise
    except Exception as e:
        logger.exception("Unexpected error fetching product data for %s", asin)
        raise UpstreamFailure(details=str(e))
