import asyncio
import logging
from typing import Optional, Tuple

from fastapi import APIRouter, Depends

from productcompare.api.deps import get_settings, get_vendor_client, product_pair
from productcompare.core.comparison import feature_rows, same_category
from productcompare.core.config import Settings
from productcompare.core.errors import ProductCompareError, UpstreamFailure
from productcompare.core.products import fetch_product_record
from productcompare.core.reviews import ReviewsView
from productcompare.core.scrapingdog import ScrapingDogClient
from productcompare.schemas.comparison import ComparisonResponse, ComparisonReviews

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["compare"])


@router.get("/compare", response_model=ComparisonResponse)
async def compare(
    asins: Tuple[str, str] = Depends(product_pair),
    reviews_shown: Optional[int] = None,
    client: ScrapingDogClient = Depends(get_vendor_client),
    cfg: Settings = Depends(get_settings),
):
    """
    Side-by-side comparison of two products (ASINs or Amazon URLs).

    Both vendor fetches run concurrently; if either fails the whole
    comparison fails with that error.
    """
    asin1, asin2 = asins
    logger.info("Comparing %s vs %s", asin1, asin2)

    try:
        record1, record2 = await asyncio.gather(
            fetch_product_record(client, asin1, cfg),
            fetch_product_record(client, asin2, cfg),
        )
    except ProductCompareError:
        raise
    except Exception as e:
        logger.exception("Unexpected error comparing %s and %s", asin1, asin2)
        raise UpstreamFailure(details=str(e))

    visible = reviews_shown if reviews_shown is not None else cfg.REVIEWS_INITIAL_VISIBLE

    def view() -> ReviewsView:
        return ReviewsView(
            visible=visible,
            step=cfg.REVIEWS_LOAD_MORE_STEP,
            expand_chars=cfg.REVIEW_EXPAND_CHARS,
        )

    return ComparisonResponse(
        product1=record1,
        product2=record2,
        common_features=feature_rows(record1, record2),
        same_category=same_category(record1, record2),
        reviews=ComparisonReviews(
            product1=view().page(record1.customer_reviews),
            product2=view().page(record2.customer_reviews),
        ),
    )
