from __future__ import annotations

import json
import logging
import math
import re
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, List, Optional, Union

from productcompare.core.errors import InvalidProductData
from productcompare.schemas.product import CustomerReview, CustomerSentiment, ProductRecord

logger = logging.getLogger(__name__)

NOT_AVAILABLE = "N/A"
PRICE_NOT_AVAILABLE = "Price not available"
UNTITLED_REVIEW = "Untitled Review"
NO_REVIEW_CONTENT = "No review content"
CUSTOMERS_SAY_FROM_REVIEWS = "Based on customer reviews"
CUSTOMERS_SAY_EMPTY = "No customer feedback available"
OVERALL_SENTIMENT = "Overall Sentiment"

# first match wins
REVIEW_TITLE_KEYS = ("review_title", "title")
REVIEW_TEXT_KEYS = ("review_snippet", "review", "content")

_LEADING_NUMBER = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)")
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def _is_absent(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _first_text(entry: Dict[str, Any], keys, default: str) -> str:
    for k in keys:
        v = entry.get(k)
        if isinstance(v, (dict, list)) or _is_absent(v):
            continue
        return v if isinstance(v, str) else str(v)
    return default


def _as_text(value: Any) -> str:
    # nested spec values are served as JSON text
    if isinstance(value, str):
        return value
    if isinstance(value, (dict, list)):
        return json.dumps(value, ensure_ascii=False)
    return str(value)


def parse_rating(value: Any) -> float:
    """
    Converts vendor ratings to a positive float.
      5, 4.5         -> 5.0, 4.5
      "4.5 out of 5" -> 4.5  (leading token before the first space)
    Anything unparseable, non-finite or <= 0 becomes 0.0.
    """
    if isinstance(value, bool):
        return 0.0

    rating = 0.0
    if isinstance(value, (int, float)):
        rating = float(value)
    elif isinstance(value, str):
        token = value.strip().split(" ")[0]
        m = _LEADING_NUMBER.match(token)
        if m:
            rating = float(m.group(0))

    if not math.isfinite(rating) or rating <= 0:
        return 0.0
    return rating


def _round_one_decimal(x: float) -> float:
    return float(Decimal(str(x)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def extract_reviews(raw_reviews: Any) -> List[CustomerReview]:
    """
    Maps vendor review entries to CustomerReview.
    Reviews whose rating parses to 0 are dropped, not reported.
    """
    if not isinstance(raw_reviews, list):
        return []

    out: List[CustomerReview] = []
    for entry in raw_reviews:
        if not isinstance(entry, dict):
            continue
        rating = parse_rating(entry.get("rating"))
        if rating <= 0:
            continue
        out.append(
            CustomerReview(
                title=_first_text(entry, REVIEW_TITLE_KEYS, UNTITLED_REVIEW),
                rating=rating,
                review=_first_text(entry, REVIEW_TEXT_KEYS, NO_REVIEW_CONTENT),
            )
        )
    return out


def flatten_product_information(raw_info: Any) -> Dict[str, str]:
    """
    The vendor sends product_information either as [{"key": .., "value": ..}, ...]
    or as a flat object. Both become a flat str -> str mapping here.
    """
    info: Dict[str, str] = {}

    if isinstance(raw_info, list):
        for item in raw_info:
            if not isinstance(item, dict):
                continue
            key = item.get("key")
            value = item.get("value")
            if _is_absent(key) or _is_absent(value):
                continue
            # later duplicates overwrite earlier ones
            info[str(key)] = _as_text(value)
    elif isinstance(raw_info, dict):
        for key, value in raw_info.items():
            if value is None:
                continue
            info[str(key)] = _as_text(value)

    return info


def filter_sentiments(raw_sentiments: Any) -> List[CustomerSentiment]:
    if not isinstance(raw_sentiments, list):
        return []

    out: List[CustomerSentiment] = []
    for entry in raw_sentiments:
        if not isinstance(entry, dict):
            continue
        title = entry.get("title")
        sentiment = entry.get("sentiment")
        if _is_absent(title) and _is_absent(sentiment):
            continue
        out.append(
            CustomerSentiment(
                title="" if _is_absent(title) else str(title),
                sentiment="" if _is_absent(sentiment) else str(sentiment),
            )
        )
    return out


def derive_average_rating(raw_value: Any, reviews: List[CustomerReview]) -> Union[float, str]:
    if _is_absent(raw_value):
        if reviews:
            return _round_one_decimal(sum(r.rating for r in reviews) / len(reviews))
        return NOT_AVAILABLE

    # verbatim
    if isinstance(raw_value, bool):
        return NOT_AVAILABLE
    if isinstance(raw_value, (int, float)):
        return float(raw_value)
    if isinstance(raw_value, str):
        return raw_value.strip()
    return NOT_AVAILABLE


def derive_total_reviews(raw_value: Any, review_count: int) -> Union[int, str]:
    """
    "1,234" -> 1234, "1,234 global ratings" -> 1234.
    Unparseable or missing totals fall back to the number of kept reviews.
    """
    if isinstance(raw_value, int) and not isinstance(raw_value, bool):
        return raw_value
    if isinstance(raw_value, float) and math.isfinite(raw_value):
        return int(raw_value)
    if isinstance(raw_value, str):
        m = _LEADING_INT.match(raw_value.replace(",", ""))
        if m:
            return int(m.group(1))

    return review_count if review_count else NOT_AVAILABLE


def sentiment_for_rating(rating: float, positive_rating: float = 4.0, mixed_rating: float = 3.0) -> str:
    if rating >= positive_rating:
        return "POSITIVE"
    if rating >= mixed_rating:
        return "MIXED"
    return "NEGATIVE"


def _optional_text(value: Any) -> Optional[str]:
    if _is_absent(value) or isinstance(value, (dict, list)):
        return None
    return value if isinstance(value, str) else str(value)


def normalize(
    raw: Any,
    *,
    positive_rating: float = 4.0,
    mixed_rating: float = 3.0,
) -> ProductRecord:
    """
    Turns one raw ScrapingDog product response into a ProductRecord.

    Every field except `title` has a total fallback, so a missing or oddly
    shaped vendor field never fails the fetch. A missing title does:
    InvalidProductData is raised and no record is built.
    """
    if not isinstance(raw, dict):
        raise InvalidProductData(details="Vendor response is not an object")

    title = _optional_text(raw.get("title"))
    if title is None:
        raise InvalidProductData()

    reviews = extract_reviews(raw.get("customer_reviews"))
    product_information = flatten_product_information(raw.get("product_information"))
    sentiments = filter_sentiments(raw.get("customer_sentiments"))

    average_rating = derive_average_rating(raw.get("average_rating"), reviews)
    total_reviews = derive_total_reviews(raw.get("total_reviews"), len(reviews))

    customers_say = _optional_text(raw.get("customers_say"))
    if customers_say is None:
        customers_say = CUSTOMERS_SAY_FROM_REVIEWS if reviews else CUSTOMERS_SAY_EMPTY

    if not sentiments and reviews:
        sentiments = [
            CustomerSentiment(
                title=OVERALL_SENTIMENT,
                sentiment=sentiment_for_rating(
                    parse_rating(average_rating),
                    positive_rating=positive_rating,
                    mixed_rating=mixed_rating,
                ),
            )
        ]

    raw_images = raw.get("images")
    images = [img for img in raw_images if isinstance(img, str) and img] if isinstance(raw_images, list) else []

    logger.info(
        "Normalized %r: %d reviews kept, %d product info keys",
        title[:60],
        len(reviews),
        len(product_information),
    )

    return ProductRecord(
        title=title,
        price=_optional_text(raw.get("price")) or PRICE_NOT_AVAILABLE,
        total_reviews=total_reviews,
        average_rating=average_rating,
        customers_say=customers_say,
        customer_sentiments=sentiments,
        customer_reviews=reviews,
        category_id=_optional_text(raw.get("category_id")),
        product_information=product_information,
        images=images,
    )
