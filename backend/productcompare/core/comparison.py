from __future__ import annotations

import logging
import re
from typing import Any, Dict, List

from productcompare.schemas.comparison import CommonFeature, FeatureRow
from productcompare.schemas.product import ProductRecord

logger = logging.getLogger(__name__)

_KEY_SEPARATORS = re.compile(r"[\s_-]+")


def normalize_key(key: Any) -> str:
    """
    Key used to match spec fields across products:
      "Item Weight", "item_weight", "Item-Weight" => "itemweight"
    Non-string keys normalize to "" and never match.
    """
    if not isinstance(key, str):
        return ""
    return _KEY_SEPARATORS.sub("", key.lower()).strip()


def _key_map(info: Dict[str, str]) -> Dict[str, str]:
    out: Dict[str, str] = {}
    for key in info:
        nk = normalize_key(key)
        if nk:
            # last write wins, first-seen position is kept
            out[nk] = key
    return out


def find_common_features(a: ProductRecord, b: ProductRecord) -> List[CommonFeature]:
    """
    Pairs up product_information keys present (by normalized name) in both records.
    Order follows the first record's keys.
    """
    map_a = _key_map(a.product_information or {})
    map_b = _key_map(b.product_information or {})

    features = [
        CommonFeature(product1_key=map_a[nk], product2_key=map_b[nk], normalized_key=nk)
        for nk in map_a
        if nk in map_b
    ]
    logger.info("Found %d common features", len(features))
    return features


def _is_review_feature(feature: CommonFeature) -> bool:
    key = feature.product1_key
    return "Customer Reviews" in key or "customer review" in key.lower()


def presentable_features(features: List[CommonFeature]) -> List[CommonFeature]:
    """
    Drops review-summary rows (noise, not comparable specs) and sorts
    alphabetically by the first product's key.
    """
    kept = [f for f in features if not _is_review_feature(f)]
    kept.sort(key=lambda f: f.product1_key)
    return kept


def feature_rows(a: ProductRecord, b: ProductRecord) -> List[FeatureRow]:
    rows: List[FeatureRow] = []
    for f in presentable_features(find_common_features(a, b)):
        rows.append(
            FeatureRow(
                feature=f.product1_key,
                product1_value=a.product_information.get(f.product1_key) or "N/A",
                product2_value=b.product_information.get(f.product2_key) or "N/A",
            )
        )
    return rows


def same_category(a: ProductRecord, b: ProductRecord) -> bool:
    if a.category_id and b.category_id and a.category_id == b.category_id:
        return True

    logger.warning(
        "Products may be in different categories. Product 1 category: %s, Product 2 category: %s",
        a.category_id or "Unknown",
        b.category_id or "Unknown",
    )
    return False
