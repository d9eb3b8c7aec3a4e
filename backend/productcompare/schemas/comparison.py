from pydantic import BaseModel
from typing import List

from productcompare.schemas.product import CustomerReview, ProductRecord


class CommonFeature(BaseModel):
    product1_key: str
    product2_key: str
    normalized_key: str


class FeatureRow(BaseModel):
    feature: str
    product1_value: str = "N/A"
    product2_value: str = "N/A"


class ReviewItem(CustomerReview):
    tone: str              # "positive" | "mixed" | "negative"
    expandable: bool = False


class ReviewsPage(BaseModel):
    shown: List[ReviewItem]
    remaining: int = 0


class ComparisonReviews(BaseModel):
    product1: ReviewsPage
    product2: ReviewsPage


class ComparisonResponse(BaseModel):
    product1: ProductRecord
    product2: ProductRecord
    common_features: List[FeatureRow]
    same_category: bool
    reviews: ComparisonReviews
