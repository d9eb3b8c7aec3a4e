from pydantic import BaseModel, ConfigDict
from typing import Dict, List, Optional, Union


class CustomerReview(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str
    rating: float          # always > 0; zero-rated reviews are dropped
    review: str


class CustomerSentiment(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str = ""
    sentiment: str = ""    # "POSITIVE" | "NEGATIVE" | "MIXED" | vendor string


class ProductRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str
    price: str = "Price not available"
    total_reviews: Union[int, str] = "N/A"
    average_rating: Union[float, str] = "N/A"
    customers_say: str = "No customer feedback available"
    customer_sentiments: List[CustomerSentiment] = []
    customer_reviews: List[CustomerReview] = []
    category_id: Optional[str] = None
    product_information: Dict[str, str] = {}
    images: List[str] = []
