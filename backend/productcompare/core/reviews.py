from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Set

from productcompare.schemas.comparison import ReviewItem, ReviewsPage
from productcompare.schemas.product import CustomerReview


def rating_tone(rating: float) -> str:
    if rating >= 4:
        return "positive"
    if rating <= 2:
        return "negative"
    return "mixed"


@dataclass
class ReviewsView:
    """
    View state of one product's review list: how many reviews are shown and
    which ones are expanded. Lives next to a ProductRecord, never on it.

    The API builds a fresh view per request and only calls `page()`;
    `load_more`, `toggle` and `is_expanded` are for callers that keep the
    view between interactions, such as a client session.
    """

    visible: int = 10
    step: int = 3
    expand_chars: int = 150
    expanded: Set[int] = field(default_factory=set)

    def load_more(self) -> int:
        self.visible += self.step
        return self.visible

    def toggle(self, index: int) -> bool:
        if index in self.expanded:
            self.expanded.discard(index)
            return False
        self.expanded.add(index)
        return True

    def is_expanded(self, index: int) -> bool:
        return index in self.expanded

    def page(self, reviews: List[CustomerReview]) -> ReviewsPage:
        shown = [
            ReviewItem(
                title=r.title,
                rating=r.rating,
                review=r.review,
                tone=rating_tone(r.rating),
                expandable=len(r.review) > self.expand_chars,
            )
            for r in reviews[: max(self.visible, 0)]
        ]
        return ReviewsPage(shown=shown, remaining=max(len(reviews) - len(shown), 0))
