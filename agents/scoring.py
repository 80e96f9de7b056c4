from dataclasses import replace
from typing import Dict, List, Optional

from models import (
    PriceInsight,
    ProductRecord,
    ReviewInsight,
    ScoreComponents,
    ScoredProduct,
    WeightVector,
)

DEFAULT_SENTIMENT_SCORE = 7.0
DEFAULT_PRICE_SCORE = 5.0


def normalize_rating(rating: Optional[float]) -> float:
    """0-5 seller rating -> 0-10."""
    if rating is None:
        return 5.0
    return rating / 5 * 10


def normalize_delivery_days(delivery_days: Optional[int]) -> float:
    # Fewer days -> higher score.
    if not delivery_days or delivery_days <= 0:
        return 5.0
    if delivery_days <= 1:
        return 10.0
    if delivery_days <= 2:
        return 9.0
    if delivery_days <= 3:
        return 8.0
    if delivery_days <= 5:
        return 7.0
    if delivery_days <= 7:
        return 6.0
    return 5.0


class ScoringAgent:
    def score(
        self,
        products: List[ProductRecord],
        review_insights: List[ReviewInsight],
        price_insights: List[PriceInsight],
        weights: Optional[WeightVector] = None,
    ) -> List[ScoredProduct]:
        """
        Blend the four 0-10 sub-scores into a smart score and rank by it.

        The smart score is the weighted sum times 10, so it lands on 0-100 only
        when the weights sum to 1. Products whose insights are missing get the
        neutral defaults instead of failing.
        """
        weights = weights or WeightVector()
        review_map: Dict[str, ReviewInsight] = {r.product_id: r for r in review_insights}
        price_map: Dict[str, PriceInsight] = {p.product_id: p for p in price_insights}

        scored: List[ScoredProduct] = []
        for product in products:
            review_info = review_map.get(product.id)
            price_info = price_map.get(product.id)

            sentiment_score = review_info.sentiment_score if review_info else DEFAULT_SENTIMENT_SCORE
            price_score = price_info.price_score if price_info else DEFAULT_PRICE_SCORE
            rating_score = normalize_rating(product.seller_rating)
            delivery_score = normalize_delivery_days(product.delivery_days)

            smart_score = (
                price_score * weights.price
                + sentiment_score * weights.reviews
                + rating_score * weights.rating
                + delivery_score * weights.delivery
            )
            scored.append(
                ScoredProduct(
                    product=product,
                    smart_score=round(smart_score * 10, 2),
                    components=ScoreComponents(
                        price_score=price_score,
                        sentiment_score=sentiment_score,
                        rating_score=rating_score,
                        delivery_score=delivery_score,
                        weights=weights,
                    ),
                    review_summary=review_info,
                    price_intel=price_info,
                )
            )

        # sorted() is stable, so equal scores keep their retrieval order.
        ranked = sorted(scored, key=lambda s: s.smart_score, reverse=True)
        return [replace(s, rank=index) for index, s in enumerate(ranked, start=1)]
