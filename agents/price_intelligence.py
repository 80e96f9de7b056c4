from typing import List

from models import PriceInsight, ProductRecord
from utils import mean


class PriceIntelligenceAgent:
    def analyze(self, products: List[ProductRecord]) -> List[PriceInsight]:
        return [self._assess(p) for p in products]

    def _assess(self, product: ProductRecord) -> PriceInsight:
        """
        Judge whether the current price is a genuine deal. Uses only the listed
        numbers: current price, original (MRP) price and the price history.
        """
        current = product.price
        original = product.original_price or current
        avg_historical = mean(product.historical_price)

        discount_percent = (original - current) / original * 100 if original > 0 else 0.0
        vs_history_percent = (
            (avg_historical - current) / avg_historical * 100 if avg_historical > 0 else 0.0
        )

        discount_authentic = discount_percent > 10 and vs_history_percent > 5

        if discount_authentic and discount_percent > 20:
            price_score = 8.5
        elif discount_authentic:
            price_score = 7.5
        elif discount_percent > 5:
            price_score = 6.5
        else:
            price_score = 5.0

        if discount_authentic:
            buy_recommendation = "Buy"
        elif vs_history_percent < -5:
            buy_recommendation = "Wait"
        else:
            buy_recommendation = "Neutral"

        price_risk_level = "Low"
        if vs_history_percent < -10:
            price_risk_level = "High"  # well above what it usually sells for
        elif vs_history_percent < -5:
            price_risk_level = "Medium"
        elif discount_authentic and discount_percent > 20:
            price_risk_level = "Low"  # deep genuine discount, little risk of missing a better one

        return PriceInsight(
            product_id=product.id,
            discount_authentic=discount_authentic,
            price_score=price_score,
            buy_recommendation=buy_recommendation,
            price_risk_level=price_risk_level,
        )
