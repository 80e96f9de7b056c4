from typing import List, Optional

from models import ScoredProduct, TopPicks
from utils import format_inr

MAX_BULLETS = 5
NO_RECOMMENDATIONS = "No recommendations available at this time."
CLOSING_RECOMMENDATION = (
    "Recommendation: Choose Best Overall if you want balanced value. "
    "Choose Budget if price is your top priority. "
    "Choose Premium if you prioritize long-term quality and durability."
)


class ExplanationAgent:
    def explain(
        self,
        top_picks: Optional[TopPicks],
        scored_products: Optional[List[ScoredProduct]] = None,
    ) -> List[str]:
        """Plain-language reasoning built only from already computed picks; never more than 5 bullets."""
        if top_picks is None or top_picks.best_overall is None:
            return [NO_RECOMMENDATIONS]

        overall = top_picks.best_overall
        budget = top_picks.best_budget
        premium = top_picks.premium_pick
        bullets: List[str] = [
            f"Best Overall selected because it scored highest ({overall.smart_score:.1f}) "
            "when balancing all your preferences: price, reviews, rating, and delivery speed."
        ]

        if budget and budget.id != overall.id:
            bullets.append(
                f"Budget option ({budget.title}) was not top because while it's the cheapest, "
                f"it scored lower overall ({budget.smart_score:.1f} vs {overall.smart_score:.1f})."
            )

        if premium and premium.id != overall.id:
            bullets.append(
                f"Premium option ({premium.title}) was not top because its higher price "
                f"(₹{format_inr(premium.price)}) didn't justify the score difference compared to Best Overall."
            )

        if budget and budget.id != overall.id:
            price_diff = overall.price - budget.price
            if price_diff > 0:
                bullets.append(
                    f"Consider: You could save ₹{format_inr(price_diff)} with the budget option, "
                    f"but you'd sacrifice {overall.smart_score - budget.smart_score:.1f} points in overall quality."
                )

        bullets.append(CLOSING_RECOMMENDATION)
        return bullets[:MAX_BULLETS]
