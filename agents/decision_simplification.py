from functools import cmp_to_key
from typing import List, Optional

from models import Pick, ScoredProduct, TopPicks
from utils import format_inr

# Ratings closer than this are treated as equal and price decides.
RATING_TIE_TOLERANCE = 0.1


def _rating(product: ScoredProduct) -> float:
    return product.seller_rating if product.seller_rating is not None else 0.0


def _premium_order(a: ScoredProduct, b: ScoredProduct) -> float:
    rating_gap = _rating(b) - _rating(a)
    if abs(rating_gap) > RATING_TIE_TOLERANCE:
        return rating_gap
    return b.price - a.price  # higher price = more premium


def _most_premium(candidates: List[ScoredProduct]) -> Optional[ScoredProduct]:
    ordered = sorted(candidates, key=cmp_to_key(_premium_order))
    return ordered[0] if ordered else None


class DecisionSimplificationAgent:
    def select(self, scored_products: List[ScoredProduct]) -> TopPicks:
        """
        Reduce the ranked list to three picks: best overall, best budget and premium.

        Picks may coincide when there are fewer than three products; the
        rationale text changes so the repeated product still reads sensibly.
        """
        if not scored_products:
            return TopPicks()

        by_score = sorted(scored_products, key=lambda p: p.smart_score, reverse=True)
        by_price = sorted(scored_products, key=lambda p: p.price)

        best_overall = by_score[0]
        best_budget = next((p for p in by_price if p.id != best_overall.id), by_price[0])

        premium = _most_premium(
            [p for p in scored_products if p.id not in (best_overall.id, best_budget.id)]
        )
        if premium is None:
            premium = _most_premium([p for p in scored_products if p.id != best_overall.id])
        if premium is None:
            premium = by_score[1] if len(by_score) > 1 else by_score[0]

        budget_is_overall = best_budget.id == best_overall.id
        premium_repeats = premium.id == best_overall.id or premium.id == best_budget.id

        return TopPicks(
            best_overall=self._overall_pick(best_overall),
            best_budget=self._budget_pick(best_budget, budget_is_overall),
            premium_pick=self._premium_pick(premium, premium_repeats),
        )

    def _overall_pick(self, product: ScoredProduct) -> Pick:
        return Pick(
            scored=product,
            why_selected=(
                f"Highest Smart Score ({product.smart_score:.1f}) based on your preferences",
                "Best balance across all factors: price, reviews, rating, and delivery",
            ),
            trade_off="May not be the cheapest or most premium, but offers the best overall value",
        )

    def _budget_pick(self, product: ScoredProduct, same_as_overall: bool) -> Pick:
        price = format_inr(product.price)
        if same_as_overall:
            return Pick(
                scored=product,
                why_selected=(
                    f"Lowest price (₹{price}) with highest Smart Score",
                    "This product offers the best value at the lowest price point",
                ),
                trade_off="Same as Best Overall - offers best value at lowest price",
            )
        return Pick(
            scored=product,
            why_selected=(
                f"Lowest price (₹{price}) with acceptable quality",
                f"Maintains Smart Score of {product.smart_score:.1f} while being most affordable",
            ),
            trade_off="Lower price may mean longer delivery time or fewer premium features",
        )

    def _premium_pick(self, product: ScoredProduct, repeats_other_pick: bool) -> Pick:
        rating = f"{_rating(product):g}"
        if repeats_other_pick:
            return Pick(
                scored=product,
                why_selected=(
                    f"Highest rating ({rating}) with premium features",
                    "Optimized for quality and long-term value",
                ),
                trade_off="Same product selected for multiple categories due to limited options",
            )
        return Pick(
            scored=product,
            why_selected=(
                f"Highest rating ({rating}) with premium build quality",
                "Optimized for long-term value and premium experience",
            ),
            trade_off="Higher price point, but offers superior quality and longevity",
        )
