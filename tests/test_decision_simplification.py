from agents.decision_simplification import DecisionSimplificationAgent
from models import ProductRecord, ScoreComponents, ScoredProduct, WeightVector


def make_scored(pid, price, rating, score, rank=0):
    product = ProductRecord(
        id=pid,
        platform="Flipkart",
        title=f"Product {pid}",
        price=price,
        original_price=price,
        seller_rating=rating,
    )
    return ScoredProduct(
        product=product,
        smart_score=score,
        components=ScoreComponents(7.5, 7.5, rating * 2, 8.0, WeightVector()),
        rank=rank,
    )


def select(products):
    return DecisionSimplificationAgent().select(products)


def test_empty_input_returns_no_picks():
    picks = select([])
    assert picks.best_overall is None
    assert picks.best_budget is None
    assert picks.premium_pick is None


def test_three_distinct_picks():
    products = [
        make_scored("A", 18999, 4.5, 84.0),
        make_scored("C", 24999, 4.7, 79.8),
        make_scored("B", 14999, 4.2, 78.8),
    ]
    picks = select(products)
    assert picks.best_overall.id == "A"
    assert picks.best_budget.id == "B"
    assert picks.premium_pick.id == "C"

    assert picks.best_overall.why_selected[0] == "Highest Smart Score (84.0) based on your preferences"
    assert picks.best_budget.why_selected == (
        "Lowest price (₹14,999) with acceptable quality",
        "Maintains Smart Score of 78.8 while being most affordable",
    )
    assert picks.best_budget.trade_off.startswith("Lower price may mean")
    assert picks.premium_pick.why_selected[0] == "Highest rating (4.7) with premium build quality"
    assert picks.premium_pick.trade_off == "Higher price point, but offers superior quality and longevity"


def test_best_overall_is_max_score_even_if_input_unsorted():
    products = [make_scored("low", 100, 4.0, 50.0), make_scored("high", 200, 4.0, 90.0)]
    assert select(products).best_overall.id == "high"


def test_single_product_fills_every_slot():
    only = make_scored("solo", 999, 4.3, 70.0)
    picks = select([only])
    assert picks.best_overall.id == picks.best_budget.id == picks.premium_pick.id == "solo"
    assert picks.best_budget.why_selected[0] == "Lowest price (₹999) with highest Smart Score"
    assert picks.best_budget.trade_off == "Same as Best Overall - offers best value at lowest price"
    assert picks.premium_pick.why_selected[0] == "Highest rating (4.3) with premium features"
    assert picks.premium_pick.trade_off == "Same product selected for multiple categories due to limited options"


def test_budget_is_cheapest_other_than_best_overall():
    products = [
        make_scored("cheapest-top", 100, 4.0, 90.0),
        make_scored("mid", 200, 4.0, 80.0),
        make_scored("dear", 300, 4.0, 70.0),
    ]
    picks = select(products)
    assert picks.best_overall.id == "cheapest-top"
    assert picks.best_budget.id == "mid"
    others = [p for p in products if p.id != picks.best_overall.id]
    assert all(picks.best_budget.price <= p.price for p in others)


def test_budget_price_tie_keeps_input_order():
    products = [
        make_scored("top", 500, 4.0, 90.0),
        make_scored("x", 100, 4.0, 80.0),
        make_scored("y", 100, 4.0, 70.0),
    ]
    assert select(products).best_budget.id == "x"


def test_premium_prefers_higher_price_when_ratings_are_close():
    products = [
        make_scored("top", 500, 4.0, 90.0),
        make_scored("budget", 100, 3.5, 60.0),
        make_scored("rated", 250, 4.65, 70.0),
        make_scored("pricier", 300, 4.6, 65.0),
    ]
    assert select(products).premium_pick.id == "pricier"


def test_premium_prefers_clearly_higher_rating():
    products = [
        make_scored("top", 500, 4.0, 90.0),
        make_scored("budget", 100, 3.5, 60.0),
        make_scored("rated", 250, 4.8, 70.0),
        make_scored("pricier", 300, 4.6, 65.0),
    ]
    assert select(products).premium_pick.id == "rated"


def test_two_products_premium_falls_back_to_budget():
    products = [make_scored("A", 200, 4.5, 80.0), make_scored("B", 100, 4.0, 70.0)]
    picks = select(products)
    assert picks.best_overall.id == "A"
    assert picks.best_budget.id == "B"
    assert picks.premium_pick.id == "B"
    assert picks.premium_pick.trade_off == "Same product selected for multiple categories due to limited options"
