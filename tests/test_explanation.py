from agents.decision_simplification import DecisionSimplificationAgent
from agents.explanation import CLOSING_RECOMMENDATION, NO_RECOMMENDATIONS, ExplanationAgent
from models import ProductRecord, ScoreComponents, ScoredProduct, TopPicks, WeightVector


def make_scored(pid, title, price, rating, score):
    product = ProductRecord(
        id=pid,
        platform="Amazon",
        title=title,
        price=price,
        original_price=price,
        seller_rating=rating,
    )
    return ScoredProduct(
        product=product,
        smart_score=score,
        components=ScoreComponents(7.5, 7.5, rating * 2, 8.0, WeightVector()),
    )


def explain(products):
    picks = DecisionSimplificationAgent().select(products)
    return ExplanationAgent().explain(picks, products)


def test_no_picks():
    assert ExplanationAgent().explain(TopPicks(), []) == [NO_RECOMMENDATIONS]
    assert ExplanationAgent().explain(None, []) == [NO_RECOMMENDATIONS]
    assert explain([]) == [NO_RECOMMENDATIONS]


def test_three_distinct_picks_give_five_bullets():
    products = [
        make_scored("p1", "GamingPro X1", 18999, 4.5, 84.0),
        make_scored("p3", "EliteGamer Z3", 24999, 4.7, 79.8),
        make_scored("p2", "BudgetGamer Y2", 14999, 4.2, 78.8),
    ]
    bullets = explain(products)
    assert len(bullets) == 5
    assert "scored highest (84.0)" in bullets[0]
    assert "Budget option (BudgetGamer Y2)" in bullets[1]
    assert "(78.8 vs 84.0)" in bullets[1]
    assert "Premium option (EliteGamer Z3)" in bullets[2]
    assert "₹24,999" in bullets[2]
    assert bullets[3] == (
        "Consider: You could save ₹4,000 with the budget option, "
        "but you'd sacrifice 5.2 points in overall quality."
    )
    assert bullets[4] == CLOSING_RECOMMENDATION


def test_single_product_only_gets_headline_and_closing():
    bullets = explain([make_scored("solo", "Only One", 999, 4.0, 70.0)])
    assert len(bullets) == 2
    assert "scored highest (70.0)" in bullets[0]
    assert bullets[1] == CLOSING_RECOMMENDATION


def test_no_savings_line_when_best_overall_is_cheaper():
    products = [
        make_scored("a", "Cheap Winner", 100, 4.5, 90.0),
        make_scored("b", "Dearer", 200, 4.0, 80.0),
    ]
    bullets = explain(products)
    assert not any(b.startswith("Consider:") for b in bullets)
    assert len(bullets) <= 5
