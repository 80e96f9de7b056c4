from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Generic, Optional, Tuple, TypeVar, Union

T = TypeVar("T")

DURABILITY_LEVELS = ("Low", "Medium", "High")


@dataclass(frozen=True)
class ProductRecord:
    id: str
    platform: str
    title: str
    price: float
    original_price: float
    seller_rating: Optional[float] = 4.0  # 0-5
    delivery_days: Optional[int] = 3
    warranty: str = "1 year"
    historical_price: Tuple[float, ...] = ()  # oldest first
    review_snippets: Tuple[str, ...] = ()
    brand: str = ""
    product_url: str = "#"

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["historical_price"] = list(self.historical_price)
        data["review_snippets"] = list(self.review_snippets)
        return data


@dataclass(frozen=True)
class ReviewInsight:
    product_id: str
    pros: Tuple[str, ...]
    cons: Tuple[str, ...]
    sentiment_score: float  # 0-10
    common_complaints: Tuple[str, ...]
    durability_assessment: str  # "Low" | "Medium" | "High"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "productId": self.product_id,
            "pros": list(self.pros),
            "cons": list(self.cons),
            "sentiment_score": self.sentiment_score,
            "common_complaints": list(self.common_complaints),
            "durability_assessment": self.durability_assessment,
        }


@dataclass(frozen=True)
class PriceInsight:
    product_id: str
    discount_authentic: bool
    price_score: float  # 0-10
    buy_recommendation: str  # "Buy" | "Wait" | "Neutral"
    price_risk_level: str  # "Low" | "Medium" | "High"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "productId": self.product_id,
            "discount_authentic": self.discount_authentic,
            "price_score": self.price_score,
            "buy_recommendation": self.buy_recommendation,
            "price_risk_level": self.price_risk_level,
        }


@dataclass(frozen=True)
class WeightVector:
    """User preference weights. Not normalized, so smart scores only span 0-100 when these sum to 1."""

    price: float = 0.3
    reviews: float = 0.3
    rating: float = 0.2
    delivery: float = 0.2

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)


@dataclass(frozen=True)
class ScoreComponents:
    price_score: float
    sentiment_score: float
    rating_score: float
    delivery_score: float
    weights: WeightVector

    def to_dict(self) -> Dict[str, Any]:
        return {
            "price_score": self.price_score,
            "sentiment_score": self.sentiment_score,
            "rating_score": self.rating_score,
            "delivery_score": self.delivery_score,
            "weights": self.weights.to_dict(),
        }


@dataclass(frozen=True)
class ScoredProduct:
    product: ProductRecord
    smart_score: float
    components: ScoreComponents
    rank: int = 0
    review_summary: Optional[ReviewInsight] = None
    price_intel: Optional[PriceInsight] = None

    @property
    def id(self) -> str:
        return self.product.id

    @property
    def title(self) -> str:
        return self.product.title

    @property
    def price(self) -> float:
        return self.product.price

    @property
    def seller_rating(self) -> Optional[float]:
        return self.product.seller_rating

    def to_dict(self) -> Dict[str, Any]:
        data = self.product.to_dict()
        data.update(
            smart_score=self.smart_score,
            components=self.components.to_dict(),
            review_summary=self.review_summary.to_dict() if self.review_summary else None,
            price_intel=self.price_intel.to_dict() if self.price_intel else None,
            rank=self.rank,
        )
        return data


@dataclass(frozen=True)
class Pick:
    scored: ScoredProduct
    why_selected: Tuple[str, str]
    trade_off: str

    @property
    def id(self) -> str:
        return self.scored.id

    @property
    def title(self) -> str:
        return self.scored.title

    @property
    def price(self) -> float:
        return self.scored.price

    @property
    def smart_score(self) -> float:
        return self.scored.smart_score

    @property
    def seller_rating(self) -> Optional[float]:
        return self.scored.seller_rating

    def to_dict(self) -> Dict[str, Any]:
        data = self.scored.to_dict()
        data["why_selected"] = list(self.why_selected)
        data["trade_off"] = self.trade_off
        return data


@dataclass(frozen=True)
class TopPicks:
    best_overall: Optional[Pick] = None
    best_budget: Optional[Pick] = None
    premium_pick: Optional[Pick] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "best_overall": self.best_overall.to_dict() if self.best_overall else None,
            "best_budget": self.best_budget.to_dict() if self.best_budget else None,
            "premium_pick": self.premium_pick.to_dict() if self.premium_pick else None,
        }


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Collaborator answered and its output parsed."""

    data: T
    is_fallback = False


@dataclass(frozen=True)
class Fallback(Generic[T]):
    """Collaborator unavailable or unusable; ``data`` is the static/heuristic substitute."""

    data: T
    reason: str
    is_fallback = True


Outcome = Union[Ok[T], Fallback[T]]


@dataclass(frozen=True)
class PipelineContext:
    query: str
    weights: WeightVector = field(default_factory=WeightVector)
    user_profile: Dict[str, Any] = field(default_factory=dict)
    products: Tuple[ProductRecord, ...] = ()
    review_insights: Tuple[ReviewInsight, ...] = ()
    price_insights: Tuple[PriceInsight, ...] = ()
    scored_products: Tuple[ScoredProduct, ...] = ()
    top_picks: TopPicks = field(default_factory=TopPicks)
    reasoning: Tuple[str, ...] = ()
    fallbacks: Dict[str, str] = field(default_factory=dict)  # stage -> reason

    def to_response(self) -> Dict[str, Any]:
        return {
            "query": self.query,
            "weights": self.weights.to_dict(),
            "userProfile": dict(self.user_profile),
            "products": [p.to_dict() for p in self.scored_products],
            "topPicks": self.top_picks.to_dict(),
            "explanation": {"reasoning": list(self.reasoning)},
        }
