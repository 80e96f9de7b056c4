import logging
from dataclasses import replace
from typing import Any, Dict, List, Optional, Set, Tuple

from agents.llm_client import CollaboratorError
from agents.web_search import WebSearchAgent
from models import Fallback, Ok, Outcome, ProductRecord
from utils import coerce_number

logger = logging.getLogger(__name__)


def _record(
    id: str,
    platform: str,
    title: str,
    price: float,
    original_price: float,
    seller_rating: float,
    delivery_days: int,
    warranty: str,
    review_snippets: List[str],
    historical_price: List[float],
) -> ProductRecord:
    return ProductRecord(
        id=id,
        platform=platform,
        title=title,
        price=float(price),
        original_price=float(original_price),
        seller_rating=seller_rating,
        delivery_days=delivery_days,
        warranty=warranty,
        historical_price=tuple(float(x) for x in historical_price),
        review_snippets=tuple(review_snippets),
    )


PHONE_CATALOG: Tuple[ProductRecord, ...] = (
    _record(
        "p1", "Amazon", "GamingPro X1 8GB RAM 128GB", 18999, 24999, 4.5, 2, "1 year",
        [
            "Excellent gaming performance, no lag in PUBG or COD.",
            "Battery lasts all day with moderate gaming.",
            "Display is bright and colors are vibrant.",
            "Build quality is solid, feels premium.",
            "Fast charging works great, 0-100% in 45 minutes.",
        ],
        [24999, 22999, 20999, 19999, 18999],
    ),
    _record(
        "p2", "Flipkart", "BudgetGamer Y2 6GB RAM 64GB", 14999, 19999, 4.2, 4, "1 year",
        [
            "Great value for money, handles games well.",
            "Camera is decent for the price.",
            "Battery could be better, needs charging twice a day.",
            "Some heating during extended gaming sessions.",
            "Good for casual gamers on a budget.",
        ],
        [19999, 17999, 16999, 15999, 14999],
    ),
    _record(
        "p3", "Amazon", "EliteGamer Z3 12GB RAM 256GB", 24999, 29999, 4.7, 3, "2 years",
        [
            "Best gaming phone under 25k, handles everything smoothly.",
            "Premium build with metal frame, feels durable.",
            "120Hz display is buttery smooth for gaming.",
            "No heating issues even after 2 hours of gaming.",
            "Worth every rupee, highly recommended.",
        ],
        [29999, 27999, 26999, 25999, 24999],
    ),
)

TV_CATALOG: Tuple[ProductRecord, ...] = (
    _record(
        "p1", "Amazon", 'Acme 55" 4K Smart TV', 49999, 64999, 4.4, 2, "1 year",
        [
            "Great picture quality and vibrant colors.",
            "Sound could be better but decent for the price.",
            "Setup was easy and UI is smooth.",
            "Build quality feels solid, no issues after 6 months.",
            "Remote control is responsive and intuitive.",
        ],
        [64999, 62999, 59999, 54999, 49999],
    ),
    _record(
        "p2", "Flipkart", 'BudgetView 50" 4K LED TV', 32999, 42999, 4.1, 5, "1 year",
        [
            "Excellent value for money.",
            "Remote feels a bit cheap.",
            "Good brightness for well-lit rooms.",
            "Some users report backlight bleeding after a year.",
            "Great for budget-conscious buyers.",
        ],
        [42999, 39999, 37999, 34999, 32999],
    ),
    _record(
        "p3", "Amazon", 'PremiumVision 65" OLED TV', 119999, 139999, 4.8, 3, "3 years",
        [
            "Blacks are truly deep, cinema-like experience.",
            "Expensive but worth it for movie lovers.",
            "Dolby Atmos support is fantastic.",
            "Premium build quality, should last many years.",
            "Best TV I've ever owned, no regrets.",
        ],
        [139999, 134999, 129999, 124999, 119999],
    ),
)

DEFAULT_CATALOG: Tuple[ProductRecord, ...] = (
    _record(
        "p1", "Amazon", "Top Rated Product Option A", 2999, 4999, 4.5, 2, "1 year",
        [
            "Excellent quality for the price.",
            "Works perfectly, exceeded expectations.",
            "Good build quality and finish.",
            "Fast delivery and great packaging.",
            "Would recommend to friends.",
        ],
        [4999, 4499, 3999, 3499, 2999],
    ),
    _record(
        "p2", "Flipkart", "Budget Friendly Product Option B", 1499, 2499, 4.1, 4, "6 months",
        [
            "Great value for money.",
            "Decent quality at this price.",
            "Does the job, nothing fancy.",
            "Packaging could be better.",
            "Good for basic needs.",
        ],
        [2499, 2199, 1999, 1699, 1499],
    ),
    _record(
        "p3", "Croma", "Premium Choice Product Option C", 5999, 7999, 4.7, 3, "2 years",
        [
            "Premium quality, feels luxurious.",
            "Best in class, no comparison.",
            "Durability is outstanding.",
            "Slightly expensive but worth it.",
            "Highly recommended for serious users.",
        ],
        [7999, 7499, 6999, 6499, 5999],
    ),
)

CATEGORY_KEYWORDS: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ("phone", ("phone", "mobile", "smartphone")),
    ("tv", ("tv", "television")),
)

FALLBACK_CATALOGS: Dict[str, Tuple[ProductRecord, ...]] = {
    "phone": PHONE_CATALOG,
    "tv": TV_CATALOG,
    "default": DEFAULT_CATALOG,
}


def detect_category(query: str) -> str:
    q = query.lower()
    for category, keywords in CATEGORY_KEYWORDS:
        if any(k in q for k in keywords):
            return category
    return "default"


def _text(raw: Any, default: str) -> str:
    if isinstance(raw, str) and raw.strip():
        return raw.strip()
    return default


def normalize_record(raw: Dict[str, Any], index: int) -> ProductRecord:
    """Fill in whatever the search collaborator left out so downstream stages see complete records."""
    price = coerce_number(raw.get("price"))
    if price is None:
        price = 0.0
    original_price = coerce_number(raw.get("original_price"))
    if original_price is None:
        original_price = price

    rating = coerce_number(raw.get("seller_rating"))
    rating = 4.0 if rating is None else min(rating, 5.0)

    delivery = coerce_number(raw.get("delivery_days"))
    delivery_days = 3 if delivery is None else int(delivery)

    history_raw = raw.get("historical_price")
    history: List[float] = []
    if isinstance(history_raw, list):
        history = [v for v in (coerce_number(x) for x in history_raw) if v is not None]
    if not history:
        history = [original_price, price]

    snippets_raw = raw.get("review_snippets")
    snippets = [s for s in snippets_raw if isinstance(s, str)] if isinstance(snippets_raw, list) else []

    raw_id = raw.get("id")
    return ProductRecord(
        id=str(raw_id) if raw_id not in (None, "") else f"p{index + 1}",
        platform=_text(raw.get("platform"), "Unknown"),
        title=_text(raw.get("title"), "Unknown Product"),
        price=price,
        original_price=original_price,
        seller_rating=rating,
        delivery_days=delivery_days,
        warranty=_text(raw.get("warranty"), "1 year"),
        historical_price=tuple(history),
        review_snippets=tuple(snippets),
        brand=_text(raw.get("brand"), ""),
        product_url=_text(raw.get("product_url"), "#"),
    )


def _dedupe_ids(records: List[ProductRecord]) -> List[ProductRecord]:
    seen: Set[str] = set()
    unique: List[ProductRecord] = []
    for index, record in enumerate(records):
        if record.id in seen:
            new_id = f"{record.id}-{index + 1}"
            logger.debug("Duplicate product id %s renamed to %s", record.id, new_id)
            record = replace(record, id=new_id)
        seen.add(record.id)
        unique.append(record)
    return unique


class ProductRetrievalAgent:
    def __init__(self, search_agent: Optional[WebSearchAgent] = None):
        self.search_agent = search_agent

    def retrieve(self, query: str) -> Outcome[List[ProductRecord]]:
        if self.search_agent is None:
            reason = "web search not configured"
        else:
            try:
                listings = self.search_agent.search(query)
                records = _dedupe_ids([normalize_record(item, i) for i, item in enumerate(listings)])
                logger.info("Retrieved %d products for %r via web search", len(records), query)
                return Ok(records)
            except CollaboratorError as exc:
                reason = str(exc)
            except Exception as exc:  # noqa: BLE001
                reason = f"unexpected search failure: {exc}"
            logger.warning("Web search failed, falling back to static catalog: %s", reason)

        category = detect_category(query)
        logger.info("Using %s fallback catalog for %r", category, query)
        return Fallback(list(FALLBACK_CATALOGS[category]), reason)
