import json
import logging
from typing import Any, Dict, List, Optional

from agents.llm_client import ChatCompletionClient, CollaboratorError
from models import DURABILITY_LEVELS, Fallback, Ok, Outcome, ProductRecord, ReviewInsight
from utils import coerce_number, strip_code_fences

logger = logging.getLogger(__name__)

DEFAULT_SENTIMENT = 7.5
MAX_POINTS = 5

HEURISTIC_PROS = (
    "Good value",
    "Solid performance",
    "Easy setup",
    "Reliable brand",
    "Good customer support",
)
HEURISTIC_CONS = (
    "Some minor drawbacks in build or sound",
    "Remote could be better",
    "Limited connectivity options",
    "Average picture quality",
    "Warranty could be longer",
)
HEURISTIC_COMPLAINTS = (
    "Occasional quality variance between units",
    "Delivery delays in some regions",
)

REVIEW_SYSTEM_PROMPT = """You are the Review Intelligence Agent.

You analyze customer reviews and extract meaningful patterns.

Extract:
- Top 5 recurring pros
- Top 5 recurring cons
- Overall sentiment score (0-10)
- Most frequent complaints
- Product durability assessment (Low/Medium/High)

Rules:
- Be objective.
- Do NOT exaggerate.
- Do NOT recommend purchasing.
- Focus only on review-derived insights.
- Return structured JSON.

Return ONLY JSON in the following format:
[
  {
    "productId": "p1",
    "pros": [],
    "cons": [],
    "sentiment_score": 0.0,
    "common_complaints": [],
    "durability_assessment": "Low"
  }
]"""


class ReviewParseError(ValueError):
    pass


def heuristic_insight(product_id: str) -> ReviewInsight:
    return ReviewInsight(
        product_id=product_id,
        pros=HEURISTIC_PROS,
        cons=HEURISTIC_CONS,
        sentiment_score=DEFAULT_SENTIMENT,
        common_complaints=HEURISTIC_COMPLAINTS,
        durability_assessment="Medium",
    )


def _strings(raw: Any, limit: Optional[int] = None) -> tuple:
    if not isinstance(raw, list):
        return ()
    items = [s.strip() for s in raw if isinstance(s, str) and s.strip()]
    return tuple(items[:limit] if limit else items)


def parse_insights(raw: str) -> Dict[str, ReviewInsight]:
    """Parse the LLM reply into insights keyed by product id. Raises ReviewParseError on a bad shape."""
    try:
        items = json.loads(strip_code_fences(raw))
    except json.JSONDecodeError as exc:
        raise ReviewParseError(f"review analysis returned invalid JSON: {exc}") from exc
    except TypeError as exc:
        raise ReviewParseError(f"review analysis returned non-text output: {exc}") from exc
    if not isinstance(items, list):
        raise ReviewParseError("review analysis did not return an array")

    insights: Dict[str, ReviewInsight] = {}
    for item in items:
        if not isinstance(item, dict) or item.get("productId") in (None, ""):
            raise ReviewParseError("review insight without a productId")
        sentiment = coerce_number(item.get("sentiment_score"))
        sentiment = DEFAULT_SENTIMENT if sentiment is None else min(max(sentiment, 0.0), 10.0)
        durability = item.get("durability_assessment")
        if durability not in DURABILITY_LEVELS:
            durability = "Medium"
        product_id = str(item["productId"])
        insights[product_id] = ReviewInsight(
            product_id=product_id,
            pros=_strings(item.get("pros"), MAX_POINTS),
            cons=_strings(item.get("cons"), MAX_POINTS),
            sentiment_score=sentiment,
            common_complaints=_strings(item.get("common_complaints")),
            durability_assessment=durability,
        )
    return insights


class ReviewIntelligenceAgent:
    def __init__(self, client: Optional[ChatCompletionClient] = None, model: str = "openrouter/pony-alpha"):
        self.client = client
        self.model = model

    def analyze(self, products: List[ProductRecord]) -> Outcome[List[ReviewInsight]]:
        if self.client is None:
            return Fallback(self._heuristic(products), "review analysis not configured")

        payload = [
            {"id": p.id, "title": p.title, "review_snippets": list(p.review_snippets)}
            for p in products
        ]
        user_prompt = f"Products:\n{json.dumps(payload, indent=2, ensure_ascii=False)}"
        try:
            raw = self.client.complete(self.model, REVIEW_SYSTEM_PROMPT, user_prompt, temperature=0.3)
            parsed = parse_insights(raw)
        except (CollaboratorError, ReviewParseError) as exc:
            logger.warning("Review analysis failed, using heuristic insights: %s", exc)
            return Fallback(self._heuristic(products), str(exc))

        insights: List[ReviewInsight] = []
        for product in products:
            insight = parsed.get(product.id)
            if insight is None:
                logger.info("No review insight returned for %s; using heuristic", product.id)
                insight = heuristic_insight(product.id)
            insights.append(insight)
        return Ok(insights)

    def _heuristic(self, products: List[ProductRecord]) -> List[ReviewInsight]:
        return [heuristic_insight(p.id) for p in products]
