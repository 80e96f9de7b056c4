import json
import logging
from typing import Any, Dict, List

from agents.llm_client import ChatCompletionClient, CollaboratorError
from utils import strip_code_fences

logger = logging.getLogger(__name__)

SEARCH_SYSTEM_PROMPT = """You are a Multi-Website Product Search Agent for Indian e-commerce.

Your job: Given a user's product query, simulate searching across major Indian e-commerce platforms and return realistic product listings.

PLATFORMS TO SEARCH (pick 3-5 most relevant):
- Amazon India
- Flipkart
- Croma
- Reliance Digital
- Myntra
- Nykaa
- Ajio
- Tata CLiQ
- JioMart
- Meesho

RULES:
1. Return EXACTLY 6 products from at least 3 different platforms.
2. Include a mix: 2 budget options, 2 mid-range, 2 premium.
3. Use realistic Indian pricing (INR). No currency symbols in the number fields.
4. Each product MUST include ALL fields listed below. No missing fields.
5. Generate realistic but varied review snippets (5 per product).
6. Historical prices should show a realistic downward trend over 5 data points.
7. Prices must be realistic for the Indian market.
8. product_url can be a realistic-looking URL for that platform.
9. Return ONLY a valid JSON array. No markdown code fences, no explanation text.

REQUIRED JSON FORMAT (array of objects):
[
  {
    "id": "p1",
    "platform": "Amazon",
    "title": "Product Name Brand Model",
    "brand": "BrandName",
    "price": 12999,
    "original_price": 17999,
    "seller_rating": 4.3,
    "delivery_days": 2,
    "warranty": "1 year",
    "product_url": "https://www.amazon.in/dp/EXAMPLE",
    "review_snippets": ["Review 1", "Review 2", "Review 3", "Review 4", "Review 5"],
    "historical_price": [17999, 16499, 15999, 14499, 12999]
  }
]

IMPORTANT: Return ONLY the JSON array. No other text."""


class WebSearchAgent:
    """Asks an LLM to play a multi-platform shopping search and returns the raw listings."""

    def __init__(self, client: ChatCompletionClient, model: str):
        self.client = client
        self.model = model

    def search(self, query: str) -> List[Dict[str, Any]]:
        user_prompt = (
            f'Search across multiple Indian e-commerce websites for: "{query}"\n\n'
            "Return 6 realistic product listings from different platforms, "
            "with varied pricing (budget to premium). All prices in INR."
        )
        raw = self.client.complete(
            self.model,
            SEARCH_SYSTEM_PROMPT,
            user_prompt,
            temperature=0.7,
            max_tokens=4000,
        )
        return parse_listing_array(raw)


def parse_listing_array(raw: str) -> List[Dict[str, Any]]:
    try:
        items = json.loads(strip_code_fences(raw))
    except json.JSONDecodeError as exc:
        raise CollaboratorError(f"search returned invalid JSON: {exc}") from exc
    if not isinstance(items, list) or not items:
        raise CollaboratorError("search returned an empty or non-array payload")
    listings = [item for item in items if isinstance(item, dict)]
    if not listings:
        raise CollaboratorError("search returned no product objects")
    logger.info("Web search returned %d listings", len(listings))
    return listings
