import math
import re
from typing import Any, Optional, Sequence


def parse_price(raw: str) -> Optional[float]:
    """'₹12,999', 'Rs. 1,499' and '$19.99' all parse to their amount; the currency marker is ignored."""
    if not raw:
        return None

    # Replace commas used as thousand separators; keep decimal.
    normalized = raw.replace(",", "")
    price_match = re.search(r"(\d+(\.\d+)?)", normalized)
    if not price_match:
        return None

    try:
        return float(price_match.group(1))
    except ValueError:
        return None


def coerce_number(raw: Any) -> Optional[float]:
    """Numbers pass through; strings like "₹12,999" are parsed; NaN, infinities and anything else are None."""
    if isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float)):
        try:
            value = float(raw)
        except OverflowError:
            return None
    elif isinstance(raw, str):
        value = parse_price(raw)
    else:
        return None
    if value is None or not math.isfinite(value):
        return None
    return value


def strip_code_fences(text: str) -> str:
    """LLMs like to wrap JSON in ```json fences even when told not to."""
    text = re.sub(r"```json\s*", "", text, flags=re.IGNORECASE)
    text = re.sub(r"```\s*", "", text)
    return text.strip()


def mean(values: Sequence[float]) -> float:
    if not values:
        return 0.0
    return sum(values) / len(values)


def format_inr(amount: float) -> str:
    """18999.0 -> '18,999'; keeps decimals only when there are any."""
    if float(amount).is_integer():
        return f"{int(amount):,}"
    return f"{amount:,.2f}".rstrip("0").rstrip(".")
