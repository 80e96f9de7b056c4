import sys
from typing import List, Optional

from agents.supervisor import SupervisorAgent
from config import Settings, configure_logging
from models import Pick, ScoredProduct
from utils import format_inr


def run(query: str, settings: Optional[Settings] = None) -> None:
    settings = settings or Settings.from_env()
    configure_logging(settings.log_level)

    supervisor = SupervisorAgent.from_settings(settings)
    ctx = supervisor.run(query)

    for stage, reason in ctx.fallbacks.items():
        print(f"Note: {stage} used fallback data ({reason}).")

    print("\nRanked products:")
    print_table(list(ctx.scored_products))

    print("\nTop picks:")
    picks = ctx.top_picks
    for label, pick in (
        ("Best Overall", picks.best_overall),
        ("Best Budget", picks.best_budget),
        ("Premium Pick", picks.premium_pick),
    ):
        if pick is None:
            print(f"- {label}: n/a")
            continue
        print(f"- {label}: {format_pick(pick)}")

    print("\nWhy:")
    for line in ctx.reasoning:
        print(f"- {line}")

    print("\nDone.")


def format_pick(pick: Pick) -> str:
    lines = [f"{pick.title} | ₹{format_inr(pick.price)} | Smart Score {pick.smart_score:.1f}"]
    for reason in pick.why_selected:
        lines.append(f"     * {reason}")
    lines.append(f"     Trade-off: {pick.trade_off}")
    return "\n".join(lines)


def print_table(products: List[ScoredProduct]) -> None:
    """Render a compact table for a list of scored products."""
    if not products:
        print("  (no items)")
        return
    headers = ["#", "Title", "Price", "Rating", "Delivery", "Score", "Platform"]
    col_widths = [3, 44, 24, 8, 10, 8, 16]
    indent = "  "

    def trunc(text: str, width: int) -> str:
        return text if len(text) <= width else text[: width - 3] + "..."

    header_row = " ".join(
        f"{h:>{w}}" if i == 0 else f"{h:<{w}}" for i, (h, w) in enumerate(zip(headers, col_widths))
    )
    print(f"{indent}{header_row}")
    print(f"{indent}{'-' * len(header_row)}")

    for p in products:
        record = p.product
        price = f"₹{format_inr(record.price)}"
        if record.original_price and record.original_price > record.price:
            price = f"{price} (was ₹{format_inr(record.original_price)})"
        rating = f"{record.seller_rating:.1f}" if record.seller_rating is not None else "n/a"
        delivery = f"{record.delivery_days}d" if record.delivery_days is not None else "n/a"

        row = (
            f"{p.rank:>{col_widths[0]}} "
            f"{trunc(record.title, col_widths[1]):<{col_widths[1]}} "
            f"{trunc(price, col_widths[2]):<{col_widths[2]}} "
            f"{rating:<{col_widths[3]}} "
            f"{delivery:<{col_widths[4]}} "
            f"{p.smart_score:<{col_widths[5]}.1f} "
            f"{trunc(record.platform, col_widths[6]):<{col_widths[6]}}"
        )
        print(f"{indent}{row}")


if __name__ == "__main__":
    if len(sys.argv) < 2:
        print("Usage: python main.py \"what you are looking for\"  |  python main.py --serve")
        sys.exit(1)
    if sys.argv[1] == "--serve":
        from server import serve

        serve()
        sys.exit(0)
    user_query = " ".join(sys.argv[1:]).strip()
    if not user_query:
        print("Please provide a non-empty query in natural language.")
        sys.exit(1)

    try:
        run(user_query)
    except KeyboardInterrupt:
        sys.exit(1)
    except Exception as exc:  # noqa: BLE001
        print(f"Error: {exc}")
        sys.exit(1)
