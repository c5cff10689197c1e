"""
Query — filter → sort → aggregate over a loaded order list.

Key concepts:
- FilterCriteria fields are Options: Nothing = no constraint
- parse_criteria() turns raw widget text into criteria (or InvalidCriteria)
- query() is pure: newest first, ties keep input order, exact Decimal revenue

Level 4: orderview.query
Level 2: kungfu.Result / kungfu.Option
"""

from decimal import Decimal

from kungfu import Ok, Error, Some

from orderview import query as Q
from orderview.domain import FilterCriteria, OrderStatus, Ready
from orderview.view import build_view
from examples._infra import SAMPLE_ORDERS, banner, print_view, run


def show(criteria: FilterCriteria) -> None:
    print_view(build_view(Ready(SAMPLE_ORDERS), SAMPLE_ORDERS, criteria))


async def main() -> None:
    banner("1. No criteria: everything, newest first")
    show(FilterCriteria())

    banner("2. Built directly: paid orders of at least $15")
    show(FilterCriteria(status=OrderStatus.PAID, min_total=Some(Decimal(15))))

    banner("3. Parsed from widget text: search 'BOB'")
    match Q.parse_criteria(search="BOB", status="all", min_total=""):
        case Ok(criteria):
            show(criteria)
        case Error(invalid):
            print(f"  ✗ {invalid}")

    banner("4. Invalid input never reaches the query")
    for raw in ["12abc", "-5", "NaN"]:
        match Q.parse_min_total(raw):
            case Ok(minimum):
                print(f"  {raw!r:8} → {minimum}")
            case Error(invalid):
                print(f"  {raw!r:8} → ✗ {invalid.message}")

    banner("5. Nothing matches")
    show(FilterCriteria(search_text=Some("zed")))

    result = Q.query(SAMPLE_ORDERS, FilterCriteria(status=OrderStatus.CANCELLED))
    print(f"\nCancelled revenue (raw Decimal): {result.total_revenue!r}")


if __name__ == "__main__":
    run(main)
