"""
Query — filter → sort → aggregate over an order snapshot.

    from orderview import query as Q

    match Q.parse_criteria(search="bo", status="all", min_total=""):
        case Ok(criteria):
            result = Q.query(store.orders, criteria)
            print(result.count, result.total_revenue)

query() is a pure function: safe to call from any thread, on every
keystroke, with the same answer for the same inputs.
"""

from orderview.query._types import (
    QueryResult,
    InvalidCriteria,
)
from orderview.query._filter import (
    Predicate,
    matches_search,
    matches_status,
    matches_min_total,
    predicate,
)
from orderview.query._run import (
    newest_first,
    revenue,
    query,
)
from orderview.query._criteria import (
    parse_search,
    parse_status,
    parse_min_total,
    parse_criteria,
)

__all__ = (
    # Types
    "QueryResult",
    "InvalidCriteria",
    # Predicates
    "Predicate",
    "matches_search",
    "matches_status",
    "matches_min_total",
    "predicate",
    # Pipeline
    "newest_first",
    "revenue",
    "query",
    # Parsing
    "parse_search",
    "parse_status",
    "parse_min_total",
    "parse_criteria",
)
