"""
orderview — load, filter and summarise an order list.

    from orderview import store as S   # Load lifecycle
    from orderview import query as Q   # Filter → sort → aggregate
    from orderview import view as V    # Display-ready snapshots

    store = S.OrderStore(MemorySource(orders))
    await store.load()
    print(V.view_of(store, criteria).summary)
"""

from orderview import domain
from orderview import store
from orderview import query
from orderview import source
from orderview import view
from orderview import config
from orderview import diagnostics
from orderview._types import Lazy
from orderview.domain import (
    Order,
    OrderStatus,
    FilterCriteria,
    LoadState,
)
from orderview.store import OrderStore, CompletionPolicy, LoadFailure

__version__ = "0.1.0"

__all__ = (
    "domain",
    "store",
    "query",
    "source",
    "view",
    "config",
    "diagnostics",
    "Lazy",
    "Order",
    "OrderStatus",
    "FilterCriteria",
    "LoadState",
    "OrderStore",
    "CompletionPolicy",
    "LoadFailure",
)
