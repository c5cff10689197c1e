"""
View — display-ready snapshots of the order list.

    from orderview import view as V

    snapshot = V.view_of(store, criteria)
    print(snapshot.heading)
    for row in snapshot.rows:
        print(row.id, row.customer_name, row.total, row.status)
    if snapshot.is_empty:
        print(snapshot.empty_message)
"""

from orderview.view._snapshot import (
    EMPTY_MESSAGE,
    format_money,
    OrderRow,
    ViewSnapshot,
    build_view,
    view_of,
)

__all__ = (
    "EMPTY_MESSAGE",
    "format_money",
    "OrderRow",
    "ViewSnapshot",
    "build_view",
    "view_of",
)
