"""
Sources — concrete OrderSource implementations.

    from orderview import source as Src

    live = Src.HttpSource(SourceConfig("https://shop.example.com"))
    fake = Src.MemorySource(orders, latency=0.05)

Payload decoding lives in Src.OrderPayload / Src.decode_orders_json.
"""

from orderview.source._codec import (
    OrderPayload,
    OrderListPayload,
    decode_orders,
    decode_orders_json,
)
from orderview.source._memory import MemorySource
from orderview.source._http import HttpSource, classify

__all__ = (
    # Codec
    "OrderPayload",
    "OrderListPayload",
    "decode_orders",
    "decode_orders_json",
    # Sources
    "MemorySource",
    "HttpSource",
    "classify",
)
