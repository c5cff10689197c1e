"""The /api/orders JSON payload."""

from __future__ import annotations

import json
from decimal import Decimal

import pytest
from pydantic import ValidationError

from orderview.domain import Order, OrderStatus
from orderview.source import OrderPayload, decode_orders, decode_orders_json

PAYLOAD = [
    {"id": 1, "customerName": "Alice", "total": 10.5, "status": "paid", "createdAt": "2024-01-01T00:00:00Z"},
    {"id": 2, "customerName": "Bob", "total": 20, "status": "pending", "createdAt": "2024-01-02T00:00:00Z"},
]


def test_decodes_camel_case_payload():
    orders = decode_orders_json(json.dumps(PAYLOAD))

    assert orders == (
        Order(1, "Alice", Decimal("10.5"), OrderStatus.PAID, "2024-01-01T00:00:00Z"),
        Order(2, "Bob", Decimal(20), OrderStatus.PENDING, "2024-01-02T00:00:00Z"),
    )


def test_decodes_parsed_json_and_keeps_order():
    orders = decode_orders(list(reversed(PAYLOAD)))
    assert [order.id for order in orders] == [2, 1]


def test_unknown_keys_are_ignored():
    entry = dict(PAYLOAD[0], note="gift wrap")
    assert decode_orders([entry])[0].customer_name == "Alice"


def test_snake_case_names_are_accepted():
    payload = OrderPayload(
        id=3,
        customer_name="Carol",
        total=Decimal("5.00"),
        status=OrderStatus.SHIPPED,
        created_at="2024-02-01T10:00:00Z",
    )
    assert payload.to_domain().status is OrderStatus.SHIPPED


def test_empty_list():
    assert decode_orders_json(b"[]") == ()


@pytest.mark.parametrize(
    "change",
    [
        {"status": "refunded"},
        {"total": -1},
        {"total": "NaN"},
        {"createdAt": "yesterday"},
        {"customerName": None},
    ],
)
def test_one_bad_entry_rejects_the_payload(change):
    bad = dict(PAYLOAD[1], **change)
    with pytest.raises(ValidationError):
        decode_orders([PAYLOAD[0], bad])


def test_missing_field_rejects_the_payload():
    entry = {key: value for key, value in PAYLOAD[0].items() if key != "createdAt"}
    with pytest.raises(ValidationError):
        decode_orders([entry])


@pytest.mark.parametrize("body", ['{"orders": []}', "not json", "null"])
def test_non_list_body_is_rejected(body):
    with pytest.raises(ValidationError):
        decode_orders_json(body)


@pytest.mark.parametrize(
    "change",
    [
        {"id": "7"},
        {"id": True},
        {"id": 1.5},
        {"customerName": 42},
        {"total": "10"},
        {"total": True},
    ],
)
def test_ill_typed_values_are_not_coerced(change):
    bad = dict(PAYLOAD[1], **change)
    with pytest.raises(ValidationError):
        decode_orders_json(json.dumps([bad]))


@pytest.mark.parametrize(
    "created_at",
    [
        "2024-01-01T00:00:00+09:00",
        "2024-01-01T00:00:00Z garbage",
        "2024-01-01T00:00:00",
        "2024-01-01 00:00:00Z",
        "2024-01-01T00:00:00.5Z",
    ],
)
def test_created_at_must_be_fixed_width_utc(created_at):
    bad = dict(PAYLOAD[1], createdAt=created_at)
    with pytest.raises(ValidationError):
        decode_orders_json(json.dumps([bad]))


def test_millisecond_timestamps_are_accepted_when_uniform():
    entries = [
        dict(PAYLOAD[0], createdAt="2024-01-01T00:00:00.000Z"),
        dict(PAYLOAD[1], createdAt="2024-01-02T00:00:00.250Z"),
    ]
    assert [o.created_at for o in decode_orders(entries)] == [
        "2024-01-01T00:00:00.000Z",
        "2024-01-02T00:00:00.250Z",
    ]


def test_mixed_timestamp_precision_rejects_the_payload():
    entries = [PAYLOAD[0], dict(PAYLOAD[1], createdAt="2024-01-02T00:00:00.000Z")]
    with pytest.raises(ValidationError):
        decode_orders(entries)


def test_duplicate_ids_reject_the_payload():
    duplicate = dict(PAYLOAD[1], id=PAYLOAD[0]["id"])
    with pytest.raises(ValidationError, match="duplicate order id 1"):
        decode_orders_json(json.dumps([PAYLOAD[0], duplicate]))
