"""
Wire codec — the /api/orders JSON payload.

    [{"id": 1, "customerName": "Alice", "total": 10.5,
      "status": "paid", "createdAt": "2024-01-01T00:00:00Z"}, ...]

A single bad entry makes the whole payload malformed: a partial order
list would silently under-report revenue. Ids must be unique, and every
createdAt must be UTC ("Z") in one width so string order is time order.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Self

from pydantic import BaseModel, ConfigDict, Field, RootModel, field_validator, model_validator

from orderview.domain import Order, OrderStatus

ISO_UTC = r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(\.\d{3})?Z$"


class OrderPayload(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    id: int = Field(strict=True)
    customer_name: str = Field(alias="customerName", strict=True)
    total: Decimal = Field(ge=0, allow_inf_nan=False)
    status: OrderStatus
    created_at: str = Field(alias="createdAt", pattern=ISO_UTC)

    @field_validator("total", mode="before")
    @classmethod
    def _total_is_a_number(cls, value: object) -> object:
        if isinstance(value, (bool, str)):
            raise ValueError("total must be a number")
        return value

    def to_domain(self) -> Order:
        return Order(
            id=self.id,
            customer_name=self.customer_name,
            total=self.total,
            status=self.status,
            created_at=self.created_at,
        )


class OrderListPayload(RootModel[list[OrderPayload]]):
    @model_validator(mode="after")
    def _consistent(self) -> Self:
        seen: set[int] = set()
        for item in self.root:
            if item.id in seen:
                raise ValueError(f"duplicate order id {item.id}")
            seen.add(item.id)

        if len({len(item.created_at) for item in self.root}) > 1:
            raise ValueError("createdAt values mix timestamp precisions")
        return self

    def to_domain(self) -> tuple[Order, ...]:
        return tuple(item.to_domain() for item in self.root)


def decode_orders(payload: object) -> tuple[Order, ...]:
    """Decode already-parsed JSON. Raises pydantic.ValidationError."""
    return OrderListPayload.model_validate(payload).to_domain()


def decode_orders_json(body: str | bytes) -> tuple[Order, ...]:
    """Decode a raw JSON body. Raises pydantic.ValidationError."""
    return OrderListPayload.model_validate_json(body).to_domain()


__all__ = (
    "OrderPayload",
    "OrderListPayload",
    "decode_orders",
    "decode_orders_json",
)
