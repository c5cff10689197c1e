"""Shared fixtures."""

from __future__ import annotations

import pytest

from orderview.diagnostics import MemorySink
from orderview.domain import Order
from tests.factories import ALICE, BOB, GatedSource


@pytest.fixture
def scenario_orders() -> list[Order]:
    return [ALICE, BOB]


@pytest.fixture
def sink() -> MemorySink:
    return MemorySink()


@pytest.fixture
def gated() -> GatedSource:
    return GatedSource()
