"""
Criteria parsing — turn raw input text into FilterCriteria.

This is the producer-side validation: query() assumes well-formed
criteria, so malformed input is rejected here as InvalidCriteria and
never reaches the pipeline.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation

from kungfu import Result, Ok, Error, Option, Some, Nothing

from orderview.domain import ALL, FilterCriteria, OrderStatus, StatusFilter
from orderview.query._types import InvalidCriteria

# ═══════════════════════════════════════════════════════════════════════════════
# Field Parsers
# ═══════════════════════════════════════════════════════════════════════════════


def parse_search(text: str | None) -> Option[str]:
    """Blank input means no search; anything else is searched verbatim."""
    if text is None or not text.strip():
        return Nothing()
    return Some(text)


def parse_status(text: str) -> Result[StatusFilter, InvalidCriteria]:
    value = text.strip().lower()
    if value == ALL:
        return Ok(ALL)
    try:
        return Ok(OrderStatus(value))
    except ValueError:
        choices = ", ".join([ALL, *(status.value for status in OrderStatus)])
        return Error(InvalidCriteria("status", text, f"expected one of: {choices}"))


def parse_min_total(text: str | None) -> Result[Option[Decimal], InvalidCriteria]:
    """
    Parse a minimum-total field.

    Blank → Ok(Nothing()), a finite non-negative number → Ok(Some(amount)),
    anything else → Error(InvalidCriteria).
    """
    if text is None or not text.strip():
        return Ok(Nothing())
    try:
        amount = Decimal(text.strip())
    except InvalidOperation:
        return Error(InvalidCriteria("min_total", text, "not a number"))
    if not amount.is_finite():
        return Error(InvalidCriteria("min_total", text, "must be a finite number"))
    if amount < 0:
        return Error(InvalidCriteria("min_total", text, "must not be negative"))
    return Ok(Some(amount))


# ═══════════════════════════════════════════════════════════════════════════════
# parse_criteria() — All Fields at Once
# ═══════════════════════════════════════════════════════════════════════════════


def parse_criteria(
    search: str | None = None,
    status: str = ALL,
    min_total: str | None = None,
) -> Result[FilterCriteria, InvalidCriteria]:
    """
    Build FilterCriteria from the three input widgets' raw values.

    Example:
        match parse_criteria(search="bo", status="paid", min_total="15"):
            case Ok(criteria):
                result = query(orders, criteria)
            case Error(invalid):
                show_hint(str(invalid))
    """
    match parse_status(status):
        case Ok(status_filter):
            pass
        case Error(invalid):
            return Error(invalid)

    match parse_min_total(min_total):
        case Ok(minimum):
            pass
        case Error(invalid):
            return Error(invalid)

    return Ok(
        FilterCriteria(
            search_text=parse_search(search),
            status=status_filter,
            min_total=minimum,
        )
    )


__all__ = (
    "parse_search",
    "parse_status",
    "parse_min_total",
    "parse_criteria",
)
