"""Invoice math and validation rules

Pure functions shared by the invoice use cases. Money is Decimal and is
rounded half-up to cents.
"""

from calendar import monthrange
from dataclasses import dataclass
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Optional, Protocol, Sequence, Union
from src.domain.invoice import RecurringFrequency

CENTS = Decimal("0.01")
HUNDRED = Decimal("100")

Number = Union[Decimal, int, float, str]

_PERIOD_MONTHS = {
    RecurringFrequency.MONTHLY: 1,
    RecurringFrequency.QUARTERLY: 3,
    RecurringFrequency.YEARLY: 12,
}


class LineItemLike(Protocol):
    description: str
    quantity: Decimal
    unit_price: Decimal
    amount: Decimal


@dataclass(frozen=True)
class InvoiceTotals:
    subtotal: Decimal
    tax_amount: Decimal
    total: Decimal


def to_decimal(value: Number) -> Decimal:
    if isinstance(value, Decimal):
        return value
    # str() keeps 0.1 as 0.1 instead of its binary expansion
    return Decimal(str(value))


def round2(value: Number) -> Decimal:
    return to_decimal(value).quantize(CENTS, rounding=ROUND_HALF_UP)


def calculate_totals(line_items: Iterable[LineItemLike], tax_rate: Number = 0) -> InvoiceTotals:
    """
    Compute subtotal, tax and total for a set of line items

    Args:
        line_items: Items exposing ``amount``
        tax_rate: Percentage in [0, 100]

    Returns:
        InvoiceTotals with every value rounded to cents
    """
    subtotal = round2(sum((to_decimal(item.amount) for item in line_items), Decimal("0")))
    tax_amount = round2(subtotal * to_decimal(tax_rate) / HUNDRED)
    return InvoiceTotals(
        subtotal=subtotal,
        tax_amount=tax_amount,
        total=subtotal + tax_amount,
    )


def line_amount(quantity: Number, unit_price: Number) -> Decimal:
    return round2(to_decimal(quantity) * to_decimal(unit_price))


def validate_invoice(
    client_name: Optional[str],
    line_items: Optional[Sequence[LineItemLike]],
    tax_rate: Optional[Number] = None,
    subtotal: Optional[Number] = None,
    total_amount: Optional[Number] = None,
) -> Optional[str]:
    """
    Validate invoice data before save

    Returns:
        None when valid, otherwise the reason shown to the user
    """
    if not client_name or not client_name.strip():
        return "Client name is required"

    if not line_items:
        return "At least one line item is required"

    for item in line_items:
        if not item.description or not item.description.strip():
            return "Line item description is required"
        if to_decimal(item.quantity) <= 0:
            return "Line item quantity must be greater than 0"
        if to_decimal(item.unit_price) < 0:
            return "Line item unit price cannot be negative"
        if to_decimal(item.amount) < 0:
            return "Line item amount cannot be negative"

    if tax_rate is not None and not (0 <= to_decimal(tax_rate) <= 100):
        return "Tax rate must be between 0 and 100"

    if subtotal is not None and to_decimal(subtotal) < 0:
        return "Subtotal cannot be negative"

    if total_amount is not None and to_decimal(total_amount) < 0:
        return "Total amount cannot be negative"

    return None


def add_period(start: date, frequency: RecurringFrequency) -> date:
    """
    Advance a date by one billing period

    The day is clamped to the end of the target month, so Jan 31 + 1 month
    is Feb 28/29.
    """
    months = _PERIOD_MONTHS[RecurringFrequency(frequency)]
    month_index = start.month - 1 + months
    year = start.year + month_index // 12
    month = month_index % 12 + 1
    day = min(start.day, monthrange(year, month)[1])
    return date(year, month, day)
