"""Unit tests for invoice math and validation rules"""

import pytest
from datetime import date
from decimal import Decimal
from types import SimpleNamespace

from src.domain.invoice import RecurringFrequency
from src.domain.invoice_rules import (
    add_period,
    calculate_totals,
    line_amount,
    round2,
    validate_invoice,
)


def line(amount, description="Work", quantity="1", unit_price=None):
    return SimpleNamespace(
        description=description,
        quantity=Decimal(quantity),
        unit_price=Decimal(unit_price if unit_price is not None else amount),
        amount=Decimal(amount),
    )


class TestCalculateTotals:
    """Test subtotal / tax / total computation"""

    def test_two_lines_with_eight_percent_tax(self):
        """100 + 25 at 8% -> 125.00 / 10.00 / 135.00"""
        totals = calculate_totals([line("100"), line("25")], Decimal("8"))

        assert totals.subtotal == Decimal("125.00")
        assert totals.tax_amount == Decimal("10.00")
        assert totals.total == Decimal("135.00")

    def test_tax_rounds_half_up(self):
        """10.05 at 5% = 0.5025 -> 0.50; 10.10 at 5% = 0.505 -> 0.51"""
        assert calculate_totals([line("10.05")], 5).tax_amount == Decimal("0.50")
        assert calculate_totals([line("10.10")], 5).tax_amount == Decimal("0.51")

    def test_no_lines(self):
        totals = calculate_totals([], Decimal("10"))

        assert totals.subtotal == Decimal("0.00")
        assert totals.tax_amount == Decimal("0.00")
        assert totals.total == Decimal("0.00")

    def test_idempotent(self):
        """Same input, same totals"""
        items = [line("19.99"), line("0.01"), line("333.33")]
        assert calculate_totals(items, "7.25") == calculate_totals(items, "7.25")

    def test_total_is_subtotal_plus_tax(self):
        totals = calculate_totals([line("57.13"), line("2.87")], Decimal("19"))
        assert totals.total == totals.subtotal + totals.tax_amount

    def test_float_inputs_are_exact(self):
        """0.1 + 0.2 must not drift"""
        totals = calculate_totals(
            [SimpleNamespace(amount=0.1), SimpleNamespace(amount=0.2)], 0
        )
        assert totals.subtotal == Decimal("0.30")


class TestLineAmount:
    def test_quantity_times_price(self):
        assert line_amount("2.5", "10.00") == Decimal("25.00")

    def test_rounded_to_cents(self):
        assert line_amount("3", "0.333") == Decimal("1.00")

    def test_round2_half_up(self):
        assert round2("2.675") == Decimal("2.68")


class TestValidateInvoice:
    """Test validation messages"""

    def test_valid_invoice(self):
        assert validate_invoice("Acme", [line("10")], Decimal("8")) is None

    @pytest.mark.parametrize("client_name", [None, "", "   "])
    def test_client_name_required(self, client_name):
        assert validate_invoice(client_name, [line("10")]) == "Client name is required"

    def test_at_least_one_line(self):
        assert validate_invoice("Acme", []) == "At least one line item is required"

    def test_line_description_required(self):
        assert validate_invoice("Acme", [line("10", description=" ")]) == "Line item description is required"

    def test_quantity_must_be_positive(self):
        reason = validate_invoice("Acme", [line("0", quantity="0", unit_price="5")])
        assert reason == "Line item quantity must be greater than 0"

    def test_unit_price_cannot_be_negative(self):
        reason = validate_invoice("Acme", [line("0", unit_price="-1")])
        assert reason == "Line item unit price cannot be negative"

    def test_amount_cannot_be_negative(self):
        reason = validate_invoice("Acme", [line("-5", unit_price="0")])
        assert reason == "Line item amount cannot be negative"

    @pytest.mark.parametrize("tax_rate", [Decimal("-0.01"), Decimal("100.01")])
    def test_tax_rate_range(self, tax_rate):
        assert validate_invoice("Acme", [line("10")], tax_rate) == "Tax rate must be between 0 and 100"

    @pytest.mark.parametrize("tax_rate", [Decimal("0"), Decimal("100")])
    def test_tax_rate_bounds_are_inclusive(self, tax_rate):
        assert validate_invoice("Acme", [line("10")], tax_rate) is None

    def test_negative_totals(self):
        assert validate_invoice("Acme", [line("10")], 0, subtotal=-1) == "Subtotal cannot be negative"
        assert validate_invoice("Acme", [line("10")], 0, total_amount=-1) == "Total amount cannot be negative"


class TestAddPeriod:
    def test_monthly(self):
        assert add_period(date(2024, 1, 1), RecurringFrequency.MONTHLY) == date(2024, 2, 1)

    def test_quarterly_crosses_year(self):
        assert add_period(date(2024, 11, 15), RecurringFrequency.QUARTERLY) == date(2025, 2, 15)

    def test_yearly(self):
        assert add_period(date(2024, 3, 10), RecurringFrequency.YEARLY) == date(2025, 3, 10)

    def test_clamps_to_month_end(self):
        assert add_period(date(2024, 1, 31), RecurringFrequency.MONTHLY) == date(2024, 2, 29)
        assert add_period(date(2023, 1, 31), RecurringFrequency.MONTHLY) == date(2023, 2, 28)

    def test_leap_day_yearly(self):
        assert add_period(date(2024, 2, 29), RecurringFrequency.YEARLY) == date(2025, 2, 28)

    def test_accepts_string_frequency(self):
        assert add_period(date(2024, 1, 1), "monthly") == date(2024, 2, 1)
