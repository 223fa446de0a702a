"""Line and order total arithmetic."""

from decimal import Decimal
from types import SimpleNamespace

import pytest

from pos.services import pricing

D = Decimal


def _product(price, pid="p-1"):
    return SimpleNamespace(id=pid, price=price)


class TestLineTotal:
    @pytest.mark.parametrize(
        "price,qty,discount,expected",
        [
            ("100.00", 2, "10.00", "190.00"),
            ("0.00", 3, "0", "0.00"),
            ("5.00", 1, "7.50", "0.00"),
            ("19.99", 3, "0.97", "59.00"),
        ],
    )
    def test_line_total_is_clamped_at_zero(self, price, qty, discount, expected):
        assert pricing.line_total(D(price), qty, D(discount)) == D(expected)

    def test_float_inputs_are_rounded_to_cents(self):
        assert pricing.line_total(0.1, 3, 0) == D("0.30")


class TestOrderTotal:
    def test_total_adds_tax_and_subtracts_discount(self):
        assert pricing.order_total(D("190.00"), D("15.00"), D("5.00")) == D("200.00")

    def test_total_never_negative(self):
        assert pricing.order_total(D("10.00"), D("0"), D("25.00")) == D("0.00")


class TestCalculate:
    def test_snapshot_uses_product_price_at_calculation_time(self):
        product = _product(D("100.00"))
        totals = pricing.calculate([(product, 2, D("10.00"))], D("15.00"), D("5.00"))
        product.price = D("999.00")

        (line,) = totals.lines
        assert line.unit_price == D("100.00")
        assert line.total_price == D("190.00")
        assert totals.subtotal == D("190.00")
        assert totals.total_amount == D("200.00")

    def test_subtotal_sums_clamped_lines(self):
        totals = pricing.calculate(
            [
                (_product("10.00", "a"), 1, "20.00"),
                (_product("4.25", "b"), 2, "0"),
            ]
        )
        assert [ln.total_price for ln in totals.lines] == [D("0.00"), D("8.50")]
        assert totals.subtotal == D("8.50")
        assert totals.total_amount == D("8.50")
