from decimal import Decimal

import pytest

from app.domain.cart_pricing import CartLine, CartPricingPolicy, to_money
from app.domain.enums import CartMode


def _rent(price="1000", months=12, deposit="2000", fee="50", selected=True) -> CartLine:
    return CartLine(
        mode=CartMode.RENT,
        price=Decimal(price),
        months=months,
        deposit=Decimal(deposit),
        maintenance_fee=Decimal(fee),
        selected=selected,
    )


def _buy(price="200000", fee="50", selected=True) -> CartLine:
    return CartLine(
        mode=CartMode.BUY,
        price=Decimal(price),
        months=None,
        deposit=Decimal("0"),
        maintenance_fee=Decimal(fee),
        selected=selected,
    )


# ============================================================================
# SNAPSHOT TESTS
# ============================================================================


def test_rent_snapshot_deposit_is_monthly_rent_times_deposit_months():
    snapshot = CartPricingPolicy(deposit_months=2).snapshot(
        CartMode.RENT, monthly_rent=1500, sale_price=300000, maintenance_fee=75
    )
    assert snapshot.price == Decimal("1500.00")
    assert snapshot.deposit == Decimal("3000.00")
    assert snapshot.maintenance_fee == Decimal("75.00")


def test_buy_snapshot_has_no_deposit():
    snapshot = CartPricingPolicy().snapshot(
        CartMode.BUY, monthly_rent=1500, sale_price=300000, maintenance_fee=None
    )
    assert snapshot.price == Decimal("300000.00")
    assert snapshot.deposit == Decimal("0.00")
    assert snapshot.maintenance_fee == Decimal("0.00")


# ============================================================================
# LINE TESTS
# ============================================================================


def test_rent_line_multiplies_price_and_fee_by_months():
    breakdown = CartPricingPolicy().line(_rent(months=6))
    assert breakdown.subtotal == Decimal("6000.00")
    assert breakdown.deposit == Decimal("2000.00")
    assert breakdown.maintenance == Decimal("300.00")
    assert breakdown.total == Decimal("8300.00")


def test_buy_line_charges_a_year_of_maintenance():
    breakdown = CartPricingPolicy().line(_buy())
    assert breakdown.subtotal == Decimal("200000.00")
    assert breakdown.deposit == Decimal("0.00")
    assert breakdown.maintenance == Decimal("600.00")
    assert breakdown.total == Decimal("200600.00")


def test_charge_amount_excludes_deposit_and_maintenance():
    policy = CartPricingPolicy()
    assert policy.charge_amount(_rent(months=3)) == Decimal("3000.00")
    assert policy.charge_amount(_buy()) == Decimal("200000.00")


# ============================================================================
# SUMMARY TESTS
# ============================================================================


def test_summary_only_counts_selected_lines():
    totals = CartPricingPolicy().summarize(
        [_rent(months=12), _buy(), _rent(months=1, selected=False)]
    )
    assert totals.rent_total == Decimal("12000.00")
    assert totals.buy_total == Decimal("200000.00")
    assert totals.subtotal == Decimal("212000.00")
    assert totals.deposit_total == Decimal("2000.00")
    assert totals.maintenance_total == Decimal("1200.00")
    assert totals.taxes == Decimal("0.00")
    assert totals.grand_total == Decimal("215200.00")
    assert totals.selected_count == 2
    assert totals.total_items == 3


def test_summary_taxes_apply_to_subtotal_only():
    totals = CartPricingPolicy(tax_rate=Decimal("0.10")).summarize([_rent(months=2)])
    assert totals.subtotal == Decimal("2000.00")
    assert totals.taxes == Decimal("200.00")
    assert totals.grand_total == Decimal("2000.00") + Decimal("2000.00") + Decimal("100.00") + Decimal("200.00")


def test_summary_of_empty_cart_is_zero():
    totals = CartPricingPolicy(tax_rate=Decimal("0.2")).summarize([])
    assert totals.grand_total == Decimal("0.00")
    assert totals.selected_count == 0
    assert totals.total_items == 0


@pytest.mark.parametrize(
    "value,expected",
    [
        (None, Decimal("0.00")),
        (1, Decimal("1.00")),
        (0.125, Decimal("0.13")),
        (Decimal("2.345"), Decimal("2.35")),
        ("10", Decimal("10.00")),
    ],
)
def test_to_money_rounds_half_up(value, expected):
    assert to_money(value) == expected
