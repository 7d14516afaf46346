"""Cart pricing rules: rent vs. buy line totals, deposits, maintenance and tax."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from app.domain.enums import CartMode

ZERO = Decimal("0")
CENT = Decimal("0.01")

# Buyers are quoted one year of maintenance up front.
BUY_MAINTENANCE_MONTHS = 12


def to_money(value) -> Decimal:
    """Coerce a stored or computed amount to a 2-decimal Decimal (None -> 0)."""
    if value is None:
        return ZERO.quantize(CENT)
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


@dataclass(frozen=True, slots=True)
class PriceSnapshot:
    price: Decimal
    deposit: Decimal
    maintenance_fee: Decimal


@dataclass(frozen=True, slots=True)
class CartLine:
    """The pricing-relevant view of one cart item."""

    mode: CartMode
    price: Decimal
    months: int | None
    deposit: Decimal
    maintenance_fee: Decimal
    selected: bool = True


@dataclass(frozen=True, slots=True)
class LineBreakdown:
    subtotal: Decimal
    deposit: Decimal
    maintenance: Decimal

    @property
    def total(self) -> Decimal:
        return self.subtotal + self.deposit + self.maintenance


@dataclass(frozen=True, slots=True)
class CartTotals:
    rent_total: Decimal
    buy_total: Decimal
    deposit_total: Decimal
    maintenance_total: Decimal
    taxes: Decimal
    selected_count: int
    total_items: int

    @property
    def subtotal(self) -> Decimal:
        return self.rent_total + self.buy_total

    @property
    def grand_total(self) -> Decimal:
        return self.subtotal + self.deposit_total + self.maintenance_total + self.taxes


@dataclass(frozen=True, slots=True)
class CartPricingPolicy:
    """Single source of truth for how a cart is priced.

    - rent: subtotal = price * months, maintenance = fee * months,
      deposit = the snapshot taken when the item was added
      (``deposit_months`` times the monthly rent).
    - buy: subtotal = price, maintenance = fee * 12, deposit = 0.
    - taxes apply to the rent + buy subtotal only.
    """

    deposit_months: int = 2
    tax_rate: Decimal = ZERO

    def snapshot(
        self,
        mode: CartMode,
        *,
        monthly_rent,
        sale_price,
        maintenance_fee,
    ) -> PriceSnapshot:
        if mode == CartMode.RENT:
            rent = to_money(monthly_rent)
            return PriceSnapshot(
                price=rent,
                deposit=to_money(rent * self.deposit_months),
                maintenance_fee=to_money(maintenance_fee),
            )
        return PriceSnapshot(
            price=to_money(sale_price),
            deposit=to_money(ZERO),
            maintenance_fee=to_money(maintenance_fee),
        )

    def line(self, line: CartLine) -> LineBreakdown:
        price = to_money(line.price)
        fee = to_money(line.maintenance_fee)
        if line.mode == CartMode.RENT:
            months = line.months or 1
            return LineBreakdown(
                subtotal=to_money(price * months),
                deposit=to_money(line.deposit),
                maintenance=to_money(fee * months),
            )
        return LineBreakdown(
            subtotal=price,
            deposit=to_money(line.deposit),
            maintenance=to_money(fee * BUY_MAINTENANCE_MONTHS),
        )

    def charge_amount(self, line: CartLine) -> Decimal:
        """Amount collected at checkout for one line (deposit and maintenance excluded)."""
        return self.line(line).subtotal

    def summarize(self, lines: Iterable[CartLine]) -> CartTotals:
        rent_total = buy_total = deposit_total = maintenance_total = ZERO
        selected_count = 0
        total_items = 0

        for line in lines:
            total_items += 1
            if not line.selected:
                continue
            selected_count += 1
            breakdown = self.line(line)
            if line.mode == CartMode.RENT:
                rent_total += breakdown.subtotal
            else:
                buy_total += breakdown.subtotal
            deposit_total += breakdown.deposit
            maintenance_total += breakdown.maintenance

        taxes = to_money((rent_total + buy_total) * self.tax_rate)
        return CartTotals(
            rent_total=to_money(rent_total),
            buy_total=to_money(buy_total),
            deposit_total=to_money(deposit_total),
            maintenance_total=to_money(maintenance_total),
            taxes=taxes,
            selected_count=selected_count,
            total_items=total_items,
        )
