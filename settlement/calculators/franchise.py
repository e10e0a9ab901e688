"""
Franchise Enforcer

Applies the discount franchise: the share of sales revenue a consultant
may give away as discount before the excess is clawed back.
"""

from decimal import Decimal

from ..models import FranchiseCheck, ProcessingContext
from ..money import ZERO, round2

HUNDRED = Decimal("100")


class FranchiseEnforcer:
    """Computes the franchise ceiling and any excess discount."""

    def apply(self, ctx: ProcessingContext) -> FranchiseCheck:
        """
        Check the consultant's own discount against the franchise.

        Authorized ledger entries are not part of this check. When the
        policy disables discount controls the figures are still reported
        but nothing is clawed back.
        """
        policy = ctx.policy
        sales = ctx.input.sales_revenue
        discount = ctx.input.discount_given

        ceiling = round2(sales * policy.franchise_rate)

        return FranchiseCheck(
            ceiling=ceiling,
            discount_ratio=self.discount_ratio(sales, discount),
            excess_discount=self.excess_discount(discount, ceiling),
            usage_percentage=self._usage_percentage(sales, discount, policy.franchise_rate),
            enforced=policy.discount_controls_enabled,
        )

    @staticmethod
    def discount_ratio(sales: Decimal, discount: Decimal) -> Decimal:
        """Discount over sales. No sales, no ratio."""
        if sales <= 0:
            return ZERO
        return discount / sales

    @staticmethod
    def excess_discount(discount: Decimal, ceiling: Decimal) -> Decimal:
        return round2(max(ZERO, discount - ceiling))

    def _usage_percentage(self, sales: Decimal, discount: Decimal, rate: Decimal) -> Decimal:
        """Share of the franchise already used, capped at 100."""
        if sales <= 0 or rate <= 0:
            return ZERO
        return min(HUNDRED, round2(discount / (sales * rate) * HUNDRED))
