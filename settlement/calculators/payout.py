"""
Payout Calculator

Calculates the consultant's total commission and net payable.
"""

from decimal import Decimal

from ..models import ProcessingContext
from ..money import round2


class PayoutCalculator:
    """Calculates what the agency owes the consultant."""

    def total_commission(self, ctx: ProcessingContext) -> Decimal:
        """Tier total + hospitality commission + performance bonus."""
        return round2(
            ctx.tier.total
            + ctx.hospitality.total_commission
            + ctx.badge.performance_bonus
        )

    def calculate(self, ctx: ProcessingContext) -> Decimal:
        """
        Calculate net payable after clawback and adjustments.

        Net Payable = Total Consultant Commission
                    - Excess Discount (if franchise enforced)
                    + Reimbursements
                    - Advances

        A negative result means the consultant owes the agency and is
        returned as is.
        """
        data = ctx.input

        net = ctx.total_consultant_commission
        net -= ctx.franchise.clawback
        net += data.reimbursements
        net -= data.advances

        return round2(net)
