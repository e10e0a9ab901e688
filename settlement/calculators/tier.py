"""
Tier Commission Resolver

Maps the commissionable base revenue to a commission bracket.
"""

from decimal import Decimal

from ..models import ProcessingContext, TierBracket, TierCommission
from ..money import ZERO, round2


class TierCommissionResolver:
    """Resolves bracket commission, percentage plus flat plus goal bonus."""

    def resolve(self, ctx: ProcessingContext) -> TierCommission:
        """Resolve the tier commission for the context's commissionable base."""
        data = ctx.input
        return self.resolve_amount(
            ctx.commissionable_base_revenue,
            ctx.policy.tier_brackets,
            has_fixed_stipend=data.has_fixed_stipend,
            fixed_stipend_amount=data.fixed_stipend_amount,
        )

    def resolve_amount(
        self,
        revenue: Decimal,
        brackets: tuple[TierBracket, ...],
        has_fixed_stipend: bool = False,
        fixed_stipend_amount: Decimal = ZERO,
    ) -> TierCommission:
        """
        Calculate the commission for a revenue amount.

        A fixed stipend replaces only the bracket's flat addition; the
        percentage commission and goal bonus are kept.
        """
        revenue = max(ZERO, revenue)
        bracket = self.select_bracket(revenue, brackets)

        percentage_commission = round2(revenue * bracket.percentage)
        flat = max(ZERO, fixed_stipend_amount) if has_fixed_stipend else bracket.flat_addition

        return TierCommission(
            bracket_label=bracket.label,
            percentage=bracket.percentage,
            percentage_commission=percentage_commission,
            flat_addition=flat,
            goal_bonus=bracket.goal_bonus,
            total=round2(percentage_commission + flat + bracket.goal_bonus),
            is_fixed_stipend=has_fixed_stipend,
        )

    @staticmethod
    def select_bracket(revenue: Decimal, brackets: tuple[TierBracket, ...]) -> TierBracket:
        """First bracket whose upper bound covers the revenue."""
        for bracket in brackets:
            if bracket.contains(revenue):
                return bracket
        # Policies guarantee an unbounded last bracket
        return brackets[-1]
