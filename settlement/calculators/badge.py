"""
Performance Badge Classifier

Classifies a consultant's discount discipline into a badge tier and tells
them how much more discount each tier can absorb.
"""

from decimal import Decimal

from ..models import BadgeClassification, BadgeHeadroom, BadgeTier, ProcessingContext
from ..money import ZERO, format_brl, round2
from .franchise import FranchiseEnforcer

NO_SALES = BadgeClassification(key="no_sales", label="Sem Vendas", advice="Sem vendas no período.")
DISABLED = BadgeClassification(key="disabled", label="Sem Selo")
ALERT_LABEL = "Alerta de Margem"


class PerformanceBadgeClassifier:
    """Maps the discount ratio to a badge, bonus and per-tier headroom."""

    def classify(self, ctx: ProcessingContext) -> BadgeClassification:
        """
        Classify the consultant's badge.

        Badge tiers are checked in ascending ratio order; the first tier
        whose ratio covers the consultant's ratio wins. Past the last
        tier the consultant is in the alert state with no bonus.
        """
        policy = ctx.policy
        if not policy.discount_controls_enabled:
            return DISABLED

        sales = ctx.input.sales_revenue
        discount = ctx.input.discount_given
        tiers = policy.badge_tiers

        if sales <= 0:
            return NO_SALES

        ratio = FranchiseEnforcer.discount_ratio(sales, discount)
        headrooms = self.headrooms(sales, discount, tiers)

        for index, tier in enumerate(tiers):
            if ratio <= tier.max_discount_ratio:
                return BadgeClassification(
                    key=tier.key,
                    label=tier.label,
                    bonus_percentage=tier.bonus_percentage,
                    performance_bonus=round2(sales * tier.bonus_percentage),
                    headrooms=headrooms,
                    advice=self._advice(index, tiers, headrooms),
                )

        return BadgeClassification(
            key="alert",
            label=ALERT_LABEL,
            headrooms=headrooms,
            advice=self._alert_advice(policy.franchise_rate),
        )

    @staticmethod
    def headrooms(
        sales: Decimal, discount: Decimal, tiers: tuple[BadgeTier, ...]
    ) -> tuple[BadgeHeadroom, ...]:
        """Maximum discount compatible with each tier and what is left of it."""
        result = []
        for tier in tiers:
            exact_ceiling = sales * tier.max_discount_ratio
            ceiling = round2(exact_ceiling)
            result.append(BadgeHeadroom(
                key=tier.key,
                name=tier.name,
                max_discount_ratio=tier.max_discount_ratio,
                ceiling=ceiling,
                headroom=round2(max(ZERO, ceiling - discount)),
                is_lost=discount > exact_ceiling,
            ))
        return tuple(result)

    def _advice(self, index, tiers, headrooms) -> str:
        tier = tiers[index]
        left = format_brl(headrooms[index].headroom)
        if index == 0:
            return (
                f"Você está no {tier.name}! Ainda pode dar até {left} "
                f"de desconto sem perder o selo."
            )
        if index == len(tiers) - 1:
            return f"Atenção! Você está no {tier.name}. Restam apenas {left} antes de perder todos os selos."
        return (
            f"Você está no {tier.name}. Para recuperar o {tiers[0].name}, aumente suas vendas "
            f"sem desconto. Ainda tem {left} de margem para manter o {tier.name}."
        )

    def _alert_advice(self, franchise_rate: Decimal) -> str:
        percent = f"{franchise_rate * 100:.0f}%"
        return (
            f"Você ultrapassou a franquia de {percent}. Aumente o volume de vendas sem desconto "
            f"para diluir o percentual e recuperar seu selo."
        )
