"""
Output Builder

Constructs the API response from a settlement result.
"""

from decimal import Decimal

from .models import SettlementResult
from .money import format_brl, to_money


def _pct(rate: Decimal, places: int = 1) -> str:
    """Format a rate as a percentage string, e.g. 0.015 -> 1.5%."""
    return f"{float(rate) * 100:.{places}f}%"


class OutputBuilder:
    """Builds the settlement output response."""

    def build(self, result: SettlementResult, include_agency: bool = False) -> dict:
        """
        Construct the response dict.

        The agency section is only attached when include_agency is set; it
        is computed either way.
        """
        output = {
            "policy": result.policy_name,
            "consultant": self._build_consultant(result),
            "revenue": self._build_revenue(result),
            "calculations": self._build_calculations(result),
            "franchise": self._build_franchise(result),
            "badge": self._build_badge(result),
            "authorized_discounts": [e.to_dict() for e in result.authorized_entries],
        }
        if include_agency:
            output["agency"] = self._build_agency(result)
        return output

    def _build_consultant(self, result: SettlementResult) -> dict:
        identity = result.input.identity
        return {
            "name": identity.name,
            "tax_id": identity.tax_id,
            "payout_key": identity.payout_key,
        }

    def _build_revenue(self, result: SettlementResult) -> dict:
        data = result.input
        return {
            "sales_revenue": to_money(data.sales_revenue),
            "discount_given": to_money(data.discount_given),
            "hospitality": [
                {
                    "key": s.key,
                    "label": s.label,
                    "revenue": to_money(s.revenue),
                    "rate": float(s.rate),
                    "commission": to_money(s.commission),
                }
                for s in result.hospitality.segments
            ],
            "total_authorized": to_money(result.total_authorized),
            "commissionable_base_revenue": to_money(result.commissionable_base_revenue),
            "reimbursements": to_money(data.reimbursements),
            "advances": to_money(data.advances),
        }

    def _build_calculations(self, result: SettlementResult) -> dict:
        """Build calculations section with value and dynamic description for each field."""
        data = result.input
        tier = result.tier
        franchise = result.franchise
        badge = result.badge

        base = to_money(result.commissionable_base_revenue)
        adjustments = to_money(data.adjustments)

        return {
            "commissionable_base_revenue": {
                "value": base,
                "description": (
                    f"sales ({format_brl(data.sales_revenue)}) - authorized discounts "
                    f"({format_brl(result.total_authorized)}) = {format_brl(base)}"
                ),
            },
            "tier_bracket": {
                "value": tier.bracket_label,
                "description": f"Commission bracket for base revenue of {format_brl(base)}",
            },
            "percentage_commission": {
                "value": to_money(tier.percentage_commission),
                "description": f"{_pct(tier.percentage, 0)} × {format_brl(base)} = {format_brl(tier.percentage_commission)}",
            },
            "flat_addition": {
                "value": to_money(tier.flat_addition),
                "description": (
                    "Fixed monthly stipend replacing the bracket's flat amount"
                    if tier.is_fixed_stipend else "Bracket flat amount"
                ),
            },
            "goal_bonus": {
                "value": to_money(tier.goal_bonus),
                "description": f"Goal bonus for bracket {tier.bracket_label}",
            },
            "tier_total": {
                "value": to_money(tier.total),
                "description": (
                    f"percentage ({format_brl(tier.percentage_commission)}) + flat "
                    f"({format_brl(tier.flat_addition)}) + goal bonus ({format_brl(tier.goal_bonus)})"
                ),
            },
            "hospitality_commission": {
                "value": to_money(result.hospitality.total_commission),
                "description": " + ".join(
                    f"{s.label} {_pct(s.rate)} × {format_brl(s.revenue)}"
                    for s in result.hospitality.segments
                ) or "No hospitality revenue",
            },
            "performance_bonus": {
                "value": to_money(badge.performance_bonus),
                "description": (
                    f"{badge.label}: {_pct(badge.bonus_percentage)} × {format_brl(data.sales_revenue)}"
                    if badge.has_badge else f"{badge.label}: no performance bonus"
                ),
            },
            "total_consultant_commission": {
                "value": to_money(result.total_consultant_commission),
                "description": (
                    f"tier ({format_brl(tier.total)}) + hospitality "
                    f"({format_brl(result.hospitality.total_commission)}) + performance "
                    f"({format_brl(badge.performance_bonus)})"
                ),
            },
            "excess_discount_deduction": {
                "value": to_money(franchise.clawback),
                "description": (
                    f"discount ({format_brl(data.discount_given)}) - franchise ceiling "
                    f"({format_brl(franchise.ceiling)}), deducted in full"
                    if franchise.clawback > 0 else "Discount within the franchise - no deduction"
                ),
            },
            "adjustments": {
                "value": adjustments,
                "description": (
                    f"reimbursements ({format_brl(data.reimbursements)}) - advances "
                    f"({format_brl(data.advances)})"
                ),
            },
            "net_payable": {
                "value": to_money(result.net_payable),
                "description": (
                    f"commission ({format_brl(result.total_consultant_commission)}) - excess "
                    f"({format_brl(franchise.clawback)}) + adjustments ({format_brl(adjustments)})"
                ),
            },
        }

    def _build_franchise(self, result: SettlementResult) -> dict:
        franchise = result.franchise
        return {
            "enforced": franchise.enforced,
            "ceiling": to_money(franchise.ceiling),
            "discount_ratio": round(float(franchise.discount_ratio), 4),
            "excess_discount": to_money(franchise.excess_discount),
            "usage_percentage": to_money(franchise.usage_percentage),
        }

    def _build_badge(self, result: SettlementResult) -> dict:
        badge = result.badge
        return {
            "key": badge.key,
            "label": badge.label,
            "bonus_percentage": float(badge.bonus_percentage),
            "performance_bonus": to_money(badge.performance_bonus),
            "advice": badge.advice,
            "headrooms": [
                {
                    "key": h.key,
                    "name": h.name,
                    "max_discount_ratio": float(h.max_discount_ratio),
                    "ceiling": to_money(h.ceiling),
                    "headroom": to_money(h.headroom),
                    "is_lost": h.is_lost,
                }
                for h in badge.headrooms
            ],
        }

    def _build_agency(self, result: SettlementResult) -> dict:
        agency = result.agency
        return {
            "gross_revenue": to_money(agency.gross_revenue),
            "supplier_pass_through": to_money(agency.supplier_pass_through),
            "agency_gross_margin": to_money(agency.agency_gross_margin),
            "discount_given": to_money(result.input.discount_given),
            "margin_after_discount": to_money(agency.margin_after_discount),
            "net_commission_paid": to_money(agency.net_commission_paid),
            "invoice_base": to_money(agency.invoice_base),
            "estimated_tax": to_money(agency.estimated_tax),
            "agency_net_profit": to_money(agency.agency_net_profit),
            "total_authorized": to_money(result.total_authorized),
        }
