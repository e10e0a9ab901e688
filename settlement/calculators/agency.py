"""
Agency Margin Calculator

Derives the agency's revenue pass-through, margin, tax and profit.
"""

from ..models import AgencyWaterfall, ProcessingContext
from ..money import ZERO, round2


class AgencyMarginCalculator:
    """Builds the agency margin waterfall from a processed context."""

    def calculate(self, ctx: ProcessingContext) -> AgencyWaterfall:
        """
        Gross Revenue        = sales + hospitality revenue
        Supplier Pass-Through = base x sales pass-through + hospitality pass-through
        Gross Margin         = base x sales margin + hospitality agency margin
        Margin After Discount = Gross Margin - consultant discount
        Invoice Base         = Margin After Discount - commission actually paid
        Net Profit           = Invoice Base - estimated tax

        Always computed; whether it is shown is up to the caller.
        """
        policy = ctx.policy
        data = ctx.input
        base = ctx.commissionable_base_revenue
        segments = ctx.hospitality.segments

        gross_revenue = round2(data.sales_revenue + ctx.hospitality.total_revenue)

        hospitality_pass_through = sum((s.revenue * s.pass_through_rate for s in segments), ZERO)
        pass_through = round2(base * policy.sales_pass_through_rate + hospitality_pass_through)

        gross_margin = round2(base * policy.sales_margin_rate + ctx.hospitality.total_agency_margin)
        margin_after_discount = round2(gross_margin - data.discount_given)

        net_commission_paid = max(ZERO, ctx.net_payable)
        invoice_base = max(ZERO, round2(margin_after_discount - net_commission_paid))
        estimated_tax = round2(invoice_base * policy.tax_rate)

        return AgencyWaterfall(
            gross_revenue=gross_revenue,
            supplier_pass_through=pass_through,
            agency_gross_margin=gross_margin,
            margin_after_discount=margin_after_discount,
            net_commission_paid=net_commission_paid,
            invoice_base=invoice_base,
            estimated_tax=estimated_tax,
            agency_net_profit=round2(invoice_base - estimated_tax),
            tax_rate=policy.tax_rate,
        )
