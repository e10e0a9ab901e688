"""
Hospitality Segment Calculator

Computes commission on hospitality revenue under the policy's rule set.
"""

from decimal import Decimal

from ..models import HospitalityBand, HospitalityCommission, HospitalitySegment, ProcessingContext
from ..money import ZERO, round2
from ..policy import MARGIN_BAND


class HospitalitySegmentCalculator:
    """Calculates hospitality commission per segment."""

    def calculate(self, ctx: ProcessingContext) -> HospitalityCommission:
        """
        Calculate hospitality commission.

        Margin band: the standard and high-margin figures each carry their
        own fixed rate.
        Volume tiered: the single hospitality figure picks one band whose
        rate applies to the whole amount.
        """
        policy = ctx.policy
        data = ctx.input

        if policy.hospitality_rule == MARGIN_BAND:
            revenue_by_band = {
                "standard": data.hospitality_standard_revenue,
                "high_margin": data.hospitality_high_margin_revenue,
            }
            segments = tuple(
                self._segment(band, revenue_by_band.get(band.key, ZERO))
                for band in policy.margin_bands
            )
        else:
            band = self.select_volume_band(data.hospitality_revenue, policy.volume_bands)
            segments = (self._segment(band, data.hospitality_revenue),)

        return HospitalityCommission(
            rule=policy.hospitality_rule,
            segments=segments,
            total_commission=round2(sum((s.commission for s in segments), ZERO)),
        )

    @staticmethod
    def select_volume_band(revenue: Decimal, bands: tuple[HospitalityBand, ...]) -> HospitalityBand:
        for band in bands:
            if band.upper_bound is None or revenue <= band.upper_bound:
                return band
        return bands[-1]

    def _segment(self, band: HospitalityBand, revenue: Decimal) -> HospitalitySegment:
        revenue = max(ZERO, revenue)
        return HospitalitySegment(
            key=band.key,
            label=band.label,
            revenue=revenue,
            rate=band.rate,
            commission=round2(revenue * band.rate),
            agency_margin_rate=band.agency_margin_rate,
            agency_margin=round2(revenue * band.agency_margin_rate),
            pass_through_rate=band.pass_through_rate,
        )
