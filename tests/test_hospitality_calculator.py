"""
Unit Tests for Hospitality Segment Calculator

Tests verify the margin-band and volume-tiered rule sets.
"""

import pytest
from decimal import Decimal
from settlement.calculators.hospitality import HospitalitySegmentCalculator
from settlement.models import ProcessingContext, SettlementInput
from settlement.policy import MARGIN_BAND, VOLUME_TIERED, get_policy


def _make_context(policy_name: str, **figures) -> ProcessingContext:
    data = SettlementInput(**{k: Decimal(str(v)) for k, v in figures.items()})
    return ProcessingContext(input=data, entries=(), policy=get_policy(policy_name))


class TestMarginBand:
    """Two figures, each with its own fixed rate."""

    @pytest.fixture
    def calculator(self):
        return HospitalitySegmentCalculator()

    def test_standard_and_high_margin(self, calculator):
        ctx = _make_context(
            MARGIN_BAND,
            hospitality_standard_revenue=10000,
            hospitality_high_margin_revenue=5000,
        )
        result = calculator.calculate(ctx)

        standard, high = result.segments
        assert standard.commission == Decimal('150.00')
        assert standard.agency_margin == Decimal('850.00')
        assert high.commission == Decimal('500.00')
        assert high.agency_margin == Decimal('1000.00')
        assert result.total_commission == Decimal('650.00')
        assert result.total_revenue == Decimal('15000')
        assert result.rule == MARGIN_BAND

    def test_each_segment_is_rounded(self, calculator):
        """1,234.57 x 1.5% = 18.51855 -> 18.52."""
        ctx = _make_context(MARGIN_BAND, hospitality_standard_revenue="1234.57")
        result = calculator.calculate(ctx)

        assert result.segments[0].commission == Decimal('18.52')
        assert result.total_commission == Decimal('18.52')

    def test_volume_figure_is_ignored(self, calculator):
        ctx = _make_context(MARGIN_BAND, hospitality_revenue=50000)
        result = calculator.calculate(ctx)

        assert result.total_commission == Decimal('0')


class TestVolumeTiered:
    """One figure; the band's rate applies to the whole amount."""

    @pytest.fixture
    def calculator(self):
        return HospitalitySegmentCalculator()

    @pytest.mark.parametrize("revenue,rate,commission", [
        ("10000", "0.02", "200.00"),
        ("10000.01", "0.025", "250.00"),
        ("30000", "0.025", "750.00"),
        ("40000", "0.03", "1200.00"),
        ("50000", "0.03", "1500.00"),
        ("60000", "0.035", "2100.00"),
    ])
    def test_band_rate_applies_to_whole_amount(self, calculator, revenue, rate, commission):
        ctx = _make_context(VOLUME_TIERED, hospitality_revenue=revenue)
        result = calculator.calculate(ctx)

        assert len(result.segments) == 1
        assert result.segments[0].rate == Decimal(rate)
        assert result.total_commission == Decimal(commission)

    def test_margin_band_figures_are_ignored(self, calculator):
        ctx = _make_context(
            VOLUME_TIERED,
            hospitality_standard_revenue=10000,
            hospitality_high_margin_revenue=5000,
        )
        result = calculator.calculate(ctx)

        assert result.total_commission == Decimal('0')
        assert result.total_revenue == Decimal('0')

    def test_zero_revenue(self, calculator):
        result = calculator.calculate(_make_context(VOLUME_TIERED))

        assert result.total_commission == Decimal('0')
