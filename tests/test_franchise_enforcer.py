"""
Unit Tests for Franchise Enforcer

Tests verify the franchise ceiling, discount ratio and excess clawback.
"""

import pytest
from decimal import Decimal
from settlement.calculators.franchise import FranchiseEnforcer
from settlement.ledger import AuthorizedDiscountLedger
from settlement.models import ProcessingContext, SettlementInput
from settlement.policy import MARGIN_BAND, VOLUME_TIERED, get_policy


def _make_context(sales, discount, policy_name=MARGIN_BAND) -> ProcessingContext:
    data = SettlementInput(sales_revenue=Decimal(str(sales)), discount_given=Decimal(str(discount)))
    return ProcessingContext(input=data, entries=(), policy=get_policy(policy_name))


class TestFranchiseCeiling:

    @pytest.fixture
    def enforcer(self):
        return FranchiseEnforcer()

    def test_within_franchise(self, enforcer):
        """Scenario A: 750 on 25,000 is inside the 2,500 ceiling."""
        result = enforcer.apply(_make_context(25000, 750))

        assert result.ceiling == Decimal('2500.00')
        assert result.discount_ratio == Decimal('0.03')
        assert result.excess_discount == Decimal('0')
        assert result.clawback == Decimal('0')
        assert result.usage_percentage == Decimal('30.00')

    def test_excess_is_clawed_back_in_full(self, enforcer):
        """Scenario B: 3,000 on 25,000 -> 500 over the ceiling."""
        result = enforcer.apply(_make_context(25000, 3000))

        assert result.excess_discount == Decimal('500.00')
        assert result.clawback == Decimal('500.00')
        assert result.usage_percentage == Decimal('100')

    def test_exactly_at_ceiling(self, enforcer):
        result = enforcer.apply(_make_context(25000, 2500))

        assert result.excess_discount == Decimal('0')
        assert result.usage_percentage == Decimal('100.00')

    def test_no_sales(self, enforcer):
        """Scenario D: no sales, no ratio."""
        result = enforcer.apply(_make_context(0, 0))

        assert result.ceiling == Decimal('0')
        assert result.discount_ratio == Decimal('0')
        assert result.excess_discount == Decimal('0')
        assert result.usage_percentage == Decimal('0')

    def test_discount_without_sales_is_all_excess(self, enforcer):
        result = enforcer.apply(_make_context(0, 120))

        assert result.discount_ratio == Decimal('0')
        assert result.excess_discount == Decimal('120.00')

    def test_ceiling_is_rounded(self, enforcer):
        """1,234.56 x 10% = 123.456 -> 123.46."""
        result = enforcer.apply(_make_context("1234.56", 0))

        assert result.ceiling == Decimal('123.46')

    @pytest.mark.parametrize("discount,ceiling", [
        ("0", "0"), ("100", "250"), ("250", "250"), ("250.01", "250"), ("9999.99", "0.01"),
    ])
    def test_excess_formula(self, discount, ceiling):
        """excess == max(0, discount - ceiling), and zero when within."""
        d, c = Decimal(discount), Decimal(ceiling)
        excess = FranchiseEnforcer.excess_discount(d, c)

        assert excess == max(Decimal('0'), d - c)
        if d <= c:
            assert excess == Decimal('0')


class TestDiscountControlsDisabled:

    def test_figures_reported_but_not_clawed_back(self):
        result = FranchiseEnforcer().apply(_make_context(25000, 3000, VOLUME_TIERED))

        assert result.enforced == False
        assert result.excess_discount == Decimal('500.00')
        assert result.clawback == Decimal('0')


class TestLedgerIsolation:

    def test_authorized_entries_do_not_move_the_ceiling(self):
        ledger = AuthorizedDiscountLedger()
        ledger.add_entry("5000", "Gerente")
        ctx = _make_context(25000, 750)
        ctx.entries = ledger.snapshot()
        ctx.commissionable_base_revenue = Decimal('20000')

        result = FranchiseEnforcer().apply(ctx)

        assert result.ceiling == Decimal('2500.00')
        assert result.discount_ratio == Decimal('0.03')
