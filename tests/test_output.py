"""
Unit Tests for OutputBuilder
"""

import pytest
from decimal import Decimal
from settlement import AuthorizedDiscountLedger, SettlementAggregator, SettlementInput
from settlement.models import ConsultantIdentity
from settlement.output import OutputBuilder


@pytest.fixture
def result():
    ledger = AuthorizedDiscountLedger(clock=lambda: 1_700_000_000_000)
    ledger.add_entry(Decimal('1000'), "Gerente", date="2026-03-01", reservation_ref="RES-9")
    data = SettlementInput(
        identity=ConsultantIdentity("Ana Souza", "529.982.247-25", "ana@pix.com"),
        sales_revenue=Decimal('25000'),
        discount_given=Decimal('750'),
        hospitality_standard_revenue=Decimal('10000'),
    )
    return SettlementAggregator().process(data, ledger)


class TestOutputBuilder:

    def test_agency_section_gated(self, result):
        builder = OutputBuilder()

        assert "agency" not in builder.build(result)
        assert "agency" in builder.build(result, include_agency=True)

    def test_sections(self, result):
        output = OutputBuilder().build(result)

        assert output["policy"] == "margin_band"
        assert output["consultant"]["name"] == "Ana Souza"
        assert output["revenue"]["commissionable_base_revenue"] == 24000.0
        assert output["revenue"]["hospitality"][0]["key"] == "standard"
        assert output["authorized_discounts"][0]["reservation_ref"] == "RES-9"

    def test_calculation_entries_have_value_and_description(self, result):
        calculations = OutputBuilder().build(result)["calculations"]

        for key, entry in calculations.items():
            assert set(entry) == {"value", "description"}, key

    def test_calculation_values(self, result):
        calculations = OutputBuilder().build(result)["calculations"]

        assert calculations["tier_bracket"]["value"] == "21.001 a 31.000"
        assert calculations["tier_total"]["value"] == 3220.0
        assert calculations["hospitality_commission"]["value"] == 150.0
        assert calculations["performance_bonus"]["value"] == 250.0
        assert calculations["total_consultant_commission"]["value"] == 3620.0
        assert calculations["net_payable"]["value"] == 3620.0

    def test_badge_headrooms(self, result):
        badge = OutputBuilder().build(result)["badge"]

        assert badge["key"] == "top"
        assert [h["key"] for h in badge["headrooms"]] == ["top", "mid", "low"]
        assert badge["headrooms"][0]["headroom"] == 0.0

    def test_agency_figures(self, result):
        agency = OutputBuilder().build(result, include_agency=True)["agency"]

        assert agency["gross_revenue"] == 35000.0
        assert agency["total_authorized"] == 1000.0
