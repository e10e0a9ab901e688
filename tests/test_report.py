"""
Unit Tests for plain-text reports
"""

import pytest
from decimal import Decimal
from settlement import AuthorizedDiscountLedger, SettlementAggregator, SettlementInput
from settlement.models import ConsultantIdentity
from settlement.report import ReportRenderer, mask_tax_id


IDENTITY = ConsultantIdentity("Ana Souza", "52998224725", "ana@pix.com")


def _result(discount, ledger=None):
    data = SettlementInput(identity=IDENTITY, sales_revenue=Decimal('25000'), discount_given=Decimal(discount))
    return SettlementAggregator().process(data, ledger)


@pytest.fixture
def renderer():
    return ReportRenderer()


class TestMaskTaxId:

    @pytest.mark.parametrize("raw,expected", [
        ("52998224725", "529.982.247-25"),
        ("529.982.247-25", "529.982.247-25"),
        ("5299", "529.9"),
        ("5299822", "529.982.2"),
        ("", ""),
    ])
    def test_mask(self, raw, expected):
        assert mask_tax_id(raw) == expected


class TestConsultantReport:

    def test_header_and_net(self, renderer):
        report = renderer.consultant_report(_result('750'))

        assert "Nome: Ana Souza" in report
        assert "CPF: 529.982.247-25" in report
        assert "Status Performance: Vendedor Ouro" in report
        net_line = next(line for line in report.splitlines() if line.startswith("LÍQUIDO A RECEBER"))
        assert net_line.endswith("R$ 3.500,00")

    def test_excess_deduction_shown(self, renderer):
        report = renderer.consultant_report(_result('3000'))

        deduction = next(line for line in report.splitlines() if line.startswith("Dedução Excesso Desconto"))
        assert deduction.endswith("- R$ 500,00")
        assert "Dica: Você ultrapassou a franquia" in report

    def test_audit_table_only_with_entries(self, renderer):
        assert "AUDITORIA" not in renderer.consultant_report(_result('750'))

        ledger = AuthorizedDiscountLedger(clock=lambda: 1)
        ledger.add_entry(Decimal('400'), "Gerente", date="2026-03-01", reservation_ref="RES-1")
        report = renderer.consultant_report(_result('750', ledger))

        assert "AUDITORIA DE DESCONTOS AUTORIZADOS" in report
        assert "RES-1" in report


class TestAgencyReport:

    def test_waterfall_rows(self, renderer):
        report = renderer.agency_report(_result('750'))
        rows = {line.split("  ")[0]: line for line in report.splitlines()}

        assert rows["(=) BASE PARA NOTA FISCAL"].endswith("R$ 5.125,00")
        assert rows["(-) Imposto Estimado (6%)"].endswith("R$ 307,50")
        assert rows["(=) LUCRO LÍQUIDO FINAL AGÊNCIA"].endswith("R$ 4.817,50")


class TestShareText:

    def test_share(self, renderer):
        text = renderer.share_text(_result('750'))

        assert text.startswith("Fechamento de comissão - Ana Souza")
        assert "Selo: Vendedor Ouro" in text
        assert "Líquido a receber: R$ 3.500,00" in text
