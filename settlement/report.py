"""
Report Renderer

Plain-text consultant and agency reports, and a short share message.
Only export surfaces; every figure comes from a SettlementResult.
"""

import re

from .models import SettlementResult
from .money import format_brl

REPORT_VERSION = "v4.8"
WIDTH = 60

_NON_DIGITS = re.compile(r"\D")


def mask_tax_id(value: str) -> str:
    """Format a CPF as 000.000.000-00. Partial input is formatted as far as it goes."""
    d = _NON_DIGITS.sub("", value or "")[:11]
    if len(d) <= 3:
        return d
    if len(d) <= 6:
        return f"{d[:3]}.{d[3:]}"
    if len(d) <= 9:
        return f"{d[:3]}.{d[3:6]}.{d[6:]}"
    return f"{d[:3]}.{d[3:6]}.{d[6:9]}-{d[9:]}"


def _row(label: str, value: str) -> str:
    gap = max(1, WIDTH - len(label) - len(value))
    return f"{label}{' ' * gap}{value}"


def _section(title: str) -> list[str]:
    return ["", title, "-" * WIDTH]


def _deduction(amount) -> str:
    return f"- {format_brl(amount)}" if amount > 0 else format_brl(0)


class ReportRenderer:
    """Renders settlement results as plain text."""

    def consultant_report(self, result: SettlementResult) -> str:
        data = result.input
        tier = result.tier
        badge = result.badge

        lines = self._header("RELATÓRIO DE COMISSIONAMENTO", result)
        lines += self._audit_table(result)

        lines += _section("FATURAMENTOS E PERFORMANCE")
        lines.append(_row("Vendas Gerais", format_brl(data.sales_revenue)))
        for segment in result.hospitality.segments:
            rate = f"{float(segment.rate) * 100:.1f}%"
            lines.append(_row(f"{segment.label} ({rate})", format_brl(segment.revenue)))
        lines.append(_row("Desconto do Consultor", format_brl(data.discount_given)))
        lines.append(_row("Total Isenções (Autorizados)", format_brl(result.total_authorized)))
        lines.append(_row("Status de Eficiência Comercial", badge.label))
        lines.append(_row(
            f"Prêmio Performance ({float(badge.bonus_percentage) * 100:.1f}%)",
            format_brl(badge.performance_bonus),
        ))

        lines += _section("DETALHAMENTO DA COMISSÃO")
        lines.append(_row(
            f"Comissão sobre Vendas ({float(tier.percentage) * 100:.0f}%)",
            format_brl(tier.percentage_commission),
        ))
        lines.append(_row(
            "Valor Fixo Mensal" if tier.is_fixed_stipend else "Valor de Faixa",
            format_brl(tier.flat_addition),
        ))
        lines.append(_row("Bônus Meta", format_brl(tier.goal_bonus)))
        lines.append(_row("Comissão Hospedagens", format_brl(result.hospitality.total_commission)))
        lines.append(_row("Prêmio Eficiência Comercial", format_brl(badge.performance_bonus)))
        lines.append(_row("TOTAL ACUMULADO", format_brl(result.total_consultant_commission)))

        lines += _section("FECHAMENTO FINAL")
        lines.append(_row("Total Acumulado", format_brl(result.total_consultant_commission)))
        lines.append(_row("Dedução Excesso Desconto", _deduction(result.franchise.clawback)))
        lines.append(_row("Ajustes (Reembolsos/Adiantamentos)", format_brl(result.adjustments)))
        lines.append(_row("LÍQUIDO A RECEBER", format_brl(result.net_payable)))

        if badge.advice:
            lines += ["", f"Dica: {badge.advice}"]
        return "\n".join(lines) + "\n"

    def agency_report(self, result: SettlementResult) -> str:
        agency = result.agency
        tax_percent = f"{float(agency.tax_rate) * 100:.0f}%"

        lines = self._header("RELATÓRIO ADMINISTRATIVO", result)
        lines += self._audit_table(result)

        lines += _section("FLUXO FINANCEIRO DA AGÊNCIA")
        lines.append(_row("Faturamento Bruto Total", format_brl(agency.gross_revenue)))
        lines.append(_row("(-) Repasse Operacional Fornecedores", format_brl(agency.supplier_pass_through)))
        lines.append(_row("(=) Margem Bruta Agência", format_brl(agency.agency_gross_margin)))
        lines.append(_row("(-) Desconto Concedido ao Cliente", format_brl(result.input.discount_given)))
        lines.append(_row("(=) Margem Após Desconto", format_brl(agency.margin_after_discount)))
        lines.append(_row("(-) Comissão Líquida Paga ao Consultor", format_brl(agency.net_commission_paid)))
        lines.append(_row("    • Comissão Bruta", format_brl(result.total_consultant_commission)))
        lines.append(_row("    • Dedução Excesso Desconto", _deduction(result.franchise.clawback)))
        lines.append(_row("    • Ajustes (Reemb./Adiant.)", format_brl(result.adjustments)))
        lines.append(_row("(=) BASE PARA NOTA FISCAL", format_brl(agency.invoice_base)))
        lines.append(_row(f"(-) Imposto Estimado ({tax_percent})", format_brl(agency.estimated_tax)))
        lines.append(_row("(=) LUCRO LÍQUIDO FINAL AGÊNCIA", format_brl(agency.agency_net_profit)))
        lines.append("")
        lines.append(_row("Isenções de Desconto (Auditado)", format_brl(result.total_authorized)))
        return "\n".join(lines) + "\n"

    def share_text(self, result: SettlementResult) -> str:
        """Short message for sharing a consultant's settlement."""
        identity = result.input.identity
        return "\n".join([
            f"Fechamento de comissão - {identity.name or 'consultor'}",
            f"Vendas: {format_brl(result.input.sales_revenue)}",
            f"Selo: {result.badge.label}",
            f"Comissão total: {format_brl(result.total_consultant_commission)}",
            f"Dedução excesso desconto: {_deduction(result.franchise.clawback)}",
            f"Líquido a receber: {format_brl(result.net_payable)}",
        ]) + "\n"

    def _header(self, title: str, result: SettlementResult) -> list[str]:
        identity = result.input.identity
        return [
            "=" * WIDTH,
            f"{title} {REPORT_VERSION}".center(WIDTH),
            "=" * WIDTH,
            "",
            "DADOS DO CONSULTOR",
            "-" * WIDTH,
            f"Nome: {identity.name or '---'}",
            f"CPF: {mask_tax_id(identity.tax_id) or '---'}",
            f"Chave PIX: {identity.payout_key or '---'}",
            f"Status Performance: {result.badge.label}",
        ]

    def _audit_table(self, result: SettlementResult) -> list[str]:
        if not result.authorized_entries:
            return []
        lines = _section("AUDITORIA DE DESCONTOS AUTORIZADOS")
        lines.append(f"{'QUEM':<18}{'DATA':<12}{'RESERVA':<14}{'VALOR':>16}")
        for entry in result.authorized_entries:
            lines.append(
                f"{entry.authorized_by[:17]:<18}{entry.date[:11]:<12}"
                f"{entry.reservation_ref[:13]:<14}{format_brl(entry.amount):>16}"
            )
        return lines
