"""
Domain Models for the Settlement Engine

These dataclasses provide type-safe representations of all business entities.
All monetary values use Decimal for precision.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import TYPE_CHECKING

from .money import ZERO, coerce_bool, coerce_money

if TYPE_CHECKING:
    from .policy import SettlementPolicy

# =============================================================================
# INPUT MODELS
# =============================================================================


@dataclass(frozen=True)
class ConsultantIdentity:
    """Who the settlement is for. Opaque to the computation core."""

    name: str = ""
    tax_id: str = ""
    payout_key: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> "ConsultantIdentity":
        return cls(
            name=str(data.get("name") or "").strip(),
            tax_id=str(data.get("tax_id") or "").strip(),
            payout_key=str(data.get("payout_key") or "").strip(),
        )


@dataclass(frozen=True)
class SettlementInput:
    """
    One period's raw figures for a consultant.

    The margin-band hospitality rule reads the standard/high-margin pair;
    the volume-tiered rule reads the single hospitality_revenue figure.
    """

    identity: ConsultantIdentity = field(default_factory=ConsultantIdentity)
    sales_revenue: Decimal = ZERO
    discount_given: Decimal = ZERO
    hospitality_standard_revenue: Decimal = ZERO
    hospitality_high_margin_revenue: Decimal = ZERO
    hospitality_revenue: Decimal = ZERO
    reimbursements: Decimal = ZERO
    advances: Decimal = ZERO
    has_fixed_stipend: bool = False
    fixed_stipend_amount: Decimal = ZERO

    @property
    def adjustments(self) -> Decimal:
        """Reimbursements minus advances."""
        return self.reimbursements - self.advances

    @classmethod
    def from_dict(cls, data: dict) -> "SettlementInput":
        consultant = data.get("consultant")
        return cls(
            identity=ConsultantIdentity.from_dict(consultant if isinstance(consultant, dict) else {}),
            sales_revenue=coerce_money(data.get("sales_revenue")),
            discount_given=coerce_money(data.get("discount_given")),
            hospitality_standard_revenue=coerce_money(data.get("hospitality_standard_revenue")),
            hospitality_high_margin_revenue=coerce_money(data.get("hospitality_high_margin_revenue")),
            hospitality_revenue=coerce_money(data.get("hospitality_revenue")),
            reimbursements=coerce_money(data.get("reimbursements")),
            advances=coerce_money(data.get("advances")),
            has_fixed_stipend=coerce_bool(data.get("has_fixed_stipend", False)),
            fixed_stipend_amount=coerce_money(data.get("fixed_stipend_amount")),
        )


@dataclass(frozen=True)
class AuthorizedDiscountEntry:
    """A manager-approved discount exemption. Immutable once created."""

    id: int
    amount: Decimal
    authorized_by: str
    date: str = ""
    reservation_ref: str = ""

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "amount": float(self.amount),
            "authorized_by": self.authorized_by,
            "date": self.date,
            "reservation_ref": self.reservation_ref,
        }


# =============================================================================
# POLICY TABLE ROWS
# =============================================================================


@dataclass(frozen=True)
class TierBracket:
    """A single commission bracket. upper_bound None = infinite."""

    lower_bound: Decimal
    upper_bound: Decimal | None
    label: str
    percentage: Decimal
    flat_addition: Decimal
    goal_bonus: Decimal

    def contains(self, revenue: Decimal) -> bool:
        return self.upper_bound is None or revenue <= self.upper_bound


@dataclass(frozen=True)
class HospitalityBand:
    """
    A hospitality commission rule.

    For margin bands upper_bound is unused; for volume bands it is the
    inclusive upper edge (None = infinite).
    """

    key: str
    label: str
    rate: Decimal
    agency_margin_rate: Decimal
    pass_through_rate: Decimal
    upper_bound: Decimal | None = None


@dataclass(frozen=True)
class BadgeTier:
    """A performance badge held while discount ratio <= max_discount_ratio."""

    key: str
    name: str
    label: str
    max_discount_ratio: Decimal
    bonus_percentage: Decimal


# =============================================================================
# OUTPUT / RESULT MODELS
# =============================================================================


@dataclass(frozen=True)
class TierCommission:
    """Results of bracket commission resolution."""

    bracket_label: str = ""
    percentage: Decimal = ZERO
    percentage_commission: Decimal = ZERO
    flat_addition: Decimal = ZERO
    goal_bonus: Decimal = ZERO
    total: Decimal = ZERO
    is_fixed_stipend: bool = False


@dataclass(frozen=True)
class HospitalitySegment:
    """Commission and agency split for one hospitality revenue figure."""

    key: str
    label: str
    revenue: Decimal
    rate: Decimal
    commission: Decimal
    agency_margin_rate: Decimal
    agency_margin: Decimal
    pass_through_rate: Decimal


@dataclass(frozen=True)
class HospitalityCommission:
    """Results of hospitality commission calculation."""

    rule: str = ""
    segments: tuple[HospitalitySegment, ...] = ()
    total_commission: Decimal = ZERO

    @property
    def total_revenue(self) -> Decimal:
        return sum((s.revenue for s in self.segments), ZERO)

    @property
    def total_agency_margin(self) -> Decimal:
        return sum((s.agency_margin for s in self.segments), ZERO)


@dataclass(frozen=True)
class FranchiseCheck:
    """Results of the discount franchise check."""

    ceiling: Decimal = ZERO
    discount_ratio: Decimal = ZERO
    excess_discount: Decimal = ZERO
    usage_percentage: Decimal = ZERO
    enforced: bool = True

    @property
    def clawback(self) -> Decimal:
        """Amount deducted from the consultant's commission."""
        return self.excess_discount if self.enforced else ZERO


@dataclass(frozen=True)
class BadgeHeadroom:
    """How much more discount a consultant can give and keep a badge."""

    key: str
    name: str
    max_discount_ratio: Decimal
    ceiling: Decimal
    headroom: Decimal
    is_lost: bool


@dataclass(frozen=True)
class BadgeClassification:
    """Results of performance badge classification."""

    key: str = "no_sales"
    label: str = "Sem Vendas"
    bonus_percentage: Decimal = ZERO
    performance_bonus: Decimal = ZERO
    headrooms: tuple[BadgeHeadroom, ...] = ()
    advice: str = ""

    @property
    def has_badge(self) -> bool:
        return self.bonus_percentage > 0


@dataclass(frozen=True)
class AgencyWaterfall:
    """Agency-side margin, tax and profit figures."""

    gross_revenue: Decimal = ZERO
    supplier_pass_through: Decimal = ZERO
    agency_gross_margin: Decimal = ZERO
    margin_after_discount: Decimal = ZERO
    net_commission_paid: Decimal = ZERO
    invoice_base: Decimal = ZERO
    estimated_tax: Decimal = ZERO
    agency_net_profit: Decimal = ZERO
    tax_rate: Decimal = ZERO


@dataclass
class ProcessingContext:
    """
    Holds all intermediate state during settlement processing.
    This is the "bag" that flows through the pipeline.
    """

    # Input (immutable during processing)
    input: SettlementInput
    entries: tuple[AuthorizedDiscountEntry, ...]
    policy: "SettlementPolicy"
    total_authorized: Decimal = ZERO
    commissionable_base_revenue: Decimal = ZERO

    # Step results (populated as we go)
    tier: TierCommission = field(default_factory=TierCommission)
    hospitality: HospitalityCommission = field(default_factory=HospitalityCommission)
    franchise: FranchiseCheck = field(default_factory=FranchiseCheck)
    badge: BadgeClassification = field(default_factory=BadgeClassification)

    # Final outputs
    total_consultant_commission: Decimal = ZERO
    net_payable: Decimal = ZERO
    agency: AgencyWaterfall = field(default_factory=AgencyWaterfall)


@dataclass(frozen=True)
class SettlementResult:
    """Immutable snapshot produced by one settlement computation."""

    policy_name: str
    input: SettlementInput
    authorized_entries: tuple[AuthorizedDiscountEntry, ...]
    total_authorized: Decimal
    commissionable_base_revenue: Decimal
    tier: TierCommission
    hospitality: HospitalityCommission
    franchise: FranchiseCheck
    badge: BadgeClassification
    total_consultant_commission: Decimal
    net_payable: Decimal
    agency: AgencyWaterfall

    @property
    def adjustments(self) -> Decimal:
        return self.input.adjustments
