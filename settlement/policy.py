"""
Settlement Policies

A policy is the tagged configuration that selects the bracket table, the
hospitality rule set and whether badge/franchise controls are active.
The engine is a single code path parameterized by one of these.
"""

from dataclasses import dataclass
from decimal import Decimal

from .models import BadgeTier, HospitalityBand, TierBracket

MARGIN_BAND = "margin_band"
VOLUME_TIERED = "volume_tiered"

HOSPITALITY_RULES = (MARGIN_BAND, VOLUME_TIERED)


def _bracket(lower, upper, label, percentage, flat, bonus) -> TierBracket:
    return TierBracket(
        lower_bound=Decimal(lower),
        upper_bound=Decimal(upper) if upper is not None else None,
        label=label,
        percentage=Decimal(percentage),
        flat_addition=Decimal(flat),
        goal_bonus=Decimal(bonus),
    )


REFERENCE_BRACKETS = (
    _bracket("0", "10000", "Até 10.000", "0.10", "0", "0"),
    _bracket("10000.01", "21000", "10.001 a 21.000", "0.02", "1700", "0"),
    _bracket("21000.01", "31000", "21.001 a 31.000", "0.03", "2000", "500"),
    _bracket("31000.01", "41000", "31.001 a 41.000", "0.04", "2000", "800"),
    _bracket("41000.01", "51000", "41.001 a 51.000", "0.05", "2000", "1200"),
    _bracket("51000.01", "100000", "51.001 a 100.000", "0.06", "2000", "1500"),
    _bracket("100000.01", None, "Acima de 100.000", "0.06", "2000", "3000"),
)

REFERENCE_BADGES = (
    BadgeTier("top", "Ouro", "Vendedor Ouro", Decimal("0.03"), Decimal("0.01")),
    BadgeTier("mid", "Prata", "Vendedor Prata", Decimal("0.07"), Decimal("0.005")),
    BadgeTier("low", "Bronze", "Vendedor Bronze", Decimal("0.10"), Decimal("0.002")),
)

MARGIN_BANDS = (
    HospitalityBand(
        key="standard",
        label="Hospedagem Margem Padrão",
        rate=Decimal("0.015"),
        agency_margin_rate=Decimal("0.085"),
        pass_through_rate=Decimal("0.90"),
    ),
    HospitalityBand(
        key="high_margin",
        label="Hospedagem Alta Margem",
        rate=Decimal("0.10"),
        agency_margin_rate=Decimal("0.20"),
        pass_through_rate=Decimal("0.70"),
    ),
)

# Whole-amount bands, not marginal. All bands share the same agency split.
VOLUME_BANDS = (
    HospitalityBand("volume_1", "Hospedagem até 10.000", Decimal("0.02"),
                    Decimal("0.12"), Decimal("0.85"), Decimal("10000")),
    HospitalityBand("volume_2", "Hospedagem 10.001 a 30.000", Decimal("0.025"),
                    Decimal("0.12"), Decimal("0.85"), Decimal("30000")),
    HospitalityBand("volume_3", "Hospedagem 30.001 a 50.000", Decimal("0.03"),
                    Decimal("0.12"), Decimal("0.85"), Decimal("50000")),
    HospitalityBand("volume_4", "Hospedagem acima de 50.000", Decimal("0.035"),
                    Decimal("0.12"), Decimal("0.85"), None),
)


@dataclass(frozen=True)
class SettlementPolicy:
    """Rule set for one settlement variant."""

    name: str
    hospitality_rule: str
    tier_brackets: tuple[TierBracket, ...] = REFERENCE_BRACKETS
    margin_bands: tuple[HospitalityBand, ...] = MARGIN_BANDS
    volume_bands: tuple[HospitalityBand, ...] = VOLUME_BANDS
    badge_tiers: tuple[BadgeTier, ...] = REFERENCE_BADGES
    discount_controls_enabled: bool = True
    franchise_rate: Decimal = Decimal("0.10")
    sales_margin_rate: Decimal = Decimal("0.375")
    sales_pass_through_rate: Decimal = Decimal("0.625")
    tax_rate: Decimal = Decimal("0.06")

    def __post_init__(self):
        if self.hospitality_rule not in HOSPITALITY_RULES:
            raise ValueError(
                f"Invalid hospitality_rule: {self.hospitality_rule}. "
                f"Must be one of {', '.join(HOSPITALITY_RULES)}"
            )
        if not self.tier_brackets or self.tier_brackets[-1].upper_bound is not None:
            raise ValueError("tier_brackets must end with an unbounded bracket")


POLICIES = {
    MARGIN_BAND: SettlementPolicy(name=MARGIN_BAND, hospitality_rule=MARGIN_BAND),
    VOLUME_TIERED: SettlementPolicy(
        name=VOLUME_TIERED,
        hospitality_rule=VOLUME_TIERED,
        discount_controls_enabled=False,
    ),
}

DEFAULT_POLICY = MARGIN_BAND


def get_policy(name: str | None = None) -> SettlementPolicy:
    """Look up a reference policy by name. Raises ValueError if unknown."""
    key = name or DEFAULT_POLICY
    try:
        return POLICIES[key]
    except KeyError:
        raise ValueError(
            f"Unknown settlement policy: {key}. Must be one of {', '.join(sorted(POLICIES))}"
        ) from None
