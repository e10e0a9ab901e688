"""
Settlement Aggregator - Main Orchestrator

Coordinates the settlement pipeline through discrete, testable steps.
"""

import json
from typing import Any, Dict

from .calculators import (
    AgencyMarginCalculator,
    FranchiseEnforcer,
    HospitalitySegmentCalculator,
    PayoutCalculator,
    PerformanceBadgeClassifier,
    TierCommissionResolver,
)
from .ledger import AuthorizedDiscountLedger
from .models import ProcessingContext, SettlementInput, SettlementResult
from .money import ZERO
from .output import OutputBuilder
from .policy import SettlementPolicy, get_policy
from .request import SettlementRequest
from .validators import InputValidator


class SettlementAggregator:
    """
    Main orchestrator for settlement processing.

    Implements a clear pipeline pattern:
    1. Build Context (ledger total, commissionable base)
    2. Resolve Tier Commission
    3. Calculate Hospitality Commission
    4. Apply Franchise
    5. Classify Badge
    6. Calculate Total Commission and Net Payable
    7. Calculate Agency Waterfall
    8. Freeze Result

    Holds no state between calls; one instance can serve any number of
    settlements.
    """

    def __init__(self):
        self.validator = InputValidator()
        self.tier_resolver = TierCommissionResolver()
        self.hospitality_calculator = HospitalitySegmentCalculator()
        self.franchise_enforcer = FranchiseEnforcer()
        self.badge_classifier = PerformanceBadgeClassifier()
        self.payout_calculator = PayoutCalculator()
        self.agency_calculator = AgencyMarginCalculator()
        self.output_builder = OutputBuilder()

    def process(
        self,
        data: SettlementInput,
        ledger: AuthorizedDiscountLedger | None = None,
        policy: SettlementPolicy | None = None,
    ) -> SettlementResult:
        """
        Compute a full settlement from an input snapshot.

        Args:
            data: The period's figures
            ledger: Authorized discounts for the session (optional)
            policy: Rule set to apply (defaults to the margin-band policy)

        Returns:
            Immutable SettlementResult with every derived figure
        """
        # Step 1: Build initial context from a consistent ledger snapshot
        entries = ledger.snapshot() if ledger is not None else ()
        ctx = self._build_context(data, entries, policy or get_policy())

        # Steps 2-5: Independent calculations
        ctx.tier = self.tier_resolver.resolve(ctx)
        ctx.hospitality = self.hospitality_calculator.calculate(ctx)
        ctx.franchise = self.franchise_enforcer.apply(ctx)
        ctx.badge = self.badge_classifier.classify(ctx)

        # Step 6: Consultant totals
        ctx.total_consultant_commission = self.payout_calculator.total_commission(ctx)
        ctx.net_payable = self.payout_calculator.calculate(ctx)

        # Step 7: Agency waterfall
        ctx.agency = self.agency_calculator.calculate(ctx)

        # Step 8: Freeze
        return self._freeze(ctx)

    def process_request(self, request: SettlementRequest) -> SettlementResult:
        return self.process(request.input, request.ledger, request.policy)

    def process_from_dict(
        self,
        data: Dict[str, Any],
        include_agency: bool = False,
        default_policy: str | None = None,
    ) -> Dict[str, Any]:
        """
        Process a settlement from raw dictionary input.

        Convenience method for API usage. Validation errors are reported
        alongside the result, never instead of it.
        """
        request = SettlementRequest.from_dict(data, default_policy=default_policy)
        result = self.process_request(request)
        output = self.output_builder.build(result, include_agency=include_agency)
        output["validation_errors"] = [e.to_dict() for e in self.validator.validate(request)]
        return output

    def _build_context(self, data, entries, policy) -> ProcessingContext:
        """Build the initial processing context."""
        total_authorized = sum((e.amount for e in entries), ZERO)
        return ProcessingContext(
            input=data,
            entries=entries,
            policy=policy,
            total_authorized=total_authorized,
            commissionable_base_revenue=max(ZERO, data.sales_revenue - total_authorized),
        )

    def _freeze(self, ctx: ProcessingContext) -> SettlementResult:
        return SettlementResult(
            policy_name=ctx.policy.name,
            input=ctx.input,
            authorized_entries=ctx.entries,
            total_authorized=ctx.total_authorized,
            commissionable_base_revenue=ctx.commissionable_base_revenue,
            tier=ctx.tier,
            hospitality=ctx.hospitality,
            franchise=ctx.franchise,
            badge=ctx.badge,
            total_consultant_commission=ctx.total_consultant_commission,
            net_payable=ctx.net_payable,
            agency=ctx.agency,
        )


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================

def process_settlement_from_dict(input_data: Dict[str, Any], include_agency: bool = False) -> Dict[str, Any]:
    """Process a settlement from Python dict and return Python dict."""
    aggregator = SettlementAggregator()
    return aggregator.process_from_dict(input_data, include_agency=include_agency)


def process_settlement_from_json(json_input: str, include_agency: bool = False) -> str:
    """Process a settlement from JSON string input and return JSON string output."""
    try:
        input_data = json.loads(json_input)
        result = process_settlement_from_dict(input_data, include_agency=include_agency)
        return json.dumps(result, indent=2)

    except ValueError as e:
        error_response = {"error": str(e), "status": "validation_failed"}
        return json.dumps(error_response, indent=2)
