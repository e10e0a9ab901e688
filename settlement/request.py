"""
Settlement Request

Turns a raw API/form payload into the engine's input snapshot, ledger and
policy. Monetary values are coerced, never rejected; rejected ledger
entries are kept as field errors so the caller can show them.
"""

from dataclasses import dataclass, field

from .errors import FieldError, LedgerValidationError
from .ledger import AuthorizedDiscountLedger
from .models import SettlementInput
from .policy import SettlementPolicy, get_policy


def _parse_entry_id(raw) -> int | None:
    if raw is None or isinstance(raw, bool):
        return None
    try:
        return int(raw)
    except (TypeError, ValueError):
        return None


@dataclass
class SettlementRequest:
    """Complete input for one settlement computation."""

    input: SettlementInput
    ledger: AuthorizedDiscountLedger
    policy: SettlementPolicy
    parse_errors: list[FieldError] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict, default_policy: str | None = None) -> "SettlementRequest":
        """
        Build a request from a payload dict.

        Raises ValueError for a non-object payload or an unknown policy name.
        """
        if not isinstance(data, dict):
            raise ValueError(f"settlement payload must be an object, got: {type(data).__name__}")
        policy = get_policy(data.get("policy") or default_policy)
        ledger = AuthorizedDiscountLedger()
        errors = []

        raw_entries = data.get("authorized_discounts") or []
        if not isinstance(raw_entries, list):
            errors.append(FieldError("authorized_discounts", "must be a list"))
            raw_entries = []

        for index, raw in enumerate(raw_entries):
            prefix = f"authorized_discounts[{index}]"
            if not isinstance(raw, dict):
                errors.append(FieldError(prefix, "must be an object"))
                continue
            try:
                ledger.add_entry(
                    raw.get("amount"),
                    str(raw.get("authorized_by") or ""),
                    date=str(raw.get("date") or ""),
                    reservation_ref=str(raw.get("reservation_ref") or ""),
                    entry_id=_parse_entry_id(raw.get("id")),
                )
            except LedgerValidationError as e:
                errors.extend(FieldError(f"{prefix}.{err.field}", err.message) for err in e.errors)

        return cls(
            input=SettlementInput.from_dict(data),
            ledger=ledger,
            policy=policy,
            parse_errors=errors,
        )
