"""
Authorized Discount Ledger

Manager-approved discount exemptions for one editing session. Entries are
excluded from franchise and badge math; their total only reduces the
commissionable base revenue and is reported for audit.
"""

import time
from decimal import Decimal

from .errors import FieldError, LedgerValidationError
from .models import AuthorizedDiscountEntry
from .money import ZERO, coerce_money


def _now_millis() -> int:
    return time.time_ns() // 1_000_000


class AuthorizedDiscountLedger:
    """
    Insertion-ordered ledger with remove-by-id.

    Every mutation swaps in a new tuple, so a snapshot taken for one
    settlement computation never observes a half-applied change.
    """

    def __init__(self, entries=(), clock=_now_millis):
        self._clock = clock
        self._entries: tuple[AuthorizedDiscountEntry, ...] = ()
        # Highest id ever assigned, removed entries included
        self._last_id: int | None = None
        for entry in entries:
            self.add_entry(
                entry.amount,
                entry.authorized_by,
                date=entry.date,
                reservation_ref=entry.reservation_ref,
                entry_id=entry.id,
            )

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self):
        return iter(self._entries)

    @property
    def entries(self) -> tuple[AuthorizedDiscountEntry, ...]:
        return self._entries

    def snapshot(self) -> tuple[AuthorizedDiscountEntry, ...]:
        """Return the current entries as an immutable tuple."""
        return self._entries

    @property
    def total_authorized(self) -> Decimal:
        return sum((e.amount for e in self._entries), ZERO)

    def add_entry(
        self,
        amount,
        authorized_by: str,
        date: str = "",
        reservation_ref: str = "",
        entry_id: int | None = None,
    ) -> AuthorizedDiscountEntry:
        """
        Append a new entry and return it.

        Raises LedgerValidationError (and leaves the ledger untouched) when
        the amount is not positive, the authorizer is blank, or an explicit
        entry_id is already taken.
        """
        value = coerce_money(amount)
        authorizer = (authorized_by or "").strip()

        errors = []
        if value <= 0:
            errors.append(FieldError("amount", "must be greater than zero"))
        if not authorizer:
            errors.append(FieldError("authorized_by", "is required"))
        if entry_id is not None and any(e.id == entry_id for e in self._entries):
            errors.append(FieldError("id", f"duplicate entry id {entry_id}"))
        if errors:
            raise LedgerValidationError(errors)

        if entry_id is None:
            entry_id = self._next_id()

        entry = AuthorizedDiscountEntry(
            id=entry_id,
            amount=value,
            authorized_by=authorizer,
            date=(date or "").strip(),
            reservation_ref=(reservation_ref or "").strip(),
        )
        self._entries = self._entries + (entry,)
        if self._last_id is None or entry_id > self._last_id:
            self._last_id = entry_id
        return entry

    def remove_entry(self, entry_id: int) -> bool:
        """Remove the entry with this id. Returns False if there was none."""
        remaining = tuple(e for e in self._entries if e.id != entry_id)
        removed = len(remaining) != len(self._entries)
        self._entries = remaining
        return removed

    def _next_id(self) -> int:
        """Creation timestamp in ms, bumped to stay strictly increasing."""
        candidate = self._clock()
        if self._last_id is not None:
            candidate = max(candidate, self._last_id + 1)
        return candidate
