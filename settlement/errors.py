"""
Error types for the Settlement Engine.

The computation core never raises for business-rule conditions. These
types describe boundary failures: bad ledger entries and incomplete
identity data that block report export.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class FieldError:
    """A validation failure tied to a single input field."""

    field: str
    message: str

    def to_dict(self) -> dict:
        return {"field": self.field, "message": self.message}


class ValidationError(ValueError):
    """Raised when input fails validation. Carries field-level errors."""

    def __init__(self, errors: list[FieldError]):
        self.errors = list(errors)
        summary = "; ".join(f"{e.field}: {e.message}" for e in self.errors)
        super().__init__(summary or "validation failed")


class LedgerValidationError(ValidationError):
    """Raised when an authorized-discount entry is rejected by the ledger."""
