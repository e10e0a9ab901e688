"""
Input Validation for the Settlement Engine

Validation lives at the boundary. It never stops a settlement from being
computed; it only blocks report and share export.
"""

import re

from .errors import FieldError, ValidationError
from .request import SettlementRequest

_NON_DIGITS = re.compile(r"\D")


def is_valid_cpf(value: str) -> bool:
    """Check a Brazilian CPF: 11 digits, not all equal, valid check digits."""
    digits = _NON_DIGITS.sub("", value or "")
    if len(digits) != 11 or digits == digits[0] * 11:
        return False

    numbers = [int(d) for d in digits]
    for position in (9, 10):
        total = sum(n * w for n, w in zip(numbers[:position], range(position + 1, 1, -1)))
        check = (total * 10) % 11 % 10
        if check != numbers[position]:
            return False
    return True


class InputValidator:
    """Validates a settlement request according to business rules."""

    def validate(self, request: SettlementRequest) -> list[FieldError]:
        """Return all field errors. An empty list means the request is valid."""
        errors = []
        errors.extend(self._validate_identity(request))
        errors.extend(self._validate_stipend(request))
        errors.extend(request.parse_errors)
        return errors

    def validate_for_export(self, request: SettlementRequest) -> None:
        """Raise ValidationError if the request cannot be exported."""
        errors = self.validate(request)
        if errors:
            raise ValidationError(errors)

    def _validate_identity(self, request: SettlementRequest) -> list[FieldError]:
        identity = request.input.identity
        errors = []
        if not identity.name:
            errors.append(FieldError("consultant.name", "is required"))
        if not identity.tax_id:
            errors.append(FieldError("consultant.tax_id", "is required"))
        elif not is_valid_cpf(identity.tax_id):
            errors.append(FieldError("consultant.tax_id", f"is not a valid CPF: {identity.tax_id}"))
        if not identity.payout_key:
            errors.append(FieldError("consultant.payout_key", "is required"))
        return errors

    def _validate_stipend(self, request: SettlementRequest) -> list[FieldError]:
        data = request.input
        if data.has_fixed_stipend and data.fixed_stipend_amount <= 0:
            return [FieldError(
                "fixed_stipend_amount",
                "must be positive when has_fixed_stipend=True",
            )]
        return []
