"""
Adjustment Validation for the Bonus Allocation Engine

Validates manual changes to a job before they are stored.
Raises ValueError with clear messages for any constraint violations.
The engine itself never raises; only these caller-side checks do.
"""

from datetime import date
from decimal import Decimal, InvalidOperation

from .identity import sanitize
from .models import PoolMethod, POOL_METHODS, DISTRIBUTIONS


class AdjustmentValidator:
    """Validates overrides, ineligibility markings and payments."""

    def validate_ineligibility(self, reason: str | None) -> None:
        """A job can only be blocked from bonuses with a stated reason."""
        if not reason or not str(reason).strip():
            raise ValueError("A reason is required to mark a job ineligible")

    def validate_override(self, name: str | None, amount, reason: str | None) -> Decimal:
        """
        Validate a manual bonus override. Returns the parsed amount.
        """
        if not sanitize(name):
            raise ValueError(f"Override needs an employee name, got: {name!r}")

        parsed = self._parse_amount(amount, "Override amount")

        if not reason or not str(reason).strip():
            raise ValueError(f"A reason is required to override the bonus for {name}")

        return parsed

    def validate_payment(self, amount, pay_date: date | None) -> Decimal:
        """Validate a payment before the job is marked paid."""
        if pay_date is None:
            raise ValueError("pay_date is required to mark a bonus paid")

        parsed = self._parse_amount(amount, "Paid amount")
        if parsed < 0:
            raise ValueError(f"Paid amount cannot be negative, got: {parsed}")
        return parsed

    def validate_method(self, method: PoolMethod) -> None:
        if not isinstance(method, tuple(POOL_METHODS.values())):
            raise ValueError(f"Invalid pool method: {method!r}")
        if method.distribution not in DISTRIBUTIONS:
            raise ValueError(
                f"Invalid distribution: {method.distribution}. Must be 'hours' or 'even'"
            )

    @staticmethod
    def _parse_amount(amount, label: str) -> Decimal:
        if amount is None or isinstance(amount, bool):
            raise ValueError(f"{label} must be a number, got: {amount!r}")
        try:
            parsed = Decimal(str(amount).strip())
        except (InvalidOperation, ValueError):
            raise ValueError(f"{label} must be a number, got: {amount!r}")
        if not parsed.is_finite():
            raise ValueError(f"{label} must be finite, got: {amount!r}")
        return parsed
