"""
Job Adjustments

Pure helpers for the manual changes a reviewer makes to a job. Each returns
an updated copy of the record for the caller to persist; the original is
left untouched.
"""

from dataclasses import replace
from datetime import date, datetime, timezone

from .identity import sanitize
from .models import FinanceConfig, JobRecord, PoolMethod
from .validators import AdjustmentValidator

_validator = AdjustmentValidator()


def mark_ineligible(job: JobRecord, reason: str) -> JobRecord:
    """Block a job from bonuses, keeping the reason for payout slips."""
    _validator.validate_ineligibility(reason)
    return replace(job, bonus_eligible=False, bonus_ineligible_reason=reason.strip())


def apply_override(job: JobRecord, name: str, amount, reason: str) -> JobRecord:
    """Set one person's bonus on a job, replacing whatever would be computed."""
    parsed = _validator.validate_override(name, amount, reason)
    key = sanitize(name)
    return replace(
        job,
        custom_bonuses={**job.custom_bonuses, key: parsed},
        override_reasons={**job.override_reasons, key: reason.strip()},
    )


def clear_override(job: JobRecord, name: str) -> JobRecord:
    key = sanitize(name)
    customs = {k: v for k, v in job.custom_bonuses.items() if k != key}
    reasons = {k: v for k, v in job.override_reasons.items() if k != key}
    return replace(job, custom_bonuses=customs, override_reasons=reasons)


def set_calc_method(job: JobRecord, method: PoolMethod) -> JobRecord:
    _validator.validate_method(method)
    return replace(job, bonus_calc_method=method)


def record_payment(
    job: JobRecord,
    live_config: FinanceConfig,
    amount,
    pay_date: date,
    paid_at: datetime | None = None,
) -> JobRecord:
    """
    Mark a job's bonus paid.

    The live configuration is frozen onto the job so later recomputation
    reproduces this payout even after rates change.
    """
    parsed = _validator.validate_payment(amount, pay_date)
    return replace(
        job,
        bonus_paid=True,
        bonus_eligible=True,
        final_bonus_paid=parsed,
        pay_date=pay_date,
        bonus_paid_at=paid_at or datetime.now(timezone.utc),
        historical_config=live_config.snapshot(),
    )
