"""
Pay Calendar

Payout dates, the work weeks they settle, and selection of jobs by
payout view or work week.
"""

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterable

from .models import JobRecord

FINANCE_COMPLETE = "complete"

VIEW_PENDING = "pending"
VIEW_PAID = "paid"
VIEW_INELIGIBLE = "ineligible"
VIEW_HISTORY = "history"
VIEWS = (VIEW_PENDING, VIEW_PAID, VIEW_INELIGIBLE, VIEW_HISTORY)

# Bonuses for a week's work are paid the Tuesday after that week's Saturday
SATURDAY_TO_PAYDAY = 3


def format_us_date(value: date) -> str:
    return value.strftime("%m/%d/%Y")


def _days_since_sunday(value: date) -> int:
    # date.weekday() counts from Monday
    return (value.weekday() + 1) % 7


def resolve_pay_date(job: JobRecord) -> date | None:
    """The date a job's bonus is (or will be) paid.

    Order: an explicit pay date, the day the bonus was marked paid, then the
    default payday following the job's completion.
    """
    if job.pay_date:
        return job.pay_date
    if job.bonus_paid_at:
        return job.bonus_paid_at.date()
    if job.completed_at is None:
        return None

    completed = job.completed_at.date()
    to_saturday = 6 - _days_since_sunday(completed)
    return completed + timedelta(days=to_saturday + SATURDAY_TO_PAYDAY)


@dataclass(frozen=True)
class WorkWeek:
    """The Sunday-to-Saturday week settled by one payday."""

    start: date
    end: date

    @property
    def simple_label(self) -> str:
        return f"{format_us_date(self.start)} - {format_us_date(self.end)}"

    @property
    def label(self) -> str:
        return f"Work Week: {self.simple_label}"


def work_week(pay_date: date) -> WorkWeek:
    """The week before the pay date's own week."""
    pay_week_start = pay_date - timedelta(days=_days_since_sunday(pay_date))
    start = pay_week_start - timedelta(days=7)
    return WorkWeek(start=start, end=start + timedelta(days=6))


def work_week_options(jobs: Iterable[JobRecord]) -> list[WorkWeek]:
    """Distinct work weeks across `jobs`, newest first."""
    weeks = {}
    for job in jobs:
        pay_date = resolve_pay_date(job)
        if pay_date is None:
            continue
        week = work_week(pay_date)
        weeks[week.start] = week
    return [weeks[start] for start in sorted(weeks, reverse=True)]


def jobs_in_work_week(jobs: Iterable[JobRecord], week_start: date) -> list[JobRecord]:
    """Jobs whose payout settles the work week starting on `week_start`."""
    selected = []
    for job in jobs:
        pay_date = resolve_pay_date(job)
        if pay_date is not None and work_week(pay_date).start == week_start:
            selected.append(job)
    return selected


def select_jobs(jobs: Iterable[JobRecord], view: str) -> list[JobRecord]:
    """
    Finance-complete jobs for one payout view.

    - pending: eligible and not yet paid
    - paid: bonus marked paid
    - ineligible: blocked from bonuses
    - history: paid or ineligible, for reports
    """
    if view not in VIEWS:
        raise ValueError(f"Invalid view: {view}. Must be one of {', '.join(VIEWS)}")

    selected = []
    for job in jobs:
        if job.finance_status != FINANCE_COMPLETE:
            continue
        if view == VIEW_PENDING:
            include = job.bonus_eligible and not job.bonus_paid
        elif view == VIEW_PAID:
            include = job.bonus_paid
        elif view == VIEW_INELIGIBLE:
            include = not job.bonus_eligible
        else:
            include = job.bonus_paid or not job.bonus_eligible
        if include:
            selected.append(job)
    return selected
