"""
Agent Commission Report

Groups jobs by their sales agent and totals each agent's commission, for
one calendar month or for all time.
"""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

from .calculators.profit import ProfitCalculator
from .models import (
    AgentCommissionSummary,
    CommissionLine,
    CommissionReport,
    FinanceConfig,
    JobRecord,
    ZERO,
)

CENTS = Decimal("0.01")

_MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)


@dataclass(frozen=True)
class ReportPeriod:
    """A calendar month of completed jobs, keyed like "6/2024"."""

    year: int
    month: int

    @property
    def key(self) -> str:
        return f"{self.month}/{self.year}"

    @property
    def label(self) -> str:
        return f"{_MONTH_NAMES[self.month - 1]} {self.year}"


def job_period(job: JobRecord) -> ReportPeriod | None:
    if job.completed_at is None:
        return None
    return ReportPeriod(year=job.completed_at.year, month=job.completed_at.month)


def report_periods(jobs: Iterable[JobRecord]) -> list[ReportPeriod]:
    """Distinct months with agent jobs, newest first."""
    periods = {job_period(job) for job in jobs if job.agent_name}
    periods.discard(None)
    return sorted(periods, key=lambda p: (p.year, p.month), reverse=True)


def agent_names(jobs: Iterable[JobRecord]) -> list[str]:
    return sorted({job.agent_name for job in jobs if job.agent_name})


class CommissionReporter:
    """Builds per-agent commission totals."""

    def __init__(self):
        self.profit_calculator = ProfitCalculator()

    def report(
        self,
        jobs: Iterable[JobRecord],
        live_config: FinanceConfig,
        agent: str | None = None,
        period: str | None = None,
    ) -> CommissionReport:
        """
        Commission per agent over `jobs`.

        Args:
            jobs: Job records; those without an agent are skipped
            live_config: Current finance configuration
            agent: Restrict to one agent (exact name)
            period: Restrict to one month key such as "6/2024"; None for all time

        Returns:
            CommissionReport with agents sorted by name
        """
        summaries: dict[str, AgentCommissionSummary] = {}

        for job in jobs:
            if not job.agent_name:
                continue
            if agent and job.agent_name != agent:
                continue
            if period:
                job_month = job_period(job)
                if job_month is None or job_month.key != period:
                    continue

            line = self.commission_line(job, live_config)
            summary = summaries.setdefault(job.agent_name, AgentCommissionSummary(agent=job.agent_name))
            summary.items.append(line)
            summary.total += line.amount

        return CommissionReport(
            agents=[summaries[name] for name in sorted(summaries)],
            period=period,
        )

    def commission_line(self, job: JobRecord, live_config: FinanceConfig) -> CommissionLine:
        """One job's commission, with the rate used.

        Paid jobs are reported with the configuration frozen at payment, the
        same one their net profit was computed with.
        """
        config = job.historical_config or live_config
        found = config.find_agent(job.agent_name)
        amount = self.profit_calculator.agent_commission(job, config)

        return CommissionLine(
            agent=job.agent_name or "",
            job_id=job.id,
            invoice=job.invoice_amount,
            excluded=job.commission_excluded,
            rate=found.commission_percent if found else ZERO,
            amount=amount.quantize(CENTS, rounding=ROUND_HALF_UP),
            project=job.project,
            company=job.company,
            completed_at=job.completed_at,
        )
