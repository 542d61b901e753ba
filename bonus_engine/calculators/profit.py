"""
Profit Calculator

Derives labor cost, agent commission and net profit for one job.
"""

from decimal import Decimal

from ..models import FinanceConfig, JobContext, JobRecord, ProfitCalculation, ZERO


class ProfitCalculator:
    """Calculates the net profit of a job."""

    def calculate(self, ctx: JobContext) -> ProfitCalculation:
        """
        Net Profit = Invoice
                   - Labor Hours x Cost Per Hour
                   - Agent Commission

        Negative profit is preserved here; later stages decide how to clamp.
        """
        job = ctx.job
        hours = self.labor_hours(ctx)
        labor_cost = hours * ctx.config.cost_per_hour
        commission = self._calculate_commission(ctx)

        return ProfitCalculation(
            labor_hours=hours,
            labor_cost=labor_cost,
            commission=commission,
            net_profit=job.invoice_amount - labor_cost - commission,
        )

    @staticmethod
    def labor_hours(ctx: JobContext) -> Decimal:
        """Logged minutes when a worker log exists, scanned clock time otherwise."""
        job = ctx.job
        if job.worker_log:
            total_minutes = sum((entry.minutes for entry in job.worker_log), ZERO)
            return total_minutes / Decimal("60")

        seconds = job.original_seconds - job.final_seconds
        if seconds <= 0:
            return ZERO
        return seconds / Decimal("3600")

    def _calculate_commission(self, ctx: JobContext) -> Decimal:
        return self.agent_commission(ctx.job, ctx.config)

    @staticmethod
    def commission_basis(job: JobRecord) -> Decimal:
        """Invoice less the portion excluded from commission, never negative."""
        return max(ZERO, job.invoice_amount - job.commission_excluded)

    @classmethod
    def agent_commission(cls, job: JobRecord, config: FinanceConfig) -> Decimal:
        """Agent commission on the commission basis.

        An agent missing from the configuration earns nothing.
        """
        agent = config.find_agent(job.agent_name)
        if agent is None:
            return ZERO
        return cls.commission_basis(job) * agent.commission_percent / Decimal("100")
