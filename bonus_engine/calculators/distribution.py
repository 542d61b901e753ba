"""
Distribution Engine

Splits a job's pools into per-person allocation lines and applies manual
overrides and ineligibility.
"""

from decimal import Decimal

from ..directory import EmployeeDirectory
from ..pay_calendar import resolve_pay_date
from ..models import (
    DISTRIBUTION_EVEN,
    AllocationLine,
    JobContext,
    WorkerEntry,
    ZERO,
)

ROLE_LEADER = "Leader"
ROLE_WORKER = "Worker"


class Distributor:
    """Builds the allocation lines of a job."""

    def distribute(self, ctx: JobContext, directory: EmployeeDirectory) -> list[AllocationLine]:
        """
        Produce one line for the leader and one per worker.

        Lines are dropped when they carry nothing: a zero amount that is
        neither a manual override nor an ineligible job kept for visibility.
        """
        job = ctx.job
        team = ctx.team
        pools = ctx.pools
        lines = []

        if job.leader:
            line = self._build_line(ctx, directory, job.leader, ROLE_LEADER, team.leader_minutes, pools.leader_pool)
            if line is not None:
                lines.append(line)

        for worker in team.workers:
            share = self.worker_share(ctx, worker)
            line = self._build_line(ctx, directory, worker.name, ROLE_WORKER, worker.minutes, share)
            if line is not None:
                lines.append(line)

        return lines

    @staticmethod
    def worker_share(ctx: JobContext, worker: WorkerEntry) -> Decimal:
        """A worker's cut of the worker pool, evenly or by logged minutes."""
        pool = ctx.pools.worker_pool
        team = ctx.team
        if pool <= 0 or team.worker_count == 0:
            return ZERO

        if ctx.method.distribution == DISTRIBUTION_EVEN:
            return pool / team.worker_count

        if team.total_worker_minutes <= 0:
            return ZERO
        return pool * worker.minutes / team.total_worker_minutes

    def _build_line(
        self,
        ctx: JobContext,
        directory: EmployeeDirectory,
        name: str,
        role: str,
        minutes: Decimal,
        computed: Decimal,
    ) -> AllocationLine | None:
        job = ctx.job
        amount = computed
        is_custom = False

        custom = job.custom_bonus_for(name)
        if custom is not None:
            amount = custom
            is_custom = True

        if ctx.is_ineligible and not is_custom:
            amount = ZERO

        if amount <= 0 and not is_custom and not ctx.is_ineligible:
            return None

        return AllocationLine(
            name=directory.resolve(name),
            raw_name=name,
            role=role,
            minutes=minutes,
            amount=amount,
            is_custom=is_custom,
            is_ineligible=ctx.is_ineligible,
            is_paid=ctx.is_paid,
            reason=job.bonus_ineligible_reason if ctx.is_ineligible else "",
            job_id=job.id,
            project=job.project,
            company=job.company,
            pl_number=job.pl_number,
            agent=job.agent_name or "",
            leader=job.leader or "",
            invoice=job.invoice_amount,
            profit=ctx.profit.net_profit,
            pool_basis=ctx.method.type_name,
            completed_at=job.completed_at,
            pay_date=resolve_pay_date(job),
        )
