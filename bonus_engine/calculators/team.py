"""
Team Composition Resolver

Separates a job's leader from its workers and selects the percentage tier
that applies to the team size.
"""

from decimal import Decimal

from ..identity import sanitize
from ..models import FinanceConfig, JobContext, TeamComposition, TierPolicy, ZERO


class TeamResolver:
    """Classifies the roster of a job."""

    def resolve(self, ctx: JobContext) -> TeamComposition:
        """
        Build the team composition for a job.

        The leader is the log entry whose sanitized name equals the sanitized
        leader field. A named leader with no logged minutes is assumed present
        for the whole job when the job has any labor time.
        """
        job = ctx.job
        leader_key = sanitize(job.leader)

        leader_minutes = ZERO
        workers = []
        for entry in job.worker_log:
            if leader_key and sanitize(entry.name) == leader_key:
                leader_minutes = entry.minutes
            else:
                workers.append(entry)

        labor_hours = ctx.profit.labor_hours
        if job.leader and leader_minutes == 0 and labor_hours > 0:
            leader_minutes = labor_hours * Decimal("60")

        team_size = (1 if leader_minutes > 0 else 0) + len(workers)

        return TeamComposition(
            leader_name=job.leader,
            leader_minutes=leader_minutes,
            workers=tuple(workers),
            max_worker_minutes=max((w.minutes for w in workers), default=ZERO),
            total_worker_minutes=sum((w.minutes for w in workers), ZERO),
            team_size=team_size,
            tier=self.select_tier(ctx.config, team_size, has_leader=leader_minutes > 0),
        )

    @staticmethod
    def select_tier(config: FinanceConfig, team_size: int, has_leader: bool) -> TierPolicy:
        """Pick the standard_percent tier for a team size.

        A lone person gets the single-person percentage as their whole
        pool: the leader pool if they lead, the worker pool otherwise.
        """
        if team_size == 1:
            percent = config.worker_pool_percent_1
            if has_leader:
                return TierPolicy(label="solo", leader_percent=percent, worker_percent=ZERO)
            return TierPolicy(label="solo", leader_percent=ZERO, worker_percent=percent)

        if team_size == 2:
            return TierPolicy(
                label="pair",
                leader_percent=config.leader_pool_percent_2,
                worker_percent=config.worker_pool_percent_2,
            )

        if team_size == 3:
            return TierPolicy(
                label="trio",
                leader_percent=config.leader_pool_percent_3,
                worker_percent=config.worker_pool_percent_3,
            )

        # 4+ employees, and jobs with nobody on the log
        return TierPolicy(
            label="standard",
            leader_percent=config.leader_pool_percent,
            worker_percent=config.worker_pool_percent,
        )
