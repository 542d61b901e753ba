"""
Fairness Adjuster

Applies the 30-minute rule to a job's pools.
"""

from decimal import Decimal

from ..models import JobContext, LeaderPercent, PoolAllocation


class FairnessAdjuster:
    """Moves part of the leader pool to the workers when the leader worked less."""

    THRESHOLD_MINUTES = Decimal("30")

    def apply(self, ctx: JobContext) -> PoolAllocation:
        """
        Rebalance pools when the busiest worker logged more than 30 minutes
        beyond the leader.

        The leader keeps leader_minutes / max_worker_minutes of the leader
        pool; the rest moves to the worker pool. The pool total is unchanged.
        Leader-only jobs are never adjusted.
        """
        pools = ctx.pools
        team = ctx.team

        if isinstance(ctx.method, LeaderPercent):
            return pools
        if team.leader_minutes <= 0 or team.max_worker_minutes <= 0:
            return pools
        if team.max_worker_minutes - team.leader_minutes <= self.THRESHOLD_MINUTES:
            return pools

        ratio = team.leader_minutes / team.max_worker_minutes
        moved = pools.leader_pool * (1 - ratio)

        return PoolAllocation(
            leader_pool=pools.leader_pool - moved,
            worker_pool=pools.worker_pool + moved,
            fairness_applied=True,
            amount_moved=moved,
        )
