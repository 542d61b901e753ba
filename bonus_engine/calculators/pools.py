"""
Pool Allocator

Turns a job's net profit, or a fixed amount, into a leader pool and a
worker pool according to the job's pool method.
"""

from decimal import ROUND_FLOOR, Decimal

from ..models import (
    CustomPercent,
    FixedAmount,
    JobContext,
    LeaderPercent,
    LegacyInterval,
    PoolAllocation,
    StandardPercent,
    ZERO,
)


def percent_of(profit: Decimal, percent: Decimal) -> Decimal:
    """Profit-based pool, floored at zero."""
    return max(ZERO, profit * percent / Decimal("100"))


def interval_amount(profit: Decimal, threshold: Decimal, amount: Decimal) -> Decimal:
    """`amount` for every full `threshold` of positive profit."""
    if threshold <= 0 or profit <= 0:
        return ZERO
    steps = (profit / threshold).to_integral_value(rounding=ROUND_FLOOR)
    return steps * amount


class PoolAllocator:
    """Computes the leader and worker pools of a job."""

    def allocate(self, ctx: JobContext) -> PoolAllocation:
        """
        Allocate pools for the job's method.

        Percentage methods never produce negative pools. Fixed and interval
        methods are taken as given.
        """
        profit = ctx.profit.net_profit
        team = ctx.team

        match ctx.method:
            case StandardPercent():
                return PoolAllocation(
                    leader_pool=percent_of(profit, team.tier.leader_percent),
                    worker_pool=percent_of(profit, team.tier.worker_percent),
                )
            case LeaderPercent(l_pct=l_pct):
                return PoolAllocation(leader_pool=percent_of(profit, l_pct), worker_pool=ZERO)
            case CustomPercent(l_pct=l_pct, w_pct=w_pct):
                return PoolAllocation(
                    leader_pool=percent_of(profit, l_pct),
                    worker_pool=percent_of(profit, w_pct),
                )
            case FixedAmount(l_fix=l_fix, w_fix=w_fix):
                return PoolAllocation(leader_pool=l_fix, worker_pool=w_fix)
            case LegacyInterval(l_amt=l_amt, l_thr=l_thr, w_amt=w_amt, w_thr=w_thr):
                return PoolAllocation(
                    leader_pool=interval_amount(profit, l_thr, l_amt),
                    worker_pool=interval_amount(profit, w_thr, w_amt) * team.worker_count,
                )
            case _:
                raise TypeError(f"Unsupported pool method: {ctx.method!r}")
