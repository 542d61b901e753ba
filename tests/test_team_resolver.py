"""
Unit Tests for Team Resolver

Tests verify leader detection, the leader time fallback and tier selection.
"""

import pytest
from decimal import Decimal
from bonus_engine.calculators.team import TeamResolver
from bonus_engine.models import (
    FinanceConfig, JobContext, JobRecord, ProfitCalculation, StandardPercent, WorkerEntry
)


def _log(*entries):
    return tuple(WorkerEntry(name, Decimal(str(minutes))) for name, minutes in entries)


class TestRosterSplit:
    """Test leader / worker partitioning."""

    @pytest.fixture
    def resolver(self):
        return TeamResolver()

    def test_leader_matched_by_sanitized_name(self, resolver):
        """Case and punctuation differences do not split one person in two."""
        job = JobRecord(id="j1", leader="Mary-Ann O'Neil", worker_log=_log(("mary ann oneil", 200), ("Bo", 100)))
        team = resolver.resolve(self._make_context(job))

        assert team.leader_minutes == Decimal('200')
        assert [w.name for w in team.workers] == ["Bo"]
        assert team.team_size == 2

    def test_max_and_total_worker_minutes_exclude_leader(self, resolver):
        job = JobRecord(id="j1", leader="Lee", worker_log=_log(("Lee", 500), ("Bo", 100), ("Cy", 300)))
        team = resolver.resolve(self._make_context(job))

        assert team.max_worker_minutes == Decimal('300')
        assert team.total_worker_minutes == Decimal('400')

    def test_leader_fallback_to_full_job_time(self, resolver):
        """A named leader missing from the log is credited with all labor time."""
        job = JobRecord(id="j1", leader="Lee", worker_log=_log(("Bo", 120), ("Cy", 60)))
        team = resolver.resolve(self._make_context(job, labor_hours=Decimal('3')))

        assert team.leader_minutes == Decimal('180')
        assert team.team_size == 3

    def test_no_fallback_without_labor_time(self, resolver):
        job = JobRecord(id="j1", leader="Lee")
        team = resolver.resolve(self._make_context(job, labor_hours=Decimal('0')))

        assert team.leader_minutes == Decimal('0')
        assert team.team_size == 0

    def test_no_leader_means_everyone_is_a_worker(self, resolver):
        job = JobRecord(id="j1", worker_log=_log(("Bo", 120), ("Cy", 60)))
        team = resolver.resolve(self._make_context(job))

        assert team.worker_count == 2
        assert team.leader_minutes == Decimal('0')

    def _make_context(self, job: JobRecord, labor_hours: Decimal = None) -> JobContext:
        ctx = JobContext(job=job, config=FinanceConfig(), method=StandardPercent())
        if labor_hours is None:
            labor_hours = sum((e.minutes for e in job.worker_log), Decimal('0')) / 60
        ctx.profit = ProfitCalculation(labor_hours=labor_hours)
        return ctx


class TestTierSelection:
    """Test each team size picks its own percentage source."""

    @pytest.fixture
    def config(self):
        return FinanceConfig(
            leader_pool_percent=Decimal('4'), worker_pool_percent=Decimal('14'),
            leader_pool_percent_3=Decimal('3'), worker_pool_percent_3=Decimal('13'),
            leader_pool_percent_2=Decimal('2'), worker_pool_percent_2=Decimal('12'),
            worker_pool_percent_1=Decimal('8'),
        )

    def test_lone_leader_gets_total_as_leader_pool(self, config):
        tier = TeamResolver.select_tier(config, 1, has_leader=True)
        assert (tier.leader_percent, tier.worker_percent) == (Decimal('8'), Decimal('0'))

    def test_lone_worker_gets_total_as_worker_pool(self, config):
        tier = TeamResolver.select_tier(config, 1, has_leader=False)
        assert (tier.leader_percent, tier.worker_percent) == (Decimal('0'), Decimal('8'))

    def test_pair_uses_suffix_2(self, config):
        tier = TeamResolver.select_tier(config, 2, has_leader=True)
        assert (tier.leader_percent, tier.worker_percent) == (Decimal('2'), Decimal('12'))

    def test_trio_uses_suffix_3(self, config):
        tier = TeamResolver.select_tier(config, 3, has_leader=True)
        assert (tier.leader_percent, tier.worker_percent) == (Decimal('3'), Decimal('13'))

    def test_four_uses_standard(self, config):
        tier = TeamResolver.select_tier(config, 4, has_leader=True)
        assert (tier.leader_percent, tier.worker_percent) == (Decimal('4'), Decimal('14'))

    def test_five_same_as_four(self, config):
        assert TeamResolver.select_tier(config, 5, True) == TeamResolver.select_tier(config, 4, True)

    def test_empty_team_uses_standard(self, config):
        tier = TeamResolver.select_tier(config, 0, has_leader=False)
        assert tier.label == "standard"
