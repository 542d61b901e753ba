"""
Unit Tests for Profit Calculator

Tests verify labor hours, agent commission and net profit for one job.
"""

import pytest
from decimal import Decimal
from bonus_engine.calculators.profit import ProfitCalculator
from bonus_engine.models import (
    Agent, FinanceConfig, JobContext, JobRecord, StandardPercent, WorkerEntry
)


class TestLaborHours:
    """Test where labor time comes from."""

    @pytest.fixture
    def calculator(self):
        return ProfitCalculator()

    def test_hours_from_worker_log(self, calculator):
        """Logged minutes take precedence over scanned seconds."""
        job = JobRecord(
            id="j1",
            worker_log=(WorkerEntry("Ann", Decimal('90')), WorkerEntry("Bo", Decimal('30'))),
            original_seconds=Decimal('36000'),
        )
        result = calculator.calculate(self._make_context(job))

        assert result.labor_hours == Decimal('2')

    def test_hours_from_scanned_seconds(self, calculator):
        """Without a log, hours come from original minus final seconds."""
        job = JobRecord(id="j1", original_seconds=Decimal('36000'), final_seconds=Decimal('0'))
        result = calculator.calculate(self._make_context(job))

        assert result.labor_hours == Decimal('10')

    def test_negative_scanned_time_floors_at_zero(self, calculator):
        """Final seconds above original seconds means no labor."""
        job = JobRecord(id="j1", original_seconds=Decimal('100'), final_seconds=Decimal('500'))
        result = calculator.calculate(self._make_context(job))

        assert result.labor_hours == Decimal('0')
        assert result.labor_cost == Decimal('0')

    def _make_context(self, job: JobRecord) -> JobContext:
        config = FinanceConfig(cost_per_hour=Decimal('25'))
        return JobContext(job=job, config=config, method=StandardPercent())


class TestNetProfit:
    """Test commission and profit arithmetic."""

    @pytest.fixture
    def calculator(self):
        return ProfitCalculator()

    @pytest.fixture
    def config(self):
        return FinanceConfig(
            cost_per_hour=Decimal('25'),
            agents=(Agent("Rep One", Decimal('10')),),
        )

    def test_profit_with_commission(self, calculator, config):
        """invoice 1000 - 10h x 25 - 10% of (1000 - 200) = 670."""
        job = JobRecord(
            id="j1",
            invoice_amount=Decimal('1000'),
            commission_excluded=Decimal('200'),
            agent_name="Rep One",
            original_seconds=Decimal('36000'),
        )
        result = calculator.calculate(JobContext(job=job, config=config, method=StandardPercent()))

        assert result.labor_cost == Decimal('250')
        assert result.commission == Decimal('80')
        assert result.net_profit == Decimal('670')

    def test_unmatched_agent_earns_nothing(self, calculator, config):
        """Agent lookup is exact; a near miss is not an error, just zero."""
        job = JobRecord(id="j1", invoice_amount=Decimal('1000'), agent_name="rep one")
        result = calculator.calculate(JobContext(job=job, config=config, method=StandardPercent()))

        assert result.commission == Decimal('0')
        assert result.net_profit == Decimal('1000')

    def test_excluded_above_invoice_gives_zero_commission(self, calculator, config):
        """Commission basis never goes negative."""
        job = JobRecord(
            id="j1",
            invoice_amount=Decimal('100'),
            commission_excluded=Decimal('500'),
            agent_name="Rep One",
        )
        result = calculator.calculate(JobContext(job=job, config=config, method=StandardPercent()))

        assert result.commission == Decimal('0')

    def test_negative_profit_is_preserved(self, calculator, config):
        """Labor above invoice yields negative profit, not zero."""
        job = JobRecord(id="j1", invoice_amount=Decimal('100'), original_seconds=Decimal('36000'))
        result = calculator.calculate(JobContext(job=job, config=config, method=StandardPercent()))

        assert result.net_profit == Decimal('-150')
