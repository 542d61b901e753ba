"""
Bonus Processor - Main Orchestrator

Coordinates the bonus allocation pipeline through discrete, testable steps.
"""

import logging
from typing import Any, Dict, Iterable

from .aggregator import SummaryAggregator
from .calculators import (
    Distributor,
    FairnessAdjuster,
    PoolAllocator,
    ProfitCalculator,
    TeamResolver,
)
from .commissions import CommissionReporter
from .directory import EmployeeDirectory
from .identity import sanitize
from .models import (
    AllocationLine,
    BonusRequest,
    CommissionReport,
    EmployeeSummary,
    FinanceConfig,
    JobBreakdown,
    JobContext,
    JobRecord,
    StandardPercent,
)
from .output import OutputBuilder

logger = logging.getLogger(__name__)


class BonusProcessor:
    """
    Main orchestrator for bonus processing.

    Implements a clear pipeline pattern, per job:
    1. Resolve Config (historical snapshot or live)
    2. Calculate Profit
    3. Resolve Team
    4. Allocate Pools
    5. Apply Fairness Rule
    6. Distribute Lines
    Then across jobs:
    7. Filter and Aggregate
    8. Build Output
    """

    def __init__(self):
        self.profit_calculator = ProfitCalculator()
        self.team_resolver = TeamResolver()
        self.pool_allocator = PoolAllocator()
        self.fairness_adjuster = FairnessAdjuster()
        self.distributor = Distributor()
        self.commission_reporter = CommissionReporter()
        self.output_builder = OutputBuilder()

    def process(
        self,
        jobs: Iterable[JobRecord],
        live_config: FinanceConfig,
        directory: EmployeeDirectory | None = None,
        filter_employee: str | None = None,
    ) -> list[EmployeeSummary]:
        """
        Compute per-employee bonus summaries over a set of jobs.

        Args:
            jobs: Finance-complete job records
            live_config: Current finance configuration
            directory: Known employees, for display names
            filter_employee: Restrict output to one employee

        Returns:
            EmployeeSummary list sorted by name
        """
        if directory is None:
            directory = EmployeeDirectory()
        aggregator = SummaryAggregator()

        for job in jobs:
            ctx = self.process_job(job, live_config, directory)
            aggregator.extend(self._filter_lines(ctx.lines, filter_employee))

        return aggregator.results()

    def process_job(
        self,
        job: JobRecord,
        live_config: FinanceConfig,
        directory: EmployeeDirectory | None = None,
    ) -> JobContext:
        """Run one job through every stage and return the populated context."""
        if directory is None:
            directory = EmployeeDirectory()

        # Step 1: Build context with the config this job must use
        ctx = self._build_context(job, live_config)

        # Step 2: Net profit
        ctx.profit = self.profit_calculator.calculate(ctx)

        # Step 3: Leader / workers / tier
        ctx.team = self.team_resolver.resolve(ctx)

        # Step 4: Pools
        ctx.pools = self.pool_allocator.allocate(ctx)

        # Step 5: 30-minute rule
        ctx.pools = self.fairness_adjuster.apply(ctx)

        # Step 6: Lines
        ctx.lines = self.distributor.distribute(ctx, directory)

        return ctx

    def job_breakdown(
        self,
        job: JobRecord,
        live_config: FinanceConfig,
        directory: EmployeeDirectory | None = None,
    ) -> JobBreakdown:
        """All lines of a single job with its profit and pools."""
        ctx = self.process_job(job, live_config, directory)
        return JobBreakdown(job_id=job.id, profit=ctx.profit, pools=ctx.pools, lines=ctx.lines)

    def process_from_dict(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Compute summaries from raw dictionary input.

        Convenience method for API usage.
        """
        request = BonusRequest.from_dict(data)
        summaries = self.process(
            request.jobs,
            request.config,
            EmployeeDirectory(request.directory),
            request.employee,
        )
        return self.output_builder.build(summaries)

    def job_breakdown_from_dict(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """Break down every job in a raw request, one entry per job."""
        request = BonusRequest.from_dict(data)
        directory = EmployeeDirectory(request.directory)
        return {
            "jobs": [
                self.output_builder.build_breakdown(self.job_breakdown(job, request.config, directory))
                for job in request.jobs
            ]
        }

    def agent_commissions(
        self,
        jobs: Iterable[JobRecord],
        live_config: FinanceConfig,
        agent: str | None = None,
        period: str | None = None,
    ) -> CommissionReport:
        """Per-agent commission totals, optionally for one agent or month."""
        return self.commission_reporter.report(jobs, live_config, agent, period)

    def agent_commissions_from_dict(self, data: Dict[str, Any]) -> Dict[str, Any]:
        request = BonusRequest.from_dict(data)
        report = self.agent_commissions(request.jobs, request.config, request.agent, request.period)
        return self.output_builder.build_commissions(report)

    def _build_context(self, job: JobRecord, live_config: FinanceConfig) -> JobContext:
        """Build the initial processing context.

        A job carrying a frozen snapshot (stored when its bonus was paid) is
        always replayed with it, never with the live config.
        """
        uses_historical = job.historical_config is not None
        config = job.historical_config if uses_historical else live_config
        if uses_historical:
            logger.debug("Job %s: using historical finance config", job.id)

        return JobContext(
            job=job,
            config=config,
            method=job.bonus_calc_method or StandardPercent(),
            uses_historical_config=uses_historical,
        )

    @staticmethod
    def _filter_lines(lines: list[AllocationLine], filter_employee: str | None) -> list[AllocationLine]:
        """Keep lines whose logged or display name matches the filter."""
        if not filter_employee:
            return lines
        key = sanitize(filter_employee)
        return [line for line in lines if key in (sanitize(line.raw_name), sanitize(line.name))]


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def compute_allocations(
    jobs: Iterable[JobRecord],
    live_config: FinanceConfig,
    employee_directory: EmployeeDirectory | Iterable | None = None,
    filter_employee: str | None = None,
) -> list[EmployeeSummary]:
    """
    Per-employee bonus summaries for `jobs`.

    `employee_directory` may be an EmployeeDirectory or a list of
    EmployeeIdentity objects or their dict form.
    """
    if employee_directory is not None and not isinstance(employee_directory, EmployeeDirectory):
        employee_directory = EmployeeDirectory.from_list(employee_directory)
    processor = BonusProcessor()
    return processor.process(jobs, live_config, employee_directory, filter_employee)


def process_bonuses_from_json(json_input: str) -> str:
    """
    Compute summaries from a JSON string and return a JSON string.
    """
    import json

    try:
        input_data = json.loads(json_input)
        processor = BonusProcessor()
        result = processor.process_from_dict(input_data)
        return json.dumps(result, indent=2)

    except ValueError as e:
        error_response = {"error": str(e), "status": "validation_failed"}
        return json.dumps(error_response, indent=2)

    except Exception as e:
        error_response = {"error": str(e), "status": "failed"}
        return json.dumps(error_response, indent=2)
