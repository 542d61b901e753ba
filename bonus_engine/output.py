"""
Output Builder

Constructs API responses and export rows from computed summaries.
"""

from datetime import date
from decimal import Decimal

from .models import AllocationLine, CommissionLine, CommissionReport, EmployeeSummary, JobBreakdown, ZERO
from .pay_calendar import format_us_date

EXPORT_COLUMNS = [
    "Report ID",
    "Employee",
    "Pay Date",
    "Work Date",
    "Project",
    "Company",
    "Leader",
    "Role",
    "Hours",
    "Invoice Amt",
    "Agent",
    "Pool Basis",
    "Bonus Amount",
    "Custom Override",
    "Status",
    "Reason",
]

COMMISSION_COLUMNS = [
    "Agent",
    "Date",
    "Project",
    "Company",
    "Invoice",
    "Excluded",
    "Rate",
    "Commission",
]

STATUS_INELIGIBLE = "NOT ELIGIBLE"
STATUS_PAID = "PAID"
STATUS_PENDING = "PENDING"


def to_money(value: Decimal) -> float:
    """Convert Decimal to float with 2 decimal places."""
    return round(float(value), 2)


def _fmt(value) -> str:
    """Format a number as currency string for descriptions."""
    return f"${value:,.2f}"


def _fmt_date(value: date | None) -> str:
    return format_us_date(value) if value else "N/A"


def line_status(line: AllocationLine) -> str:
    if line.is_ineligible:
        return STATUS_INELIGIBLE
    return STATUS_PAID if line.is_paid else STATUS_PENDING


class OutputBuilder:
    """Builds the final output response."""

    def build(self, summaries: list[EmployeeSummary]) -> dict:
        """Construct the complete response for a set of summaries."""
        grand_total = sum((s.total for s in summaries), ZERO)
        return {
            "employees": [self.build_summary(s) for s in summaries],
            "employee_count": len(summaries),
            "grand_total": to_money(grand_total),
        }

    def build_summary(self, summary: EmployeeSummary) -> dict:
        return {
            "name": summary.name,
            "total": to_money(summary.total),
            "items": [self.build_line(line) for line in summary.items],
        }

    def build_line(self, line: AllocationLine) -> dict:
        return {
            "id": line.job_id,
            "name": line.name,
            "raw_name": line.raw_name,
            "role": line.role,
            "minutes": float(line.minutes),
            "hours": round(float(line.hours), 2),
            "amount": to_money(line.amount),
            "is_custom": line.is_custom,
            "is_ineligible": line.is_ineligible,
            "reason": line.reason,
            "status": line_status(line),
            "project": line.project,
            "company": line.company,
            "pl_number": line.pl_number,
            "agent": line.agent,
            "leader": line.leader,
            "invoice": to_money(line.invoice),
            "profit": to_money(line.profit),
            "pool_basis": line.pool_basis,
            "original_date": _fmt_date(line.completed_at.date() if line.completed_at else None),
            "pay_date": _fmt_date(line.pay_date),
        }

    def build_breakdown(self, breakdown: JobBreakdown) -> dict:
        """Per-job card: lines plus a described profit and pool calculation."""
        profit = breakdown.profit
        pools = breakdown.pools

        return {
            "id": breakdown.job_id,
            "total_bonus": to_money(breakdown.total_bonus),
            "lines": [self.build_line(line) for line in breakdown.lines],
            "calculations": {
                "labor_cost": {
                    "value": to_money(profit.labor_cost),
                    "description": f"{float(profit.labor_hours):.2f} hours of labor = {_fmt(to_money(profit.labor_cost))}",
                },
                "commission": {
                    "value": to_money(profit.commission),
                    "description": f"Agent commission on the invoice less excluded amounts: {_fmt(to_money(profit.commission))}" if profit.commission else "No agent commission for this job",
                },
                "net_profit": {
                    "value": to_money(profit.net_profit),
                    "description": f"invoice - labor ({_fmt(to_money(profit.labor_cost))}) - commission ({_fmt(to_money(profit.commission))}) = {_fmt(to_money(profit.net_profit))}",
                },
                "leader_pool": {
                    "value": to_money(pools.leader_pool),
                    "description": f"Leader pool after moving {_fmt(to_money(pools.amount_moved))} to workers under the 30-minute rule" if pools.fairness_applied else "Leader pool; 30-minute rule not triggered",
                },
                "worker_pool": {
                    "value": to_money(pools.worker_pool),
                    "description": "Worker pool shared by logged minutes or evenly",
                },
            },
        }

    def export_rows(self, summaries: list[EmployeeSummary]) -> list[dict]:
        """Flatten summaries into one row per line, keyed by EXPORT_COLUMNS."""
        rows = []
        for summary in summaries:
            for line in summary.items:
                rows.append(dict(zip(EXPORT_COLUMNS, [
                    line.job_id,
                    summary.name,
                    _fmt_date(line.pay_date),
                    _fmt_date(line.completed_at.date() if line.completed_at else None),
                    line.project,
                    line.company,
                    line.leader,
                    line.role,
                    f"{float(line.hours):.2f}",
                    f"{float(line.invoice):.2f}",
                    line.agent,
                    line.pool_basis,
                    f"{float(line.amount):.2f}",
                    "Yes" if line.is_custom else "No",
                    line_status(line),
                    line.reason,
                ])))
        return rows

    def build_commissions(self, report: CommissionReport) -> dict:
        """Agent commission totals with their job lines."""
        return {
            "period": report.period or "all",
            "agents": [
                {
                    "agent": summary.agent,
                    "total": to_money(summary.total),
                    "items": [self.build_commission_line(line) for line in summary.items],
                }
                for summary in report.agents
            ],
            "job_count": report.job_count,
            "grand_total": to_money(report.grand_total),
        }

    def build_commission_line(self, line: CommissionLine) -> dict:
        return {
            "id": line.job_id,
            "project": line.project,
            "company": line.company,
            "date": _fmt_date(line.completed_at.date() if line.completed_at else None),
            "invoice": to_money(line.invoice),
            "excluded": to_money(line.excluded),
            "rate": float(line.rate),
            "commission": to_money(line.amount),
        }

    def commission_export_rows(self, report: CommissionReport) -> list[dict]:
        """One row per job, keyed by COMMISSION_COLUMNS."""
        rows = []
        for summary in report.agents:
            for line in summary.items:
                rows.append(dict(zip(COMMISSION_COLUMNS, [
                    summary.agent,
                    _fmt_date(line.completed_at.date() if line.completed_at else None),
                    line.project,
                    line.company,
                    f"{float(line.invoice):.2f}",
                    f"{float(line.excluded):.2f}",
                    f"{line.rate.normalize():f}%",
                    f"{float(line.amount):.2f}",
                ])))
        return rows
