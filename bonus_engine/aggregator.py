"""
Summary Aggregator

Folds allocation lines from any number of jobs into per-employee summaries.
"""

from datetime import date
from typing import Iterable

from .models import AllocationLine, EmployeeSummary


class SummaryAggregator:
    """Accumulates lines per display name.

    Accumulation is order-independent: partial aggregators built over
    disjoint job sets can be merged in any order, and ordering is applied
    only by `results()`.
    """

    def __init__(self):
        self._summaries: dict[str, EmployeeSummary] = {}

    def add(self, line: AllocationLine) -> None:
        summary = self._summaries.get(line.name)
        if summary is None:
            summary = self._summaries[line.name] = EmployeeSummary(name=line.name)
        summary.items.append(line)
        summary.total += line.amount

    def extend(self, lines: Iterable[AllocationLine]) -> None:
        for line in lines:
            self.add(line)

    def merge(self, other: "SummaryAggregator") -> "SummaryAggregator":
        """A new aggregator holding the lines of both."""
        merged = SummaryAggregator()
        for source in (self, other):
            for summary in source._summaries.values():
                merged.extend(summary.items)
        return merged

    def results(self) -> list[EmployeeSummary]:
        """Summaries by name; each employee's items newest payout first."""
        results = []
        for summary in self._summaries.values():
            items = sorted(summary.items, key=lambda i: (i.job_id, i.role, i.raw_name))
            # Stable second pass: undated items sort last
            items.sort(key=lambda i: i.pay_date or date.min, reverse=True)
            results.append(EmployeeSummary(name=summary.name, total=summary.total, items=items))

        results.sort(key=lambda s: (s.name.lower(), s.name))
        return results
