"""
BONUS ALLOCATION ENGINE
Profit, pool and per-employee bonus computation for completed production jobs
"""

from .commissions import CommissionReporter
from .directory import EmployeeDirectory
from .identity import EmployeeIdentity, sanitize
from .models import EmployeeSummary, FinanceConfig, JobRecord
from .processor import BonusProcessor, compute_allocations

__all__ = [
    'BonusProcessor',
    'CommissionReporter',
    'compute_allocations',
    'EmployeeDirectory',
    'EmployeeIdentity',
    'EmployeeSummary',
    'FinanceConfig',
    'JobRecord',
    'sanitize',
]
