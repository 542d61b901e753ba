"""
Calculators Package

Provides one calculation component per stage of bonus processing.
"""

from .distribution import Distributor
from .fairness import FairnessAdjuster
from .pools import PoolAllocator
from .profit import ProfitCalculator
from .team import TeamResolver

__all__ = [
    "ProfitCalculator",
    "TeamResolver",
    "PoolAllocator",
    "FairnessAdjuster",
    "Distributor",
]
