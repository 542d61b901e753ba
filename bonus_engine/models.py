"""
Domain Models for the Bonus Allocation Engine

These dataclasses provide type-safe representations of job records, the
finance configuration and every intermediate and final result.
All monetary values and percentages use Decimal for precision.
"""

from dataclasses import dataclass, field, replace
from datetime import date, datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import ClassVar

from .identity import EmployeeIdentity, sanitize

ZERO = Decimal("0")

# Largest power of ten accepted from input; anything bigger is treated as garbage
MAX_MAGNITUDE = 15


def to_decimal(value, default: Decimal = ZERO) -> Decimal:
    """Coerce any input to a finite Decimal, falling back to `default`.

    Bad numeric input never raises; it degrades to zero so a payroll
    review is never blocked by one malformed record.
    """
    if value is None or isinstance(value, bool):
        return default
    try:
        result = Decimal(str(value).strip())
    except (InvalidOperation, ValueError, TypeError):
        return default
    if not result.is_finite() or result.adjusted() > MAX_MAGNITUDE:
        return default
    return result


def parse_timestamp(value) -> datetime | None:
    """Parse epoch seconds, a Firestore-style {"seconds": n} map or ISO text."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, dict):
        value = value.get("seconds", value.get("_seconds"))
        if value is None:
            return None
    if isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    try:
        return datetime.fromisoformat(str(value).strip())
    except ValueError:
        return None


def parse_date(value) -> date | None:
    """Parse a payout date stored as MM/DD/YYYY or YYYY-MM-DD."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    for fmt in ("%m/%d/%Y", "%Y-%m-%d"):
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue
    return None


def _list_of(value) -> list:
    return value if isinstance(value, list) else []


def _mapping_of(value) -> dict:
    return value if isinstance(value, dict) else {}


# =============================================================================
# CONFIGURATION MODELS
# =============================================================================


@dataclass(frozen=True)
class Agent:
    """A commission payee."""

    name: str
    commission_percent: Decimal = ZERO

    @classmethod
    def from_dict(cls, data: dict) -> "Agent":
        percent = data.get("comm", data.get("commissionPercent"))
        return cls(name=str(data.get("name") or ""), commission_percent=to_decimal(percent))

    def to_dict(self) -> dict:
        return {"name": self.name, "comm": float(self.commission_percent)}


@dataclass(frozen=True)
class FinanceConfig:
    """Finance settings: labor rate, tiered pool percentages and agents."""

    cost_per_hour: Decimal = ZERO
    # 4+ person teams
    leader_pool_percent: Decimal = ZERO
    worker_pool_percent: Decimal = ZERO
    leader_pool_percent_3: Decimal = ZERO
    worker_pool_percent_3: Decimal = ZERO
    leader_pool_percent_2: Decimal = ZERO
    worker_pool_percent_2: Decimal = ZERO
    # Lone person: total percentage, not a split
    worker_pool_percent_1: Decimal = ZERO
    agents: tuple[Agent, ...] = ()

    # Field name -> stored key
    _KEYS: ClassVar[dict] = {
        "cost_per_hour": "costPerHour",
        "leader_pool_percent": "leaderPoolPercent",
        "worker_pool_percent": "workerPoolPercent",
        "leader_pool_percent_3": "leaderPoolPercent_3",
        "worker_pool_percent_3": "workerPoolPercent_3",
        "leader_pool_percent_2": "leaderPoolPercent_2",
        "worker_pool_percent_2": "workerPoolPercent_2",
        "worker_pool_percent_1": "workerPoolPercent_1",
    }

    def find_agent(self, name: str | None) -> Agent | None:
        """Exact-name agent lookup."""
        if not name:
            return None
        for agent in self.agents:
            if agent.name == name:
                return agent
        return None

    def snapshot(self) -> "FinanceConfig":
        """Freeze the values a payout depends on, for storage on a paid job."""
        return replace(self, agents=tuple(self.agents))

    def to_dict(self) -> dict:
        result = {key: float(getattr(self, attr)) for attr, key in self._KEYS.items()}
        result["agents"] = [agent.to_dict() for agent in self.agents]
        return result

    @classmethod
    def from_dict(cls, data: dict | None) -> "FinanceConfig":
        if not isinstance(data, dict):
            data = {}
        values = {attr: to_decimal(data.get(key)) for attr, key in cls._KEYS.items()}
        agents = tuple(Agent.from_dict(a) for a in _list_of(data.get("agents")) if isinstance(a, dict))
        return cls(agents=agents, **values)


# =============================================================================
# POOL METHODS
# =============================================================================

DISTRIBUTION_HOURS = "hours"
DISTRIBUTION_EVEN = "even"
DISTRIBUTIONS = (DISTRIBUTION_HOURS, DISTRIBUTION_EVEN)

DEFAULT_INTERVAL_THRESHOLD = Decimal("1000")


@dataclass(frozen=True)
class StandardPercent:
    """Tiered percentages from the finance configuration."""

    distribution: str = DISTRIBUTION_HOURS
    type_name: ClassVar[str] = "standard_percent"

    @classmethod
    def from_params(cls, data: dict, distribution: str) -> "StandardPercent":
        return cls(distribution=distribution)


@dataclass(frozen=True)
class LeaderPercent:
    """Leader-only percentage; there is no worker pool."""

    l_pct: Decimal = ZERO
    distribution: str = DISTRIBUTION_HOURS
    type_name: ClassVar[str] = "leader_percent"

    @classmethod
    def from_params(cls, data: dict, distribution: str) -> "LeaderPercent":
        return cls(l_pct=to_decimal(data.get("l_pct")), distribution=distribution)


@dataclass(frozen=True)
class CustomPercent:
    """Independent leader and worker percentages for one job."""

    l_pct: Decimal = ZERO
    w_pct: Decimal = ZERO
    distribution: str = DISTRIBUTION_HOURS
    type_name: ClassVar[str] = "custom_percent"

    @classmethod
    def from_params(cls, data: dict, distribution: str) -> "CustomPercent":
        return cls(
            l_pct=to_decimal(data.get("l_pct")),
            w_pct=to_decimal(data.get("w_pct")),
            distribution=distribution,
        )


@dataclass(frozen=True)
class FixedAmount:
    """Flat dollar pools, independent of profit."""

    l_fix: Decimal = ZERO
    w_fix: Decimal = ZERO
    distribution: str = DISTRIBUTION_HOURS
    type_name: ClassVar[str] = "fixed_amount"

    @classmethod
    def from_params(cls, data: dict, distribution: str) -> "FixedAmount":
        return cls(
            l_fix=to_decimal(data.get("l_fix")),
            w_fix=to_decimal(data.get("w_fix")),
            distribution=distribution,
        )


@dataclass(frozen=True)
class LegacyInterval:
    """Stepped amount per threshold of profit; worker amount is per worker."""

    l_amt: Decimal = ZERO
    l_thr: Decimal = DEFAULT_INTERVAL_THRESHOLD
    w_amt: Decimal = ZERO
    w_thr: Decimal = DEFAULT_INTERVAL_THRESHOLD
    distribution: str = DISTRIBUTION_HOURS
    type_name: ClassVar[str] = "legacy_interval"

    @classmethod
    def from_params(cls, data: dict, distribution: str) -> "LegacyInterval":
        # A zero or missing threshold means the default step
        return cls(
            l_amt=to_decimal(data.get("l_amt")),
            l_thr=to_decimal(data.get("l_thr")) or DEFAULT_INTERVAL_THRESHOLD,
            w_amt=to_decimal(data.get("w_amt")),
            w_thr=to_decimal(data.get("w_thr")) or DEFAULT_INTERVAL_THRESHOLD,
            distribution=distribution,
        )


PoolMethod = StandardPercent | LeaderPercent | CustomPercent | FixedAmount | LegacyInterval

POOL_METHODS = {
    cls.type_name: cls
    for cls in (StandardPercent, LeaderPercent, CustomPercent, FixedAmount, LegacyInterval)
}


def parse_pool_method(data) -> PoolMethod:
    """Build a pool method from its stored form; unknown input is standard."""
    if not isinstance(data, dict):
        return StandardPercent()
    distribution = data.get("distribution")
    if distribution not in DISTRIBUTIONS:
        distribution = DISTRIBUTION_HOURS
    method_cls = POOL_METHODS.get(data.get("type"), StandardPercent)
    return method_cls.from_params(data, distribution)


# =============================================================================
# INPUT MODELS
# =============================================================================


@dataclass(frozen=True)
class WorkerEntry:
    """One person's logged time on a job."""

    name: str
    minutes: Decimal = ZERO

    @classmethod
    def from_dict(cls, data: dict) -> "WorkerEntry":
        if "minutes" in data:
            minutes = to_decimal(data.get("minutes"))
        else:
            minutes = to_decimal(data.get("seconds")) / Decimal("60")
        return cls(name=str(data.get("name") or "").strip(), minutes=minutes)


@dataclass(frozen=True)
class JobRecord:
    """A completed production job as stored by the dashboard."""

    id: str
    leader: str | None = None
    worker_log: tuple[WorkerEntry, ...] = ()
    invoice_amount: Decimal = ZERO
    commission_excluded: Decimal = ZERO
    agent_name: str | None = None
    original_seconds: Decimal = ZERO
    final_seconds: Decimal = ZERO
    bonus_calc_method: PoolMethod | None = None
    custom_bonuses: dict = field(default_factory=dict)  # sanitized name -> Decimal
    override_reasons: dict = field(default_factory=dict)  # sanitized name -> str
    bonus_eligible: bool = True
    bonus_ineligible_reason: str = ""
    bonus_paid: bool = False
    historical_config: FinanceConfig | None = None
    final_bonus_paid: Decimal | None = None
    # Descriptive metadata carried onto payout slips
    project: str = ""
    company: str = ""
    pl_number: str = ""
    finance_status: str = ""
    completed_at: datetime | None = None
    bonus_paid_at: datetime | None = None
    pay_date: date | None = None

    def custom_bonus_for(self, name: str) -> Decimal | None:
        return self.custom_bonuses.get(sanitize(name))

    @classmethod
    def from_dict(cls, data: dict) -> "JobRecord":
        log = tuple(
            WorkerEntry.from_dict(w) for w in _list_of(data.get("workerLog")) if isinstance(w, dict)
        )
        customs = _mapping_of(data.get("customBonuses"))
        reasons = _mapping_of(data.get("overrideReasons"))
        historical = _mapping_of(data.get("historicalConfig"))
        final_paid = data.get("finalBonusPaid")
        leader = str(data.get("leader") or "").strip() or None
        agent = str(data.get("agentName") or "").strip() or None

        return cls(
            id=str(data.get("id") or ""),
            leader=leader,
            worker_log=log,
            invoice_amount=to_decimal(data.get("invoiceAmount")),
            commission_excluded=to_decimal(data.get("commissionExcluded")),
            agent_name=agent,
            original_seconds=to_decimal(data.get("originalSeconds")),
            final_seconds=to_decimal(data.get("finalSeconds")),
            bonus_calc_method=(
                parse_pool_method(data["bonusCalcMethod"]) if data.get("bonusCalcMethod") else None
            ),
            custom_bonuses={sanitize(k): to_decimal(v) for k, v in customs.items()},
            override_reasons={sanitize(k): str(v) for k, v in reasons.items()},
            bonus_eligible=data.get("bonusEligible") is not False,
            bonus_ineligible_reason=str(data.get("bonusIneligibleReason") or ""),
            bonus_paid=data.get("bonusPaid") is True,
            historical_config=FinanceConfig.from_dict(historical) if historical else None,
            final_bonus_paid=to_decimal(final_paid) if final_paid is not None else None,
            project=str(data.get("project") or ""),
            company=str(data.get("company") or ""),
            pl_number=str(data.get("plNumber") or ""),
            finance_status=str(data.get("financeStatus") or ""),
            completed_at=parse_timestamp(data.get("completedAt")),
            bonus_paid_at=parse_timestamp(data.get("bonusPaidAt")),
            pay_date=parse_date(data.get("payDate")),
        )


# =============================================================================
# OUTPUT / RESULT MODELS
# =============================================================================


@dataclass
class ProfitCalculation:
    """Results of the profit step."""

    labor_hours: Decimal = ZERO
    labor_cost: Decimal = ZERO
    commission: Decimal = ZERO
    net_profit: Decimal = ZERO


@dataclass(frozen=True)
class TierPolicy:
    """The leader/worker percentages selected for a team size."""

    label: str
    leader_percent: Decimal = ZERO
    worker_percent: Decimal = ZERO


@dataclass
class TeamComposition:
    """Leader and worker roster of one job."""

    leader_name: str | None = None
    leader_minutes: Decimal = ZERO
    workers: tuple[WorkerEntry, ...] = ()
    max_worker_minutes: Decimal = ZERO
    total_worker_minutes: Decimal = ZERO
    team_size: int = 0
    tier: TierPolicy = field(default_factory=lambda: TierPolicy(label="standard"))

    @property
    def worker_count(self) -> int:
        return len(self.workers)


@dataclass
class PoolAllocation:
    """Leader and worker pools, before or after the fairness adjustment."""

    leader_pool: Decimal = ZERO
    worker_pool: Decimal = ZERO
    fairness_applied: bool = False
    amount_moved: Decimal = ZERO

    @property
    def total(self) -> Decimal:
        return self.leader_pool + self.worker_pool


@dataclass
class AllocationLine:
    """One person's bonus on one job, with the job metadata for payout slips."""

    name: str
    raw_name: str
    role: str
    minutes: Decimal
    amount: Decimal
    is_custom: bool = False
    is_ineligible: bool = False
    is_paid: bool = False
    reason: str = ""
    job_id: str = ""
    project: str = ""
    company: str = ""
    pl_number: str = ""
    agent: str = ""
    leader: str = ""
    invoice: Decimal = ZERO
    profit: Decimal = ZERO
    pool_basis: str = ""
    completed_at: datetime | None = None
    pay_date: date | None = None

    @property
    def hours(self) -> Decimal:
        return self.minutes / Decimal("60")


@dataclass
class EmployeeSummary:
    """Aggregated bonus total for one employee across jobs."""

    name: str
    total: Decimal = ZERO
    items: list[AllocationLine] = field(default_factory=list)


@dataclass
class JobContext:
    """
    Holds all intermediate state while one job is processed.
    This is the "bag" that flows through the pipeline.
    """

    # Input (immutable during processing)
    job: JobRecord
    config: FinanceConfig
    method: PoolMethod
    uses_historical_config: bool = False

    # Step results (populated as we go)
    profit: ProfitCalculation = field(default_factory=ProfitCalculation)
    team: TeamComposition = field(default_factory=TeamComposition)
    pools: PoolAllocation = field(default_factory=PoolAllocation)
    lines: list[AllocationLine] = field(default_factory=list)

    @property
    def is_paid(self) -> bool:
        return self.job.bonus_paid

    @property
    def is_ineligible(self) -> bool:
        return self.job.bonus_eligible is False and not self.job.bonus_paid


@dataclass
class JobBreakdown:
    """Every line of a single job, for a per-job card."""

    job_id: str
    profit: ProfitCalculation
    pools: PoolAllocation
    lines: list[AllocationLine]

    @property
    def total_bonus(self) -> Decimal:
        return sum((line.amount for line in self.lines), ZERO)


@dataclass
class CommissionLine:
    """One job's agent commission, rounded to cents."""

    agent: str
    job_id: str
    invoice: Decimal
    excluded: Decimal
    rate: Decimal
    amount: Decimal
    project: str = ""
    company: str = ""
    completed_at: datetime | None = None


@dataclass
class AgentCommissionSummary:
    agent: str
    total: Decimal = ZERO
    items: list[CommissionLine] = field(default_factory=list)


@dataclass
class CommissionReport:
    """Commission per agent over a set of jobs."""

    agents: list[AgentCommissionSummary] = field(default_factory=list)
    period: str | None = None

    @property
    def grand_total(self) -> Decimal:
        return sum((a.total for a in self.agents), ZERO)

    @property
    def job_count(self) -> int:
        return sum(len(a.items) for a in self.agents)


@dataclass
class BonusRequest:
    """Complete input for one engine call over JSON."""

    jobs: list[JobRecord]
    config: FinanceConfig
    directory: list[EmployeeIdentity] = field(default_factory=list)
    employee: str | None = None
    agent: str | None = None
    period: str | None = None

    @classmethod
    def from_dict(cls, data: dict) -> "BonusRequest":
        if not isinstance(data, dict):
            raise ValueError("Request body must be a JSON object")
        jobs = data.get("jobs")
        if not isinstance(jobs, list):
            raise ValueError("jobs must be a list of job records")
        if not all(isinstance(job, dict) for job in jobs):
            raise ValueError("every job record must be a JSON object")

        directory = [
            EmployeeIdentity.from_dict(d) for d in _list_of(data.get("directory")) if isinstance(d, dict)
        ]
        employee = data.get("employee")
        agent = data.get("agent")
        period = data.get("period")
        return cls(
            jobs=[JobRecord.from_dict(job) for job in jobs],
            config=FinanceConfig.from_dict(data.get("config")),
            directory=directory,
            employee=str(employee) if employee else None,
            agent=str(agent) if agent else None,
            period=str(period) if period else None,
        )
