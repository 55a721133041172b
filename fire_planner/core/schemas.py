from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

CurrencyCode = Literal["EUR", "USD", "GBP"]


# -------------------------
# Projection
# -------------------------

class SimulationInput(BaseModel):
    """One engine invocation. Rates are fractions (0.05 = 5%).

    No range constraints here: the engine is defined for any finite numbers and
    sanitizing user input is the job of ``fire_planner.utils.validators``.
    """

    model_config = ConfigDict(frozen=True)

    current_funds: float = 0.0
    target_goal: float = Field(default=0.0, description="Threshold checked against the nominal balance. May be +inf.")
    years: float = 1.0
    monthly_contribution: float = 0.0
    contribution_increase_pct: float = Field(default=0.0, description="Annual step-up applied every 12 months.")
    annual_return_pct: float = 0.0
    annual_inflation_pct: float = 0.0


class ProjectionPoint(BaseModel):
    model_config = ConfigDict(frozen=True)

    month: int
    label: str = ""
    nominal: float
    real: float


class ProjectionResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    points: List[ProjectionPoint] = Field(default_factory=list)
    final_nominal: float
    final_real: float
    hit_month: Optional[int] = None

    @property
    def months(self) -> int:
        return len(self.points)


class ProjectionSummary(BaseModel):
    horizon_years: float
    hit_month: Optional[int] = None
    years_to_target: Optional[float] = None
    target_in_todays_money: float
    monthly_return_rate: float
    monthly_inflation_rate: float
    final_nominal: float
    final_real: float


# -------------------------
# Passive income
# -------------------------

class PassiveIncomeRow(BaseModel):
    rate: float
    yearly: float
    monthly: float


# -------------------------
# Solvers
# -------------------------

SolverStatus = Literal["solved", "already_reached", "bracket_exceeded"]


class ContributionSolution(BaseModel):
    monthly_contribution: float
    status: SolverStatus
    lower_bound: float = 0.0
    upper_bound: float
    iterations: int
    widenings: int = 0
    final_nominal: float = Field(..., description="Engine result when fed the returned contribution.")

    @property
    def within_bracket(self) -> bool:
        return self.status != "bracket_exceeded"


class ReachablePot(BaseModel):
    final_nominal: float
    months: int


# -------------------------
# Lifestyle
# -------------------------

class LifestyleBand(BaseModel):
    model_config = ConfigDict(frozen=True)

    min: float
    label: str
    blurb: str


class CountryGuide(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    bands: List[LifestyleBand]


class CountryTier(BaseModel):
    country: str
    band: LifestyleBand
    monthly_income: float


# -------------------------
# Display
# -------------------------

class DisplayPreferences(BaseModel):
    currency: CurrencyCode = "EUR"


# -------------------------
# Input validation
# -------------------------

class ValidationIssue(BaseModel):
    level: str  # ERROR | WARN
    message: str
    field: Optional[str] = None


class ValidationReport(BaseModel):
    ok: bool = True
    errors: List[ValidationIssue] = Field(default_factory=list)
    warnings: List[ValidationIssue] = Field(default_factory=list)

    def add_error(self, msg: str, field: Optional[str] = None) -> None:
        self.errors.append(ValidationIssue(level="ERROR", message=msg, field=field))

    def add_warning(self, msg: str, field: Optional[str] = None) -> None:
        self.warnings.append(ValidationIssue(level="WARN", message=msg, field=field))

    def finalize(self) -> "ValidationReport":
        self.ok = len(self.errors) == 0
        return self
