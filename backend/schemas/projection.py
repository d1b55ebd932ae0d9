from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from enum import Enum


class LifecyclePhase(str, Enum):
    WORKING = "working"      # contributing, no withdrawals
    RETIRED = "retired"      # withdrawing, balance still positive
    DEPLETED = "depleted"    # first year the balance reached zero


class ProjectionInputs(BaseModel):
    """Input assumptions for a deterministic retirement projection"""

    model_config = ConfigDict(frozen=True, extra="forbid", allow_inf_nan=False)

    # Timeline
    current_age: int = Field(..., ge=0, le=120, description="Current age in years")
    retirement_age: int = Field(..., ge=0, le=120, description="Age at which contributions stop")
    life_expectancy_age: int = Field(..., ge=0, le=120, description="Age until which expenses must be funded")

    # Savings
    current_savings: float = Field(..., ge=0, description="Current net worth at current age")
    monthly_investment: float = Field(default=0, ge=0, description="Monthly contribution at current age")
    annual_step_up_rate: float = Field(default=0, ge=0, description="Yearly increase of the monthly contribution (0.1 = 10%)")

    # Retirement
    post_retirement_monthly_expense: float = Field(..., ge=0, description="Monthly expense in today's value at retirement start")
    inflation_rate: float = Field(default=0.05, ge=0, description="Annual inflation applied to retirement expenses")

    # Returns
    pre_retirement_return_rate: float = Field(default=0.095, ge=0, description="Annual return before retirement")
    post_retirement_return_rate: float = Field(default=0.085, ge=0, description="Annual return after retirement")


class YearRecord(BaseModel):
    """One simulated year, amounts in whole currency units"""
    age: int
    opening_balance: int
    planned_expense: int = Field(..., description="Annual expense withdrawn (0 while working)")
    contribution: int = Field(..., description="Annual contribution added (0 once retired)")
    closing_balance: int = Field(..., ge=0, description="Year-end balance, clamped at zero")
    lifecycle_phase: LifecyclePhase
    depletion_warning_years_left: Optional[float] = Field(
        default=None,
        description="Years of expenses left when fewer than five remain",
    )
    monthly_expense_equivalent: int


class AccumulationPoint(BaseModel):
    """Balance at the end of a working year"""
    age: int
    balance: int


class DecumulationPoint(BaseModel):
    """Remaining balance and expense for a retirement year"""
    age: int
    remaining_balance: int
    annual_expense: int


class ProjectionResult(BaseModel):
    """Complete deterministic projection"""

    # Chart series
    accumulation_series: list[AccumulationPoint]
    decumulation_series: list[DecumulationPoint]

    # Year-by-year table
    yearly_schedule: list[YearRecord]

    # Verdict
    solvent: bool = Field(..., description="Whether funds last through life expectancy")
    depletion_age: Optional[int] = Field(default=None, description="First age at which the balance reached zero")
    terminal_balance: int = Field(..., ge=0, description="Balance left at the end of the schedule")
    corpus_at_retirement: int = Field(..., description="Balance at the end of the final working year")
    life_expectancy_age: int


class ScheduleRow(BaseModel):
    """Display-formatted row of the yearly table"""
    age: int
    status: str
    opening_balance: str
    planned_expense: str
    contribution: str
    closing_balance: str
    warning: str
    monthly_expense: str


class ProjectionTable(BaseModel):
    """Formatted yearly table plus the verdict"""
    rows: list[ScheduleRow]
    solvent: bool
    depletion_age: Optional[int] = None
    corpus_at_retirement: str
    terminal_balance: str


class ScenarioComparison(BaseModel):
    """Compare multiple projections"""
    base_scenario: ProjectionResult
    alternative_scenarios: list[ProjectionResult]
