import logging
import numpy as np
from typing import Optional

from schemas.projection import (
    ProjectionInputs,
    ProjectionResult,
    YearRecord,
    AccumulationPoint,
    DecumulationPoint,
    LifecyclePhase,
)

logger = logging.getLogger(__name__)


# Fewer than this many years of expenses left triggers a depletion warning
WARNING_COVERAGE_YEARS = 5


def round_half_up(value: float, decimals: int = 0) -> float:
    """Round halves towards +inf, like JavaScript's Math.round."""
    scale = 10 ** decimals
    return float(np.floor(value * scale + 0.5) / scale)


def to_units(value: float) -> int:
    """Whole currency units for a stored figure."""
    return int(round_half_up(value))


def validate_plan(inputs: ProjectionInputs) -> None:
    """
    Reject plans whose ages are out of order.

    Field-level constraints are enforced by the schema; this covers the
    cross-field ordering the engine relies on.
    """
    if inputs.retirement_age <= inputs.current_age:
        raise ValueError("Retirement age must be greater than current age")
    if inputs.life_expectancy_age <= inputs.retirement_age:
        raise ValueError("Life expectancy age must be greater than retirement age")


class ProjectionEngine:
    """
    Deterministic retirement projection.

    Grows the corpus year by year until retirement (annual return on the
    opening balance, then the full year's contribution added at year end),
    then withdraws an inflating annual expense until life expectancy or
    until the corpus runs out.

    The engine holds no state between calls.
    """

    def _simulate_accumulation(
        self,
        inputs: ProjectionInputs,
    ) -> tuple[float, list[YearRecord], list[AccumulationPoint]]:
        savings = inputs.current_savings
        contribution = inputs.monthly_investment * 12
        step_up_factor = 1.0

        records = []
        series = []

        for year in range(inputs.retirement_age - inputs.current_age + 1):
            age = inputs.current_age + year
            opening = savings

            if year > 0:
                step_up_factor *= (1 + inputs.annual_step_up_rate)
                contribution = inputs.monthly_investment * 12 * step_up_factor

            savings = opening * (1 + inputs.pre_retirement_return_rate) + contribution

            records.append(YearRecord(
                age=age,
                opening_balance=to_units(opening),
                planned_expense=0,
                contribution=to_units(contribution),
                closing_balance=to_units(savings),
                lifecycle_phase=LifecyclePhase.WORKING,
                depletion_warning_years_left=None,
                monthly_expense_equivalent=0,
            ))
            series.append(AccumulationPoint(age=age, balance=to_units(savings)))

        return savings, records, series

    def _simulate_decumulation(
        self,
        inputs: ProjectionInputs,
        corpus: float,
    ) -> tuple[list[YearRecord], list[DecumulationPoint], Optional[int]]:
        annual_expense = inputs.post_retirement_monthly_expense * 12
        depletion_age = None

        records = []
        series = []

        for year in range(1, inputs.life_expectancy_age - inputs.retirement_age + 1):
            age = inputs.retirement_age + year
            opening = corpus

            # Inflation applies before every withdrawal, the first one included
            annual_expense *= (1 + inputs.inflation_rate)
            corpus = opening * (1 + inputs.post_retirement_return_rate) - annual_expense

            warning = None
            if annual_expense > 0 and 0 < corpus < annual_expense * WARNING_COVERAGE_YEARS:
                warning = round_half_up(corpus / annual_expense, 1)

            if corpus <= 0:
                phase = LifecyclePhase.DEPLETED
                depletion_age = age
            else:
                phase = LifecyclePhase.RETIRED

            remaining = to_units(max(corpus, 0.0))

            records.append(YearRecord(
                age=age,
                opening_balance=to_units(opening),
                planned_expense=to_units(annual_expense),
                contribution=0,
                closing_balance=remaining,
                lifecycle_phase=phase,
                depletion_warning_years_left=warning,
                monthly_expense_equivalent=to_units(annual_expense / 12),
            ))
            series.append(DecumulationPoint(
                age=age,
                remaining_balance=remaining,
                annual_expense=to_units(annual_expense),
            ))

            if depletion_age is not None:
                break

        return records, series, depletion_age

    def project(self, inputs: ProjectionInputs) -> ProjectionResult:
        """
        Run a complete projection.

        Args:
            inputs: ProjectionInputs with all user assumptions

        Returns:
            ProjectionResult with the yearly schedule, chart series and
            solvency verdict

        Raises:
            ValueError: if retirement precedes the current age or life
                expectancy precedes retirement
        """
        if inputs.retirement_age < inputs.current_age:
            raise ValueError("Retirement age cannot be before current age")
        if inputs.life_expectancy_age < inputs.retirement_age:
            raise ValueError("Life expectancy age cannot be before retirement age")

        corpus, working_records, accumulation = self._simulate_accumulation(inputs)
        retired_records, decumulation, depletion_age = self._simulate_decumulation(inputs, corpus)

        schedule = working_records + retired_records
        solvent = depletion_age is None or depletion_age >= inputs.life_expectancy_age

        logger.debug(
            "Projected %d years: corpus at retirement %.0f, solvent=%s, depletion_age=%s",
            len(schedule), corpus, solvent, depletion_age,
        )

        return ProjectionResult(
            accumulation_series=accumulation,
            decumulation_series=decumulation,
            yearly_schedule=schedule,
            solvent=solvent,
            depletion_age=depletion_age,
            terminal_balance=schedule[-1].closing_balance,
            corpus_at_retirement=working_records[-1].closing_balance,
            life_expectancy_age=inputs.life_expectancy_age,
        )


# Shared instance for use across the application
engine = ProjectionEngine()


def run_projection(inputs: ProjectionInputs) -> ProjectionResult:
    """Validate age ordering, then project with the shared engine."""
    validate_plan(inputs)
    return engine.project(inputs)
