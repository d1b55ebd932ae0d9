import logging
from fastapi import APIRouter, HTTPException

from config import DEFAULT_INPUTS, get_settings
from schemas.projection import (
    ProjectionInputs,
    ProjectionResult,
    ProjectionTable,
    ScenarioComparison,
)
from services.projection import run_projection
from services.formatting import format_schedule, format_tooltip

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/projection", tags=["projection"])


@router.post("/run", response_model=ProjectionResult)
async def run_retirement_projection(inputs: ProjectionInputs) -> ProjectionResult:
    """
    Project savings year by year until life expectancy.

    Results include:

    - **accumulation_series** / **decumulation_series**: chart data for both phases
    - **yearly_schedule**: the full year-by-year table
    - **solvent** / **depletion_age**: whether and when the money runs out
    """
    try:
        return run_projection(inputs)
    except ValueError as e:
        logger.warning("Rejected plan: %s", e)
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.exception("Projection failed")
        raise HTTPException(status_code=500, detail=f"Projection failed: {str(e)}")


@router.post("/table", response_model=ProjectionTable)
async def projection_table(inputs: ProjectionInputs) -> ProjectionTable:
    """Year-by-year table with amounts formatted for display."""
    try:
        return format_schedule(run_projection(inputs))
    except ValueError as e:
        logger.warning("Rejected plan: %s", e)
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.exception("Table rendering failed")
        raise HTTPException(status_code=500, detail=f"Projection failed: {str(e)}")


@router.post("/compare", response_model=ScenarioComparison)
async def compare_scenarios(
    base: ProjectionInputs,
    alternatives: list[ProjectionInputs],
) -> ScenarioComparison:
    """
    Compare a base plan against alternatives.

    Useful for "what-if" analysis like:

    - What if I retire at 45 instead of 40?
    - What if I step up my investment by 15% a year?
    - What if inflation runs at 7%?
    """
    max_scenarios = get_settings().max_scenarios
    if len(alternatives) > max_scenarios:
        raise HTTPException(
            status_code=400,
            detail=f"At most {max_scenarios} alternative scenarios can be compared",
        )

    try:
        return ScenarioComparison(
            base_scenario=run_projection(base),
            alternative_scenarios=[run_projection(alt) for alt in alternatives],
        )
    except ValueError as e:
        logger.warning("Rejected comparison: %s", e)
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.exception("Comparison failed")
        raise HTTPException(status_code=500, detail=f"Comparison failed: {str(e)}")


@router.get("/quick-check")
async def quick_retirement_check(
    current_age: int,
    retirement_age: int,
    current_savings: float,
    monthly_investment: float,
    post_retirement_monthly_expense: float,
    life_expectancy_age: int = 85,
    annual_step_up_rate: float = 0.0,
    inflation_rate: float = 0.05,
) -> dict:
    """
    Quick solvency check with minimal parameters.

    For the full schedule, use the /projection/run endpoint.
    """
    try:
        inputs = ProjectionInputs(
            current_age=current_age,
            retirement_age=retirement_age,
            life_expectancy_age=life_expectancy_age,
            current_savings=current_savings,
            monthly_investment=monthly_investment,
            annual_step_up_rate=annual_step_up_rate,
            post_retirement_monthly_expense=post_retirement_monthly_expense,
            inflation_rate=inflation_rate,
        )

        result = run_projection(inputs)

        return {
            "solvent": result.solvent,
            "depletion_age": result.depletion_age,
            "coverage_rating": _get_coverage_rating(result),
            "corpus_at_retirement": result.corpus_at_retirement,
            "corpus_at_retirement_display": format_tooltip(result.corpus_at_retirement),
            "terminal_balance": result.terminal_balance,
            "recommendation": _get_quick_recommendation(result),
        }
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/defaults", response_model=ProjectionInputs)
async def get_default_inputs() -> ProjectionInputs:
    """Starting assumptions of the planner, solvent through 85."""
    return ProjectionInputs(**DEFAULT_INPUTS)


def _years_of_cover_left(result: ProjectionResult) -> float:
    """Terminal balance expressed in years of the final annual expense."""
    if not result.decumulation_series:
        return float("inf")
    last_expense = result.decumulation_series[-1].annual_expense
    if last_expense <= 0:
        return float("inf")
    return result.terminal_balance / last_expense


def _get_coverage_rating(result: ProjectionResult) -> str:
    """Convert the projection verdict to a human-readable rating."""
    if not result.solvent:
        return "At Risk"

    years_left = _years_of_cover_left(result)
    if years_left >= 10:
        return "Excellent"
    elif years_left >= 5:
        return "Good"
    elif years_left > 0:
        return "Fair"
    else:
        return "Tight"


def _get_quick_recommendation(result: ProjectionResult) -> str:
    """Generate a quick recommendation based on the projection."""
    if not result.solvent:
        return (
            f"Your savings run out at {result.depletion_age}. Consider investing more, "
            "stepping up contributions, retiring later, or reducing planned expenses."
        )

    years_left = _years_of_cover_left(result)
    if years_left >= 10:
        return "Your plan leaves a comfortable buffer. Consider whether you could retire earlier or spend more."
    elif years_left > 0:
        return "Your savings last the full horizon with a modest buffer. Higher inflation could erode it."
    else:
        return "Your savings last exactly to the end of the horizon with nothing to spare. Build in a buffer."
