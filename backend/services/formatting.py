"""
Display formatting for projection figures.

The projection engine returns raw numbers; these helpers turn them into
grouped-digit strings and lakh/crore or K/M/B abbreviations for tables,
chart axes and tooltips.
"""

from schemas.projection import (
    LifecyclePhase,
    ProjectionResult,
    ProjectionTable,
    ScheduleRow,
)
from services.projection import to_units


LAKH = 100_000
CRORE = 10_000_000
RUPEE = "₹"

STATUS_LABELS = {
    LifecyclePhase.WORKING: "Earning",
    LifecyclePhase.RETIRED: "Retired",
    LifecyclePhase.DEPLETED: "Depleted",
}

# Largest first
SHORT_SCALES = [
    (1_000_000_000, "B"),
    (1_000_000, "M"),
    (1_000, "K"),
]


def _group_indian(units: int) -> str:
    """12345678 -> '1,23,45,678' (last three digits, then pairs)."""
    digits = str(abs(units))
    if len(digits) > 3:
        head, tail = digits[:-3], digits[-3:]
        groups = []
        while len(head) > 2:
            groups.insert(0, head[-2:])
            head = head[:-2]
        if head:
            groups.insert(0, head)
        digits = ",".join(groups + [tail])
    return f"-{digits}" if units < 0 else digits


def _plain(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return str(value)


def format_grouped(value: float) -> str:
    """Whole-number amount with Indian digit grouping; zero or missing renders as '-'."""
    if not value:
        return "-"
    return _group_indian(to_units(value))


def format_axis(value: float) -> str:
    """Compact label for a chart axis tick."""
    if value >= CRORE:
        return f"{value / CRORE:.1f}Cr"
    elif value >= LAKH:
        return f"{value / LAKH:.0f}L"
    return _plain(value)


def format_tooltip(value: float) -> str:
    """Currency label for a chart tooltip."""
    if value >= CRORE:
        return f"{RUPEE}{value / CRORE:.2f} Cr"
    elif value >= LAKH:
        return f"{RUPEE}{value / LAKH:.2f} L"
    return f"{RUPEE}{format_grouped(value)}"


def abbreviate(value: float, decimals: int = 1) -> str:
    """K/M/B abbreviation, e.g. 2_500_000 -> '2.5M'."""
    magnitude = abs(value)
    for scale, suffix in SHORT_SCALES:
        if magnitude >= scale:
            return f"{value / scale:.{decimals}f}{suffix}"
    return _plain(value)


def format_schedule(result: ProjectionResult) -> ProjectionTable:
    """Render the yearly schedule as display rows."""
    rows = []
    for record in result.yearly_schedule:
        warning = record.depletion_warning_years_left
        rows.append(ScheduleRow(
            age=record.age,
            status=STATUS_LABELS[record.lifecycle_phase],
            opening_balance=format_grouped(record.opening_balance),
            planned_expense=format_grouped(record.planned_expense),
            contribution=format_grouped(record.contribution),
            closing_balance=format_grouped(record.closing_balance),
            warning=f"{warning:.1f} yrs left" if warning is not None else "",
            monthly_expense=format_grouped(record.monthly_expense_equivalent),
        ))

    return ProjectionTable(
        rows=rows,
        solvent=result.solvent,
        depletion_age=result.depletion_age,
        corpus_at_retirement=format_tooltip(result.corpus_at_retirement),
        terminal_balance=format_tooltip(result.terminal_balance),
    )
