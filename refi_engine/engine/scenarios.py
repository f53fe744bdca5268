"""
Scenario composer.

Runs the four fixed payment strategies against the same loan and returns them
in a fixed order. Position matters: index 0 is the standard baseline every
comparison is measured against, index 3 is the full strategy.
"""

from __future__ import annotations

from typing import List

import pandas as pd
from loguru import logger

from .debt import cents
from .formatting import format_currency, format_rate, format_term
from .simulator import simulate, simulate_with_refinance
from .types import CalculatorInputs, ExtraPaymentPlan, ScenarioResult, SimulationResult

STANDARD, EXTRA_NO_REFI, REFI_NO_EXTRA_AFTER, REFI_WITH_EXTRA_AFTER = range(4)

SCENARIO_COLUMNS = [
    "Scenario",
    "Name",
    "Description",
    "Total Paid",
    "Total Interest",
    "Duration (Months)",
    "Monthly Payment",
    "Extra Payment",
    "Refi Monthly Payment",
    "Extra Payment After Refi",
]


def _scenario(
    name: str,
    description: str,
    result: SimulationResult,
    principal: float,
    extra: float,
    extra_after_refi: float = 0.0,
) -> ScenarioResult:
    return ScenarioResult(
        name=name,
        description=description,
        total_paid=result.total_paid,
        total_interest=cents(result.total_paid - principal),
        duration_months=result.duration_months,
        monthly_payment=result.monthly_payment,
        extra_payment=extra,
        refi_monthly_payment=result.refi_monthly_payment,
        extra_payment_after_refi=extra_after_refi if result.has_refinance_payment else 0.0,
        schedule=result.schedule,
    )


def calculate_all_scenarios(inputs: CalculatorInputs) -> List[ScenarioResult]:
    i = inputs
    logger.debug("Calculating scenarios for {}", i)
    loan, plan, refi = i.loan, i.extra_plan, i.refinance

    def _refinanced(after: ExtraPaymentPlan) -> SimulationResult:
        return simulate_with_refinance(
            loan.principal,
            loan.annual_rate,
            loan.term_months,
            plan.monthly_extra,
            plan.lump_sum,
            refi.after_months,
            refi.term_months,
            refi.annual_rate,
            after.monthly_extra,
            after.lump_sum,
        )

    standard = simulate(loan.principal, loan.annual_rate, loan.term_months)
    extra_no_refi = simulate(
        loan.principal, loan.annual_rate, loan.term_months, plan.monthly_extra, plan.lump_sum
    )
    refi_no_extra_after = _refinanced(ExtraPaymentPlan())
    refi_with_extra_after = _refinanced(i.post_refi_plan)

    extra = format_currency(i.extra_payment)
    after = format_currency(i.extra_payment_after_refi)
    term = format_term(i.loan_term_months)
    refi_term = format_term(i.refi_term_months)
    refi_rate = format_rate(i.refi_rate)
    lump_start = f" + {format_currency(i.lump_sum_at_start)} upfront" if i.lump_sum_at_start > 0 else ""
    lump_refi = f" + {format_currency(i.lump_sum_after_refi)} at refi" if i.lump_sum_after_refi > 0 else ""

    scenarios = [
        _scenario(
            f"Standard {term}",
            f"No extra payments, full {term} term",
            standard,
            i.loan_amount,
            0.0,
        ),
        _scenario(
            f"+{extra} extra monthly{lump_start} (no refi)",
            f"Extra {extra} towards principal each month",
            extra_no_refi,
            i.loan_amount,
            i.extra_payment,
        ),
        _scenario(
            f"+{extra}{lump_start}, refi -> {refi_term}, no extra after",
            f"Extra payments for {i.refi_after_months} months, then refi to {refi_term} at {refi_rate}",
            refi_no_extra_after,
            i.loan_amount,
            i.extra_payment,
        ),
        _scenario(
            f"+{extra}{lump_start}, refi -> {refi_term}{lump_refi}, +{after} continues",
            "Extra payments continue after refinance",
            refi_with_extra_after,
            i.loan_amount,
            i.extra_payment,
            i.extra_payment_after_refi,
        ),
    ]
    for idx, s in enumerate(scenarios):
        logger.debug(
            "Scenario {} '{}': total={} months={}", idx + 1, s.name, s.total_paid, s.duration_months
        )
    return scenarios


def scenarios_frame(scenarios: List[ScenarioResult]) -> pd.DataFrame:
    """Tabulate scenarios in their fixed order with a stable column layout."""
    rows = []
    for idx, s in enumerate(scenarios, 1):
        rows.append({
            "Scenario": idx,
            "Name": s.name,
            "Description": s.description,
            "Total Paid": s.total_paid,
            "Total Interest": s.total_interest,
            "Duration (Months)": s.duration_months,
            "Monthly Payment": cents(s.monthly_payment),
            "Extra Payment": cents(s.extra_payment),
            "Refi Monthly Payment": (
                cents(s.refi_monthly_payment) if s.refi_monthly_payment is not None else None
            ),
            "Extra Payment After Refi": cents(s.extra_payment_after_refi),
        })
    return pd.DataFrame(rows, columns=SCENARIO_COLUMNS)
