"""
Scenario helpers for the Streamlit UI.

Wraps the engine's composer so the app, notebooks or other front-ends share
one way of turning an inputs record into DataFrames plus a narrative summary.
The narrative mirrors the wording of the original calculator page.
"""

from __future__ import annotations

from typing import List, Optional, Tuple

import pandas as pd

from refi_engine.engine.formatting import format_currency, format_duration, format_rate, format_term
from refi_engine.engine.scenarios import EXTRA_NO_REFI, STANDARD, calculate_all_scenarios, scenarios_frame
from refi_engine.engine.types import CalculatorInputs, ScenarioResult
from ui.comparison import diff_tone, is_significant_diff, summarize


def run_scenarios(inputs: CalculatorInputs) -> Tuple[List[ScenarioResult], pd.DataFrame]:
    scenarios = calculate_all_scenarios(inputs)
    return scenarios, scenarios_frame(scenarios)


def _more_or_less(diff: float) -> str:
    if diff > 0:
        return f"pay about {format_currency(diff)} more"
    if diff < 0:
        return f"save about {format_currency(abs(diff))}"
    return "pay the same amount"


def _longer_or_less(months: int) -> str:
    if months == 0:
        return "pay it off in the same time"
    return f"take {format_duration(abs(months))} {'longer' if months > 0 else 'less'} to pay off"


def _signed_currency(amount: float) -> str:
    return f"+{format_currency(amount)}" if amount > 0 else format_currency(amount)


def diff_lines(
    scenarios: List[ScenarioResult], inputs: CalculatorInputs
) -> List[Tuple[str, str, Optional[str]]]:
    """
    (label, text, tone) for each refinance scenario measured against the
    standard loan and against Scenario 2. `tone` is 'good', 'bad' or None for
    a difference too small to matter next to the reference's interest.
    """
    s = summarize(scenarios, inputs)
    out = []
    for label, key, reference in (
        ("Scenario 3 vs standard", "refi_no_extra_vs_standard", scenarios[STANDARD]),
        ("Scenario 4 vs standard", "refi_with_extra_vs_standard", scenarios[STANDARD]),
        ("Scenario 3 vs Scenario 2", "refi_no_extra_vs_extra", scenarios[EXTRA_NO_REFI]),
        ("Scenario 4 vs Scenario 2", "refi_with_extra_vs_extra", scenarios[EXTRA_NO_REFI]),
    ):
        d = s[key]
        text = f"{_signed_currency(d['total_paid'])} total paid, {d['duration_months']:+d} months"
        out.append((label, text, diff_tone(d["total_paid"], reference.total_interest)))
    return out


def summary_paragraphs(scenarios: List[ScenarioResult], inputs: CalculatorInputs) -> List[str]:
    """Plain-text narrative comparing the scenarios, one paragraph per item."""
    s = summarize(scenarios, inputs)
    _, _, refi_no_extra, refi_with_extra = scenarios
    pay = s["payments"]
    refi_plan = (
        f"refinance after {inputs.refi_after_months} months to a "
        f"{format_term(inputs.refi_term_months)} term at {format_rate(inputs.refi_rate)}"
    )
    out = []

    monthly = format_currency(pay["initial_payment"])
    if inputs.extra_payment > 0:
        monthly = (
            f"{format_currency(pay['initial_payment'] + inputs.extra_payment)} "
            f"({monthly} + {format_currency(inputs.extra_payment)})"
        )
    lump = (
        f" with {format_currency(inputs.lump_sum_at_start)} lump sum payment"
        if inputs.lump_sum_at_start > 0 else ""
    )
    out.append(
        f"If you have a {format_term(inputs.loan_term_months)} loan of "
        f"{format_currency(inputs.loan_amount)} at {format_rate(inputs.interest_rate)} and plan to pay "
        f"{monthly} each month{lump}, here's how refinancing looks:"
    )

    d3 = s["refi_no_extra_vs_extra"]
    text = (
        f"If you {refi_plan} (Scenario 3): it will cost you "
        f"{format_currency(refi_no_extra.total_paid)} total, "
        f"{format_currency(refi_no_extra.total_interest)} of it interest, over "
        f"{format_duration(refi_no_extra.duration_months)}."
    )
    if is_significant_diff(d3["total_paid"]):
        text += (
            f" Compared to not refinancing (Scenario 2) you'd {_more_or_less(d3['total_paid'])} "
            f"and {_longer_or_less(d3['duration_months'])}."
        )
    else:
        text += " The cost difference against not refinancing is minimal."
    if s["refi_rate_better"]:
        text += " The lower rate helps reduce your interest costs."
    elif s["refi_rate_worse"]:
        text += " Note that your rate is actually higher than your original rate."
    out.append(text)

    if s["scenario4_differs"]:
        d4 = s["refi_with_extra_vs_extra"]
        if refi_with_extra.refi_monthly_payment is None:
            after = "The loan is paid off before the refinance, so there is no payment after refinancing."
        else:
            after = format_currency(refi_with_extra.refi_monthly_payment)
            if inputs.extra_payment_after_refi > 0:
                after = (
                    f"{format_currency(pay['scenario4_total'])} ({after} P&I + "
                    f"{format_currency(inputs.extra_payment_after_refi)} extra)"
                )
            after = f"Your monthly payment after refinancing is {after}."
        out.append(
            f"If you refinance and keep going (Scenario 4): it will cost you "
            f"{format_currency(refi_with_extra.total_paid)} total, "
            f"{format_currency(refi_with_extra.total_interest)} of it interest. "
            f"{after} Compared to Scenario 2 you'd "
            f"{_more_or_less(d4['total_paid'])} and {_longer_or_less(d4['duration_months'])}."
        )
    else:
        out.append(
            "Scenario 4 is the same as Scenario 3 since you're not planning "
            "to make extra payments after refinancing."
        )

    best = s["best_index"]
    if best == 0:
        out.append("The standard mortgage (Scenario 1) is the cheapest option here.")
    else:
        out.append(
            f"Scenario {best + 1} is your best option, saving "
            f"{format_currency(s['best_savings_vs_standard'])} compared to the standard mortgage."
        )
    return out
