# ui/comparison.py
# Pure, side-effect-free comparisons between the four scenarios.
# Scenario positions follow refi_engine.engine.scenarios (index 0 is the baseline).

from typing import Dict, List, Optional

from refi_engine.engine.debt import scheduled_payment
from refi_engine.engine.scenarios import EXTRA_NO_REFI, REFI_NO_EXTRA_AFTER, REFI_WITH_EXTRA_AFTER, STANDARD
from refi_engine.engine.types import CalculatorInputs, ScenarioResult

SIGNIFICANT_DIFF = 1000.0
TRIVIAL_SHARE = 0.01


def best_scenario_index(scenarios: List[ScenarioResult]) -> int:
    """Index of the lowest total paid. Earlier scenarios win ties."""
    best = 0
    for i, s in enumerate(scenarios):
        if s.total_paid < scenarios[best].total_paid:
            best = i
    return best


def is_significant_diff(diff: float) -> bool:
    return abs(diff) > SIGNIFICANT_DIFF


def is_trivial_diff(diff: float, total_interest: float) -> bool:
    """True when |diff| is under 1% of the interest it is measured against."""
    if total_interest == 0:
        return False
    return abs(diff) < total_interest * TRIVIAL_SHARE


def diff_tone(diff: float, total_interest: float, good_when_negative: bool = True) -> Optional[str]:
    """'good', 'bad', or None when the difference is trivial."""
    if is_trivial_diff(diff, total_interest):
        return None
    good = diff < 0 if good_when_negative else diff > 0
    return "good" if good else "bad"


def scenario_diff(scenario: ScenarioResult, reference: ScenarioResult) -> Dict[str, float]:
    return {
        "total_paid": round(scenario.total_paid - reference.total_paid, 2),
        "duration_months": scenario.duration_months - reference.duration_months,
    }


def scenario4_differs(inputs: CalculatorInputs) -> bool:
    return inputs.extra_payment_after_refi > 0 or inputs.lump_sum_after_refi > 0


def payment_gaps(scenarios: List[ScenarioResult], inputs: CalculatorInputs) -> Dict[str, float]:
    """
    Monthly outlay of scenario 4 after refinancing compared with scenarios 1
    and 2. A positive gap means scenario 4 costs more per month; cutting the
    extra payment by that amount matches the other scenario's outlay.
    """
    initial = scheduled_payment(inputs.loan_amount, inputs.interest_rate, inputs.loan_term_months)
    refi_payment = scenarios[REFI_WITH_EXTRA_AFTER].refi_monthly_payment
    s4_total = refi_payment + inputs.extra_payment_after_refi if refi_payment is not None else 0.0
    return {
        "initial_payment": initial,
        "scenario4_total": s4_total,
        "vs_standard": s4_total - initial,
        "vs_extra_no_refi": s4_total - (initial + inputs.extra_payment),
    }


def summarize(scenarios: List[ScenarioResult], inputs: CalculatorInputs) -> Dict[str, object]:
    """Everything the narrative summary needs, keyed by name."""
    standard = scenarios[STANDARD]
    extra_no_refi = scenarios[EXTRA_NO_REFI]
    refi_no_extra = scenarios[REFI_NO_EXTRA_AFTER]
    refi_with_extra = scenarios[REFI_WITH_EXTRA_AFTER]
    best = best_scenario_index(scenarios)
    return {
        "best_index": best,
        "best_savings_vs_standard": round(standard.total_paid - scenarios[best].total_paid, 2),
        "refi_no_extra_vs_extra": scenario_diff(refi_no_extra, extra_no_refi),
        "refi_with_extra_vs_extra": scenario_diff(refi_with_extra, extra_no_refi),
        "refi_no_extra_vs_standard": scenario_diff(refi_no_extra, standard),
        "refi_with_extra_vs_standard": scenario_diff(refi_with_extra, standard),
        "refi_rate_better": inputs.refi_rate < inputs.interest_rate,
        "refi_rate_worse": inputs.refi_rate > inputs.interest_rate,
        "scenario4_differs": scenario4_differs(inputs),
        "payments": payment_gaps(scenarios, inputs),
    }
