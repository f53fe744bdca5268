from typing import List, Optional, Tuple, Union

import pandas as pd

from .debt import PAYOFF_EPSILON, cents, run_phase, scheduled_payment
from .types import ScenarioResult, SimulationResult


def _lump_row(month: int, phase: int, amount: float, balance: float) -> dict:
    return {
        "Month": month,
        "Phase": phase,
        "Kind": "lump",
        "Payment": amount,
        "Interest": 0.0,
        "Principal": amount,
        "Balance": balance,
    }


def _apply_lump(balance: float, lump: float) -> Tuple[float, float]:
    """Returns (new_balance, amount_applied). Never applies more than is owed."""
    applied = min(max(lump, 0.0), balance)
    return balance - applied, applied


def _paid_off_at_start(principal: float, rows: List[dict]) -> SimulationResult:
    return SimulationResult(
        total_paid=cents(principal),
        duration_months=0,
        monthly_payment=0.0,
        lump_sums_applied=principal,
        schedule=rows,
    )


def simulate(
    principal: float,
    annual_rate: float,
    term_months: int,
    extra_monthly: float = 0.0,
    lump_sum_at_start: float = 0.0,
) -> SimulationResult:
    """Single-phase amortization with a recurring extra and an upfront lump sum.

    The scheduled payment is always computed from the original principal, so
    a lump sum shortens the loan instead of lowering the monthly bill.
    """
    rows: List[dict] = []
    balance, lump = _apply_lump(principal, lump_sum_at_start)
    if lump > 0:
        rows.append(_lump_row(0, 1, lump, balance))
    if balance <= 0:
        return _paid_off_at_start(principal, rows)

    payment = scheduled_payment(principal, annual_rate, term_months)
    outcome = run_phase(balance, annual_rate, payment, extra_monthly, term_months, rows=rows)

    return SimulationResult(
        total_paid=cents(lump + outcome.paid),
        duration_months=outcome.months,
        monthly_payment=payment,
        lump_sums_applied=lump,
        schedule=rows,
    )


def simulate_with_refinance(
    principal: float,
    annual_rate: float,
    term_months: int,
    extra_monthly: float,
    lump_sum_at_start: float,
    refi_after_months: int,
    refi_term_months: int,
    refi_rate: float,
    extra_after_refi: float,
    lump_sum_after_refi: float,
) -> SimulationResult:
    """
    Two-phase amortization: the original loan runs until `refi_after_months`,
    then the remaining balance is refinanced at `refi_rate` over
    `refi_term_months`.

    The refinance payment is computed from what is owed at refinance time
    (after the refinance lump sum), not from the original principal.
    """
    rows: List[dict] = []
    balance, lump_start = _apply_lump(principal, lump_sum_at_start)
    if lump_start > 0:
        rows.append(_lump_row(0, 1, lump_start, balance))
    if balance <= 0:
        return _paid_off_at_start(principal, rows)

    payment = scheduled_payment(principal, annual_rate, term_months)
    phase1_cap = min(term_months, refi_after_months)
    first = run_phase(balance, annual_rate, payment, extra_monthly, phase1_cap, rows=rows)

    total = lump_start + first.paid
    months = first.months
    balance = first.balance

    def _result(refi_payment: Optional[float], lumps: float) -> SimulationResult:
        return SimulationResult(
            total_paid=cents(total),
            duration_months=months,
            monthly_payment=payment,
            refi_monthly_payment=refi_payment,
            lump_sums_applied=lumps,
            schedule=rows,
        )

    # Paid off before the refinance would have happened.
    if balance <= PAYOFF_EPSILON:
        return _result(None, lump_start)

    # The whole refinance lump counts as paid, even past what is owed.
    lump_refi = max(lump_sum_after_refi, 0.0)
    balance = max(balance - lump_refi, 0.0)
    total += lump_refi
    if lump_refi > 0:
        rows.append(_lump_row(months, 2, lump_refi, balance))
    if balance <= PAYOFF_EPSILON:
        return _result(None, lump_start + lump_refi)

    refi_payment = scheduled_payment(balance, refi_rate, refi_term_months)
    second = run_phase(
        balance,
        refi_rate,
        refi_payment,
        extra_after_refi,
        refi_term_months,
        start_month=months,
        phase=2,
        rows=rows,
    )
    total += second.paid
    months += second.months

    return _result(refi_payment, lump_start + lump_refi)


def schedule_frame(result: Union[SimulationResult, ScenarioResult]) -> pd.DataFrame:
    """Month-by-month schedule of a simulation as a DataFrame (cents)."""
    columns = ["Month", "Phase", "Kind", "Payment", "Interest", "Principal", "Balance"]
    df = pd.DataFrame(result.schedule, columns=columns)
    money = ["Payment", "Interest", "Principal", "Balance"]
    df[money] = df[money].astype(float).round(2)
    return df
