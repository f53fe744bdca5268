from typing import List, Optional

import numpy as np

from .types import PhaseOutcome

PAYOFF_EPSILON = 0.01


def cents(x: float) -> float:
    """Round to cents. Applied to every reported total."""
    return float(np.round(x, 2))


def monthly_rate(annual_rate_percent: float) -> float:
    return annual_rate_percent / 100.0 / 12.0


def scheduled_payment(principal: float, annual_rate_percent: float, term_months: int) -> float:
    """Fixed monthly principal-and-interest payment (annuity formula).

    A zero rate degenerates to straight-line repayment. The term must be
    positive; callers validate it, this only refuses to divide by zero.
    """
    if term_months <= 0:
        raise ValueError(f"term_months must be positive, got {term_months}")
    r = monthly_rate(annual_rate_percent)
    n = term_months
    if r == 0:
        return principal / n
    return principal * (r * (1 + r) ** n) / ((1 + r) ** n - 1)


def run_phase(
    balance: float,
    annual_rate_percent: float,
    payment: float,
    extra: float,
    max_months: int,
    start_month: int = 0,
    phase: int = 1,
    rows: Optional[List[dict]] = None,
) -> PhaseOutcome:
    """
    Steps the balance forward one month at a time until it is paid off or
    `max_months` periods have elapsed.

    The last payment is capped at `balance + interest` so the balance never
    goes negative. When `rows` is given, one row per period is appended.
    """
    r = monthly_rate(annual_rate_percent)
    paid = 0.0
    months = 0
    while balance > PAYOFF_EPSILON and months < max_months:
        months += 1
        interest = balance * r
        actual = min(balance + interest, payment + extra)
        principal = actual - interest
        balance -= principal
        if balance < 0:
            balance = 0.0
        paid += actual
        if rows is not None:
            rows.append({
                "Month": start_month + months,
                "Phase": phase,
                "Kind": "payment",
                "Payment": actual,
                "Interest": interest,
                "Principal": principal,
                "Balance": balance,
            })
    return PhaseOutcome(balance=balance, paid=paid, months=months)
