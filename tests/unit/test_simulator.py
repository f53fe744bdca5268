import pytest

from refi_engine.engine.debt import scheduled_payment
from refi_engine.engine.simulator import schedule_frame, simulate


def test_standard_amortization_runs_full_term():
    r = simulate(500_000, 6, 360)
    assert r.duration_months == 360
    assert r.monthly_payment == pytest.approx(2997.75, abs=0.01)
    assert r.total_paid == pytest.approx(1_079_191, abs=1)
    assert r.refi_monthly_payment is None


def test_standard_amortization_clears_balance_at_last_month():
    r = simulate(250_000, 4.5, 180)
    payments = [row for row in r.schedule if row["Kind"] == "payment"]
    assert len(payments) == 180
    assert payments[-1]["Month"] == 180
    assert payments[-1]["Balance"] <= 0.01


def test_zero_rate_pays_exactly_principal():
    r = simulate(120_000, 0, 360)
    assert r.duration_months == 360
    assert r.total_paid == pytest.approx(120_000, abs=0.01)


def test_lump_sum_covering_principal_pays_off_on_day_one():
    r = simulate(200_000, 5, 360, 0, 250_000)
    assert r.duration_months == 0
    assert r.total_paid == 200_000
    assert r.monthly_payment == 0.0


def test_lump_sum_shortens_loan_but_keeps_payment():
    base = simulate(300_000, 6, 360)
    lump = simulate(300_000, 6, 360, 0, 50_000)
    assert lump.monthly_payment == pytest.approx(base.monthly_payment)
    assert lump.duration_months < base.duration_months
    assert lump.total_paid < base.total_paid


def test_extra_payment_pays_off_early_and_cheaper():
    base = simulate(500_000, 6, 360)
    extra = simulate(500_000, 6, 360, 1000)
    assert extra.duration_months < 360
    assert extra.total_paid < base.total_paid


def test_more_extra_never_costs_more():
    prev = None
    for extra in [0, 100, 500, 1000, 5000]:
        r = simulate(400_000, 7, 360, extra)
        if prev is not None:
            assert r.duration_months <= prev.duration_months
            assert r.total_paid <= prev.total_paid
        prev = r


def test_huge_extra_makes_single_capped_payment():
    r = simulate(10_000, 6, 360, 1_000_000)
    assert r.duration_months == 1
    assert r.total_paid == pytest.approx(10_000 * 1.005, abs=0.01)


def test_schedule_frame_columns_and_rounding():
    r = simulate(100_000, 5, 12, 0, 1_000)
    df = schedule_frame(r)
    assert list(df.columns) == ["Month", "Phase", "Kind", "Payment", "Interest", "Principal", "Balance"]
    assert df.iloc[0]["Kind"] == "lump"
    assert df.iloc[0]["Month"] == 0
    assert len(df) == 13
    assert r.monthly_payment == pytest.approx(scheduled_payment(100_000, 5, 12))
